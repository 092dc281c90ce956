# app/routes/history.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.content.export import render_export
from app.content.history import delete_content, get_owned_content, list_history, to_dict
from app.database import get_db
from app.errors import ValidationError
from app.models.user import User
from app.routes.auth import require_user

router = APIRouter(prefix="/history", tags=["history"])


@router.get("")
def history(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_user),
    content_type: Optional[str] = Query(None, alias="type", description="blog | marketing | social-media | all"),
) -> list[dict]:
    """Returns the caller's generated content (newest first, at most 50)."""
    items = list_history(db, current_user.id, content_type=content_type)
    return [to_dict(i) for i in items]


@router.delete("")
def delete_history_item(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_user),
    content_id: Optional[str] = Query(None, alias="id"),
) -> dict:
    if not content_id:
        raise ValidationError("Content ID is required")

    delete_content(db, current_user.id, content_id)
    return {"success": True}


@router.get("/{content_id}/export")
def export_history_item(
    content_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_user),
    fmt: str = Query("txt", alias="format", description="txt | md | json"),
) -> Response:
    item = get_owned_content(db, current_user.id, content_id)
    body, media_type, filename = render_export(to_dict(item), fmt)
    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
