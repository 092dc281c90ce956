# app/routes/generate.py
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from app.content.gate import check_attempt_available, generate_content
from app.content.provider import ContentProvider, get_provider
from app.database import get_db
from app.models.user import User
from app.routes.auth import get_current_user

router = APIRouter(tags=["generate"])


def require_attempt_available(current_user: Optional[User] = Depends(get_current_user)) -> User:
    # Resolved as a dependency so session and quota errors win over body validation
    return check_attempt_available(current_user)


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    template_id: Optional[str] = Field(default=None, alias="templateId")
    inputs: Optional[dict[str, Any]] = None
    custom_prompt: Optional[str] = Field(default=None, alias="customPrompt")


@router.post("/generate")
def generate(
    payload: GenerateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_attempt_available),
    provider: ContentProvider = Depends(get_provider),
) -> dict:
    item = generate_content(
        db,
        current_user,
        provider,
        template_id=payload.template_id,
        inputs=payload.inputs,
        custom_prompt=payload.custom_prompt,
    )
    return {
        "id": item.id,
        "title": item.title,
        "content": item.content,
        "contentType": item.content_type,
        "template": item.template,
        "createdAt": item.created_at.isoformat() if item.created_at else None,
        "attemptUsed": True,
    }
