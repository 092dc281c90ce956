# app/content/history.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.config import HISTORY_LIMIT
from app.content.templates import CONTENT_TYPES
from app.errors import Forbidden, NotFound, ValidationError
from app.models.generated_content import GeneratedContent

logger = logging.getLogger(__name__)

ALL_TYPES = "all"


def to_dict(item: GeneratedContent) -> dict:
    return {
        "id": item.id,
        "title": item.title,
        "content": item.content,
        "contentType": item.content_type,
        "template": item.template,
        "prompt": item.prompt,
        "userId": item.user_id,
        "createdAt": item.created_at.isoformat() if item.created_at else None,
        "updatedAt": item.updated_at.isoformat() if item.updated_at else None,
    }


def list_history(
    db: Session,
    user_id: str,
    content_type: Optional[str] = None,
    limit: int = HISTORY_LIMIT,
) -> list[GeneratedContent]:
    """Newest first, scoped to user_id, never more than HISTORY_LIMIT rows."""
    q = db.query(GeneratedContent).filter(GeneratedContent.user_id == user_id)

    if content_type and content_type != ALL_TYPES:
        if content_type not in CONTENT_TYPES:
            raise ValidationError(f"Unknown content type: {content_type}")
        q = q.filter(GeneratedContent.content_type == content_type)

    limit = max(1, min(int(limit), HISTORY_LIMIT))
    return q.order_by(GeneratedContent.created_at.desc()).limit(limit).all()


def get_owned_content(db: Session, user_id: str, content_id: str) -> GeneratedContent:
    item = db.query(GeneratedContent).filter(GeneratedContent.id == content_id).first()
    if not item:
        raise NotFound("Content not found")

    if item.user_id != user_id:
        raise Forbidden("You are not authorized to access this content")

    return item


def delete_content(db: Session, user_id: str, content_id: str) -> None:
    item = get_owned_content(db, user_id, content_id)
    db.delete(item)
    db.commit()
    logger.info("content deleted user_id=%s content_id=%s", user_id, content_id)
