# app/content/gate.py
from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.clock import utcnow
from app.content.provider import ContentProvider
from app.content.templates import ContentType, fill_template, get_template
from app.errors import (
    AppError,
    GenerationFailed,
    NotFound,
    QuotaExhausted,
    Unauthenticated,
    ValidationError,
)
from app.models.generated_content import GeneratedContent
from app.models.user import User

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 100
CUSTOM_TEMPLATE_NAME = "Custom"
QUOTA_MESSAGE = "You have already used your free generation attempt. Thank you for testing our platform!"

_HEADING_MARKER = re.compile(r"^#+\s*")


def derive_title(content: str) -> str:
    """First non-blank line, minus a leading markdown heading marker, capped at 100 chars."""
    for line in (content or "").splitlines():
        if line.strip():
            title = _HEADING_MARKER.sub("", line.strip())[:TITLE_MAX_LENGTH].strip()
            if not title:
                raise GenerationFailed("Generated content has no usable title")
            return title
    raise GenerationFailed("Failed to generate content")


def resolve_prompt(
    template_id: Optional[str],
    inputs: Optional[Mapping[str, Any]],
    custom_prompt: Optional[str],
) -> tuple[str, str, str]:
    """Returns (prompt, template_name, content_type)."""
    if template_id:
        template = get_template(template_id)
        if template is None:
            raise NotFound("Template not found")
        return fill_template(template, inputs), template.name, template.content_type.value

    if custom_prompt and custom_prompt.strip():
        return custom_prompt, CUSTOM_TEMPLATE_NAME, ContentType.BLOG.value

    raise ValidationError("No template or custom prompt provided")


def check_attempt_available(user: Optional[User]) -> User:
    """Reject callers with no session, then callers who already spent their attempt."""
    if user is None:
        raise Unauthenticated("You must be logged in to generate content")
    if user.attempt_used:
        raise QuotaExhausted(QUOTA_MESSAGE)
    return user


def _claim_attempt(db: Session, user_id: str) -> bool:
    """
    Conditionally flip attempt_used false -> true.
    Returns False when another request already claimed it.
    """
    result = db.execute(
        update(User)
        .where(User.id == user_id, User.attempt_used.is_(False))
        .values(attempt_used=True, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def generate_content(
    db: Session,
    user: Optional[User],
    provider: ContentProvider,
    *,
    template_id: Optional[str] = None,
    inputs: Optional[Mapping[str, Any]] = None,
    custom_prompt: Optional[str] = None,
) -> GeneratedContent:
    """
    Run the single free generation for user.

    The quota is checked before the provider is called, and claimed again with a
    conditional update in the same transaction that stores the result, so two
    racing requests can never both persist content.
    """
    check_attempt_available(user)

    prompt, template_name, content_type = resolve_prompt(template_id, inputs, custom_prompt)

    try:
        text = provider.generate(prompt)
    except AppError:
        raise
    except Exception as e:
        # timeouts and transport errors from the provider
        logger.warning("provider call failed user_id=%s: %s", user.id, type(e).__name__)
        raise GenerationFailed(f"Failed to generate content: {e}") from e

    if not text or not text.strip():
        raise GenerationFailed("Failed to generate content")

    title = derive_title(text)

    user_id = user.id
    try:
        if not _claim_attempt(db, user_id):
            db.rollback()
            logger.warning("generation discarded, attempt already claimed user_id=%s", user_id)
            raise QuotaExhausted(QUOTA_MESSAGE)

        item = GeneratedContent(
            user_id=user_id,
            title=title,
            content=text,
            content_type=content_type,
            template=template_name,
            prompt=prompt,
        )
        db.add(item)
        db.commit()
    except QuotaExhausted:
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    logger.info("content generated user_id=%s content_id=%s", user_id, item.id)
    return item
