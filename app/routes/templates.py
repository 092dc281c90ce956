# app/routes/templates.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from app.content.templates import CONTENT_TYPES, get_template, templates_by_type
from app.errors import NotFound, ValidationError

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("")
def list_templates(content_type: Optional[str] = Query(None, alias="type")) -> list[dict]:
    if content_type == "all":
        content_type = None
    if content_type and content_type not in CONTENT_TYPES:
        raise ValidationError(f"Unknown content type: {content_type}")
    return [t.to_dict() for t in templates_by_type(content_type)]


@router.get("/{template_id}")
def read_template(template_id: str) -> dict:
    template = get_template(template_id)
    if template is None:
        raise NotFound("Template not found")
    return template.to_dict()
