# app/content/export.py
from __future__ import annotations

import json
import re
import time
from typing import Optional

from app.errors import ValidationError

EXPORT_FORMATS: dict[str, str] = {
    "txt": "text/plain",
    "md": "text/markdown",
    "json": "application/json",
}

FILENAME_TITLE_LENGTH = 30

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9 _.-]+")


def export_filename(title: str, fmt: str, now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    stem = _UNSAFE_FILENAME_CHARS.sub("", title[:FILENAME_TITLE_LENGTH]).strip() or "content"
    return f"{stem}-{now_ms}.{fmt}"


def render_export(item: dict, fmt: str, now_ms: Optional[int] = None) -> tuple[str, str, str]:
    """
    Render a history item for download.
    txt/md carry only the generated text; json carries the whole item.
    Returns (body, media_type, filename).
    """
    fmt = (fmt or "").lower()
    if fmt not in EXPORT_FORMATS:
        raise ValidationError(f"Unsupported export format: {fmt}")

    if fmt == "json":
        body = json.dumps(item, indent=2, ensure_ascii=False)
    else:
        body = item["content"]

    return body, EXPORT_FORMATS[fmt], export_filename(item["title"], fmt, now_ms)
