"""
User text is stored as plaintext. ``strip`` removes markup entirely,
``escape`` keeps it visible but inert.
"""
import html
from typing import Any, Dict, Iterable, List, Optional

import bleach

from solvinghub.config import Config


def strip_html(text: Any) -> str:
    if not isinstance(text, str):
        return ""
    cleaned = bleach.clean(text, tags=set(), attributes={}, strip=True, strip_comments=True)
    return html.unescape(cleaned).replace("\xa0", " ").strip()


def escape_html(text: Any) -> str:
    if not isinstance(text, str):
        return ""
    return bleach.clean(text, tags=set(), attributes={}, strip=False).strip()


def sanitize_text(text: Any, mode: Optional[str] = None) -> str:
    mode = (mode or Config.SANITIZE_MODE).lower()
    if mode == "escape":
        return escape_html(text)
    return strip_html(text)


def sanitize_list(items: Iterable[Any], mode: Optional[str] = None) -> List[str]:
    if not isinstance(items, (list, tuple)):
        return []
    cleaned = (sanitize_text(item, mode) for item in items if isinstance(item, str))
    return [item for item in cleaned if item]


def sanitize_problem_data(data: Dict[str, Any], mode: Optional[str] = None) -> Dict[str, Any]:
    sanitized = dict(data)
    for key in ("title", "description"):
        if key in sanitized:
            sanitized[key] = sanitize_text(sanitized[key], mode)
    for key in ("tags", "impacts", "challenges"):
        if key in sanitized:
            sanitized[key] = sanitize_list(sanitized[key], mode)
    return sanitized
