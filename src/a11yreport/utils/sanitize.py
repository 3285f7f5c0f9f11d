"""Escaping for report markup and redaction for log messages."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit, urlunsplit

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
}
_HTML_ESCAPE_RE = re.compile(r'[&<>"]')
_ANCHOR_RE = re.compile(r"[^a-z0-9_-]+")


def escape_html(value: Any) -> str:
    """Escape ``& < > "`` in any value for safe interpolation into markup."""
    if value is None:
        return ""
    return _HTML_ESCAPE_RE.sub(lambda m: _HTML_ESCAPES[m.group(0)], str(value))


def anchor_id(value: str, prefix: str = "") -> str:
    """Build an HTML id from free text (``color-contrast`` -> ``finding-color-contrast``)."""
    slug = _ANCHOR_RE.sub("-", value.lower()).strip("-") or "item"
    return f"{prefix}{slug}"


def redact_url(url: Any) -> str:
    """Strip credentials, query strings and fragments from a URL before logging.

    Signed storage URLs carry tokens in the query string. ``data:`` URLs are
    reduced to their media type.
    """
    if not url:
        return ""
    text = str(url)
    if text[:5].lower() == "data:":
        header = text[5:].split(",", 1)[0]
        return f"data:{header};[REDACTED]" if header else "data:[REDACTED]"
    try:
        parts = urlsplit(text)
        netloc = parts.hostname or ""
        if parts.port:
            netloc = f"{netloc}:{parts.port}"
    except ValueError:
        return "[INVALID_URL]"
    query = "[REDACTED]" if parts.query else ""
    return urlunsplit((parts.scheme, netloc, parts.path, query, ""))
