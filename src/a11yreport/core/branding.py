"""White-label configuration resolution.

Three sources, highest priority first: query-string overrides, stored
per-user settings, built-in defaults. Every colour and URL is validated
before use; an invalid value falls through to the next source.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Mapping, Optional, Union
from urllib.parse import parse_qs, urlsplit

from ..models.branding import (
    CTAConfig,
    QueryParamOverrides,
    ReportStyle,
    ReportThemeConfig,
    ResolvedWhiteLabel,
    StoredWhiteLabelSettings,
    WhiteLabelConfig,
)

logger = logging.getLogger(__name__)

HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

# Image hosts a logo or favicon may be loaded from
ALLOWED_IMAGE_HOSTS: tuple[str, ...] = (
    "localhost",
    "127.0.0.1",
    "vexnexa.com",
    "www.vexnexa.com",
    "zoljdbuiphzlsqzxdxyy.supabase.co",
    "lh3.googleusercontent.com",
    "avatars.githubusercontent.com",
    "cdn.jsdelivr.net",
    "i.imgur.com",
    "res.cloudinary.com",
)

IMAGE_SCHEMES = frozenset({"http", "https"})
LINK_SCHEMES = frozenset({"http", "https", "mailto"})

_UNSAFE_CHARS_RE = re.compile(r"[\s\x00-\x1f\x7f\\]")

# Query-string keys as they appear on the request URL
QUERY_KEYS: dict[str, str] = {
    "logo": "logo",
    "color": "color",
    "company": "company",
    "branding": "branding",
    "favicon": "favicon",
    "reportStyle": "report_style",
    "ctaUrl": "cta_url",
    "ctaText": "cta_text",
    "supportEmail": "support_email",
}


def validate_hex(color: Optional[str]) -> Optional[str]:
    """Return ``#RRGGBB`` for a valid hex colour, else None."""
    if not color or not isinstance(color, str):
        return None
    candidate = color if color.startswith("#") else f"#{color}"
    return candidate if HEX_RE.fullmatch(candidate) else None


def is_allowed_host(host: str) -> bool:
    host = host.lower().rstrip(".")
    return any(host == allowed or host.endswith(f".{allowed}") for allowed in ALLOWED_IMAGE_HOSTS)


def validate_image_url(url: Optional[str]) -> str:
    """Return ``url`` if it is http(s) on an allow-listed host, else ``""``.

    Relative, protocol-relative, ``javascript:`` and ``data:`` URLs are all
    rejected, as is any URL carrying credentials.
    """
    if not url or not isinstance(url, str):
        return ""
    url = url.strip()
    if _UNSAFE_CHARS_RE.search(url):
        return ""
    try:
        parts = urlsplit(url)
        host = parts.hostname
        has_userinfo = parts.username is not None or parts.password is not None
    except ValueError:
        return ""
    if parts.scheme.lower() not in IMAGE_SCHEMES or not host or has_userinfo:
        return ""
    return url if is_allowed_host(host) else ""


def validate_link_url(url: Optional[str]) -> str:
    """Return ``url`` if it is a safe link target for the CTA, else ``""``."""
    if not url or not isinstance(url, str):
        return ""
    url = url.strip()
    if _UNSAFE_CHARS_RE.search(url):
        return ""
    try:
        parts = urlsplit(url)
        host = parts.hostname
        has_userinfo = parts.username is not None or parts.password is not None
    except ValueError:
        return ""
    scheme = parts.scheme.lower()
    if scheme not in LINK_SCHEMES:
        return ""
    if scheme == "mailto":
        return url if parts.path else ""
    if not host or has_userinfo:
        return ""
    return url


def _first_text(*values: Optional[str]) -> str:
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _first_valid(validator: Callable[[str], Optional[str]], field: str, *values: Optional[str]) -> str:
    for value in values:
        if not value:
            continue
        result = validator(value)
        if result:
            return result
        logger.debug("Discarding invalid %s override", field)
    return ""


def resolve_white_label_config(
    query: Union[QueryParamOverrides, Mapping[str, Any], None],
    stored: Optional[StoredWhiteLabelSettings] = None,
) -> ResolvedWhiteLabel:
    """Merge query overrides, stored settings and defaults into one config."""
    if not isinstance(query, QueryParamOverrides):
        query = QueryParamOverrides.model_validate(dict(query or {}))
    stored = stored or StoredWhiteLabelSettings()
    default_wl = WhiteLabelConfig()
    default_cta = CTAConfig()

    logo_url = _first_valid(validate_image_url, "logo", query.logo, stored.logo_url) or default_wl.logo_url
    primary_color = (
        _first_valid(validate_hex, "color", query.color, stored.primary_color) or default_wl.primary_color
    )
    favicon_url = _first_valid(validate_image_url, "favicon", query.favicon, stored.favicon_url)
    company_name = _first_text(query.company, stored.company_name) or default_wl.company_name_override
    footer_text = _first_text(stored.footer_text) or default_wl.footer_text

    if query.branding == "false":
        show_branding = False
    elif stored.show_branding is not None:
        show_branding = stored.show_branding
    else:
        show_branding = default_wl.show_branding

    report_style = ReportStyle.CORPORATE if query.report_style == "corporate" else ReportStyle.PREMIUM

    cta = CTAConfig(
        cta_url=_first_valid(validate_link_url, "cta_url", query.cta_url, stored.cta_url) or default_cta.cta_url,
        cta_text=_first_text(query.cta_text, stored.cta_text) or default_cta.cta_text,
        support_email=_first_text(query.support_email, stored.support_email) or default_cta.support_email,
    )

    return ResolvedWhiteLabel(
        white_label_config=WhiteLabelConfig(
            show_branding=show_branding,
            logo_url=logo_url,
            primary_color=primary_color,
            footer_text=footer_text,
            company_name_override=company_name,
        ),
        theme_config=ReportThemeConfig(primary_color=primary_color),
        cta_config=cta,
        report_style=report_style,
        favicon_url=favicon_url,
    )


def extract_query_overrides(url: str) -> QueryParamOverrides:
    """Read white-label overrides from a request URL's query string.

    Only the first value of a repeated key is used; unknown keys are ignored.
    """
    try:
        query = urlsplit(url).query
    except ValueError:
        return QueryParamOverrides()
    params = parse_qs(query, keep_blank_values=True)
    values = {field: params[key][0] for key, field in QUERY_KEYS.items() if key in params}
    return QueryParamOverrides(**values)
