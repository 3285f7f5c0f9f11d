"""Logo and favicon fetching plus logo sizing.

Fetching is fail-soft: any problem (disallowed URL, timeout, bad status,
wrong content type, oversized body) is logged and mapped to an empty
result so the caller can fall back to an initials monogram.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import re
import struct
from typing import NamedTuple, Optional, Sequence
from urllib.parse import unquote_to_bytes

import httpx

from ..utils.sanitize import redact_url
from .branding import validate_image_url
from .scoring import round_half_up

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 5.0
MAX_IMAGE_BYTES = 2 * 1024 * 1024

DEFAULT_LOGO_HEIGHT = 32
MIN_LOGO_HEIGHT = 24
MAX_LOGO_HEIGHT = 36
MAX_LOGO_WIDTH = 200
MAX_LOGO_ASPECT_RATIO = 6
FALLBACK_LOGO_WIDTH = 120

PNG_SIGNATURE = b"\x89PNG"
JPEG_SOI = b"\xff\xd8"
JPEG_SOF_MARKERS = frozenset(
    list(range(0xC0, 0xC4)) + list(range(0xC5, 0xC8)) + list(range(0xC9, 0xCC)) + list(range(0xCD, 0xD0))
)
SVG_SNIFF_BYTES = 2048

_VIEWBOX_RE = re.compile(r"""viewBox\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
_SVG_WIDTH_RE = re.compile(r"""<svg[^>]*\bwidth\s*=\s*["'](\d+(?:\.\d+)?)""", re.IGNORECASE)
_SVG_HEIGHT_RE = re.compile(r"""<svg[^>]*\bheight\s*=\s*["'](\d+(?:\.\d+)?)""", re.IGNORECASE)


class ImageFetchError(Exception):
    """A fetched response was rejected."""


class ImageDimensions(NamedTuple):
    width: float
    height: float


class LogoSize(NamedTuple):
    width: int
    height: int


class FetchedLogo(NamedTuple):
    content: bytes
    size: LogoSize


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

def is_data_url(url: str) -> bool:
    return url[:5].lower() == "data:"


def decode_data_url(url: str) -> Optional[bytes]:
    """Decode the payload of a ``data:`` URL, or None if it is malformed."""
    header, sep, payload = url[5:].partition(",")
    if not sep:
        return None
    if header.lower().endswith(";base64"):
        try:
            content = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            return None
    else:
        content = unquote_to_bytes(payload)
    return content or None


async def _download(client: httpx.AsyncClient, url: str) -> tuple[bytes, str]:
    async with client.stream(
        "GET", url, headers={"Accept": "image/*"}, follow_redirects=False
    ) as response:
        if not response.is_success:
            raise ImageFetchError(f"HTTP {response.status_code}")

        content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        if not content_type.startswith("image/"):
            raise ImageFetchError(f"unexpected content type {content_type or '(none)'}")

        declared = response.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > MAX_IMAGE_BYTES:
            raise ImageFetchError(f"declared size {declared} exceeds limit")

        body = bytearray()
        async for chunk in response.aiter_bytes():
            body.extend(chunk)
            if len(body) > MAX_IMAGE_BYTES:
                raise ImageFetchError("body exceeds size limit")

    if not body:
        raise ImageFetchError("empty body")
    return bytes(body), content_type


async def _fetch(url: str, client: Optional[httpx.AsyncClient]) -> Optional[tuple[bytes, str]]:
    """GET an allow-listed image. Returns ``(bytes, mime)`` or None."""
    safe_url = validate_image_url(url)
    if not safe_url:
        logger.warning("Refusing to fetch image from disallowed URL %s", redact_url(url))
        return None

    try:
        if client is not None:
            return await asyncio.wait_for(_download(client, safe_url), FETCH_TIMEOUT_SECONDS)
        async with httpx.AsyncClient(timeout=FETCH_TIMEOUT_SECONDS) as own_client:
            return await asyncio.wait_for(_download(own_client, safe_url), FETCH_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        logger.warning("Image fetch timed out after %ss: %s", FETCH_TIMEOUT_SECONDS, redact_url(url))
    except ImageFetchError as e:
        logger.warning("Image fetch rejected (%s): %s", e, redact_url(url))
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
        logger.warning("Image fetch failed (%s): %s", type(e).__name__, redact_url(url))
    return None


async def fetch_image_as_data_url(url: Optional[str], client: Optional[httpx.AsyncClient] = None) -> str:
    """Fetch an image and return it as a ``data:`` URL, or ``""`` on failure.

    A ``data:`` URL is returned unchanged without any network I/O.
    """
    if not url:
        return ""
    if is_data_url(url):
        return url
    fetched = await _fetch(url, client)
    if fetched is None:
        return ""
    content, mime = fetched
    return f"data:{mime};base64,{base64.b64encode(content).decode('ascii')}"


async def fetch_image_as_buffer(url: Optional[str], client: Optional[httpx.AsyncClient] = None) -> Optional[bytes]:
    """Fetch an image and return its raw bytes, or None on failure."""
    if not url:
        return None
    if is_data_url(url):
        content = decode_data_url(url)
        if content is None:
            logger.warning("Could not decode data URL %s", redact_url(url))
        return content
    fetched = await _fetch(url, client)
    return fetched[0] if fetched else None


async def fetch_images_as_data_urls(
    urls: Sequence[Optional[str]],
    client: Optional[httpx.AsyncClient] = None,
) -> list[str]:
    """Fetch several images concurrently. Failures are isolated per URL."""
    return list(await asyncio.gather(*(fetch_image_as_data_url(u, client) for u in urls)))


async def fetch_logo(url: Optional[str], client: Optional[httpx.AsyncClient] = None) -> Optional[FetchedLogo]:
    """Fetch a logo for document embedding, with its on-page size."""
    content = await fetch_image_as_buffer(url, client)
    if content is None:
        return None
    return FetchedLogo(content=content, size=compute_logo_dimensions(content))


# ---------------------------------------------------------------------------
# Dimensions
# ---------------------------------------------------------------------------

def _jpeg_dimensions(buffer: bytes) -> Optional[ImageDimensions]:
    offset = 2
    while offset < len(buffer) - 1:
        if buffer[offset] != 0xFF:
            break
        marker = buffer[offset + 1]
        if marker in JPEG_SOF_MARKERS:
            if offset + 9 > len(buffer):
                return None
            height, width = struct.unpack_from(">HH", buffer, offset + 5)
            return ImageDimensions(width, height) if width > 0 and height > 0 else None
        if offset + 3 >= len(buffer):
            break
        (segment_length,) = struct.unpack_from(">H", buffer, offset + 2)
        offset += 2 + segment_length
    return None


def _svg_dimensions(text: str) -> Optional[ImageDimensions]:
    viewbox = _VIEWBOX_RE.search(text)
    if viewbox:
        try:
            parts = [float(p) for p in re.split(r"[\s,]+", viewbox.group(1).strip())]
        except ValueError:
            parts = []
        if len(parts) >= 4 and parts[2] > 0 and parts[3] > 0:
            return ImageDimensions(parts[2], parts[3])

    width = _SVG_WIDTH_RE.search(text)
    height = _SVG_HEIGHT_RE.search(text)
    if width and height:
        w, h = float(width.group(1)), float(height.group(1))
        if w > 0 and h > 0:
            return ImageDimensions(w, h)
    return None


def get_image_dimensions(buffer: bytes) -> Optional[ImageDimensions]:
    """Native pixel dimensions of a PNG, JPEG or SVG image, if detectable."""
    if len(buffer) < 8:
        return None

    if buffer.startswith(PNG_SIGNATURE):
        if len(buffer) < 24:
            return None
        width, height = struct.unpack_from(">II", buffer, 16)
        return ImageDimensions(width, height) if width > 0 and height > 0 else None

    if buffer.startswith(JPEG_SOI):
        return _jpeg_dimensions(buffer)

    head = buffer[:SVG_SNIFF_BYTES].decode("utf-8", errors="ignore")
    if "<svg" in head:
        return _svg_dimensions(head)
    return None


def compute_logo_dimensions(buffer: bytes) -> LogoSize:
    """Target on-page logo size, aspect ratio preserved within fixed bounds.

    Height is clamped to [24, 36] (32 when the native image is taller),
    the aspect ratio is capped at 6:1 and the width at 200. Undetectable
    images get 120x32.
    """
    native = get_image_dimensions(buffer)
    if native is None:
        return LogoSize(FALLBACK_LOGO_WIDTH, DEFAULT_LOGO_HEIGHT)

    ratio = min(native.width / native.height, MAX_LOGO_ASPECT_RATIO)

    if native.height > MAX_LOGO_HEIGHT:
        height = DEFAULT_LOGO_HEIGHT
    else:
        height = round_half_up(max(MIN_LOGO_HEIGHT, native.height))

    width = round_half_up(height * ratio)
    if width > MAX_LOGO_WIDTH:
        width = MAX_LOGO_WIDTH
        height = max(MIN_LOGO_HEIGHT, round_half_up(width / ratio))

    return LogoSize(max(1, width), max(1, height))
