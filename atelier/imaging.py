"""Base64 image helpers: data-URI handling and downsampling before upload."""

import asyncio
import base64
import binascii
import io
import logging

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


def strip_data_uri(payload: str) -> str:
    """Drop a ``data:<mime>;base64,`` prefix if the payload carries one."""
    if payload.startswith("data:") and "," in payload:
        return payload.split(",", 1)[1]
    return payload


def to_data_uri(payload: str, mime_type: str = "image/png") -> str:
    """Wrap raw base64 in a displayable data URI (idempotent)."""
    return f"data:{mime_type};base64,{strip_data_uri(payload)}"


def decode_base64(payload: str) -> bytes:
    """Decode a base64 image, ignoring any data-URI prefix and line breaks."""
    return base64.b64decode("".join(strip_data_uri(payload).split()), validate=True)


def _resize(payload: str, max_width: int, quality: float) -> str:
    raw = decode_base64(payload)
    img = Image.open(io.BytesIO(raw))
    width, height = img.size

    if width <= max_width:
        return payload

    ratio = max_width / width
    new_size = (max_width, max(1, round(height * ratio)))
    resized = img.convert("RGB").resize(new_size, Image.LANCZOS)

    buf = io.BytesIO()
    resized.save(buf, format="JPEG", quality=round(quality * 100))
    return base64.b64encode(buf.getvalue()).decode("ascii")


async def resize_base64_image(payload: str, max_width: int = 800, quality: float = 0.8) -> str:
    """
    Downsample a base64 image so it is at most ``max_width`` pixels wide.

    Images that already fit are returned untouched. Wider ones are scaled
    uniformly and re-encoded as JPEG at ``quality`` (0-1), without a data-URI
    prefix. Undecodable input is returned as given.
    """
    try:
        return await asyncio.to_thread(_resize, payload, max_width, quality)
    except (binascii.Error, UnidentifiedImageError, OSError, ValueError) as e:
        logger.warning("Image resize failed, sending original: %s", e)
        return payload
