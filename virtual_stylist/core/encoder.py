"""
Encoding of uploaded clothing photos into embeddable image payloads.
Uploads are verified with Pillow and normalised to JPEG so the payload matches
the MIME label sent to Gemini.
"""

import base64
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from virtual_stylist.config import logger
from virtual_stylist.core.outfits import UploadedImage

JPEG_MIME_TYPE = "image/jpeg"
DATA_URI_PREFIX = f"data:{JPEG_MIME_TYPE};base64,"
JPEG_QUALITY = 92


class ImageReadError(OSError):
    """Raised when an uploaded file cannot be read as an image."""


def to_data_uri(payload: str, mime_type: str = JPEG_MIME_TYPE) -> str:
    """Wrap a raw base64 payload in a ``data:`` URI."""
    return f"data:{mime_type};base64,{payload}"


def strip_data_uri(value: str) -> str:
    """Return the raw base64 payload of a data URI (or the value unchanged)."""
    if value.startswith("data:") and "," in value:
        return value.split(",", 1)[1]
    return value


def _normalise_to_jpeg(data: bytes, label: str) -> bytes:
    try:
        with Image.open(BytesIO(data)) as img:
            if img.format == "JPEG" and img.mode == "RGB":
                img.load()
                return data
            rgb = img.convert("RGB")
            buffer = BytesIO()
            rgb.save(buffer, format="JPEG", quality=JPEG_QUALITY)
            return buffer.getvalue()
    except UnidentifiedImageError as exc:
        raise ImageReadError(f"{label} is not a supported image") from exc
    except Image.DecompressionBombError as exc:
        raise ImageReadError(f"{label} is too large to decode: {exc}") from exc
    except (OSError, ValueError) as exc:
        raise ImageReadError(f"Failed to decode {label}: {exc}") from exc


def encode_image(
    data: bytes,
    filename: Optional[str] = None,
    content_type: Optional[str] = None,
) -> UploadedImage:
    """
    Encode raw upload bytes into an UploadedImage.

    Args:
        data: File content as received from the client
        filename: Original filename, kept for display only
        content_type: MIME type announced by the client

    Returns:
        UploadedImage whose preview and payload are JPEG data URIs

    Raises:
        ImageReadError: If the content is empty or not a decodable image
    """
    label = filename or "uploaded file"
    if not data:
        raise ImageReadError(f"{label} is empty")

    jpeg_bytes = _normalise_to_jpeg(data, label)
    payload = base64.b64encode(jpeg_bytes).decode("utf-8")
    data_uri = to_data_uri(payload)

    logger.debug(
        f"Encoded {label} ({content_type or 'unknown type'}): "
        f"{len(data)} bytes in, {len(jpeg_bytes)} bytes JPEG"
    )

    return UploadedImage(
        filename=filename,
        content_type=content_type,
        preview_uri=data_uri,
        encoded_payload=data_uri,
    )


def read_image_file(path: Union[str, Path]) -> UploadedImage:
    """Read a local image file and encode it."""
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as exc:
        raise ImageReadError(f"Failed to read {file_path}: {exc}") from exc
    return encode_image(data, filename=file_path.name)


__all__ = [
    "ImageReadError",
    "JPEG_MIME_TYPE",
    "DATA_URI_PREFIX",
    "encode_image",
    "read_image_file",
    "strip_data_uri",
    "to_data_uri",
]
