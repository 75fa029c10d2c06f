"""Reference-image loading and decoded-image persistence."""
from __future__ import annotations

import base64
import logging
from io import BytesIO
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import requests
from PIL import Image, UnidentifiedImageError

from .errors import FileOperationError, UnsupportedImageFormatError
from .utils import ensure_dir

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")

# Pillow formats that are variants of a supported type
_FORMAT_MIME_OVERRIDES = {"MPO": "image/jpeg"}

ImageSource = Union[str, Path]


def is_url(source: ImageSource) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def detect_mime_type(data: bytes) -> Optional[str]:
    """Sniff the MIME type of encoded image bytes with Pillow.

    Returns:
        MIME type such as ``image/png``, or ``None`` if Pillow cannot identify it.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            fmt = img.format
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        logger.debug("Could not identify image bytes: %s", exc)
        return None
    if not fmt:
        return None
    fmt = fmt.upper()
    if fmt in _FORMAT_MIME_OVERRIDES:
        return _FORMAT_MIME_OVERRIDES[fmt]
    return Image.MIME.get(fmt, f"image/{fmt.lower()}")


def read_image_source(source: ImageSource, timeout: float = 30.0) -> bytes:
    """Read image bytes from a local path or an http(s) URL.

    Raises:
        FileOperationError: If the file or URL cannot be read.
    """
    if is_url(source):
        try:
            response = requests.get(str(source), timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FileOperationError(
                f"Failed to read image: {source}", {"image_path": str(source)}
            ) from exc
        return response.content

    path = Path(source)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FileOperationError(f"Failed to read image: {path}", {"image_path": str(path)}) from exc


def build_inline_parts(sources: Iterable[ImageSource], validate: bool = True) -> List[Dict[str, Dict[str, str]]]:
    """Encode reference images as ``inline_data`` request parts.

    Unsupported formats raise when ``validate`` is true and are skipped with a
    warning otherwise.

    Raises:
        UnsupportedImageFormatError: In validating mode, for a non JPEG/PNG/GIF/WebP image.
        FileOperationError: If an image cannot be read.
    """
    parts = []
    for source in sources:
        data = read_image_source(source)
        mime_type = detect_mime_type(data)
        if mime_type not in SUPPORTED_MIME_TYPES:
            if validate:
                raise UnsupportedImageFormatError(str(source), mime_type)
            logger.warning("Skipping unsupported image %s (detected: %s)", source, mime_type or "unknown")
            continue
        parts.append({
            "inline_data": {
                "mime_type": mime_type,
                "data": base64.b64encode(data).decode("ascii"),
            }
        })
        logger.debug("Attached %s (%s, %d bytes)", source, mime_type, len(data))
    return parts


def save_image_bytes(data: bytes, output_path: Union[str, Path]) -> Path:
    """Write decoded image bytes, creating parent directories as needed.

    Raises:
        FileOperationError: If the directory or file cannot be written.
    """
    destination = Path(output_path)
    ensure_dir(destination.parent)
    try:
        destination.write_bytes(data)
    except OSError as exc:
        raise FileOperationError(
            f"Failed to save file: {destination}",
            {"output_path": str(destination), "image_data_size": len(data)},
        ) from exc
    logger.debug("Saved %s (%d bytes)", destination, len(data))
    return destination


__all__ = [
    "SUPPORTED_MIME_TYPES",
    "detect_mime_type",
    "read_image_source",
    "build_inline_parts",
    "save_image_bytes",
]
