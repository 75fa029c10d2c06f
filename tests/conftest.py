"""Shared pytest fixtures for nano_banana tests."""

import base64
from io import BytesIO
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest
from PIL import Image

from nano_banana.templates import TemplateRegistry, default_registry


def _encode(fmt: str) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=(255, 200, 0)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """Small encoded PNG image."""
    return _encode("PNG")


@pytest.fixture
def bmp_bytes() -> bytes:
    """Small encoded BMP image (an unsupported reference format)."""
    return _encode("BMP")


@pytest.fixture
def png_file(tmp_path: Path, png_bytes: bytes) -> Path:
    path = tmp_path / "reference.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def bmp_file(tmp_path: Path, bmp_bytes: bytes) -> Path:
    path = tmp_path / "reference.bmp"
    path.write_bytes(bmp_bytes)
    return path


@pytest.fixture
def registry() -> TemplateRegistry:
    """Fresh registry with the built-in templates."""
    return default_registry()


@pytest.fixture
def make_raw_response():
    """Build a raw ``generateContent`` response dict.

    Usage metadata and identifiers are filled in; pass ``part`` to control
    ``candidates[0].content.parts[0]``.
    """

    def _make(part: Dict[str, Any] = None, **overrides: Any) -> Dict[str, Any]:
        raw: Dict[str, Any] = {
            "candidates": [{"content": {"parts": [part if part is not None else {"text": "no image"}]}}],
            "usageMetadata": {
                "promptTokenCount": 12,
                "candidatesTokenCount": 1290,
                "totalTokenCount": 1302,
            },
            "modelVersion": "gemini-2.5-flash-image",
            "responseId": "resp-123",
        }
        raw.update(overrides)
        return raw

    return _make


@pytest.fixture
def image_response(make_raw_response, png_bytes: bytes) -> Dict[str, Any]:
    """Raw response carrying ``png_bytes`` under ``inlineData``."""
    payload = base64.b64encode(png_bytes).decode("ascii")
    return make_raw_response({"inlineData": {"mimeType": "image/png", "data": payload}})


@pytest.fixture
def http_response():
    """Factory for ``requests.Response`` stand-ins."""

    def _make(status_code: int = 200, json_data: Any = None, text: str = "") -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        if isinstance(json_data, Exception):
            response.json.side_effect = json_data
        else:
            response.json.return_value = json_data
        return response

    return _make
