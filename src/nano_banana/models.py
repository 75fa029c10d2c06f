"""Gemini image model identifiers and their REST endpoints."""
from __future__ import annotations

from enum import Enum

BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models/"


class ImageModel(str, Enum):
    """Image-capable Gemini models."""

    GEMINI_2_5_FLASH_IMAGE = "gemini-2.5-flash-image"  # Nano Banana
    GEMINI_3_PRO_IMAGE_PREVIEW = "gemini-3-pro-image-preview"  # Nano Banana Pro

    def api_url(self, batch: bool = False) -> str:
        suffix = "batchGenerateContent" if batch else "generateContent"
        return f"{BASE_URL}{self.value}:{suffix}"

    @classmethod
    def parse(cls, text: str) -> "ImageModel":
        """Resolve a model from its value (``gemini-2.5-flash-image``) or enum name.

        Raises:
            ValueError: If ``text`` matches no model.
        """
        text = text.strip()
        for model in cls:
            if text in (model.value, model.name) or text.upper() == model.name:
                return model
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown image model '{text}' (choose from: {choices})")


DEFAULT_MODEL = ImageModel.GEMINI_2_5_FLASH_IMAGE

__all__ = ["ImageModel", "BASE_URL", "DEFAULT_MODEL"]
