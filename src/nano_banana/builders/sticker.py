"""Prompt builder for die-cut style stickers and icons."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..errors import MissingSubjectError

logger = logging.getLogger(__name__)

STICKER_DEFAULTS: Mapping[str, str] = MappingProxyType({
    "subject": "",
    "style": "kawaii",
    "background": "transparent",
    "outline": "bold",
    "shading": "cel-shading",
    "color_palette": "vibrant",
    "size": "medium",
    "mood": "cheerful",
})

STICKER_PRESETS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "kawaii": {
        "style": "kawaii",
        "background": "transparent",
        "outline": "bold",
        "shading": "cel-shading",
        "color_palette": "vibrant",
        "mood": "cute",
    },
    "minimalist": {
        "style": "minimalist",
        "background": "transparent",
        "outline": "thin",
        "shading": "flat",
        "color_palette": "monochrome",
        "mood": "serious",
    },
    "vintage": {
        "style": "vintage",
        "background": "transparent",
        "outline": "medium",
        "shading": "soft",
        "color_palette": "earth-tone",
        "mood": "serious",
    },
    "professional": {
        "style": "minimalist",
        "background": "transparent",
        "outline": "medium",
        "shading": "flat",
        "color_palette": "monochrome",
        "mood": "serious",
    },
    "playful": {
        "style": "cartoon",
        "background": "transparent",
        "outline": "bold",
        "shading": "cel-shading",
        "color_palette": "vibrant",
        "mood": "playful",
    },
})

STYLE_DETAILS: Mapping[str, str] = MappingProxyType({
    "kawaii": "The design features cute, rounded features with big expressive eyes.",
    "minimalist": "The design features clean, simple lines with minimal details.",
    "vintage": "The design features retro styling with classic color schemes.",
    "cartoon": "The design features cartoon-style with simplified but expressive design.",
    "anime": "The design features anime/manga art style with detailed character design.",
})

BACKGROUND_DETAILS: Mapping[str, str] = MappingProxyType({
    "transparent": "The background must be transparent.",
    "white": "The background should be white.",
    "color": "The background should be a solid color that complements the subject.",
    "gradient": "The background should be a subtle gradient.",
})


class StickerPromptBuilder:
    """Compose a sticker prompt.

    Unlike the photography builder, every field has a default except
    ``subject``, which must be set before :meth:`build`.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> "StickerPromptBuilder":
        for name, value in STICKER_DEFAULTS.items():
            setattr(self, name, value)
        self.details: List[str] = []
        return self

    def set_subject(self, subject: str) -> "StickerPromptBuilder":
        self.subject = subject
        return self

    def set_style(self, style: str) -> "StickerPromptBuilder":
        """kawaii, minimalist, vintage, cartoon or anime."""
        self.style = style
        return self

    def set_background(self, background: str) -> "StickerPromptBuilder":
        """transparent, white, color or gradient."""
        self.background = background
        return self

    def set_outline(self, outline: str) -> "StickerPromptBuilder":
        """bold, thin, medium or none."""
        self.outline = outline
        return self

    def set_shading(self, shading: str) -> "StickerPromptBuilder":
        self.shading = shading
        return self

    def set_color_palette(self, color_palette: str) -> "StickerPromptBuilder":
        self.color_palette = color_palette
        return self

    def set_size(self, size: str) -> "StickerPromptBuilder":
        self.size = size
        return self

    def set_mood(self, mood: str) -> "StickerPromptBuilder":
        self.mood = mood
        return self

    def add_detail(self, detail: str) -> "StickerPromptBuilder":
        self.details.append(detail)
        return self

    def set_details(self, details: Iterable[str]) -> "StickerPromptBuilder":
        self.details = list(details)
        return self

    def apply_preset(self, name: str) -> "StickerPromptBuilder":
        """Overwrite the fields defined by preset ``name``; unknown names do nothing."""
        preset = STICKER_PRESETS.get(name)
        if preset is None:
            logger.debug("Unknown sticker preset '%s' ignored", name)
            return self
        for field_name, value in preset.items():
            setattr(self, field_name, value)
        return self

    def get_settings(self) -> Dict[str, Any]:
        settings: Dict[str, Any] = {name: getattr(self, name) for name in STICKER_DEFAULTS}
        settings["details"] = list(self.details)
        return settings

    def build(self) -> str:
        """Return the sticker prompt.

        Raises:
            MissingSubjectError: If no subject is set.
        """
        if not self.subject:
            raise MissingSubjectError(type(self).__name__)

        sentences = [f"A {self.style}-style sticker of {self.subject}."]
        if self.style in STYLE_DETAILS:
            sentences.append(STYLE_DETAILS[self.style])
        sentences.append(f"The overall mood should be {self.mood}.")
        if self.outline != "none":
            sentences.append(f"It has {self.outline}, clean outlines and {self.shading}.")
        else:
            sentences.append(f"It has {self.shading} without outlines.")
        sentences.append(f"Use a {self.color_palette} color palette.")
        if self.background in BACKGROUND_DETAILS:
            sentences.append(BACKGROUND_DETAILS[self.background])
        sentences.append(
            f"The sticker should be {self.size} size and suitable for use as a digital sticker, icon, or asset."
        )
        if self.details:
            sentences.append("Additional details: " + ", ".join(self.details) + ".")
        return " ".join(sentences)

    @classmethod
    def from_params(cls, subject: str, params: Optional[Mapping[str, Any]] = None) -> "StickerPromptBuilder":
        """Create a builder from a parameter mapping; ``preset`` is applied last."""
        params = params or {}
        builder = cls().set_subject(subject)
        for name in STICKER_DEFAULTS:
            if name != "subject" and params.get(name) is not None:
                setattr(builder, name, params[name])
        for detail in params.get("details") or ():
            builder.add_detail(detail)
        if params.get("preset"):
            builder.apply_preset(params["preset"])
        return builder


__all__ = ["StickerPromptBuilder", "STICKER_PRESETS", "STICKER_DEFAULTS"]
