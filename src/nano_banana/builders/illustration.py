"""Stateless prompt composition for illustrations."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

DEFAULT_ILLUSTRATION_PARAMS: Mapping[str, str] = MappingProxyType({
    "style": "anime",
    "background": "detailed",
    "quality": "high",
    "mood": "cheerful",
    "composition": "balanced",
})

_STYLE_TEXT = {
    "anime": "The illustration features anime/manga art style with detailed character design.",
    "realistic": "The illustration features realistic art style with detailed textures and lighting.",
    "cartoon": "The illustration features cartoon art style with simplified but expressive design.",
    "watercolor": "The illustration features watercolor art style with soft, flowing colors.",
}

_BACKGROUND_TEXT = {
    "transparent": "The background must be transparent.",
    "detailed": "Include a detailed, atmospheric background that complements the subject.",
}


def build_illustration_prompt(subject: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Build an illustration prompt.

    Args:
        subject: What the illustration shows.
        params: Overrides for ``style``, ``background``, ``quality``, ``mood``
            and ``composition``; missing keys use
            :data:`DEFAULT_ILLUSTRATION_PARAMS`.

    Returns:
        Prompt text.
    """
    merged = {**DEFAULT_ILLUSTRATION_PARAMS, **(params or {})}
    style = merged["style"]
    background = merged["background"]
    quality = merged["quality"]

    sentences = [f"A {quality} quality {style}-style illustration of {subject}."]
    if style in _STYLE_TEXT:
        sentences.append(_STYLE_TEXT[style])
    sentences.append(f"The overall mood should be {merged['mood']}.")
    sentences.append(_BACKGROUND_TEXT.get(background, f"The background should be {background}."))
    sentences.append(f"Use a {merged['composition']} composition with good visual balance.")
    if quality == "high":
        sentences.append("The illustration should be highly detailed with professional quality rendering.")
    sentences.append("This should be suitable for use as a digital illustration, artwork, or visual asset.")
    return " ".join(sentences)


__all__ = ["build_illustration_prompt", "DEFAULT_ILLUSTRATION_PARAMS"]
