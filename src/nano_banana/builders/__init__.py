"""Structured prompt builders with preset vocabularies."""
from .illustration import DEFAULT_ILLUSTRATION_PARAMS, build_illustration_prompt
from .photography import PHOTOGRAPHY_PRESETS, PhotographyPromptBuilder
from .sticker import STICKER_DEFAULTS, STICKER_PRESETS, StickerPromptBuilder

__all__ = [
    "PhotographyPromptBuilder",
    "PHOTOGRAPHY_PRESETS",
    "StickerPromptBuilder",
    "STICKER_PRESETS",
    "STICKER_DEFAULTS",
    "build_illustration_prompt",
    "DEFAULT_ILLUSTRATION_PARAMS",
]
