"""Prompt builder for photorealistic images."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# Preset name -> fields it overwrites
PHOTOGRAPHY_PRESETS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "portrait": {
        "camera_angle": "close-up portrait",
        "lens_type": "85mm portrait lens",
        "lighting": "soft, golden hour light",
        "mood": "serene and masterful",
        "quality": "high resolution, professional photography",
    },
    "landscape": {
        "camera_angle": "wide-angle landscape shot",
        "lens_type": "24-70mm wide-angle lens",
        "lighting": "natural daylight",
        "mood": "dramatic and breathtaking",
        "quality": "ultra-high resolution, National Geographic style",
    },
    "macro": {
        "camera_angle": "extreme close-up macro shot",
        "lens_type": "100mm macro lens",
        "lighting": "soft, diffused lighting",
        "mood": "intimate and detailed",
        "quality": "crystal clear, macro photography",
    },
    "street": {
        "camera_angle": "candid street photography",
        "lens_type": "35mm prime lens",
        "lighting": "natural urban lighting",
        "mood": "authentic and raw",
        "quality": "documentary style, black and white or color",
    },
    "studio": {
        "camera_angle": "professional studio shot",
        "lens_type": "50mm prime lens",
        "lighting": "controlled studio lighting with softbox",
        "mood": "clean and professional",
        "quality": "commercial photography quality",
    },
})

_TEXT_FIELDS = (
    "subject",
    "camera_angle",
    "lens_type",
    "lighting",
    "mood",
    "background",
    "style",
    "quality",
)

# Fragments in output order; empty values are skipped.
_FRAGMENTS: Tuple[Tuple[str, Callable[[Any], str]], ...] = (
    ("subject", lambda v: f"A photorealistic {v}"),
    ("camera_angle", lambda v: f"shot with a {v}"),
    ("lens_type", lambda v: f"using a {v}"),
    ("lighting", lambda v: f"illuminated by {v}"),
    ("background", lambda v: f"with {v} in the background"),
    ("details", lambda v: ". ".join(v)),
    ("mood", lambda v: f"The overall mood is {v}"),
    ("style", lambda v: f"Style: {v}"),
    ("quality", lambda v: f"Quality: {v}"),
)


class PhotographyPromptBuilder:
    """Compose a photorealistic prompt from camera and lighting vocabulary.

    Example::

        PhotographyPromptBuilder().set_subject("a red fox").apply_preset("portrait").build()
        # "A photorealistic a red fox. shot with a close-up portrait. using a 85mm portrait lens. ..."

    No field is required; an empty builder yields a bare ``"."``.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> "PhotographyPromptBuilder":
        for name in _TEXT_FIELDS:
            setattr(self, name, "")
        self.details: List[str] = []
        return self

    def set_subject(self, subject: str) -> "PhotographyPromptBuilder":
        self.subject = subject
        return self

    def set_camera_angle(self, angle: str) -> "PhotographyPromptBuilder":
        self.camera_angle = angle
        return self

    def set_lens_type(self, lens: str) -> "PhotographyPromptBuilder":
        self.lens_type = lens
        return self

    def set_lighting(self, lighting: str) -> "PhotographyPromptBuilder":
        self.lighting = lighting
        return self

    def set_mood(self, mood: str) -> "PhotographyPromptBuilder":
        self.mood = mood
        return self

    def set_background(self, background: str) -> "PhotographyPromptBuilder":
        self.background = background
        return self

    def set_style(self, style: str) -> "PhotographyPromptBuilder":
        self.style = style
        return self

    def set_quality(self, quality: str) -> "PhotographyPromptBuilder":
        self.quality = quality
        return self

    def add_detail(self, detail: str) -> "PhotographyPromptBuilder":
        self.details.append(detail)
        return self

    def apply_preset(self, name: str) -> "PhotographyPromptBuilder":
        """Overwrite the fields defined by preset ``name``; unknown names do nothing."""
        preset = PHOTOGRAPHY_PRESETS.get(name)
        if preset is None:
            logger.debug("Unknown photography preset '%s' ignored", name)
            return self
        for field_name, value in preset.items():
            setattr(self, field_name, value)
        return self

    def get_settings(self) -> Dict[str, Any]:
        settings: Dict[str, Any] = {name: getattr(self, name) for name in _TEXT_FIELDS}
        settings["details"] = list(self.details)
        return settings

    def build(self) -> str:
        if not self.subject:
            logger.warning("Building photography prompt without a subject")

        parts = []
        for field_name, fmt in _FRAGMENTS:
            value = getattr(self, field_name)
            if value:
                parts.append(fmt(value))
        return ". ".join(parts) + "."

    @classmethod
    def from_params(cls, subject: str, params: Optional[Mapping[str, Any]] = None) -> "PhotographyPromptBuilder":
        """Create a builder from a parameter mapping.

        Recognised keys are the field names plus ``details`` (list) and
        ``preset``. The preset is applied last, so it overrides any field it
        defines.
        """
        params = params or {}
        builder = cls().set_subject(subject)
        for name in _TEXT_FIELDS[1:]:
            if params.get(name) is not None:
                setattr(builder, name, params[name])
        for detail in params.get("details") or ():
            builder.add_detail(detail)
        if params.get("preset"):
            builder.apply_preset(params["preset"])
        return builder


__all__ = ["PhotographyPromptBuilder", "PHOTOGRAPHY_PRESETS"]
