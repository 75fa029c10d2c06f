"""Configuration loaders: API settings from the environment and template files from YAML."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml
from dotenv import load_dotenv

from .errors import ApiKeyError
from .models import DEFAULT_MODEL, ImageModel
from .templates import TemplateDefinition

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class GeminiSettings:
    """Runtime settings required to call the Gemini API."""

    api_key: str
    model: ImageModel = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT
    validate_images: bool = True

    @classmethod
    def from_env(cls) -> "GeminiSettings":
        """Load settings from environment variables or .env.

        Raises:
            ApiKeyError: If no API key is available.
            ValueError: If ``GEMINI_IMAGE_MODEL`` or ``GEMINI_TIMEOUT`` is invalid.
        """

        load_dotenv()
        api_key = os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise ApiKeyError("GEMINI_API_KEY is not set. Create a .env or export the variable.")

        model_env = os.getenv("GEMINI_IMAGE_MODEL")
        model = ImageModel.parse(model_env) if model_env else DEFAULT_MODEL

        timeout_env = os.getenv("GEMINI_TIMEOUT")
        timeout = float(timeout_env) if timeout_env else DEFAULT_TIMEOUT

        validate_env = os.getenv("NANO_BANANA_VALIDATE_IMAGES", "true")
        validate_images = validate_env.strip().lower() not in _FALSE_VALUES

        return cls(api_key=api_key, model=model, timeout=timeout, validate_images=validate_images)


def load_template_file(path: Path) -> List[Tuple[str, TemplateDefinition]]:
    """Load template definitions from a YAML file.

    The file holds a list (or a ``templates:`` list) of entries::

        - key: event_announcement
          name: Event Announcement
          description: Poster for an upcoming event
          body: "A poster announcing {{event_name}} on {{event_date}}."
          defaults:
            event_date: "9/1"
          required: [event_name]

    Args:
        path: Path to the YAML file.

    Returns:
        ``(key, definition)`` pairs in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If an entry misses ``key`` or ``body``.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Template file not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        raw: Any = yaml.safe_load(fh) or []

    if isinstance(raw, dict):
        raw = raw.get("templates", [])
    if not isinstance(raw, list):
        raise ValueError(f"Template file must contain a list of templates: {path}")

    loaded = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValueError(f"Template entry #{index} in {path} is not a mapping")
        try:
            key = str(entry["key"])
            body = str(entry["body"])
        except KeyError as exc:
            raise ValueError(f"Missing template field {exc} in entry #{index} of {path}") from exc

        defaults: Dict[str, str] = {str(k): str(v) for k, v in (entry.get("defaults") or {}).items()}
        definition = TemplateDefinition(
            name=str(entry.get("name", key)),
            description=str(entry.get("description", "")),
            body=body,
            default_variables=defaults,
            required_variables=tuple(str(r) for r in entry.get("required") or ()),
        )
        loaded.append((key, definition))

    logger.debug("Loaded %d template(s) from %s", len(loaded), path)
    return loaded


__all__ = ["GeminiSettings", "load_template_file", "DEFAULT_TIMEOUT"]
