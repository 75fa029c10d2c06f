"""Exception hierarchy for the Nano Banana client."""
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional


class NanoBananaError(Exception):
    """Base exception for all library errors.

    Every error carries a ``context`` dict with the values needed to act on it
    (template key, field name, output path, ...).
    """

    def __init__(self, message: str = "", context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context: Dict[str, Any] = dict(context or {})


class ApiKeyError(NanoBananaError):
    """API key is missing or empty."""

    def __init__(self, message: str = "GEMINI_API_KEY is not set.", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)


class ApiRequestError(NanoBananaError):
    """HTTP request failed or returned a non-success status."""

    @property
    def status_code(self) -> Optional[int]:
        return self.context.get("status_code")


class ImageProcessingError(NanoBananaError):
    """Image payload could not be produced, decoded, or validated."""
    pass


class FileOperationError(NanoBananaError):
    """Reading or writing a file failed."""
    pass


class UnknownTemplateError(NanoBananaError, KeyError):
    """Requested template key is not registered."""

    def __init__(self, key: str, available: Iterable[str] = ()):
        available = list(available)
        super().__init__(
            f"Template '{key}' is not registered (available: {', '.join(available) or 'none'})",
            {"key": key, "available": available},
        )
        self.key = key

    def __str__(self) -> str:
        return self.args[0]


class MissingRequiredVariablesError(NanoBananaError):
    """``generate()`` was called while required variables are unset or empty."""

    def __init__(self, template: str, missing: Iterable[str]):
        missing = list(missing)
        super().__init__(
            f"Template '{template}' is missing required variables: {', '.join(missing)}",
            {"template": template, "missing": missing},
        )
        self.template = template
        self.missing = missing


class MissingSubjectError(NanoBananaError, ValueError):
    """Builder requires a subject but none was set."""

    def __init__(self, builder: str):
        super().__init__(f"{builder}: subject is not set", {"builder": builder, "field": "subject"})
        self.builder = builder


class MalformedResponseError(NanoBananaError):
    """API response lacks a required metadata field."""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Response is missing required field: {field}", {"field": field})
        self.field = field


class NoImagePayloadError(ImageProcessingError):
    """Response is well-formed but carries no image data."""
    pass


class UnsupportedImageFormatError(ImageProcessingError):
    """Reference image is not JPEG, PNG, GIF or WebP."""

    def __init__(self, source: str, detected: Optional[str] = None):
        super().__init__(
            f"Unsupported image format: {source} (detected: {detected or 'unknown'})",
            {"image_path": source, "detected": detected},
        )
        self.source = source
        self.detected = detected


__all__ = [
    "NanoBananaError",
    "ApiKeyError",
    "ApiRequestError",
    "ImageProcessingError",
    "FileOperationError",
    "UnknownTemplateError",
    "MissingRequiredVariablesError",
    "MissingSubjectError",
    "MalformedResponseError",
    "NoImagePayloadError",
    "UnsupportedImageFormatError",
]
