"""Normalization of ``generateContent`` responses.

The API has returned the image under more than one key path, so extraction
checks each known location in a fixed order before falling back to a text scan.
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .errors import ImageProcessingError, MalformedResponseError, NoImagePayloadError

logger = logging.getLogger(__name__)

# Last-resort pattern; matches the first "data" string anywhere in the response.
_DATA_PATTERN = re.compile(r'"data"\s*:\s*"([^"]+)"')


def _first_part(raw: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    try:
        part = raw["candidates"][0]["content"]["parts"][0]
    except (KeyError, IndexError, TypeError):
        return None
    return part if isinstance(part, Mapping) else None


def extract_image_payload(raw: Mapping[str, Any]) -> Optional[str]:
    """Return the base64 image payload, or ``None`` if none is found.

    Lookup order:
        1. ``candidates[0].content.parts[0].data``
        2. ``candidates[0].content.parts[0].inlineData.data``
        3. the first ``"data": "..."`` pair in the serialized response
    """
    part = _first_part(raw)
    if part is not None:
        data = part.get("data")
        if isinstance(data, str) and data:
            return data
        inline = part.get("inlineData")
        if isinstance(inline, Mapping):
            data = inline.get("data")
            if isinstance(data, str) and data:
                return data

    try:
        serialized = json.dumps(raw, ensure_ascii=False)
    except (TypeError, ValueError):
        return None
    match = _DATA_PATTERN.search(serialized)
    if match:
        # Fragile: any other "data" string in the response would match first.
        logger.warning("Image payload found only by pattern scan; response layout is unexpected")
        return match.group(1)
    return None


def _require(mapping: Mapping[str, Any], key: str, path: str) -> Any:
    if not isinstance(mapping, Mapping) or key not in mapping or mapping[key] is None:
        raise MalformedResponseError(path)
    return mapping[key]


def _require_int(mapping: Mapping[str, Any], key: str) -> int:
    path = f"usageMetadata.{key}"
    value = _require(mapping, key, path)
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedResponseError(path, f"Response field {path} is not an integer: {value!r}")
    return value


@dataclass(frozen=True)
class NanoBananaResponse:
    """Image payload and usage metadata of one API call."""

    image_payload: Optional[str]
    prompt_token_count: int
    candidates_token_count: int
    total_token_count: int
    model_version: str
    response_id: str
    thoughts_token_count: int = 0
    raw_response: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "NanoBananaResponse":
        """Normalize a parsed JSON response.

        A missing image payload is not an error here; check :attr:`has_image`.

        Raises:
            MalformedResponseError: If usage metadata or identifiers are missing.
        """
        if not isinstance(raw, Mapping):
            raise MalformedResponseError("<root>", f"Response is not a JSON object: {type(raw).__name__}")

        usage = _require(raw, "usageMetadata", "usageMetadata")
        if not isinstance(usage, Mapping):
            raise MalformedResponseError("usageMetadata", "Response field usageMetadata is not an object")

        thoughts = usage.get("thoughtsTokenCount")
        return cls(
            image_payload=extract_image_payload(raw),
            prompt_token_count=_require_int(usage, "promptTokenCount"),
            candidates_token_count=_require_int(usage, "candidatesTokenCount"),
            total_token_count=_require_int(usage, "totalTokenCount"),
            thoughts_token_count=0 if thoughts is None else _require_int(usage, "thoughtsTokenCount"),
            model_version=str(_require(raw, "modelVersion", "modelVersion")),
            response_id=str(_require(raw, "responseId", "responseId")),
            raw_response=raw,
        )

    @property
    def has_image(self) -> bool:
        return bool(self.image_payload)

    def decode_image(self) -> bytes:
        """Decode the base64 payload to raw image bytes.

        Whitespace such as line wrapping is ignored.

        Raises:
            NoImagePayloadError: If the response carried no image.
            ImageProcessingError: If the payload is not valid base64.
        """
        if not self.image_payload:
            raise NoImagePayloadError(
                "Could not extract image data from response",
                {"response_id": self.response_id, "model_version": self.model_version},
            )
        try:
            return base64.b64decode("".join(self.image_payload.split()), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ImageProcessingError(
                f"Base64 decode failed: {exc}",
                {"base64_data_length": len(self.image_payload), "response_id": self.response_id},
            ) from exc

    def to_dict(self) -> Dict[str, Any]:
        return {
            "image_payload": self.image_payload,
            "prompt_token_count": self.prompt_token_count,
            "candidates_token_count": self.candidates_token_count,
            "total_token_count": self.total_token_count,
            "thoughts_token_count": self.thoughts_token_count,
            "model_version": self.model_version,
            "response_id": self.response_id,
            "raw_response": self.raw_response,
        }


def normalize_response(raw: Mapping[str, Any]) -> NanoBananaResponse:
    """Shorthand for :meth:`NanoBananaResponse.from_raw`."""
    return NanoBananaResponse.from_raw(raw)


__all__ = ["NanoBananaResponse", "extract_image_payload", "normalize_response"]
