"""Thin wrapper around the Gemini image REST API (Nano Banana / Pro).

This module isolates the HTTP client so prompt construction can stay
transport-agnostic. Requests are plain JSON posts made with ``requests``.
"""
from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

import requests

from .builders import PhotographyPromptBuilder, StickerPromptBuilder, build_illustration_prompt
from .config import DEFAULT_TIMEOUT, GeminiSettings
from .errors import ApiKeyError, ApiRequestError, FileOperationError
from .generator import PromptGenerator
from .images import ImageSource, build_inline_parts, save_image_bytes
from .models import DEFAULT_MODEL, ImageModel
from .response import NanoBananaResponse
from .utils import prompts_root

logger = logging.getLogger(__name__)
# Elevate to DEBUG if GEMINI_DEBUG is set
if os.getenv("GEMINI_DEBUG"):
    logger.setLevel(logging.DEBUG)

NANO_BANANA_PROMPT = "Create a picture of a nano banana dish in a fancy restaurant with a Gemini theme"

PathLike = Union[str, Path]


def build_request_body(prompt: str, inline_parts: Sequence[Mapping[str, Any]] = ()) -> Dict[str, Any]:
    """Return the ``generateContent`` body for a prompt and optional image parts."""
    return {
        "contents": [
            {
                "parts": [{"text": prompt}, *inline_parts],
            }
        ]
    }


class NanoBananaClient:
    """Gemini image client.

    Every generating method sends one request, normalizes the response, and
    writes the decoded image to ``output_path``. Nothing is retried.
    """

    def __init__(
        self,
        api_key: str,
        model: ImageModel = DEFAULT_MODEL,
        validate_images: bool = True,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            api_key: Gemini API key.
            model: Image model to call.
            validate_images: Raise on unsupported reference images instead of
                skipping them.
            timeout: Request timeout in seconds.
            session: Optional ``requests.Session`` to send requests with.

        Raises:
            ApiKeyError: If ``api_key`` is empty.
        """
        if not api_key:
            raise ApiKeyError()
        self.api_key = api_key
        self.model = model
        self.validate_images = validate_images
        self.timeout = timeout
        self._http = session or requests
        self._last_request: Dict[str, Any] = {}

    @classmethod
    def from_settings(cls, settings: Optional[GeminiSettings] = None) -> "NanoBananaClient":
        """Build a client from :class:`GeminiSettings` (loaded from env if omitted)."""
        settings = settings or GeminiSettings.from_env()
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            validate_images=settings.validate_images,
            timeout=settings.timeout,
        )

    @property
    def masked_api_key(self) -> str:
        # Short keys would be shown almost whole by the prefix/suffix form
        if len(self.api_key) <= 12:
            return "*" * len(self.api_key)
        return f"{self.api_key[:8]}...{self.api_key[-4:]}"

    @property
    def last_request(self) -> Dict[str, Any]:
        """Copy of the most recent request body."""
        return copy.deepcopy(self._last_request)

    def _post(self, body: Dict[str, Any], prompt: str) -> Dict[str, Any]:
        """Send a request body and return the parsed JSON response.

        Raises:
            ApiRequestError: On transport failure, non-2xx status, or non-JSON body.
        """
        self._last_request = body
        url = self.model.api_url()
        logger.info("Calling Gemini image model: %s", self.model.value)
        logger.debug("POST %s", url)

        try:
            response = self._http.post(
                url,
                headers={
                    "x-goog-api-key": self.api_key,
                    "Content-Type": "application/json",
                },
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ApiRequestError(
                f"Request to {self.model.value} failed: {exc}",
                {"prompt": prompt, "original_error": str(exc)},
            ) from exc

        if response.status_code >= 400:
            logger.error("Gemini API error on %s: %s", self.model.value, response.text[:500])
            raise ApiRequestError(
                f"API request failed (status {response.status_code}): {response.text}",
                {"status_code": response.status_code, "response_body": response.text, "prompt": prompt},
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ApiRequestError(
                "API response is not valid JSON",
                {"status_code": response.status_code, "response_body": response.text, "prompt": prompt},
            ) from exc

    def _send(self, prompt: str, output_path: PathLike, inline_parts: Sequence[Mapping[str, Any]] = ()) -> NanoBananaResponse:
        raw = self._post(build_request_body(prompt, inline_parts), prompt)
        result = NanoBananaResponse.from_raw(raw)
        logger.info(
            "Response %s from %s: tokens prompt=%d candidates=%d thoughts=%d total=%d",
            result.response_id,
            result.model_version,
            result.prompt_token_count,
            result.candidates_token_count,
            result.thoughts_token_count,
            result.total_token_count,
        )
        image_data = result.decode_image()
        save_image_bytes(image_data, output_path)
        logger.info("Saved image to %s", output_path)
        return result

    def generate_image(self, prompt: str, output_path: PathLike) -> NanoBananaResponse:
        """Generate an image from text and save it.

        Raises:
            ApiRequestError: If the request fails.
            MalformedResponseError: If usage metadata is missing.
            NoImagePayloadError: If the response holds no image.
            ImageProcessingError: If the payload cannot be decoded.
            FileOperationError: If the image cannot be saved.
        """
        return self._send(prompt, output_path)

    def generate_nano_banana_image(self, output_path: PathLike) -> NanoBananaResponse:
        return self.generate_image(NANO_BANANA_PROMPT, output_path)

    def edit_image(self, prompt: str, image_sources: Iterable[ImageSource], output_path: PathLike) -> NanoBananaResponse:
        """Transform reference images (paths or URLs) with a text prompt.

        Raises:
            UnsupportedImageFormatError: If validation is on and an image is not
                JPEG, PNG, GIF or WebP.
            FileOperationError: If an image cannot be read or the result saved.
        """
        if isinstance(image_sources, (str, Path)):
            image_sources = [image_sources]
        parts = build_inline_parts(image_sources, validate=self.validate_images)
        return self._send(prompt, output_path, parts)

    def generate_photorealistic_image(
        self,
        subject: str,
        output_path: PathLike,
        photography_params: Optional[Mapping[str, Any]] = None,
    ) -> NanoBananaResponse:
        prompt = PhotographyPromptBuilder.from_params(subject, photography_params).build()
        return self.generate_image(prompt, output_path)

    def generate_photorealistic_image_with_preset(
        self,
        subject: str,
        output_path: PathLike,
        preset: str,
        additional_params: Optional[Mapping[str, Any]] = None,
    ) -> NanoBananaResponse:
        params = {"preset": preset, **(additional_params or {})}
        return self.generate_photorealistic_image(subject, output_path, params)

    def edit_photorealistic_image(
        self,
        subject: str,
        image_sources: Iterable[ImageSource],
        output_path: PathLike,
        photography_params: Optional[Mapping[str, Any]] = None,
    ) -> NanoBananaResponse:
        prompt = PhotographyPromptBuilder.from_params(subject, photography_params).build()
        return self.edit_image(prompt, image_sources, output_path)

    def generate_sticker(
        self,
        subject: str,
        output_path: PathLike,
        sticker_params: Optional[Mapping[str, Any]] = None,
    ) -> NanoBananaResponse:
        """Raises MissingSubjectError for an empty subject before any request is sent."""
        prompt = StickerPromptBuilder.from_params(subject, sticker_params).build()
        return self.generate_image(prompt, output_path)

    def generate_illustration(
        self,
        subject: str,
        output_path: PathLike,
        illustration_params: Optional[Mapping[str, Any]] = None,
    ) -> NanoBananaResponse:
        prompt = build_illustration_prompt(subject, illustration_params)
        return self.generate_image(prompt, output_path)

    def generate_from_template(self, generator: PromptGenerator, output_path: PathLike) -> NanoBananaResponse:
        """Render a template generator and send the result.

        Raises:
            MissingRequiredVariablesError: If the generator does not validate.
        """
        return self.generate_image(generator.generate(), output_path)

    def edit_image_with_prompt_file(
        self,
        prompt_file: PathLike,
        image_sources: Iterable[ImageSource],
        output_path: PathLike,
    ) -> NanoBananaResponse:
        """Edit images with a prompt stored in a text file.

        Relative paths resolve against :func:`~nano_banana.utils.prompts_root`.

        Raises:
            FileOperationError: If the prompt file is missing, unreadable, or empty.
        """
        path = Path(prompt_file)
        if not path.is_absolute():
            path = prompts_root() / path
        if not path.exists():
            raise FileOperationError(f"Prompt file not found: {path}", {"prompt_file_path": str(path)})
        try:
            prompt = path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise FileOperationError(f"Failed to read prompt file: {path}", {"prompt_file_path": str(path)}) from exc
        if not prompt:
            raise FileOperationError(f"Prompt file is empty: {path}", {"prompt_file_path": str(path)})
        return self.edit_image(prompt, image_sources, output_path)


__all__ = ["NanoBananaClient", "build_request_body", "NANO_BANANA_PROMPT"]
