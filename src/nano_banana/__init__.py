"""Gemini image generation client with prompt templates and builders.

Example:
    >>> from nano_banana import PromptGenerator, default_registry
    >>> generator = PromptGenerator(default_registry().create("simple_product"))
    >>> generator.set_variables({"product_name": "Widget", "brand_name": "Acme"}).validate()
    True
"""
from .builders import (
    PHOTOGRAPHY_PRESETS,
    STICKER_PRESETS,
    PhotographyPromptBuilder,
    StickerPromptBuilder,
    build_illustration_prompt,
)
from .config import GeminiSettings, load_template_file
from .errors import (
    ApiKeyError,
    ApiRequestError,
    FileOperationError,
    ImageProcessingError,
    MalformedResponseError,
    MissingRequiredVariablesError,
    MissingSubjectError,
    NanoBananaError,
    NoImagePayloadError,
    UnknownTemplateError,
    UnsupportedImageFormatError,
)
from .gemini_client import NanoBananaClient, build_request_body
from .generator import PromptGenerator
from .models import ImageModel
from .response import NanoBananaResponse, extract_image_payload, normalize_response
from .templates import PromptTemplate, TemplateDefinition, TemplateRegistry, default_registry

__all__ = [
    "PhotographyPromptBuilder",
    "StickerPromptBuilder",
    "build_illustration_prompt",
    "PHOTOGRAPHY_PRESETS",
    "STICKER_PRESETS",
    "GeminiSettings",
    "load_template_file",
    "NanoBananaError",
    "ApiKeyError",
    "ApiRequestError",
    "FileOperationError",
    "ImageProcessingError",
    "MalformedResponseError",
    "MissingRequiredVariablesError",
    "MissingSubjectError",
    "NoImagePayloadError",
    "UnknownTemplateError",
    "UnsupportedImageFormatError",
    "NanoBananaClient",
    "build_request_body",
    "PromptGenerator",
    "ImageModel",
    "NanoBananaResponse",
    "extract_image_payload",
    "normalize_response",
    "PromptTemplate",
    "TemplateDefinition",
    "TemplateRegistry",
    "default_registry",
]

__version__ = "0.1.0"
