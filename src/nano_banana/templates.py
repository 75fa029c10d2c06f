"""Prompt template definitions and the registry that resolves them by key."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Protocol, Tuple, runtime_checkable

from .errors import UnknownTemplateError

logger = logging.getLogger(__name__)


@runtime_checkable
class PromptTemplate(Protocol):
    """Anything that exposes a body with ``{{key}}`` placeholders and its variables."""

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def body(self) -> str: ...

    @property
    def default_variables(self) -> Mapping[str, str]: ...

    @property
    def required_variables(self) -> Tuple[str, ...]: ...


@dataclass(frozen=True)
class TemplateDefinition:
    """Immutable template: body, default variables and required keys."""

    name: str
    description: str
    body: str
    default_variables: Mapping[str, str] = field(default_factory=dict)
    required_variables: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_variables", MappingProxyType(dict(self.default_variables)))
        object.__setattr__(self, "required_variables", tuple(self.required_variables))


TemplateFactory = Callable[[], PromptTemplate]


SALES_PROMOTION = TemplateDefinition(
    name="Sales Promotion Banner",
    description="花火背景の販促バナー用テンプレート",
    body="""A vibrant summer sales promotional banner featuring fireworks in the background.
The composition includes:

Main Elements:
- Spectacular fireworks display in the night sky with vivid colors ({{fireworks_colors}})
- {{product_name}} prominently displayed in the center-right area
- Energetic, festival-like atmosphere

Text Overlays (in Japanese style):
- Main campaign period: "{{campaign_date}}まで" in orange banner (top-left)
- Campaign tagline: "{{campaign_slogan}}"
- Large bold headline: "{{main_headline}}" in white text
- Vertical text on the left: "{{vertical_text_1}}{{vertical_text_2}}{{vertical_text_3}}"
- Brand logo "{{brand_name}}" in red vertical banner (right edge)
- Product specifications: "{{product_specs}}"
- Secondary product mention: "{{secondary_product}}" in top-right
- Call-to-action: "今すぐ{{brand_name}}公式サイトへ" in red banner with arrows (bottom)

Visual Style:
- Photorealistic product rendering
- Festival/celebration atmosphere with bokeh effects
- Dark blue/purple gradient background
- High contrast between text and background
- Professional advertising photography style
- Dynamic composition with diagonal elements

Color Scheme:
- Deep blue/purple night sky
- Vibrant orange/yellow text boxes
- Bright red accent elements
- Colorful firework bursts""",
    default_variables={
        "campaign_date": "8/28",
        "campaign_slogan": "この夏、決断を！",
        "main_headline": "買い替え応援サマーセール",
        "product_name": "ThinkPad X1 Carbon Gen 13",
        "product_specs": "インテル® Core™ Ultra 7プロセッサー",
        "brand_name": "Lenovo",
        "fireworks_colors": "pink, blue, orange, and golden",
        "secondary_product": "Lenovo IdeaCentre Mini Q WARRIOR",
        "vertical_text_1": "あなたに",
        "vertical_text_2": "3大特典を",
        "vertical_text_3": "お見逃しなく",
    },
    required_variables=("campaign_date", "main_headline", "product_name", "brand_name"),
)

SIMPLE_PRODUCT = TemplateDefinition(
    name="Simple Product Showcase",
    description="シンプルな商品紹介用テンプレート",
    body="""A clean and professional product showcase image.

Main Elements:
- {{product_name}} as the central focus
- {{background_style}} background
- Professional studio lighting

Product Details:
- Product: {{product_name}}
- Key Feature: {{key_feature}}
- Brand: {{brand_name}}

Visual Style:
- {{visual_style}}
- High-resolution product photography
- Minimalist composition
- Professional color grading

Color Scheme:
- {{color_scheme}}""",
    default_variables={
        "product_name": "Product Name",
        "background_style": "Pure white",
        "key_feature": "Premium Quality",
        "brand_name": "Brand",
        "visual_style": "Modern and clean",
        "color_scheme": "Neutral tones with accent colors",
    },
    required_variables=("product_name", "brand_name"),
)

# Built-in templates, registered by ``TemplateRegistry.register_defaults``
BUILTIN_TEMPLATES: Mapping[str, PromptTemplate] = MappingProxyType({
    "sales_promotion": SALES_PROMOTION,
    "simple_product": SIMPLE_PRODUCT,
})


class TemplateRegistry:
    """Maps template keys to factories.

    Registries are plain values: build one with :func:`default_registry` (or
    an empty one) and pass it to whatever needs to resolve templates.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, TemplateFactory] = {}

    def register(self, key: str, factory: TemplateFactory) -> None:
        """Associate ``key`` with ``factory``; a later call for the same key wins."""
        if key in self._factories:
            logger.debug("Replacing template registration for '%s'", key)
        self._factories[key] = factory

    def create(self, key: str) -> PromptTemplate:
        """Resolve ``key`` to a template instance.

        Raises:
            UnknownTemplateError: If ``key`` has not been registered.
        """
        try:
            factory = self._factories[key]
        except KeyError:
            raise UnknownTemplateError(key, self.list_keys()) from None
        return factory()

    def list_keys(self) -> List[str]:
        """Return registered keys in registration order."""
        return list(self._factories)

    def clear(self) -> None:
        self._factories.clear()

    def register_defaults(self) -> None:
        """Register the built-in templates."""
        for key, template in BUILTIN_TEMPLATES.items():
            self.register(key, _constant(template))

    def register_file(self, path: Path) -> List[str]:
        """Register every template defined in a YAML file.

        Returns:
            Keys registered from the file, in file order.
        """
        from .config import load_template_file

        keys = []
        for key, template in load_template_file(path):
            self.register(key, _constant(template))
            keys.append(key)
        logger.info("Registered %d template(s) from %s", len(keys), path)
        return keys

    def __contains__(self, key: object) -> bool:
        return key in self._factories

    def __len__(self) -> int:
        return len(self._factories)


def _constant(template: PromptTemplate) -> TemplateFactory:
    return lambda: template


def default_registry() -> TemplateRegistry:
    """Return a new registry holding the built-in templates."""
    registry = TemplateRegistry()
    registry.register_defaults()
    return registry


__all__ = [
    "PromptTemplate",
    "TemplateDefinition",
    "TemplateRegistry",
    "SALES_PROMOTION",
    "SIMPLE_PRODUCT",
    "BUILTIN_TEMPLATES",
    "default_registry",
]
