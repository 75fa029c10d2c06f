"""Tests for the photography, sticker and illustration prompt builders."""

import pytest

from nano_banana.builders import (
    PHOTOGRAPHY_PRESETS,
    STICKER_PRESETS,
    PhotographyPromptBuilder,
    StickerPromptBuilder,
    build_illustration_prompt,
)
from nano_banana.errors import MissingSubjectError


class TestPhotographyPromptBuilder:
    """Tests for PhotographyPromptBuilder."""

    def test_portrait_example(self):
        prompt = PhotographyPromptBuilder().set_subject("a red fox").apply_preset("portrait").build()

        assert prompt.startswith("A photorealistic a red fox")
        assert "85mm portrait lens" in prompt
        assert prompt.endswith(".")
        assert not prompt.endswith("..")

    def test_full_composition_order(self):
        prompt = (
            PhotographyPromptBuilder()
            .set_subject("cat")
            .set_camera_angle("low angle")
            .set_lens_type("35mm lens")
            .set_lighting("neon light")
            .set_background("city")
            .add_detail("wet fur")
            .add_detail("glowing eyes")
            .set_mood("tense")
            .set_style("noir")
            .set_quality("8k")
            .build()
        )

        assert prompt == (
            "A photorealistic cat. shot with a low angle. using a 35mm lens. "
            "illuminated by neon light. with city in the background. wet fur. glowing eyes. "
            "The overall mood is tense. Style: noir. Quality: 8k."
        )

    def test_empty_fields_skipped(self):
        assert PhotographyPromptBuilder().set_subject("tree").set_mood("calm").build() == (
            "A photorealistic tree. The overall mood is calm."
        )

    def test_empty_builder_does_not_raise(self):
        assert PhotographyPromptBuilder().build() == "."

    def test_details_not_deduplicated(self):
        builder = PhotographyPromptBuilder().add_detail("x").add_detail("x")
        assert builder.details == ["x", "x"]

    @pytest.mark.parametrize("preset", sorted(PHOTOGRAPHY_PRESETS))
    def test_preset_idempotent(self, preset):
        builder = PhotographyPromptBuilder().set_subject("s").apply_preset(preset)
        first = builder.get_settings()

        assert builder.apply_preset(preset).get_settings() == first

    def test_preset_keeps_other_fields(self):
        builder = (
            PhotographyPromptBuilder()
            .set_background("a forest")
            .set_lighting("torchlight")
            .apply_preset("macro")
        )

        assert builder.background == "a forest"
        assert builder.lighting == "soft, diffused lighting"

    def test_unknown_preset_is_noop(self):
        builder = PhotographyPromptBuilder().set_subject("s").set_mood("calm")
        before = builder.get_settings()

        builder.apply_preset("no-such-preset")

        assert builder.get_settings() == before

    def test_reset(self):
        builder = PhotographyPromptBuilder().set_subject("s").apply_preset("studio").add_detail("d")
        builder.reset()

        assert builder.get_settings() == PhotographyPromptBuilder().get_settings()
        assert builder.details == []

    def test_from_params_applies_preset_last(self):
        builder = PhotographyPromptBuilder.from_params(
            "owl",
            {"lens_type": "fisheye", "background": "barn", "details": ["feathers"], "preset": "landscape"},
        )

        assert builder.subject == "owl"
        assert builder.lens_type == "24-70mm wide-angle lens"
        assert builder.background == "barn"
        assert builder.details == ["feathers"]


class TestStickerPromptBuilder:
    """Tests for StickerPromptBuilder."""

    def test_missing_subject(self):
        with pytest.raises(MissingSubjectError) as excinfo:
            StickerPromptBuilder().build()

        assert excinfo.value.context["field"] == "subject"

    def test_default_prompt(self):
        prompt = StickerPromptBuilder().set_subject("a cat").build()

        assert prompt == (
            "A kawaii-style sticker of a cat. "
            "The design features cute, rounded features with big expressive eyes. "
            "The overall mood should be cheerful. "
            "It has bold, clean outlines and cel-shading. "
            "Use a vibrant color palette. "
            "The background must be transparent. "
            "The sticker should be medium size and suitable for use as a digital sticker, icon, or asset."
        )

    def test_no_outline_wording(self):
        prompt = StickerPromptBuilder().set_subject("dog").set_outline("none").set_shading("flat").build()
        assert "It has flat without outlines." in prompt

    def test_unknown_style_and_background_add_nothing(self):
        prompt = StickerPromptBuilder().set_subject("dog").set_style("pixel").set_background("plaid").build()

        assert "The design features" not in prompt
        assert "The background" not in prompt
        assert prompt.startswith("A pixel-style sticker of dog.")

    def test_additional_details(self):
        prompt = StickerPromptBuilder().set_subject("dog").add_detail("hat").add_detail("scarf").build()
        assert prompt.endswith("Additional details: hat, scarf.")

    def test_set_details_replaces(self):
        builder = StickerPromptBuilder().add_detail("a").set_details(["b", "c"])
        assert builder.details == ["b", "c"]

    @pytest.mark.parametrize("preset", sorted(STICKER_PRESETS))
    def test_preset_idempotent(self, preset):
        builder = StickerPromptBuilder().set_subject("s").apply_preset(preset)
        first = builder.get_settings()

        assert builder.apply_preset(preset).get_settings() == first

    def test_preset_keeps_size_and_subject(self):
        builder = StickerPromptBuilder().set_subject("frog").set_size("large").apply_preset("vintage")

        assert builder.size == "large"
        assert builder.subject == "frog"
        assert builder.color_palette == "earth-tone"

    def test_professional_preset(self):
        builder = StickerPromptBuilder().apply_preset("professional")
        assert (builder.style, builder.outline, builder.mood) == ("minimalist", "medium", "serious")

    def test_unknown_preset_is_noop(self):
        builder = StickerPromptBuilder()
        builder.apply_preset("unknown")
        assert builder.get_settings() == StickerPromptBuilder().get_settings()

    def test_reset_restores_defaults(self):
        builder = StickerPromptBuilder().set_subject("x").apply_preset("playful").add_detail("d")
        builder.reset()

        settings = builder.get_settings()
        assert settings["style"] == "kawaii"
        assert settings["mood"] == "cheerful"
        assert settings["subject"] == ""
        assert settings["details"] == []


class TestIllustrationPrompt:
    """Tests for build_illustration_prompt."""

    def test_defaults(self):
        prompt = build_illustration_prompt("a dragon")

        assert prompt.startswith("A high quality anime-style illustration of a dragon.")
        assert "anime/manga art style" in prompt
        assert "The overall mood should be cheerful." in prompt
        assert "Include a detailed, atmospheric background" in prompt
        assert "Use a balanced composition" in prompt
        assert "highly detailed with professional quality rendering" in prompt
        assert prompt.endswith("artwork, or visual asset.")

    def test_literal_background_and_non_high_quality(self):
        prompt = build_illustration_prompt(
            "a boat", {"style": "watercolor", "background": "a misty lake", "quality": "medium"}
        )

        assert "watercolor art style" in prompt
        assert "The background should be a misty lake." in prompt
        assert "highly detailed" not in prompt

    def test_unknown_style_has_no_style_sentence(self):
        prompt = build_illustration_prompt("x", {"style": "cubist"})
        assert "The illustration features" not in prompt
