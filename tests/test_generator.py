"""Tests for PromptGenerator variable handling and substitution."""

import json
import re

import pytest

from nano_banana.errors import MissingRequiredVariablesError
from nano_banana.generator import PromptGenerator
from nano_banana.templates import SALES_PROMOTION, SIMPLE_PRODUCT, TemplateDefinition

PLACEHOLDER = re.compile(r"\{\{[^}]+\}\}")


def _template(body="{{a}} {{b}}", defaults=None, required=()):
    return TemplateDefinition(
        name="Test",
        description="test template",
        body=body,
        default_variables=defaults or {},
        required_variables=required,
    )


class TestVariables:
    """Tests for setting, merging and resetting variables."""

    def test_initialized_from_defaults(self):
        generator = PromptGenerator(SALES_PROMOTION)
        assert generator.get_all_variables() == dict(SALES_PROMOTION.default_variables)

    def test_set_variable_does_not_touch_template(self):
        generator = PromptGenerator(SALES_PROMOTION)
        generator.set_variable("brand_name", "Acme")

        assert generator.get_variable("brand_name") == "Acme"
        assert SALES_PROMOTION.default_variables["brand_name"] == "Lenovo"

    def test_set_variables_merges(self):
        generator = PromptGenerator(_template(defaults={"a": "1", "b": "2"}))
        generator.set_variables({"b": "two", "c": "3"})

        assert generator.get_all_variables() == {"a": "1", "b": "two", "c": "3"}

    def test_setters_chain(self):
        generator = PromptGenerator(_template())
        assert generator.set_variable("a", "x").set_variables({"b": "y"}) is generator

    def test_get_missing_variable(self):
        assert PromptGenerator(_template()).get_variable("nope") is None

    def test_reset_restores_defaults(self):
        generator = PromptGenerator(SALES_PROMOTION)
        generator.set_variables({"brand_name": "Acme", "extra": "x"})

        generator.reset_variables()

        assert generator.get_all_variables() == dict(SALES_PROMOTION.default_variables)


class TestValidation:
    """Tests for validate() and get_missing_required_variables()."""

    def test_defaults_validate(self):
        assert PromptGenerator(SALES_PROMOTION).validate() is True

    def test_empty_value_counts_as_missing(self):
        generator = PromptGenerator(SALES_PROMOTION).set_variable("main_headline", "")

        assert generator.validate() is False
        assert generator.get_missing_required_variables() == ["main_headline"]

    def test_missing_in_required_order(self):
        generator = PromptGenerator(_template(required=("c", "a", "b"))).set_variable("a", "set")
        assert generator.get_missing_required_variables() == ["c", "b"]

    def test_generate_raises_with_missing_keys(self):
        generator = PromptGenerator(SALES_PROMOTION).set_variables({"brand_name": "", "product_name": ""})

        with pytest.raises(MissingRequiredVariablesError) as excinfo:
            generator.generate()

        assert excinfo.value.missing == ["product_name", "brand_name"]
        assert excinfo.value.template == "Sales Promotion Banner"


class TestGenerate:
    """Tests for placeholder substitution."""

    def test_sales_promotion_example(self):
        prompt = (
            PromptGenerator(SALES_PROMOTION)
            .set_variables({
                "campaign_date": "8/28",
                "main_headline": "Sale",
                "product_name": "Widget",
                "brand_name": "Acme",
            })
            .generate()
        )

        assert prompt.count("Sale") == 1
        assert prompt.count("Widget") == 1
        assert prompt.count("8/28まで") == 1
        assert "今すぐAcme公式サイトへ" in prompt
        assert not PLACEHOLDER.search(prompt)

    @pytest.mark.parametrize("template", [SALES_PROMOTION, SIMPLE_PRODUCT])
    def test_no_placeholders_remain(self, template):
        generator = PromptGenerator(template)
        for key in template.required_variables:
            generator.set_variable(key, "value")

        assert not PLACEHOLDER.search(generator.generate())

    def test_every_occurrence_replaced(self):
        prompt = PromptGenerator(SIMPLE_PRODUCT).set_variable("product_name", "Widget").generate()
        assert prompt.count("Widget") == 2

    def test_values_not_substituted_recursively(self):
        generator = PromptGenerator(_template(body="{{b}} {{a}}", defaults={"b": "B", "a": "{{b}}"}))
        assert generator.generate() == "B {{b}}"

    def test_later_key_fills_placeholder_from_earlier_value(self):
        generator = PromptGenerator(_template(body="{{a}}", defaults={"a": "{{b}}", "b": "B"}))
        assert generator.generate() == "B"

    def test_unknown_placeholder_left_intact(self):
        assert PromptGenerator(_template(body="{{a}} {{z}}", defaults={"a": "A"})).generate() == "A {{z}}"


class TestJson:
    """Tests for JSON export/import."""

    def test_export_keeps_unicode(self):
        exported = PromptGenerator(SALES_PROMOTION).export_variables_as_json()

        assert "この夏、決断を！" in exported
        assert json.loads(exported) == dict(SALES_PROMOTION.default_variables)

    def test_import_merges(self):
        generator = PromptGenerator(_template(defaults={"a": "1", "b": "2"}))
        generator.import_variables_from_json('{"b": "json"}')

        assert generator.get_all_variables() == {"a": "1", "b": "json"}

    @pytest.mark.parametrize("payload", ["{not json", "[1, 2]", '"text"', ""])
    def test_import_ignores_malformed(self, payload):
        generator = PromptGenerator(_template(defaults={"a": "1"}))
        generator.import_variables_from_json(payload)

        assert generator.get_all_variables() == {"a": "1"}

    def test_show_variable_info(self):
        info = PromptGenerator(SIMPLE_PRODUCT).set_variable("brand_name", "").show_variable_info()

        assert info["template_name"] == "Simple Product Showcase"
        assert info["required_variables"] == ["product_name", "brand_name"]
        assert info["missing_variables"] == ["brand_name"]
