"""Variable resolution and placeholder substitution for prompt templates."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from .errors import MissingRequiredVariablesError
from .templates import PromptTemplate

logger = logging.getLogger(__name__)


class PromptGenerator:
    """Fill a :class:`PromptTemplate` with variables and render it.

    The working variables start as a copy of the template defaults. Setters
    return ``self`` so calls can be chained::

        prompt = (
            PromptGenerator(registry.create("sales_promotion"))
            .set_variable("main_headline", "Sale")
            .set_variables({"product_name": "Widget", "brand_name": "Acme"})
            .generate()
        )
    """

    def __init__(self, template: PromptTemplate):
        self.template = template
        self._variables: Dict[str, str] = dict(template.default_variables)

    @property
    def template_name(self) -> str:
        return self.template.name

    @property
    def template_description(self) -> str:
        return self.template.description

    def set_variable(self, key: str, value: str) -> "PromptGenerator":
        self._variables[key] = value
        return self

    def set_variables(self, variables: Mapping[str, str]) -> "PromptGenerator":
        """Merge ``variables`` into the working set; other keys are untouched."""
        self._variables.update(variables)
        return self

    def get_variable(self, key: str) -> Optional[str]:
        return self._variables.get(key)

    def get_all_variables(self) -> Dict[str, str]:
        return dict(self._variables)

    def get_missing_required_variables(self) -> List[str]:
        """Return required keys that are absent or empty, in declared order."""
        return [key for key in self.template.required_variables if not self._variables.get(key)]

    def validate(self) -> bool:
        return not self.get_missing_required_variables()

    def generate(self) -> str:
        """Render the template body.

        Each ``{{key}}`` is replaced literally, one variable at a time in
        insertion order. Substituted values are not re-scanned for their own
        placeholders, but a later key still matches text produced by an earlier
        substitution.

        Raises:
            MissingRequiredVariablesError: If any required variable is unset or empty.
        """
        missing = self.get_missing_required_variables()
        if missing:
            raise MissingRequiredVariablesError(self.template_name, missing)

        text = self.template.body
        for key, value in self._variables.items():
            text = text.replace("{{" + key + "}}", str(value))
        return text

    def reset_variables(self) -> "PromptGenerator":
        self._variables = dict(self.template.default_variables)
        return self

    def export_variables_as_json(self) -> str:
        return json.dumps(self._variables, ensure_ascii=False, indent=4)

    def import_variables_from_json(self, text: str) -> "PromptGenerator":
        """Merge variables from a JSON object; anything else is ignored."""
        try:
            data: Any = json.loads(text)
        except (TypeError, ValueError) as exc:
            logger.debug("Ignoring malformed variable JSON: %s", exc)
            return self
        if not isinstance(data, dict):
            logger.debug("Ignoring variable JSON that is not an object: %s", type(data).__name__)
            return self
        return self.set_variables(data)

    def show_variable_info(self) -> Dict[str, Any]:
        """Summarize the template and the current variable state."""
        return {
            "template_name": self.template_name,
            "description": self.template_description,
            "required_variables": list(self.template.required_variables),
            "current_variables": self.get_all_variables(),
            "missing_variables": self.get_missing_required_variables(),
        }


__all__ = ["PromptGenerator"]
