"""Form helper — moderate every text field of a submission in one call.

Usage with a task form:

    forms = FormModerator.create()

    errors = forms.validate_fields(
        {"title": data.title, "description": data.description},
        locale="bg",
    )
    if errors:
        for name, verdict in errors.items():
            form.add_error(name, translate(verdict.error))

    # Or keep the submission but mask the offending words
    safe = forms.censor_fields(data_dict, locale="bg")
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Mapping

from .moderator import Moderator, ModeratorConfig
from .types import DEFAULT_POLICY, ValidationPolicy, ValidationResult


@dataclass
class FormModerator:
    """Applies one moderator and policy to named form fields."""

    moderator: Moderator
    policy: ValidationPolicy = field(default=DEFAULT_POLICY)

    @classmethod
    def create(
        cls,
        *,
        config: ModeratorConfig | None = None,
        policy: ValidationPolicy | None = None,
    ) -> "FormModerator":
        """Factory — creates a moderator with the given config."""
        return cls(moderator=Moderator(config), policy=policy or DEFAULT_POLICY)

    def validate_fields(self, fields: Mapping[str, Any], locale: str | None = None) -> dict[str, ValidationResult]:
        """Failing fields only, keyed by field name.  Empty dict = all valid.

        Non-string values (numbers, None, uploads) are not moderated.
        """
        errors: dict[str, ValidationResult] = {}
        for name, value in fields.items():
            if not isinstance(value, str) or not value:
                continue
            verdict = self.moderator.validate(value, locale, self.policy)
            if not verdict.valid:
                errors[name] = verdict
        return errors

    def is_valid(self, fields: Mapping[str, Any], locale: str | None = None) -> bool:
        return not self.validate_fields(fields, locale)

    def censor_fields(self, fields: Mapping[str, Any], locale: str | None = None) -> dict[str, Any]:
        """Return a new mapping with string values censored.  Does NOT
        mutate the original.
        """
        out: dict[str, Any] = {}
        for name, value in fields.items():
            if isinstance(value, str) and value:
                out[name] = self.moderator.clean(value, locale)
            else:
                out[name] = value
        return out
