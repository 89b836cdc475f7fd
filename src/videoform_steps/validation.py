"""Per-step input validation, applied before anything reaches the accumulator.

Each ``validate_*`` function either returns the patch to merge or raises
:class:`StepValidationError`.  Nothing is merged for a step until its whole
input passes.
"""

from __future__ import annotations

import re
from typing import Mapping

from videoform_steps.constants import (
    EMPTY_TEXT_MESSAGE,
    INVALID_EMAIL_MESSAGE,
    INVALID_PHONE_MESSAGE,
    REQUIRED_FIELD_MESSAGE,
    UNKNOWN_OPTION_MESSAGE,
)
from videoform_steps.errors import StepValidationError
from videoform_steps.models.step import (
    ChoiceStep,
    ContactField,
    ContactFormStep,
    TextInputStep,
)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[\d\s+()-]+$")


def validate_choice(step: ChoiceStep, value: str) -> dict[str, str]:
    """Any option id declared by the step is valid; nothing else is."""
    if value not in step.option_ids:
        raise StepValidationError(step.field_name, UNKNOWN_OPTION_MESSAGE)
    return {step.field_name: value}


def validate_text(step: TextInputStep, value: str) -> dict[str, str]:
    """Reject empty or whitespace-only text; store the trimmed value."""
    trimmed = (value or "").strip()
    if not trimmed:
        raise StepValidationError(step.field_name, EMPTY_TEXT_MESSAGE)
    return {step.field_name: trimmed}


def check_contact_field(field: ContactField, value: str) -> str | None:
    """Return the error message for one field, or None if it passes.

    Format checks only run on non-empty values, so an empty optional
    email/phone field is accepted.
    """
    if field.required and not value.strip():
        return REQUIRED_FIELD_MESSAGE
    if field.kind == "email" and value and not EMAIL_RE.match(value):
        return INVALID_EMAIL_MESSAGE
    if field.kind == "phone" and value and not PHONE_RE.match(value):
        return INVALID_PHONE_MESSAGE
    return None


def validate_contact(step: ContactFormStep, values: Mapping[str, str]) -> dict[str, str]:
    """Validate every declared field; raise with the first failure.

    Keys not declared by the step are dropped; missing keys count as empty.
    """
    errors: dict[str, str] = {}
    patch: dict[str, str] = {}
    for field in step.fields:
        value = values.get(field.name) or ""
        error = check_contact_field(field, value)
        if error:
            errors[field.name] = error
        else:
            patch[field.name] = value

    if errors:
        first = next(iter(errors))
        raise StepValidationError(first, errors[first], errors)
    return patch
