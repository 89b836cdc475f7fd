"""Input validation and answer accumulator tests.

Nothing reaches the accumulator unless its validator accepts it, and the
accumulator itself only ever adds or overwrites keys.
"""

import pytest

from videoform_steps.accumulator import merge
from videoform_steps.errors import StepValidationError
from videoform_steps.models.step import ChoiceStep, ContactFormStep, TextInputStep
from videoform_steps.validation import (
    check_contact_field,
    validate_choice,
    validate_contact,
    validate_text,
)


@pytest.fixture
def choice():
    return ChoiceStep(
        id="color",
        media_ref="/v.mp4",
        field_name="color",
        options=[{"id": "red", "label": "Red"}, {"id": "blue", "label": "Blue"}],
    )


@pytest.fixture
def text():
    return TextInputStep(id="why", media_ref="/v.mp4", field_name="why")


@pytest.fixture
def contact():
    return ContactFormStep(
        id="contact",
        media_ref="/v.mp4",
        fields=[
            {"name": "firstName", "label": "Prénom", "required": True},
            {"name": "email", "label": "Email", "kind": "email", "required": True},
            {"name": "phone", "label": "Téléphone", "kind": "phone"},
        ],
    )


# =====================================================================
# Accumulator
# =====================================================================


def test_merge_overwrites_and_keeps():
    assert merge({"a": "1", "b": "2"}, {"b": "3", "c": "4"}) == {
        "a": "1",
        "b": "3",
        "c": "4",
    }


def test_merge_is_idempotent():
    once = merge({"a": "1"}, {"b": "2"})
    assert merge(once, {"b": "2"}) == once


def test_merge_never_deletes_or_mutates():
    existing = {"a": "1"}
    patch = {}
    result = merge(existing, patch)
    assert result == {"a": "1"}
    assert result is not existing
    assert existing == {"a": "1"}
    assert patch == {}


# =====================================================================
# Choice & text
# =====================================================================


def test_choice_accepts_declared_option(choice):
    assert validate_choice(choice, "blue") == {"color": "blue"}


def test_choice_rejects_unknown_option(choice):
    with pytest.raises(StepValidationError) as exc_info:
        validate_choice(choice, "green")
    assert exc_info.value.field == "color"
    assert exc_info.value.errors == {"color": "Option inconnue"}


def test_text_is_trimmed(text):
    assert validate_text(text, "  hello world \n") == {"why": "hello world"}


@pytest.mark.parametrize("value", ["", "   ", "\n\t"])
def test_blank_text_is_rejected(text, value):
    with pytest.raises(StepValidationError) as exc_info:
        validate_text(text, value)
    assert exc_info.value.message == "Veuillez saisir une réponse"


# =====================================================================
# Contact form
# =====================================================================


def test_contact_valid_values(contact):
    patch = validate_contact(
        contact,
        {"firstName": "Ana", "email": "ana@example.com", "phone": "+33 (0)6 12-34"},
    )
    assert patch == {
        "firstName": "Ana",
        "email": "ana@example.com",
        "phone": "+33 (0)6 12-34",
    }


def test_contact_optional_empty_phone_is_kept_empty(contact):
    patch = validate_contact(contact, {"firstName": "Ana", "email": "a@b.co"})
    assert patch["phone"] == ""


def test_contact_drops_undeclared_keys(contact):
    patch = validate_contact(
        contact, {"firstName": "Ana", "email": "a@b.co", "extra": "nope"}
    )
    assert "extra" not in patch


@pytest.mark.parametrize(
    "email", ["plain", "a@b", "a @b.co", "@b.co", "a@.co x"]
)
def test_contact_rejects_bad_email(contact, email):
    with pytest.raises(StepValidationError) as exc_info:
        validate_contact(contact, {"firstName": "Ana", "email": email})
    assert exc_info.value.field == "email"
    assert exc_info.value.message == "Email invalide"


def test_contact_rejects_letters_in_phone(contact):
    with pytest.raises(StepValidationError) as exc_info:
        validate_contact(
            contact, {"firstName": "Ana", "email": "a@b.co", "phone": "06 AB"}
        )
    assert exc_info.value.field == "phone"


def test_contact_reports_first_failure_in_form_order(contact):
    with pytest.raises(StepValidationError) as exc_info:
        validate_contact(contact, {"firstName": " ", "email": "", "phone": "x"})
    err = exc_info.value
    assert err.field == "firstName"
    assert err.errors == {
        "firstName": "Ce champ est requis",
        "email": "Ce champ est requis",
        "phone": "Numéro de téléphone invalide",
    }


def test_required_check_runs_before_format(contact):
    email_field = contact.fields[1]
    assert check_contact_field(email_field, "") == "Ce champ est requis"
    assert check_contact_field(email_field, "x") == "Email invalide"
    assert check_contact_field(contact.fields[2], "") is None
