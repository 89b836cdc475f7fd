"""Step descriptor models for the video form.

Each step shows a video (``media_ref``) and collects at most one piece of
input:

    - info: no input, the user continues once the gate opens
    - choice: pick one option; picking it both answers and advances
    - text_input: free text, single line or multiline
    - contact_form: several named fields submitted together
    - completion: terminal screen, optionally with a booking link

The discriminated ``StepDescriptor`` union uses ``type`` as its discriminator
so Pydantic can deserialise YAML dicts directly into the correct variant.
Descriptors are frozen: the registry is static for the life of the process.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class BaseStep(BaseModel):
    """Fields shared by all step types."""

    model_config = ConfigDict(frozen=True)

    id: str
    media_ref: str
    question: Optional[str] = None

    @property
    def field_names(self) -> List[str]:
        """Answer keys this step can write.  Empty for non-collecting steps."""
        return []


# --- Shared option/field models ---

class ChoiceOption(BaseModel):
    """A selectable option with an id and display label."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str


class ContactField(BaseModel):
    """One input of a contact form.

    ``kind`` drives validation: ``email`` and ``phone`` values are checked
    against a format, ``text`` only against ``required``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    kind: Literal["text", "email", "phone"] = "text"
    placeholder: Optional[str] = None
    required: bool = False


# --- Step variants ---

class InfoStep(BaseStep):
    """Video only; advancing needs nothing but the continue gate."""

    type: Literal["info"] = "info"


class ChoiceStep(BaseStep):
    """Pick one option; the option id is stored under ``field_name``."""

    type: Literal["choice"] = "choice"
    options: List[ChoiceOption]
    field_name: str

    @property
    def field_names(self) -> List[str]:
        return [self.field_name]

    @property
    def option_ids(self) -> List[str]:
        return [o.id for o in self.options]


class TextInputStep(BaseStep):
    """Free-text answer stored trimmed under ``field_name``."""

    type: Literal["text_input"] = "text_input"
    field_name: str
    placeholder: Optional[str] = None
    multiline: bool = False

    @property
    def field_names(self) -> List[str]:
        return [self.field_name]


class ContactFormStep(BaseStep):
    """Several contact fields, merged atomically once all of them pass."""

    type: Literal["contact_form"] = "contact_form"
    fields: List[ContactField]

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]


class CompletionStep(BaseStep):
    """Terminal step.  ``external_booking_ref`` is a calendar/booking URL."""

    type: Literal["completion"] = "completion"
    title: str
    message: str
    external_booking_ref: Optional[str] = None


# Discriminated union: Pydantic picks the right type based on the "type" field.
StepDescriptor = Annotated[
    Union[InfoStep, ChoiceStep, TextInputStep, ContactFormStep, CompletionStep],
    Field(discriminator="type"),
]
