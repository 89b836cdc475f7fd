"""View models produced by the step renderer.

A ``StepView`` is a plain description of what the UI should show for a
given sequencer state: the media pane (video source, mute state, question
overlay) and exactly one interactive control.  The control union is
discriminated by ``kind`` so front-ends can dispatch on it.
"""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class MediaView(BaseModel):
    """Video pane with the question overlay."""

    src: str
    muted: bool
    question: Optional[str] = None


class ContinueControl(BaseModel):
    kind: Literal["continue"] = "continue"
    visible: bool
    disabled: bool


class ChoiceControl(BaseModel):
    kind: Literal["choice"] = "choice"
    field_name: str
    # [{id, label}] in descriptor order
    options: List[Dict[str, str]]
    disabled: bool


class TextInputControl(BaseModel):
    kind: Literal["text_input"] = "text_input"
    field_name: str
    placeholder: str = ""
    multiline: bool = False
    disabled: bool


class ContactFormControl(BaseModel):
    kind: Literal["contact_form"] = "contact_form"
    # [{name, label, kind, placeholder, required}]
    fields: List[Dict[str, object]]
    # Inline error messages keyed by field name
    errors: Dict[str, str] = Field(default_factory=dict)
    disabled: bool


class CompletionControl(BaseModel):
    kind: Literal["completion"] = "completion"
    title: str
    message: str
    booking_url: Optional[str] = None


StepControl = Annotated[
    Union[
        ContinueControl,
        ChoiceControl,
        TextInputControl,
        ContactFormControl,
        CompletionControl,
    ],
    Field(discriminator="kind"),
]


class StepView(BaseModel):
    """Everything the UI needs to draw one step."""

    step_id: str
    index: int
    total: int
    media: MediaView
    control: StepControl
    # Blocking notice (e.g. failed submission) to show above the control
    notice: Optional[str] = None
