"""Public model re-exports for videoform_steps.

Consumers should import from ``videoform_steps.models`` rather than
reaching into sub-modules directly.
"""

# --- Steps ---
from videoform_steps.models.step import (
    BaseStep,
    ChoiceOption,
    ChoiceStep,
    CompletionStep,
    ContactField,
    ContactFormStep,
    InfoStep,
    StepDescriptor,
    TextInputStep,
)

# --- State ---
from videoform_steps.models.state import PersistedProgress, SequencerState

# --- Storage endpoint ---
from videoform_steps.models.submission import SubmissionAck

# --- Views ---
from videoform_steps.models.view import (
    ChoiceControl,
    CompletionControl,
    ContactFormControl,
    ContinueControl,
    MediaView,
    StepControl,
    StepView,
    TextInputControl,
)

__all__ = [
    # Steps
    "BaseStep",
    "ChoiceOption",
    "ChoiceStep",
    "CompletionStep",
    "ContactField",
    "ContactFormStep",
    "InfoStep",
    "StepDescriptor",
    "TextInputStep",
    # State
    "PersistedProgress",
    "SequencerState",
    # Storage endpoint
    "SubmissionAck",
    # Views
    "ChoiceControl",
    "CompletionControl",
    "ContactFormControl",
    "ContinueControl",
    "MediaView",
    "StepControl",
    "StepView",
    "TextInputControl",
]
