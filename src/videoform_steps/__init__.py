"""videoform_steps — step-sequencing SDK for the video form.

Public API:
    StepRegistry          — loads the ordered step sequence from YAML
    StepSequencer         — state machine: gate, answers, progress, submission
    SubmissionClient      — posts the final answers to the storage endpoint
    render                — pure projection of sequencer state to a StepView
    merge                 — answer accumulator merge
    new_session_id        — per-tab opaque session identifier

Progress stores:
    ProgressStore         — ABC for the per-tab progress slot
    InMemoryProgressStore — dict-backed store
    FileProgressStore     — JSON-file-backed store

Errors:
    StepValidationError, SubmissionTransportError, ProgressCorruptionError,
    GateClosedError, SubmissionInProgressError
"""

from videoform_steps.accumulator import merge
from videoform_steps.client import SubmissionClient
from videoform_steps.errors import (
    GateClosedError,
    ProgressCorruptionError,
    StepValidationError,
    SubmissionInProgressError,
    SubmissionTransportError,
)
from videoform_steps.models.state import PersistedProgress, SequencerState
from videoform_steps.models.view import StepView
from videoform_steps.progress import (
    FileProgressStore,
    InMemoryProgressStore,
    ProgressStore,
)
from videoform_steps.registry import StepRegistry
from videoform_steps.renderer import render
from videoform_steps.sequencer import StepSequencer, new_session_id

__all__ = [
    # Core
    "StepRegistry",
    "StepSequencer",
    "SubmissionClient",
    "merge",
    "new_session_id",
    "render",
    # State / views
    "PersistedProgress",
    "SequencerState",
    "StepView",
    # Progress stores
    "FileProgressStore",
    "InMemoryProgressStore",
    "ProgressStore",
    # Errors
    "GateClosedError",
    "ProgressCorruptionError",
    "StepValidationError",
    "SubmissionInProgressError",
    "SubmissionTransportError",
]
