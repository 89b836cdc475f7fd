"""Sequencer state and its persisted subset.

``SequencerState`` is the single source of truth for the form.  It is
frozen; the sequencer replaces it wholesale through the pure transition
helpers in :mod:`videoform_steps.transitions`, so the renderer can treat
any state it is given as a snapshot.

``PersistedProgress`` is the slice written to the progress store.  Its
JSON shape (``{"stepIndex": ..., "answers": {...}}``) is camelCase because
the same payload is read by browser code.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class SequencerState(BaseModel):
    """Snapshot of the step sequencer.

    ``can_advance`` is false for the gate delay after every index change;
    ``submitting`` is true only while the final submission is in flight.
    ``video_time`` and ``media_unmuted`` mirror the video widget signals.
    """

    model_config = ConfigDict(frozen=True)

    step_index: int = Field(default=0, ge=0)
    answers: Dict[str, str] = Field(default_factory=dict)
    can_advance: bool = False
    submitting: bool = False
    video_time: float = 0.0
    media_unmuted: bool = False


class PersistedProgress(BaseModel):
    """In-progress state mirrored to the progress store."""

    model_config = ConfigDict(populate_by_name=True)

    step_index: int = Field(default=0, ge=0, alias="stepIndex")
    answers: Dict[str, str] = Field(default_factory=dict)
