"""Pure transition functions over :class:`SequencerState`.

Each function takes a state and returns a new one; none of them touch the
progress store, timers, or the network.  The sequencer composes them with
those side effects.
"""

from typing import Mapping

from videoform_steps.accumulator import merge
from videoform_steps.models.state import PersistedProgress, SequencerState


def enter_step(state: SequencerState, index: int) -> SequencerState:
    """Move to ``index`` with the gate closed and the video clock reset."""
    return state.model_copy(
        update={"step_index": index, "can_advance": False, "video_time": 0.0}
    )


def open_gate(state: SequencerState) -> SequencerState:
    return state.model_copy(update={"can_advance": True})


def merge_answers(state: SequencerState, patch: Mapping[str, str]) -> SequencerState:
    return state.model_copy(update={"answers": merge(state.answers, patch)})


def set_submitting(state: SequencerState, submitting: bool) -> SequencerState:
    return state.model_copy(update={"submitting": submitting})


def report_time(state: SequencerState, seconds: float) -> SequencerState:
    return state.model_copy(update={"video_time": max(0.0, seconds)})


def unmute(state: SequencerState) -> SequencerState:
    return state.model_copy(update={"media_unmuted": True})


def hydrate(progress: PersistedProgress | None) -> SequencerState:
    """Build the initial state from saved progress (or the default)."""
    if progress is None:
        return SequencerState()
    return SequencerState(
        step_index=progress.step_index, answers=dict(progress.answers)
    )


def to_progress(state: SequencerState) -> PersistedProgress:
    return PersistedProgress(step_index=state.step_index, answers=dict(state.answers))
