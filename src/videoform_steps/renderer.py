"""Step renderer — a pure projection from sequencer state to a ``StepView``.

The renderer keeps no state of its own.  Given the same state, registry and
inline errors it always produces the same view; the UI layer only draws it.
"""

from __future__ import annotations

from typing import Mapping

from videoform_steps.models.state import SequencerState
from videoform_steps.models.step import (
    BaseStep,
    ChoiceStep,
    CompletionStep,
    ContactFormStep,
    InfoStep,
    TextInputStep,
)
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
from videoform_steps.registry import StepRegistry


def _control_for(
    step: BaseStep,
    state: SequencerState,
    *,
    booking_url: str | None,
    errors: Mapping[str, str],
) -> StepControl:
    """Pick the interactive control for ``step``'s type."""
    disabled = not state.can_advance or state.submitting

    if isinstance(step, InfoStep):
        # The continue button only appears once the gate has opened
        return ContinueControl(visible=state.can_advance, disabled=state.submitting)
    if isinstance(step, ChoiceStep):
        return ChoiceControl(
            field_name=step.field_name,
            options=[{"id": o.id, "label": o.label} for o in step.options],
            disabled=disabled,
        )
    if isinstance(step, TextInputStep):
        return TextInputControl(
            field_name=step.field_name,
            placeholder=step.placeholder or "",
            multiline=step.multiline,
            disabled=disabled,
        )
    if isinstance(step, ContactFormStep):
        return ContactFormControl(
            fields=[f.model_dump() for f in step.fields],
            errors={k: v for k, v in errors.items() if k in step.field_names},
            disabled=disabled,
        )
    if isinstance(step, CompletionStep):
        return CompletionControl(
            title=step.title,
            message=step.message,
            booking_url=step.external_booking_ref or booking_url,
        )
    raise TypeError(f"Unhandled step type: {type(step).__name__}")


def render(
    state: SequencerState,
    registry: StepRegistry,
    *,
    booking_url: str | None = None,
    errors: Mapping[str, str] | None = None,
    notice: str | None = None,
) -> StepView:
    """Describe what to show for ``state``.

    Args:
        state: sequencer snapshot
        registry: the step sequence ``state.step_index`` points into
        booking_url: fallback booking link for the completion step
        errors: inline field errors from the last rejected input
        notice: blocking notice (e.g. failed submission)
    """
    step = registry[state.step_index]
    return StepView(
        step_id=step.id,
        index=state.step_index,
        total=len(registry),
        media=MediaView(
            src=step.media_ref,
            muted=not state.media_unmuted,
            question=step.question,
        ),
        control=_control_for(step, state, booking_url=booking_url, errors=errors or {}),
        notice=notice,
    )
