"""StepSequencer — the state machine that drives the video form.

The sequencer owns the :class:`SequencerState`, the continue-gate timer and
the submission-in-flight flag.  It reacts to one event at a time on a single
asyncio loop:

    gate timer fires        -> can_advance = True
    user continues (info)   -> advance
    user answers            -> validate, merge, persist, maybe submit, advance
    submission returns      -> clear progress and advance, or keep the step

Index ``N-1`` is always the completion step.  Reaching it from ``N-2``
requires a confirmed submission of every accumulated answer; a failed
submission leaves the user on ``N-2`` with their answers intact so they can
retry.

Usage::

    registry = StepRegistry()
    registry.load()
    sequencer = StepSequencer(
        registry,
        session_id=new_session_id(),
        client=SubmissionClient("https://example.test/api/v1/submissions"),
    )
    async with sequencer:
        await sequencer.advance()                    # info step
        await sequencer.submit_answer("color", "red")
        view = sequencer.view()
"""

from __future__ import annotations

import logging
import secrets
import string
import time
from typing import Mapping, Protocol

from videoform_steps.constants import (
    BOOKING_URL,
    GATE_DELAY_SECONDS,
    SUBMISSION_FAILED_NOTICE,
)
from videoform_steps.errors import (
    GateClosedError,
    StepValidationError,
    SubmissionInProgressError,
    SubmissionTransportError,
)
from videoform_steps.gate import GateTimer
from videoform_steps.models.state import SequencerState
from videoform_steps.models.step import (
    BaseStep,
    ChoiceStep,
    CompletionStep,
    ContactFormStep,
    InfoStep,
    TextInputStep,
)
from videoform_steps.models.submission import SubmissionAck
from videoform_steps.models.view import StepView
from videoform_steps.progress import InMemoryProgressStore, ProgressStore
from videoform_steps.registry import StepRegistry
from videoform_steps.renderer import render
from videoform_steps.transitions import (
    enter_step,
    hydrate,
    merge_answers,
    open_gate,
    report_time,
    set_submitting,
    to_progress,
    unmute,
)
from videoform_steps.validation import validate_choice, validate_contact, validate_text

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def new_session_id() -> str:
    """Generate an opaque per-tab session id: ``session_<epoch-ms>_<9 chars>``."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


class Submitter(Protocol):
    """Anything that can deliver the final answers (normally SubmissionClient)."""

    async def submit(self, answers: Mapping[str, str], session_id: str) -> SubmissionAck:
        ...


class StepSequencer:
    """Drives one form session over a :class:`StepRegistry`.

    Args:
        registry: the loaded step sequence
        session_id: opaque id sent with the submission; stable for the
            lifetime of this instance
        client: submitter called once, from the step before completion
        progress_store: where in-progress state is mirrored; defaults to
            a fresh in-memory store
        gate_delay: seconds the continue gate stays closed after each
            index change
        booking_url: fallback booking link for the completion screen
    """

    def __init__(
        self,
        registry: StepRegistry,
        *,
        session_id: str,
        client: Submitter,
        progress_store: ProgressStore | None = None,
        gate_delay: float = GATE_DELAY_SECONDS,
        booking_url: str | None = BOOKING_URL,
    ) -> None:
        self._registry = registry
        self.session_id = session_id
        self._client = client
        self._progress = progress_store if progress_store is not None else InMemoryProgressStore()
        self._gate = GateTimer(gate_delay)
        self._booking_url = booking_url

        # Set once the storage endpoint acknowledged the submission
        self.submission_id: str | None = None
        # Blocking notice for the UI (failed submission)
        self.notice: str | None = None
        # Inline field errors from the last rejected input
        self.errors: dict[str, str] = {}

        self._state = self.initialize()

    # ==================================================================
    # Lifecycle
    # ==================================================================

    def initialize(self) -> SequencerState:
        """Hydrate state from the progress store, or start at step 0.

        Saved progress pointing past the end of the registry is treated
        like corrupt progress.  The resulting state is written back so the
        store always mirrors the sequencer.
        """
        progress = self._progress.load()
        if progress is not None and progress.step_index > self._registry.last_index:
            logger.warning(
                "Ignoring saved progress for %s: step %d out of range (0-%d)",
                self.session_id,
                progress.step_index,
                self._registry.last_index,
            )
            progress = None
        if progress is not None:
            logger.info(
                "Restored progress for %s at step %d (%d answers)",
                self.session_id,
                progress.step_index,
                len(progress.answers),
            )
        self._state = hydrate(progress)
        self._persist()
        return self._state

    def start(self) -> None:
        """Enter the current step.  Must run inside the event loop."""
        self.on_enter_step(self._state.step_index)

    def close(self) -> None:
        """Cancel the pending gate timer."""
        self._gate.cancel()

    async def __aenter__(self) -> StepSequencer:
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    # ==================================================================
    # Read API
    # ==================================================================

    @property
    def state(self) -> SequencerState:
        return self._state

    @property
    def current_step(self) -> BaseStep:
        return self._registry[self._state.step_index]

    @property
    def is_complete(self) -> bool:
        return self._state.step_index == self._registry.last_index

    def view(self) -> StepView:
        """Project the current state into a renderable view."""
        return render(
            self._state,
            self._registry,
            booking_url=self._booking_url,
            errors=self.errors,
            notice=self.notice,
        )

    # ==================================================================
    # Transitions
    # ==================================================================

    def on_enter_step(self, index: int) -> None:
        """Close the gate for ``index`` and arm a fresh timer to reopen it.

        Arming cancels the previous timer, so a timer left over from a
        step the user already left never opens the gate.

        Raises ``ValueError`` for an index outside the registry; the state
        and saved progress are left untouched.
        """
        if not 0 <= index <= self._registry.last_index:
            raise ValueError(
                f"Step index {index} out of range (0-{self._registry.last_index})"
            )
        self._state = enter_step(self._state, index)
        self.errors = {}
        self._gate.arm(lambda: self._open_gate(index))
        self._persist()
        logger.debug("%s entered step %d (%s)", self.session_id, index, self.current_step.id)

    def _open_gate(self, index: int) -> None:
        if self._state.step_index != index:
            return
        self._state = open_gate(self._state)

    def _advance(self) -> None:
        """Move one step forward, clamped to the completion step."""
        if self.is_complete:
            return
        self.on_enter_step(self._state.step_index + 1)

    async def advance(self) -> SequencerState:
        """Continue past an info step once the gate is open.

        A no-op on the completion step.  If the info step is the one before
        completion, the answers are submitted first, like any other step in
        that position.
        """
        step = self.current_step
        if isinstance(step, CompletionStep):
            return self._state
        if not isinstance(step, InfoStep):
            raise ValueError(
                f"advance() is only valid during info steps, current step "
                f"'{step.id}' is {step.type}"
            )
        self._check_ready()
        if self._state.step_index == self._registry.penultimate_index:
            await self._submit()
        self._advance()
        return self._state

    async def submit_answer(self, field_name: str, value: str) -> SequencerState:
        """Answer the current choice or text-input step.

        Raises:
            StepValidationError: the value is not acceptable for the step;
                nothing is merged
            SubmissionTransportError: this was the step before completion
                and the storage endpoint failed; answers stay merged and
                the step does not change
        """
        step = self._check_ready()
        if not isinstance(step, (ChoiceStep, TextInputStep)):
            raise ValueError(
                f"submit_answer() is only valid during choice or text_input steps, "
                f"current step '{step.id}' is {step.type}"
            )
        if field_name != step.field_name:
            raise ValueError(
                f"Step '{step.id}' collects '{step.field_name}', not '{field_name}'"
            )
        try:
            if isinstance(step, ChoiceStep):
                patch = validate_choice(step, value)
            else:
                patch = validate_text(step, value)
        except StepValidationError as exc:
            self.errors = exc.errors
            raise
        return await self._commit(patch)

    async def submit_contact(self, values: Mapping[str, str]) -> SequencerState:
        """Answer the current contact-form step with all of its fields at once.

        Every field is validated before any of them is merged; on failure
        the first offending field (in form order) is reported.
        """
        step = self._check_ready()
        if not isinstance(step, ContactFormStep):
            raise ValueError(
                f"submit_contact() is only valid during contact_form steps, "
                f"current step '{step.id}' is {step.type}"
            )
        try:
            patch = validate_contact(step, values)
        except StepValidationError as exc:
            self.errors = exc.errors
            raise
        return await self._commit(patch)

    def report_time_update(self, seconds: float) -> None:
        """Record the playback position reported by the video widget."""
        self._state = report_time(self._state, seconds)

    def signal_unmute(self) -> None:
        """The user unmuted the video; later steps start with sound."""
        self._state = unmute(self._state)

    # ==================================================================
    # Internals
    # ==================================================================

    def _check_ready(self) -> BaseStep:
        """Return the current step if it may accept input, else raise."""
        if self._state.submitting:
            raise SubmissionInProgressError(
                f"Submission already in progress for {self.session_id}"
            )
        step = self.current_step
        if isinstance(step, CompletionStep):
            raise ValueError("Input is not valid on the completion step")
        if not self._state.can_advance:
            raise GateClosedError(f"Step '{step.id}' is not ready to continue yet")
        return step

    async def _commit(self, patch: Mapping[str, str]) -> SequencerState:
        self.errors = {}
        self._state = merge_answers(self._state, patch)
        self._persist()
        if self._state.step_index == self._registry.penultimate_index:
            await self._submit()
        self._advance()
        return self._state

    async def _submit(self) -> None:
        """Send every accumulated answer; on success forget saved progress."""
        self._state = set_submitting(self._state, True)
        self.notice = None
        try:
            ack = await self._client.submit(dict(self._state.answers), self.session_id)
        except SubmissionTransportError:
            logger.warning("Submission failed for %s; waiting for retry", self.session_id)
            self.notice = SUBMISSION_FAILED_NOTICE
            raise
        finally:
            self._state = set_submitting(self._state, False)

        self.submission_id = ack.id
        self._progress.clear()
        logger.info("Session %s submitted (id=%s)", self.session_id, ack.id)

    def _persist(self) -> None:
        # After a confirmed submission the store stays empty
        if self.submission_id is not None:
            return
        self._progress.save(to_progress(self._state))
