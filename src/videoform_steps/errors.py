"""Exception types raised by the step SDK.

Validation and gating problems subclass ``ValueError`` so the server's
global handlers map them to 400 like any other bad input.  Transport
failures are runtime errors: the request was fine, the endpoint was not.
"""

from __future__ import annotations


class StepValidationError(ValueError):
    """User input rejected before it reaches the answer accumulator.

    ``field`` names the first offending field in descriptor order and
    ``errors`` maps every offending field to its message, so the UI can
    render them inline.
    """

    def __init__(self, field: str, message: str, errors: dict[str, str] | None = None) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.errors = errors if errors is not None else {field: message}


class SubmissionTransportError(RuntimeError):
    """The storage endpoint could not be reached or rejected the payload."""


class ProgressCorruptionError(ValueError):
    """Stored progress could not be decoded.  Never escapes ``load()``."""


class GateClosedError(ValueError):
    """The continue gate is still closed for the current step."""


class SubmissionInProgressError(ValueError):
    """A submission is already in flight for this sequencer."""
