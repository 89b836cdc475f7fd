"""SubmissionClient — posts the accumulated answers to the storage endpoint.

The request body is the answers mapping merged with ``sessionId`` and a
client-observed ``submittedAt`` (ISO-8601, UTC).  The server stamps its own
timestamp, remote address and user agent.

The client never retries: retrying is the user's decision, driven by the
sequencer.  Unreachable endpoints and rejected payloads are reported the
same way, as :class:`SubmissionTransportError`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Mapping

import httpx
from pydantic import ValidationError

from videoform_steps.constants import SUBMIT_ENDPOINT, SUBMIT_TIMEOUT_SECONDS
from videoform_steps.errors import SubmissionTransportError
from videoform_steps.models.submission import SubmissionAck

logger = logging.getLogger(__name__)


def build_payload(
    answers: Mapping[str, str],
    session_id: str,
    submitted_at: datetime | None = None,
) -> dict[str, str]:
    """Serialize answers plus session metadata into the request body."""
    if submitted_at is None:
        submitted_at = datetime.now(timezone.utc)
    return {
        **answers,
        "sessionId": session_id,
        "submittedAt": submitted_at.isoformat(),
    }


class SubmissionClient:
    """Async HTTP client for ``POST /submissions``.

    Args:
        endpoint: full URL of the submissions endpoint
        http: optional shared ``httpx.AsyncClient``; when omitted the
            client opens one per call
        timeout: per-request timeout in seconds
    """

    def __init__(
        self,
        endpoint: str = SUBMIT_ENDPOINT,
        *,
        http: httpx.AsyncClient | None = None,
        timeout: float = SUBMIT_TIMEOUT_SECONDS,
    ) -> None:
        self.endpoint = endpoint
        self._http = http
        self._timeout = timeout

    async def submit(self, answers: Mapping[str, str], session_id: str) -> SubmissionAck:
        """Send one submission and return the server's acknowledgement.

        Raises:
            SubmissionTransportError: on a transport failure, a non-2xx
                status, a malformed endpoint URL, or a body that is not a
                successful acknowledgement.
        """
        payload = build_payload(answers, session_id)
        try:
            if self._http is not None:
                response = await self._http.post(
                    self.endpoint, json=payload, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as http:
                    response = await http.post(self.endpoint, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Submission for %s failed: %s", session_id, exc)
            raise SubmissionTransportError(f"Could not reach {self.endpoint}: {exc}") from exc

        if not response.is_success:
            logger.error(
                "Submission for %s rejected: HTTP %d", session_id, response.status_code
            )
            raise SubmissionTransportError(
                f"Submission rejected with HTTP {response.status_code}"
            )

        try:
            ack = SubmissionAck.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise SubmissionTransportError(f"Unexpected submission response: {exc}") from exc

        if not ack.success:
            logger.error("Submission for %s not accepted: %s", session_id, ack.message)
            raise SubmissionTransportError(
                f"Submission not accepted: {ack.message or 'no reason given'}"
            )

        logger.info("Submission for %s stored as %s", session_id, ack.id)
        return ack
