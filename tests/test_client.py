"""SubmissionClient tests against an in-process httpx.MockTransport.

Every failure the endpoint can produce (unreachable, malformed URL,
non-2xx, unreadable or negative acknowledgement) must surface as
``SubmissionTransportError`` so the sequencer can show its notice.
"""

import json
from datetime import datetime, timezone

import httpx
import pytest

from videoform_steps.client import SubmissionClient, build_payload
from videoform_steps.errors import SubmissionTransportError

ENDPOINT = "http://storage.test/api/v1/submissions"


def _client(handler):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return http, SubmissionClient(ENDPOINT, http=http)


# =====================================================================
# Payload
# =====================================================================


class TestPayload:
    """Request body shape."""

    def test_build_payload_flattens_answers(self):
        """Answers sit at the top level next to sessionId and submittedAt."""
        ts = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        payload = build_payload({"color": "red"}, "session_1", ts)
        assert payload == {
            "color": "red",
            "sessionId": "session_1",
            "submittedAt": "2026-03-01T12:00:00+00:00",
        }

    @pytest.mark.asyncio
    async def test_submit_posts_payload_and_returns_ack(self):
        """A 200 with a success body yields the parsed acknowledgement."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"success": True, "id": "abc", "message": "Form submitted successfully"},
            )

        http, client = _client(handler)
        async with http:
            ack = await client.submit({"color": "red", "email": "a@b.co"}, "session_1")

        assert ack.success is True
        assert ack.id == "abc"
        assert len(seen) == 1, "Client must not retry on its own"
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == ENDPOINT
        body = json.loads(request.content)
        assert body["color"] == "red"
        assert body["email"] == "a@b.co"
        assert body["sessionId"] == "session_1"
        assert "submittedAt" in body


# =====================================================================
# Failures
# =====================================================================


class TestFailures:
    """Every failure mode maps to SubmissionTransportError."""

    @pytest.mark.asyncio
    async def test_server_error(self):
        http, client = _client(lambda request: httpx.Response(500, json={"detail": "boom"}))
        async with http:
            with pytest.raises(SubmissionTransportError, match="HTTP 500"):
                await client.submit({"a": "b"}, "s")

    @pytest.mark.asyncio
    async def test_bad_request(self):
        http, client = _client(
            lambda request: httpx.Response(400, json={"detail": "No data provided"})
        )
        async with http:
            with pytest.raises(SubmissionTransportError):
                await client.submit({}, "s")

    @pytest.mark.asyncio
    async def test_unreachable_endpoint(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        http, client = _client(handler)
        async with http:
            with pytest.raises(SubmissionTransportError, match="Could not reach"):
                await client.submit({"a": "b"}, "s")

    @pytest.mark.asyncio
    async def test_invalid_url(self):
        """httpx.InvalidURL is not an HTTPError subclass but is still a transport failure."""
        def handler(request):
            raise httpx.InvalidURL("Invalid port: 'abc'")

        http, client = _client(handler)
        async with http:
            with pytest.raises(SubmissionTransportError, match="Could not reach"):
                await client.submit({"a": "b"}, "s")

    @pytest.mark.asyncio
    async def test_malformed_ack(self):
        http, client = _client(lambda request: httpx.Response(200, text="<html>ok</html>"))
        async with http:
            with pytest.raises(SubmissionTransportError, match="Unexpected"):
                await client.submit({"a": "b"}, "s")

    @pytest.mark.asyncio
    async def test_negative_ack(self):
        """A 200 whose body says success=false is not a stored submission."""
        http, client = _client(
            lambda request: httpx.Response(
                200, json={"success": False, "id": "x", "message": "quota exceeded"}
            )
        )
        async with http:
            with pytest.raises(SubmissionTransportError, match="quota exceeded"):
                await client.submit({"a": "b"}, "s")
