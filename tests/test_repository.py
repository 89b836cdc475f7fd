"""SubmissionRepository and Submission model tests (no database).

The session is a MagicMock with an async ``flush``; these tests check what
the repository hands to the session, not SQL round trips.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from videoform_db.models.submission import Submission
from videoform_db.repository import SubmissionRepository
from videoform_server.viewer import display_value, to_view


@pytest.fixture
def db():
    session = MagicMock()
    session.flush = AsyncMock()
    return session


# =====================================================================
# Repository insert
# =====================================================================


@pytest.mark.asyncio
async def test_insert_separates_answers_from_technical_fields(db):
    repo = SubmissionRepository()
    row = await repo.insert(
        db,
        {
            "color": "red",
            "email": "a@b.co",
            "sessionId": "session_1",
            "submittedAt": "2026-01-01T00:00:00Z",
            "remoteAddress": "spoofed",
            "id": "spoofed",
        },
        remote_address="203.0.113.5",
        user_agent="Browser/1.0",
    )

    db.add.assert_called_once_with(row)
    db.flush.assert_awaited_once()
    assert row.session_id == "session_1"
    assert row.answers == {"color": "red", "email": "a@b.co"}
    assert row.client_submitted_at == "2026-01-01T00:00:00Z"
    assert row.remote_address == "203.0.113.5"
    assert row.user_agent == "Browser/1.0"
    assert row.submitted_at.tzinfo is not None


@pytest.mark.asyncio
@pytest.mark.parametrize("record", [{}, {"color": "red"}, {"sessionId": ""}, {"sessionId": 42}])
async def test_insert_requires_session_id(db, record):
    with pytest.raises(ValueError, match="sessionId is required"):
        await SubmissionRepository().insert(db, record)
    db.add.assert_not_called()


# =====================================================================
# Model → record → view
# =====================================================================


def _row(**overrides):
    fields = dict(
        id=uuid.UUID("12345678-1234-5678-1234-567812345678"),
        session_id="session_1",
        answers={"firstName": "Ana", "meta": {"a": [1, 2]}},
        client_submitted_at=None,
        submitted_at=datetime(2026, 2, 3, 4, 5, 6, tzinfo=timezone.utc),
        remote_address="unknown",
        user_agent="testclient",
    )
    fields.update(overrides)
    return Submission(**fields)


def test_to_record_flattens_answers():
    record = _row().to_record()
    assert record == {
        "firstName": "Ana",
        "meta": {"a": [1, 2]},
        "id": "12345678-1234-5678-1234-567812345678",
        "sessionId": "session_1",
        "submittedAt": "2026-02-03T04:05:06+00:00",
        "remoteAddress": "unknown",
        "userAgentString": "testclient",
    }


def test_to_record_includes_client_timestamp_when_known():
    record = _row(client_submitted_at="2026-02-03T04:05:00Z").to_record()
    assert record["clientSubmittedAt"] == "2026-02-03T04:05:00Z"


def test_technical_fields_win_over_answer_keys():
    record = _row(answers={"sessionId": "forged", "x": "y"}).to_record()
    assert record["sessionId"] == "session_1"


def test_view_splits_fields():
    view = to_view(_row().to_record())
    assert view.id == "12345678-1234-5678-1234-567812345678"
    assert view.user_agent == "testclient"
    assert [(f.key, f.value) for f in view.fields] == [
        ("firstName", "Ana"),
        ("meta", '{"a": [1, 2]}'),
    ]


def test_view_keeps_client_timestamp_out_of_answers():
    view = to_view(_row(client_submitted_at="2026-02-03T04:05:00Z").to_record())
    assert view.client_submitted_at == "2026-02-03T04:05:00Z"
    assert "clientSubmittedAt" not in [f.key for f in view.fields]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("text", "text"),
        (None, ""),
        (3, "3"),
        (["é", "b"], '["é", "b"]'),
    ],
)
def test_display_value(value, expected):
    assert display_value(value) == expected
