"""In-memory stand-ins for the storage layer.

MockRepository implements the SubmissionRepository interface over a list
and returns real (transient) ``Submission`` ORM objects, so the code under
test still goes through ``Submission.to_record()``.
"""

import uuid
from datetime import datetime, timedelta, timezone

from videoform_db.models.submission import Submission

_RESERVED = ("id", "sessionId", "submittedAt", "remoteAddress", "userAgentString")


class MockRepository:
    """List-backed SubmissionRepository replacement."""

    def __init__(self):
        self.rows: list[Submission] = []
        # Monotonic fake clock so ordering by submitted_at is deterministic
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    async def insert(self, db, record, *, remote_address="unknown", user_agent="unknown"):
        session_id = record.get("sessionId")
        if not session_id:
            raise ValueError("sessionId is required")
        self._clock += timedelta(seconds=1)
        row = Submission(
            id=uuid.uuid4(),
            session_id=session_id,
            answers={k: v for k, v in record.items() if k not in _RESERVED},
            client_submitted_at=record.get("submittedAt"),
            submitted_at=self._clock,
            remote_address=remote_address,
            user_agent=user_agent,
        )
        self.rows.append(row)
        return row

    async def find_by_session(self, db, session_id):
        matches = [r for r in self.rows if r.session_id == session_id]
        if not matches:
            return None
        return max(matches, key=lambda r: r.submitted_at)

    async def list_recent(self, db, *, limit=50):
        return sorted(self.rows, key=lambda r: r.submitted_at, reverse=True)[:limit]
