"""Async repository for Submission — the storage contract.

All public methods accept an ``AsyncSession`` so the caller controls
transaction boundaries.  Methods ``flush()`` but never ``commit()``.

The repository does not validate answers: whatever mapping the client sent
is stored.  It only separates the technical fields from the answers and
stamps the server-side ones.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from videoform_db.models.submission import Submission

DEFAULT_RECENT_LIMIT = 50

# Keys the client may send that are not answers.  ``submittedAt`` from the
# client is kept as client_submitted_at; the others are always server-owned.
_RESERVED_KEYS = ("id", "sessionId", "submittedAt", "remoteAddress", "userAgentString")


class SubmissionRepository:
    """Async read/write operations on the ``submissions`` table."""

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def insert(
        self,
        db: AsyncSession,
        record: Mapping[str, Any],
        *,
        remote_address: str = "unknown",
        user_agent: str = "unknown",
    ) -> Submission:
        """Store a client payload and return the new row.

        ``record`` must carry a non-empty ``sessionId``; every key that is
        not a technical field is stored as an answer.  The caller must
        ``await db.commit()`` to persist.
        """
        session_id = record.get("sessionId")
        if not session_id or not isinstance(session_id, str):
            raise ValueError("sessionId is required")

        client_ts = record.get("submittedAt")
        answers = {k: v for k, v in record.items() if k not in _RESERVED_KEYS}

        row = Submission(
            session_id=session_id,
            answers=answers,
            client_submitted_at=str(client_ts) if client_ts is not None else None,
            submitted_at=datetime.now(timezone.utc),
            remote_address=remote_address,
            user_agent=user_agent,
        )
        db.add(row)
        await db.flush()  # Populate id
        return row

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def find_by_session(
        self, db: AsyncSession, session_id: str
    ) -> Submission | None:
        """Return the newest submission for ``session_id``, if any."""
        stmt = (
            select(Submission)
            .where(Submission.session_id == session_id)
            .order_by(Submission.submitted_at.desc())
            .limit(1)
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_recent(
        self, db: AsyncSession, *, limit: int = DEFAULT_RECENT_LIMIT
    ) -> list[Submission]:
        """List submissions, newest ``submitted_at`` first."""
        stmt = (
            select(Submission)
            .order_by(Submission.submitted_at.desc())
            .limit(limit)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())
