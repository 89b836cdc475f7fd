"""Submission endpoints — the HTTP side of the storage contract.

``POST /submissions`` is what the step sequencer's submission client calls
from the step before completion.  The two ``GET`` forms serve lookups by
session id and the list of recent submissions.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from videoform_db.repository import SubmissionRepository
from videoform_steps.models.submission import SubmissionAck

from videoform_server.config import DEFAULT_RECENT_LIMIT, MAX_RECENT_LIMIT
from videoform_server.dependencies import (
    get_db,
    get_remote_address,
    get_repository,
    get_user_agent,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["submissions"])


@router.post("/submissions")
async def create_submission(
    body: dict[str, Any] | None = Body(None),
    remote_address: str = Depends(get_remote_address),
    user_agent: str = Depends(get_user_agent),
    db: AsyncSession = Depends(get_db),
    repo: SubmissionRepository = Depends(get_repository),
) -> SubmissionAck:
    """Store one form submission.

    The body is the flat answers mapping plus ``sessionId`` and the
    client's ``submittedAt``.  The server stamps its own timestamp, the
    remote address, and the user agent.  Returns 400 on an empty body or
    a missing ``sessionId``.
    """
    if not body:
        raise HTTPException(status_code=400, detail="No data provided")

    row = await repo.insert(
        db, body, remote_address=remote_address, user_agent=user_agent,
    )
    logger.info("Stored submission %s for session %s", row.id, row.session_id)
    return SubmissionAck(success=True, id=str(row.id), message="Form submitted successfully")


@router.get("/submissions")
async def get_submissions(
    session_id: str | None = Query(None, alias="sessionId"),
    limit: int = Query(DEFAULT_RECENT_LIMIT, ge=1, le=MAX_RECENT_LIMIT),
    db: AsyncSession = Depends(get_db),
    repo: SubmissionRepository = Depends(get_repository),
) -> dict:
    """Look up one submission by ``sessionId``, or list the most recent.

    With ``sessionId``: ``{"submission": {...}}`` or 404.
    Without: ``{"submissions": [...]}``, newest first.
    """
    if session_id:
        row = await repo.find_by_session(db, session_id)
        if row is None:
            raise ValueError(f"Submission not found: sessionId={session_id}")
        return {"submission": row.to_record()}

    rows = await repo.list_recent(db, limit=limit)
    return {"submissions": [r.to_record() for r in rows]}
