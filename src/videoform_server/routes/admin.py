"""Admin viewer endpoints — read-only view over recent submissions.

When ``ADMIN_API_KEY`` is configured every request must carry a matching
``X-Admin-Key`` header (401 if missing, 403 if wrong).  Without a
configured key the viewer is open, which is the local-development default.
"""

import hmac

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from videoform_db.repository import SubmissionRepository

from videoform_server.config import DEFAULT_RECENT_LIMIT, MAX_RECENT_LIMIT
from videoform_server.dependencies import get_db, get_repository
from videoform_server.viewer import SubmissionView, to_view

router = APIRouter(prefix="/admin", tags=["admin"])


# ------------------------------------------------------------------
# Auth dependency
# ------------------------------------------------------------------

async def require_admin_key(
    request: Request,
    x_admin_key: str | None = Header(None, alias="X-Admin-Key"),
) -> None:
    """Check ``X-Admin-Key`` against the configured admin key, if any."""
    expected: str | None = request.app.state.settings.admin_api_key
    if not expected:
        return
    if not x_admin_key:
        raise HTTPException(status_code=401, detail="X-Admin-Key header is required")
    # Constant-time comparison to prevent timing side-channels.
    if not hmac.compare_digest(x_admin_key, expected):
        raise HTTPException(status_code=403, detail="Invalid admin key")


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

async def _recent_views(
    db: AsyncSession, repo: SubmissionRepository, limit: int
) -> list[SubmissionView]:
    rows = await repo.list_recent(db, limit=limit)
    return [to_view(r.to_record()) for r in rows]


@router.get("/submissions", dependencies=[Depends(require_admin_key)])
async def list_submission_views(
    limit: int = Query(DEFAULT_RECENT_LIMIT, ge=1, le=MAX_RECENT_LIMIT),
    db: AsyncSession = Depends(get_db),
    repo: SubmissionRepository = Depends(get_repository),
) -> list[SubmissionView]:
    """Recent submissions split into technical fields and answers."""
    return await _recent_views(db, repo, limit)


@router.get("", response_class=HTMLResponse, dependencies=[Depends(require_admin_key)])
async def admin_page(
    request: Request,
    limit: int = Query(DEFAULT_RECENT_LIMIT, ge=1, le=MAX_RECENT_LIMIT),
    db: AsyncSession = Depends(get_db),
    repo: SubmissionRepository = Depends(get_repository),
) -> HTMLResponse:
    """HTML page listing recent submissions."""
    views = await _recent_views(db, repo, limit)
    return HTMLResponse(request.app.state.viewer.render_page(views))
