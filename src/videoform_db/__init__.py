"""videoform_db — PostgreSQL persistence for form submissions.

This package provides the ORM model, async engine factory, and repository
behind the storage contract: insert a submission, find it by session id,
list the most recent ones.  It is consumed by the FastAPI server.
"""

from videoform_db.engine import get_engine, get_session_factory
from videoform_db.models.submission import Submission
from videoform_db.repository import SubmissionRepository

__all__ = [
    "Submission",
    "get_engine",
    "get_session_factory",
    "SubmissionRepository",
]
