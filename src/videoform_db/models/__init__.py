"""ORM models for videoform_db."""

from videoform_db.models.base import Base
from videoform_db.models.submission import Submission

__all__ = ["Base", "Submission"]
