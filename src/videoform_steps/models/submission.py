"""Models exchanged with the storage endpoint."""

from typing import Optional

from pydantic import BaseModel


class SubmissionAck(BaseModel):
    """Success body returned by ``POST /submissions``."""

    success: bool = True
    id: str
    message: Optional[str] = None
