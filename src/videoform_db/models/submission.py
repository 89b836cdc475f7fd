"""Submission ORM model — one row per submitted form.

Answers are kept in a single JSONB column: the set of fields depends on the
path the user took through the form, so there is no fixed schema to map
to columns.  The technical fields stamped by the server get their own
columns.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Index, Text, text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from videoform_db.models.base import Base


class Submission(Base):
    """A stored form submission.

    ``session_id`` is not unique: a client that retried after a lost
    response may have written twice, and lookups return the newest row.
    """

    __tablename__ = "submissions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Opaque per-tab id generated by the client
    session_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    # Flat {field_name: value} mapping as sent by the client
    answers: Mapped[dict] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'{}'::jsonb"),
    )

    # Timestamp the client observed when it sent the request (ISO-8601 text)
    client_submitted_at: Mapped[str | None] = mapped_column(Text, nullable=True)

    # --- Stamped by the server ---
    submitted_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    remote_address: Mapped[str] = mapped_column(Text, nullable=False, default="unknown")
    user_agent: Mapped[str] = mapped_column(Text, nullable=False, default="unknown")

    __table_args__ = (
        # listRecent sorts on submitted_at
        Index("ix_submissions_submitted_at", text("submitted_at DESC")),
        Index("ix_submissions_answers_gin", "answers", postgresql_using="gin"),
    )

    def to_record(self) -> dict[str, Any]:
        """Flatten into the wire shape: answers plus the technical fields."""
        record: dict[str, Any] = dict(self.answers or {})
        if self.client_submitted_at is not None:
            record["clientSubmittedAt"] = self.client_submitted_at
        record.update(
            {
                "id": str(self.id),
                "sessionId": self.session_id,
                "submittedAt": self.submitted_at.isoformat(),
                "remoteAddress": self.remote_address,
                "userAgentString": self.user_agent,
            }
        )
        return record

    def __repr__(self) -> str:
        return (
            f"<Submission(id={self.id!s}, session={self.session_id!r}, "
            f"fields={len(self.answers or {})})>"
        )
