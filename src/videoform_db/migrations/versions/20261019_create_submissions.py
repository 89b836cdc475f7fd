"""Create the submissions table.

One row per submitted form: the answers as JSONB plus the technical fields
stamped by the server.

Revision ID: 20261019_submissions
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# revision identifiers, used by Alembic.
revision = "20261019_submissions"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "submissions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("session_id", sa.Text(), nullable=False),
        sa.Column(
            "answers",
            JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("client_submitted_at", sa.Text(), nullable=True),
        sa.Column("submitted_at", TIMESTAMP(timezone=True), nullable=False),
        sa.Column("remote_address", sa.Text(), nullable=False),
        sa.Column("user_agent", sa.Text(), nullable=False),
    )
    op.create_index("ix_submissions_session_id", "submissions", ["session_id"])
    op.create_index(
        "ix_submissions_submitted_at", "submissions", [sa.text("submitted_at DESC")]
    )
    op.create_index(
        "ix_submissions_answers_gin",
        "submissions",
        ["answers"],
        postgresql_using="gin",
    )


def downgrade() -> None:
    op.drop_index("ix_submissions_answers_gin", table_name="submissions")
    op.drop_index("ix_submissions_submitted_at", table_name="submissions")
    op.drop_index("ix_submissions_session_id", table_name="submissions")
    op.drop_table("submissions")
