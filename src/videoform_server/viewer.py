"""Admin viewer — generic projection of stored submissions.

The set of answer fields depends on the path each user took, so the viewer
does not know them in advance.  It shows the technical fields separately
and every other key as a key/value pair; nested objects are shown as their
JSON text.

``SubmissionViewer`` renders the HTML page with Jinja2; the JSON endpoint
uses :func:`to_view` directly.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import jinja2
from pydantic import BaseModel

from videoform_steps.constants import TECHNICAL_FIELDS

# Stored alongside the technical fields; never an answer
CLIENT_TIMESTAMP_FIELD = "clientSubmittedAt"
_NON_ANSWER_FIELDS = (*TECHNICAL_FIELDS, CLIENT_TIMESTAMP_FIELD)


class FieldEntry(BaseModel):
    key: str
    value: str


class SubmissionView(BaseModel):
    """One submission as the admin viewer shows it."""

    id: str | None = None
    session_id: str | None = None
    submitted_at: str | None = None
    client_submitted_at: str | None = None
    remote_address: str | None = None
    user_agent: str | None = None
    fields: list[FieldEntry]


def display_value(value: Any) -> str:
    """Text for one answer value; objects and lists become JSON."""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    if value is None:
        return ""
    return str(value)


def to_view(record: Mapping[str, Any]) -> SubmissionView:
    """Split a flat submission record into technical fields and answers."""
    return SubmissionView(
        id=record.get("id"),
        session_id=record.get("sessionId"),
        submitted_at=record.get("submittedAt"),
        client_submitted_at=record.get(CLIENT_TIMESTAMP_FIELD),
        remote_address=record.get("remoteAddress"),
        user_agent=record.get("userAgentString"),
        fields=[
            FieldEntry(key=key, value=display_value(value))
            for key, value in record.items()
            if key not in _NON_ANSWER_FIELDS
        ],
    )


class SubmissionViewer:
    """Jinja2-based HTML renderer for the admin page.

    Args:
        template_dir: optional override for the template directory.
            Defaults to ``templates/`` next to this module.
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "templates"
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=jinja2.select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_page(self, views: list[SubmissionView]) -> str:
        template = self._env.get_template("admin.html")
        return template.render(submissions=views, total=len(views))
