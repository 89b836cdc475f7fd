"""Progress store — write-through slot for the in-progress form state.

The store holds one JSON document under a well-known key
(:data:`STORAGE_KEY`).  It is written on every sequencer mutation, read
once when a sequencer is created, and cleared after a confirmed
submission.

Corrupt content is never an error for callers: :meth:`ProgressStore.load`
logs it and reports "no saved progress".

Two implementations ship with the SDK:

  - ``InMemoryProgressStore``: lives as long as the object, the analogue of
    tab-scoped session storage
  - ``FileProgressStore``: one JSON file per key under a directory, for
    runs that should survive a process restart
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from videoform_steps.constants import STORAGE_KEY
from videoform_steps.errors import ProgressCorruptionError
from videoform_steps.models.state import PersistedProgress

logger = logging.getLogger(__name__)


def encode_progress(progress: PersistedProgress) -> str:
    return progress.model_dump_json(by_alias=True)


def decode_progress(raw: str) -> PersistedProgress:
    """Parse stored text into ``PersistedProgress``.

    Accepts the legacy ``{"stepIndex", "data"}`` shape written by older
    browser builds.  Raises :class:`ProgressCorruptionError` on anything
    that is not a valid progress document.
    """
    try:
        doc = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ProgressCorruptionError(f"Progress is not valid JSON: {exc}") from exc
    if not isinstance(doc, dict):
        raise ProgressCorruptionError("Progress must be a JSON object")
    if "answers" not in doc and "data" in doc:
        doc["answers"] = doc.pop("data")
    try:
        return PersistedProgress.model_validate(doc)
    except ValidationError as exc:
        raise ProgressCorruptionError(f"Progress has an invalid shape: {exc}") from exc


class ProgressStore(ABC):
    """Interface for the per-tab progress slot.

    Subclasses only implement raw text access; encoding and the
    corruption policy live here.
    """

    def __init__(self, key: str = STORAGE_KEY) -> None:
        self.key = key

    @abstractmethod
    def _read(self) -> str | None:
        """Return the stored text, or None if nothing is stored."""
        ...

    @abstractmethod
    def _write(self, raw: str) -> None:
        ...

    @abstractmethod
    def _delete(self) -> None:
        ...

    def save(self, progress: PersistedProgress) -> None:
        self._write(encode_progress(progress))

    def load(self) -> PersistedProgress | None:
        """Return saved progress, or None if absent or unreadable."""
        try:
            raw = self._read()
        except OSError as exc:
            logger.warning("Could not read saved progress %r: %s", self.key, exc)
            return None
        if raw is None:
            return None
        try:
            return decode_progress(raw)
        except ProgressCorruptionError as exc:
            logger.warning("Ignoring saved progress %r: %s", self.key, exc)
            return None

    def clear(self) -> None:
        self._delete()


class InMemoryProgressStore(ProgressStore):
    """Dict-backed store.  Pass a shared ``backing`` dict to simulate a reload."""

    def __init__(self, key: str = STORAGE_KEY, backing: dict[str, str] | None = None) -> None:
        super().__init__(key)
        self.backing: dict[str, str] = backing if backing is not None else {}

    def _read(self) -> str | None:
        return self.backing.get(self.key)

    def _write(self, raw: str) -> None:
        self.backing[self.key] = raw

    def _delete(self) -> None:
        self.backing.pop(self.key, None)


class FileProgressStore(ProgressStore):
    """Stores ``<directory>/<key>.json``; the directory is created on write."""

    def __init__(self, directory: str | Path, key: str = STORAGE_KEY) -> None:
        super().__init__(key)
        self.directory = Path(directory)

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def _read(self) -> str | None:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def _write(self, raw: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path.write_text(raw, encoding="utf-8")

    def _delete(self) -> None:
        self.path.unlink(missing_ok=True)
