"""StepRegistry — loads the ordered step sequence from YAML into typed models.

This is the single source of truth for the form flow at runtime.  The
registry is loaded once at startup and never changes afterwards.

Usage::

    registry = StepRegistry()         # defaults to the bundled data/steps.yaml
    registry.load()

    step = registry[0]
    registry.penultimate_index        # the step that triggers submission
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, Sequence

import yaml
from pydantic import TypeAdapter

from videoform_steps.models.step import BaseStep, CompletionStep, StepDescriptor

logger = logging.getLogger(__name__)

DEFAULT_STEPS_FILE = Path(__file__).resolve().parent / "data" / "steps.yaml"

_step_adapter: TypeAdapter[StepDescriptor] = TypeAdapter(StepDescriptor)


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def parse_steps(raw_steps: Sequence[dict]) -> list[BaseStep]:
    """Parse raw step dicts and check the sequence-level invariants.

    Raises ``ValueError`` when:
      - the sequence is empty
      - there is not exactly one completion step, or it is not last
      - step ids or answer field names repeat
      - a choice step has no options or repeats an option id
    """
    steps: list[BaseStep] = [_step_adapter.validate_python(raw) for raw in raw_steps]
    if not steps:
        raise ValueError("Step sequence is empty")

    completions = [i for i, s in enumerate(steps) if isinstance(s, CompletionStep)]
    if len(completions) != 1:
        raise ValueError(
            f"Expected exactly one completion step, found {len(completions)}"
        )
    if completions[0] != len(steps) - 1:
        raise ValueError(
            f"Completion step must be last, found at index {completions[0]}"
        )

    seen_ids: set[str] = set()
    seen_fields: dict[str, str] = {}
    for step in steps:
        if step.id in seen_ids:
            raise ValueError(f"Duplicate step id: {step.id}")
        seen_ids.add(step.id)

        # The accumulator is flat, so a field name may only be written by one step
        for name in step.field_names:
            if name in seen_fields:
                raise ValueError(
                    f"Field '{name}' is declared by both '{seen_fields[name]}' "
                    f"and '{step.id}'"
                )
            seen_fields[name] = step.id

        option_ids = getattr(step, "option_ids", None)
        if option_ids is not None:
            if not option_ids:
                raise ValueError(f"Choice step '{step.id}' has no options")
            if len(set(option_ids)) != len(option_ids):
                raise ValueError(f"Choice step '{step.id}' repeats an option id")

    return steps


class StepRegistry:
    """Ordered, immutable sequence of step descriptors.

    Build it either from a YAML file (:meth:`load`) or directly from
    already-parsed steps (:meth:`from_steps`, handy in tests).
    """

    def __init__(self, steps_file: str | Path | None = None) -> None:
        self._path = Path(steps_file) if steps_file is not None else DEFAULT_STEPS_FILE
        self._steps: tuple[BaseStep, ...] = ()

    @classmethod
    def from_steps(cls, steps: Sequence[BaseStep | dict]) -> StepRegistry:
        """Build a registry from descriptors (or raw dicts) without touching disk."""
        registry = cls()
        raw = [s.model_dump() if isinstance(s, BaseStep) else s for s in steps]
        registry._steps = tuple(parse_steps(raw))
        return registry

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse the YAML file into typed step models.

        The file holds either a bare list of steps or a mapping with a
        ``steps`` key.  Raises ``FileNotFoundError`` if the file is missing
        and ``ValueError`` if the sequence breaks an invariant.
        """
        raw = load_yaml(self._path)
        if isinstance(raw, dict):
            raw = raw.get("steps", [])
        self._steps = tuple(parse_steps(raw or []))
        logger.info("StepRegistry loaded %d steps from %s", len(self._steps), self._path)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def steps(self) -> tuple[BaseStep, ...]:
        return self._steps

    @property
    def last_index(self) -> int:
        """Index of the completion step."""
        return len(self._steps) - 1

    @property
    def penultimate_index(self) -> int:
        """Index of the step whose completion submits the answers.

        For a single-step registry (completion only) this is -1, i.e. no
        step ever submits.
        """
        return len(self._steps) - 2

    @property
    def completion(self) -> CompletionStep:
        return self._steps[-1]  # type: ignore[return-value]

    def index_of(self, step_id: str) -> int:
        for i, step in enumerate(self._steps):
            if step.id == step_id:
                return i
        raise KeyError(step_id)

    def __getitem__(self, index: int) -> BaseStep:
        return self._steps[index]

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[BaseStep]:
        return iter(self._steps)
