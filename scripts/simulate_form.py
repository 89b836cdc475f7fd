#!/usr/bin/env python3
"""Walk the video form end-to-end against a mocked storage endpoint.

Drives a ``StepSequencer`` through every step of a registry, picking answers
for each step and printing a rich audit log of the rendered view, the
answer chosen, and the payload that reached the endpoint.

By default answers are **randomised** so each run explores a different
branch of the choice steps.  Use ``--no-random`` for the first option /
fixed text every time, and ``--fail-first`` to make the first submission
attempt fail and exercise the retry path.

Usage::

    # Default run (bundled steps, random answers)
    python scripts/simulate_form.py

    # Deterministic run
    python scripts/simulate_form.py --no-random

    # Custom registry, failing first submission
    python scripts/simulate_form.py --steps my_steps.yaml --fail-first

    # Reproducible random run
    python scripts/simulate_form.py --seed 42
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import random
import sys
from pathlib import Path

import httpx
from rich.console import Console
from rich.table import Table

_REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from videoform_steps.client import SubmissionClient  # noqa: E402
from videoform_steps.errors import SubmissionTransportError  # noqa: E402
from videoform_steps.models.step import (  # noqa: E402
    ChoiceStep,
    ContactFormStep,
    InfoStep,
    TextInputStep,
)
from videoform_steps.registry import StepRegistry  # noqa: E402
from videoform_steps.sequencer import StepSequencer, new_session_id  # noqa: E402

console = Console()

# Sample values per contact field kind
_CONTACT_SAMPLES = {
    "text": ["Camille", "Louis", "Inès"],
    "email": ["camille@example.fr", "louis@example.com"],
    "phone": ["+33 6 12 34 56 78", "(01) 23-45-67-89"],
}
_TEXT_SAMPLES = [
    "Trouver mes premiers clients",
    "Structurer mon offre",
    "Recruter une équipe",
]


def _mock_endpoint(fail_first: bool) -> tuple[httpx.MockTransport, list[dict]]:
    """In-process stand-in for ``POST /submissions``; records every payload."""
    received: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        received.append(payload)
        if fail_first and len(received) == 1:
            return httpx.Response(503, json={"detail": "Service unavailable"})
        return httpx.Response(
            200,
            json={"success": True, "id": f"sub_{len(received)}", "message": "ok"},
        )

    return httpx.MockTransport(handler), received


def _pick(options: list[str], rng: random.Random, randomise: bool) -> str:
    return rng.choice(options) if randomise else options[0]


async def _wait_for_gate(sequencer: StepSequencer, delay: float) -> None:
    while not sequencer.state.can_advance:
        await asyncio.sleep(delay / 4)


async def run(args: argparse.Namespace) -> int:
    rng = random.Random(args.seed)
    registry = StepRegistry(args.steps)
    registry.load()

    transport, received = _mock_endpoint(args.fail_first)
    async with httpx.AsyncClient(transport=transport) as http:
        client = SubmissionClient("http://mock/api/v1/submissions", http=http)
        sequencer = StepSequencer(
            registry,
            session_id=new_session_id(),
            client=client,
            gate_delay=args.gate_delay,
        )
        console.rule(f"[bold]Session {sequencer.session_id}")

        async with sequencer:
            while not sequencer.is_complete:
                await _wait_for_gate(sequencer, args.gate_delay)
                step = sequencer.current_step
                view = sequencer.view()
                console.print(
                    f"[cyan]{view.index + 1}/{view.total}[/cyan] "
                    f"[bold]{step.id}[/bold] ({step.type}) "
                    f"[dim]{view.media.src}[/dim]"
                )
                if view.media.question:
                    console.print(f"  [italic]{view.media.question}[/italic]")

                try:
                    if isinstance(step, InfoStep):
                        console.print("  → continue")
                        await sequencer.advance()
                    elif isinstance(step, ChoiceStep):
                        value = _pick(step.option_ids, rng, args.random)
                        console.print(f"  → {step.field_name} = {value!r}  [dim]{step.option_ids}[/dim]")
                        await sequencer.submit_answer(step.field_name, value)
                    elif isinstance(step, TextInputStep):
                        value = _pick(_TEXT_SAMPLES, rng, args.random)
                        console.print(f"  → {step.field_name} = {value!r}")
                        await sequencer.submit_answer(step.field_name, value)
                    elif isinstance(step, ContactFormStep):
                        values = {
                            f.name: _pick(_CONTACT_SAMPLES[f.kind], rng, args.random)
                            for f in step.fields
                        }
                        console.print(f"  → {values}")
                        await sequencer.submit_contact(values)
                except SubmissionTransportError as exc:
                    console.print(f"  [red]submission failed:[/red] {exc}; retrying")
                    console.print(f"  [red]{sequencer.view().notice}[/red]")

        final = sequencer.view()
        console.rule("[bold green]Completed")
        console.print(f"{final.control.title}: {final.control.message}")

    table = Table(title="Payloads received by the endpoint")
    table.add_column("#")
    table.add_column("payload")
    for i, payload in enumerate(received, 1):
        table.add_row(str(i), json.dumps(payload, ensure_ascii=False))
    console.print(table)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--steps", help="step registry YAML (default: bundled)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--random", dest="random", action="store_true", default=True)
    parser.add_argument("--no-random", dest="random", action="store_false")
    parser.add_argument("--fail-first", action="store_true")
    parser.add_argument("--gate-delay", type=float, default=0.05)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
