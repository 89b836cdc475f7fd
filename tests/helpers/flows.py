"""Step sequences and timing helpers shared by the sequencer tests."""

import asyncio

from videoform_steps.registry import StepRegistry

# Gate delay used in tests: long enough to observe, short enough to wait out
GATE_DELAY = 0.05


def three_step_registry() -> StepRegistry:
    """``[Info, Choice(color: red|blue), Completion]``."""
    return StepRegistry.from_steps([
        {"id": "intro", "type": "info", "media_ref": "/v/intro.mp4"},
        {
            "id": "color",
            "type": "choice",
            "media_ref": "/v/color.mp4",
            "question": "Favourite colour?",
            "field_name": "color",
            "options": [
                {"id": "red", "label": "Red"},
                {"id": "blue", "label": "Blue"},
            ],
        },
        {
            "id": "done",
            "type": "completion",
            "media_ref": "/v/done.mp4",
            "title": "Thanks",
            "message": "All done",
        },
    ])


def full_registry() -> StepRegistry:
    """One step of every type; the contact form sits just before completion."""
    return StepRegistry.from_steps([
        {"id": "intro", "type": "info", "media_ref": "/v/0.mp4"},
        {
            "id": "stage",
            "type": "choice",
            "media_ref": "/v/1.mp4",
            "field_name": "stage",
            "options": [
                {"id": "idea", "label": "Idea"},
                {"id": "launched", "label": "Launched"},
            ],
        },
        {
            "id": "challenge",
            "type": "text_input",
            "media_ref": "/v/2.mp4",
            "field_name": "challenge",
            "placeholder": "Tell us...",
            "multiline": True,
        },
        {
            "id": "contact",
            "type": "contact_form",
            "media_ref": "/v/3.mp4",
            "fields": [
                {"name": "firstName", "label": "First name", "kind": "text", "required": True},
                {"name": "email", "label": "Email", "kind": "email", "required": True},
                {"name": "phone", "label": "Phone", "kind": "phone"},
            ],
        },
        {
            "id": "done",
            "type": "completion",
            "media_ref": "/v/4.mp4",
            "title": "Merci",
            "message": "Bien reçu",
            "external_booking_ref": "https://calendar.example/book",
        },
    ])


async def wait_for_gate(sequencer, timeout: float = 1.0) -> None:
    """Poll until the continue gate opens; fail the test after ``timeout``."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not sequencer.state.can_advance:
        if loop.time() > deadline:
            raise AssertionError("gate never opened")
        await asyncio.sleep(GATE_DELAY / 5)
