from unittest.mock import AsyncMock

import pytest

from helpers.flows import full_registry, three_step_registry
from videoform_steps.models.submission import SubmissionAck
from videoform_steps.progress import InMemoryProgressStore


@pytest.fixture
def registry():
    return three_step_registry()


@pytest.fixture
def big_registry():
    return full_registry()


@pytest.fixture
def backing():
    """Raw storage shared between progress stores, i.e. one browser tab."""
    return {}


@pytest.fixture
def store(backing):
    return InMemoryProgressStore(backing=backing)


@pytest.fixture
def client():
    """AsyncMock submitter that acknowledges every submission."""
    mock = AsyncMock()
    mock.submit.return_value = SubmissionAck(id="sub_1", message="ok")
    return mock
