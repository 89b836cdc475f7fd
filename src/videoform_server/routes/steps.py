"""Step registry endpoints — let front-ends fetch the form definition."""

from fastapi import APIRouter, Depends

from videoform_steps.registry import StepRegistry

from videoform_server.dependencies import get_registry

router = APIRouter(prefix="/steps", tags=["steps"])


@router.get("")
def list_steps(registry: StepRegistry = Depends(get_registry)) -> list[dict]:
    """Return every step descriptor in order."""
    return [step.model_dump() for step in registry]


@router.get("/{step_id}")
def get_step(step_id: str, registry: StepRegistry = Depends(get_registry)) -> dict:
    """Return one step descriptor and its position.  404 for unknown ids."""
    index = registry.index_of(step_id)
    return {"index": index, "step": registry[index].model_dump()}
