"""Liveness route: reports the build and what this process can run."""
from fastapi import APIRouter

from autoflow import __version__
from autoflow.actions.registry import get_action_registry
from autoflow.engine.schemas import list_schemas

router = APIRouter()


@router.get("/health")
def health_check() -> dict:
    """
    Report that the API is up.

    ``nodeTypes`` counts the schema catalogue; ``actions`` lists the node
    types with a dedicated handler (the rest fall back to echo).
    """
    return {
        "status": "healthy",
        "version": __version__,
        "nodeTypes": len(list_schemas()),
        "actions": sorted(get_action_registry().list_actions()),
    }
