"""Action handlers and the dispatch registry."""
from autoflow.actions.base import Action, ActionSpec, SideEffect
from autoflow.actions.registry import (
    ActionRegistry,
    build_action_registry,
    get_action_registry,
    reset_action_registry,
)

__all__ = [
    "Action",
    "ActionRegistry",
    "ActionSpec",
    "SideEffect",
    "build_action_registry",
    "get_action_registry",
    "reset_action_registry",
]
