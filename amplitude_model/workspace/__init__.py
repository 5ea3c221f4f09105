"""Component registry, built-in component kinds and workspace construction."""

from . import components  # noqa: F401  (registers the built-in kinds)
from .builder import Workspace, build, load_workspace, populate
from .component_registry import (
    REGISTRY,
    ComponentType,
    available_types,
    get_component,
    register,
    register_component,
    resolve,
)

__all__ = [
    "Workspace",
    "build",
    "populate",
    "load_workspace",
    "REGISTRY",
    "ComponentType",
    "available_types",
    "get_component",
    "register",
    "register_component",
    "resolve",
]
