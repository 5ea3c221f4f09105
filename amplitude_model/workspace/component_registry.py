from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from amplitude_model.errors import UnknownTypeError


"""
Component type registry

Maps the ``type`` tag of a serialized component to the factory that builds it.
Component modules register themselves at import time (see
``amplitude_model.workspace.components``); third-party kinds can be added with
``register`` without touching the builder.
"""

# factory(fields, workspace) -> built object; ``workspace`` is None unless the
# component type declares ``requires_workspace``.
Factory = Callable[[Mapping[str, Any], Optional[Mapping[str, Any]]], Any]


@dataclass(frozen=True)
class ComponentType:
    name: str
    factory: Factory
    requires_workspace: bool = False
    description: str = ""


REGISTRY: Dict[str, ComponentType] = {}


def register_component(component: ComponentType) -> None:
    REGISTRY[component.name] = component


def register(
    type_name: str,
    factory: Factory,
    *,
    requires_workspace: bool = False,
    description: str = "",
) -> ComponentType:
    component = ComponentType(type_name, factory, requires_workspace, description)
    register_component(component)
    return component


def get_component(type_name: str) -> ComponentType:
    try:
        return REGISTRY[type_name]
    except KeyError:
        raise UnknownTypeError(type_name) from None


def resolve(type_name: str) -> Factory:
    return get_component(type_name).factory


def available_types() -> List[str]:
    return sorted(REGISTRY)
