"""
Workspace construction.

A model document is turned into a ``Workspace`` by building every function and
then every distribution, strictly in document order. A component may only
refer to names built before it; there is no dependency sorting and no cycle
detection, so a forward or cyclic reference surfaces as
``MissingDependencyError`` on the first offending component.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional, Union

from amplitude_model.config import BuildConfig
from amplitude_model.errors import (
    DuplicateNameError,
    InvalidComponentError,
    MissingDependencyError,
    ModelError,
    UnknownDistributionError,
    UnknownTypeError,
)
from amplitude_model.serialization.document import ComponentSpec, ModelDocument, load_document
from amplitude_model.workspace.component_registry import get_component

logger = logging.getLogger(__name__)

__all__ = ['Workspace', 'build', 'populate', 'load_workspace']


class Workspace(Mapping):
    """Insertion-ordered registry of built components, keyed by name.

    Only the population routine writes to it; once built it is shared
    read-only (including across validation threads).
    """

    def __init__(self) -> None:
        self._objects: Dict[str, Any] = {}

    def __getitem__(self, name: str) -> Any:
        return self._objects[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __repr__(self) -> str:
        return f"Workspace({list(self._objects)!r})"

    def lookup(self, name: str) -> Any:
        try:
            return self._objects[name]
        except KeyError:
            raise UnknownDistributionError(name) from None

    def evaluate(self, name: str, context: Mapping) -> Any:
        return self.lookup(name).evaluate(context)

    def view(self) -> Mapping:
        return MappingProxyType(self._objects)

    def insert(self, name: str, obj: Any, *, overwrite: bool = False) -> None:
        if name in self._objects:
            if not overwrite:
                raise DuplicateNameError(name, "workspace")
            logger.warning(f"Component {name!r} is defined more than once; keeping the last definition")
        self._objects[name] = obj


class _DependencyView(Mapping):
    """Read-only workspace view handed to factories.

    Missing names raise ``MissingDependencyError`` naming the component being
    built.
    """

    def __init__(self, objects: Mapping, owner: str):
        self._objects = objects
        self._owner = owner

    def __getitem__(self, name: str) -> Any:
        try:
            return self._objects[name]
        except KeyError:
            raise MissingDependencyError(self._owner, name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._objects

    def get(self, name: str, default: Any = None) -> Any:
        return self._objects.get(name, default)

    def __iter__(self) -> Iterator[str]:
        return iter(self._objects)

    def __len__(self) -> int:
        return len(self._objects)


def build(spec: ComponentSpec, workspace: Mapping) -> Any:
    """Build one component from its spec.

    ``workspace`` is only read; the caller inserts the result under
    ``spec.name``.

    Raises:
        UnknownTypeError: If ``spec.type`` is not registered
        MissingDependencyError: If a referenced name is not in ``workspace``
        InvalidComponentError: If a field is missing or malformed
    """
    try:
        component = get_component(spec.type)
    except UnknownTypeError:
        raise UnknownTypeError(spec.type, spec.name) from None

    view = _DependencyView(workspace, spec.name) if component.requires_workspace else None
    try:
        obj = component.factory(spec.fields, view)
    except InvalidComponentError as e:
        raise InvalidComponentError(f"Component {spec.name!r} ({spec.type}): {e}") from e
    logger.debug(f"Built {spec.type} {spec.name!r}")
    return obj


def populate(doc: ModelDocument, *, config: Optional[BuildConfig] = None) -> Workspace:
    """Build all functions, then all distributions, in document order."""
    config = config or BuildConfig()
    overwrite = config.on_duplicate == 'overwrite'
    workspace = Workspace()

    for section, specs in (('functions', doc.functions), ('distributions', doc.distributions)):
        for spec in specs:
            if spec.name in workspace and not overwrite:
                raise DuplicateNameError(spec.name, "workspace")
            try:
                obj = build(spec, workspace)
            except ModelError as e:
                logger.error(f"Failed to build {section} entry {spec.name!r}: {e}")
                raise
            workspace.insert(spec.name, obj, overwrite=overwrite)

    logger.info(
        "Workspace built: %d functions, %d distributions, %d entries",
        len(doc.functions), len(doc.distributions), len(workspace),
    )
    return workspace


def load_workspace(
    source: Union[str, os.PathLike, ModelDocument, Mapping],
    *,
    config: Optional[BuildConfig] = None,
) -> Workspace:
    """Load a JSON model (path, decoded mapping or document) and populate a workspace."""
    doc = source if isinstance(source, ModelDocument) else load_document(source)
    return populate(doc, config=config)
