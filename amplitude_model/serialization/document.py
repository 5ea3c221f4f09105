"""
In-memory form of a serialized amplitude model.

The JSON layout is fixed by existing model files::

    {
      "functions":        [{"name": ..., "type": ..., <fields>}, ...],
      "distributions":    [{"name": ..., "type": ..., <fields>}, ...],
      "parameter_points": [{"name": ..., "parameters": [{"name": ..., "value": ...}]}],
      "misc": {"amplitude_model_checksums": [{"point": ..., "distribution": ..., "value": ...}]}
    }

Records are parsed once here; everything downstream works with the
dataclasses below.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple, Union

from amplitude_model.errors import InvalidComponentError
from amplitude_model.serialization.complex_encoding import format_number, parse_number
from amplitude_model.serialization.resolver import index_by_name

logger = logging.getLogger(__name__)

__all__ = [
    'ComponentSpec',
    'ParameterPoint',
    'Checkpoint',
    'ModelDocument',
    'load_document',
    'dump_document',
]

_SECTIONS = ('functions', 'distributions', 'parameter_points', 'misc')


@dataclass(frozen=True)
class ComponentSpec:
    name: str
    type: str
    fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "ComponentSpec":
        if not isinstance(record, Mapping):
            raise InvalidComponentError(f"Component record must be an object, got {record!r}")
        name = record.get('name')
        type_name = record.get('type')
        if not isinstance(name, str) or not name:
            raise InvalidComponentError(f"Component record without a 'name': {dict(record)!r}")
        if not isinstance(type_name, str) or not type_name:
            raise InvalidComponentError(f"Component {name!r} has no 'type'")
        rest = {k: v for k, v in record.items() if k not in ('name', 'type')}
        return cls(name=name, type=type_name, fields=MappingProxyType(rest))

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'type': self.type, **self.fields}


@dataclass(frozen=True)
class ParameterPoint:
    name: str
    parameters: Tuple[Tuple[str, Any], ...] = ()

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "ParameterPoint":
        name = record.get('name') if isinstance(record, Mapping) else None
        if not isinstance(name, str):
            raise InvalidComponentError(f"Parameter point without a 'name': {record!r}")
        params = []
        for entry in record.get('parameters', []):
            if not isinstance(entry, Mapping) or 'name' not in entry or 'value' not in entry:
                raise InvalidComponentError(
                    f"Parameter point {name!r}: entries need 'name' and 'value', got {entry!r}"
                )
            params.append((entry['name'], entry['value']))
        return cls(name=name, parameters=tuple(params))

    def to_context(self) -> Dict[str, Union[float, complex]]:
        """Flatten the parameter list to ``name -> numeric value``.

        Complex-encoded strings are parsed; duplicate names raise
        ``DuplicateNameError``.
        """
        records = [{'name': n, 'value': v} for n, v in self.parameters]
        return index_by_name(
            records,
            lambda r: parse_number(r['value']),
            context=f"parameter point {self.name!r}",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'parameters': [{'name': n, 'value': v} for n, v in self.parameters],
        }


@dataclass(frozen=True)
class Checkpoint:
    point: str
    distribution: str
    value: Any

    def __post_init__(self) -> None:
        for key in ('point', 'distribution'):
            name = getattr(self, key)
            if not isinstance(name, str) or not name:
                raise InvalidComponentError(f"Checkpoint {key!r} must be a non-empty name, got {name!r}")

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Checkpoint":
        if not isinstance(record, Mapping):
            raise InvalidComponentError(f"Checkpoint record must be an object, got {record!r}")
        missing = [k for k in ('point', 'distribution', 'value') if k not in record]
        if missing:
            raise InvalidComponentError(f"Checkpoint {dict(record)!r} is missing {', '.join(missing)}")
        return cls(point=record['point'], distribution=record['distribution'], value=record['value'])

    def to_dict(self) -> Dict[str, Any]:
        return {'point': self.point, 'value': self.value, 'distribution': self.distribution}


@dataclass(frozen=True)
class ModelDocument:
    functions: Tuple[ComponentSpec, ...] = ()
    distributions: Tuple[ComponentSpec, ...] = ()
    parameter_points: Tuple[ParameterPoint, ...] = ()
    checkpoints: Tuple[Checkpoint, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ModelDocument":
        if not isinstance(data, Mapping):
            raise InvalidComponentError("Model document must be a JSON object")
        misc = data.get('misc') or {}
        extra = {k: v for k, v in data.items() if k not in _SECTIONS}
        extra_misc = {k: v for k, v in misc.items() if k != 'amplitude_model_checksums'}
        if extra_misc:
            extra['misc'] = extra_misc
        return cls(
            functions=tuple(ComponentSpec.from_dict(r) for r in data.get('functions', [])),
            distributions=tuple(ComponentSpec.from_dict(r) for r in data.get('distributions', [])),
            parameter_points=tuple(ParameterPoint.from_dict(r) for r in data.get('parameter_points', [])),
            checkpoints=tuple(Checkpoint.from_dict(r) for r in misc.get('amplitude_model_checksums', [])),
            extra=MappingProxyType(extra),
        )

    @property
    def components(self) -> Tuple[ComponentSpec, ...]:
        """Functions followed by distributions, in construction order."""
        return self.functions + self.distributions

    def point(self, name: str) -> ParameterPoint:
        """Look up a parameter point by name (``KeyError`` if absent)."""
        return index_by_name(self.parameter_points, context="parameter_points")[name]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        misc = dict(out.pop('misc', {}))
        misc['amplitude_model_checksums'] = [c.to_dict() for c in self.checkpoints]
        out.update({
            'functions': [s.to_dict() for s in self.functions],
            'distributions': [s.to_dict() for s in self.distributions],
            'parameter_points': [p.to_dict() for p in self.parameter_points],
            'misc': misc,
        })
        return out


def load_document(source: Union[str, os.PathLike, Mapping[str, Any]]) -> ModelDocument:
    """Load a model document from a JSON file path or an already decoded mapping."""
    if isinstance(source, Mapping):
        return ModelDocument.from_dict(source)
    path = Path(source)
    logger.info(f"Loading model document from {path}")
    with path.open('r', encoding='utf-8') as fh:
        data = json.load(fh)
    doc = ModelDocument.from_dict(data)
    logger.debug(
        "Document has %d functions, %d distributions, %d points, %d checkpoints",
        len(doc.functions), len(doc.distributions), len(doc.parameter_points), len(doc.checkpoints),
    )
    return doc


def dump_document(doc: ModelDocument, path: Union[str, os.PathLike], indent: int = 2) -> None:
    """Write ``doc`` back to JSON in the same layout it was read from."""
    with Path(path).open('w', encoding='utf-8') as fh:
        json.dump(doc.to_dict(), fh, indent=indent, default=format_number)
