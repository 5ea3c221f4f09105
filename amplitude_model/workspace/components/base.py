"""Shared plumbing for component implementations.

Numeric fields in a model file come in three shapes: a JSON number, a
complex-encoded string (``"0.3-1.2i"``), or the name of a parameter that is
looked up in the evaluation context. ``read_value`` sorts them out once at
construction; ``resolve_value`` finishes the job at evaluation time.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence, Union

import numpy as np

from amplitude_model.errors import InvalidComponentError, MissingParameterError, ValueFormatError
from amplitude_model.serialization.complex_encoding import parse_number

ParameterLike = Union[float, complex, str]
Context = Mapping[str, Any]

_MISSING = object()


class Component:
    """Base for built objects: anything with ``evaluate(context)``."""

    def evaluate(self, context: Context) -> Any:  # pragma: no cover - abstract
        raise NotImplementedError

    def __call__(self, context: Context) -> Any:
        return self.evaluate(context)


def require(fields: Mapping[str, Any], key: str, default: Any = _MISSING) -> Any:
    if key in fields:
        return fields[key]
    if default is _MISSING:
        raise InvalidComponentError(f"missing required field {key!r}")
    return default


def read_value(fields: Mapping[str, Any], key: str, default: Any = _MISSING) -> ParameterLike:
    """Read a numeric field; strings that are not numbers are parameter names."""
    raw = require(fields, key, default)
    if isinstance(raw, str):
        try:
            return parse_number(raw)
        except ValueFormatError:
            return raw
    try:
        return parse_number(raw)
    except ValueFormatError:
        raise InvalidComponentError(f"field {key!r} must be a number or parameter name, got {raw!r}") from None


def read_values(fields: Mapping[str, Any], key: str) -> tuple:
    raw = require(fields, key)
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise InvalidComponentError(f"field {key!r} must be a list, got {raw!r}")
    return tuple(read_value({key: item}, key) for item in raw)


def read_name(fields: Mapping[str, Any], key: str) -> str:
    raw = require(fields, key)
    if not isinstance(raw, str) or not raw:
        raise InvalidComponentError(f"field {key!r} must be a name, got {raw!r}")
    return raw


def read_names(fields: Mapping[str, Any], key: str) -> tuple:
    raw = require(fields, key)
    if isinstance(raw, str) or not isinstance(raw, Sequence):
        raise InvalidComponentError(f"field {key!r} must be a list of names, got {raw!r}")
    return tuple(read_name({key: item}, key) for item in raw)


def read_int(fields: Mapping[str, Any], key: str, default: Any = _MISSING) -> int:
    raw = require(fields, key, default)
    if (
        isinstance(raw, bool)
        or not isinstance(raw, (int, float))
        or not math.isfinite(raw)
        or int(raw) != raw
        or raw < 0
    ):
        raise InvalidComponentError(f"field {key!r} must be a non-negative integer, got {raw!r}")
    return int(raw)


def lookup(context: Context, name: str) -> Any:
    try:
        value = context[name]
    except KeyError:
        raise MissingParameterError(name) from None
    if isinstance(value, str):
        return parse_number(value)
    return as_array(value)


def resolve_value(value: ParameterLike, context: Context) -> Any:
    if isinstance(value, str):
        return lookup(context, value)
    return value


def as_array(value: Any) -> Any:
    """Promote lists to arrays, leave scalars alone."""
    if isinstance(value, (list, tuple)):
        return np.asarray(value)
    return value
