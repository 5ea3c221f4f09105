from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

import numpy as np

from amplitude_model.errors import InvalidComponentError
from amplitude_model.workspace.component_registry import ComponentType, register_component
from amplitude_model.workspace.components.base import (
    Component,
    Context,
    ParameterLike,
    read_name,
    read_value,
    require,
    resolve_value,
)


@dataclass(frozen=True)
class Intensity(Component):
    """Unpolarised intensity |Σ c_i A_i|² of a coherent sum of amplitudes.

    Accepts either a single ``amplitude`` name or a list of ``terms`` of the
    form ``{"amplitude": <name>, "coefficient": <value>}``.
    """
    amplitudes: Tuple[str, ...]
    coefficients: Tuple[ParameterLike, ...]
    targets: Tuple[Component, ...]

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], workspace) -> "Intensity":
        if 'amplitude' in fields:
            names = (read_name(fields, 'amplitude'),)
            coefficients: Tuple[ParameterLike, ...] = (1.0,)
        else:
            terms = require(fields, 'terms')
            if not isinstance(terms, list) or not terms:
                raise InvalidComponentError("field 'terms' must be a non-empty list")
            if not all(isinstance(t, Mapping) for t in terms):
                raise InvalidComponentError("entries of 'terms' must be objects")
            names = tuple(read_name(t, 'amplitude') for t in terms)
            coefficients = tuple(read_value(t, 'coefficient', 1.0) for t in terms)
        return cls(names, coefficients, tuple(workspace[n] for n in names))

    def amplitude(self, context: Context) -> Any:
        total = 0.0
        for c, target in zip(self.coefficients, self.targets):
            total = total + resolve_value(c, context) * target.evaluate(context)
        return total

    def evaluate(self, context: Context) -> Any:
        return np.abs(self.amplitude(context)) ** 2


register_component(ComponentType(
    name="Intensity",
    factory=Intensity.from_fields,
    requires_workspace=True,
    description="Squared modulus of a coherent sum of amplitudes.",
))
