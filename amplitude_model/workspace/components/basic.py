from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from amplitude_model.errors import InvalidComponentError
from amplitude_model.workspace.component_registry import ComponentType, register_component
from amplitude_model.workspace.components.base import (
    Component,
    Context,
    ParameterLike,
    lookup,
    read_name,
    read_names,
    read_value,
    resolve_value,
)

"""
Constants, parameter pass-through and arithmetic combinators.
"""


@dataclass(frozen=True)
class Const(Component):
    value: float | complex

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], workspace=None) -> "Const":
        value = read_value(fields, 'value')
        if isinstance(value, str):
            raise InvalidComponentError(f"field 'value' must be numeric, got parameter name {value!r}")
        return cls(value)

    def evaluate(self, context: Context) -> float | complex:
        return self.value


@dataclass(frozen=True)
class Parameter(Component):
    parameter: str

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], workspace=None) -> "Parameter":
        return cls(read_name(fields, 'parameter'))

    def evaluate(self, context: Context) -> Any:
        return lookup(context, self.parameter)


@dataclass(frozen=True)
class Scale(Component):
    source: str
    factor: ParameterLike
    target: Component

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], workspace) -> "Scale":
        source = read_name(fields, 'source')
        return cls(source, read_value(fields, 'factor', 1.0), workspace[source])

    def evaluate(self, context: Context) -> Any:
        return resolve_value(self.factor, context) * self.target.evaluate(context)


@dataclass(frozen=True)
class Sum(Component):
    terms: Tuple[str, ...]
    targets: Tuple[Component, ...]

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], workspace) -> "Sum":
        terms = read_names(fields, 'terms')
        return cls(terms, tuple(workspace[t] for t in terms))

    def evaluate(self, context: Context) -> Any:
        total = 0.0
        for target in self.targets:
            total = total + target.evaluate(context)
        return total


@dataclass(frozen=True)
class Product(Component):
    factors: Tuple[str, ...]
    targets: Tuple[Component, ...]

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], workspace) -> "Product":
        factors = read_names(fields, 'factors')
        return cls(factors, tuple(workspace[f] for f in factors))

    def evaluate(self, context: Context) -> Any:
        total = 1.0
        for target in self.targets:
            total = total * target.evaluate(context)
        return total


register_component(ComponentType(
    name="Const",
    factory=Const.from_fields,
    description="Constant real or complex value.",
))
register_component(ComponentType(
    name="Parameter",
    factory=Parameter.from_fields,
    description="Value of a named parameter from the evaluation context.",
))
register_component(ComponentType(
    name="Scale",
    factory=Scale.from_fields,
    requires_workspace=True,
    description="Another component multiplied by a factor.",
))
register_component(ComponentType(
    name="Sum",
    factory=Sum.from_fields,
    requires_workspace=True,
    description="Sum of other components.",
))
register_component(ComponentType(
    name="Product",
    factory=Product.from_fields,
    requires_workspace=True,
    description="Product of other components.",
))
