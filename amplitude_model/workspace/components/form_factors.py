from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np
from numpy.typing import ArrayLike
from scipy.special import spherical_jn, spherical_yn

from amplitude_model.workspace.component_registry import ComponentType, register_component
from amplitude_model.workspace.components.base import (
    Component,
    Context,
    ParameterLike,
    lookup,
    read_int,
    read_name,
    read_value,
    resolve_value,
)

"""
NOTE: Centrifugal-barrier factors
Only the forms needed by the shipped lineshapes are provided; they follow the
usual unnormalised convention B_l(z) -> 1 for z -> infinity.
"""


def blatt_weisskopf(z: ArrayLike, l: int) -> np.ndarray:
    """Blatt–Weisskopf factor B_l(z) = 1 / (z |h_l⁽¹⁾(z)|).

    h_l⁽¹⁾ = j_l + i y_l is the spherical Hankel function, which reproduces the
    closed forms B_0 = 1, B_1 = z / sqrt(1 + z²), ... for any l. ``z`` may be
    complex below threshold.
    """
    z = np.asarray(z)
    if l == 0:
        return np.ones_like(z, dtype=float)[()]
    with np.errstate(divide='ignore', invalid='ignore'):
        hankel = spherical_jn(l, z) + 1j * spherical_yn(l, z)
        out = 1.0 / np.abs(z * hankel)
    # B_l(0) = 0 for l > 0; the expression above is 0 * inf there
    return np.where(z == 0, 0.0, out)[()]


@dataclass(frozen=True)
class BlattWeisskopf(Component):
    radius: ParameterLike
    l: int
    x: str

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], workspace=None) -> "BlattWeisskopf":
        return cls(read_value(fields, 'radius'), read_int(fields, 'l'), read_name(fields, 'x'))

    def evaluate(self, context: Context) -> Any:
        z = resolve_value(self.radius, context) * lookup(context, self.x)
        return blatt_weisskopf(z, self.l)


@dataclass(frozen=True)
class MomentumPower(Component):
    l: int
    x: str

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], workspace=None) -> "MomentumPower":
        return cls(read_int(fields, 'l'), read_name(fields, 'x'))

    def evaluate(self, context: Context) -> Any:
        return np.power(lookup(context, self.x), self.l)


register_component(ComponentType(
    name="BlattWeisskopf",
    factory=BlattWeisskopf.from_fields,
    description="Blatt–Weisskopf barrier factor of orbital momentum l at z = radius * x.",
))
register_component(ComponentType(
    name="MomentumPower",
    factory=MomentumPower.from_fields,
    description="Threshold factor x**l.",
))
