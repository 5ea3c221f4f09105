from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

import numpy as np
from numpy.polynomial import polynomial as P
from numpy.typing import ArrayLike

from amplitude_model.workspace.component_registry import ComponentType, register_component
from amplitude_model.workspace.components.base import (
    Component,
    Context,
    ParameterLike,
    lookup,
    read_int,
    read_name,
    read_value,
    read_values,
    resolve_value,
)
from amplitude_model.workspace.components.form_factors import blatt_weisskopf

"""
NOTE: Lineshapes
Mass-dependent lineshapes evaluated in the invariant mass squared ``x``.
They are here so real model files load and evaluate; they are not meant as
a complete lineshape library.
"""


def breakup_momentum(m: ArrayLike, ma: float, mb: float) -> np.ndarray:
    """Two-body breakup momentum p(m) = sqrt((m² - (ma+mb)²)(m² - (ma-mb)²)) / 2m.

    Complex below threshold.
    """
    m = np.asarray(m)
    m2 = m * m
    return np.emath.sqrt((m2 - (ma + mb) ** 2) * (m2 - (ma - mb) ** 2)) / (2 * m)


@dataclass(frozen=True)
class BreitWigner(Component):
    """Relativistic Breit–Wigner 1 / (m² - σ - i m Γ(σ)).

    Γ(σ) = Γ₀ (p/p₀)^(2l+1) (m/√σ) (B_l(p d) / B_l(p₀ d))², which reduces to
    the constant width Γ₀ for l = 0 and massless daughters.
    """
    mass: ParameterLike
    width: ParameterLike
    x: str
    ma: ParameterLike = 0.0
    mb: ParameterLike = 0.0
    l: int = 0
    d: ParameterLike = 1.5

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], workspace=None) -> "BreitWigner":
        return cls(
            mass=read_value(fields, 'mass'),
            width=read_value(fields, 'width'),
            x=read_name(fields, 'x'),
            ma=read_value(fields, 'ma', 0.0),
            mb=read_value(fields, 'mb', 0.0),
            l=read_int(fields, 'l', 0),
            d=read_value(fields, 'd', 1.5),
        )

    def width_at(self, sigma: ArrayLike, context: Context) -> Any:
        m = resolve_value(self.mass, context)
        gamma0 = resolve_value(self.width, context)
        ma = resolve_value(self.ma, context)
        mb = resolve_value(self.mb, context)
        d = resolve_value(self.d, context)

        sqrt_s = np.emath.sqrt(sigma)
        p = breakup_momentum(sqrt_s, ma, mb)
        p0 = breakup_momentum(m, ma, mb)
        ff = blatt_weisskopf(p * d, self.l) / blatt_weisskopf(p0 * d, self.l)
        return gamma0 * (p / p0) ** (2 * self.l + 1) * (m / sqrt_s) * ff ** 2

    def evaluate(self, context: Context) -> Any:
        sigma = lookup(context, self.x)
        m = resolve_value(self.mass, context)
        return 1.0 / (m * m - sigma - 1j * m * self.width_at(sigma, context))


@dataclass(frozen=True)
class Polynomial(Component):
    coefficients: Tuple[ParameterLike, ...]
    x: str

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], workspace=None) -> "Polynomial":
        return cls(read_values(fields, 'coefficients'), read_name(fields, 'x'))

    def evaluate(self, context: Context) -> Any:
        coefficients = [resolve_value(c, context) for c in self.coefficients]
        if not coefficients:
            return 0.0
        return P.polyval(lookup(context, self.x), coefficients)


register_component(ComponentType(
    name="BreitWigner",
    factory=BreitWigner.from_fields,
    description="Relativistic Breit–Wigner with mass-dependent width.",
))
register_component(ComponentType(
    name="Polynomial",
    factory=Polynomial.from_fields,
    description="Polynomial sum_k c_k x**k with real or complex coefficients.",
))
