"""Built-in component kinds.

Importing this package registers every kind with
``amplitude_model.workspace.component_registry``.
"""

from . import basic, form_factors, intensity, lineshapes  # noqa: F401
from .base import Component
from .basic import Const, Parameter, Product, Scale, Sum
from .form_factors import BlattWeisskopf, MomentumPower, blatt_weisskopf
from .intensity import Intensity
from .lineshapes import BreitWigner, Polynomial, breakup_momentum

__all__ = [
    "Component",
    "Const",
    "Parameter",
    "Scale",
    "Sum",
    "Product",
    "BreitWigner",
    "Polynomial",
    "BlattWeisskopf",
    "MomentumPower",
    "Intensity",
    "blatt_weisskopf",
    "breakup_momentum",
]
