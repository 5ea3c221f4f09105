"""Textual encoding of complex numbers used in model files.

Model files store real numbers as JSON numbers and complex numbers as strings
of the form ``"<re>+<im>i"`` (``"1.2-3.4i"``, ``"0.5 + 2i"``, ``"-i"``).
On input ``j`` and ``im`` are accepted as the imaginary suffix as well.
"""

from __future__ import annotations

import math
import numbers
import re
from typing import Any

from amplitude_model.errors import ValueFormatError

__all__ = ['parse_complex', 'parse_number', 'format_complex', 'format_number']

_UNSIGNED = r'(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf|nan)'
_SUFFIX = r'(?:im|i|j)'

_REAL_RE = re.compile(rf'^\s*(?P<re>[+-]?{_UNSIGNED})\s*$', re.IGNORECASE)
_IMAG_RE = re.compile(rf'^\s*(?P<sign>[+-]?)\s*(?P<im>{_UNSIGNED})?\s*\*?\s*{_SUFFIX}\s*$', re.IGNORECASE)
_FULL_RE = re.compile(
    rf'^\s*(?P<re>[+-]?{_UNSIGNED})\s*(?P<sign>[+-])\s*(?P<im>{_UNSIGNED})?\s*\*?\s*{_SUFFIX}\s*$',
    re.IGNORECASE,
)


def _imag_part(sign: str, magnitude: str | None) -> float:
    value = 1.0 if magnitude is None else float(magnitude)
    return -value if sign == '-' else value


def parse_complex(text: str) -> complex:
    """Parse a complex-encoded string into a Python ``complex``.

    Raises:
        ValueFormatError: If ``text`` is not a recognised encoding
    """
    if not isinstance(text, str):
        raise ValueFormatError(f"Expected a string, got {type(text).__name__}")

    m = _REAL_RE.match(text)
    if m:
        return complex(float(m.group('re')), 0.0)
    m = _IMAG_RE.match(text)
    if m:
        return complex(0.0, _imag_part(m.group('sign'), m.group('im')))
    m = _FULL_RE.match(text)
    if m:
        return complex(float(m.group('re')), _imag_part(m.group('sign'), m.group('im')))
    raise ValueFormatError(f"Cannot parse {text!r} as a complex number")


def parse_number(value: Any) -> float | complex:
    """Interpret a JSON value as a number.

    JSON numbers come back as ``float``; strings are parsed with
    :func:`parse_complex` and returned as ``float`` when they carry no
    imaginary part.
    """
    if isinstance(value, bool):
        raise ValueFormatError(f"Booleans are not numeric values: {value!r}")
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, numbers.Complex):
        return complex(value)
    if isinstance(value, str):
        if _REAL_RE.match(value):
            return float(_REAL_RE.match(value).group('re'))
        return parse_complex(value)
    raise ValueFormatError(f"Cannot interpret {value!r} as a number")


def _fmt(x: float) -> str:
    # repr gives the shortest string that round-trips exactly
    return repr(float(x))


def format_complex(z: complex) -> str:
    """Format ``z`` as ``"<re>+<im>i"`` so that ``parse_complex`` restores it exactly."""
    z = complex(z)
    sign = '-' if math.copysign(1.0, z.imag) < 0 else '+'
    return f"{_fmt(z.real)}{sign}{_fmt(abs(z.imag))}i"


def format_number(value: float | complex) -> float | str:
    """Inverse of :func:`parse_number`: reals stay numbers, complex values become strings."""
    if isinstance(value, numbers.Real):
        return float(value)
    return format_complex(value)
