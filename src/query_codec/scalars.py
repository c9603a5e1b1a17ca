"""Scalar values accepted as pair keys and values."""

from __future__ import annotations

import math
from typing import Union

__all__ = [
    "Scalar",
    "is_scalar",
    "scalar_to_string",
]

Scalar = Union[str, int, float, bool]


def is_scalar(value: object) -> bool:
    """Return ``True`` when ``value`` is a string, a boolean or a finite number.

    ``nan`` and the infinities have no portable text form and are refused.
    """

    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, (str, int))


def scalar_to_string(value: Scalar) -> str:
    """Return the canonical text form of ``value``.

    Booleans become ``"1"``/``"0"`` and integral floats drop their fractional
    part so ``1.0`` and ``1`` render identically. Other floats use ``repr``,
    so ``1e20`` renders as ``"1e+20"``.
    """

    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Non-finite float has no text form: {value!r}")
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return repr(value)
    raise TypeError(f"Unsupported scalar type: {type(value).__name__}")
