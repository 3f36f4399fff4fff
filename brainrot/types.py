"""Runtime values for BrainRot.

Values form a closed set of tags: Number (a Python ``float``), String
(``str``), Boolean (``bool``) and Nil (the :data:`NIL` singleton). The
helpers here name a value's tag and render values for printing the way
the language has always shown them: integral numbers without a fraction,
``true``/``false`` for booleans and ``undefined`` for nil.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Union


class NilVal:
    """Marker object for the BrainRot nil value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'NIL'

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


NIL = NilVal()

Value = Union[float, str, bool, NilVal]

# Numbers print positionally inside this range and in exponent form outside it.
POSITIONAL_MIN = 1e-6
POSITIONAL_MAX = 1e21


def is_number(value: Any) -> bool:
    # bool is not a float subclass, so booleans never count as numbers
    return isinstance(value, float)


def type_name(value: Any) -> str:
    """Return the BrainRot type name of a runtime value."""
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if value is NIL:
        return 'Nil'
    return type(value).__name__


def format_number(x: float) -> str:
    """Render a number the way the language prints it.

    >>> format_number(3.0)
    '3'
    >>> format_number(0.1 + 0.2)
    '0.30000000000000004'
    >>> format_number(1e-7)
    '1e-7'
    >>> format_number(1e20 + 2 ** 20)
    '100000000000001050000'
    """
    if math.isnan(x):
        return 'NaN'
    if math.isinf(x):
        return 'Infinity' if x > 0 else '-Infinity'
    if x == 0:
        return '0'
    magnitude = abs(x)
    text = repr(x)
    if POSITIONAL_MIN <= magnitude < POSITIONAL_MAX:
        if 'e' in text:
            text = format(Decimal(text), 'f')
        return text[:-2] if text.endswith('.0') else text
    # repr already uses exponent form outside the positional range
    mantissa, _, exponent = text.partition('e')
    sign = '-' if exponent.startswith('-') else '+'
    return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"


def to_string(value: Any) -> str:
    """Convert a BrainRot value to its printed representation."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if value is NIL:
        return 'undefined'
    return str(value)
