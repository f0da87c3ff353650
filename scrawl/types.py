"""Runtime values and numeric helpers for Scrawl.

Scrawl has three runtime kinds, all represented by immutable Python
values: Number (`int` for Integer, `float` for Float), String (`str`)
and Boolean (`bool`). Since `bool` is a subclass of `int` in Python,
every numeric check here excludes booleans explicitly.

Integers are signed 64-bit quantities. Python integers are unbounded, so
integer results are range-checked and overflow is reported as a
`NumericFaultError` instead of wrapping.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Tuple

from .errors import NumericFaultError
from .lexer import INT_MIN, INT_MAX


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def type_name(value: Any) -> str:
    """Return the Scrawl kind name of a runtime value."""
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, int):
        return 'Integer'
    if isinstance(value, float):
        return 'Float'
    if isinstance(value, str):
        return 'String'
    return type(value).__name__


def check_integer(value: int) -> int:
    if value < INT_MIN or value > INT_MAX:
        raise NumericFaultError('integer overflow')
    return value


def promote(a: Any, b: Any) -> Tuple[Any, Any]:
    """Widen both operands to float if either one is a float."""
    if isinstance(a, float) or isinstance(b, float):
        return float(a), float(b)
    return a, b


def int_divide(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    if b == 0:
        raise NumericFaultError('integer division by zero')
    quotient = abs(a) // abs(b)
    return check_integer(quotient if (a < 0) == (b < 0) else -quotient)


def int_modulo(a: int, b: int) -> int:
    """Remainder of truncating division; takes the sign of the dividend."""
    if b == 0:
        raise NumericFaultError('integer modulo by zero')
    return a - b * int_divide(a, b)


def float_divide(a: float, b: float) -> float:
    # IEEE-754: x/0 is a signed infinity, 0/0 is NaN.
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def float_modulo(a: float, b: float) -> float:
    if b == 0.0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


def power(a: Any, b: Any) -> float:
    """`a ^ b` computed on floats; the result is always a Float."""
    base, exponent = float(a), float(b)
    odd = exponent.is_integer() and int(exponent) % 2 == 1
    if base == 0.0 and exponent < 0:
        # math.pow raises here; IEEE pow gives a pole with the sign of the base.
        return math.copysign(math.inf, base) if odd else math.inf
    try:
        return math.pow(base, exponent)
    except ValueError:
        # Negative base with a non-integer exponent.
        return math.nan
    except OverflowError:
        if base < 0 and odd:
            return -math.inf
        return math.inf


def format_float(value: float) -> str:
    """Render a float the way `print` shows it.

    Integral values drop the fractional part (`5`, not `5.0`) and no value
    is ever shown in exponent notation.
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def to_string(value: Any) -> str:
    """Convert a Scrawl value to its display text."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    return str(value)
