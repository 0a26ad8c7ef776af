"""Number handling shared by the engine and history.

Operands are kept as strings; these helpers convert between the two:
- Lenient parsing (anything that is not a number parses to None)
- Rounding to 8 decimal places
- Operand rendering and thousands grouping
"""

import math
from typing import Optional


PRECISION = 100000000  # 8 decimal places


def round_result(value: float) -> float:
    """Round to 8 decimal places, halves towards +infinity.

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    scaled = value * PRECISION
    if not math.isfinite(scaled):
        # Past 2**53 every float is already integral.
        return value
    return math.floor(scaled + 0.5) / PRECISION


def number_to_string(value: float) -> str:
    """Render a number the way it is stored in an operand.

    Integral values drop the fractional part and small values never use
    exponent notation, so ``8.0`` becomes ``"8"`` and ``1e-08`` becomes
    ``"0.00000001"``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if abs(value) < 1e-4:
        return f"{value:.8f}".rstrip("0").rstrip(".")
    return repr(value)


def parse_operand(text: str) -> Optional[float]:
    """Parse an operand string, returning None when it is not a number."""
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value):
        return None
    return value


def format_for_display(text: str, thousands_separator: str = ",") -> str:
    """Group the integer part of an operand and reattach its fraction.

    A non-numeric integer part renders as an empty string.

    Args:
        text: Operand as stored by the engine.
        thousands_separator: Separator placed between digit groups.

    Returns:
        Display text, e.g. ``"1,234.50"`` for ``"1234.50"``.
    """
    integer_text, point, decimal_digits = str(text).partition(".")

    integer_value = parse_operand(integer_text)
    if integer_value is None:
        integer_display = ""
    elif math.isinf(integer_value):
        integer_display = "∞" if integer_value > 0 else "-∞"
    else:
        integer_display = f"{int(integer_value):,}".replace(",", thousands_separator)
        if integer_value == 0 and integer_text.startswith("-"):
            integer_display = "-0"  # keeps the sign of "-0.5"

    if point:
        return f"{integer_display}.{decimal_digits}"
    return integer_display
