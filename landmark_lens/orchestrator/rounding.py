"""
Coordinate rounding for display.

Two decimals. Values exactly on the rounding boundary go toward +infinity
(12.345 -> 12.35, -1.005 -> -1.0); everything else rounds to nearest.
The float is read through its shortest repr so 12.345 is treated as the
tie it looks like, not as 12.3449999...
"""
import math
from decimal import Decimal, ROUND_HALF_DOWN, ROUND_HALF_UP

_TWO_PLACES = Decimal("0.01")


def round_coordinate(value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"coordinate must be finite, got {value!r}")
    d = Decimal(repr(value))
    # half-down on a negative number moves the tie toward zero, i.e. up
    mode = ROUND_HALF_UP if d >= 0 else ROUND_HALF_DOWN
    return float(d.quantize(_TWO_PLACES, rounding=mode))


def format_coordinate(value: float) -> str:
    return str(round_coordinate(value))
