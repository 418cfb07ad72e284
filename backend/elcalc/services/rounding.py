"""
Half-up rounding for every figure printed on an offer (DKK, metres, seconds).

Ties round up: 4353.125 -> 4353.13, 0.625 -> 0.63.  The float is read through
its shortest repr so 2.675 rounds as the decimal 2.675, not its binary
neighbour.  Negative ties round towards zero (-2.5 -> -2), so a tie always
moves towards positive infinity.
"""
from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal

TWO_PLACES = Decimal("0.01")
WHOLE = Decimal("1")


def _quantize(value: float, quantum: Decimal) -> Decimal:
    d = Decimal(str(value))
    if d < 0:
        return -((-d).quantize(quantum, ROUND_HALF_DOWN))
    return d.quantize(quantum, ROUND_HALF_UP)


def round_half_up(value: float, places: int = 2) -> float:
    return float(_quantize(value, Decimal(1).scaleb(-places)))


def round_money(value: float) -> float:
    """DKK (and metres) to 2 decimals."""
    return float(_quantize(value, TWO_PLACES))


def round_whole(value: float) -> int:
    return int(_quantize(value, WHOLE))


# Component and room times are whole seconds.
round_seconds = round_whole
