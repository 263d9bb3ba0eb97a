"""Fixed decimal precision rounding shared by every stage of a calculation.

The stepper rounds after each arithmetic operation, so the state it carries is exactly
the state that gets printed. Python's built-in `round()` rounds half to even, which
would make `2.5 -> 2` while the printed tables use half away from zero; this module
does the latter.
"""
import math

__all__ = ('MAX_PRECISION', 'round_to_precision', 'check_precision')

#: 10**MAX_PRECISION is still a finite float
MAX_PRECISION: int = 300


def check_precision(precision: int) -> int:
    """Return `precision` if it is within 0..MAX_PRECISION.

    Raises:
        ValueError: Otherwise.
    """
    if not 0 <= precision <= MAX_PRECISION:
        raise ValueError(f"precision must be in 0..{MAX_PRECISION}, got {precision}")
    return precision


def round_to_precision(value: float, precision: int) -> float:
    """Round `value` to `precision` decimal digits, halves away from zero.

    Values too large to scale by 10**precision carry no fractional digits at that
    precision and are returned unchanged, as are infinities and NaN.

    Args:
        value: Number to round.
        precision: Number of decimal digits, 0..MAX_PRECISION. Zero rounds to the nearest integer.

    Returns:
        round_half_away_from_zero(value * 10**precision) / 10**precision

    Raises:
        ValueError: If precision is out of range.

    Examples:
        >>> round_to_precision(2.5, 0)
        3.0
        >>> round_to_precision(-1.25, 1)
        -1.3
    """
    check_precision(precision)
    scale = 10.0 ** precision
    scaled = abs(value) * scale
    if not math.isfinite(scaled):
        return value
    # adding 0.0 turns -0.0 into 0.0
    return math.copysign(math.floor(scaled + 0.5), value) / scale + 0.0
