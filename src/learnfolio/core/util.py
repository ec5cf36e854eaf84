"""Small value helpers shared by services and repositories."""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

CENTS = Decimal("0.01")


def normalize_symbol(s: Optional[str]) -> Optional[str]:
    """Normalize symbol: strip whitespace and uppercase; None or empty -> None."""
    if s is None:
        return None
    stripped = s.strip().upper()
    return stripped if stripped else None


def to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    """Convert a number or numeric string to Decimal (floats go through str)."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places for monetary values."""
    return value.quantize(CENTS)
