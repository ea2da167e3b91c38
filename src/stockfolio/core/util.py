from decimal import Decimal, InvalidOperation
from typing import Optional

from stockfolio.core.exceptions import ValidationError

ZERO = Decimal("0")
CENT = Decimal("0.01")


def normalize_symbol(s: Optional[str]) -> Optional[str]:
    """Normalize symbol: strip whitespace and uppercase; None or empty -> None."""
    if s is None:
        return None
    stripped = s.strip().upper()
    return stripped if stripped else None


def round2(value: Decimal) -> Decimal:
    """Round to 2 decimal places for monetary values."""
    return value.quantize(CENT)


def to_decimal(value) -> Decimal:
    """Convert ints, floats and strings to a finite Decimal, rejecting garbage."""
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"Invalid decimal value: {value}")
    if not result.is_finite():
        raise ValidationError(f"Decimal value must be finite: {value}")
    return result
