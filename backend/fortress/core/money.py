from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Union

from fortress.core.errors import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Union[Decimal, int, str]) -> Decimal:
    """Parses a currency value into a 2dp Decimal. Floats are refused."""
    if isinstance(value, bool) or isinstance(value, float):
        raise ValidationError("Currency values must be decimal strings, not floats")
    try:
        amount = Decimal(str(value).strip())
        cents = amount.quantize(CENT)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid currency amount: {value!r}")
    if amount != cents:
        raise ValidationError(f"Currency amounts allow at most 2 decimal places: {value!r}")
    return cents


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def total(amounts: Iterable[Decimal]) -> Decimal:
    return quantize(sum(amounts, ZERO))


def fmt(amount: Decimal) -> str:
    """$1,234.50 style rendering for warnings and recommendations."""
    amount = quantize(amount)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
