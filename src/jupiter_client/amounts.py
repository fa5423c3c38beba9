"""Conversions between base-unit token amounts and display amounts.

Base units are the smallest indivisible unit of a token (lamports for SOL).
The float helpers mirror what the aggregator's own SDKs do and lose precision
above 2**53; use the Decimal helpers when exact values matter.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Optional, Union

from jupiter_client.errors import AmountParseError

U64_MAX = 2**64 - 1

# Fractional digits kept by amount_to_string before trimming
STRING_PRECISION = 9


def _check_decimals(decimals: int) -> None:
    if not 0 <= decimals <= 255:
        raise ValueError(f"decimals must be in [0, 255], got {decimals}")


def amount_to_float(amount: int, decimals: int) -> float:
    """Convert base units to a display amount: amount / 10**decimals."""
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    _check_decimals(decimals)
    return amount / 10**decimals


def int_amount_to_float(amount: int, decimals: int) -> float:
    """Signed variant of amount_to_float, for balance deltas."""
    _check_decimals(decimals)
    return amount / 10**decimals


def float_to_amount(amount: float, decimals: int) -> int:
    """Convert a display amount to base units.

    The scaled value is truncated toward zero, not rounded.
    """
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    _check_decimals(decimals)
    return int(amount * 10**decimals)


def trim_right_zeros(value: str) -> str:
    """Strip trailing zeros from the fractional part of a number string."""
    if "." not in value:
        return value
    return value.rstrip("0")


def float_to_string(value: float) -> str:
    """Format a float with the minimum number of fractional digits.

    1.000000000 becomes "1", 1.100000000 becomes "1.1". At most 9 fractional
    digits are kept.
    """
    s = f"{value:.{STRING_PRECISION}f}"
    s = trim_right_zeros(s)
    return s.rstrip(".")


def amount_to_string(amount: int, decimals: int) -> str:
    """Convert base units to a canonical display string.

    Example: amount_to_string(100000, 3) == "100"
    """
    return float_to_string(amount_to_float(amount, decimals))


def amount_to_decimal(amount: int, decimals: int) -> Decimal:
    """Exact conversion of base units to a Decimal display amount."""
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    _check_decimals(decimals)
    return Decimal(f"{amount}e-{decimals}")


def decimal_to_amount(value: Union[Decimal, str, int], decimals: int) -> int:
    """Exact conversion of a Decimal display amount to base units.

    Digits beyond the token's precision are truncated toward zero.
    """
    _check_decimals(decimals)
    try:
        value = Decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"invalid decimal amount: {value!r}") from e
    if not value.is_finite() or value < 0:
        raise ValueError(f"amount must be a finite non-negative number, got {value}")

    with localcontext() as ctx:
        # scaleb rounds to context precision, so make room for every digit
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits) + decimals)
        return int(value.scaleb(decimals))


def parse_amount(value: object, field: str, operation: Optional[str] = None) -> int:
    """Parse a base-unit amount string as an unsigned 64-bit integer.

    Args:
        value: Amount as returned by the API (a string of ASCII digits)
        field: Field name, used in the error message
        operation: Calling operation, used in the error message

    Raises:
        AmountParseError: value is not a digit string or exceeds 2**64 - 1
    """
    if not isinstance(value, str) or not (value.isascii() and value.isdigit()):
        raise AmountParseError(field, value, operation=operation)

    amount = int(value)
    if amount > U64_MAX:
        raise AmountParseError(field, value, operation=operation)
    return amount
