"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")


def _to_decimal(amount_str: str, original: str) -> Decimal:
    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{original}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{original}': not a finite number")
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_brazilian_number(amount_str: str) -> Decimal:
    """Parse an amount as written in Brazilian bank exports.

    When the value contains a comma it is the decimal separator and every dot
    is a thousands separator:
    - "1.234,56" -> 1234.56
    - "-50,00" -> -50.00
    - "R$ 10,5" -> 10.50
    Without a comma the value is parsed as-is ("1234.56" -> 1234.56).

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount rounded to cents

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    original = amount_str
    amount_str = re.sub(r"R\$|\s", "", amount_str.strip())

    if "," in amount_str:
        amount_str = amount_str.replace(".", "").replace(",", ".")

    return _to_decimal(amount_str, original)


def parse_ofx_amount(amount_str: str) -> Decimal:
    """Parse an OFX ``TRNAMT`` value, accepting comma or dot as decimal separator."""
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")
    return _to_decimal(amount_str.strip().replace(",", "."), amount_str)
