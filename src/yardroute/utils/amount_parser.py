"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a price string into a Decimal rounded to cents.

    Handles various formats:
    - "25"
    - "25.00"
    - "$25.00"
    - "1,250.50"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount with two decimal places

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove currency symbols, commas and whitespace
    cleaned = re.sub(r"[$€£¥,\s]", "", amount_str)

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount must not be negative: '{amount_str}'")

    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
