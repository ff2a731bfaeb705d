"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a money string into a Decimal.

    Handles plain and signed numbers ("20", "-33", "45.25"), a leading
    currency symbol ("$100", "-$1,250.50") and thousands separators.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If the string is empty, not a number, or not finite
    """
    if amount_str is None or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = amount_str.strip()

    sign = ""
    if cleaned[0] in "+-":
        sign, cleaned = cleaned[0], cleaned[1:]

    cleaned = re.sub(r"[$€£]", "", cleaned).replace(",", "").strip()

    try:
        amount = Decimal(sign + cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    # Decimal accepts "NaN" and "Infinity"; neither is money
    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")
    return amount
