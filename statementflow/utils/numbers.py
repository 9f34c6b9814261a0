"""Amount parsing helpers."""
from decimal import Decimal, InvalidOperation
from typing import Optional, Union


def parse_amount(amount: Union[str, Decimal, int, float, None]) -> Optional[Decimal]:
    """
    Parse a signed amount into a finite Decimal.

    Args:
        amount: Amount text such as "-1,234.50" or "$5.00", or a number

    Returns:
        Decimal value, or None if the amount is empty, malformed or not finite
    """
    if amount is None:
        return None
    if isinstance(amount, Decimal):
        value = amount
    else:
        text = str(amount).strip().replace("$", "").replace(",", "")
        if not text:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    return value if value.is_finite() else None
