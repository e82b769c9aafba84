"""
Amount parsing

Money is Decimal end to end. Request bodies may carry numbers or numeric
strings; both are parsed through str() so 0.1 stays 0.1.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from core.constants import Accounting
from core.ledger.errors import ValidationError


def quantize(amount: Decimal) -> Decimal:
    """Round to the storage precision (2 dp)"""
    return amount.quantize(Accounting.AMOUNT_QUANTUM)


def parse_amount(value: Any, positive: bool = True) -> Decimal:
    """Parse a request amount

    Args:
        value: number or numeric string
        positive: require amount > 0

    Returns:
        Decimal rounded to 2 dp

    Raises:
        ValidationError: missing, non-numeric, non-finite, or not positive
    """
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError("Amount is required")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError("Amount must be a finite number")

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"Invalid amount: {value}") from None

    if not amount.is_finite():
        raise ValidationError("Amount must be a finite number")

    amount = quantize(amount)
    if positive and amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    return amount


def money(amount: Decimal) -> str:
    """Render an amount for API output (2 dp string)"""
    return str(amount.quantize(Accounting.AMOUNT_QUANTUM, rounding=ROUND_HALF_UP))
