"""Price strings as the shop lists them.

Prices travel through the cart as the text shown on the product card, with
Indian thousands separators (``"1,200"``). Totals are computed on the parsed
values and rounded to paise.
"""

import math
from typing import Iterable

from protean.exceptions import ValidationError


def parse_amount(value, field: str = "price") -> float:
    """Parse a listed price such as ``"1,200"`` or ``1200.5`` into a float."""
    if isinstance(value, bool):
        raise ValidationError({field: [f"Invalid amount: {value!r}"]})
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        text = str(value or "").replace(",", "").strip()
        if not text:
            raise ValidationError({field: ["Amount is required"]})
        try:
            amount = float(text)
        except ValueError:
            raise ValidationError({field: [f"Invalid amount: {value!r}"]})

    if not math.isfinite(amount):
        raise ValidationError({field: [f"Invalid amount: {value!r}"]})
    if amount < 0:
        raise ValidationError({field: ["Amount cannot be negative"]})
    return amount


def total_of(prices: Iterable) -> float:
    """Sum of listed prices, separators stripped, rounded to 2 decimals."""
    return round(sum(parse_amount(price) for price in prices), 2)


def format_amount(amount: float) -> str:
    """Render an amount the way the shop lists prices (``1,200`` / ``1,200.50``)."""
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"
