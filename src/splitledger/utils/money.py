"""Conversions between integer cents and user-facing decimal amounts.

Arithmetic inside the ledger only ever sees ``int`` cents. Everything in this
module sits at the boundary: input is rounded to the nearest cent as soon as
it arrives, output is rendered with two decimals.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation
from typing import Optional, Union

CENT = Decimal("0.01")
_STRIP = re.compile(r"[$,\s]")

Number = Union[int, float, Decimal, str]


def dollars_to_cents(value: Number) -> int:
    # floats go through str so that 0.1 + 0.2 lands on 30 cents
    amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_dollars(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def format_dollars(cents: int) -> str:
    return f"{cents_to_dollars(cents):.2f}"


def format_money(cents: int, symbol: str = "$") -> str:
    sign = "-" if cents < 0 else ""
    return f"{sign}{symbol}{abs(cents_to_dollars(cents)):,.2f}"


def parse_dollars_to_cents(text: str) -> Optional[int]:
    """Parse ``"12.50"``, ``"$1,234.56"`` or ``" $ 10 "`` into cents.

    Returns ``None`` for empty, non-numeric, negative or out-of-range input.
    """
    cleaned = _STRIP.sub("", text)
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    try:
        return dollars_to_cents(amount)
    except DecimalException:
        # too many digits for the decimal context
        return None
