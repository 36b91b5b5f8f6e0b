# Rev 0.2.2
"""Money helpers: 5% GST on order subtotals, INR display."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

TAX_RATE = 0.05
USD_TO_INR_RATE = 83


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: float
    tax: float
    total: float


def calculate_tax(subtotal: float) -> PriceBreakdown:
    if subtotal < 0:
        raise ValueError("subtotal must be non-negative")
    tax = subtotal * TAX_RATE
    return PriceBreakdown(subtotal=subtotal, tax=tax, total=subtotal + tax)


def _paise(amount: float | None) -> Decimal:
    return Decimal(float(amount or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def same_amount(a: float | None, b: float | None) -> bool:
    """True when both amounts show the same rupees and paise."""
    return _paise(a) == _paise(b)


def usd_to_inr(usd_amount: float, rate: float = USD_TO_INR_RATE) -> float:
    return usd_amount * rate


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    parts = []
    while len(head) > 2:
        parts.insert(0, head[-2:])
        head = head[:-2]
    if head:
        parts.insert(0, head)
    return ",".join(parts + [tail])


def format_inr(amount: float | None) -> str:
    amount = float(amount or 0)
    sign = "-" if amount < 0 else ""
    whole, _, frac = f"{abs(amount):.2f}".partition(".")
    frac = frac.rstrip("0")
    return f"{sign}₹{_group_indian(whole)}{'.' + frac if frac else ''}"


def format_inr_from_usd(usd_amount: float, rate: float = USD_TO_INR_RATE) -> str:
    return format_inr(usd_to_inr(usd_amount, rate))
