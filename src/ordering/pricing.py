"""Pricing engine — subtotal, discount, tax and total for a set of lines.

Amounts are rupees as floats, rounded to two decimals at every step that
produces a customer-visible figure.
"""

from collections.abc import Iterable
from dataclasses import dataclass

TAX_RATE = 0.05  # Flat GST on the discounted subtotal
CURRENCY = "INR"


def money(amount: float) -> float:
    """Round an amount to paise."""
    return round(float(amount), 2)


@dataclass(frozen=True)
class PriceSummary:
    subtotal: float
    discount: float
    tax: float
    total: float

    def to_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "discount": self.discount,
            "tax": self.tax,
            "total": self.total,
        }


def _line_amount(line) -> float:
    if isinstance(line, dict):
        return line["unit_price"] * line["quantity"]
    return line.unit_price * line.quantity


def subtotal_of(lines: Iterable) -> float:
    """Sum of unit price times quantity over all lines.

    Lines may be objects or dicts exposing ``unit_price`` and ``quantity``.
    """
    return money(sum(_line_amount(line) for line in lines))


def price_lines(lines: Iterable, discount: float = 0.0) -> PriceSummary:
    """Price a set of lines, applying an already-validated discount.

    The discount is clamped to ``[0, subtotal]`` so the taxable amount and
    the total can never go negative.
    """
    subtotal = subtotal_of(lines)
    applied = money(min(max(discount or 0.0, 0.0), subtotal))
    taxable = subtotal - applied
    tax = money(taxable * TAX_RATE)
    total = money(taxable + tax)
    return PriceSummary(subtotal=subtotal, discount=applied, tax=tax, total=total)
