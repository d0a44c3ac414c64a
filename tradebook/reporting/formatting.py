"""
Indian number formatting for display.

Currency uses lakh/crore digit grouping (₹1,23,45,678.90); compact figures
use K / L / Cr suffixes.
"""

import math

from ..charges.calculator import round_paisa

CURRENCY_SYMBOL = "₹"

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def _group_indian(digits: str) -> str:
    """Group an integer digit string as 12,34,56,789."""
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: float) -> str:
    """Format amount as Indian rupees with exactly 2 decimals."""
    if not math.isfinite(amount):
        return f"{CURRENCY_SYMBOL}{amount}"

    text = f"{round_paisa(abs(amount)):.2f}"
    integer, fraction = text.split(".")
    sign = "-" if amount < 0 and text != "0.00" else ""
    return f"{sign}{CURRENCY_SYMBOL}{_group_indian(integer)}.{fraction}"


def format_compact(amount: float) -> str:
    """Format large numbers in lakhs and crores (e.g. 1.25 Cr, 2.50 L, 5.00 K)."""
    abs_amount = abs(amount)
    sign = "-" if amount < 0 else ""

    if abs_amount >= CRORE:
        return f"{sign}{round_paisa(abs_amount / CRORE):.2f} Cr"
    elif abs_amount >= LAKH:
        return f"{sign}{round_paisa(abs_amount / LAKH):.2f} L"
    elif abs_amount >= THOUSAND:
        return f"{sign}{round_paisa(abs_amount / THOUSAND):.2f} K"

    return f"{sign}{round_paisa(abs_amount):.2f}"


def format_rate(rate: float, decimals: int = 4) -> str:
    """Format a fractional rate as a percentage."""
    return f"{rate * 100:.{decimals}f}%"
