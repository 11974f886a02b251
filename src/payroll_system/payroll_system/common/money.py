from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity.

    Matches the rounding of historically generated payroll rows; Python's
    built-in round() uses banker's rounding and must not be used here.
    """
    return math.floor(value + 0.5)


def calculate_percentage(value: float, percentage: float) -> float:
    """Percentage of a value, e.g. calculate_percentage(25000, 12) == 3000."""
    return (value * percentage) / 100


def _group_indian(digits: str) -> str:
    # Last three digits, then groups of two: 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_currency(amount: float) -> str:
    """Format an amount as Indian Rupees with lakh/crore digit grouping."""
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):.3f}".rstrip("0").rstrip(".")
    whole, _, fraction = text.partition(".")
    grouped = _group_indian(whole)
    if fraction:
        grouped = f"{grouped}.{fraction}"
    return f"₹ {sign}{grouped}"
