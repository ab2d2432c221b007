from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from hr_docgen.records import Deductions, Earnings

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class Totals:
    gross: Decimal
    total_deductions: Decimal
    net: Decimal


def parse_amount(value: str | None) -> Decimal:
    """Parse a numeric form field; blank or malformed input counts as zero."""
    if value is None:
        return ZERO
    text = str(value).strip()
    if not text:
        return ZERO
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return ZERO
    if not parsed.is_finite():
        return ZERO
    return parsed


def compute_totals(earnings: Earnings, deductions: Deductions) -> Totals:
    gross = (
        parse_amount(earnings.basic)
        + parse_amount(earnings.hra)
        + parse_amount(earnings.medical)
        + parse_amount(earnings.other)
    )
    total_deductions = (
        parse_amount(deductions.pf)
        + parse_amount(deductions.tds)
        + parse_amount(deductions.pt)
        + parse_amount(deductions.esi)
    )
    # Net is not clamped; over-deducted slips show a negative amount.
    return Totals(gross=gross, total_deductions=total_deductions, net=gross - total_deductions)


def format_money(value: Decimal | None) -> str:
    if value is None:
        return "n/a"
    return f"₹ {value:,.2f}"


def as_float(value: Decimal | None) -> float | None:
    if value is None:
        return None
    return float(value)
