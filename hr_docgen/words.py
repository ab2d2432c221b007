"""
Amount-in-words conversion using the Indian numbering grouping
(crore / lakh / thousand / hundred).
"""

from __future__ import annotations

from decimal import Decimal

ONES = [
    "",
    "One",
    "Two",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
    "Ten",
    "Eleven",
    "Twelve",
    "Thirteen",
    "Fourteen",
    "Fifteen",
    "Sixteen",
    "Seventeen",
    "Eighteen",
    "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# (width, unit) from the most significant end of the 9-digit padded amount.
GROUPS = [(2, "Crore"), (2, "Lakh"), (2, "Thousand"), (1, "Hundred"), (2, "")]
MAX_SUPPORTED_AMOUNT = 999_999_999


def two_digit_words(value: int) -> str:
    if value < 20:
        return ONES[value]
    tens, ones = divmod(value, 10)
    if ones == 0:
        return TENS[tens]
    return f"{TENS[tens]} {ONES[ones]}"


def number_to_words(amount: int | float | Decimal | str) -> str:
    """
    Convert the integer part of a non-negative amount to English words.

    Example: 1234567 -> "Twelve Lakh Thirty Four Thousand Five Hundred and Sixty Seven"

    Raises:
        ValueError: If the amount is negative or has more than nine digits.
    """
    whole = int(Decimal(str(amount)))
    if whole < 0:
        raise ValueError(f"Cannot convert negative amount to words: {amount}")
    if whole > MAX_SUPPORTED_AMOUNT:
        raise ValueError(f"Amounts above {MAX_SUPPORTED_AMOUNT} are not supported: {amount}")
    if whole == 0:
        return "Zero"

    digits = str(whole).zfill(9)
    words: list[str] = []
    offset = 0
    for width, unit in GROUPS:
        group = int(digits[offset : offset + width])
        offset += width
        if group == 0:
            continue
        if unit:
            words.append(f"{two_digit_words(group)} {unit}")
        else:
            # Only the final remainder is joined with "and".
            if words:
                words.append("and")
            words.append(two_digit_words(group))
    return " ".join(words).strip()


def amount_in_words(amount: Decimal) -> str:
    """Words for a net amount as printed on the payslip; negatives are prefixed with "Minus"."""
    whole = int(amount)
    if whole < 0:
        return f"Minus {number_to_words(-whole)}"
    return number_to_words(whole)
