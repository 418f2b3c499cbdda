"""Amount in words for invoice legal text.

Short-scale English without "and" inside a number:
``101 -> "One Hundred One Rupees Only"``,
``11750.50 -> "Eleven Thousand Seven Hundred Fifty Rupees and Fifty Cents"``.
"""
from __future__ import annotations

from lankainvoice.services.tax_engine.types import Number, round_money, to_decimal

ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]
SCALES = ["", "Thousand", "Million", "Billion", "Trillion"]


def _below_thousand(num: int) -> list[str]:
    words: list[str] = []
    hundreds, remainder = divmod(num, 100)
    if hundreds:
        words += [ONES[hundreds], "Hundred"]
    if 10 <= remainder < 20:
        words.append(TEENS[remainder - 10])
    else:
        tens, ones = divmod(remainder, 10)
        if tens:
            words.append(TENS[tens])
        if ones:
            words.append(ONES[ones])
    return words


def integer_to_words(num: int) -> str:
    if num == 0:
        return "Zero"
    groups: list[str] = []
    scale = 0
    while num > 0:
        num, chunk = divmod(num, 1000)
        if chunk:
            if scale >= len(SCALES):
                raise ValueError("Amount too large to express in words")
            part = _below_thousand(chunk)
            if SCALES[scale]:
                part.append(SCALES[scale])
            groups.insert(0, " ".join(part))
        scale += 1
    return " ".join(groups)


def amount_in_words(amount: Number) -> str:
    value = round_money(to_decimal(amount))
    prefix = "Minus " if value < 0 else ""
    value = abs(value)

    rupees = int(value)
    cents = int((value - rupees) * 100)

    text = f"{prefix}{integer_to_words(rupees)} Rupees"
    if cents:
        return f"{text} and {integer_to_words(cents)} Cents"
    return f"{text} Only"
