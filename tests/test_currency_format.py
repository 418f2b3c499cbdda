from decimal import Decimal

import pytest

from lankainvoice.services.tax_engine import round_money
from lankainvoice.utils.amount_words import amount_in_words, integer_to_words
from lankainvoice.utils.currency import format_lkr


@pytest.mark.parametrize(
    "amount,expected",
    [
        (11750, "Rs. 11,750.00"),
        (100000, "Rs. 100,000.00"),
        (1500000, "Rs. 1,500,000.00"),
        (562825.50, "Rs. 562,825.50"),
        (25, "Rs. 25.00"),
        (0, "Rs. 0.00"),
        (Decimal("0.005"), "Rs. 0.01"),
        ("1234.567", "Rs. 1,234.57"),
        (-1500, "-Rs. 1,500.00"),
    ],
)
def test_format_lkr(amount, expected):
    assert format_lkr(amount) == expected


@pytest.mark.parametrize(
    "amount,expected",
    [
        (11750, "Eleven Thousand Seven Hundred Fifty Rupees Only"),
        (100000, "One Hundred Thousand Rupees Only"),
        (1500000, "One Million Five Hundred Thousand Rupees Only"),
        (25, "Twenty Five Rupees Only"),
        (101, "One Hundred One Rupees Only"),
        (562825, "Five Hundred Sixty Two Thousand Eight Hundred Twenty Five Rupees Only"),
        (0, "Zero Rupees Only"),
        (13, "Thirteen Rupees Only"),
    ],
)
def test_amount_in_words_whole_rupees(amount, expected):
    assert amount_in_words(amount) == expected


@pytest.mark.parametrize(
    "amount,expected",
    [
        (11750.50, "Eleven Thousand Seven Hundred Fifty Rupees and Fifty Cents"),
        (100.25, "One Hundred Rupees and Twenty Five Cents"),
        (Decimal("0.99"), "Zero Rupees and Ninety Nine Cents"),
    ],
)
def test_amount_in_words_with_cents(amount, expected):
    assert amount_in_words(amount) == expected


def test_amount_in_words_rounds_to_cents_first():
    assert amount_in_words(Decimal("10.999")) == "Eleven Rupees Only"


def test_amount_in_words_negative():
    assert amount_in_words(-25) == "Minus Twenty Five Rupees Only"


def test_integer_to_words_rejects_amounts_beyond_trillions():
    assert integer_to_words(2_000_000_000_000) == "Two Trillion"
    with pytest.raises(ValueError):
        integer_to_words(10**15)


@pytest.mark.parametrize("render", [amount_in_words, format_lkr, round_money])
def test_amounts_beyond_decimal_precision_raise_value_error(render):
    with pytest.raises(ValueError):
        render(Decimal("1e30"))
