"""Common utility functions for schemas."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import PlainSerializer


def format_amount(value: Decimal | None) -> str | None:
    """Format Decimal values without trailing zeros (quantities, rates)."""
    if value is None:
        return None

    normalized = value.normalize()
    if normalized == normalized.to_integral():
        normalized = normalized.quantize(Decimal("1"))

    text = format(normalized, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def format_money(value: Decimal | None) -> str | None:
    """Money goes over the wire as a two-decimal string, never a float."""
    if value is None:
        return None
    return format(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP), "f")


Money = Annotated[Decimal, PlainSerializer(format_money, return_type=str, when_used="json")]
Quantity = Annotated[Decimal, PlainSerializer(format_amount, return_type=str, when_used="json")]

# Upper bounds for API input; products stay well inside Decimal precision
MAX_AMOUNT = Decimal("999999999999.99")
MAX_QUANTITY = Decimal("1000000")
