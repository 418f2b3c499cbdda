from __future__ import annotations

from lankainvoice.services.tax_engine.types import Number, round_money, to_decimal


def format_lkr(amount: Number) -> str:
    """Render Sri Lankan Rupees: ``11750 -> "Rs. 11,750.00"``."""
    q = round_money(to_decimal(amount))
    if q < 0:
        return f"-Rs. {-q:,.2f}"
    return f"Rs. {q:,.2f}"
