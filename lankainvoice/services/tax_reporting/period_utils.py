"""Period date range calculation utilities.

Sri Lankan VAT is filed quarterly on calendar quarters; the return for a
quarter is due by the 20th of the month following the quarter end.
"""
from datetime import date, timedelta
from typing import Tuple

VAT_RETURN_DUE_DAY = 20


def get_quarter(target: date) -> int:
    return (target.month - 1) // 3 + 1


def get_vat_filing_period(year: int, quarter: int) -> Tuple[date, date]:
    """Return (start_date, end_date) inclusive for a calendar quarter.

    Raises:
        ValueError: If quarter is not 1-4
    """
    if quarter not in (1, 2, 3, 4):
        raise ValueError(f"Invalid quarter: {quarter}. Must be 1-4")
    start_month = (quarter - 1) * 3 + 1
    start = date(year, start_month, 1)
    if quarter == 4:
        end = date(year, 12, 31)
    else:
        end = date(year, start_month + 3, 1) - timedelta(days=1)
    return start, end


def get_fiscal_quarter(target: date, fiscal_year_start: str = "04-01") -> int:
    """Quarter of the tenant's fiscal year (IRD year of assessment starts 1 April)."""
    try:
        start_month = int(fiscal_year_start.split("-")[0])
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid fiscal_year_start: {fiscal_year_start!r}") from e
    if not 1 <= start_month <= 12:
        raise ValueError(f"Invalid fiscal_year_start: {fiscal_year_start!r}")
    return (target.month - start_month) % 12 // 3 + 1


def get_tax_period(target: date) -> str:
    """Human readable period label, e.g. ``January 2024``."""
    return target.strftime("%B %Y")


def vat_return_due_date(year: int, quarter: int) -> date:
    _, end = get_vat_filing_period(year, quarter)
    following = end + timedelta(days=1)
    return following.replace(day=VAT_RETURN_DUE_DAY)


def is_vat_return_due(tenant, today: date) -> bool:
    """True while the previous quarter's return window is open.

    The window runs from the first day after the quarter end up to and
    including the 20th of that month.
    """
    if not tenant.vat_registered:
        return False
    if today.month not in (1, 4, 7, 10):
        return False
    return today.day <= VAT_RETURN_DUE_DAY
