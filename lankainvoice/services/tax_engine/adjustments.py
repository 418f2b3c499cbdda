"""Reverse charge VAT and withholding tax helpers."""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from .rates import VAT_STANDARD_RATE
from .types import ZERO, Number, to_decimal


def is_reverse_charge_applicable(supplier: str, service: str) -> bool:
    """Reverse charge applies to services imported from foreign suppliers."""
    return supplier == "foreign" and service == "services"


def calculate_reverse_charge_vat(net_amount: Number, vat_rate: Optional[Number] = None) -> Decimal:
    rate = to_decimal(vat_rate) or VAT_STANDARD_RATE
    return to_decimal(net_amount) * rate


def calculate_withholding_tax(net_amount: Number, wht_rate: Number, wht_applicable: bool) -> Decimal:
    if not wht_applicable:
        return ZERO
    return to_decimal(net_amount) * to_decimal(wht_rate)
