"""
Sri Lankan invoice tax calculation (VAT, SVAT, SSCL).

Pure and deterministic: the result depends only on the arguments. Amounts
are never rounded here; use ``TaxCalculationResult.rounded()`` or the
presentation helpers once the figures are final.

Per line (fixed order):
1. line_subtotal   = quantity * unit_price
2. discount_amount = line_subtotal * discount
3. taxable_amount  = line_subtotal - discount_amount
4. tax_amount      = taxable_amount * rate  (0 for exempt / non-taxable /
                     zero-rated lines and for non-VAT suppliers)
5. line_total      = taxable_amount + tax_amount

SSCL is levied once on the aggregate of standard and zero-rated values.
Under SVAT the VAT figure is the voucher's pre-computed tax and SSCL is
suppressed.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, Optional

from .rates import SSCL_RATE, vat_rate_for
from .types import (
    ZERO,
    ClientProfile,
    LineItemInput,
    LineItemResult,
    SvatVoucher,
    TaxBreakdown,
    TaxCalculationResult,
    TaxCategory,
    TaxRegime,
    TaxSummary,
    TenantTaxProfile,
    to_decimal,
)

logger = logging.getLogger(__name__)


def is_exempt_supply(item: LineItemInput | LineItemResult) -> bool:
    """Non-taxable lines are treated exactly like exempt ones."""
    return not item.taxable or item.tax_category == TaxCategory.EXEMPT


def _calculate_line(item: LineItemInput, tenant: TenantTaxProfile) -> LineItemResult:
    quantity = to_decimal(item.quantity)
    unit_price = to_decimal(item.unit_price)
    discount = to_decimal(item.discount)

    line_subtotal = quantity * unit_price
    discount_amount = line_subtotal * discount
    taxable_amount = line_subtotal - discount_amount

    if is_exempt_supply(item):
        tax_rate = ZERO
    else:
        tax_rate = vat_rate_for(item.tax_category, tenant)
    tax_amount = taxable_amount * tax_rate

    return LineItemResult(
        description=item.description,
        quantity=quantity,
        unit_price=unit_price,
        discount=discount,
        taxable=item.taxable,
        tax_category=item.tax_category,
        line_subtotal=line_subtotal,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        tax_rate=tax_rate,
        tax_amount=tax_amount,
        line_total=taxable_amount + tax_amount,
    )


def calculate_invoice_taxes(
    tenant: TenantTaxProfile,
    client: Optional[ClientProfile],
    line_items: Iterable[LineItemInput],
    date_of_supply: dt.date,
    svat_voucher: Optional[SvatVoucher] = None,
) -> TaxCalculationResult:
    """
    Calculate every tax on an invoice.

    Args:
        tenant: Supplier tax registration snapshot
        client: Counterparty snapshot (not used by the arithmetic; kept so
            callers pass the full invoice context)
        line_items: Invoice rows
        date_of_supply: Caller-supplied date of supply
        svat_voucher: Pre-computed SVAT voucher for SVAT suppliers

    Returns:
        TaxCalculationResult with per-line detail, aggregates and supply summary
    """
    regime = tenant.regime
    if tenant.has_regime_conflict:
        logger.warning("Tenant profile is both VAT and SVAT registered; applying VAT")

    subtotal = ZERO
    total_discount = ZERO
    line_vat = ZERO
    sscl_base = ZERO
    taxable_supplies = ZERO
    zero_rated_supplies = ZERO
    exempt_supplies = ZERO

    results: list[LineItemResult] = []
    for item in line_items:
        line = _calculate_line(item, tenant)
        results.append(line)

        subtotal += line.line_subtotal
        total_discount += line.discount_amount
        line_vat += line.tax_amount

        if is_exempt_supply(line):
            exempt_supplies += line.taxable_amount
            continue

        sscl_base += line.taxable_amount
        if line.tax_category == TaxCategory.ZERO_RATED:
            zero_rated_supplies += line.taxable_amount
        else:
            taxable_supplies += line.taxable_amount

    if regime == TaxRegime.SVAT:
        vat_amount = to_decimal(svat_voucher.tax_amount) if svat_voucher else ZERO
        sscl_amount = ZERO
    else:
        vat_amount = line_vat
        sscl_amount = sscl_base * SSCL_RATE if tenant.sscl_applicable else ZERO

    total_tax = vat_amount + sscl_amount
    total = subtotal - total_discount + total_tax

    logger.debug(
        "Calculated invoice taxes regime=%s lines=%d date_of_supply=%s total=%s",
        regime.value,
        len(results),
        date_of_supply,
        total,
    )

    return TaxCalculationResult(
        subtotal=subtotal,
        total_discount=total_discount,
        tax_breakdown=TaxBreakdown(
            vat_amount=vat_amount,
            sscl_amount=sscl_amount,
            total_tax=total_tax,
        ),
        total=total,
        tax_summary=TaxSummary(
            taxable_supplies=taxable_supplies,
            zero_rated_supplies=zero_rated_supplies,
            exempt_supplies=exempt_supplies,
        ),
        line_items=tuple(results),
        regime=regime,
    )
