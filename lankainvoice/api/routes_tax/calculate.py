"""
Tax Engine Routes.

Stateless previews of the calculation engine, compliance validation and
presentation helpers. Nothing is persisted.
"""
from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Literal

from fastapi import APIRouter, HTTPException, Query

from lankainvoice import metrics
from lankainvoice.models.schemas import (
    MAX_AMOUNT,
    FormattedAmountOut,
    ReverseChargeOut,
    TaxCalculationOut,
    TaxCalculationRequest,
    TaxValidationOut,
    TaxValidationRequest,
)
from lankainvoice.services.tax_engine import (
    VAT_STANDARD_RATE,
    calculate_invoice_taxes,
    calculate_reverse_charge_vat,
    is_reverse_charge_applicable,
    to_decimal,
    validate_tax_invoice,
)
from lankainvoice.utils.amount_words import amount_in_words
from lankainvoice.utils.currency import format_lkr

logger = logging.getLogger(__name__)
router = APIRouter()


def _parse_amount(raw: str) -> Decimal:
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise HTTPException(status_code=400, detail=f"Invalid amount: {raw!r}") from exc
    if not value.is_finite():
        raise HTTPException(status_code=400, detail=f"Invalid amount: {raw!r}")
    if abs(value) > MAX_AMOUNT:
        raise HTTPException(status_code=400, detail=f"Amount exceeds {MAX_AMOUNT}")
    return value


@router.post("/calculate", response_model=TaxCalculationOut)
async def calculate_taxes(payload: TaxCalculationRequest):
    """
    Calculate VAT / SVAT / SSCL for a set of line items.

    Amounts in the response are rounded to cents; the engine itself keeps
    full precision until this point.
    """
    calculation = calculate_invoice_taxes(
        tenant=payload.tenant.to_domain(),
        client=payload.client.to_domain() if payload.client else None,
        line_items=[item.to_domain() for item in payload.line_items],
        date_of_supply=payload.date_of_supply,
        svat_voucher=payload.svat_voucher.to_domain() if payload.svat_voucher else None,
    )
    metrics.tax_calculation_record(calculation.regime.value)
    try:
        result = calculation.rounded()
        presentation = {
            "total_formatted": format_lkr(result.total),
            "total_in_words": amount_in_words(result.total),
        }
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    out = TaxCalculationOut.model_validate(result)
    return out.model_copy(update=presentation)


@router.post("/validate", response_model=TaxValidationOut)
async def validate_invoice(payload: TaxValidationRequest):
    """Check a draft against IRD tax invoice requirements (errors vs warnings)."""
    result = validate_tax_invoice(
        payload.to_draft(),
        payload.tenant.to_domain(),
        payload.client.to_domain() if payload.client else None,
    )
    metrics.tax_validation_record(result.valid)
    return TaxValidationOut.model_validate(result)


@router.get("/format", response_model=FormattedAmountOut)
async def format_currency(amount: str = Query(..., description="Amount in LKR")):
    """Render an amount as ``Rs. 1,234.50`` and in words for invoice text."""
    value = _parse_amount(amount)
    try:
        words = amount_in_words(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"amount": value, "formatted": format_lkr(value), "in_words": words}


@router.get("/reverse-charge", response_model=ReverseChargeOut)
async def reverse_charge(
    net_amount: str = Query(..., description="Net value of the imported service in LKR"),
    supplier: Literal["local", "foreign"] = Query("foreign"),
    service: Literal["goods", "services"] = Query("services"),
    vat_rate: str | None = Query(None, description="Override VAT rate, e.g. 0.15"),
):
    """Reverse charge VAT the recipient self-accounts for on imported services."""
    net = _parse_amount(net_amount)
    rate = _parse_amount(vat_rate) if vat_rate else VAT_STANDARD_RATE
    applicable = is_reverse_charge_applicable(supplier, service)
    vat = calculate_reverse_charge_vat(net, rate) if applicable else to_decimal(0)
    return {
        "applicable": applicable,
        "net_amount": net,
        "vat_rate": rate,
        "reverse_charge_vat": vat,
    }
