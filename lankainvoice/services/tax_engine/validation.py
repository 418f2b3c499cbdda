"""
IRD compliance checks for invoices.

Two severities:
- errors block issuing the invoice
- warnings are advisory and shown to the user alongside
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from .calculator import is_exempt_supply
from .types import (
    ClientProfile,
    InvoiceDraft,
    InvoiceType,
    RegistrationType,
    TaxRegime,
    TenantTaxProfile,
    ValidationResult,
)

logger = logging.getLogger(__name__)

SUPPLIER_VAT_NUMBER_REQUIRED = "Supplier VAT number is required for tax invoices"
CUSTOMER_TIN_RECOMMENDED = "Customer TIN is recommended for B2B invoices with taxable supplies"
CUSTOMER_VAT_NUMBER_RECOMMENDED = "Customer VAT Number is recommended for VAT registered customers"
SVAT_VOUCHER_RECOMMENDED = "SVAT registered businesses should link an SVAT voucher to tax invoices"
SSCL_BREAKDOWN_RECOMMENDED = "SSCL should be calculated and displayed separately"
INVOICE_NUMBER_FORMAT = "Invoice number should contain only uppercase letters, numbers, and hyphens"

_INVOICE_NUMBER_RE = re.compile(r"^[A-Z0-9-]+$")


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def validate_tax_invoice(
    invoice: InvoiceDraft,
    tenant: TenantTaxProfile,
    client: Optional[ClientProfile],
) -> ValidationResult:
    """Check an invoice against Sri Lankan tax invoice requirements."""
    errors: list[str] = []
    warnings: list[str] = []

    is_tax_invoice = invoice.invoice_type == InvoiceType.TAX_INVOICE
    has_taxable_lines = any(not is_exempt_supply(item) for item in invoice.line_items)

    if is_tax_invoice and tenant.regime == TaxRegime.VAT and _blank(tenant.vat_number):
        errors.append(SUPPLIER_VAT_NUMBER_REQUIRED)

    if has_taxable_lines and (client is None or _blank(client.tin)):
        warnings.append(CUSTOMER_TIN_RECOMMENDED)

    if client is not None and client.registration_type == RegistrationType.VAT and _blank(client.vat_number):
        warnings.append(CUSTOMER_VAT_NUMBER_RECOMMENDED)

    if is_tax_invoice and tenant.regime == TaxRegime.SVAT and invoice.svat_voucher is None:
        warnings.append(SVAT_VOUCHER_RECOMMENDED)

    if tenant.sscl_applicable and tenant.regime != TaxRegime.SVAT and invoice.tax_breakdown is None:
        warnings.append(SSCL_BREAKDOWN_RECOMMENDED)

    if invoice.invoice_number and not _INVOICE_NUMBER_RE.match(invoice.invoice_number):
        warnings.append(INVOICE_NUMBER_FORMAT)

    if errors:
        logger.info("Invoice %s failed validation: %s", invoice.invoice_number or "<draft>", "; ".join(errors))

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
