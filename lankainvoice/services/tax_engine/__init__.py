"""
Tax Engine Module.

Pure Sri Lankan tax logic shared by invoice creation, validation and the
stateless /tax endpoints. No database, network or clock access.

Sub-modules:
- types: Immutable inputs and results
- rates: VAT / SSCL rates and per-line rate selection
- calculator: VAT, SVAT and SSCL calculation
- validation: IRD compliance checks (errors vs warnings)
- adjustments: Reverse charge VAT and withholding tax
"""
from .adjustments import (
    calculate_reverse_charge_vat,
    calculate_withholding_tax,
    is_reverse_charge_applicable,
)
from .calculator import calculate_invoice_taxes, is_exempt_supply
from .rates import SSCL_RATE, VAT_STANDARD_RATE
from .types import (
    ClientProfile,
    InvoiceDraft,
    InvoiceType,
    LineItemInput,
    LineItemResult,
    Number,
    RegistrationType,
    SvatVoucher,
    TaxBreakdown,
    TaxCalculationResult,
    TaxCategory,
    TaxRegime,
    TaxSummary,
    TenantTaxProfile,
    ValidationResult,
    round_money,
    to_decimal,
)
from .validation import validate_tax_invoice

__all__ = [
    # Constants
    "SSCL_RATE",
    "VAT_STANDARD_RATE",
    # Types
    "Number",
    "ClientProfile",
    "InvoiceDraft",
    "InvoiceType",
    "LineItemInput",
    "LineItemResult",
    "RegistrationType",
    "SvatVoucher",
    "TaxBreakdown",
    "TaxCalculationResult",
    "TaxCategory",
    "TaxRegime",
    "TaxSummary",
    "TenantTaxProfile",
    "ValidationResult",
    # Functions
    "calculate_invoice_taxes",
    "validate_tax_invoice",
    "is_exempt_supply",
    "calculate_reverse_charge_vat",
    "calculate_withholding_tax",
    "is_reverse_charge_applicable",
    "round_money",
    "to_decimal",
]
