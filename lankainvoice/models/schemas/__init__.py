"""Pydantic schemas for API requests and responses.

Sub-modules:
- tax: Tax engine calculation/validation schemas
- invoice: Invoice workflow schemas
- reports: Tax report schemas
- utils: Common utility functions
"""
# Tax schemas
from .tax import (
    ClientProfileIn,
    FormattedAmountOut,
    LineItemIn,
    LineItemResultOut,
    ReverseChargeOut,
    SvatVoucherIn,
    TaxBreakdownIn,
    TaxCalculationOut,
    TaxCalculationRequest,
    TaxValidationOut,
    TaxValidationRequest,
    TenantTaxProfileIn,
)

# Invoice schemas
from .invoice import (
    InvoiceCreate,
    InvoiceIssueOut,
    InvoiceLineIn,
    InvoiceLineOut,
    InvoiceOut,
    PaymentCreate,
)

# Report schemas
from .reports import (
    ComprehensiveReportOut,
    SalesRegisterOut,
    SVATSummaryOut,
    VATReturnOut,
)

# Utils
from .utils import MAX_AMOUNT, MAX_QUANTITY, Money, Quantity, format_amount, format_money

__all__ = [
    # Tax
    "ClientProfileIn",
    "FormattedAmountOut",
    "LineItemIn",
    "LineItemResultOut",
    "ReverseChargeOut",
    "SvatVoucherIn",
    "TaxBreakdownIn",
    "TaxCalculationOut",
    "TaxCalculationRequest",
    "TaxValidationOut",
    "TaxValidationRequest",
    "TenantTaxProfileIn",
    # Invoice
    "InvoiceCreate",
    "InvoiceIssueOut",
    "InvoiceLineIn",
    "InvoiceLineOut",
    "InvoiceOut",
    "PaymentCreate",
    # Reports
    "ComprehensiveReportOut",
    "SalesRegisterOut",
    "SVATSummaryOut",
    "VATReturnOut",
    # Utils
    "MAX_AMOUNT",
    "MAX_QUANTITY",
    "Money",
    "Quantity",
    "format_amount",
    "format_money",
]
