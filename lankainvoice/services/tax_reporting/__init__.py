"""Tax Reporting Module.

IRD period reports for Sri Lankan VAT, SVAT and SSCL.

Sub-modules:
- period_utils: Quarter, fiscal quarter and filing window helpers
- computations: VAT return, SVAT summary and sales register builders
- reporting_service: Main TaxReportingService class
"""
from .computations import (
    SALES_REGISTER_HEADERS,
    build_sales_register,
    build_svat_summary,
    build_vat_return,
    sales_register_to_csv,
)
from .period_utils import (
    get_fiscal_quarter,
    get_quarter,
    get_tax_period,
    get_vat_filing_period,
    is_vat_return_due,
    vat_return_due_date,
)
from .reporting_service import TaxReportingService

__all__ = [
    # Constants
    "SALES_REGISTER_HEADERS",
    # Computation functions
    "build_vat_return",
    "build_svat_summary",
    "build_sales_register",
    "sales_register_to_csv",
    # Utilities
    "get_quarter",
    "get_vat_filing_period",
    "get_fiscal_quarter",
    "get_tax_period",
    "is_vat_return_due",
    "vat_return_due_date",
    # Service class
    "TaxReportingService",
]
