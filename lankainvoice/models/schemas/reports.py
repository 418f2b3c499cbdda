"""Tax report response schemas."""
from __future__ import annotations

import datetime as dt

from pydantic import BaseModel

from .utils import Money


class ReportPeriodOut(BaseModel):
    start_date: dt.date
    end_date: dt.date
    quarter: int
    year: int


class OutputTaxOut(BaseModel):
    standard_rated_supplies: Money
    zero_rated_supplies: Money
    exempt_supplies: Money
    total_output_tax: Money


class InputTaxOut(BaseModel):
    standard_rated_purchases: Money
    total_input_tax: Money


class VATReturnOut(BaseModel):
    period: ReportPeriodOut
    output_tax: OutputTaxOut
    input_tax: InputTaxOut
    net_vat_payable: Money
    sscl_payable: Money
    total_payable: Money
    invoice_count: int


class SVATSummaryOut(BaseModel):
    period: ReportPeriodOut
    vouchers_used: int
    total_voucher_value: Money
    total_tax_paid: Money
    invoice_count: int


class SalesRegisterEntryOut(BaseModel):
    invoice_number: str
    invoice_date: dt.date
    client_name: str
    client_tin: str | None = None
    client_vat_number: str | None = None
    subtotal: Money
    vat_amount: Money
    sscl_amount: Money
    total: Money
    invoice_type: str


class SalesRegisterSummaryOut(BaseModel):
    total_invoices: int
    total_sales: Money
    total_vat: Money
    total_sscl: Money
    grand_total: Money


class SalesRegisterOut(BaseModel):
    period: ReportPeriodOut
    entries: list[SalesRegisterEntryOut]
    summary: SalesRegisterSummaryOut


class ComprehensiveReportOut(BaseModel):
    sales_register: SalesRegisterOut
    vat_return: VATReturnOut | None = None
    svat_summary: SVATSummaryOut | None = None
