"""Tax engine request/response schemas."""
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from lankainvoice.services.tax_engine import (
    ClientProfile,
    InvoiceDraft,
    InvoiceType,
    LineItemInput,
    RegistrationType,
    SvatVoucher,
    TaxBreakdown,
    TaxCategory,
    TaxRegime,
    TenantTaxProfile,
)

from .utils import MAX_AMOUNT, MAX_QUANTITY, Money, Quantity

TaxCategoryName = Literal["standard", "zero-rated", "exempt"]


class TenantTaxProfileIn(BaseModel):
    vat_registered: bool = False
    vat_number: str | None = Field(None, max_length=20)
    svat_registered: bool = False
    sscl_applicable: bool = False
    default_vat_rate: Decimal = Field(Decimal("0.15"), ge=0, le=1)
    fiscal_year_start: str = Field("04-01", pattern=r"^(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")
    tin: str | None = Field(None, max_length=20)

    def to_domain(self) -> TenantTaxProfile:
        # VAT + SVAT is rejected here; the engine alone would only log it
        return TenantTaxProfile.strict(**self.model_dump())


class ClientProfileIn(BaseModel):
    registration_type: Literal["vat", "svat", "none"] = "none"
    tin: str | None = Field(None, max_length=20)
    vat_number: str | None = Field(None, max_length=20)
    name: str | None = None

    def to_domain(self) -> ClientProfile:
        return ClientProfile(
            registration_type=RegistrationType(self.registration_type),
            tin=self.tin,
            vat_number=self.vat_number,
            name=self.name,
        )


class LineItemIn(BaseModel):
    description: str = Field(min_length=1, max_length=500)
    quantity: Decimal = Field(gt=0, le=MAX_QUANTITY)
    unit_price: Decimal = Field(ge=0, le=MAX_AMOUNT)
    discount: Decimal = Field(Decimal("0"), ge=0, le=1, description="Fraction, 0.1 = 10%")
    taxable: bool = True
    tax_category: TaxCategoryName = "standard"

    def to_domain(self) -> LineItemInput:
        return LineItemInput.build(**self.model_dump())


class SvatVoucherIn(BaseModel):
    voucher_id: str
    voucher_number: str
    voucher_value: Decimal = Field(ge=0, le=MAX_AMOUNT)
    tax_amount: Decimal = Field(ge=0, le=MAX_AMOUNT)

    def to_domain(self) -> SvatVoucher:
        return SvatVoucher(**self.model_dump())


class TaxBreakdownIn(BaseModel):
    vat_amount: Decimal = Decimal("0")
    sscl_amount: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")


class TaxCalculationRequest(BaseModel):
    tenant: TenantTaxProfileIn
    client: ClientProfileIn | None = None
    line_items: list[LineItemIn] = Field(min_length=1)
    date_of_supply: dt.date
    svat_voucher: SvatVoucherIn | None = None


class TaxValidationRequest(BaseModel):
    tenant: TenantTaxProfileIn
    client: ClientProfileIn | None = None
    invoice_type: Literal["proforma", "tax_invoice", "credit_note", "debit_note"] = "tax_invoice"
    line_items: list[LineItemIn] = Field(default_factory=list)
    tax_breakdown: TaxBreakdownIn | None = None
    date_of_supply: dt.date | None = None
    invoice_number: str | None = None
    svat_voucher: SvatVoucherIn | None = None
    status: str = "draft"

    def to_draft(self) -> InvoiceDraft:
        return InvoiceDraft(
            invoice_type=InvoiceType(self.invoice_type),
            line_items=tuple(item.to_domain() for item in self.line_items),
            tax_breakdown=TaxBreakdown(**self.tax_breakdown.model_dump()) if self.tax_breakdown else None,
            date_of_supply=self.date_of_supply,
            invoice_number=self.invoice_number,
            svat_voucher=self.svat_voucher.to_domain() if self.svat_voucher else None,
            status=self.status,
        )


class LineItemResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    description: str
    quantity: Quantity
    unit_price: Money
    discount: Quantity
    taxable: bool
    tax_category: TaxCategory
    line_subtotal: Money
    discount_amount: Money
    taxable_amount: Money
    tax_rate: Quantity
    tax_amount: Money
    line_total: Money


class TaxBreakdownOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    vat_amount: Money
    sscl_amount: Money
    total_tax: Money


class TaxSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    taxable_supplies: Money
    zero_rated_supplies: Money
    exempt_supplies: Money


class TaxCalculationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    regime: TaxRegime
    subtotal: Money
    total_discount: Money
    tax_breakdown: TaxBreakdownOut
    total: Money
    tax_summary: TaxSummaryOut
    line_items: list[LineItemResultOut]
    total_formatted: str | None = None
    total_in_words: str | None = None


class TaxValidationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    valid: bool
    errors: list[str]
    warnings: list[str]


class FormattedAmountOut(BaseModel):
    amount: Money
    formatted: str
    in_words: str


class ReverseChargeOut(BaseModel):
    applicable: bool
    net_amount: Money
    vat_rate: Quantity
    reverse_charge_vat: Money
