"""Invoice-related schemas."""
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lankainvoice.utils.amount_words import amount_in_words
from lankainvoice.utils.currency import format_lkr

from .tax import TaxCategoryName
from .utils import MAX_AMOUNT, MAX_QUANTITY, Money, Quantity


class InvoiceLineIn(BaseModel):
    description: str = Field(min_length=1, max_length=500)
    quantity: Decimal = Field(Decimal("1"), gt=0, le=MAX_QUANTITY)
    unit_price: Decimal = Field(ge=0, le=MAX_AMOUNT)
    discount: Decimal = Field(Decimal("0"), ge=0, le=1)
    taxable: bool = True
    tax_category: TaxCategoryName = "standard"


class InvoiceCreate(BaseModel):
    client_id: int | None = None
    invoice_type: Literal["proforma", "tax_invoice", "credit_note", "debit_note"] = "tax_invoice"
    date_issued: dt.date | None = None
    date_of_supply: dt.date | None = None
    due_date: dt.date | None = None
    svat_voucher_id: int | None = None
    notes: str | None = None
    lines: list[InvoiceLineIn] = Field(min_length=1)


class InvoiceLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    quantity: Quantity
    unit_price: Money
    discount: Quantity
    taxable: bool
    tax_category: str
    tax_rate: Quantity
    tax_amount: Money
    line_total: Money


class InvoiceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    invoice_type: str
    status: str
    date_issued: dt.date
    date_of_supply: dt.date | None = None
    due_date: dt.date | None = None
    subtotal: Money
    total_discount: Money
    vat_amount: Money
    sscl_amount: Money
    total_tax: Money
    total: Money
    taxable_supplies: Money
    zero_rated_supplies: Money
    exempt_supplies: Money
    amount_paid: Money
    amount_due: Money
    client_snapshot: dict[str, Any] = Field(default_factory=dict)
    svat_voucher_id: int | None = None
    notes: str | None = None
    sent_at: dt.datetime | None = None
    paid_at: dt.datetime | None = None
    total_formatted: str | None = None
    total_in_words: str | None = None
    lines: list[InvoiceLineOut] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def populate_presentation(cls, data: Any) -> Any:
        """Add the LKR rendering and amount in words of the invoice total."""
        if hasattr(data, "invoice_number"):
            # SQLAlchemy model
            data = {k: getattr(data, k, None) for k in cls.model_fields.keys() if hasattr(data, k)}
        if isinstance(data, dict) and data.get("total") is not None:
            data = {
                **data,
                "total_formatted": format_lkr(data["total"]),
                "total_in_words": amount_in_words(data["total"]),
            }
        return data


class InvoiceIssueOut(BaseModel):
    invoice: InvoiceOut
    warnings: list[str] = Field(default_factory=list)


class PaymentCreate(BaseModel):
    amount: Decimal = Field(le=MAX_AMOUNT)
    method: Literal["cash", "cheque", "bank_transfer", "online", "card"] = "bank_transfer"
    reference: str | None = Field(None, max_length=100)
