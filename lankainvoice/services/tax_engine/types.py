"""
Tax engine data model.

All values are immutable snapshots built fresh for every calculation or
validation call. Money is carried as ``Decimal``; callers may hand in ints,
floats or strings and they are coerced through ``to_decimal``.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field, replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

from lankainvoice.core.exceptions import TaxRegimeConflictError

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Optional[Number]) -> Decimal:
    """Coerce a numeric input to Decimal without binary float artefacts."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    """Quantize to cents, half-up (IRD presentation rule)."""
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Amount out of range: {value}") from exc


class TaxCategory(str, Enum):
    """Per-line VAT category."""
    STANDARD = "standard"
    ZERO_RATED = "zero-rated"
    EXEMPT = "exempt"


class RegistrationType(str, Enum):
    """Counterparty registration with the Inland Revenue Department."""
    VAT = "vat"
    SVAT = "svat"
    NONE = "none"


class TaxRegime(str, Enum):
    """Effective supplier regime; VAT supersedes SVAT."""
    VAT = "vat"
    SVAT = "svat"
    NONE = "none"


class InvoiceType(str, Enum):
    PROFORMA = "proforma"
    TAX_INVOICE = "tax_invoice"
    CREDIT_NOTE = "credit_note"
    DEBIT_NOTE = "debit_note"


@dataclass(frozen=True)
class TenantTaxProfile:
    vat_registered: bool = False
    vat_number: Optional[str] = None
    svat_registered: bool = False
    sscl_applicable: bool = False
    default_vat_rate: Decimal = Decimal("0.15")
    fiscal_year_start: str = "04-01"
    tin: Optional[str] = None

    @classmethod
    def strict(cls, **kwargs) -> "TenantTaxProfile":
        """Build a profile, rejecting the VAT + SVAT combination outright."""
        if kwargs.get("vat_registered") and kwargs.get("svat_registered"):
            raise TaxRegimeConflictError()
        return cls(**kwargs)

    @property
    def regime(self) -> TaxRegime:
        if self.vat_registered:
            return TaxRegime.VAT
        if self.svat_registered:
            return TaxRegime.SVAT
        return TaxRegime.NONE

    @property
    def has_regime_conflict(self) -> bool:
        return self.vat_registered and self.svat_registered


@dataclass(frozen=True)
class ClientProfile:
    registration_type: RegistrationType = RegistrationType.NONE
    tin: Optional[str] = None
    vat_number: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class LineItemInput:
    description: str
    quantity: Decimal
    unit_price: Decimal
    discount: Decimal = ZERO
    taxable: bool = True
    tax_category: TaxCategory = TaxCategory.STANDARD

    @classmethod
    def build(
        cls,
        description: str,
        quantity: Number,
        unit_price: Number,
        discount: Number = 0,
        taxable: bool = True,
        tax_category: Union[TaxCategory, str] = TaxCategory.STANDARD,
    ) -> "LineItemInput":
        return cls(
            description=description,
            quantity=to_decimal(quantity),
            unit_price=to_decimal(unit_price),
            discount=to_decimal(discount),
            taxable=taxable,
            tax_category=TaxCategory(tax_category),
        )


@dataclass(frozen=True)
class LineItemResult:
    description: str
    quantity: Decimal
    unit_price: Decimal
    discount: Decimal
    taxable: bool
    tax_category: TaxCategory
    line_subtotal: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class SvatVoucher:
    voucher_id: str
    voucher_number: str
    voucher_value: Decimal
    tax_amount: Decimal


@dataclass(frozen=True)
class TaxBreakdown:
    vat_amount: Decimal = ZERO
    sscl_amount: Decimal = ZERO
    total_tax: Decimal = ZERO


@dataclass(frozen=True)
class TaxSummary:
    taxable_supplies: Decimal = ZERO
    zero_rated_supplies: Decimal = ZERO
    exempt_supplies: Decimal = ZERO


@dataclass(frozen=True)
class TaxCalculationResult:
    subtotal: Decimal
    total_discount: Decimal
    tax_breakdown: TaxBreakdown
    total: Decimal
    tax_summary: TaxSummary
    line_items: tuple[LineItemResult, ...]
    regime: TaxRegime = TaxRegime.NONE

    def rounded(self) -> "TaxCalculationResult":
        """Copy with every aggregate quantized to cents on its own.

        Each figure is rounded independently from its unrounded value, so
        ``total`` is not recomputed from the rounded parts.
        """
        breakdown = self.tax_breakdown
        summary = self.tax_summary
        return replace(
            self,
            subtotal=round_money(self.subtotal),
            total_discount=round_money(self.total_discount),
            total=round_money(self.total),
            tax_breakdown=TaxBreakdown(
                vat_amount=round_money(breakdown.vat_amount),
                sscl_amount=round_money(breakdown.sscl_amount),
                total_tax=round_money(breakdown.total_tax),
            ),
            tax_summary=TaxSummary(
                taxable_supplies=round_money(summary.taxable_supplies),
                zero_rated_supplies=round_money(summary.zero_rated_supplies),
                exempt_supplies=round_money(summary.exempt_supplies),
            ),
        )


@dataclass(frozen=True)
class InvoiceDraft:
    """The parts of an invoice the compliance rules look at."""
    invoice_type: InvoiceType = InvoiceType.TAX_INVOICE
    line_items: tuple[Union[LineItemInput, LineItemResult], ...] = ()
    tax_breakdown: Optional[TaxBreakdown] = None
    date_of_supply: Optional[dt.date] = None
    invoice_number: Optional[str] = None
    svat_voucher: Optional[SvatVoucher] = None
    status: str = "draft"


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
