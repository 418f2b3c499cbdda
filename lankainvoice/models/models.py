from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import JSON, CheckConstraint, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from lankainvoice.core.exceptions import TaxRegimeConflictError
from lankainvoice.db.base_class import Base


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Tenant(Base):
    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    legal_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    tin: Mapped[str | None] = mapped_column(String(20), nullable=True)
    currency: Mapped[str] = mapped_column(String(3), default="LKR")

    # Tax configuration (VAT and SVAT are mutually exclusive)
    vat_registered: Mapped[bool] = mapped_column(default=False)
    vat_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    svat_registered: Mapped[bool] = mapped_column(default=False)
    sscl_applicable: Mapped[bool] = mapped_column(default=False)
    default_vat_rate: Mapped[Decimal] = mapped_column(Numeric(5, 4), default=Decimal("0.15"))
    fiscal_year_start: Mapped[str] = mapped_column(String(5), default="04-01")  # MM-DD

    # Invoice numbering, incremented atomically per tenant
    invoice_prefix: Mapped[str] = mapped_column(String(20), default="INV")
    invoice_sequence: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    invoice_number_includes_year: Mapped[bool] = mapped_column(default=False)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    clients: Mapped[list[Client]] = relationship("Client", back_populates="tenant")
    invoices: Mapped[list[Invoice]] = relationship("Invoice", back_populates="tenant")

    __table_args__ = (
        CheckConstraint("NOT (vat_registered AND svat_registered)", name="ck_tenant_single_regime"),
    )

    @validates("vat_registered", "svat_registered")
    def _validate_single_regime(self, key: str, value: bool) -> bool:
        other = self.svat_registered if key == "vat_registered" else self.vat_registered
        if value and other:
            raise TaxRegimeConflictError()
        return value


class Client(Base):
    id: Mapped[int] = mapped_column(primary_key=True)
    tenant_id: Mapped[int] = mapped_column(ForeignKey("tenant.id"), index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    tin: Mapped[str | None] = mapped_column(String(20), nullable=True)
    vat_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    registration_type: Mapped[str] = mapped_column(String(10), default="none")  # vat, svat, none

    tenant: Mapped[Tenant] = relationship("Tenant", back_populates="clients")


class Invoice(Base):
    __table_args__ = (UniqueConstraint("tenant_id", "invoice_number", name="uq_invoice_tenant_number"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    tenant_id: Mapped[int] = mapped_column(ForeignKey("tenant.id"), index=True)
    client_id: Mapped[int | None] = mapped_column(ForeignKey("client.id"), nullable=True)
    invoice_number: Mapped[str] = mapped_column(String(40), index=True)
    invoice_type: Mapped[str] = mapped_column(String(20), default="tax_invoice")
    # draft, sent, delivered, viewed, partial_paid, paid, overdue, cancelled
    status: Mapped[str] = mapped_column(String(20), default="draft", index=True)

    date_issued: Mapped[dt.date] = mapped_column(Date)
    date_of_supply: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    due_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)

    subtotal: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    total_discount: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    vat_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    sscl_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    total_tax: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    total: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    taxable_supplies: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    zero_rated_supplies: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    exempt_supplies: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    amount_paid: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    amount_due: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)

    client_snapshot: Mapped[dict] = mapped_column(JSON, default=dict)  # Denormalized for audit trail
    svat_voucher_id: Mapped[int | None] = mapped_column(ForeignKey("svatvoucher.id"), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    sent_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    paid_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    tenant: Mapped[Tenant] = relationship("Tenant", back_populates="invoices")
    client: Mapped[Client | None] = relationship("Client")
    svat_voucher: Mapped[SVATVoucher | None] = relationship("SVATVoucher", foreign_keys=[svat_voucher_id])
    lines: Mapped[list[InvoiceLine]] = relationship(
        "InvoiceLine",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceLine.sort_order",
    )
    payments: Mapped[list[Payment]] = relationship("Payment", back_populates="invoice", cascade="all, delete-orphan")
    tracking_events: Mapped[list[TrackingEvent]] = relationship(
        "TrackingEvent", back_populates="invoice", cascade="all, delete-orphan"
    )


class InvoiceLine(Base):
    id: Mapped[int] = mapped_column(primary_key=True)
    invoice_id: Mapped[int] = mapped_column(ForeignKey("invoice.id"), index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    description: Mapped[str] = mapped_column(String(500))
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3))
    unit_price: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    discount: Mapped[Decimal] = mapped_column(Numeric(5, 4), default=0)  # fraction, 1 = 100%
    taxable: Mapped[bool] = mapped_column(default=True)
    tax_category: Mapped[str] = mapped_column(String(20), default="standard")
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 4), default=0)
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    line_total: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)

    invoice: Mapped[Invoice] = relationship("Invoice", back_populates="lines")


class Payment(Base):
    id: Mapped[int] = mapped_column(primary_key=True)
    tenant_id: Mapped[int] = mapped_column(ForeignKey("tenant.id"), index=True)
    invoice_id: Mapped[int] = mapped_column(ForeignKey("invoice.id"), index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    payment_method: Mapped[str] = mapped_column(String(20), default="bank_transfer")  # cash, cheque, bank_transfer, online, card
    reference: Mapped[str | None] = mapped_column(String(100), nullable=True)
    paid_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    invoice: Mapped[Invoice] = relationship("Invoice", back_populates="payments")


class SVATVoucher(Base):
    id: Mapped[int] = mapped_column(primary_key=True)
    tenant_id: Mapped[int] = mapped_column(ForeignKey("tenant.id"), index=True)
    voucher_number: Mapped[str] = mapped_column(String(40))
    supplier_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    voucher_value: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    status: Mapped[str] = mapped_column(String(20), default="unused")  # unused, used, cancelled
    used_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class TrackingEvent(Base):
    id: Mapped[int] = mapped_column(primary_key=True)
    invoice_id: Mapped[int] = mapped_column(ForeignKey("invoice.id"), index=True)
    event_type: Mapped[str] = mapped_column(String(20))  # EMAIL_OPEN, LINK_CLICK
    ip: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)
    referer: Mapped[str | None] = mapped_column(String(500), nullable=True)
    redirect_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    invoice: Mapped[Invoice] = relationship("Invoice", back_populates="tracking_events")
