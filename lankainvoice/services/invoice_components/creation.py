"""Invoice creation workflow mixin."""
from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy.orm import Session

from lankainvoice import metrics
from lankainvoice.core.exceptions import (
    ClientNotFoundError,
    SVATVoucherUnavailableError,
    TenantNotFoundError,
    TenantNotSVATRegisteredError,
)
from lankainvoice.models import models
from lankainvoice.services.invoice_numbering import allocate_invoice_number
from lankainvoice.services.profile_mapping import client_profile, svat_voucher_snapshot, tenant_tax_profile
from lankainvoice.services.tax_engine import LineItemInput, TaxRegime, calculate_invoice_taxes, round_money

logger = logging.getLogger(__name__)


class InvoiceCreationMixin:
    """Runs the tax engine and persists the invoice with its lines."""

    db: Session

    def create_invoice(self, tenant_id: int, data: dict[str, object]) -> models.Invoice:
        tenant = self.db.get(models.Tenant, tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)

        client = self._load_client(tenant_id, data.get("client_id"))
        tax_profile = tenant_tax_profile(tenant)
        voucher_id = data.get("svat_voucher_id")
        if voucher_id is not None and tax_profile.regime != TaxRegime.SVAT:
            raise TenantNotSVATRegisteredError(tenant_id)

        date_issued = data.get("date_issued") or dt.date.today()
        date_of_supply = data.get("date_of_supply") or date_issued
        line_inputs = [
            LineItemInput.build(
                description=(line.get("description") or "Item").strip() or "Item",
                quantity=line.get("quantity", 1),
                unit_price=line["unit_price"],
                discount=line.get("discount") or 0,
                taxable=line.get("taxable", True),
                tax_category=line.get("tax_category") or "standard",
            )
            for line in data.get("lines") or []
        ]

        try:
            voucher = self._claim_svat_voucher(tenant_id, voucher_id)
            calculation = calculate_invoice_taxes(
                tax_profile,
                client_profile(client),
                line_inputs,
                date_of_supply,
                svat_voucher=svat_voucher_snapshot(voucher),
            )
            metrics.tax_calculation_record(calculation.regime.value)
            result = calculation.rounded()
            _, invoice_number = allocate_invoice_number(self.db, tenant_id, today=date_issued)
            invoice = models.Invoice(
                tenant_id=tenant_id,
                client_id=client.id if client else None,
                invoice_number=invoice_number,
                invoice_type=str(data.get("invoice_type") or "tax_invoice"),
                status="draft",
                date_issued=date_issued,
                date_of_supply=date_of_supply,
                due_date=data.get("due_date"),
                subtotal=result.subtotal,
                total_discount=result.total_discount,
                vat_amount=result.tax_breakdown.vat_amount,
                sscl_amount=result.tax_breakdown.sscl_amount,
                total_tax=result.tax_breakdown.total_tax,
                total=result.total,
                taxable_supplies=result.tax_summary.taxable_supplies,
                zero_rated_supplies=result.tax_summary.zero_rated_supplies,
                exempt_supplies=result.tax_summary.exempt_supplies,
                amount_paid=0,
                amount_due=result.total,
                client_snapshot=self._client_snapshot(client),
                svat_voucher=voucher,
                notes=data.get("notes"),
            )
            for position, line in enumerate(result.line_items):
                invoice.lines.append(
                    models.InvoiceLine(
                        sort_order=position,
                        description=line.description,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                        discount=line.discount,
                        taxable=line.taxable,
                        tax_category=line.tax_category.value,
                        tax_rate=line.tax_rate,
                        tax_amount=round_money(line.tax_amount),
                        line_total=round_money(line.line_total),
                    )
                )
            self.db.add(invoice)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(invoice)

        metrics.invoice_created(float(invoice.total))
        logger.info(
            "Created %s %s for tenant %s (total=%s, regime=%s)",
            invoice.invoice_type,
            invoice.invoice_number,
            tenant_id,
            invoice.total,
            calculation.regime.value,
        )
        return invoice

    def _load_client(self, tenant_id: int, client_id: object) -> models.Client | None:
        if client_id is None:
            return None
        client = (
            self.db.query(models.Client)
            .filter(models.Client.id == client_id, models.Client.tenant_id == tenant_id)
            .one_or_none()
        )
        if client is None:
            raise ClientNotFoundError(client_id)
        return client

    def _claim_svat_voucher(self, tenant_id: int, voucher_id: object) -> models.SVATVoucher | None:
        """Mark the voucher used; it is committed with the invoice."""
        if voucher_id is None:
            return None
        voucher = (
            self.db.query(models.SVATVoucher)
            .filter(models.SVATVoucher.id == voucher_id, models.SVATVoucher.tenant_id == tenant_id)
            .one_or_none()
        )
        if voucher is None or voucher.status != "unused":
            raise SVATVoucherUnavailableError(voucher_id, voucher.status if voucher else None)
        voucher.status = "used"
        voucher.used_at = dt.datetime.now(dt.timezone.utc)
        return voucher

    @staticmethod
    def _client_snapshot(client: models.Client | None) -> dict:
        if client is None:
            return {}
        return client.as_dict("name", "email", "tin", "vat_number", "registration_type")
