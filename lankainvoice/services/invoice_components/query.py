"""Query helpers for invoices."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session, joinedload, selectinload

from lankainvoice.core.exceptions import InvoiceNotFoundError
from lankainvoice.models import models

logger = logging.getLogger(__name__)


class InvoiceQueryMixin:
    db: Session

    def get_invoice(self, tenant_id: int, invoice_id: int) -> models.Invoice:
        invoice = (
            self.db.query(models.Invoice)
            .options(
                selectinload(models.Invoice.lines),
                joinedload(models.Invoice.client),
                joinedload(models.Invoice.svat_voucher),
            )
            .filter(models.Invoice.id == invoice_id, models.Invoice.tenant_id == tenant_id)
            .one_or_none()
        )
        if not invoice:
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    def list_invoices(self, tenant_id: int, limit: int = 50) -> list[models.Invoice]:
        return (
            self.db.query(models.Invoice)
            .filter(models.Invoice.tenant_id == tenant_id)
            .options(selectinload(models.Invoice.lines))
            .order_by(models.Invoice.id.desc())
            .limit(limit)
            .all()
        )
