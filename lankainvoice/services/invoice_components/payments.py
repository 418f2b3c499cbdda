"""Payment recording against issued invoices."""
from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy.orm import Session

from lankainvoice import metrics
from lankainvoice.core.exceptions import InvalidInvoiceStatusError, InvalidPaymentAmountError
from lankainvoice.models import models
from lankainvoice.services.tax_engine import Number, round_money, to_decimal

logger = logging.getLogger(__name__)

_UNPAYABLE_STATUSES = {"draft", "cancelled", "paid"}


class InvoicePaymentMixin:
    db: Session

    def record_payment(
        self,
        tenant_id: int,
        invoice_id: int,
        amount: Number,
        method: str = "bank_transfer",
        reference: str | None = None,
    ) -> models.Invoice:
        amount = round_money(to_decimal(amount))
        if amount <= 0:
            raise InvalidPaymentAmountError(amount)

        invoice = self.get_invoice(tenant_id, invoice_id)
        if invoice.status in _UNPAYABLE_STATUSES:
            raise InvalidInvoiceStatusError(invoice.status, "record a payment for")

        now = dt.datetime.now(dt.timezone.utc)
        invoice.payments.append(
            models.Payment(
                tenant_id=tenant_id,
                amount=amount,
                payment_method=method,
                reference=reference,
                paid_at=now,
            )
        )
        previous_status = invoice.status
        invoice.amount_paid = to_decimal(invoice.amount_paid) + amount
        invoice.amount_due = to_decimal(invoice.total) - invoice.amount_paid
        if invoice.amount_due <= 0:
            invoice.status = "paid"
            invoice.paid_at = now
        else:
            invoice.status = "partial_paid"
        self.db.commit()

        metrics.payment_recorded(method)
        if invoice.status == "paid":
            metrics.invoice_paid()
        logger.info(
            "Payment %s recorded on %s; status %s → %s, due %s",
            amount,
            invoice.invoice_number,
            previous_status,
            invoice.status,
            invoice.amount_due,
        )
        return invoice
