"""Issuing invoices after a final compliance check."""
from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy.orm import Session

from lankainvoice import metrics
from lankainvoice.core.exceptions import InvalidInvoiceStatusError, InvoiceValidationError
from lankainvoice.models import models
from lankainvoice.services.profile_mapping import client_profile, invoice_draft, tenant_tax_profile
from lankainvoice.services.tax_engine import ValidationResult, validate_tax_invoice

logger = logging.getLogger(__name__)


class InvoiceStatusMixin:
    db: Session

    def validate_invoice(self, tenant_id: int, invoice_id: int) -> ValidationResult:
        invoice = self.get_invoice(tenant_id, invoice_id)
        result = validate_tax_invoice(
            invoice_draft(invoice),
            tenant_tax_profile(invoice.tenant),
            client_profile(invoice.client),
        )
        metrics.tax_validation_record(result.valid)
        return result

    def issue_invoice(self, tenant_id: int, invoice_id: int) -> tuple[models.Invoice, ValidationResult]:
        """Move a draft to ``sent``; compliance errors block it, warnings are returned."""
        invoice = self.get_invoice(tenant_id, invoice_id)
        if invoice.status != "draft":
            raise InvalidInvoiceStatusError(invoice.status, "issue")

        result = self.validate_invoice(tenant_id, invoice_id)
        if not result.valid:
            raise InvoiceValidationError(result.errors, result.warnings)

        invoice.status = "sent"
        invoice.sent_at = dt.datetime.now(dt.timezone.utc)
        self.db.commit()
        metrics.invoice_issued()
        logger.info(
            "Invoice %s status transitioned draft → sent (%d warnings)",
            invoice.invoice_number,
            len(result.warnings),
        )
        return invoice, result
