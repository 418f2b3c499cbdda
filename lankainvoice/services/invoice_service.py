from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from lankainvoice.services.invoice_components import (
    InvoiceCreationMixin,
    InvoicePaymentMixin,
    InvoiceQueryMixin,
    InvoiceStatusMixin,
)

logger = logging.getLogger(__name__)


class InvoiceService(
    InvoiceCreationMixin,
    InvoiceQueryMixin,
    InvoiceStatusMixin,
    InvoicePaymentMixin,
):
    """Facade that wires the invoice mixins to a database session."""

    def __init__(self, db: Session):
        self.db = db


def build_invoice_service(db: Session) -> InvoiceService:
    return InvoiceService(db)
