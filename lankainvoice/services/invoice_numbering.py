"""
Tenant-scoped sequential invoice numbers.

Numbers look like ``INV-000001`` (or ``INV-2024-000001`` for tenants using
yearly IRD numbering). The counter lives on the tenant row and is bumped with
a single ``UPDATE ... SET invoice_sequence = invoice_sequence + 1`` so two
concurrent invoice creations can never read the same value; the row lock is
held until the caller's transaction commits.
"""
from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from lankainvoice.core.config import settings
from lankainvoice.core.exceptions import TenantNotFoundError
from lankainvoice.models.models import Tenant

logger = logging.getLogger(__name__)


def format_invoice_number(
    prefix: str,
    sequence: int,
    year: int | None = None,
    padding: int | None = None,
) -> str:
    width = padding or settings.INVOICE_NUMBER_PADDING
    prefix = (prefix or settings.DEFAULT_INVOICE_PREFIX).rstrip("-")
    padded = str(sequence).zfill(width)
    if year is not None:
        return f"{prefix}-{year}-{padded}"
    return f"{prefix}-{padded}"


def allocate_invoice_number(db: Session, tenant_id: int, today: dt.date | None = None) -> tuple[int, str]:
    """Reserve the next sequence number for a tenant.

    Must run inside the transaction that inserts the invoice; nothing is
    committed here.

    Returns:
        (sequence, formatted invoice number)
    """
    result = db.execute(
        update(Tenant)
        .where(Tenant.id == tenant_id)
        .values(invoice_sequence=Tenant.invoice_sequence + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise TenantNotFoundError(tenant_id)

    prefix, sequence, with_year = db.execute(
        select(Tenant.invoice_prefix, Tenant.invoice_sequence, Tenant.invoice_number_includes_year)
        .where(Tenant.id == tenant_id)
    ).one()

    year = (today or dt.date.today()).year if with_year else None
    number = format_invoice_number(prefix, sequence, year=year)
    logger.info("Allocated invoice number %s for tenant %s", number, tenant_id)
    return sequence, number
