"""Common request dependencies."""
from typing import Annotated, TypeAlias

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from lankainvoice.db.session import get_db
from lankainvoice.services.invoice_service import InvoiceService, build_invoice_service
from lankainvoice.services.tax_reporting import TaxReportingService

DbDep: TypeAlias = Annotated[Session, Depends(get_db)]


def get_tenant_id(x_tenant_id: Annotated[int, Header(alias="X-Tenant-ID")]) -> int:
    """
    Resolve the tenant a request acts for.

    Authentication happens upstream of this service; the gateway forwards
    the resolved tenant in the ``X-Tenant-ID`` header.
    """
    return x_tenant_id


TenantDep: TypeAlias = Annotated[int, Depends(get_tenant_id)]


def get_invoice_service(db: DbDep) -> InvoiceService:
    return build_invoice_service(db)


def get_reporting_service(db: DbDep) -> TaxReportingService:
    return TaxReportingService(db)


InvoiceServiceDep: TypeAlias = Annotated[InvoiceService, Depends(get_invoice_service)]
ReportingServiceDep: TypeAlias = Annotated[TaxReportingService, Depends(get_reporting_service)]
