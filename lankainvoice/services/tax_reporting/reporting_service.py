"""Tax Reporting Service.

Fetches a tenant's invoices and SVAT vouchers for a period and hands them
to the pure builders in ``computations``.
"""
import logging
from datetime import date, datetime, time, timezone
from typing import Optional

from sqlalchemy.orm import Session

from lankainvoice.core.exceptions import (
    TenantNotFoundError,
    TenantNotSVATRegisteredError,
    TenantNotVATRegisteredError,
)
from lankainvoice.models.models import Invoice, SVATVoucher, Tenant

from .computations import build_sales_register, build_svat_summary, build_vat_return

logger = logging.getLogger(__name__)


class TaxReportingService:
    """Service for IRD period reports.

    Responsibilities:
    - VAT return (Form 200) aggregation for VAT-registered tenants
    - SVAT voucher summary for SVAT-registered tenants
    - Sales register (mandatory for VAT-registered businesses)
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_tenant(self, tenant_id: int) -> Tenant:
        tenant = self.db.get(Tenant, tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        return tenant

    def _invoices_in_period(
        self,
        tenant_id: int,
        start_date: date,
        end_date: date,
        invoice_type: Optional[str] = None,
    ) -> list[Invoice]:
        query = self.db.query(Invoice).filter(
            Invoice.tenant_id == tenant_id,
            Invoice.status != "cancelled",
            Invoice.date_issued >= start_date,
            Invoice.date_issued <= end_date,
        )
        if invoice_type:
            query = query.filter(Invoice.invoice_type == invoice_type)
        return query.order_by(Invoice.date_issued.asc(), Invoice.id.asc()).all()

    def generate_vat_return(self, tenant_id: int, start_date: date, end_date: date) -> dict:
        tenant = self._get_tenant(tenant_id)
        if not tenant.vat_registered:
            raise TenantNotVATRegisteredError(tenant_id)

        invoices = self._invoices_in_period(tenant_id, start_date, end_date, invoice_type="tax_invoice")
        report = build_vat_return(invoices, start_date, end_date)
        logger.info(
            "VAT return for tenant %s %s..%s: %d invoices, payable %s",
            tenant_id,
            start_date,
            end_date,
            report["invoice_count"],
            report["total_payable"],
        )
        return report

    def generate_svat_summary(self, tenant_id: int, start_date: date, end_date: date) -> dict:
        tenant = self._get_tenant(tenant_id)
        if not tenant.svat_registered:
            raise TenantNotSVATRegisteredError(tenant_id)

        period_start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
        period_end = datetime.combine(end_date, time.max, tzinfo=timezone.utc)
        vouchers = (
            self.db.query(SVATVoucher)
            .filter(
                SVATVoucher.tenant_id == tenant_id,
                SVATVoucher.status == "used",
                SVATVoucher.used_at >= period_start,
                SVATVoucher.used_at <= period_end,
            )
            .all()
        )
        invoice_count = len(self._invoices_in_period(tenant_id, start_date, end_date))
        return build_svat_summary(vouchers, invoice_count, start_date, end_date)

    def generate_sales_register(self, tenant_id: int, start_date: date, end_date: date) -> dict:
        self._get_tenant(tenant_id)
        invoices = self._invoices_in_period(tenant_id, start_date, end_date)
        return build_sales_register(invoices, start_date, end_date)

    def generate_comprehensive_report(self, tenant_id: int, start_date: date, end_date: date) -> dict:
        tenant = self._get_tenant(tenant_id)
        report = {"sales_register": self.generate_sales_register(tenant_id, start_date, end_date)}
        if tenant.vat_registered:
            report["vat_return"] = self.generate_vat_return(tenant_id, start_date, end_date)
        if tenant.svat_registered:
            report["svat_summary"] = self.generate_svat_summary(tenant_id, start_date, end_date)
        return report
