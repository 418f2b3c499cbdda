"""
Tax Reports Routes.

Handles VAT return, SVAT summary and sales register generation plus the
sales register CSV export.
"""
from __future__ import annotations

import datetime as dt
import logging

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from lankainvoice.api.dependencies import ReportingServiceDep, TenantDep
from lankainvoice.models.schemas import (
    ComprehensiveReportOut,
    SalesRegisterOut,
    SVATSummaryOut,
    VATReturnOut,
)
from lankainvoice.services.tax_reporting import get_vat_filing_period, sales_register_to_csv

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/reports")


def _resolve_period(
    year: int | None,
    quarter: int | None,
    start_date: dt.date | None,
    end_date: dt.date | None,
) -> tuple[dt.date, dt.date]:
    """Explicit dates win; otherwise a calendar quarter is required."""
    if start_date and end_date:
        if start_date > end_date:
            raise HTTPException(status_code=400, detail="start_date must not be after end_date")
        return start_date, end_date
    if year and quarter:
        return get_vat_filing_period(year, quarter)
    raise HTTPException(status_code=400, detail="Provide start_date and end_date, or year and quarter")


@router.get("/vat-return", response_model=VATReturnOut)
def vat_return(
    tenant_id: TenantDep,
    service: ReportingServiceDep,
    year: int | None = Query(None, ge=2000, le=2100),
    quarter: int | None = Query(None, ge=1, le=4),
    start_date: dt.date | None = Query(None),
    end_date: dt.date | None = Query(None),
):
    """VAT return (IRD Form 200) for a quarter or explicit period."""
    start, end = _resolve_period(year, quarter, start_date, end_date)
    return service.generate_vat_return(tenant_id, start, end)


@router.get("/svat-summary", response_model=SVATSummaryOut)
def svat_summary(
    tenant_id: TenantDep,
    service: ReportingServiceDep,
    year: int | None = Query(None, ge=2000, le=2100),
    quarter: int | None = Query(None, ge=1, le=4),
    start_date: dt.date | None = Query(None),
    end_date: dt.date | None = Query(None),
):
    start, end = _resolve_period(year, quarter, start_date, end_date)
    return service.generate_svat_summary(tenant_id, start, end)


@router.get("/sales-register", response_model=SalesRegisterOut)
def sales_register(
    tenant_id: TenantDep,
    service: ReportingServiceDep,
    year: int | None = Query(None, ge=2000, le=2100),
    quarter: int | None = Query(None, ge=1, le=4),
    start_date: dt.date | None = Query(None),
    end_date: dt.date | None = Query(None),
):
    start, end = _resolve_period(year, quarter, start_date, end_date)
    return service.generate_sales_register(tenant_id, start, end)


@router.get("/sales-register.csv")
def sales_register_csv(
    tenant_id: TenantDep,
    service: ReportingServiceDep,
    year: int | None = Query(None, ge=2000, le=2100),
    quarter: int | None = Query(None, ge=1, le=4),
    start_date: dt.date | None = Query(None),
    end_date: dt.date | None = Query(None),
):
    """Download the sales register as CSV."""
    start, end = _resolve_period(year, quarter, start_date, end_date)
    register = service.generate_sales_register(tenant_id, start, end)
    filename = f"sales-register-{start.isoformat()}-{end.isoformat()}.csv"
    return Response(
        content=sales_register_to_csv(register),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/comprehensive", response_model=ComprehensiveReportOut)
def comprehensive_report(
    tenant_id: TenantDep,
    service: ReportingServiceDep,
    year: int | None = Query(None, ge=2000, le=2100),
    quarter: int | None = Query(None, ge=1, le=4),
    start_date: dt.date | None = Query(None),
    end_date: dt.date | None = Query(None),
):
    """Sales register plus the VAT return or SVAT summary the tenant files."""
    start, end = _resolve_period(year, quarter, start_date, end_date)
    return service.generate_comprehensive_report(tenant_id, start, end)
