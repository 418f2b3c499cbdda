from __future__ import annotations

import logging

from fastapi import APIRouter, Query

from lankainvoice.api.dependencies import InvoiceServiceDep, TenantDep
from lankainvoice.models import schemas
from lankainvoice.services.tax_engine import ValidationResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=schemas.InvoiceOut, status_code=201)
def create_invoice(data: schemas.InvoiceCreate, tenant_id: TenantDep, svc: InvoiceServiceDep):
    """
    Create a draft invoice.

    Taxes are computed from the tenant's registration (VAT / SVAT / SSCL)
    and the next tenant-scoped invoice number is allocated.
    """
    invoice = svc.create_invoice(tenant_id, data.model_dump())
    return schemas.InvoiceOut.model_validate(invoice)


@router.get("", response_model=list[schemas.InvoiceOut])
def list_invoices(
    tenant_id: TenantDep,
    svc: InvoiceServiceDep,
    limit: int = Query(50, ge=1, le=200),
):
    return [schemas.InvoiceOut.model_validate(inv) for inv in svc.list_invoices(tenant_id, limit=limit)]


@router.get("/{invoice_id}", response_model=schemas.InvoiceOut)
def get_invoice(invoice_id: int, tenant_id: TenantDep, svc: InvoiceServiceDep):
    return schemas.InvoiceOut.model_validate(svc.get_invoice(tenant_id, invoice_id))


@router.get("/{invoice_id}/validation", response_model=schemas.TaxValidationOut)
def validate_invoice(invoice_id: int, tenant_id: TenantDep, svc: InvoiceServiceDep):
    """Dry-run the compliance checks that issuing would apply."""
    result: ValidationResult = svc.validate_invoice(tenant_id, invoice_id)
    return schemas.TaxValidationOut.model_validate(result)


@router.post("/{invoice_id}/issue", response_model=schemas.InvoiceIssueOut)
def issue_invoice(invoice_id: int, tenant_id: TenantDep, svc: InvoiceServiceDep):
    """Move a draft to sent. Compliance errors return 422 with the error list."""
    invoice, result = svc.issue_invoice(tenant_id, invoice_id)
    return {"invoice": schemas.InvoiceOut.model_validate(invoice), "warnings": result.warnings}


@router.post("/{invoice_id}/payments", response_model=schemas.InvoiceOut)
def record_payment(
    invoice_id: int,
    data: schemas.PaymentCreate,
    tenant_id: TenantDep,
    svc: InvoiceServiceDep,
):
    invoice = svc.record_payment(
        tenant_id,
        invoice_id,
        data.amount,
        method=data.method,
        reference=data.reference,
    )
    return schemas.InvoiceOut.model_validate(invoice)
