"""Snapshots of persisted tenants/clients/invoices for the tax engine."""
from __future__ import annotations

from lankainvoice.models import models
from lankainvoice.services.tax_engine import (
    ClientProfile,
    InvoiceDraft,
    InvoiceType,
    LineItemInput,
    RegistrationType,
    SvatVoucher,
    TaxBreakdown,
    TenantTaxProfile,
)


def tenant_tax_profile(tenant: models.Tenant) -> TenantTaxProfile:
    return TenantTaxProfile(
        vat_registered=bool(tenant.vat_registered),
        vat_number=tenant.vat_number,
        svat_registered=bool(tenant.svat_registered),
        sscl_applicable=bool(tenant.sscl_applicable),
        default_vat_rate=tenant.default_vat_rate,
        fiscal_year_start=tenant.fiscal_year_start,
        tin=tenant.tin,
    )


def client_profile(client: models.Client | None) -> ClientProfile | None:
    if client is None:
        return None
    return ClientProfile(
        registration_type=RegistrationType(client.registration_type or "none"),
        tin=client.tin,
        vat_number=client.vat_number,
        name=client.name,
    )


def svat_voucher_snapshot(voucher: models.SVATVoucher | None) -> SvatVoucher | None:
    if voucher is None:
        return None
    return SvatVoucher(
        voucher_id=str(voucher.id),
        voucher_number=voucher.voucher_number,
        voucher_value=voucher.voucher_value,
        tax_amount=voucher.tax_amount,
    )


def invoice_draft(invoice: models.Invoice) -> InvoiceDraft:
    """Rebuild the compliance view of a stored invoice."""
    return InvoiceDraft(
        invoice_type=InvoiceType(invoice.invoice_type),
        line_items=tuple(
            LineItemInput.build(
                description=line.description,
                quantity=line.quantity,
                unit_price=line.unit_price,
                discount=line.discount,
                taxable=line.taxable,
                tax_category=line.tax_category,
            )
            for line in invoice.lines
        ),
        tax_breakdown=TaxBreakdown(
            vat_amount=invoice.vat_amount,
            sscl_amount=invoice.sscl_amount,
            total_tax=invoice.total_tax,
        ),
        date_of_supply=invoice.date_of_supply,
        invoice_number=invoice.invoice_number,
        svat_voucher=svat_voucher_snapshot(invoice.svat_voucher),
        status=invoice.status,
    )
