from __future__ import annotations

from decimal import Decimal

import pytest

from lankainvoice.core.exceptions import TaxRegimeConflictError
from lankainvoice.services.tax_engine import (
    ClientProfile,
    InvoiceDraft,
    InvoiceType,
    LineItemInput,
    RegistrationType,
    SvatVoucher,
    TaxBreakdown,
    TenantTaxProfile,
    validate_tax_invoice,
)
from lankainvoice.services.tax_engine import validation

VAT_TENANT = TenantTaxProfile(
    vat_registered=True,
    vat_number="123456789V",
    sscl_applicable=True,
    tin="123456789",
)
SVAT_TENANT = TenantTaxProfile(svat_registered=True)
VAT_CLIENT = ClientProfile(
    registration_type=RegistrationType.VAT,
    tin="111222333",
    vat_number="111222333V",
)

SERVICE_LINE = LineItemInput.build(description="Service", quantity=1, unit_price=100000)
EXEMPT_LINE = LineItemInput.build(description="Medical supplies", quantity=1, unit_price=5000, taxable=False)
BREAKDOWN = TaxBreakdown(vat_amount=Decimal("15000"), sscl_amount=Decimal("2500"), total_tax=Decimal("17500"))


def draft(**overrides) -> InvoiceDraft:
    fields = {"line_items": (SERVICE_LINE,), "tax_breakdown": BREAKDOWN}
    fields.update(overrides)
    return InvoiceDraft(**fields)


def test_compliant_invoice_has_no_findings():
    result = validate_tax_invoice(draft(), VAT_TENANT, VAT_CLIENT)

    assert result.valid is True
    assert result.errors == []
    assert result.warnings == []


def test_missing_supplier_vat_number_is_an_error():
    tenant = TenantTaxProfile(vat_registered=True, sscl_applicable=True)
    result = validate_tax_invoice(draft(), tenant, VAT_CLIENT)

    assert result.valid is False
    assert validation.SUPPLIER_VAT_NUMBER_REQUIRED in result.errors


def test_blank_supplier_vat_number_is_an_error():
    tenant = TenantTaxProfile(vat_registered=True, vat_number="   ", sscl_applicable=True)
    result = validate_tax_invoice(draft(), tenant, VAT_CLIENT)

    assert result.errors == [validation.SUPPLIER_VAT_NUMBER_REQUIRED]


def test_proforma_does_not_need_supplier_vat_number():
    tenant = TenantTaxProfile(vat_registered=True, sscl_applicable=True)
    result = validate_tax_invoice(draft(invoice_type=InvoiceType.PROFORMA), tenant, VAT_CLIENT)

    assert result.valid is True


def test_missing_client_tin_is_a_warning():
    client = ClientProfile(registration_type=RegistrationType.VAT, vat_number="111222333V")
    result = validate_tax_invoice(draft(), VAT_TENANT, client)

    assert result.valid is True
    assert validation.CUSTOMER_TIN_RECOMMENDED in result.warnings


def test_missing_client_warns_about_tin():
    result = validate_tax_invoice(draft(), VAT_TENANT, None)

    assert result.valid is True
    assert result.warnings == [validation.CUSTOMER_TIN_RECOMMENDED]


def test_exempt_only_invoice_needs_no_client_tin():
    result = validate_tax_invoice(draft(line_items=(EXEMPT_LINE,)), VAT_TENANT, None)

    assert validation.CUSTOMER_TIN_RECOMMENDED not in result.warnings


def test_vat_client_without_vat_number_is_a_warning():
    client = ClientProfile(registration_type=RegistrationType.VAT, tin="111222333")
    result = validate_tax_invoice(draft(), VAT_TENANT, client)

    assert result.warnings == [validation.CUSTOMER_VAT_NUMBER_RECOMMENDED]


def test_svat_tax_invoice_without_voucher_is_a_warning():
    result = validate_tax_invoice(draft(), SVAT_TENANT, VAT_CLIENT)

    assert result.valid is True
    assert result.warnings == [validation.SVAT_VOUCHER_RECOMMENDED]


def test_svat_tax_invoice_with_voucher_passes():
    voucher = SvatVoucher(voucher_id="1", voucher_number="SV-1", voucher_value=Decimal("10000"), tax_amount=Decimal("1500"))
    result = validate_tax_invoice(draft(svat_voucher=voucher), SVAT_TENANT, VAT_CLIENT)

    assert result.warnings == []


def test_missing_breakdown_for_sscl_tenant_is_a_warning():
    result = validate_tax_invoice(draft(tax_breakdown=None), VAT_TENANT, VAT_CLIENT)

    assert result.warnings == [validation.SSCL_BREAKDOWN_RECOMMENDED]


@pytest.mark.parametrize("number", ["inv-001", "INV_001", "INV 001"])
def test_malformed_invoice_number_is_a_warning(number):
    result = validate_tax_invoice(draft(invoice_number=number), VAT_TENANT, VAT_CLIENT)

    assert result.warnings == [validation.INVOICE_NUMBER_FORMAT]


def test_well_formed_invoice_number_passes():
    result = validate_tax_invoice(draft(invoice_number="INV-2024-000001"), VAT_TENANT, VAT_CLIENT)

    assert result.warnings == []


def test_strict_profile_rejects_dual_registration():
    with pytest.raises(TaxRegimeConflictError):
        TenantTaxProfile.strict(vat_registered=True, svat_registered=True)

    assert TenantTaxProfile.strict(vat_registered=True).vat_registered is True
