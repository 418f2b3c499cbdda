"""Tax engine arithmetic for VAT, SVAT and SSCL scenarios (LKR)."""
from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from lankainvoice.services.tax_engine import (
    ClientProfile,
    LineItemInput,
    RegistrationType,
    SvatVoucher,
    TaxCategory,
    TaxRegime,
    TenantTaxProfile,
    calculate_invoice_taxes,
    calculate_reverse_charge_vat,
    calculate_withholding_tax,
    is_exempt_supply,
    is_reverse_charge_applicable,
)

SUPPLY_DATE = dt.date(2024, 1, 15)

VAT_TENANT = TenantTaxProfile(
    vat_registered=True,
    vat_number="123456789V",
    sscl_applicable=True,
    default_vat_rate=Decimal("0.15"),
    tin="123456789",
)

SVAT_TENANT = TenantTaxProfile(svat_registered=True, tin="987654321")

UNREGISTERED_TENANT = TenantTaxProfile(sscl_applicable=True)

VAT_CLIENT = ClientProfile(
    registration_type=RegistrationType.VAT,
    tin="111222333",
    vat_number="111222333V",
    name="Ceylon Exports Ltd",
)


def line(unit_price, quantity=1, description="Item", **kwargs) -> LineItemInput:
    return LineItemInput.build(description=description, quantity=quantity, unit_price=unit_price, **kwargs)


def test_standard_vat_with_sscl():
    result = calculate_invoice_taxes(VAT_TENANT, VAT_CLIENT, [line(10000, quantity=10)], SUPPLY_DATE)

    assert result.regime == TaxRegime.VAT
    assert result.subtotal == Decimal("100000")
    assert result.total_discount == 0
    assert result.tax_breakdown.vat_amount == Decimal("15000")
    assert result.tax_breakdown.sscl_amount == Decimal("2500")
    assert result.tax_breakdown.total_tax == Decimal("17500")
    assert result.total == Decimal("117500")

    item = result.line_items[0]
    assert item.tax_rate == Decimal("0.15")
    assert item.tax_amount == Decimal("15000")
    assert item.line_total == Decimal("115000")


def test_discount_applies_before_tax():
    result = calculate_invoice_taxes(
        VAT_TENANT, VAT_CLIENT, [line(100000, discount=Decimal("0.1"))], SUPPLY_DATE
    )

    assert result.total_discount == Decimal("10000")
    assert result.tax_breakdown.vat_amount == Decimal("13500")
    assert result.tax_breakdown.sscl_amount == Decimal("2250")
    assert result.total == Decimal("105750")


def test_zero_rated_export_still_carries_sscl():
    result = calculate_invoice_taxes(
        VAT_TENANT, VAT_CLIENT, [line(500000, tax_category=TaxCategory.ZERO_RATED)], SUPPLY_DATE
    )

    assert result.tax_breakdown.vat_amount == 0
    assert result.tax_breakdown.sscl_amount == Decimal("12500")
    assert result.total == Decimal("512500")
    assert result.tax_summary.zero_rated_supplies == Decimal("500000")
    assert result.tax_summary.taxable_supplies == 0


@pytest.mark.parametrize(
    "item",
    [
        line(50000, tax_category="exempt"),
        line(50000, taxable=False),
    ],
    ids=["exempt-category", "non-taxable"],
)
def test_exempt_supplies_carry_no_tax(item):
    result = calculate_invoice_taxes(VAT_TENANT, VAT_CLIENT, [item], SUPPLY_DATE)

    assert is_exempt_supply(item)
    assert result.tax_breakdown.total_tax == 0
    assert result.total == Decimal("50000")
    assert result.tax_summary.exempt_supplies == Decimal("50000")


def test_mixed_supplies():
    items = [
        line(100000, description="Consulting"),
        line(50000, description="Export", tax_category="zero-rated"),
        line(30000, description="Medical supplies", taxable=False),
    ]
    result = calculate_invoice_taxes(VAT_TENANT, VAT_CLIENT, items, SUPPLY_DATE)

    assert result.subtotal == Decimal("180000")
    assert result.tax_breakdown.vat_amount == Decimal("15000")
    assert result.tax_breakdown.sscl_amount == Decimal("3750")
    assert result.total == Decimal("198750")
    assert result.tax_summary.taxable_supplies == Decimal("100000")
    assert result.tax_summary.zero_rated_supplies == Decimal("50000")
    assert result.tax_summary.exempt_supplies == Decimal("30000")


def test_svat_uses_voucher_tax_and_no_sscl():
    voucher = SvatVoucher(
        voucher_id="v1",
        voucher_number="SVAT-2024-001",
        voucher_value=Decimal("10000"),
        tax_amount=Decimal("1500"),
    )
    result = calculate_invoice_taxes(SVAT_TENANT, VAT_CLIENT, [line(5000, quantity=10)], SUPPLY_DATE, voucher)

    assert result.regime == TaxRegime.SVAT
    assert result.subtotal == Decimal("50000")
    assert result.tax_breakdown.vat_amount == Decimal("1500")
    assert result.tax_breakdown.sscl_amount == 0
    assert result.total == Decimal("51500")
    # line level VAT is never charged under SVAT
    assert result.line_items[0].tax_amount == 0


def test_svat_without_voucher_charges_nothing():
    result = calculate_invoice_taxes(SVAT_TENANT, VAT_CLIENT, [line(5000, quantity=10)], SUPPLY_DATE)

    assert result.tax_breakdown.vat_amount == 0
    assert result.tax_breakdown.sscl_amount == 0
    assert result.total == Decimal("50000")


def test_svat_suppresses_sscl_even_when_flagged():
    tenant = TenantTaxProfile(svat_registered=True, sscl_applicable=True)
    result = calculate_invoice_taxes(tenant, None, [line(10000)], SUPPLY_DATE)

    assert result.tax_breakdown.sscl_amount == 0


def test_b2b_service_invoice_with_partial_discount():
    items = [
        line(5000, quantity=80, description="Web development"),
        line(25000, description="Hosting services"),
        line(15000, quantity=4, description="Training", discount=Decimal("0.1")),
    ]
    result = calculate_invoice_taxes(VAT_TENANT, VAT_CLIENT, items, SUPPLY_DATE)

    assert result.subtotal == Decimal("485000")
    assert result.total_discount == Decimal("6000")
    assert result.tax_breakdown.vat_amount == Decimal("71850")
    assert result.tax_breakdown.sscl_amount == Decimal("11975")
    assert result.total == Decimal("562825")


def test_unregistered_supplier_pays_sscl_only():
    result = calculate_invoice_taxes(UNREGISTERED_TENANT, None, [line(100000)], SUPPLY_DATE)

    assert result.regime == TaxRegime.NONE
    assert result.tax_breakdown.vat_amount == 0
    assert result.tax_breakdown.sscl_amount == Decimal("2500")
    assert result.total == Decimal("102500")


def test_unregistered_supplier_without_sscl():
    result = calculate_invoice_taxes(TenantTaxProfile(), None, [line(100000)], SUPPLY_DATE)

    assert result.tax_breakdown.total_tax == 0
    assert result.total == Decimal("100000")


def test_vat_takes_priority_over_svat():
    tenant = TenantTaxProfile(vat_registered=True, vat_number="1V", svat_registered=True)
    result = calculate_invoice_taxes(tenant, None, [line(1000)], SUPPLY_DATE)

    assert result.regime == TaxRegime.VAT
    assert result.tax_breakdown.vat_amount == Decimal("150")


def test_zero_vat_rate_falls_back_to_standard_rate():
    tenant = TenantTaxProfile(vat_registered=True, vat_number="1V", default_vat_rate=Decimal("0"))
    result = calculate_invoice_taxes(tenant, None, [line(1000)], SUPPLY_DATE)

    assert result.line_items[0].tax_rate == Decimal("0.15")


def test_custom_vat_rate():
    tenant = TenantTaxProfile(vat_registered=True, vat_number="1V", default_vat_rate=Decimal("0.18"))
    result = calculate_invoice_taxes(tenant, None, [line(1000)], SUPPLY_DATE)

    assert result.tax_breakdown.vat_amount == Decimal("180")


def test_zero_amount_invoice():
    result = calculate_invoice_taxes(VAT_TENANT, None, [line(0)], SUPPLY_DATE)

    assert result.subtotal == 0
    assert result.tax_breakdown.total_tax == 0
    assert result.total == 0


def test_full_discount_zeroes_invoice():
    result = calculate_invoice_taxes(VAT_TENANT, None, [line(10000, discount=1)], SUPPLY_DATE)

    assert result.total_discount == Decimal("10000")
    assert result.tax_breakdown.total_tax == 0
    assert result.total == 0


def test_large_amounts_keep_precision():
    result = calculate_invoice_taxes(VAT_TENANT, None, [line(10000000)], SUPPLY_DATE)

    assert result.tax_breakdown.vat_amount == Decimal("1500000")
    assert result.tax_breakdown.sscl_amount == Decimal("250000")
    assert result.total == Decimal("11750000")


def test_fractional_amounts_are_not_rounded_until_asked():
    result = calculate_invoice_taxes(VAT_TENANT, None, [line("3500.75", quantity="2.5")], SUPPLY_DATE)

    assert result.subtotal == Decimal("8751.875")
    assert result.tax_breakdown.vat_amount == Decimal("1312.78125")
    assert result.tax_breakdown.sscl_amount == Decimal("218.796875")

    rounded = result.rounded()
    assert rounded.subtotal == Decimal("8751.88")
    assert rounded.tax_breakdown.vat_amount == Decimal("1312.78")
    assert rounded.tax_breakdown.sscl_amount == Decimal("218.80")
    assert rounded.tax_breakdown.total_tax == Decimal("1531.58")
    assert rounded.total == Decimal("10283.45")


def test_float_inputs_do_not_leak_binary_artefacts():
    result = calculate_invoice_taxes(VAT_TENANT, None, [line(0.1, quantity=3)], SUPPLY_DATE)

    assert result.subtotal == Decimal("0.3")


def test_calculation_is_deterministic():
    items = [line(12345.67, quantity=3, discount=Decimal("0.05")), line(999.99, tax_category="zero-rated")]

    first = calculate_invoice_taxes(VAT_TENANT, VAT_CLIENT, items, SUPPLY_DATE)
    second = calculate_invoice_taxes(VAT_TENANT, VAT_CLIENT, items, SUPPLY_DATE)

    assert first == second


def test_total_identity_holds():
    items = [
        line(7321.13, quantity=7, discount=Decimal("0.125")),
        line(150.5, quantity=2, tax_category="zero-rated"),
        line(800, taxable=False),
    ]
    result = calculate_invoice_taxes(VAT_TENANT, VAT_CLIENT, items, SUPPLY_DATE)
    breakdown = result.tax_breakdown

    assert breakdown.total_tax == breakdown.vat_amount + breakdown.sscl_amount
    assert result.total == result.subtotal - result.total_discount + breakdown.total_tax
    assert result.subtotal == sum(item.line_subtotal for item in result.line_items)
    assert breakdown.vat_amount == sum(item.tax_amount for item in result.line_items)


def test_reverse_charge_for_imported_services():
    assert is_reverse_charge_applicable("foreign", "services")
    assert not is_reverse_charge_applicable("local", "services")
    assert not is_reverse_charge_applicable("foreign", "goods")

    assert calculate_reverse_charge_vat(100000) == Decimal("15000")
    assert calculate_reverse_charge_vat(100000, Decimal("0.18")) == Decimal("18000")


def test_withholding_tax():
    assert calculate_withholding_tax(100000, Decimal("0.05"), True) == Decimal("5000")
    assert calculate_withholding_tax(100000, Decimal("0.05"), False) == 0
