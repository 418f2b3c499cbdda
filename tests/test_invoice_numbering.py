from __future__ import annotations

import datetime as dt

import pytest

from lankainvoice.core.exceptions import TenantNotFoundError
from lankainvoice.services.invoice_numbering import allocate_invoice_number, format_invoice_number


def test_format_invoice_number():
    assert format_invoice_number("INV", 1) == "INV-000001"
    assert format_invoice_number("INV-", 42) == "INV-000042"
    assert format_invoice_number("QT", 7, year=2024) == "QT-2024-000007"
    assert format_invoice_number("INV", 1234567) == "INV-1234567"
    assert format_invoice_number("", 3, padding=3) == "INV-003"


def test_allocation_is_sequential_per_tenant(db_session, make_tenant):
    first = make_tenant(name="First")
    second = make_tenant(name="Second", invoice_prefix="LK")

    assert allocate_invoice_number(db_session, first.id) == (1, "INV-000001")
    assert allocate_invoice_number(db_session, first.id) == (2, "INV-000002")
    assert allocate_invoice_number(db_session, second.id) == (1, "LK-000001")
    db_session.commit()

    db_session.refresh(first)
    assert first.invoice_sequence == 2


def test_allocation_with_year(db_session, make_tenant):
    tenant = make_tenant(invoice_number_includes_year=True)

    _, number = allocate_invoice_number(db_session, tenant.id, today=dt.date(2024, 3, 31))

    assert number == "INV-2024-000001"


def test_rolled_back_allocation_is_released(db_session, make_tenant):
    tenant = make_tenant()

    allocate_invoice_number(db_session, tenant.id)
    db_session.rollback()

    assert allocate_invoice_number(db_session, tenant.id) == (1, "INV-000001")


def test_unknown_tenant(db_session):
    with pytest.raises(TenantNotFoundError):
        allocate_invoice_number(db_session, 999)
