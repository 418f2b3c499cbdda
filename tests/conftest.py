from __future__ import annotations

import os

os.environ.setdefault("APP_ENV", "test")

import datetime as dt  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from lankainvoice.db.base_class import Base  # noqa: E402
from lankainvoice.db.session import SessionLocal, engine  # noqa: E402
from lankainvoice.models import models  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_database_state():
    """Ensure each test sees a fresh database schema."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture
def client():
    """Provide a FastAPI TestClient bound to the application."""
    from lankainvoice.api.main import app

    return TestClient(app)


@pytest.fixture
def make_tenant(db_session):
    def _make(**overrides) -> models.Tenant:
        fields = {
            "name": "Lanka Traders (Pvt) Ltd",
            "tin": "123456789",
            "vat_registered": True,
            "vat_number": "123456789V",
            "sscl_applicable": True,
            "default_vat_rate": Decimal("0.15"),
        }
        fields.update(overrides)
        tenant = models.Tenant(**fields)
        db_session.add(tenant)
        db_session.commit()
        return tenant

    return _make


@pytest.fixture
def make_client(db_session):
    def _make(tenant: models.Tenant, **overrides) -> models.Client:
        fields = {
            "tenant_id": tenant.id,
            "name": "Ceylon Exports Ltd",
            "email": "accounts@ceylonexports.lk",
            "tin": "111222333",
            "vat_number": "111222333V",
            "registration_type": "vat",
        }
        fields.update(overrides)
        client = models.Client(**fields)
        db_session.add(client)
        db_session.commit()
        return client

    return _make


@pytest.fixture
def make_voucher(db_session):
    def _make(tenant: models.Tenant, **overrides) -> models.SVATVoucher:
        fields = {
            "tenant_id": tenant.id,
            "voucher_number": "SVAT-2024-001",
            "supplier_name": "Lanka Traders (Pvt) Ltd",
            "voucher_value": Decimal("10000.00"),
            "tax_amount": Decimal("1500.00"),
        }
        fields.update(overrides)
        voucher = models.SVATVoucher(**fields)
        db_session.add(voucher)
        db_session.commit()
        return voucher

    return _make


@pytest.fixture
def supply_date() -> dt.date:
    return dt.date(2024, 1, 15)
