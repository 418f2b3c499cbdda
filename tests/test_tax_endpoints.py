from __future__ import annotations

VAT_TENANT = {
    "vat_registered": True,
    "vat_number": "123456789V",
    "sscl_applicable": True,
    "default_vat_rate": "0.15",
    "tin": "123456789",
}
VAT_CLIENT = {"registration_type": "vat", "tin": "111222333", "vat_number": "111222333V"}


def _headers(tenant) -> dict[str, str]:
    return {"X-Tenant-ID": str(tenant.id)}


def test_calculate_endpoint(client):
    payload = {
        "tenant": VAT_TENANT,
        "client": VAT_CLIENT,
        "date_of_supply": "2024-01-15",
        "line_items": [
            {"description": "Consulting", "quantity": 10, "unit_price": "10000"},
            {"description": "Export", "quantity": 1, "unit_price": "50000", "tax_category": "zero-rated"},
        ],
    }

    resp = client.post("/tax/calculate", json=payload)

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["regime"] == "vat"
    assert data["subtotal"] == "150000.00"
    assert data["tax_breakdown"] == {"vat_amount": "15000.00", "sscl_amount": "3750.00", "total_tax": "18750.00"}
    assert data["total"] == "168750.00"
    assert data["tax_summary"]["zero_rated_supplies"] == "50000.00"
    assert data["total_formatted"] == "Rs. 168,750.00"
    assert data["total_in_words"] == "One Hundred Sixty Eight Thousand Seven Hundred Fifty Rupees Only"
    assert data["line_items"][1]["tax_category"] == "zero-rated"
    assert data["line_items"][1]["tax_amount"] == "0.00"


def test_calculate_rounds_only_the_output(client):
    payload = {
        "tenant": VAT_TENANT,
        "date_of_supply": "2024-01-15",
        "line_items": [{"description": "Hours", "quantity": "2.5", "unit_price": "3500.75"}],
    }

    data = client.post("/tax/calculate", json=payload).json()

    assert data["subtotal"] == "8751.88"
    assert data["tax_breakdown"]["vat_amount"] == "1312.78"
    assert data["tax_breakdown"]["sscl_amount"] == "218.80"
    assert data["total"] == "10283.45"


def test_calculate_svat_with_voucher(client):
    payload = {
        "tenant": {"svat_registered": True},
        "date_of_supply": "2024-01-15",
        "line_items": [{"description": "Garments", "quantity": 10, "unit_price": "5000"}],
        "svat_voucher": {
            "voucher_id": "1",
            "voucher_number": "SVAT-2024-001",
            "voucher_value": "10000",
            "tax_amount": "1500",
        },
    }

    data = client.post("/tax/calculate", json=payload).json()

    assert data["regime"] == "svat"
    assert data["tax_breakdown"]["vat_amount"] == "1500.00"
    assert data["total"] == "51500.00"


def test_calculate_rejects_dual_registration(client):
    payload = {
        "tenant": {"vat_registered": True, "svat_registered": True, "vat_number": "1V"},
        "date_of_supply": "2024-01-15",
        "line_items": [{"description": "Item", "unit_price": "100", "quantity": 1}],
    }

    resp = client.post("/tax/calculate", json=payload)

    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "TAX300"


def test_calculate_rejects_invalid_lines(client):
    base = {"tenant": VAT_TENANT, "date_of_supply": "2024-01-15"}

    assert client.post("/tax/calculate", json={**base, "line_items": []}).status_code == 422
    bad_quantity = [{"description": "Item", "quantity": 0, "unit_price": "100"}]
    assert client.post("/tax/calculate", json={**base, "line_items": bad_quantity}).status_code == 422
    bad_category = [{"description": "Item", "quantity": 1, "unit_price": "100", "tax_category": "luxury"}]
    assert client.post("/tax/calculate", json={**base, "line_items": bad_category}).status_code == 422


def test_validate_endpoint(client):
    payload = {
        "tenant": {**VAT_TENANT, "vat_number": None},
        "invoice_type": "tax_invoice",
        "line_items": [{"description": "Service", "quantity": 1, "unit_price": "100000"}],
        "invoice_number": "inv-1",
    }

    resp = client.post("/tax/validate", json=payload)

    assert resp.status_code == 200
    data = resp.json()
    assert data["valid"] is False
    assert data["errors"] == ["Supplier VAT number is required for tax invoices"]
    assert "Invoice number should contain only uppercase letters, numbers, and hyphens" in data["warnings"]


def test_format_endpoint(client):
    data = client.get("/tax/format", params={"amount": "11750.50"}).json()

    assert data == {
        "amount": "11750.50",
        "formatted": "Rs. 11,750.50",
        "in_words": "Eleven Thousand Seven Hundred Fifty Rupees and Fifty Cents",
    }
    assert client.get("/tax/format", params={"amount": "abc"}).status_code == 400
    assert client.get("/tax/format", params={"amount": "NaN"}).status_code == 400


def test_reverse_charge_endpoint(client):
    foreign = client.get("/tax/reverse-charge", params={"net_amount": "200000"}).json()
    assert foreign["applicable"] is True
    assert foreign["reverse_charge_vat"] == "30000.00"

    local = client.get("/tax/reverse-charge", params={"net_amount": "200000", "supplier": "local"}).json()
    assert local["applicable"] is False
    assert local["reverse_charge_vat"] == "0.00"


def _create_q1_invoices(client, tenant):
    headers = _headers(tenant)
    client.post(
        "/invoices",
        json={"date_issued": "2024-01-15", "lines": [{"description": "Consulting", "quantity": 10, "unit_price": "10000"}]},
        headers=headers,
    )
    client.post(
        "/invoices",
        json={
            "date_issued": "2024-03-02",
            "lines": [{"description": "Export", "unit_price": "50000", "tax_category": "zero-rated"}],
        },
        headers=headers,
    )


def test_vat_return_endpoint(client, make_tenant):
    tenant = make_tenant()
    _create_q1_invoices(client, tenant)

    resp = client.get("/tax/reports/vat-return", params={"year": 2024, "quarter": 1}, headers=_headers(tenant))

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["period"] == {"start_date": "2024-01-01", "end_date": "2024-03-31", "quarter": 1, "year": 2024}
    assert data["invoice_count"] == 2
    assert data["output_tax"]["total_output_tax"] == "15000.00"
    assert data["sscl_payable"] == "3750.00"
    assert data["total_payable"] == "18750.00"


def test_vat_return_for_unregistered_tenant(client, make_tenant):
    tenant = make_tenant(vat_registered=False, vat_number=None)

    resp = client.get("/tax/reports/vat-return", params={"year": 2024, "quarter": 1}, headers=_headers(tenant))

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "TAX301"


def test_report_period_is_required(client, make_tenant):
    tenant = make_tenant()

    assert client.get("/tax/reports/sales-register", headers=_headers(tenant)).status_code == 400
    reversed_period = {"start_date": "2024-03-31", "end_date": "2024-01-01"}
    assert client.get("/tax/reports/sales-register", params=reversed_period, headers=_headers(tenant)).status_code == 400


def test_sales_register_with_explicit_dates(client, make_tenant):
    tenant = make_tenant()
    _create_q1_invoices(client, tenant)

    resp = client.get(
        "/tax/reports/sales-register",
        params={"start_date": "2024-01-01", "end_date": "2024-01-31"},
        headers=_headers(tenant),
    )

    data = resp.json()
    assert [e["invoice_number"] for e in data["entries"]] == ["INV-000001"]
    assert data["summary"]["grand_total"] == "117500.00"


def test_sales_register_csv_download(client, make_tenant):
    tenant = make_tenant()
    _create_q1_invoices(client, tenant)

    resp = client.get("/tax/reports/sales-register.csv", params={"year": 2024, "quarter": 1}, headers=_headers(tenant))

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert 'filename="sales-register-2024-01-01-2024-03-31.csv"' in resp.headers["content-disposition"]
    rows = resp.text.splitlines()
    assert rows[0].startswith("Invoice Number,Invoice Date")
    assert rows[1].startswith("INV-000001,15/01/2024,Unknown,N/A,N/A,100000.00")
    assert rows[-1] == ",,TOTAL,,,150000.00,15000.00,3750.00,168750.00,"


def test_comprehensive_report(client, make_tenant):
    tenant = make_tenant()
    _create_q1_invoices(client, tenant)

    data = client.get("/tax/reports/comprehensive", params={"year": 2024, "quarter": 1}, headers=_headers(tenant)).json()

    assert data["sales_register"]["summary"]["total_invoices"] == 2
    assert data["vat_return"]["invoice_count"] == 2
    assert data["svat_summary"] is None


def test_health_and_metrics(client):
    assert client.get("/healthz").json() == {"status": "ok"}
    assert client.get("/live").json() == {"status": "alive"}

    client.get("/tax/format", params={"amount": "1"})
    client.post(
        "/tax/calculate",
        json={
            "tenant": VAT_TENANT,
            "date_of_supply": "2024-01-15",
            "line_items": [{"description": "Item", "quantity": 1, "unit_price": "100"}],
        },
    )
    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert 'tax_calculations_total{regime="vat"}' in metrics.text


def test_format_rejects_oversized_amount(client):
    resp = client.get("/tax/format", params={"amount": "1e30"})

    assert resp.status_code == 400


def test_calculate_rejects_oversized_amounts(client):
    base = {"tenant": VAT_TENANT, "date_of_supply": "2024-01-15"}

    huge_price = [{"description": "Item", "quantity": 1, "unit_price": "1e27"}]
    assert client.post("/tax/calculate", json={**base, "line_items": huge_price}).status_code == 422
    huge_quantity = [{"description": "Item", "quantity": "1e27", "unit_price": "1"}]
    assert client.post("/tax/calculate", json={**base, "line_items": huge_quantity}).status_code == 422


def test_calculate_accepts_quantity_at_limit(client):
    payload = {
        "tenant": VAT_TENANT,
        "date_of_supply": "2024-01-15",
        "line_items": [{"description": "Item", "quantity": "1000000", "unit_price": "1"}],
    }

    resp = client.post("/tax/calculate", json=payload)

    assert resp.status_code == 200, resp.text
    assert resp.json()["subtotal"] == "1000000.00"
