"""Tax report computations.

Pure aggregation over stored invoices and SVAT vouchers (IRD Form 200 VAT
return, SVAT voucher summary, sales register). No database access here;
the reporting service fetches the rows and passes them in.
"""
import csv
import io
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from lankainvoice.services.tax_engine import round_money, to_decimal

from .period_utils import get_quarter

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

SALES_REGISTER_HEADERS = [
    "Invoice Number",
    "Invoice Date",
    "Client Name",
    "Client TIN",
    "Client VAT Number",
    "Subtotal (LKR)",
    "VAT (LKR)",
    "SSCL (LKR)",
    "Total (LKR)",
    "Invoice Type",
]


def _period(start_date: date, end_date: date) -> dict:
    return {
        "start_date": start_date,
        "end_date": end_date,
        "quarter": get_quarter(start_date),
        "year": start_date.year,
    }


def build_vat_return(invoices: Iterable, start_date: date, end_date: date) -> dict:
    """
    Aggregate a VAT return (Form 200) for a period.

    Only tax invoices count and cancelled invoices are skipped. Input tax
    (purchases) is not tracked, so it is reported as zero.

    Returns:
        dict with period, output_tax, input_tax, net_vat_payable,
        sscl_payable, total_payable and invoice_count
    """
    standard_rated = ZERO
    zero_rated = ZERO
    exempt = ZERO
    output_tax = ZERO
    sscl = ZERO
    count = 0

    for invoice in invoices:
        if invoice.invoice_type != "tax_invoice" or invoice.status == "cancelled":
            continue
        count += 1
        standard_rated += to_decimal(invoice.taxable_supplies)
        zero_rated += to_decimal(invoice.zero_rated_supplies)
        exempt += to_decimal(invoice.exempt_supplies)
        output_tax += to_decimal(invoice.vat_amount)
        sscl += to_decimal(invoice.sscl_amount)

    input_tax = {"standard_rated_purchases": ZERO, "total_input_tax": ZERO}
    net_vat = output_tax - input_tax["total_input_tax"]

    return {
        "period": _period(start_date, end_date),
        "output_tax": {
            "standard_rated_supplies": round_money(standard_rated),
            "zero_rated_supplies": round_money(zero_rated),
            "exempt_supplies": round_money(exempt),
            "total_output_tax": round_money(output_tax),
        },
        "input_tax": input_tax,
        "net_vat_payable": round_money(net_vat),
        "sscl_payable": round_money(sscl),
        "total_payable": round_money(net_vat + sscl),
        "invoice_count": count,
    }


def build_svat_summary(vouchers: Iterable, invoice_count: int, start_date: date, end_date: date) -> dict:
    total_value = ZERO
    total_tax = ZERO
    used = 0
    for voucher in vouchers:
        used += 1
        total_value += to_decimal(voucher.voucher_value)
        total_tax += to_decimal(voucher.tax_amount)

    return {
        "period": _period(start_date, end_date),
        "vouchers_used": used,
        "total_voucher_value": round_money(total_value),
        "total_tax_paid": round_money(total_tax),
        "invoice_count": invoice_count,
    }


def build_sales_register(invoices: Iterable, start_date: date, end_date: date) -> dict:
    """One entry per non-cancelled invoice, ordered by issue date."""
    entries = []
    for invoice in sorted(invoices, key=lambda inv: (inv.date_issued, inv.invoice_number)):
        if invoice.status == "cancelled":
            continue
        snapshot = invoice.client_snapshot or {}
        entries.append(
            {
                "invoice_number": invoice.invoice_number,
                "invoice_date": invoice.date_issued,
                "client_name": snapshot.get("name") or "Unknown",
                "client_tin": snapshot.get("tin"),
                "client_vat_number": snapshot.get("vat_number"),
                "subtotal": to_decimal(invoice.subtotal),
                "vat_amount": to_decimal(invoice.vat_amount),
                "sscl_amount": to_decimal(invoice.sscl_amount),
                "total": to_decimal(invoice.total),
                "invoice_type": invoice.invoice_type,
            }
        )

    summary = {
        "total_invoices": len(entries),
        "total_sales": sum((e["subtotal"] for e in entries), ZERO),
        "total_vat": sum((e["vat_amount"] for e in entries), ZERO),
        "total_sscl": sum((e["sscl_amount"] for e in entries), ZERO),
        "grand_total": sum((e["total"] for e in entries), ZERO),
    }
    return {"period": _period(start_date, end_date), "entries": entries, "summary": summary}


def _money(value) -> str:
    return f"{round_money(to_decimal(value)):.2f}"


def sales_register_to_csv(register: dict) -> str:
    """Render a sales register as CSV with a trailing TOTAL row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(SALES_REGISTER_HEADERS)
    for entry in register["entries"]:
        writer.writerow(
            [
                entry["invoice_number"],
                entry["invoice_date"].strftime("%d/%m/%Y"),
                entry["client_name"],
                entry["client_tin"] or "N/A",
                entry["client_vat_number"] or "N/A",
                _money(entry["subtotal"]),
                _money(entry["vat_amount"]),
                _money(entry["sscl_amount"]),
                _money(entry["total"]),
                entry["invoice_type"],
            ]
        )

    summary = register["summary"]
    writer.writerow(
        [
            "",
            "",
            "TOTAL",
            "",
            "",
            _money(summary["total_sales"]),
            _money(summary["total_vat"]),
            _money(summary["total_sscl"]),
            _money(summary["grand_total"]),
            "",
        ]
    )
    logger.debug("Rendered sales register CSV with %d entries", len(register["entries"]))
    return buffer.getvalue()
