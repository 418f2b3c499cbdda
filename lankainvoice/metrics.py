"""Metrics facade.

Service code should ONLY call the semantic helpers here so the backend can
change without touching call sites.

Metrics:
- tax_calculations_total        Engine runs (API previews and invoice creation)
- tax_validations_total         Compliance validations, labelled by outcome
- invoice_created_total         Invoices persisted
- invoice_issued_total          Invoices moved draft -> sent
- invoice_paid_total            Invoices fully settled
- payments_recorded_total       Payments recorded, labelled by method
- tracking_events_total         Email opens / link clicks
- invoice_amount_lkr            Distribution of invoice totals
"""

from __future__ import annotations

import logging

from prometheus_client import Counter, Histogram

logger = logging.getLogger("metrics")

_TAX_CALCULATIONS = Counter("tax_calculations_total", "Tax engine calculations", ["regime"])
_TAX_VALIDATIONS = Counter("tax_validations_total", "Tax invoice validations", ["outcome"])
_INVOICE_CREATED = Counter("invoice_created_total", "Invoices successfully created")
_INVOICE_ISSUED = Counter("invoice_issued_total", "Invoices issued to clients")
_INVOICE_PAID = Counter("invoice_paid_total", "Invoices marked paid")
_PAYMENTS_RECORDED = Counter("payments_recorded_total", "Payments recorded", ["method"])
_TRACKING_EVENTS = Counter("tracking_events_total", "Invoice engagement events", ["event_type"])
_INVOICE_AMOUNT = Histogram(
    "invoice_amount_lkr",
    "Invoice totals in LKR",
    buckets=(1000, 5000, 10000, 50000, 100000, 500000, 1000000, 5000000, 10000000),
)


def tax_calculation_record(regime: str):
    _TAX_CALCULATIONS.labels(regime=regime).inc()
    logger.debug("metric tax_calculations_total{regime=%s} += 1", regime)


def tax_validation_record(valid: bool):
    _TAX_VALIDATIONS.labels(outcome="valid" if valid else "invalid").inc()


def invoice_created(total: float | None = None):
    _INVOICE_CREATED.inc()
    if total is not None:
        _INVOICE_AMOUNT.observe(total)


def invoice_issued():
    _INVOICE_ISSUED.inc()


def invoice_paid():
    _INVOICE_PAID.inc()


def payment_recorded(method: str):
    _PAYMENTS_RECORDED.labels(method=method).inc()


def tracking_event_record(event_type: str):
    _TRACKING_EVENTS.labels(event_type=event_type).inc()
