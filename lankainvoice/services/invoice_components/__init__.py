"""Shared invoice service components."""
from .creation import InvoiceCreationMixin
from .payments import InvoicePaymentMixin
from .query import InvoiceQueryMixin
from .status import InvoiceStatusMixin

__all__ = [
    "InvoiceCreationMixin",
    "InvoicePaymentMixin",
    "InvoiceQueryMixin",
    "InvoiceStatusMixin",
]
