"""Custom exception hierarchy for LankaInvoice.

All application errors inherit from ``LankaInvoiceException`` so the API layer
can translate them into a uniform JSON envelope.

Error codes follow pattern: [CATEGORY][NUMBER]
- INV: Invoice errors (001-099)
- TNT: Tenant/Client errors (100-199)
- PAY: Payment errors (200-299)
- TAX: Tax/Compliance errors (300-399)
- SYS: System errors (400-499)

The tax calculation engine itself never raises; these are used by the
workflows around it (invoice creation, issuing, payments, reporting).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any


class LankaInvoiceException(Exception):
    """Base exception for all LankaInvoice application errors."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception with user-facing message and metadata.

        Args:
            message: User-facing error message
            code: Unique error code (e.g., "INV001")
            status_code: HTTP status code (default: 400 Bad Request)
            details: Optional additional context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "details": self.details,
            }
        }


# ============================================================================
# INVOICE ERRORS (INV001-099)
# ============================================================================

class InvoiceError(LankaInvoiceException):
    """Base class for invoice-related errors."""
    pass


class InvoiceNotFoundError(InvoiceError):
    """Invoice does not exist or belongs to another tenant."""

    def __init__(self, invoice_id: int | str | None = None):
        message = "Invoice not found" if not invoice_id else f"Invoice {invoice_id} not found"
        super().__init__(
            message=message,
            code="INV001",
            status_code=404,
            details={"invoice_id": invoice_id} if invoice_id else {},
        )


class InvalidInvoiceStatusError(InvoiceError):
    """Requested status transition is not allowed."""

    def __init__(self, current_status: str, action: str):
        super().__init__(
            message=f"Cannot {action} an invoice in status '{current_status}'",
            code="INV002",
            status_code=409,
            details={"current_status": current_status, "action": action},
        )


class InvoiceValidationError(InvoiceError):
    """Invoice failed IRD compliance validation and cannot be issued."""

    def __init__(self, errors: list[str], warnings: list[str] | None = None):
        super().__init__(
            message="Invoice failed tax compliance validation",
            code="INV003",
            status_code=422,
            details={"errors": list(errors), "warnings": list(warnings or [])},
        )


# ============================================================================
# TENANT / CLIENT ERRORS (TNT100-199)
# ============================================================================

class TenantError(LankaInvoiceException):
    """Base class for tenant and client lookup errors."""
    pass


class TenantNotFoundError(TenantError):

    def __init__(self, tenant_id: int | str):
        super().__init__(
            message=f"Tenant {tenant_id} not found",
            code="TNT100",
            status_code=404,
            details={"tenant_id": tenant_id},
        )


class ClientNotFoundError(TenantError):

    def __init__(self, client_id: int | str):
        super().__init__(
            message=f"Client {client_id} not found",
            code="TNT101",
            status_code=404,
            details={"client_id": client_id},
        )


# ============================================================================
# PAYMENT ERRORS (PAY200-299)
# ============================================================================

class PaymentError(LankaInvoiceException):
    """Base class for payment-related errors."""
    pass


class InvalidPaymentAmountError(PaymentError):

    def __init__(self, amount: Decimal):
        super().__init__(
            message="Payment amount must be greater than zero",
            code="PAY200",
            status_code=400,
            details={"amount": str(amount)},
        )


# ============================================================================
# TAX ERRORS (TAX300-399)
# ============================================================================

class TaxError(LankaInvoiceException):
    """Base class for tax/compliance errors."""
    pass


class TaxRegimeConflictError(TaxError):
    """Tenant claims both VAT and SVAT registration."""

    def __init__(self):
        super().__init__(
            message="A business cannot be both VAT and SVAT registered",
            code="TAX300",
            status_code=422,
            details={"vat_registered": True, "svat_registered": True},
        )


class TenantNotVATRegisteredError(TaxError):

    def __init__(self, tenant_id: int | str):
        super().__init__(
            message="Tenant is not VAT registered",
            code="TAX301",
            status_code=400,
            details={"tenant_id": tenant_id},
        )


class TenantNotSVATRegisteredError(TaxError):

    def __init__(self, tenant_id: int | str):
        super().__init__(
            message="Tenant is not SVAT registered",
            code="TAX302",
            status_code=400,
            details={"tenant_id": tenant_id},
        )


class SVATVoucherUnavailableError(TaxError):
    """Referenced SVAT voucher is missing, already used or cancelled."""

    def __init__(self, voucher_id: int | str, status: str | None = None):
        super().__init__(
            message=f"SVAT voucher {voucher_id} is not available",
            code="TAX303",
            status_code=409,
            details={"voucher_id": voucher_id, "status": status},
        )


# ============================================================================
# SYSTEM ERRORS (SYS400-499)
# ============================================================================

class SystemError(LankaInvoiceException):
    """Base class for system/infrastructure errors."""
    pass


class ConfigurationError(SystemError):
    """Application configuration is invalid or missing."""

    def __init__(self, parameter: str):
        super().__init__(
            message=f"Configuration error: {parameter} is not configured properly",
            code="SYS401",
            status_code=500,
            details={"parameter": parameter},
        )
