"""Sri Lankan tax rates (IRD, as of 2024)."""
from decimal import Decimal

from lankainvoice.core.config import settings

from .types import TaxCategory, TaxRegime, TenantTaxProfile, to_decimal

VAT_STANDARD_RATE = settings.DEFAULT_VAT_RATE
VAT_ZERO_RATE = Decimal("0")
SSCL_RATE = settings.SSCL_RATE


def vat_rate_for(category: TaxCategory, tenant: TenantTaxProfile) -> Decimal:
    """Per-line VAT rate for a standard/zero-rated/exempt line.

    Only VAT-registered suppliers charge VAT line by line; SVAT suppliers
    settle through vouchers and unregistered suppliers charge nothing.
    """
    if tenant.regime != TaxRegime.VAT:
        return VAT_ZERO_RATE
    if category == TaxCategory.STANDARD:
        return to_decimal(tenant.default_vat_rate) or VAT_STANDARD_RATE
    return VAT_ZERO_RATE
