"""
Tax API Routes Module.

All routes are prefixed with /tax.

Sub-modules:
- calculate: Stateless calculation, validation, formatting, reverse charge
- reports: VAT return, SVAT summary, sales register and CSV export
"""
from __future__ import annotations

from fastapi import APIRouter

from .calculate import router as calculate_router
from .reports import router as reports_router

# Main router with /tax prefix
router = APIRouter(prefix="/tax", tags=["tax"])

router.include_router(calculate_router)
router.include_router(reports_router)

__all__ = ["router"]
