# No postponed annotations: slowapi wraps these endpoints and reads their signatures.
import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import RedirectResponse, Response

from lankainvoice.api.dependencies import DbDep
from lankainvoice.api.rate_limit import RATE_LIMITS, limiter
from lankainvoice.core.config import settings
from lankainvoice.services.tracking_service import (
    EMAIL_OPEN,
    LINK_CLICK,
    TRACKING_PIXEL,
    decode_tracking_id,
    record_tracking_event,
    validate_redirect_url,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_NO_CACHE = {"Cache-Control": "no-store, no-cache, must-revalidate, max-age=0", "Pragma": "no-cache"}


def _request_meta(request: Request) -> dict:
    return {
        "ip": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
        "referer": request.headers.get("referer"),
    }


def _invoice_id(token: str) -> int | None:
    invoice_id = decode_tracking_id(token)
    if invoice_id is None or not invoice_id.isdigit():
        return None
    return int(invoice_id)


@router.get("/open/{token}.png")
@limiter.limit(RATE_LIMITS["tracking_open"])
def track_open(request: Request, token: str, db: DbDep):
    """Email open pixel. Always answers with the 1x1 PNG, even for bad tokens."""
    invoice_id = _invoice_id(token)
    if invoice_id is None:
        logger.info("Ignoring open pixel with invalid token")
    else:
        record_tracking_event(db, invoice_id, EMAIL_OPEN, _request_meta(request))
    return Response(content=TRACKING_PIXEL, media_type="image/png", headers=_NO_CACHE)


@router.get("/click/{token}")
@limiter.limit(RATE_LIMITS["tracking_click"])
def track_click(request: Request, token: str, db: DbDep, r: str | None = Query(None)):
    """Record a link click and redirect to an allow-listed target (or the frontend)."""
    target = validate_redirect_url(r or "") or settings.FRONTEND_URL
    invoice_id = _invoice_id(token)
    if invoice_id is None:
        logger.info("Ignoring click with invalid token")
    else:
        record_tracking_event(db, invoice_id, LINK_CLICK, {**_request_meta(request), "redirect_url": target})
    return RedirectResponse(url=target, status_code=302)
