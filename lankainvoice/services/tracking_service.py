"""
Engagement tracking for sent invoices.

Handles:
- Signed tracking tokens embedded in email pixels and links
- Redirect URL allow-listing for click tracking
- Recording open/click events against invoices

Token format: base64url(JSON{"id": <invoice id>, "sig": <sig>}) without
padding, where sig is the first 16 hex chars of HMAC-SHA256(id, secret).
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import logging
from typing import Iterable
from urllib.parse import urlparse

from sqlalchemy.orm import Session

from lankainvoice import metrics
from lankainvoice.core.config import settings
from lankainvoice.core.exceptions import ConfigurationError
from lankainvoice.models.models import Invoice, TrackingEvent

logger = logging.getLogger(__name__)

EMAIL_OPEN = "EMAIL_OPEN"
LINK_CLICK = "LINK_CLICK"

SIGNATURE_LENGTH = 16

# 1x1 transparent PNG
TRACKING_PIXEL = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

# Statuses an email open may advance to "viewed"
_VIEWABLE_STATUSES = {"sent", "delivered"}


def _secret(secret: str | None) -> str:
    value = secret if secret is not None else settings.TRACKING_SECRET
    if not value:
        raise ConfigurationError("TRACKING_SECRET")
    return value


def _sign(invoice_id: str, secret: str) -> str:
    digest = hmac.new(secret.encode(), invoice_id.encode(), hashlib.sha256).hexdigest()
    return digest[:SIGNATURE_LENGTH]


def generate_tracking_id(invoice_id: int | str, secret: str | None = None) -> str:
    invoice_id = str(invoice_id)
    payload = json.dumps({"id": invoice_id, "sig": _sign(invoice_id, _secret(secret))}, separators=(",", ":"))
    return base64.urlsafe_b64encode(payload.encode()).decode().rstrip("=")


def decode_tracking_id(tracking_id: str, secret: str | None = None) -> str | None:
    """Return the invoice id carried by a token, or None if it is forged or malformed."""
    try:
        padded = tracking_id + "=" * (-len(tracking_id) % 4)
        decoded = json.loads(base64.urlsafe_b64decode(padded.encode()))
        invoice_id = decoded["id"]
        signature = decoded["sig"]
    except (binascii.Error, ValueError, TypeError, KeyError):
        return None
    if not isinstance(invoice_id, str) or not isinstance(signature, str):
        return None

    if hmac.compare_digest(signature, _sign(invoice_id, _secret(secret))):
        return invoice_id
    return None


def validate_redirect_url(url: str, allowed_domains: Iterable[str] | None = None) -> str | None:
    """Allow relative paths and absolute http(s) URLs on allow-listed hosts."""
    if not url:
        return None
    if url.startswith("/") and not url.startswith("//"):
        return url

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return None

    domains = [d for d in (allowed_domains if allowed_domains is not None else settings.TRACKING_ALLOWED_DOMAINS) if d]
    hostname = parsed.hostname.lower()
    for domain in domains:
        domain = domain.lower()
        if hostname == domain or hostname.endswith(f".{domain}"):
            return url
    return None


def record_tracking_event(
    db: Session,
    invoice_id: int,
    event_type: str,
    meta: dict | None = None,
) -> TrackingEvent | None:
    """Store an engagement event; an open moves a sent/delivered invoice to viewed.

    ``meta`` may carry ``ip``, ``user_agent``, ``referer`` and ``redirect_url``.
    Unknown invoices are ignored so tracking endpoints never leak existence.
    """
    meta = meta or {}
    invoice = db.get(Invoice, invoice_id)
    if invoice is None:
        logger.warning("Tracking event %s for unknown invoice %s", event_type, invoice_id)
        return None

    event = TrackingEvent(
        invoice_id=invoice.id,
        event_type=event_type,
        ip=meta.get("ip"),
        user_agent=(meta.get("user_agent") or "")[:500] or None,
        referer=(meta.get("referer") or "")[:500] or None,
        redirect_url=meta.get("redirect_url"),
    )
    db.add(event)
    if event_type == EMAIL_OPEN and invoice.status in _VIEWABLE_STATUSES:
        invoice.status = "viewed"
    db.commit()
    metrics.tracking_event_record(event_type)
    logger.info("Recorded %s for invoice %s", event_type, invoice.invoice_number)
    return event
