from __future__ import annotations

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from lankainvoice.api.dependencies import DbDep

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz(db: DbDep) -> dict[str, str]:
    """Basic liveness probe (cheap)."""
    try:
        db.execute(text("SELECT 1"))
    except Exception as exc:  # noqa: BLE001
        raise HTTPException(status_code=503, detail="Database connectivity check failed") from exc
    return {"status": "ok"}


@router.get("/live")
async def live() -> dict[str, str]:
    """Liveness endpoint (no dependencies)."""
    return {"status": "alive"}
