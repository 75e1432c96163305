import logging
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from leave_ledger.config import get_settings
from leave_ledger.db import SessionDep
from leave_ledger.models.settings import SETTINGS_ROW_ID, LeaveSettingsRecord

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response.

    settings_source tells whether the ledger runs on the stored leave settings
    row or on the environment defaults; it is None when the database is down.
    """

    status: Literal["ok", "degraded"]
    version: str
    environment: str
    settings_source: Literal["stored", "defaults"] | None = None


@router.get("/health", response_model=HealthResponse)
async def health(session: SessionDep) -> HealthResponse:
    """Return the health status of the leave ledger service."""
    settings = get_settings()
    status: Literal["ok", "degraded"] = "ok"
    settings_source: Literal["stored", "defaults"] | None = None

    try:
        await session.execute(text("SELECT 1"))
        stored = await session.get(LeaveSettingsRecord, SETTINGS_ROW_ID)
        settings_source = "stored" if stored is not None else "defaults"
    except Exception:
        logger.exception("Health check: database connectivity failed")
        status = "degraded"

    return HealthResponse(
        status=status,
        version=settings.app_version,
        environment=settings.environment,
        settings_source=settings_source,
    )
