from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from teamtasks.core.config import settings
from teamtasks.db.mongodb import db

router = APIRouter()


async def _check_database() -> str:
    if not db.client:
        return "client_not_initialized"
    try:
        await db.client.admin.command("ping")
    except Exception as e:
        return f"error: {str(e)}"
    return "connected"


@router.get("/live", summary="Liveness Probe")
async def liveness():
    """
    Liveness probe to check if the application process is running.
    """
    return {"status": "alive"}


@router.get("/ready", summary="Readiness Probe")
async def readiness():
    """
    Readiness probe.

    Only MongoDB decides readiness. Notifications are best-effort, so their
    state is reported but never fails the probe.
    """
    components = {
        "database": await _check_database(),
        "notifications": "configured" if settings.NOTIFICATION_WEBHOOK_URL else "disabled",
    }

    if components["database"] == "connected":
        return {"status": "ready", "components": components}

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "components": components},
    )
