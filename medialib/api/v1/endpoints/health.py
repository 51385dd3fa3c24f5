"""Health check endpoints. No fault injection; used for liveness and readiness probes."""

from fastapi import APIRouter

from medialib.api.v1.dependencies import SettingsDep, StoreDep
from medialib.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(settings: SettingsDep) -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=settings.app_version)


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(store: StoreDep) -> ReadinessResponse:
    """Return row counts per table once the record store is loaded."""
    return ReadinessResponse(records=store.counts())
