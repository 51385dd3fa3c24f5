"""Health check API schemas."""

from pydantic import Field

from medialib.schemas.common import CamelModel


class HealthResponse(CamelModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    version: str | None = Field(default=None, description="Application version")


class ReadinessResponse(CamelModel):
    """Response for GET /health/ready: row counts per table once the store is loaded."""

    status: str = Field(default="ok", description="Readiness status")
    records: dict[str, int] = Field(default_factory=dict, description="Rows per table")
