"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    version: str = Field(..., description="Application version")
    surface: str = Field(..., description="Client surface served by this process")
    actions: int = Field(default=0, description="Number of registered actions")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready when ready."""

    status: str = Field(default="ok", description="Readiness status")
    database: str = Field(default="not_configured", description="ok or not_configured")


class ReadinessErrorResponse(BaseModel):
    """Response for GET /health/ready when the database cannot be reached (503)."""

    status: str = Field(default="not_ready", description="Readiness status")
    message: str = Field(..., description="Reason (e.g. database unreachable)")
