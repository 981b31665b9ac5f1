"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field

# Status code of the envelope served when proxying is switched off.
DISABLED_STATUS_CODE = -1


class DisabledEnvelope(BaseModel):
    """Fixed envelope served in place of upstream data for disabled routes.

    Shaped like a Giant Bomb response so clients parsing the upstream
    schema can read the status without special casing.
    """

    status_code: int = DISABLED_STATUS_CODE
    error: str = "Proxy disabled"
    message: str = "This endpoint is temporarily disabled. Please try again later."
    limit: int = 0
    offset: int = 0
    number_of_page_results: int = 0
    number_of_total_results: int = 0
    results: list = Field(default_factory=list)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
