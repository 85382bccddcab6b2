"""Health check response."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    What:  Service and database status for load balancers and monitoring.
    Why:   A backend that cannot reach its database is effectively down, so
           the check covers the database, not only the process.
    """

    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
