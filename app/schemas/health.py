"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    document_store: str = Field(
        default="configured",
        description="'configured' when the Firestore client is available, else 'unavailable'",
    )


class RootResponse(BaseModel):
    """Response for GET / with links to the API documentation."""

    message: str
    version: str
    docs: dict[str, str]
