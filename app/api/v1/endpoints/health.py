"""Health check endpoint. No authentication; used for liveness probes."""

from fastapi import APIRouter, Request

from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok for liveness, plus whether the document store is configured."""
    store = getattr(request.app.state, "document_store", None)
    return HealthResponse(document_store="configured" if store is not None else "unavailable")
