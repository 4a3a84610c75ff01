"""Health check endpoints. No auth; used for liveness and readiness probes."""

from fastapi import APIRouter, Request

from byki_admin.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(request: Request) -> ReadinessResponse:
    """Report which backing services are configured.

    The app serves without Firestore (data routes answer 503), so this
    reports rather than fails.
    """
    state = request.app.state
    return ReadinessResponse(
        firestore=getattr(state, "document_store", None) is not None,
        storage=getattr(state, "storage", None) is not None,
    )
