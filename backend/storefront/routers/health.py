from fastapi import APIRouter, Depends

from storefront.core.deps import Dependencies, get_deps
from storefront.schemas.payment import HealthResponse
from storefront.utils.clock import iso_now

router = APIRouter(tags=["Health"])


@router.get("/", response_model=HealthResponse)
def health(deps: Dependencies = Depends(get_deps)):
    """Liveness plus the state of the two upstream services."""
    return {
        "status": "ok",
        "message": "Storefront backend is running",
        "timestamp": iso_now(),
        "environment": deps.settings.environment,
        "services": {
            "firebase": "connected" if deps.firebase_initialized else "disconnected",
            "razorpay": "configured" if deps.settings.razorpay_configured else "not configured",
        },
    }
