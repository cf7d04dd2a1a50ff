from fastapi import APIRouter

from brewmaster.schemas.observability import ObservabilityMetricsResponse
from brewmaster.services.observability import observability_tracker

router = APIRouter(prefix="/observability", tags=["observability"])


@router.get("/metrics", response_model=ObservabilityMetricsResponse)
def get_metrics() -> ObservabilityMetricsResponse:
    return ObservabilityMetricsResponse(**observability_tracker.snapshot())
