"""
FastAPI router module for the metrics endpoint.

Endpoints:
- GET /metrics: Aggregated KPIs for the full population or one segment

Response Envelope:
    { "success": true, "data": { ...Metrics... } }

Errors are raised as AccountHealthError subclasses and rendered into the
{ "success": false, "error": {...} } envelope by the handlers registered in
account_health.main.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query

from account_health.core.dependencies import AgentRepositoryDep
from account_health.models import MetricsResponse
from account_health.services.metrics import get_metrics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("", response_model=MetricsResponse)
async def read_metrics(
    repository: AgentRepositoryDep,
    segmentType: Optional[str] = Query(default=None, description="Segment axis, e.g. 'spendLevel'"),
    segmentValue: Optional[str] = Query(default=None, description="Value on the axis, e.g. 'lessThan1k'"),
) -> MetricsResponse:
    """
    Get aggregated metrics, optionally restricted to one segment.

    The filter applies only when both segmentType and segmentValue are given;
    otherwise the whole population is aggregated. Metrics are computed fresh
    from the current snapshot on every call.

    Args:
        repository: Agent repository from dependency injection.
        segmentType: Optional segment axis.
        segmentValue: Optional value on that axis.

    Returns:
        MetricsResponse wrapping the six metric groups and segment breakdown.

    Raises:
        UnknownSegmentTypeError / UnknownSegmentValueError: Rendered as 400.
        RepositoryUnavailableError: Rendered as 503.

    Example Request:
        GET /metrics?segmentType=experienceLevel&segmentValue=rookie
    """
    metrics = await get_metrics(repository, segmentType, segmentValue)
    logger.debug(f"GET /metrics served (segmentType={segmentType}, segmentValue={segmentValue})")
    return MetricsResponse(data=metrics)
