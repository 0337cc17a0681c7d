"""
FastAPI router module for the intervention simulator.

Endpoints:
- POST /simulate: Project the effect of one intervention on one segment

Unlike GET /metrics, the segment is required. Unknown identifiers are
rejected with 400 INVALID_REQUEST before any agent data is read.
"""

import logging

from fastapi import APIRouter

from account_health.core.dependencies import AgentRepositoryDep
from account_health.models import SimulationRequest, SimulationResponse
from account_health.services.simulation import simulate_intervention

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/simulate", tags=["simulation"])


@router.post("", response_model=SimulationResponse)
async def simulate(
    request: SimulationRequest,
    repository: AgentRepositoryDep,
) -> SimulationResponse:
    """
    Simulate an intervention on a segment.

    Example Request:
        POST /simulate
        {
            "interventionType": "discount-offer",
            "segmentType": "spendLevel",
            "segmentValue": "lessThan1k"
        }

    Example Response:
        {
            "success": true,
            "data": {
                "currentMetrics": {...},
                "projectedMetrics": {...},
                "impact": {...},
                "interventionDetails": {"type": "discount-offer", ...}
            }
        }
    """
    result = await simulate_intervention(
        request.interventionType,
        request.segmentType,
        request.segmentValue,
        repository,
    )
    logger.info(
        f"Simulated {request.interventionType} on "
        f"{request.segmentType}={request.segmentValue}"
    )
    return SimulationResponse(data=result)
