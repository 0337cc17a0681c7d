"""
FastAPI router module for the static catalogs.

Endpoints:
- GET /segments: Segment axes and their allowed values
- GET /interventions: Available interventions with applicable segments
- GET /interventions/{intervention_id}: Full catalog entry for one intervention

These endpoints perform no I/O.
"""

from fastapi import APIRouter

from account_health.models import (
    InterventionDetailsResponse,
    InterventionsResponse,
    SegmentsResponse,
)
from account_health.services.interventions import get_intervention_details, list_interventions
from account_health.services.segments import list_segments

router = APIRouter(tags=["catalog"])


@router.get("/segments", response_model=SegmentsResponse)
async def read_segments() -> SegmentsResponse:
    """
    List segment axes and their values.

    Example Response:
        {
            "success": true,
            "data": {
                "experienceLevel": ["rookie", "established", "veteran"],
                ...
            }
        }
    """
    return SegmentsResponse(data=list_segments())


@router.get("/interventions", response_model=InterventionsResponse)
async def read_interventions() -> InterventionsResponse:
    """List the seven interventions in catalog order."""
    return InterventionsResponse(data=list_interventions())


@router.get("/interventions/{intervention_id}", response_model=InterventionDetailsResponse)
async def read_intervention(intervention_id: str) -> InterventionDetailsResponse:
    """
    Get cost, ROI, and time-to-impact for one intervention.

    Raises:
        UnknownInterventionError: Rendered as 400 INVALID_REQUEST.
    """
    return InterventionDetailsResponse(data=get_intervention_details(intervention_id))
