"""
Intervention catalog service.

Static table of the seven business interventions the simulator understands,
with display metadata, implementation cost, expected ROI, qualitative time to
impact, and the segment axes each intervention is designed for.

The catalog is never mutated. applicableSegments is informational: the
simulator accepts any axis for any intervention.
"""

from typing import Dict, List, Union

from account_health.core.exceptions import UnknownInterventionError
from account_health.models.enums import InterventionType, SegmentType
from account_health.models.schemas import AvailableIntervention, InterventionDetails


INTERVENTION_CATALOG: Dict[InterventionType, InterventionDetails] = {
    InterventionType.DISCOUNT_OFFER: InterventionDetails(
        type=InterventionType.DISCOUNT_OFFER,
        name="Discount Offer",
        description="10% discount on premium features",
        costToImplement=25000,
        estimatedROI=2.5,
        timeToImpact="1-3 months",
        applicableSegments=[SegmentType.SPEND_LEVEL, SegmentType.PLATFORM_ENGAGEMENT],
    ),
    InterventionType.BUNDLED_SERVICE: InterventionDetails(
        type=InterventionType.BUNDLED_SERVICE,
        name="Bundled Service Package",
        description="Combine multiple services at a reduced price",
        costToImplement=35000,
        estimatedROI=3.0,
        timeToImpact="1-2 months",
        applicableSegments=[SegmentType.BUSINESS_MODEL, SegmentType.SPECIALIZATION],
    ),
    InterventionType.PERSONALIZED_TRAINING: InterventionDetails(
        type=InterventionType.PERSONALIZED_TRAINING,
        name="Personalized Training",
        description="Custom training sessions for specific needs",
        costToImplement=40000,
        estimatedROI=2.2,
        timeToImpact="2-4 months",
        applicableSegments=[SegmentType.EXPERIENCE_LEVEL, SegmentType.SPECIALIZATION],
    ),
    InterventionType.ACCOUNT_MANAGER: InterventionDetails(
        type=InterventionType.ACCOUNT_MANAGER,
        name="Account Manager Assignment",
        description="Dedicated account manager for premium support",
        costToImplement=60000,
        estimatedROI=3.5,
        timeToImpact="1-2 months",
        applicableSegments=[SegmentType.SPEND_LEVEL, SegmentType.BUSINESS_MODEL],
    ),
    InterventionType.USAGE_INCENTIVE: InterventionDetails(
        type=InterventionType.USAGE_INCENTIVE,
        name="Usage Incentive Program",
        description="Rewards for platform engagement",
        costToImplement=30000,
        estimatedROI=2.0,
        timeToImpact="1-3 months",
        applicableSegments=[SegmentType.PLATFORM_ENGAGEMENT, SegmentType.EXPERIENCE_LEVEL],
    ),
    InterventionType.TARGETED_CONTENT: InterventionDetails(
        type=InterventionType.TARGETED_CONTENT,
        name="Targeted Content Delivery",
        description="Personalized content based on interests",
        costToImplement=15000,
        estimatedROI=1.8,
        timeToImpact="2-4 months",
        applicableSegments=[SegmentType.SPECIALIZATION, SegmentType.MARKET_TYPE_LOCATION],
    ),
    InterventionType.PERFORMANCE_REVIEW: InterventionDetails(
        type=InterventionType.PERFORMANCE_REVIEW,
        name="Personalized Performance Review",
        description="In-depth analysis of agent performance",
        costToImplement=45000,
        estimatedROI=2.8,
        timeToImpact="2-3 months",
        applicableSegments=[SegmentType.EXPERIENCE_LEVEL, SegmentType.BUSINESS_MODEL],
    ),
}


def parse_intervention_type(intervention: Union[str, InterventionType]) -> InterventionType:
    """
    Convert an intervention id to InterventionType.

    Raises:
        UnknownInterventionError: If the id is not in the catalog.
    """
    try:
        return InterventionType(intervention)
    except ValueError:
        raise UnknownInterventionError(
            str(intervention), [i.value for i in InterventionType]
        ) from None


def get_intervention_details(intervention: Union[str, InterventionType]) -> InterventionDetails:
    """Look up the catalog entry for an intervention id."""
    return INTERVENTION_CATALOG[parse_intervention_type(intervention)]


def list_interventions() -> List[AvailableIntervention]:
    """
    List every intervention in catalog order.

    Returns:
        AvailableIntervention entries (id, name, description, applicableSegments).
    """
    return [
        AvailableIntervention(
            id=details.type,
            name=details.name,
            description=details.description,
            applicableSegments=list(details.applicableSegments),
        )
        for details in INTERVENTION_CATALOG.values()
    ]
