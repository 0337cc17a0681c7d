"""
Intervention simulation service.

Orchestrates a what-if projection for one intervention on one segment:

    (a) fetch the segment's agents from the repository
    (b) aggregate them into current metrics
    (c) compute the impact delta
    (d) project = current + delta, field by field, then clamp
    (e) attach the intervention's catalog entry

Projection Clamps (applied after addition, never to the delta):
- churnPredictionScore, engagementDeclinePercentage, priceSensitivityScore,
  revenueAtRisk: floored at 0
- revenueRetentionRate: capped at 100
- all other fields: unclamped

A segment with no agents is not an error: every metric is 0 and the result
signals "no data for this segment". Results are built fresh per call and
never persisted.
"""

import logging
from typing import Callable, Dict, Tuple, Union

from account_health.models.enums import InterventionType, SegmentType
from account_health.models.schemas import ImpactDelta, Metrics, SimulationMetrics, SimulationResult
from account_health.services.impact import IMPACT_FIELDS, calculate_intervention_impact
from account_health.services.interventions import get_intervention_details, parse_intervention_type
from account_health.services.metrics import calculate_metrics
from account_health.services.repository import AgentRepository
from account_health.services.segments import validate_segment

logger = logging.getLogger(__name__)


# (group, field) -> clamp applied to the projected value
PROJECTION_CLAMPS: Dict[Tuple[str, str], Callable[[float], float]] = {
    ("earlyWarning", "churnPredictionScore"): lambda v: max(0.0, v),
    ("earlyWarning", "engagementDeclinePercentage"): lambda v: max(0.0, v),
    ("earlyWarning", "priceSensitivityScore"): lambda v: max(0.0, v),
    ("revenueImpact", "revenueAtRisk"): lambda v: max(0.0, v),
    ("revenueImpact", "revenueRetentionRate"): lambda v: min(100.0, v),
}


def extract_simulation_metrics(metrics: Metrics) -> SimulationMetrics:
    """Restrict full Metrics to the three groups an intervention can move."""
    return SimulationMetrics(
        financialHealth=metrics.financialHealth,
        earlyWarning=metrics.earlyWarning,
        revenueImpact=metrics.revenueImpact,
    )


def project_metrics(current: SimulationMetrics, impact: ImpactDelta) -> SimulationMetrics:
    """
    Add the impact delta to the current metrics and apply projection clamps.

    Args:
        current: Current values of the three tracked groups.
        impact: Signed delta per field.

    Returns:
        Projected SimulationMetrics.
    """
    projected: Dict[str, Dict[str, float]] = {}
    for group, fields in IMPACT_FIELDS.items():
        current_group = getattr(current, group)
        impact_group = getattr(impact, group)
        projected[group] = {}
        for field in fields:
            value = getattr(current_group, field) + getattr(impact_group, field)
            clamp = PROJECTION_CLAMPS.get((group, field))
            projected[group][field] = clamp(value) if clamp else value
    return SimulationMetrics.model_validate(projected)


async def simulate_intervention(
    intervention: Union[str, InterventionType],
    segment_type: Union[str, SegmentType],
    segment_value: str,
    repository: AgentRepository
) -> SimulationResult:
    """
    Simulate an intervention on a segment.

    Identifiers are validated before the repository is called, so an unknown
    intervention, axis, or value never triggers I/O.

    Args:
        intervention: Intervention id, e.g. 'personalized-training'.
        segment_type: Axis name (required, unlike get_metrics).
        segment_value: Value on that axis (required).
        repository: Agent repository to read the segment from.

    Returns:
        SimulationResult with current, projected, and impact metrics for the
        financialHealth, earlyWarning, and revenueImpact groups, plus the
        intervention's catalog entry.

    Raises:
        UnknownInterventionError / UnknownSegmentTypeError /
            UnknownSegmentValueError: On identifiers outside the enumerations.
        RepositoryUnavailableError: Propagated unchanged from the repository.
    """
    intervention = parse_intervention_type(intervention)
    segment_type, segment_value = validate_segment(segment_type, segment_value)

    agents = await repository.fetch_by_segment(segment_type, segment_value)
    if not agents:
        logger.info(f"No agents in segment {segment_type.value}={segment_value}; projecting zeros")

    current = extract_simulation_metrics(calculate_metrics(agents))
    impact = calculate_intervention_impact(intervention, segment_type, segment_value, current)
    projected = project_metrics(current, impact)

    logger.debug(
        f"Simulated {intervention.value} on {segment_type.value}={segment_value} "
        f"over {len(agents)} agents"
    )

    return SimulationResult(
        currentMetrics=current,
        projectedMetrics=projected,
        impact=impact,
        interventionDetails=get_intervention_details(intervention),
    )
