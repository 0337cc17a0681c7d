"""
Metrics aggregation service for the Account Health backend.

This module reduces a collection of agent records into the Metrics object
served to the dashboard: six metric groups plus a segment breakdown.

Key Functions:
- calculate_metrics: Pure aggregation over an in-memory agent collection
- get_metrics: Fetch agents from the repository, then aggregate
- calculate_average / calculate_sum: Per-attribute reductions
- calculate_segment_breakdown: Zero-filled percentage breakdown per axis

Aggregation Rules:
- Means divide by population size; an empty population yields 0 for every
  field through an explicit length check, never a NaN coercion.
- Sums (listing counts, support tickets, revenue at risk) are 0 on empty input.
- engagementDeclinePercentage uses invert-negative mode: a negative mean
  engagement trend is reported as its absolute value, a non-negative mean
  is reported unchanged.
- Segment percentages are round(100 * count / total) per bucket, rounded
  half-up. They are not normalized, so an axis may sum to 99 or 101.

Idempotency:
- Same input collection produces bit-identical output; there is no hidden
  state or randomness in aggregation.
"""

import logging
import math
from collections import Counter
from typing import Dict, Iterable, Optional, Sequence, Union

from account_health.models.enums import SegmentType
from account_health.models.schemas import (
    Agent,
    CustomerSatisfactionMetrics,
    EarlyWarningMetrics,
    FinancialHealthMetrics,
    LeadManagementMetrics,
    ListingActivityMetrics,
    Metrics,
    RevenueImpactMetrics,
    SegmentBreakdown,
)
from account_health.services.repository import AgentRepository
from account_health.services.segments import SEGMENT_VALUES, parse_segment_type, validate_segment

logger = logging.getLogger(__name__)


# =============================================================================
# Per-Attribute Reductions
# =============================================================================


def calculate_sum(agents: Sequence[Agent], attribute: str) -> float:
    """
    Sum a numeric attribute across agents.

    Args:
        agents: Agent collection (possibly empty).
        attribute: Agent field name, e.g. 'newListingsCount'.

    Returns:
        Arithmetic sum, or 0 for an empty collection.
    """
    return sum((getattr(agent, attribute) or 0) for agent in agents)


def calculate_average(
    agents: Sequence[Agent],
    attribute: str,
    invert_negative: bool = False
) -> float:
    """
    Calculate the arithmetic mean of a numeric attribute across agents.

    Args:
        agents: Agent collection (possibly empty).
        attribute: Agent field name, e.g. 'revenue'.
        invert_negative: Report a negative mean as its absolute value. Used to
            turn a signed trend into a decline magnitude.

    Returns:
        Mean value, or 0 for an empty collection.

    Example:
        >>> calculate_average(agents, 'engagementTrend', invert_negative=True)
        7.5   # raw mean was -7.5
    """
    if len(agents) == 0:
        return 0.0

    average = calculate_sum(agents, attribute) / len(agents)

    if invert_negative and average < 0:
        return abs(average)
    return average


# =============================================================================
# Segment Breakdown
# =============================================================================


def count_by_segment(agents: Iterable[Agent], segment_type: SegmentType) -> Dict[str, int]:
    """Count agents per value of one segment axis. Only held values appear."""
    return dict(Counter(getattr(agent, segment_type.value) for agent in agents))


def to_percentage(count: int, total: int) -> int:
    """
    Convert a bucket count to an integer percentage of the population.

    Rounds half-up (12.5 -> 13) rather than Python's round-half-even, so a
    bucket holding 1 of 8 agents reports 13.
    """
    if total == 0:
        return 0
    return int(math.floor(count / total * 100 + 0.5))


def calculate_segment_breakdown(agents: Sequence[Agent]) -> SegmentBreakdown:
    """
    Calculate the percentage of agents holding each value on each axis.

    Every enumerated value appears in the output. Values no agent holds are
    zero-filled so the key set is identical across calls, and an empty
    population maps every value to 0.

    Args:
        agents: Agent collection (possibly empty).

    Returns:
        SegmentBreakdown with one value -> percentage mapping per axis.
    """
    total = len(agents)
    breakdown: Dict[str, Dict[str, int]] = {}

    for segment_type, values in SEGMENT_VALUES.items():
        counts = count_by_segment(agents, segment_type) if total else {}
        breakdown[segment_type.value] = {
            value: to_percentage(counts.get(value, 0), total)
            for value in values
        }

    return SegmentBreakdown(**breakdown)


# =============================================================================
# Full Aggregation
# =============================================================================


def calculate_metrics(agents: Sequence[Agent]) -> Metrics:
    """
    Reduce an agent collection into the six metric groups and segment breakdown.

    Pure and total: an empty collection is valid input and produces all-zero
    metrics with a zero-filled breakdown.

    Args:
        agents: Agent collection supplied by the repository.

    Returns:
        Metrics for the collection.
    """
    financial_health = FinancialHealthMetrics(
        averageRevenuePerAgent=calculate_average(agents, 'revenue'),
        customerAcquisitionCost=calculate_average(agents, 'acquisitionCost'),
        lifetimeValue=calculate_average(agents, 'estimatedLifetimeValue'),
    )

    listing_activity = ListingActivityMetrics(
        newListings=calculate_sum(agents, 'newListingsCount'),
        listingUpdates=calculate_sum(agents, 'listingUpdatesCount'),
        timeToSell=calculate_average(agents, 'averageTimeToSell'),
    )

    lead_management = LeadManagementMetrics(
        responseTime=calculate_average(agents, 'averageResponseTime'),
        conversionRate=calculate_average(agents, 'leadConversionRate'),
    )

    customer_satisfaction = CustomerSatisfactionMetrics(
        supportTicketVolume=calculate_sum(agents, 'supportTicketsCount'),
        supportNPS=calculate_average(agents, 'npsScore'),
        supportResolutionTimes=calculate_average(agents, 'averageResolutionTime'),
    )

    early_warning = EarlyWarningMetrics(
        churnPredictionScore=calculate_average(agents, 'churnRisk'),
        engagementDeclinePercentage=calculate_average(agents, 'engagementTrend', invert_negative=True),
        satisfactionTrendValue=calculate_average(agents, 'satisfactionTrend'),
        priceSensitivityScore=calculate_average(agents, 'priceSensitivity'),
    )

    revenue_impact = RevenueImpactMetrics(
        revenueRetentionRate=calculate_average(agents, 'retentionProbability'),
        revenueAtRisk=calculate_sum(agents, 'revenueAtRisk'),
        revenueGrowthRate=calculate_average(agents, 'growthRate'),
    )

    return Metrics(
        financialHealth=financial_health,
        listingActivity=listing_activity,
        leadManagement=lead_management,
        customerSatisfaction=customer_satisfaction,
        earlyWarning=early_warning,
        revenueImpact=revenue_impact,
        segmentBreakdown=calculate_segment_breakdown(agents),
    )


async def get_metrics(
    repository: AgentRepository,
    segment_type: Optional[Union[str, SegmentType]] = None,
    segment_value: Optional[str] = None
) -> Metrics:
    """
    Get metrics for the whole population or for one segment.

    Filters only when both segment_type and segment_value are given; with
    either missing the full population is aggregated. A non-empty
    segment_type is always validated, so an unknown axis is rejected even
    without a value.

    Args:
        repository: Agent repository to read the snapshot from.
        segment_type: Optional axis name.
        segment_value: Optional value on that axis.

    Returns:
        Metrics computed fresh from the fetched collection.

    Raises:
        UnknownSegmentTypeError / UnknownSegmentValueError: If the filter is
            outside the taxonomy (checked before any I/O).
        RepositoryUnavailableError: Propagated unchanged from the repository.
    """
    if segment_type:
        segment_type = parse_segment_type(segment_type)

    if segment_type and segment_value:
        parsed_type, parsed_value = validate_segment(segment_type, segment_value)
        agents = await repository.fetch_by_segment(parsed_type, parsed_value)
        logger.debug(f"Aggregating {len(agents)} agents for {parsed_type.value}={parsed_value}")
    else:
        agents = await repository.fetch_all()
        logger.debug(f"Aggregating {len(agents)} agents (full population)")

    return calculate_metrics(agents)
