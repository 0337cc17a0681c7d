"""
Backend Services Module

This module contains the business logic of the Account Health backend. The
aggregation, impact, and simulation services are stateless and depend on
storage only through the AgentRepository interface.

Services:
- segments: Segment taxonomy and identifier validation
- metrics: Aggregation of agent collections into Metrics
- interventions: Static intervention catalog
- impact: Base-effect / segment-sensitivity / cross-term impact model
- simulation: What-if projection of an intervention on a segment
- repository: AgentRepository interface with PostgreSQL and in-memory backends

All services are consumed by the API layer (account_health/api/).
"""

# =============================================================================
# Segment Taxonomy
# =============================================================================

from account_health.services.segments import (
    SEGMENT_VALUES,
    list_segments,
    get_segment_values,
    parse_segment_type,
    validate_segment,
)

# =============================================================================
# Agent Repository
# =============================================================================

from account_health.services.repository import (
    AgentRepository,
    PostgresAgentRepository,
    InMemoryAgentRepository,
)

# =============================================================================
# Aggregation
# =============================================================================

from account_health.services.metrics import (
    calculate_metrics,
    calculate_average,
    calculate_sum,
    calculate_segment_breakdown,
    get_metrics,
)

# =============================================================================
# Intervention Catalog
# =============================================================================

from account_health.services.interventions import (
    INTERVENTION_CATALOG,
    get_intervention_details,
    list_interventions,
    parse_intervention_type,
)

# =============================================================================
# Impact Model
# =============================================================================

from account_health.services.impact import (
    BASE_EFFECTS,
    SEGMENT_SENSITIVITY,
    CROSS_TERM_MULTIPLIERS,
    calculate_intervention_impact,
)

# =============================================================================
# Simulation
# =============================================================================

from account_health.services.simulation import (
    PROJECTION_CLAMPS,
    project_metrics,
    simulate_intervention,
)


__all__ = [
    # Segments
    'SEGMENT_VALUES',
    'list_segments',
    'get_segment_values',
    'parse_segment_type',
    'validate_segment',
    # Repository
    'AgentRepository',
    'PostgresAgentRepository',
    'InMemoryAgentRepository',
    # Metrics
    'calculate_metrics',
    'calculate_average',
    'calculate_sum',
    'calculate_segment_breakdown',
    'get_metrics',
    # Interventions
    'INTERVENTION_CATALOG',
    'get_intervention_details',
    'list_interventions',
    'parse_intervention_type',
    # Impact
    'BASE_EFFECTS',
    'SEGMENT_SENSITIVITY',
    'CROSS_TERM_MULTIPLIERS',
    'calculate_intervention_impact',
    # Simulation
    'PROJECTION_CLAMPS',
    'project_metrics',
    'simulate_intervention',
]
