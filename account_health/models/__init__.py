"""
Package initialization file for account_health models.

Re-exports all Pydantic schemas and enumerations from schemas.py and enums.py
so other modules can import data models from account_health.models directly.

Usage:
    from account_health.models import (
        Agent,
        Metrics,
        SegmentType,
        InterventionType,
        SimulationResult,
    )
"""

# =============================================================================
# Enums
# =============================================================================

from account_health.models.enums import (
    # Segment taxonomy
    SegmentType,
    ExperienceLevel,
    BusinessModel,
    Specialization,
    PlatformEngagement,
    SpendLevel,
    MarketTypeLocation,
    MarketTypeCondition,
    SEGMENT_VALUE_ENUMS,
    # Interventions
    InterventionType,
    # Agent attributes
    SubscriptionTier,
)


# =============================================================================
# Schemas
# =============================================================================

from account_health.models.schemas import (
    # -------------------------------------------------------------------------
    # Snapshot entity
    # -------------------------------------------------------------------------
    Agent,

    # -------------------------------------------------------------------------
    # Metric groups
    # -------------------------------------------------------------------------
    FinancialHealthMetrics,
    ListingActivityMetrics,
    LeadManagementMetrics,
    CustomerSatisfactionMetrics,
    EarlyWarningMetrics,
    RevenueImpactMetrics,
    SegmentBreakdown,
    Metrics,
    SimulationMetrics,
    ImpactDelta,

    # -------------------------------------------------------------------------
    # Intervention catalog and simulation
    # -------------------------------------------------------------------------
    InterventionDetails,
    AvailableIntervention,
    SimulationRequest,
    SimulationResult,

    # -------------------------------------------------------------------------
    # API envelopes
    # -------------------------------------------------------------------------
    ErrorDetail,
    ErrorResponse,
    MetricsResponse,
    SimulationResponse,
    SegmentsResponse,
    InterventionsResponse,
    InterventionDetailsResponse,
    HealthCheckResponse,
)


__all__ = [
    # Enums
    'SegmentType',
    'ExperienceLevel',
    'BusinessModel',
    'Specialization',
    'PlatformEngagement',
    'SpendLevel',
    'MarketTypeLocation',
    'MarketTypeCondition',
    'SEGMENT_VALUE_ENUMS',
    'InterventionType',
    'SubscriptionTier',
    # Schemas
    'Agent',
    'FinancialHealthMetrics',
    'ListingActivityMetrics',
    'LeadManagementMetrics',
    'CustomerSatisfactionMetrics',
    'EarlyWarningMetrics',
    'RevenueImpactMetrics',
    'SegmentBreakdown',
    'Metrics',
    'SimulationMetrics',
    'ImpactDelta',
    'InterventionDetails',
    'AvailableIntervention',
    'SimulationRequest',
    'SimulationResult',
    'ErrorDetail',
    'ErrorResponse',
    'MetricsResponse',
    'SimulationResponse',
    'SegmentsResponse',
    'InterventionsResponse',
    'InterventionDetailsResponse',
    'HealthCheckResponse',
]
