"""
Intervention impact model for the Account Health simulator.

Computes the signed per-field delta an intervention is projected to cause on
a segment, given that segment's current metrics. The model is a static
weighted formula, not a learned predictor, and is fully deterministic.

The delta covers nine tracked fields across three metric groups
(financialHealth, earlyWarning, revenueImpact) and is built in three steps:

1. Base effect: BASE_EFFECTS[intervention][group][field] is a ratio applied
   to the current value, so delta = current * ratio. A ratio of -0.05 on
   averageRevenuePerAgent means "reduce by 5% of the current value".
   customerAcquisitionCost has no coefficient and always moves by 0.
2. Segment sensitivity: for experienceLevel, businessModel,
   platformEngagement and spendLevel, the two extreme values scale specific
   fields of the step-1 delta (SEGMENT_SENSITIVITY). Middle values, and the
   axes specialization, marketTypeLocation and marketTypeCondition, leave
   the delta unchanged.
3. Cross-term: CROSS_TERM_MULTIPLIERS scales every field of the delta for
   specific (intervention, axis) pairs; all other pairs use 1.0.

No clamping happens here. Non-negativity and the 100% retention cap are
applied to the projected values by the simulator.
"""

import logging
from typing import Dict, Tuple, Union

from account_health.models.enums import (
    BusinessModel,
    ExperienceLevel,
    InterventionType,
    PlatformEngagement,
    SegmentType,
    SpendLevel,
)
from account_health.models.schemas import ImpactDelta, Metrics, SimulationMetrics
from account_health.services.interventions import parse_intervention_type
from account_health.services.segments import validate_segment

logger = logging.getLogger(__name__)

# group -> field -> coefficient
EffectTable = Dict[str, Dict[str, float]]


# =============================================================================
# Tracked Fields
# =============================================================================

IMPACT_FIELDS: Dict[str, Tuple[str, ...]] = {
    "financialHealth": (
        "averageRevenuePerAgent",
        "customerAcquisitionCost",
        "lifetimeValue",
    ),
    "earlyWarning": (
        "churnPredictionScore",
        "engagementDeclinePercentage",
        "satisfactionTrendValue",
        "priceSensitivityScore",
    ),
    "revenueImpact": (
        "revenueRetentionRate",
        "revenueAtRisk",
        "revenueGrowthRate",
    ),
}


# =============================================================================
# Step 1: Base Effects (ratio of the current value)
# =============================================================================

BASE_EFFECTS: Dict[InterventionType, EffectTable] = {
    InterventionType.DISCOUNT_OFFER: {
        "financialHealth": {"averageRevenuePerAgent": -0.05, "lifetimeValue": 0.10},
        "earlyWarning": {
            "churnPredictionScore": -0.33,
            "engagementDeclinePercentage": -0.38,
            "satisfactionTrendValue": 1.5,
            "priceSensitivityScore": -0.29,
        },
        "revenueImpact": {"revenueRetentionRate": 0.03, "revenueAtRisk": -0.40, "revenueGrowthRate": 0.60},
    },
    InterventionType.BUNDLED_SERVICE: {
        "financialHealth": {"averageRevenuePerAgent": 0.15, "lifetimeValue": 0.20},
        "earlyWarning": {
            "churnPredictionScore": -0.20,
            "engagementDeclinePercentage": -0.25,
            "satisfactionTrendValue": 1.0,
            "priceSensitivityScore": -0.15,
        },
        "revenueImpact": {"revenueRetentionRate": 0.05, "revenueAtRisk": -0.30, "revenueGrowthRate": 0.40},
    },
    InterventionType.PERSONALIZED_TRAINING: {
        "financialHealth": {"averageRevenuePerAgent": 0.05, "lifetimeValue": 0.15},
        "earlyWarning": {
            "churnPredictionScore": -0.25,
            "engagementDeclinePercentage": -0.50,
            "satisfactionTrendValue": 2.0,
            "priceSensitivityScore": -0.10,
        },
        "revenueImpact": {"revenueRetentionRate": 0.04, "revenueAtRisk": -0.25, "revenueGrowthRate": 0.30},
    },
    InterventionType.ACCOUNT_MANAGER: {
        "financialHealth": {"averageRevenuePerAgent": 0.10, "lifetimeValue": 0.25},
        "earlyWarning": {
            "churnPredictionScore": -0.40,
            "engagementDeclinePercentage": -0.30,
            "satisfactionTrendValue": 1.8,
            "priceSensitivityScore": -0.05,
        },
        "revenueImpact": {"revenueRetentionRate": 0.07, "revenueAtRisk": -0.45, "revenueGrowthRate": 0.35},
    },
    InterventionType.USAGE_INCENTIVE: {
        "financialHealth": {"averageRevenuePerAgent": 0.08, "lifetimeValue": 0.12},
        "earlyWarning": {
            "churnPredictionScore": -0.15,
            "engagementDeclinePercentage": -0.60,
            "satisfactionTrendValue": 1.2,
            "priceSensitivityScore": -0.20,
        },
        "revenueImpact": {"revenueRetentionRate": 0.03, "revenueAtRisk": -0.20, "revenueGrowthRate": 0.25},
    },
    InterventionType.TARGETED_CONTENT: {
        "financialHealth": {"averageRevenuePerAgent": 0.03, "lifetimeValue": 0.08},
        "earlyWarning": {
            "churnPredictionScore": -0.10,
            "engagementDeclinePercentage": -0.40,
            "satisfactionTrendValue": 0.8,
            "priceSensitivityScore": -0.05,
        },
        "revenueImpact": {"revenueRetentionRate": 0.02, "revenueAtRisk": -0.15, "revenueGrowthRate": 0.15},
    },
    InterventionType.PERFORMANCE_REVIEW: {
        "financialHealth": {"averageRevenuePerAgent": 0.12, "lifetimeValue": 0.18},
        "earlyWarning": {
            "churnPredictionScore": -0.30,
            "engagementDeclinePercentage": -0.35,
            "satisfactionTrendValue": 1.5,
            "priceSensitivityScore": -0.15,
        },
        "revenueImpact": {"revenueRetentionRate": 0.05, "revenueAtRisk": -0.35, "revenueGrowthRate": 0.45},
    },
}


# =============================================================================
# Step 2: Segment Sensitivity (multiplier on the base delta)
# =============================================================================

SEGMENT_SENSITIVITY: Dict[SegmentType, Dict[str, EffectTable]] = {
    SegmentType.EXPERIENCE_LEVEL: {
        # Rookies respond to engagement and satisfaction work, less to revenue levers
        ExperienceLevel.ROOKIE.value: {
            "earlyWarning": {"engagementDeclinePercentage": 1.2, "satisfactionTrendValue": 1.2},
            "financialHealth": {"averageRevenuePerAgent": 0.8},
        },
        ExperienceLevel.VETERAN.value: {
            "financialHealth": {"averageRevenuePerAgent": 1.2},
            "earlyWarning": {"engagementDeclinePercentage": 0.8},
        },
    },
    SegmentType.BUSINESS_MODEL: {
        BusinessModel.INDIVIDUAL.value: {
            "earlyWarning": {"satisfactionTrendValue": 1.2, "churnPredictionScore": 1.2},
            "financialHealth": {"averageRevenuePerAgent": 0.8},
        },
        BusinessModel.BROKERAGE.value: {
            "financialHealth": {"averageRevenuePerAgent": 1.2},
            "earlyWarning": {"satisfactionTrendValue": 0.8},
        },
    },
    SegmentType.PLATFORM_ENGAGEMENT: {
        PlatformEngagement.LOW.value: {
            "earlyWarning": {"engagementDeclinePercentage": 1.3, "churnPredictionScore": 1.3},
            "financialHealth": {"averageRevenuePerAgent": 0.7},
        },
        PlatformEngagement.HIGH.value: {
            "financialHealth": {"averageRevenuePerAgent": 1.3},
            "earlyWarning": {"engagementDeclinePercentage": 0.7},
        },
    },
    SegmentType.SPEND_LEVEL: {
        SpendLevel.LESS_THAN_1K.value: {
            "earlyWarning": {"engagementDeclinePercentage": 1.3, "satisfactionTrendValue": 1.3},
            "financialHealth": {"averageRevenuePerAgent": 0.7},
        },
        SpendLevel.MORE_THAN_10K.value: {
            "financialHealth": {"averageRevenuePerAgent": 1.3},
            "earlyWarning": {"churnPredictionScore": 0.7},
        },
    },
}


# =============================================================================
# Step 3: Cross-Terms (uniform multiplier on every field)
# =============================================================================

CROSS_TERM_MULTIPLIERS: Dict[Tuple[InterventionType, SegmentType], float] = {
    (InterventionType.DISCOUNT_OFFER, SegmentType.SPEND_LEVEL): 1.2,
    (InterventionType.PERSONALIZED_TRAINING, SegmentType.EXPERIENCE_LEVEL): 1.2,
}

DEFAULT_CROSS_TERM = 1.0


# =============================================================================
# Impact Calculation
# =============================================================================


def calculate_base_effects(
    intervention: InterventionType,
    current: Union[Metrics, SimulationMetrics]
) -> EffectTable:
    """
    Apply the base coefficient table to the current metric values.

    Returns:
        group -> field -> delta, with every tracked field present (0.0 when
        the intervention has no coefficient for it).
    """
    coefficients = BASE_EFFECTS[intervention]
    delta: EffectTable = {}
    for group, fields in IMPACT_FIELDS.items():
        current_group = getattr(current, group)
        group_coefficients = coefficients.get(group, {})
        delta[group] = {
            field: getattr(current_group, field) * group_coefficients.get(field, 0.0)
            for field in fields
        }
    return delta


def get_segment_sensitivity(segment_type: SegmentType, segment_value: str) -> EffectTable:
    """Field multipliers for a segment; empty when the segment has no rule."""
    return SEGMENT_SENSITIVITY.get(segment_type, {}).get(segment_value, {})


def get_cross_term_multiplier(intervention: InterventionType, segment_type: SegmentType) -> float:
    return CROSS_TERM_MULTIPLIERS.get((intervention, segment_type), DEFAULT_CROSS_TERM)


def calculate_intervention_impact(
    intervention: Union[str, InterventionType],
    segment_type: Union[str, SegmentType],
    segment_value: str,
    current: Union[Metrics, SimulationMetrics]
) -> ImpactDelta:
    """
    Compute the projected metric delta of an intervention on a segment.

    Args:
        intervention: Intervention id, e.g. 'discount-offer'.
        segment_type: Axis the segment is drawn from, e.g. 'spendLevel'.
        segment_value: Value on that axis, e.g. 'lessThan1k'.
        current: Current metrics of the segment (Metrics or the three-group
            SimulationMetrics).

    Returns:
        ImpactDelta mirroring financialHealth / earlyWarning / revenueImpact,
        each field a signed adjustment to add to the current value.

    Raises:
        UnknownInterventionError: If the intervention id is not in the catalog.
        UnknownSegmentTypeError / UnknownSegmentValueError: If the segment is
            outside the taxonomy.

    Example:
        >>> delta = calculate_intervention_impact(
        ...     'discount-offer', 'specialization', 'luxury', metrics
        ... )
        >>> delta.financialHealth.averageRevenuePerAgent  # ARPA of 1000
        -50.0
    """
    intervention = parse_intervention_type(intervention)
    segment_type, segment_value = validate_segment(segment_type, segment_value)

    delta = calculate_base_effects(intervention, current)

    for group, multipliers in get_segment_sensitivity(segment_type, segment_value).items():
        for field, multiplier in multipliers.items():
            delta[group][field] *= multiplier

    cross_term = get_cross_term_multiplier(intervention, segment_type)
    if cross_term != DEFAULT_CROSS_TERM:
        for group_delta in delta.values():
            for field in group_delta:
                group_delta[field] *= cross_term

    logger.debug(
        f"Impact for {intervention.value} on {segment_type.value}={segment_value} "
        f"(cross_term={cross_term})"
    )

    return ImpactDelta.model_validate(delta)
