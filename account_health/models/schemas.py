"""
Pydantic request/response models for the Account Health backend.

This module provides type-safe data validation and serialization for the
agent snapshot entity, the aggregated metric groups, the intervention catalog,
simulation results, and the API response envelopes.

Field names are camelCase because they are the wire contract consumed by the
dashboard frontend. Database rows use snake_case columns and are converted by
Agent.from_record().

All models use Pydantic v2 syntax.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from account_health.models.enums import (
    BusinessModel,
    ExperienceLevel,
    InterventionType,
    MarketTypeCondition,
    MarketTypeLocation,
    PlatformEngagement,
    SegmentType,
    Specialization,
    SpendLevel,
    SubscriptionTier,
)


# =============================================================================
# Agent Snapshot Entity
# =============================================================================


class Agent(BaseModel):
    """
    A real estate professional on the platform, as of the current snapshot.

    Agents are read-only inputs to aggregation. The model is frozen so the
    core cannot mutate a record it was handed by the repository.

    Segment fields are validated against their axis enums and stored as plain
    strings (use_enum_values) so segment filtering is exact string equality.
    """
    model_config = ConfigDict(
        frozen=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "id": "agent-0",
                "name": "Jordan Smith",
                "email": "jordan.smith@example.com",
                "phone": "555-0100",
                "experienceLevel": "veteran",
                "businessModel": "team",
                "specialization": "luxury",
                "platformEngagement": "high",
                "spendLevel": "moreThan10k",
                "marketTypeLocation": "urban",
                "marketTypeCondition": "hot",
                "revenue": 23040,
                "acquisitionCost": 1716,
                "estimatedLifetimeValue": 138240,
                "newListingsCount": 14,
                "listingUpdatesCount": 56,
                "averageTimeToSell": 32,
                "averageResponseTime": 2.5,
                "leadConversionRate": 18.4,
                "supportTicketsCount": 3,
                "npsScore": 62,
                "averageResolutionTime": 11.0,
                "churnRisk": 12,
                "engagementTrend": 4.2,
                "satisfactionTrend": 3.1,
                "priceSensitivity": 22,
                "retentionProbability": 88,
                "revenueAtRisk": 2765,
                "growthRate": 9.5,
                "joinDate": "2022-03-14T00:00:00Z",
                "lastActivityDate": "2026-10-01T00:00:00Z",
                "subscriptionTier": "premium",
                "activeFeatures": ["listings", "analytics", "crm", "leads", "reports", "api"]
            }
        }
    )

    # Identity
    id: str = Field(..., min_length=1, description="Unique agent identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Contact email")
    phone: str = Field(..., description="Contact phone number")

    # Segments
    experienceLevel: ExperienceLevel
    businessModel: BusinessModel
    specialization: Specialization
    platformEngagement: PlatformEngagement
    spendLevel: SpendLevel
    marketTypeLocation: MarketTypeLocation
    marketTypeCondition: MarketTypeCondition

    # Financial
    revenue: float = Field(..., ge=0, description="Annual revenue to the platform")
    acquisitionCost: float = Field(..., ge=0)
    estimatedLifetimeValue: float = Field(..., ge=0)

    # Listing activity
    newListingsCount: int = Field(..., ge=0)
    listingUpdatesCount: int = Field(..., ge=0)
    averageTimeToSell: float = Field(..., ge=0, description="Days on market")

    # Lead management
    averageResponseTime: float = Field(..., ge=0, description="Hours to first response")
    leadConversionRate: float = Field(..., ge=0, le=100, description="Percent of leads converted")

    # Customer satisfaction
    supportTicketsCount: int = Field(..., ge=0)
    npsScore: float = Field(..., ge=-100, le=100)
    averageResolutionTime: float = Field(..., ge=0, description="Hours to resolve a ticket")

    # Early warning indicators
    churnRisk: float = Field(..., ge=0, le=100)
    engagementTrend: float = Field(..., description="Signed engagement change, percent")
    satisfactionTrend: float = Field(..., description="Signed satisfaction change")
    priceSensitivity: float = Field(..., ge=0, le=100)

    # Revenue impact
    retentionProbability: float = Field(..., ge=0, le=100)
    revenueAtRisk: float = Field(..., ge=0)
    growthRate: float = Field(..., description="Signed revenue growth, percent")

    # Lifecycle and subscription
    joinDate: datetime
    lastActivityDate: datetime
    subscriptionTier: SubscriptionTier
    activeFeatures: List[str] = Field(default_factory=list)

    @field_validator("activeFeatures", mode="before")
    @classmethod
    def _decode_features(cls, value: Any) -> Any:
        # json/jsonb columns come back from asyncpg as text
        if isinstance(value, str):
            return json.loads(value)
        if value is None:
            return []
        return value

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Agent":
        """
        Build an Agent from a database row with snake_case column names.

        Args:
            record: asyncpg.Record or any mapping, e.g. {"experience_level": "rookie", ...}

        Returns:
            Validated Agent instance.
        """
        return cls.model_validate({to_camel(key): value for key, value in dict(record).items()})


# =============================================================================
# Metric Groups
# =============================================================================


class FinancialHealthMetrics(BaseModel):
    """Mean revenue, acquisition cost, and lifetime value per agent."""
    averageRevenuePerAgent: float = 0.0
    customerAcquisitionCost: float = 0.0
    lifetimeValue: float = 0.0


class ListingActivityMetrics(BaseModel):
    """Listing counts are population sums; timeToSell is a mean."""
    newListings: float = 0.0
    listingUpdates: float = 0.0
    timeToSell: float = 0.0


class LeadManagementMetrics(BaseModel):
    responseTime: float = 0.0
    conversionRate: float = 0.0


class CustomerSatisfactionMetrics(BaseModel):
    """supportTicketVolume is a population sum; the rest are means."""
    supportTicketVolume: float = 0.0
    supportNPS: float = 0.0
    supportResolutionTimes: float = 0.0


class EarlyWarningMetrics(BaseModel):
    """
    Leading indicators of churn.

    engagementDeclinePercentage reports the magnitude of a negative mean
    engagement trend; a non-negative mean is reported unchanged.
    """
    churnPredictionScore: float = 0.0
    engagementDeclinePercentage: float = 0.0
    satisfactionTrendValue: float = 0.0
    priceSensitivityScore: float = 0.0


class RevenueImpactMetrics(BaseModel):
    """revenueAtRisk is a population sum; the rates are means."""
    revenueRetentionRate: float = 0.0
    revenueAtRisk: float = 0.0
    revenueGrowthRate: float = 0.0


class SegmentBreakdown(BaseModel):
    """
    Percentage of the population holding each value, per segment axis.

    Every enumerated value is present (zero-filled). Each bucket is rounded
    independently, so one axis may sum to 99 or 101.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "experienceLevel": {"rookie": 33, "established": 33, "veteran": 33},
            }
        }
    )

    experienceLevel: Dict[str, int]
    businessModel: Dict[str, int]
    specialization: Dict[str, int]
    platformEngagement: Dict[str, int]
    spendLevel: Dict[str, int]
    marketTypeLocation: Dict[str, int]
    marketTypeCondition: Dict[str, int]


class Metrics(BaseModel):
    """
    Aggregated KPIs over an agent collection.

    Recomputed from the snapshot on every call; nothing is cached.
    """
    financialHealth: FinancialHealthMetrics
    listingActivity: ListingActivityMetrics
    leadManagement: LeadManagementMetrics
    customerSatisfaction: CustomerSatisfactionMetrics
    earlyWarning: EarlyWarningMetrics
    revenueImpact: RevenueImpactMetrics
    segmentBreakdown: SegmentBreakdown


class SimulationMetrics(BaseModel):
    """The three metric groups an intervention can move."""
    financialHealth: FinancialHealthMetrics = Field(default_factory=FinancialHealthMetrics)
    earlyWarning: EarlyWarningMetrics = Field(default_factory=EarlyWarningMetrics)
    revenueImpact: RevenueImpactMetrics = Field(default_factory=RevenueImpactMetrics)


class ImpactDelta(SimulationMetrics):
    """Signed per-field adjustment to be added to the current metrics."""


# =============================================================================
# Intervention Catalog
# =============================================================================


class InterventionDetails(BaseModel):
    """Static catalog entry describing one intervention."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "type": "discount-offer",
                "name": "Discount Offer",
                "description": "10% discount on premium features",
                "costToImplement": 25000,
                "estimatedROI": 2.5,
                "timeToImpact": "1-3 months",
                "applicableSegments": ["spendLevel", "platformEngagement"]
            }
        }
    )

    type: InterventionType
    name: str
    description: str
    costToImplement: float = Field(..., ge=0, description="One-off cost in USD")
    estimatedROI: float = Field(..., ge=0, description="Expected return multiple")
    timeToImpact: str = Field(..., description="Qualitative delay, e.g. '1-3 months'")
    applicableSegments: List[SegmentType] = Field(
        default_factory=list,
        description="Segment axes the intervention is designed for"
    )


class AvailableIntervention(BaseModel):
    """Listing entry returned by GET /interventions."""
    id: InterventionType
    name: str
    description: str
    applicableSegments: List[SegmentType]


# =============================================================================
# Simulation
# =============================================================================


class SimulationRequest(BaseModel):
    """
    Body of POST /simulate.

    Identifiers are plain strings here; the simulator validates them against
    the enumerations and raises a descriptive error.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "interventionType": "discount-offer",
                "segmentType": "spendLevel",
                "segmentValue": "lessThan1k"
            }
        }
    )

    interventionType: str = Field(..., min_length=1)
    segmentType: str = Field(..., min_length=1)
    segmentValue: str = Field(..., min_length=1)


class SimulationResult(BaseModel):
    """What-if projection for one intervention on one segment. Never persisted."""
    currentMetrics: SimulationMetrics
    projectedMetrics: SimulationMetrics
    impact: ImpactDelta
    interventionDetails: InterventionDetails


# =============================================================================
# API Envelopes
# =============================================================================


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorDetail


class MetricsResponse(BaseModel):
    success: bool = True
    data: Metrics


class SimulationResponse(BaseModel):
    success: bool = True
    data: SimulationResult


class SegmentsResponse(BaseModel):
    success: bool = True
    data: Dict[str, List[str]]


class InterventionsResponse(BaseModel):
    success: bool = True
    data: List[AvailableIntervention]


class InterventionDetailsResponse(BaseModel):
    success: bool = True
    data: InterventionDetails


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="'healthy' or 'unhealthy'")
    dependencies: Dict[str, str]
    timestamp: datetime
