"""
Enumeration definitions for the Account Health backend.

All enums inherit from both `str` and `Enum` so they serialize as their plain
string values in Pydantic models and API responses.

Segment taxonomy:
- SegmentType: the seven categorical axes describing an agent
- ExperienceLevel, BusinessModel, Specialization, PlatformEngagement,
  SpendLevel, MarketTypeLocation, MarketTypeCondition: the closed value set
  of each axis

Interventions:
- InterventionType: the seven business actions known to the simulator

Agent attributes:
- SubscriptionTier: tier derived from spend level
"""

from enum import Enum


class SegmentType(str, Enum):
    """
    Categorical axes along which the agent population is segmented.

    Every agent holds exactly one value per axis. The value sets are listed in
    the per-axis enums below and collected in SEGMENT_VALUE_ENUMS.
    """
    EXPERIENCE_LEVEL = "experienceLevel"
    BUSINESS_MODEL = "businessModel"
    SPECIALIZATION = "specialization"
    PLATFORM_ENGAGEMENT = "platformEngagement"
    SPEND_LEVEL = "spendLevel"
    MARKET_TYPE_LOCATION = "marketTypeLocation"
    MARKET_TYPE_CONDITION = "marketTypeCondition"


class ExperienceLevel(str, Enum):
    """Years in the business: rookie < established < veteran."""
    ROOKIE = "rookie"
    ESTABLISHED = "established"
    VETERAN = "veteran"


class BusinessModel(str, Enum):
    INDIVIDUAL = "individual"
    TEAM = "team"
    BROKERAGE = "brokerage"


class Specialization(str, Enum):
    RESIDENTIAL = "residential"
    RESIDENTIAL_INVESTOR = "residentialInvestor"
    LUXURY = "luxury"
    COMMERCIAL = "commercial"


class PlatformEngagement(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SpendLevel(str, Enum):
    """
    Annual platform spend bracket.

    - lessThan1k: under $1,000
    - lessThan10k: $1,000 to $10,000
    - moreThan10k: over $10,000
    """
    LESS_THAN_1K = "lessThan1k"
    LESS_THAN_10K = "lessThan10k"
    MORE_THAN_10K = "moreThan10k"


class MarketTypeLocation(str, Enum):
    SUBURBAN = "suburban"
    URBAN = "urban"
    RURAL = "rural"


class MarketTypeCondition(str, Enum):
    WARM = "warm"
    HOT = "hot"
    COOLING = "cooling"


class InterventionType(str, Enum):
    """
    Business actions that can be simulated against a segment.

    Values are the kebab-case ids used by the dashboard API.
    """
    DISCOUNT_OFFER = "discount-offer"
    BUNDLED_SERVICE = "bundled-service"
    PERSONALIZED_TRAINING = "personalized-training"
    ACCOUNT_MANAGER = "account-manager"
    USAGE_INCENTIVE = "usage-incentive"
    TARGETED_CONTENT = "targeted-content"
    PERFORMANCE_REVIEW = "performance-review"


class SubscriptionTier(str, Enum):
    """
    Subscription tier derived from spend level.

    - basic: lessThan1k
    - standard: lessThan10k
    - premium: moreThan10k
    """
    BASIC = "basic"
    STANDARD = "standard"
    PREMIUM = "premium"


# Axis -> value enum, in the order segments are listed by the API
SEGMENT_VALUE_ENUMS = {
    SegmentType.EXPERIENCE_LEVEL: ExperienceLevel,
    SegmentType.BUSINESS_MODEL: BusinessModel,
    SegmentType.SPECIALIZATION: Specialization,
    SegmentType.PLATFORM_ENGAGEMENT: PlatformEngagement,
    SegmentType.SPEND_LEVEL: SpendLevel,
    SegmentType.MARKET_TYPE_LOCATION: MarketTypeLocation,
    SegmentType.MARKET_TYPE_CONDITION: MarketTypeCondition,
}
