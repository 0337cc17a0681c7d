"""
Parameterized SQL query module for the agents snapshot table.

The agents table stores one row per agent with snake_case columns that map
one-to-one onto the camelCase fields of account_health.models.Agent.

Segment filters compare a segment column to a $1 parameter. Column names can't
be bound as parameters, so they come only from SEGMENT_COLUMNS, a fixed
whitelist keyed by SegmentType. The table name is validated as a plain
identifier by Settings before it reaches these functions.
"""

from typing import Dict, Tuple

from account_health.models.enums import SegmentType


# SegmentType -> column holding that segment's value
SEGMENT_COLUMNS: Dict[SegmentType, str] = {
    SegmentType.EXPERIENCE_LEVEL: "experience_level",
    SegmentType.BUSINESS_MODEL: "business_model",
    SegmentType.SPECIALIZATION: "specialization",
    SegmentType.PLATFORM_ENGAGEMENT: "platform_engagement",
    SegmentType.SPEND_LEVEL: "spend_level",
    SegmentType.MARKET_TYPE_LOCATION: "market_type_location",
    SegmentType.MARKET_TYPE_CONDITION: "market_type_condition",
}

# Columns selected for every agent query, in Agent field order
AGENT_COLUMNS: Tuple[str, ...] = (
    "id",
    "name",
    "email",
    "phone",
    *SEGMENT_COLUMNS.values(),
    "revenue",
    "acquisition_cost",
    "estimated_lifetime_value",
    "new_listings_count",
    "listing_updates_count",
    "average_time_to_sell",
    "average_response_time",
    "lead_conversion_rate",
    "support_tickets_count",
    "nps_score",
    "average_resolution_time",
    "churn_risk",
    "engagement_trend",
    "satisfaction_trend",
    "price_sensitivity",
    "retention_probability",
    "revenue_at_risk",
    "growth_rate",
    "join_date",
    "last_activity_date",
    "subscription_tier",
    "active_features",
)

_SELECT_LIST = ",\n        ".join(AGENT_COLUMNS)


def get_all_agents_query(table: str = "agents") -> str:
    """
    Generate SQL selecting every agent in the snapshot.

    Args:
        table: Agents table name (validated identifier).

    Returns:
        str: Query with no parameters.
    """
    return f"""
    SELECT
        {_SELECT_LIST}
    FROM {table}
    ORDER BY id
    """


def get_agents_by_segment_query(segment_type: SegmentType, table: str = "agents") -> str:
    """
    Generate SQL selecting agents whose segment column equals $1.

    Comparison is plain '=' on text, so matching is exact and case-sensitive.

    Args:
        segment_type: Axis to filter on; resolved through SEGMENT_COLUMNS.
        table: Agents table name (validated identifier).

    Returns:
        str: Query taking the segment value as $1.

    Raises:
        KeyError: If segment_type is not a SegmentType member.

    Example:
        >>> sql = get_agents_by_segment_query(SegmentType.SPEND_LEVEL)
        >>> rows = await conn.fetch(sql, "lessThan1k")
    """
    column = SEGMENT_COLUMNS[SegmentType(segment_type)]
    return f"""
    SELECT
        {_SELECT_LIST}
    FROM {table}
    WHERE {column} = $1
    ORDER BY id
    """
