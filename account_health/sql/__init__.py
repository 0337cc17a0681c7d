"""
SQL Query Module for the Account Health backend.

Provides parameterized SQL queries for reading the agents snapshot table
(agent_queries). Follows the Repository Pattern: services never build SQL,
they call PostgresAgentRepository, which uses these builders.

Example usage:
    from account_health.sql import get_agents_by_segment_query
    from account_health.models import SegmentType

    sql = get_agents_by_segment_query(SegmentType.EXPERIENCE_LEVEL, table="agents")
    rows = await conn.fetch(sql, "rookie")
"""

from account_health.sql.agent_queries import (
    AGENT_COLUMNS,
    SEGMENT_COLUMNS,
    get_agents_by_segment_query,
    get_all_agents_query,
)

__all__ = [
    'AGENT_COLUMNS',
    'SEGMENT_COLUMNS',
    'get_agents_by_segment_query',
    'get_all_agents_query',
]
