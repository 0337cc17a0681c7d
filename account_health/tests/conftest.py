"""
Pytest Configuration and Shared Fixtures for Account Health Backend Tests.

This module provides fixtures and helpers for all backend tests:
- make_agent(): Agent factory with valid defaults and keyword overrides
- agent_to_record(): Agent -> snake_case row, as asyncpg would return it
- sample_agents: Four-agent population with hand-computed aggregates
- memory_repository: InMemoryAgentRepository over sample_agents
- mock_db_pool: Mocked asyncpg pool for PostgresAgentRepository tests

Sample population (sample_agents), used across test modules:

| id      | experience  | business   | spend       | revenue | churn | engagement | atRisk |
|---------|-------------|------------|-------------|---------|-------|------------|--------|
| agent-1 | rookie      | individual | lessThan1k  | 1000    | 60    | -20        | 600    |
| agent-2 | rookie      | team       | lessThan10k | 3000    | 30    | -10        | 900    |
| agent-3 | veteran     | brokerage  | moreThan10k | 9000    | 10    | 6          | 900    |
| agent-4 | established | team       | lessThan10k | 3000    | 20    | 0          | 600    |

Dependencies:
- pytest
- pytest-asyncio
"""

from typing import Any, Dict, List
from unittest.mock import AsyncMock, Mock

import pytest
from pydantic.alias_generators import to_snake

from account_health.models import Agent
from account_health.services.repository import InMemoryAgentRepository


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Register custom markers.

    - parity: tests pinning exact numeric behavior the dashboard relies on
      (rounding, invert-negative engagement, coefficient values)
    - api: tests exercising the HTTP layer through TestClient
    """
    config.addinivalue_line(
        'markers',
        'parity: marks tests pinning exact numeric behavior'
    )
    config.addinivalue_line(
        'markers',
        'api: marks tests exercising the HTTP layer'
    )


# ============================================================
# AGENT FACTORIES
# ============================================================

_DEFAULT_AGENT: Dict[str, Any] = {
    "id": "agent-0",
    "name": "Test Agent",
    "email": "test.agent@example.com",
    "phone": "555-0100",
    "experienceLevel": "established",
    "businessModel": "team",
    "specialization": "residential",
    "platformEngagement": "medium",
    "spendLevel": "lessThan10k",
    "marketTypeLocation": "suburban",
    "marketTypeCondition": "warm",
    "revenue": 5000.0,
    "acquisitionCost": 1200.0,
    "estimatedLifetimeValue": 25000.0,
    "newListingsCount": 5,
    "listingUpdatesCount": 15,
    "averageTimeToSell": 45.0,
    "averageResponseTime": 3.0,
    "leadConversionRate": 15.0,
    "supportTicketsCount": 2,
    "npsScore": 40.0,
    "averageResolutionTime": 12.0,
    "churnRisk": 25.0,
    "engagementTrend": 0.0,
    "satisfactionTrend": 0.0,
    "priceSensitivity": 40.0,
    "retentionProbability": 75.0,
    "revenueAtRisk": 1250.0,
    "growthRate": 5.0,
    "joinDate": "2023-01-15T00:00:00Z",
    "lastActivityDate": "2026-10-01T00:00:00Z",
    "subscriptionTier": "standard",
    "activeFeatures": ["listings", "analytics", "crm", "leads"],
}


def make_agent(**overrides: Any) -> Agent:
    """
    Build a valid Agent, overriding any camelCase field.

    Example:
        make_agent(id="a1", experienceLevel="rookie", revenue=1000)
    """
    return Agent(**{**_DEFAULT_AGENT, **overrides})


def agent_to_record(agent: Agent) -> Dict[str, Any]:
    """Convert an Agent to the snake_case row shape returned by asyncpg."""
    return {to_snake(key): value for key, value in agent.model_dump().items()}


# ============================================================
# SAMPLE POPULATION
# ============================================================

@pytest.fixture
def sample_agents() -> List[Agent]:
    """
    Four agents spanning every segment axis, with round-number attributes.

    Aggregates over the full population:
    - revenue mean 4000, acquisitionCost mean 1150, LTV mean 22000
    - newListings 26, listingUpdates 90, timeToSell 45
    - responseTime 2.75, conversionRate 17.5
    - supportTickets 10, NPS 45, resolution 13
    - churn 30, engagement mean -6 (reported 6), satisfaction 1, price 40
    - retention 70, revenueAtRisk 3000, growth 5
    """
    return [
        make_agent(
            id="agent-1",
            experienceLevel="rookie",
            businessModel="individual",
            specialization="residential",
            platformEngagement="low",
            spendLevel="lessThan1k",
            marketTypeLocation="suburban",
            marketTypeCondition="warm",
            subscriptionTier="basic",
            revenue=1000, acquisitionCost=800, estimatedLifetimeValue=4000,
            newListingsCount=2, listingUpdatesCount=6, averageTimeToSell=40,
            averageResponseTime=5, leadConversionRate=10,
            supportTicketsCount=4, npsScore=20, averageResolutionTime=24,
            churnRisk=60, engagementTrend=-20, satisfactionTrend=-4, priceSensitivity=70,
            retentionProbability=40, revenueAtRisk=600, growthRate=-5,
        ),
        make_agent(
            id="agent-2",
            experienceLevel="rookie",
            businessModel="team",
            specialization="luxury",
            platformEngagement="medium",
            spendLevel="lessThan10k",
            marketTypeLocation="urban",
            marketTypeCondition="hot",
            revenue=3000, acquisitionCost=1000, estimatedLifetimeValue=12000,
            newListingsCount=5, listingUpdatesCount=15, averageTimeToSell=30,
            averageResponseTime=3, leadConversionRate=15,
            supportTicketsCount=2, npsScore=40, averageResolutionTime=12,
            churnRisk=30, engagementTrend=-10, satisfactionTrend=2, priceSensitivity=40,
            retentionProbability=70, revenueAtRisk=900, growthRate=5,
        ),
        make_agent(
            id="agent-3",
            experienceLevel="veteran",
            businessModel="brokerage",
            specialization="commercial",
            platformEngagement="high",
            spendLevel="moreThan10k",
            marketTypeLocation="urban",
            marketTypeCondition="hot",
            subscriptionTier="premium",
            revenue=9000, acquisitionCost=1600, estimatedLifetimeValue=54000,
            newListingsCount=12, listingUpdatesCount=48, averageTimeToSell=60,
            averageResponseTime=1, leadConversionRate=25,
            supportTicketsCount=1, npsScore=70, averageResolutionTime=6,
            churnRisk=10, engagementTrend=6, satisfactionTrend=4, priceSensitivity=20,
            retentionProbability=90, revenueAtRisk=900, growthRate=12,
        ),
        make_agent(
            id="agent-4",
            experienceLevel="established",
            businessModel="team",
            specialization="residentialInvestor",
            platformEngagement="medium",
            spendLevel="lessThan10k",
            marketTypeLocation="rural",
            marketTypeCondition="cooling",
            revenue=3000, acquisitionCost=1200, estimatedLifetimeValue=18000,
            newListingsCount=7, listingUpdatesCount=21, averageTimeToSell=50,
            averageResponseTime=2, leadConversionRate=20,
            supportTicketsCount=3, npsScore=50, averageResolutionTime=10,
            churnRisk=20, engagementTrend=0, satisfactionTrend=2, priceSensitivity=30,
            retentionProbability=80, revenueAtRisk=600, growthRate=8,
        ),
    ]


@pytest.fixture
def memory_repository(sample_agents: List[Agent]) -> InMemoryAgentRepository:
    return InMemoryAgentRepository(sample_agents)


# ============================================================
# DATABASE MOCK FIXTURES
# ============================================================

@pytest.fixture
def mock_db_pool() -> AsyncMock:
    """
    Create a mock asyncpg connection pool.

    pool.acquire() returns an async context manager yielding a mock
    connection whose fetch() returns [] by default. Configure rows with:

        conn = mock_db_pool.acquire.return_value.__aenter__.return_value
        conn.fetch.return_value = [agent_to_record(agent)]
    """
    pool = AsyncMock()

    conn = AsyncMock()
    conn.fetch = AsyncMock(return_value=[])

    acquire_context = AsyncMock()
    acquire_context.__aenter__ = AsyncMock(return_value=conn)
    acquire_context.__aexit__ = AsyncMock(return_value=None)
    pool.acquire = Mock(return_value=acquire_context)

    pool.close = AsyncMock(return_value=None)

    return pool


@pytest.fixture
def mock_connection(mock_db_pool: AsyncMock) -> AsyncMock:
    """The connection yielded by mock_db_pool.acquire()."""
    return mock_db_pool.acquire.return_value.__aenter__.return_value
