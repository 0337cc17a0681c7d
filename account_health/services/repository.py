"""
Agent repository service: the boundary between the core and agent storage.

The aggregation and simulation services only depend on the AgentRepository
interface, which exposes two asynchronous, total operations:

- fetch_all(): every agent in the snapshot
- fetch_by_segment(segment_type, segment_value): agents whose value on the
  axis equals segment_value exactly (case-sensitive string equality)

Both return a possibly-empty list. Any storage failure surfaces as
RepositoryUnavailableError with the driver exception chained as __cause__.
Retries, timeouts, and pooling belong here, never in the services above.

Implementations:
- PostgresAgentRepository: asyncpg pool + parameterized queries from
  account_health.sql.agent_queries
- InMemoryAgentRepository: linear scan over a materialized list; used by the
  test suite and by REPOSITORY_BACKEND=memory for local demos
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Awaitable, Callable, Iterable, List, Optional, Union

import asyncpg
from asyncpg import Pool
from pydantic import ValidationError

from account_health.core.database import get_db_pool
from account_health.core.exceptions import RepositoryUnavailableError
from account_health.models.enums import SegmentType
from account_health.models.schemas import Agent
from account_health.sql.agent_queries import get_agents_by_segment_query, get_all_agents_query

logger = logging.getLogger(__name__)


# Driver-level failures that mean "the store could not be read"
_BACKEND_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
    RuntimeError,
)


class AgentRepository(ABC):
    """Read-only access to the current agent snapshot."""

    @abstractmethod
    async def fetch_all(self) -> List[Agent]:
        """Return every agent in the snapshot."""

    @abstractmethod
    async def fetch_by_segment(
        self,
        segment_type: Union[str, SegmentType],
        segment_value: str
    ) -> List[Agent]:
        """Return agents whose value on segment_type equals segment_value."""


# =============================================================================
# PostgreSQL Implementation
# =============================================================================


class PostgresAgentRepository(AgentRepository):
    """
    Agent repository backed by the asyncpg connection pool.

    Each call acquires one connection, runs one SELECT, and converts rows
    with Agent.from_record(). There is no caching; every request reads the
    current snapshot.

    Driver failures become RepositoryUnavailableError. A row that fails Agent
    validation is logged with its id and the pydantic ValidationError is
    re-raised unchanged; it is a data defect, not an outage, and the API
    renders it as 500 SERVER_ERROR.

    Args:
        table: Agents table name (validated identifier from Settings).
        pool_provider: Coroutine returning the pool. Defaults to get_db_pool;
            tests pass a mock.
    """

    def __init__(
        self,
        table: str = "agents",
        pool_provider: Optional[Callable[[], Awaitable[Pool]]] = None
    ) -> None:
        self.table = table
        self._pool_provider = pool_provider or get_db_pool

    async def _fetch(self, query: str, *args: object, context: str) -> List[Agent]:
        try:
            pool = await self._pool_provider()
            async with pool.acquire() as conn:
                rows = await conn.fetch(query, *args)
        except _BACKEND_ERRORS as e:
            logger.error(f"Error fetching agents ({context}): {e}", exc_info=True)
            raise RepositoryUnavailableError(
                f"Agent repository unavailable while fetching {context}"
            ) from e

        agents: List[Agent] = []
        for row in rows:
            try:
                agents.append(Agent.from_record(row))
            except ValidationError:
                logger.error(f"Agent row {row.get('id')!r} failed validation ({context})", exc_info=True)
                raise
        return agents

    async def fetch_all(self) -> List[Agent]:
        return await self._fetch(get_all_agents_query(self.table), context="all agents")

    async def fetch_by_segment(
        self,
        segment_type: Union[str, SegmentType],
        segment_value: str
    ) -> List[Agent]:
        segment_type = SegmentType(segment_type)
        return await self._fetch(
            get_agents_by_segment_query(segment_type, self.table),
            segment_value,
            context=f"{segment_type.value}={segment_value}",
        )


# =============================================================================
# In-Memory Implementation
# =============================================================================


class InMemoryAgentRepository(AgentRepository):
    """
    Agent repository over a materialized list.

    Agents are frozen models, so sharing the list between concurrent requests
    is safe; each fetch returns a new list.
    """

    def __init__(self, agents: Iterable[Agent] = ()) -> None:
        self._agents: List[Agent] = list(agents)

    def __len__(self) -> int:
        return len(self._agents)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "InMemoryAgentRepository":
        """
        Load agents from a JSON array of camelCase agent records.

        Raises:
            OSError: If the file cannot be read.
            pydantic.ValidationError: If a record does not validate as an Agent.
        """
        with open(path, encoding="utf-8") as fh:
            records = json.load(fh)
        agents = [Agent.model_validate(record) for record in records]
        logger.info(f"Loaded {len(agents)} agents from {path}")
        return cls(agents)

    async def fetch_all(self) -> List[Agent]:
        return list(self._agents)

    async def fetch_by_segment(
        self,
        segment_type: Union[str, SegmentType],
        segment_value: str
    ) -> List[Agent]:
        attribute = SegmentType(segment_type).value
        return [agent for agent in self._agents if getattr(agent, attribute) == segment_value]
