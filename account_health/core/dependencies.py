"""
FastAPI dependency injection module for the Account Health backend.

This module provides reusable FastAPI dependencies for configuration access
and for the agent repository the services read from. Endpoint handlers never
construct repositories themselves, which lets tests swap in an in-memory
repository through app.dependency_overrides.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- get_agent_repository: Returns the repository selected by REPOSITORY_BACKEND
- SettingsDep: Type alias for injecting Settings into endpoints
- AgentRepositoryDep: Type alias for injecting the AgentRepository

Usage Examples:
    @router.get("/metrics")
    async def read_metrics(repository: AgentRepositoryDep) -> MetricsResponse:
        metrics = await get_metrics(repository)
        return MetricsResponse(data=metrics)

    # In tests
    app.dependency_overrides[get_agent_repository] = lambda: InMemoryAgentRepository(agents)
"""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends

from account_health.core.config import Settings, get_settings
from account_health.services.repository import (
    AgentRepository,
    InMemoryAgentRepository,
    PostgresAgentRepository,
)


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    Thin wrapper around get_settings() so tests can override it:

        app.dependency_overrides[get_settings_dependency] = lambda: mock_settings
    """
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]


# =============================================================================
# Agent Repository Dependency
# =============================================================================

@lru_cache()
def _memory_repository(fixture_path: Optional[str]) -> InMemoryAgentRepository:
    # Loaded once per fixture path; agents are frozen so sharing is safe
    if fixture_path:
        return InMemoryAgentRepository.from_json_file(fixture_path)
    return InMemoryAgentRepository()


def get_agent_repository(settings: SettingsDep) -> AgentRepository:
    """
    Return the agent repository for the configured backend.

    - postgres: PostgresAgentRepository over the shared asyncpg pool. Cheap
      to construct; the pool itself is the singleton.
    - memory: InMemoryAgentRepository loaded from AGENTS_FIXTURE_PATH (or
      empty), cached for the process lifetime.
    """
    if settings.repository_backend == 'memory':
        return _memory_repository(settings.agents_fixture_path)
    return PostgresAgentRepository(table=settings.agents_table)


AgentRepositoryDep = Annotated[AgentRepository, Depends(get_agent_repository)]
