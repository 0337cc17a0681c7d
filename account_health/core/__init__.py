"""
Core infrastructure package for the Account Health backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL connectivity via asyncpg
- FastAPI dependency injection utilities
- The error hierarchy shared by services and the API layer

Re-exports key components so other modules can write:

    from account_health.core import get_settings, AgentRepositoryDep

Instead of:

    from account_health.core.config import get_settings
    from account_health.core.dependencies import AgentRepositoryDep
"""

# =============================================================================
# Re-exports from account_health.core.config
# =============================================================================
from account_health.core.config import Settings, get_settings

# =============================================================================
# Re-exports from account_health.core.database
# =============================================================================
from account_health.core.database import init_db, close_db, get_db_pool

# =============================================================================
# Re-exports from account_health.core.exceptions
# =============================================================================
from account_health.core.exceptions import (
    AccountHealthError,
    RepositoryUnavailableError,
    InvalidIdentifierError,
    UnknownInterventionError,
    UnknownSegmentTypeError,
    UnknownSegmentValueError,
)

# =============================================================================
# Re-exports from account_health.core.dependencies
# =============================================================================
from account_health.core.dependencies import (
    get_settings_dependency,
    get_agent_repository,
    SettingsDep,
    AgentRepositoryDep,
)

__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Database pool lifecycle (from database.py)
    'init_db',
    'close_db',
    'get_db_pool',
    # Errors (from exceptions.py)
    'AccountHealthError',
    'RepositoryUnavailableError',
    'InvalidIdentifierError',
    'UnknownInterventionError',
    'UnknownSegmentTypeError',
    'UnknownSegmentValueError',
    # FastAPI dependency injection (from dependencies.py)
    'get_settings_dependency',
    'get_agent_repository',
    'SettingsDep',
    'AgentRepositoryDep',
]
