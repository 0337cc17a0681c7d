"""
Account Health API package initialization.

This package contains FastAPI router modules for the dashboard:
- metrics: Aggregated KPIs for the population or a segment
- simulation: What-if intervention simulator
- catalog: Static segment and intervention listings
"""

from fastapi import APIRouter

from account_health.api.metrics import router as metrics_router
from account_health.api.simulation import router as simulation_router
from account_health.api.catalog import router as catalog_router

# Create main API router
api_router = APIRouter()

# Each sub-router carries its own prefix
api_router.include_router(metrics_router)
api_router.include_router(simulation_router)
api_router.include_router(catalog_router)

__all__ = [
    "api_router",
    "metrics_router",
    "simulation_router",
    "catalog_router",
]
