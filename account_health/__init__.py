"""
Account Health Backend Package.

FastAPI service layer for the real-estate account health dashboard.
Aggregates agent records into segment-level KPIs and projects the effect of
business interventions on those KPIs.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, dependencies, and error types
    - models: Pydantic schemas and enums
    - services: Aggregation, impact model, simulator, and agent repositories
    - sql: Parameterized SQL queries for the agents table
"""

__version__ = "1.0.0"
