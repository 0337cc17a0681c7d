'''
Account Health Backend Test Suite

Test Modules:
-------------
- test_segments.py: Segment taxonomy listing and identifier validation
- test_metrics.py: Aggregation (sums, means, invert-negative engagement,
  zero-filled breakdown, half-up rounding, empty population)
- test_impact.py: Base-effect table, segment sensitivity, cross-terms
- test_simulation.py: Projection, clamps, end-to-end simulate over a repository
- test_repository.py: In-memory and PostgreSQL agent repositories, error wrapping
- test_interventions.py: Intervention catalog
- test_api.py: HTTP envelopes and status codes via TestClient
- test_dependencies.py: Repository selection from settings

Running Tests:
--------------
    pip install -e ".[test]"
    pytest account_health/tests -v

Configuration:
--------------
See conftest.py for shared fixtures and the sample agent population.
'''

__all__ = []
