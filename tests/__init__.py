"""
Test Suite for EvacRoute

Unit tests for the routing core (geometry, graph building, hazard detection,
route calculation), the GeoJSON loaders, and API tests for the FastAPI layer.

Test Categories:
- test_models: Coordinate, FloodZone, RoadSegment, Graph, Route values
- test_graph_builder: node merging and edge emission
- test_hazard_detection: STRtree classification of segments
- test_road_network: snapping and copy-on-write flood zone application
- test_route_calculation: hazard-penalized shortest path search
- test_geojson_loader / test_evacuation: data loading and the use case
- test_api / test_resilience / test_cache: HTTP layer and infrastructure
- conftest.py: Shared fixtures and test configuration

Running Tests:
    pytest              # Run all tests
    pytest -v           # Verbose output
    pytest -m api       # Only API tests
    python scripts/run_tests.py  # With coverage report

Author: EvacRoute Project
License: AGPL-3.0
"""
