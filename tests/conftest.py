"""
Test Configuration and Shared Fixtures

This module provides shared pytest fixtures and configuration for the test suite.

Fixtures:
- make_network: Build a RoadNetwork (with frozen graph) from segments
- make_box_zone: Rectangular FloodZone from lat/lon bounds
- straight_segments: Two chained segments 52.0,21.0 -> 52.1,21.1 -> 52.2,21.2
- detour_segments: Short direct road plus a longer two-segment detour
- direct_flood_zone: Zone covering the middle of the direct road only
- write_geojson: Write a FeatureCollection to a temporary file
- road_geojson_path / flood_zones_geojson_path: GeoJSON files for the
  detour network and its flood zone

Author: EvacRoute Project
License: AGPL-3.0
"""

import json
import logging
import os

import pytest

# Keep test runs from writing logs/app.log
os.environ.setdefault("LOG_OUTPUT", "stdout")

from evacroute.models.geo import FloodZone  # noqa: E402
from evacroute.models.road_network import RoadNetwork, RoadSegment  # noqa: E402
from evacroute.services.graph_builder import GraphBuilder  # noqa: E402

# Configure logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


# Mark test categories for selective running
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Tests touching files or the HTTP stack")
    config.addinivalue_line("markers", "slow: Slow-running tests")
    config.addinivalue_line("markers", "api: API endpoint tests")
    config.addinivalue_line("markers", "etl: GeoJSON loading tests")
    config.addinivalue_line("markers", "models: Domain model tests")
    config.addinivalue_line("markers", "routing: Graph building and route search tests")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        path = str(item.fspath)
        if "test_api" in path or "test_resilience" in path:
            item.add_marker(pytest.mark.api)
            item.add_marker(pytest.mark.integration)
        elif "test_geojson_loader" in path or "test_evacuation" in path:
            item.add_marker(pytest.mark.etl)
            item.add_marker(pytest.mark.integration)
        elif "test_models" in path:
            item.add_marker(pytest.mark.models)
        elif any(name in path for name in ("test_graph_builder", "test_route_calculation",
                                             "test_hazard_detection", "test_road_network")):
            item.add_marker(pytest.mark.routing)

        if "integration" not in item.keywords:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def make_network():
    """
    Build a RoadNetwork whose graph comes from the same segments.

    Returns:
        callable: segments -> RoadNetwork
    """
    def _make(segments):
        segments = list(segments)
        return RoadNetwork(segments, GraphBuilder().build(segments))
    return _make


@pytest.fixture
def make_box_zone():
    """
    Rectangular flood zone factory.

    Returns:
        callable: (zone_id, min_lat, min_lon, max_lat, max_lon, **validity) -> FloodZone
    """
    def _make(zone_id, min_lat, min_lon, max_lat, max_lon, valid_from=None, valid_until=None):
        return FloodZone.from_rings(
            zone_id,
            [[(min_lat, min_lon), (min_lat, max_lon), (max_lat, max_lon), (max_lat, min_lon)]],
            valid_from=valid_from,
            valid_until=valid_until,
        )
    return _make


@pytest.fixture
def straight_segments():
    """Two chained segments sharing the 52.1,21.1 endpoint."""
    return [
        RoadSegment.from_lat_lon("s1", [(52.0, 21.0), (52.1, 21.1)]),
        RoadSegment.from_lat_lon("s2", [(52.1, 21.1), (52.2, 21.2)]),
    ]


@pytest.fixture
def detour_segments():
    """
    Direct road A -> B (~685 m) and a detour A -> C -> B (~1.3 km).

    A = 52.0,21.0   B = 52.0,21.01   C = 52.005,21.005
    """
    return [
        RoadSegment.from_lat_lon("direct", [(52.0, 21.0), (52.0, 21.01)]),
        RoadSegment.from_lat_lon("detour_1", [(52.0, 21.0), (52.005, 21.005)]),
        RoadSegment.from_lat_lon("detour_2", [(52.005, 21.005), (52.0, 21.01)]),
    ]


@pytest.fixture
def direct_flood_zone(make_box_zone):
    """Zone straddling the middle of the direct road, clear of the detour."""
    return make_box_zone("flood-direct", 51.999, 21.004, 52.001, 21.006)


@pytest.fixture
def write_geojson(tmp_path):
    """
    Write GeoJSON features to a temporary file.

    Returns:
        callable: (name, features) -> str path
    """
    def _write(name, features):
        path = tmp_path / name
        path.write_text(json.dumps({"type": "FeatureCollection", "features": features}))
        return str(path)
    return _write


@pytest.fixture
def road_geojson_path(write_geojson):
    """The detour network as a GeoJSON file ([lon, lat] positions)."""
    return write_geojson("roads.geojson", [
        {
            "type": "Feature",
            "properties": {"id": "direct", "oneway": "no"},
            "geometry": {"type": "LineString", "coordinates": [[21.0, 52.0], [21.01, 52.0]]},
        },
        {
            "type": "Feature",
            "properties": {"id": "detour_1", "oneway": "no"},
            "geometry": {"type": "LineString", "coordinates": [[21.0, 52.0], [21.005, 52.005]]},
        },
        {
            "type": "Feature",
            "properties": {"id": "detour_2", "oneway": "no"},
            "geometry": {"type": "LineString", "coordinates": [[21.005, 52.005], [21.01, 52.0]]},
        },
    ])


@pytest.fixture
def flood_zones_geojson_path(write_geojson):
    """One unbounded flood zone over the direct road."""
    return write_geojson("flood_zones.geojson", [
        {
            "type": "Feature",
            "properties": {"id": "flood-direct"},
            "geometry": {
                "type": "Polygon",
                "coordinates": [[
                    [21.004, 51.999], [21.006, 51.999], [21.006, 52.001],
                    [21.004, 52.001], [21.004, 51.999],
                ]],
            },
        },
    ])
