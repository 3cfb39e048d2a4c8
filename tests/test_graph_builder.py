"""
Graph Builder Tests

Tests for routing graph construction from road segments: node merging within
the tolerance, node id format, and one/two edges per segment.

Author: EvacRoute Project
License: AGPL-3.0
"""

import pytest

from evacroute.models.geo import Coordinate
from evacroute.models.road_network import RoadSegment
from evacroute.services.graph_builder import (
    COORDINATE_TOLERANCE_METERS,
    GraphBuilder,
    generate_node_id,
)

# ~0.5 m and ~2 m of latitude
HALF_METER_DEG = 0.0000045
TWO_METERS_DEG = 0.000018


class TestGraphBuilder:
    """Test GraphBuilder.build."""

    def test_empty_input_gives_empty_frozen_graph(self):
        graph = GraphBuilder().build([])
        assert graph.node_count == 0
        assert graph.edge_count == 0
        assert graph.is_frozen

    def test_two_way_segment_emits_both_directions(self):
        segment = RoadSegment.from_lat_lon("r1", [(52.0, 21.0), (52.01, 21.0)])
        graph = GraphBuilder().build([segment])

        start_id = generate_node_id(segment.start)
        end_id = generate_node_id(segment.end)
        assert graph.node_count == 2
        assert graph.edge_count == 2
        forward = graph.edges_between(start_id, end_id)
        backward = graph.edges_between(end_id, start_id)
        assert [e.segment_id for e in forward] == ["r1"]
        assert [e.segment_id for e in backward] == ["r1"]
        assert forward[0].weight == pytest.approx(segment.length_meters)

    def test_oneway_segment_emits_forward_only(self):
        segment = RoadSegment.from_lat_lon("r1", [(52.0, 21.0), (52.01, 21.0)], oneway=True)
        graph = GraphBuilder().build([segment])

        assert graph.edge_count == 1
        assert graph.edges_between(generate_node_id(segment.end), generate_node_id(segment.start)) == []

    def test_hazard_flag_is_snapshotted(self):
        segment = RoadSegment.from_lat_lon("r1", [(52.0, 21.0), (52.01, 21.0)], hazardous=True)
        graph = GraphBuilder().build([segment])
        assert all(e.hazardous for e in graph.edges_from(generate_node_id(segment.start)))

    def test_shared_endpoints_merge(self, straight_segments):
        graph = GraphBuilder().build(straight_segments)
        assert graph.node_count == 3
        assert graph.edge_count == 4

    def test_interior_points_are_not_nodes(self):
        segment = RoadSegment.from_lat_lon("r1", [(52.0, 21.0), (52.005, 21.002), (52.01, 21.0)])
        graph = GraphBuilder().build([segment])
        assert graph.node_count == 2

    def test_endpoints_within_tolerance_merge(self):
        segments = [
            RoadSegment.from_lat_lon("r1", [(52.0, 21.0), (52.01, 21.0)]),
            RoadSegment.from_lat_lon("r2", [(52.0 + HALF_METER_DEG, 21.0), (51.99, 21.0)]),
        ]
        graph = GraphBuilder().build(segments)

        assert graph.node_count == 3
        # the merged node keeps the id of the coordinate that created it
        merged_id = generate_node_id(Coordinate(52.0, 21.0))
        assert {e.segment_id for e in graph.edges_from(merged_id)} == {"r1", "r2"}

    def test_endpoints_beyond_tolerance_stay_apart(self):
        segments = [
            RoadSegment.from_lat_lon("r1", [(52.0, 21.0), (52.01, 21.0)]),
            RoadSegment.from_lat_lon("r2", [(52.0 + TWO_METERS_DEG, 21.0), (51.99, 21.0)]),
        ]
        assert GraphBuilder().build(segments).node_count == 4

    def test_distance_equal_to_tolerance_does_not_merge(self):
        a = Coordinate(52.0, 21.0)
        b = Coordinate(52.0 + HALF_METER_DEG, 21.0)
        gap = a.distance_to(b)
        segments = [
            RoadSegment("r1", (a, Coordinate(52.01, 21.0))),
            RoadSegment("r2", (b, Coordinate(51.99, 21.0))),
        ]

        assert GraphBuilder(tolerance_meters=gap).build(segments).node_count == 4
        assert GraphBuilder(tolerance_meters=gap * 1.01).build(segments).node_count == 3

    def test_first_created_node_wins(self):
        # r3 starts within tolerance of both earlier nodes
        segments = [
            RoadSegment.from_lat_lon("r1", [(52.0, 21.0), (52.01, 21.0)]),
            RoadSegment.from_lat_lon("r2", [(52.0 + 1.5 * HALF_METER_DEG, 21.0), (51.99, 21.0)]),
            RoadSegment.from_lat_lon("r3", [(52.0 + 0.75 * HALF_METER_DEG, 21.0), (52.0, 21.01)]),
        ]
        graph = GraphBuilder(tolerance_meters=0.5).build(segments)

        first_id = generate_node_id(Coordinate(52.0, 21.0))
        assert "r3" in {e.segment_id for e in graph.edges_from(first_id)}

    def test_default_tolerance(self):
        assert COORDINATE_TOLERANCE_METERS == 1.0
        assert GraphBuilder().tolerance_meters == 1.0


class TestNodeIds:
    """Test deterministic node id generation."""

    def test_six_decimal_format(self):
        assert generate_node_id(Coordinate(52.0, 21.0)) == "node_52.000000_21.000000"

    def test_rounding(self):
        assert generate_node_id(Coordinate(-33.8688197, 151.2092957)) == "node_-33.868820_151.209296"
