"""
Request Parsing and GeoJSON Mapping Tests

Author: EvacRoute Project
License: AGPL-3.0
"""

import re
from datetime import datetime, timezone

import pytest

from evacroute.api.mapping import (
    COORDINATE_PATTERN,
    flood_zones_to_feature_collection,
    parse_coordinate,
    route_to_feature,
    segments_to_feature_collection,
)
from evacroute.models.exceptions import InvalidCoordinateError
from evacroute.models.geo import Coordinate, FloodZone
from evacroute.models.route import Route, RouteMetadata


class TestParseCoordinate:
    """Test "lat,lon" parsing."""

    def test_parses_and_rounds(self):
        assert parse_coordinate("52.22970049, 21.01220051") == Coordinate(52.2297, 21.012201)

    def test_negative_values(self):
        assert parse_coordinate("-33.8688,151.2093") == Coordinate(-33.8688, 151.2093)

    @pytest.mark.parametrize("value", ["", "   ", "52.0", "52.0,21.0,3.0", "north,east"])
    def test_rejects_malformed(self, value):
        with pytest.raises(InvalidCoordinateError):
            parse_coordinate(value)

    def test_rejects_out_of_range(self):
        with pytest.raises(InvalidCoordinateError, match="Longitude"):
            parse_coordinate("52.0,181.0")

    @pytest.mark.parametrize("value, matches", [
        ("52.2297,21.0122", True),
        (" 52 , 21 ", True),
        ("-1.5,-2", True),
        ("52.2297;21.0122", False),
        ("52.,21", False),
        ("abc", False),
    ])
    def test_query_pattern(self, value, matches):
        assert bool(re.match(COORDINATE_PATTERN, value)) is matches


class TestGeoJsonMapping:
    """Test GeoJSON serialization of routes, segments and zones."""

    def test_route_feature(self, straight_segments):
        metadata = RouteMetadata(
            distance_meters=26_000.0,
            computation_time_ms=4,
            hazardous_segment_count=1,
            safety_score=0.5,
            timestamp=datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc),
            all_paths_hazardous=False,
        )
        feature = route_to_feature(Route(straight_segments, metadata))

        assert feature["geometry"]["coordinates"] == [
            [21.0, 52.0], [21.1, 52.1], [21.1, 52.1], [21.2, 52.2],
        ]
        assert feature["properties"] == {
            "distanceMeters": 26_000.0,
            "computationTimeMs": 4,
            "hazardousSegmentsAvoided": 1,
            "safetyScore": 0.5,
            "timestamp": "2026-10-18T12:00:00+00:00",
            "allPathsHazardous": False,
            "segmentCount": 2,
        }

    def test_segments_collection(self, straight_segments):
        collection = segments_to_feature_collection(straight_segments)

        assert collection["count"] == 2
        properties = collection["features"][0]["properties"]
        assert properties["id"] == "s1"
        assert properties["oneway"] is False
        assert properties["lengthMeters"] == round(straight_segments[0].length_meters, 2)

    def test_flood_zone_collection(self):
        zone = FloodZone.from_rings(
            "z1",
            [[(52.0, 21.0), (52.0, 21.1), (52.1, 21.1)]],
            valid_until=datetime(2026, 10, 19, tzinfo=timezone.utc),
        )
        feature = flood_zones_to_feature_collection([zone])["features"][0]

        assert feature["geometry"]["coordinates"] == [[[21.0, 52.0], [21.1, 52.0], [21.1, 52.1]]]
        assert feature["properties"] == {
            "id": "z1",
            "validFrom": None,
            "validUntil": "2026-10-19T00:00:00+00:00",
        }
