"""
@file graph_builder.py
@brief Routing graph construction from road segments

@details
Converts an unordered collection of road segments into a directed routing
graph:
1. The first and last coordinate of each segment are candidate nodes
2. A candidate reuses an existing node closer than the merge tolerance,
   otherwise a new node is created with an id derived from its coordinate
3. A forward edge (start -> end) is emitted for every segment, plus the
   reverse edge unless the segment is one-way

Interior polyline points are geometry carried by the segment, not routing
topology.

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0

@see models.graph for the Graph structure
"""

import logging
from typing import Iterable, List

from evacroute.models.geo import Coordinate
from evacroute.models.graph import Edge, Graph, Node
from evacroute.models.road_network import RoadSegment

logger = logging.getLogger(__name__)

## @brief Coordinates strictly closer than this share one node (meters)
COORDINATE_TOLERANCE_METERS = 1.0


class GraphBuilder:
    """
    @brief Builds frozen routing graphs from road segments

    @details
    Nearby-node lookup is a linear scan over the nodes created so far, which
    is adequate for city-scale networks.
    """

    def __init__(self, tolerance_meters: float = COORDINATE_TOLERANCE_METERS):
        self.tolerance_meters = tolerance_meters

    def build(self, segments: Iterable[RoadSegment]) -> Graph:
        """
        @brief Build a routing graph

        @param segments Road segments in any order
        @return Frozen Graph; empty when no segments are given

        @complexity O(s * n) for s segments and n created nodes
        """
        graph = Graph()
        created: List[Node] = []
        segment_count = 0

        for segment in segments:
            segment_count += 1
            start_node = self._get_or_create_node(segment.start, created, graph)
            end_node = self._get_or_create_node(segment.end, created, graph)

            graph.add_edge(Edge(
                from_node_id=start_node.id,
                to_node_id=end_node.id,
                weight=segment.length_meters,
                hazardous=segment.hazardous,
                segment_id=segment.id,
            ))
            if not segment.oneway:
                graph.add_edge(Edge(
                    from_node_id=end_node.id,
                    to_node_id=start_node.id,
                    weight=segment.length_meters,
                    hazardous=segment.hazardous,
                    segment_id=segment.id,
                ))

        logger.debug(
            f"Built graph from {segment_count} segments: "
            f"{graph.node_count} nodes, {graph.edge_count} edges"
        )
        return graph.freeze()

    def _get_or_create_node(
        self, coordinate: Coordinate, created: List[Node], graph: Graph
    ) -> Node:
        for node in created:
            if node.coordinate.distance_to(coordinate) < self.tolerance_meters:
                return node

        node = Node(generate_node_id(coordinate), coordinate)
        graph.add_node(node)
        created.append(node)
        return node


def generate_node_id(coordinate: Coordinate) -> str:
    """Deterministic node id from the coordinate rounded to 6 decimals."""
    return f"node_{coordinate.latitude:.6f}_{coordinate.longitude:.6f}"
