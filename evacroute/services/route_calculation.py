"""
@file route_calculation.py
@brief Hazard-penalized shortest path search over a RoadNetwork

@details
Computes the safest route between two coordinates:
1. Snap start and end to their nearest graph nodes (exhaustive scan)
2. Return an empty route when both snap to the same node
3. Run Dijkstra from the start node; hazardous edges cost their length
   multiplied by HAZARD_PENALTY_FACTOR, so any safe detour shorter than that
   multiple is preferred and hazardous roads are used only as a last resort
4. Map consecutive path nodes back to the cheapest connecting edge and
   resolve the originating road segments
5. Compute route metadata from the network's current segment flags

**Algorithm: Dijkstra (networkx.single_source_dijkstra)**
- Time Complexity: O(E log V)
- Stops as soon as the destination is popped from the queue
- Parallel edges relax with the cheapest penalized weight

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0

@see models.road_network for snapping and segment lookup
@see services.graph_builder for the graph this search runs on
"""

import logging
import time
from datetime import datetime, timezone
from typing import List, Sequence

import networkx as nx

from evacroute.models.exceptions import NetworkInconsistencyError, RouteNotFoundError
from evacroute.models.geo import Coordinate
from evacroute.models.graph import Edge, Graph
from evacroute.models.road_network import RoadNetwork, RoadSegment
from evacroute.models.route import Route, RouteMetadata

logger = logging.getLogger(__name__)

## @brief Weight multiplier applied to hazardous edges
## A 10,000x penalty prefers a 10 km detour over 1 m of flooded road.
HAZARD_PENALTY_FACTOR = 10_000.0

## @brief Safety score reported for an empty route (start == end)
EMPTY_ROUTE_SAFETY_SCORE = 1.0


def edge_cost(weight: float, hazardous: bool) -> float:
    """Relaxation cost of a single edge."""
    return weight * HAZARD_PENALTY_FACTOR if hazardous else weight


def _penalized_weight(u, v, parallel_edges: dict) -> float:
    """
    NetworkX weight callable for MultiDiGraph.

    parallel_edges maps edge key -> attribute dict for every u -> v edge.
    """
    return min(
        edge_cost(data["weight"], data["hazardous"])
        for data in parallel_edges.values()
    )


class RouteCalculationService:
    """
    @brief Stateless route calculator

    @details
    Holds no per-request state; one instance may serve concurrent callers as
    long as each passes a network it does not mutate.
    """

    def calculate_route(
        self, network: RoadNetwork, start: Coordinate, end: Coordinate
    ) -> Route:
        """
        @brief Calculate the safest route between two coordinates

        @param network Road network with hazard flags already applied
        @param start Origin coordinate (snapped to the nearest node)
        @param end Destination coordinate (snapped to the nearest node)

        @return Route with ordered segments and metadata

        @throws RouteNotFoundError if the network has no nodes or the snapped
                endpoints are not connected
        @throws NetworkInconsistencyError if a path edge references a segment
                missing from the network
        """
        started = time.perf_counter()

        start_node = network.find_nearest_node(start)
        if start_node is None:
            raise RouteNotFoundError("No road network near start coordinate")
        end_node = network.find_nearest_node(end)
        if end_node is None:
            raise RouteNotFoundError("No road network near end coordinate")

        if start_node.id == end_node.id:
            logger.debug(f"Start and end snap to the same node {start_node.id}")
            return Route((), self._build_metadata([], started))

        path = self._shortest_path(network.graph, start_node.id, end_node.id)
        segments = self._reconstruct_segments(path, network)
        return Route(tuple(segments), self._build_metadata(segments, started))

    def _shortest_path(self, graph: Graph, source: str, target: str) -> List[str]:
        try:
            cost, path = nx.single_source_dijkstra(
                graph.nx_graph, source, target=target, weight=_penalized_weight
            )
        except nx.NetworkXNoPath:
            raise RouteNotFoundError("No route available between specified points")

        logger.debug(f"Dijkstra found {len(path)}-node path, penalized cost {cost:.1f}")
        return path

    def _reconstruct_segments(
        self, path: Sequence[str], network: RoadNetwork
    ) -> List[RoadSegment]:
        segments = []
        for from_id, to_id in zip(path, path[1:]):
            edge = self._cheapest_edge(network.graph, from_id, to_id)
            segment = network.find_segment(edge.segment_id)
            if segment is None:
                raise NetworkInconsistencyError(
                    f"Edge {from_id} -> {to_id} references unknown segment "
                    f"{edge.segment_id}"
                )
            segments.append(segment)
        return segments

    @staticmethod
    def _cheapest_edge(graph: Graph, from_id: str, to_id: str) -> Edge:
        edges = graph.edges_between(from_id, to_id)
        if not edges:
            raise NetworkInconsistencyError(f"Edge not found in path: {from_id} -> {to_id}")
        return min(edges, key=lambda e: edge_cost(e.weight, e.hazardous))

    @staticmethod
    def _build_metadata(segments: Sequence[RoadSegment], started: float) -> RouteMetadata:
        total_distance = sum(segment.length_meters for segment in segments)
        hazardous_count = sum(1 for segment in segments if segment.hazardous)

        if segments:
            safety_score = 1.0 - hazardous_count / len(segments)
        else:
            safety_score = EMPTY_ROUTE_SAFETY_SCORE

        return RouteMetadata(
            distance_meters=total_distance,
            computation_time_ms=int((time.perf_counter() - started) * 1000),
            hazardous_segment_count=hazardous_count,
            safety_score=safety_score,
            timestamp=datetime.now(timezone.utc),
            all_paths_hazardous=bool(segments) and hazardous_count == len(segments),
        )
