"""
@file graph.py
@brief Directed weighted multigraph used for route search

@details
Wraps a NetworkX MultiDiGraph with typed Node and Edge values:
- Nodes are merged road endpoints keyed by a deterministic id
- Edges are directed, weighted by segment length in meters, and carry the
  originating segment id and a hazardous flag
- Parallel edges between the same node pair are permitted

The graph is append-only while GraphBuilder populates it and is frozen
(networkx.freeze) before it is handed to a RoadNetwork. Hazard updates never
mutate a frozen graph; with_hazardous_segments() returns a frozen copy.

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0

@see services.graph_builder for construction
@see services.route_calculation for the search over this structure
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import networkx as nx

from evacroute.models.exceptions import InvalidGeometryError
from evacroute.models.geo import Coordinate

## @brief Node attribute holding the Node value
NODE_ATTR = "node"


@dataclass(frozen=True)
class Node:
    """
    @brief Routing vertex representing one or more merged road endpoints
    """

    id: str
    coordinate: Coordinate

    def __post_init__(self):
        if not self.id or not self.id.strip():
            raise InvalidGeometryError("Node ID cannot be null or blank")
        if self.coordinate is None:
            raise InvalidGeometryError("Coordinate cannot be null")


@dataclass(frozen=True)
class Edge:
    """
    @brief Directed connection between two nodes

    @details
    weight is the segment length in meters at creation time and hazardous is
    a snapshot of the segment flag at creation time.
    """

    from_node_id: str
    to_node_id: str
    weight: float
    hazardous: bool
    segment_id: str

    def __post_init__(self):
        if not self.from_node_id or not self.from_node_id.strip():
            raise InvalidGeometryError("From node ID cannot be null or blank")
        if not self.to_node_id or not self.to_node_id.strip():
            raise InvalidGeometryError("To node ID cannot be null or blank")
        if self.weight < 0:
            raise InvalidGeometryError("Edge weight cannot be negative")


class Graph:
    """
    @brief Node/edge container backed by networkx.MultiDiGraph

    @details
    Node ids are the NetworkX node keys; each node stores its Node value under
    the "node" attribute. Each edge stores weight, hazardous and segment_id
    attributes. Outgoing edges keep insertion order.
    """

    def __init__(self, nx_graph: Optional[nx.MultiDiGraph] = None):
        self._graph = nx_graph if nx_graph is not None else nx.MultiDiGraph()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_node(self, node: Node) -> None:
        self._graph.add_node(node.id, **{NODE_ATTR: node})

    def add_edge(self, edge: Edge) -> None:
        """
        @brief Append a directed edge

        @throws InvalidGeometryError if either endpoint is not a known node
        @throws networkx.NetworkXError if the graph is frozen
        """
        for node_id in (edge.from_node_id, edge.to_node_id):
            if node_id not in self._graph:
                raise InvalidGeometryError(f"Unknown node in edge: {node_id}")
        self._graph.add_edge(
            edge.from_node_id,
            edge.to_node_id,
            weight=edge.weight,
            hazardous=edge.hazardous,
            segment_id=edge.segment_id,
        )

    def freeze(self) -> "Graph":
        """Make the graph read-only; returns self for chaining."""
        nx.freeze(self._graph)
        return self

    @property
    def is_frozen(self) -> bool:
        return nx.is_frozen(self._graph)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_node(self, node_id: str) -> Optional[Node]:
        if node_id not in self._graph:
            return None
        return self._graph.nodes[node_id][NODE_ATTR]

    @property
    def nodes(self) -> List[Node]:
        """All nodes in insertion order."""
        return [data for _, data in self._graph.nodes(data=NODE_ATTR)]

    def node_map(self) -> Dict[str, Node]:
        return {node.id: node for node in self.nodes}

    def edges_from(self, node_id: str) -> List[Edge]:
        """Outgoing edges of a node, grouped by target in insertion order."""
        if node_id not in self._graph:
            return []
        return [
            self._to_edge(node_id, target, data)
            for _, target, data in self._graph.out_edges(node_id, data=True)
        ]

    def edges_between(self, from_node_id: str, to_node_id: str) -> List[Edge]:
        """Parallel edges from one node to another in insertion order."""
        if not self._graph.has_edge(from_node_id, to_node_id):
            return []
        return [
            self._to_edge(from_node_id, to_node_id, data)
            for data in self._graph[from_node_id][to_node_id].values()
        ]

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    @property
    def nx_graph(self) -> nx.MultiDiGraph:
        """Underlying NetworkX graph, for read-only algorithm use."""
        return self._graph

    # ------------------------------------------------------------------
    # Copy-on-write hazard update
    # ------------------------------------------------------------------

    def with_hazardous_segments(self, segment_ids: Iterable[str]) -> "Graph":
        """
        @brief Return a frozen copy with edges of the given segments flagged

        @details
        Edges already flagged stay flagged. The receiving graph is not
        modified, so a frozen graph shared between requests stays valid.
        """
        flagged = set(segment_ids)
        copy = self._graph.copy()
        for _, _, data in copy.edges(data=True):
            if data["segment_id"] in flagged:
                data["hazardous"] = True
        return Graph(copy).freeze()

    @staticmethod
    def _to_edge(from_node_id: str, to_node_id: str, data: dict) -> Edge:
        return Edge(
            from_node_id=from_node_id,
            to_node_id=to_node_id,
            weight=data["weight"],
            hazardous=data["hazardous"],
            segment_id=data["segment_id"],
        )
