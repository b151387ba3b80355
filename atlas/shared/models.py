"""
atlas/shared/models.py
──────────────────────
The single source of truth for every data structure on the map.

Design philosophy
-----------------
Every model answers one question: "What does the path search *need to
know* about this thing, and what does the renderer need back?"

The engine (aco_core) only reads identifiers and distances. Positions and
display names travel along with the nodes so the renderer can turn a best
path back into lines on the canvas without a second lookup table.

Reading guide
-------------
Read top-to-bottom. Each model builds on the ones above it.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    model_validator,
)


class GraphValidationError(ValueError):
    """
    Raised when a node/edge set cannot form a valid search graph.

    When is this raised?
        • Two nodes share the same identifier.
        • An edge references a node identifier that is not in the node set.
        • An edge has a zero or negative distance (the 1/distance
          visibility term would be undefined or inverted).

    Caller contract:
        This is a caller bug, not a search failure. An unreachable end
        node is NOT an error; the engine returns AntPath.none() for that.
    """


# ─────────────────────────────────────────────────────────────────────────────
# SECTION 1: MAP PRIMITIVES
# ─────────────────────────────────────────────────────────────────────────────

class Position(BaseModel):
    """A point on the canvas. Only the renderer cares about it."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def midpoint(self, other: Position) -> Position:
        return Position(x=(self.x + other.x) / 2, y=(self.y + other.y) / 2)


class Node(BaseModel):
    """
    One named location on the map.

    Fields:
        node_id  → Unique key. Everything in the engine refers to nodes by it.
        name     → Display name drawn above the marker.
        position → Canvas coordinates. Unused by the search itself.
    """
    model_config = ConfigDict(frozen=True)

    node_id: str = Field(..., min_length=1, description="Unique location key, e.g. 'MR1'")
    name: str = Field("", description="Human-readable location name")
    position: Position = Field(default_factory=lambda: Position(x=0.0, y=0.0))


class Edge(BaseModel):
    """
    An undirected, weighted connection between two nodes.

    The field names say source/target only because a pair has to be written
    down in some order: the edge is traversable both ways. Two edges may
    connect the same pair (parallel edges); the engine treats them as
    separate candidates that share one pheromone strength.
    """
    model_config = ConfigDict(frozen=True)

    source: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    distance: float = Field(..., gt=0, description="Strictly positive travel cost")

    def touches(self, node_id: str) -> bool:
        return node_id == self.source or node_id == self.target

    def other_end(self, node_id: str) -> str:
        """
        The far endpoint when standing on node_id.

        Raises:
            ValueError: if node_id is not one of this edge's endpoints.
        """
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        raise ValueError(f"Node {node_id!r} is not an endpoint of {self.source}-{self.target}")


# ─────────────────────────────────────────────────────────────────────────────
# SECTION 2: GRAPH
# ─────────────────────────────────────────────────────────────────────────────

class Graph(BaseModel):
    """
    A validated node set plus edge set. Frozen: nodes and edges are tuples
    and cannot be reassigned, so the adjacency index never goes stale.

    Validation (fail fast, at construction):
        • node ids are unique
        • every edge endpoint names a known node
        • distances are > 0 (enforced on Edge itself)

    Adjacency:
        Built once in model_post_init as node_id → List[Edge]. Each undirected
        edge appears in both endpoints' lists, so incident_edges() is O(1)
        per ant step instead of a scan over all edges.
    """

    model_config = ConfigDict(frozen=True)

    nodes: Tuple[Node, ...] = Field(default_factory=tuple)
    edges: Tuple[Edge, ...] = Field(default_factory=tuple)

    _adjacency: Dict[str, List[Edge]] = PrivateAttr(default_factory=dict)
    _by_id: Dict[str, Node] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_references(self) -> Graph:
        counts = Counter(node.node_id for node in self.nodes)
        duplicates = sorted(node_id for node_id, n in counts.items() if n > 1)
        if duplicates:
            raise ValueError(f"Duplicate node ids: {', '.join(duplicates)}")

        for edge in self.edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in counts:
                    raise ValueError(
                        f"Edge {edge.source}-{edge.target} references unknown node {endpoint!r}"
                    )
        return self

    def model_post_init(self, __context) -> None:
        self._by_id = {node.node_id: node for node in self.nodes}
        self._adjacency = {node.node_id: [] for node in self.nodes}
        for edge in self.edges:
            self._adjacency.setdefault(edge.source, []).append(edge)
            if edge.target != edge.source:
                self._adjacency.setdefault(edge.target, []).append(edge)

    @classmethod
    def from_parts(cls, nodes: Iterable, edges: Iterable) -> Graph:
        """
        Build a Graph from Node/Edge instances or plain dicts.

        Raises:
            GraphValidationError: on any structural problem (see class docstring).
        """
        try:
            return cls(nodes=list(nodes), edges=list(edges))
        except ValidationError as exc:
            raise GraphValidationError(str(exc)) from exc

    # ── Queries ───────────────────────────────────────────────────────────────

    @property
    def node_ids(self) -> List[str]:
        return [node.node_id for node in self.nodes]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._by_id

    def get_node(self, node_id: str) -> Node:
        """Raises KeyError for an unknown id."""
        return self._by_id[node_id]

    def incident_edges(self, node_id: str) -> List[Edge]:
        """Edges touching node_id. Unknown ids have none."""
        return self._adjacency.get(node_id, [])

    def has_edge(self, a: str, b: str) -> bool:
        return any(edge.other_end(a) == b for edge in self.incident_edges(a))


# ─────────────────────────────────────────────────────────────────────────────
# SECTION 3: SEARCH RESULT
# ─────────────────────────────────────────────────────────────────────────────

class AntPath(BaseModel):
    """
    One candidate path, and the engine's final answer.

    Fields:
        path           → Node ids from start to end, in walk order.
        total_distance → Sum of the traversed edges' distances.

    The "no path" sentinel is AntPath.none(): empty path, infinite distance.
    Callers check `found` before drawing anything.
    """
    path: List[str] = Field(default_factory=list)
    total_distance: float = float("inf")

    @classmethod
    def none(cls) -> AntPath:
        return cls(path=[], total_distance=float("inf"))

    @property
    def found(self) -> bool:
        return bool(self.path)

    def hops(self) -> List[Tuple[str, str]]:
        """Consecutive (from, to) pairs along the path."""
        return list(zip(self.path, self.path[1:]))


# ─────────────────────────────────────────────────────────────────────────────
# SECTION 4: RENDERING CONTRACT
# What the route planner hands to whoever draws the map.
# ─────────────────────────────────────────────────────────────────────────────

class RouteSegment(BaseModel):
    """One highlighted line of the best route, ids already resolved to positions."""
    source_id: str
    target_id: str
    start: Position
    end: Position


class EdgeLabel(BaseModel):
    """Distance text drawn at the midpoint of an edge."""
    source_id: str
    target_id: str
    anchor: Position
    text: str


class PlannedRoute(BaseModel):
    """
    The route planner's output.

    Mirrors AntPath plus the drawable segments. `segments` is empty when no
    path was found, and also for the degenerate start == end route.
    """
    start_id: str
    end_id: str
    path: List[str] = Field(default_factory=list)
    total_distance: float = float("inf")
    segments: List[RouteSegment] = Field(default_factory=list)
    search_ms: float = Field(0.0, ge=0.0)

    @property
    def found(self) -> bool:
        return bool(self.path)
