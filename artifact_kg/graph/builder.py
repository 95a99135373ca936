"""
Graph Builder

Mutable scratch state used while one graph is being assembled. A builder
lives for exactly one assemble() call, so nothing accumulates across calls.

Rules enforced here:
    - Entity nodes use the entity id; nodes of other kinds use
      ``{kind}:{record id}`` (see node_id), so ids never collide across tables.
    - A node id is added once; later nodes with the same id are ignored.
    - An edge is added only if both endpoints are existing nodes.
    - An edge id is added once; later edges with the same id are ignored.
    - Entity references resolve by entity id first, then by entity title.
"""

from collections.abc import Iterable
from typing import Any

from artifact_kg.types import EdgeKind, Entity, Graph, GraphEdge, GraphNode, RecordKind


def compact(values: dict[str, Any]) -> dict[str, Any]:
    """Drop None values from a properties dict."""
    return {key: value for key, value in values.items() if value is not None}


def node_id(kind: RecordKind, record_id: str) -> str:
    """Graph node id of a record of ``kind``."""
    if kind == RecordKind.ENTITY:
        return record_id
    return f"{kind.value}:{record_id}"


class GraphBuilder:
    """Accumulates nodes and edges in insertion order."""

    def __init__(self, entities: Iterable[Entity] = ()) -> None:
        self._nodes: dict[str, GraphNode] = {}
        self._edges: dict[str, GraphEdge] = {}
        self._entity_refs: dict[str, str] = {}

        entities = list(entities)
        for entity in entities:
            self._entity_refs.setdefault(entity.id, entity.id)
        for entity in entities:
            self._entity_refs.setdefault(entity.title, entity.id)

    def resolve_entity(self, ref: str | None) -> str | None:
        """Map an entity id or title to the entity's node id."""
        if ref is None:
            return None
        node_id = self._entity_refs.get(ref)
        if node_id is None or node_id not in self._nodes:
            return None
        return node_id

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def add_node(self, node: GraphNode) -> bool:
        """Add a node if its id is new. Returns True if added."""
        if node.id in self._nodes:
            return False
        self._nodes[node.id] = node
        return True

    def add_edge(
        self,
        source: str,
        target: str,
        kind: EdgeKind,
        *,
        edge_id: str | None = None,
        label: str | None = None,
        description: str | None = None,
        weight: float | None = None,
    ) -> bool:
        """
        Add an edge between two existing nodes.

        Synthetic edges get the id ``{kind}:{source}->{target}``, which also
        deduplicates repeated links between the same pair.

        Returns:
            True if added; False for a dangling endpoint or a repeated id
        """
        if source not in self._nodes or target not in self._nodes:
            return False
        edge_id = edge_id or f"{kind.value}:{source}->{target}"
        if edge_id in self._edges:
            return False
        self._edges[edge_id] = GraphEdge(
            id=edge_id,
            source=source,
            target=target,
            kind=kind,
            label=label,
            description=description,
            weight=weight,
        )
        return True

    def build(self) -> Graph:
        return Graph(nodes=list(self._nodes.values()), edges=list(self._edges.values()))
