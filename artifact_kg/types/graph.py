"""
Graph Types

The assembled graph handed to renderers. Graphs are plain values: they are
recomputed from the tables and inclusion flags on every request and never
stored.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from artifact_kg.types.records import RecordKind


class EdgeKind(str, Enum):
    """Origin of a graph edge."""

    RELATIONSHIP = "relationship"
    DOCUMENT_ENTITY = "document_entity"
    TEXT_UNIT_ENTITY = "text_unit_entity"
    TEXT_UNIT_DOCUMENT = "text_unit_document"
    COMMUNITY_MEMBER = "community_member"
    COVARIATE_SUBJECT = "covariate_subject"
    COVARIATE_OBJECT = "covariate_object"


class InclusionFlags(BaseModel):
    """
    Which augmentation layers to add on top of the entity/relationship graph.

    Every flag is independent; any subset may be enabled.
    """

    include_documents: bool = False
    include_text_units: bool = False
    include_communities: bool = False
    include_covariates: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def any_enabled(self) -> bool:
        return (
            self.include_documents
            or self.include_text_units
            or self.include_communities
            or self.include_covariates
        )


class GraphNode(BaseModel):
    """
    A node of the assembled graph.

    Attributes:
        id: Graph-wide node id. Entity nodes use the entity id; every other
            kind is prefixed with its kind (``document:d1``) so records of
            different tables never collide
        record_id: Id of the source record
        label: Human-readable name
        kind: Which table the node was derived from
        type: Entity type or covariate type, when known
        description: Free-text description, when known
        properties: Extra metadata (e.g. community report summary)
    """

    id: str
    label: str
    kind: RecordKind
    record_id: str | None = None
    type: str | None = None
    description: str | None = None
    properties: dict[str, Any] = {}


class GraphEdge(BaseModel):
    """A directed edge between two existing nodes."""

    id: str
    source: str
    target: str
    kind: EdgeKind
    label: str | None = None
    description: str | None = None
    weight: float | None = None


class Graph(BaseModel):
    """Nodes and edges, in deterministic assembly order."""

    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    def get_node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_of_kind(self, kind: RecordKind) -> list[GraphNode]:
        return [node for node in self.nodes if node.kind == kind]

    def edges_of_kind(self, kind: EdgeKind) -> list[GraphEdge]:
        return [edge for edge in self.edges if edge.kind == kind]

    def summary(self) -> dict[str, int]:
        """Node counts per record kind and edge counts per edge kind."""
        counts: dict[str, int] = {}
        for node in self.nodes:
            key = f"nodes.{node.kind.value}"
            counts[key] = counts.get(key, 0) + 1
        for edge in self.edges:
            key = f"edges.{edge.kind.value}"
            counts[key] = counts.get(key, 0) + 1
        return counts
