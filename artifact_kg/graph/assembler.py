"""
Graph Assembler

Derives the node/edge graph from the current tables and inclusion flags.

Assembly order:
    1. Entities       - one node per entity (node id = entity id)
    2. Relationships  - one edge per relationship whose endpoints both
                        resolve to entity nodes; dangling ones are dropped
    3. Augmentation   - each enabled layer, in DEFAULT_LAYERS order

Assembly is a pure function of (tables, flags): every call starts from an
empty builder, so calling it twice with the same inputs yields equal graphs.
"""

import logging
from collections.abc import Sequence

from artifact_kg.graph.builder import GraphBuilder, compact
from artifact_kg.graph.layers import DEFAULT_LAYERS, AugmentationLayer
from artifact_kg.types import ArtifactTables, EdgeKind, Graph, GraphNode, InclusionFlags, RecordKind

logger = logging.getLogger(__name__)


class GraphAssembler:
    """
    Builds graphs from artifact tables.

    Usage:
        assembler = GraphAssembler()
        graph = assembler.assemble(store.snapshot(), InclusionFlags(include_documents=True))
    """

    def __init__(self, layers: Sequence[AugmentationLayer] | None = None) -> None:
        self.layers: tuple[AugmentationLayer, ...] = (
            tuple(layers) if layers is not None else DEFAULT_LAYERS
        )

    def assemble(self, tables: ArtifactTables, flags: InclusionFlags | None = None) -> Graph:
        """
        Assemble a graph.

        Args:
            tables: Snapshot of the artifact tables
            flags: Which augmentation layers to include (default: none)

        Returns:
            A new Graph
        """
        flags = flags or InclusionFlags()
        builder = GraphBuilder(tables.entities)

        self._add_entities(tables, builder)
        self._add_relationships(tables, builder)

        for layer in self.layers:
            if layer.enabled(flags):
                layer.apply(tables, builder)

        graph = builder.build()
        logger.debug(f"Assembled graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
        return graph

    def _add_entities(self, tables: ArtifactTables, builder: GraphBuilder) -> None:
        for entity in tables.entities:
            builder.add_node(
                GraphNode(
                    id=entity.id,
                    label=entity.title,
                    record_id=entity.id,
                    kind=RecordKind.ENTITY,
                    type=entity.type,
                    description=entity.description,
                    properties=compact({
                        "human_readable_id": entity.human_readable_id,
                        "degree": entity.degree,
                        "frequency": entity.frequency,
                    }),
                )
            )

    def _add_relationships(self, tables: ArtifactTables, builder: GraphBuilder) -> None:
        dropped = 0
        for relationship in tables.relationships:
            source = builder.resolve_entity(relationship.source)
            target = builder.resolve_entity(relationship.target)
            if source is None or target is None:
                dropped += 1
                continue
            builder.add_edge(
                source,
                target,
                EdgeKind.RELATIONSHIP,
                edge_id=relationship.id,
                label=relationship.description,
                description=relationship.description,
                weight=relationship.weight,
            )

        if dropped:
            logger.debug(f"Dropped {dropped} relationship(s) with unknown endpoints")


def assemble(tables: ArtifactTables, flags: InclusionFlags | None = None) -> Graph:
    """Assemble a graph with the default layers."""
    return GraphAssembler().assemble(tables, flags)
