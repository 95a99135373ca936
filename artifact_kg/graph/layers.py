"""
Augmentation Layers

Optional enrichments of the entity/relationship graph. Each layer is gated
by one InclusionFlags attribute and only ever adds nodes and edges, so any
subset of layers can be combined and enabling a layer never removes or
changes what is already there. Layer node ids are namespaced by kind
(``document:d1``, ``text_unit:t1``, ...), so no layer can claim the id of a
node another layer or the entity graph already added.

Layers (in fold order):
    DocumentLayer   - document nodes; document -> entity edges via text units
    TextUnitLayer   - text unit nodes; text unit -> entity edges;
                      text unit -> document edges when document nodes exist
    CommunityLayer  - community nodes; community -> member entity edges;
                      matching community report attached as node properties
    CovariateLayer  - covariate nodes; subject entity -> covariate edges;
                      covariate -> object entity edges when the object resolves
"""

from abc import ABC, abstractmethod

from artifact_kg.graph.builder import GraphBuilder, compact, node_id
from artifact_kg.types import (
    ArtifactTables,
    CommunityReport,
    EdgeKind,
    GraphNode,
    InclusionFlags,
    RecordKind,
)


def document_text_units(tables: ArtifactTables) -> dict[str, list[str]]:
    """
    Map document id -> text unit ids.

    Links are read from both sides (``Document.text_unit_ids`` and
    ``TextUnit.document_ids``); order follows first appearance.
    """
    links: dict[str, list[str]] = {}

    def _link(document_id: str, unit_id: str) -> None:
        unit_ids = links.setdefault(document_id, [])
        if unit_id not in unit_ids:
            unit_ids.append(unit_id)

    for document in tables.documents:
        for unit_id in document.text_unit_ids:
            _link(document.id, unit_id)
    for unit in tables.text_units:
        for document_id in unit.document_ids:
            _link(document_id, unit.id)
    return links


class AugmentationLayer(ABC):
    """One optional layer of the assembled graph."""

    flag: str
    """Name of the InclusionFlags attribute that enables this layer"""

    def enabled(self, flags: InclusionFlags) -> bool:
        return bool(getattr(flags, self.flag))

    @abstractmethod
    def apply(self, tables: ArtifactTables, builder: GraphBuilder) -> None:
        """Add this layer's nodes and edges to ``builder``."""
        ...


class DocumentLayer(AugmentationLayer):
    flag = "include_documents"

    def apply(self, tables: ArtifactTables, builder: GraphBuilder) -> None:
        for document in tables.documents:
            builder.add_node(
                GraphNode(
                    id=node_id(RecordKind.DOCUMENT, document.id),
                    label=document.title or document.id,
                    kind=RecordKind.DOCUMENT,
                    record_id=document.id,
                    properties=compact({
                        "human_readable_id": document.human_readable_id,
                        "text_unit_count": len(document.text_unit_ids),
                    }),
                )
            )

        units = {}
        for unit in tables.text_units:
            units.setdefault(unit.id, unit)

        for document_id, unit_ids in document_text_units(tables).items():
            source = node_id(RecordKind.DOCUMENT, document_id)
            if not builder.has_node(source):
                continue
            for unit_id in unit_ids:
                unit = units.get(unit_id)
                if unit is None:
                    continue
                for ref in unit.entity_ids:
                    entity_id = builder.resolve_entity(ref)
                    if entity_id is not None:
                        builder.add_edge(
                            source, entity_id, EdgeKind.DOCUMENT_ENTITY, label="CONTAINS"
                        )


class TextUnitLayer(AugmentationLayer):
    flag = "include_text_units"

    def apply(self, tables: ArtifactTables, builder: GraphBuilder) -> None:
        for unit in tables.text_units:
            hrid = unit.human_readable_id if unit.human_readable_id is not None else unit.id
            builder.add_node(
                GraphNode(
                    id=node_id(RecordKind.TEXT_UNIT, unit.id),
                    label=f"Text unit {hrid}",
                    kind=RecordKind.TEXT_UNIT,
                    record_id=unit.id,
                    description=unit.text,
                    properties=compact({
                        "human_readable_id": unit.human_readable_id,
                        "n_tokens": unit.n_tokens,
                    }),
                )
            )

        for unit in tables.text_units:
            source = node_id(RecordKind.TEXT_UNIT, unit.id)
            if not builder.has_node(source):
                continue
            for ref in unit.entity_ids:
                entity_id = builder.resolve_entity(ref)
                if entity_id is not None:
                    builder.add_edge(source, entity_id, EdgeKind.TEXT_UNIT_ENTITY, label="MENTIONS")

        for document_id, unit_ids in document_text_units(tables).items():
            target = node_id(RecordKind.DOCUMENT, document_id)
            if not builder.has_node(target):
                continue
            for unit_id in unit_ids:
                source = node_id(RecordKind.TEXT_UNIT, unit_id)
                if builder.has_node(source):
                    builder.add_edge(source, target, EdgeKind.TEXT_UNIT_DOCUMENT, label="PART_OF")


class CommunityLayer(AugmentationLayer):
    flag = "include_communities"

    def apply(self, tables: ArtifactTables, builder: GraphBuilder) -> None:
        reports: dict[str, CommunityReport] = {}
        for report in tables.community_reports:
            reports.setdefault(report.community, report)

        for community in tables.communities:
            report = None
            if community.community is not None:
                report = reports.get(community.community)
            if report is None:
                report = reports.get(community.id)

            properties = compact({
                "community": community.community,
                "level": community.level,
                "parent": community.parent,
                "size": community.size,
            })
            if report is not None:
                properties.update(compact({
                    "report_id": report.id,
                    "report_title": report.title,
                    "summary": report.summary,
                    "full_content": report.full_content,
                    "rank": report.rank,
                }))

            source = node_id(RecordKind.COMMUNITY, community.id)
            label = community.title or (report.title if report else None)
            added = builder.add_node(
                GraphNode(
                    id=source,
                    label=label or f"Community {community.community or community.id}",
                    kind=RecordKind.COMMUNITY,
                    record_id=community.id,
                    description=report.summary if report else None,
                    properties=properties,
                )
            )
            if not added:
                continue

            for ref in community.entity_ids:
                entity_id = builder.resolve_entity(ref)
                if entity_id is not None:
                    builder.add_edge(
                        source, entity_id, EdgeKind.COMMUNITY_MEMBER, label="HAS_MEMBER"
                    )


class CovariateLayer(AugmentationLayer):
    flag = "include_covariates"

    def apply(self, tables: ArtifactTables, builder: GraphBuilder) -> None:
        for covariate in tables.covariates:
            subject_id = builder.resolve_entity(covariate.subject_id)
            if subject_id is None:
                continue

            covariate_node = node_id(RecordKind.COVARIATE, covariate.id)
            added = builder.add_node(
                GraphNode(
                    id=covariate_node,
                    label=covariate.type or covariate.covariate_type or "covariate",
                    kind=RecordKind.COVARIATE,
                    record_id=covariate.id,
                    type=covariate.type,
                    description=covariate.description,
                    properties=compact({
                        "covariate_type": covariate.covariate_type,
                        "subject_id": covariate.subject_id,
                        "object_id": covariate.object_id,
                        "status": covariate.status,
                        "start_date": covariate.start_date,
                        "end_date": covariate.end_date,
                        "source_text": covariate.source_text,
                        "text_unit_id": covariate.text_unit_id,
                    }),
                )
            )
            if not added:
                continue

            builder.add_edge(
                subject_id, covariate_node, EdgeKind.COVARIATE_SUBJECT, label=covariate.type
            )
            object_id = builder.resolve_entity(covariate.object_id)
            if object_id is not None:
                builder.add_edge(
                    covariate_node, object_id, EdgeKind.COVARIATE_OBJECT, label=covariate.type
                )


DEFAULT_LAYERS: tuple[AugmentationLayer, ...] = (
    DocumentLayer(),
    TextUnitLayer(),
    CommunityLayer(),
    CovariateLayer(),
)
