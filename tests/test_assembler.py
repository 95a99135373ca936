"""Tests for graph assembly."""

from itertools import combinations

from artifact_kg.graph.assembler import GraphAssembler, assemble
from artifact_kg.graph.builder import GraphBuilder
from artifact_kg.types import (
    ArtifactTables,
    Community,
    CommunityReport,
    Document,
    EdgeKind,
    Entity,
    GraphNode,
    InclusionFlags,
    RecordKind,
    Relationship,
    TextUnit,
)

ALL_FLAGS = InclusionFlags(
    include_documents=True,
    include_text_units=True,
    include_communities=True,
    include_covariates=True,
)

FLAG_NAMES = ["include_documents", "include_text_units", "include_communities", "include_covariates"]


def _edge_pairs(graph, kind: EdgeKind) -> list[tuple[str, str]]:
    return [(edge.source, edge.target) for edge in graph.edges_of_kind(kind)]


class TestBaseGraph:
    """Entity and relationship graph with no layers enabled."""

    def test_entity_nodes(self, sample_tables):
        """One node per entity, keyed by entity id."""
        graph = assemble(sample_tables)

        assert [n.id for n in graph.nodes] == ["e1", "e2", "e3"]
        acme = graph.get_node("e1")
        assert acme.label == "ACME"
        assert acme.kind == RecordKind.ENTITY
        assert acme.type == "ORGANIZATION"
        assert acme.description == "A company"
        assert acme.properties["degree"] == 1

    def test_relationship_edges_resolve_titles(self, sample_tables):
        """Relationship endpoints given as titles map onto entity ids."""
        graph = assemble(sample_tables)
        edges = graph.edges_of_kind(EdgeKind.RELATIONSHIP)

        assert [e.id for e in edges] == ["r1", "r2"]
        assert (edges[0].source, edges[0].target) == ("e1", "e2")
        assert edges[0].label == "employs"
        assert edges[0].weight == 2.0

    def test_dangling_relationship_dropped(self, sample_tables):
        """Relationships to unknown entities produce no edge."""
        graph = assemble(sample_tables)
        assert graph.get_node("GHOST") is None
        assert "r3" not in {e.id for e in graph.edges}

    def test_relationship_by_entity_id(self):
        """Endpoints may also reference entity ids."""
        tables = ArtifactTables(
            entities=(Entity(id="e1", title="A"), Entity(id="e2", title="B")),
            relationships=(Relationship(id="r1", source="e1", target="e2"),),
        )
        graph = assemble(tables)
        assert _edge_pairs(graph, EdgeKind.RELATIONSHIP) == [("e1", "e2")]

    def test_relationships_without_entities(self):
        """With no entity table every relationship is dropped."""
        tables = ArtifactTables(
            relationships=(Relationship(id="r1", source="A", target="B"),),
        )
        graph = assemble(tables)
        assert graph.is_empty
        assert graph.edges == []

    def test_duplicate_entity_first_wins(self):
        """A repeated entity id keeps the first record."""
        tables = ArtifactTables(
            entities=(Entity(id="e1", title="FIRST"), Entity(id="e1", title="SECOND")),
        )
        graph = assemble(tables)
        assert len(graph.nodes) == 1
        assert graph.nodes[0].label == "FIRST"

    def test_empty_tables(self):
        """Empty tables assemble to an empty graph even with every layer on."""
        graph = assemble(ArtifactTables(), ALL_FLAGS)
        assert graph.nodes == []
        assert graph.edges == []

    def test_layers_ignored_when_flags_off(self, sample_tables):
        """Default flags add nothing beyond entities and relationships."""
        graph = assemble(sample_tables, InclusionFlags())
        assert {n.kind for n in graph.nodes} == {RecordKind.ENTITY}
        assert {e.kind for e in graph.edges} == {EdgeKind.RELATIONSHIP}


class TestDocumentLayer:
    """Tests for include_documents."""

    def test_document_nodes_and_edges(self, sample_tables):
        """Documents link to the entities of their text units."""
        graph = assemble(sample_tables, InclusionFlags(include_documents=True))

        [document] = graph.nodes_of_kind(RecordKind.DOCUMENT)
        assert document.id == "document:d1"
        assert document.record_id == "d1"
        assert document.label == "report.txt"
        assert _edge_pairs(graph, EdgeKind.DOCUMENT_ENTITY) == [
            ("document:d1", "e1"), ("document:d1", "e2"), ("document:d1", "e3"),
        ]
        assert graph.nodes_of_kind(RecordKind.TEXT_UNIT) == []


class TestTextUnitLayer:
    """Tests for include_text_units."""

    def test_text_unit_nodes_and_mentions(self, sample_tables):
        """Text units link to the entities they mention."""
        graph = assemble(sample_tables, InclusionFlags(include_text_units=True))

        units = graph.nodes_of_kind(RecordKind.TEXT_UNIT)
        assert [u.id for u in units] == ["text_unit:t1", "text_unit:t2"]
        assert [u.record_id for u in units] == ["t1", "t2"]
        assert units[0].label == "Text unit 1"
        assert units[0].description == "ACME employs Bob."
        assert _edge_pairs(graph, EdgeKind.TEXT_UNIT_ENTITY) == [
            ("text_unit:t1", "e1"), ("text_unit:t1", "e2"),
            ("text_unit:t2", "e2"), ("text_unit:t2", "e3"),
        ]

    def test_no_document_edges_without_document_layer(self, sample_tables):
        """Text unit -> document edges need the document layer."""
        graph = assemble(sample_tables, InclusionFlags(include_text_units=True))
        assert graph.edges_of_kind(EdgeKind.TEXT_UNIT_DOCUMENT) == []

    def test_document_edges_with_document_layer(self, sample_tables):
        """With both layers text units link to their document."""
        flags = InclusionFlags(include_documents=True, include_text_units=True)
        graph = assemble(sample_tables, flags)
        assert _edge_pairs(graph, EdgeKind.TEXT_UNIT_DOCUMENT) == [
            ("text_unit:t1", "document:d1"), ("text_unit:t2", "document:d1"),
        ]


class TestCommunityLayer:
    """Tests for include_communities."""

    def test_community_node_with_report(self, sample_tables):
        """Community nodes carry their report and link to members."""
        graph = assemble(sample_tables, InclusionFlags(include_communities=True))

        [community] = graph.nodes_of_kind(RecordKind.COMMUNITY)
        assert community.id == "community:c1"
        assert community.label == "Community 0"
        assert community.description == "Employment cluster"
        assert community.properties["report_title"] == "ACME and Bob"
        assert community.properties["rank"] == 7.5
        assert _edge_pairs(graph, EdgeKind.COMMUNITY_MEMBER) == [
            ("community:c1", "e1"), ("community:c1", "e2"),
        ]

    def test_report_matched_by_community_id(self):
        """Reports fall back to matching the community record id."""
        tables = ArtifactTables(
            entities=(Entity(id="e1", title="A"),),
            communities=(Community(id="7", entity_ids=["e1"]),),
            community_reports=(CommunityReport(id="cr7", community="7", title="Seven"),),
        )
        graph = assemble(tables, InclusionFlags(include_communities=True))

        community = graph.get_node("community:7")
        assert community.label == "Seven"
        assert community.properties["report_id"] == "cr7"

    def test_community_without_report(self):
        """A community with no report still becomes a node."""
        tables = ArtifactTables(communities=(Community(id="c9", community="9"),))
        graph = assemble(tables, InclusionFlags(include_communities=True))

        [community] = graph.nodes
        assert community.label == "Community 9"
        assert community.description is None
        assert graph.edges == []


class TestCovariateLayer:
    """Tests for include_covariates."""

    def test_covariate_with_subject_and_object(self, sample_tables):
        """Covariates link subject -> covariate -> object."""
        graph = assemble(sample_tables, InclusionFlags(include_covariates=True))

        [covariate] = graph.nodes_of_kind(RecordKind.COVARIATE)
        assert covariate.id == "covariate:cv1"
        assert covariate.label == "CLAIM"
        assert covariate.properties["status"] == "TRUE"
        assert _edge_pairs(graph, EdgeKind.COVARIATE_SUBJECT) == [("e1", "covariate:cv1")]
        assert _edge_pairs(graph, EdgeKind.COVARIATE_OBJECT) == [("covariate:cv1", "e2")]

    def test_unresolved_subject_dropped(self, sample_tables):
        """Covariates about unknown subjects are left out."""
        graph = assemble(sample_tables, InclusionFlags(include_covariates=True))
        assert graph.get_node("covariate:cv2") is None


class TestAssemblyProperties:
    """Properties that hold across flag combinations."""

    def test_all_layers(self, sample_tables):
        """Every layer together yields the expected totals."""
        graph = assemble(sample_tables, ALL_FLAGS)

        assert graph.summary() == {
            "nodes.entity": 3,
            "nodes.document": 1,
            "nodes.text_unit": 2,
            "nodes.community": 1,
            "nodes.covariate": 1,
            "edges.relationship": 2,
            "edges.document_entity": 3,
            "edges.text_unit_entity": 4,
            "edges.text_unit_document": 2,
            "edges.community_member": 2,
            "edges.covariate_subject": 1,
            "edges.covariate_object": 1,
        }

    def test_edges_reference_existing_nodes(self, sample_tables):
        """No edge has a dangling endpoint under any flag combination."""
        for size in range(len(FLAG_NAMES) + 1):
            for enabled in combinations(FLAG_NAMES, size):
                flags = InclusionFlags(**{name: True for name in enabled})
                graph = assemble(sample_tables, flags)
                node_ids = graph.node_ids()
                assert len(node_ids) == len(graph.nodes)
                for edge in graph.edges:
                    assert edge.source in node_ids
                    assert edge.target in node_ids

    def test_enabling_a_layer_only_adds(self, sample_tables):
        """Turning a flag on never removes nodes or edges."""
        for name in FLAG_NAMES:
            for size in range(len(FLAG_NAMES)):
                for others in combinations([n for n in FLAG_NAMES if n != name], size):
                    base_flags = {n: True for n in others}
                    without = assemble(sample_tables, InclusionFlags(**base_flags))
                    with_layer = assemble(sample_tables, InclusionFlags(**base_flags, **{name: True}))

                    for node in without.nodes:
                        assert with_layer.get_node(node.id) == node
                    with_edges = {e.id: e for e in with_layer.edges}
                    for edge in without.edges:
                        assert with_edges.get(edge.id) == edge

    def test_shared_record_ids_stay_separate(self):
        """Records of different tables with the same id get distinct nodes."""
        tables = ArtifactTables(
            entities=(Entity(id="x", title="X"),),
            documents=(Document(id="x", text_unit_ids=["x"]),),
            text_units=(TextUnit(id="x", entity_ids=["x"]),),
            communities=(Community(id="x", entity_ids=["x"]),),
        )
        text_units_only = assemble(tables, InclusionFlags(include_text_units=True))
        graph = assemble(tables, ALL_FLAGS)

        unit = text_units_only.get_node("text_unit:x")
        assert graph.get_node("text_unit:x") == unit
        assert {n.id: n.kind for n in graph.nodes} == {
            "x": RecordKind.ENTITY,
            "document:x": RecordKind.DOCUMENT,
            "text_unit:x": RecordKind.TEXT_UNIT,
            "community:x": RecordKind.COMMUNITY,
        }
        assert {n.record_id for n in graph.nodes} == {"x"}
        assert _edge_pairs(graph, EdgeKind.TEXT_UNIT_DOCUMENT) == [("text_unit:x", "document:x")]

    def test_deterministic(self, sample_tables):
        """Assembling twice from the same inputs gives equal graphs."""
        assembler = GraphAssembler()
        assert assembler.assemble(sample_tables, ALL_FLAGS) == assembler.assemble(sample_tables, ALL_FLAGS)

    def test_custom_layers(self, sample_tables):
        """An assembler can be built with a subset of layers."""
        from artifact_kg.graph.layers import CommunityLayer

        graph = GraphAssembler(layers=[CommunityLayer()]).assemble(sample_tables, ALL_FLAGS)
        kinds = {n.kind for n in graph.nodes}
        assert kinds == {RecordKind.ENTITY, RecordKind.COMMUNITY}


class TestGraphBuilder:
    """Tests for GraphBuilder rules."""

    def test_edge_needs_both_endpoints(self):
        """Edges to missing nodes are rejected."""
        builder = GraphBuilder()
        builder.add_node(GraphNode(id="a", label="A", kind=RecordKind.ENTITY))

        assert builder.add_edge("a", "b", EdgeKind.RELATIONSHIP) is False
        assert builder.build().edges == []

    def test_repeated_synthetic_edge_deduplicated(self):
        """The same synthetic link is only added once."""
        builder = GraphBuilder()
        builder.add_node(GraphNode(id="a", label="A", kind=RecordKind.DOCUMENT))
        builder.add_node(GraphNode(id="b", label="B", kind=RecordKind.ENTITY))

        assert builder.add_edge("a", "b", EdgeKind.DOCUMENT_ENTITY) is True
        assert builder.add_edge("a", "b", EdgeKind.DOCUMENT_ENTITY) is False
        assert [e.id for e in builder.build().edges] == ["document_entity:a->b"]

    def test_resolve_entity_requires_node(self):
        """References resolve only once the entity node exists."""
        entity = Entity(id="e1", title="ACME")
        builder = GraphBuilder([entity])
        assert builder.resolve_entity("ACME") is None

        builder.add_node(GraphNode(id="e1", label="ACME", kind=RecordKind.ENTITY))
        assert builder.resolve_entity("ACME") == "e1"
        assert builder.resolve_entity("e1") == "e1"
        assert builder.resolve_entity(None) is None
