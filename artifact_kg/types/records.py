"""
Record Types

One pydantic model per artifact table. Column names follow the GraphRAG
artifact layout; only the columns the viewer reasons about are modelled and
any other column is ignored.

Record Kinds:
    - RecordKind: Closed enumeration of the seven artifact tables
    - Unresolved: Explicit "no kind" result for unrecognized file names

Records:
    - Entity, Relationship, Document, TextUnit,
      Community, CommunityReport, Covariate

Null handling:
    Parquet nulls are dropped before validation, so optional columns fall
    back to their defaults (None or an empty list). A null in a required
    column (e.g. ``id``) fails validation.
"""

from enum import Enum
from typing import Any, NamedTuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

CANONICAL_PREFIX = "create_final_"
"""Literal prefix of the alternate artifact naming convention."""


class RecordKind(str, Enum):
    """
    The seven artifact tables.

    Member order is the canonical file order used for discovery and display.
    """

    ENTITY = "entity"
    RELATIONSHIP = "relationship"
    DOCUMENT = "document"
    TEXT_UNIT = "text_unit"
    COMMUNITY = "community"
    COMMUNITY_REPORT = "community_report"
    COVARIATE = "covariate"

    @property
    def file_name(self) -> str:
        """Canonical (unprefixed) file name, e.g. ``entities.parquet``."""
        return f"{_TABLE_NAMES[self]}.parquet"

    @property
    def prefixed_file_name(self) -> str:
        """Alternate file name, e.g. ``create_final_entities.parquet``."""
        return f"{CANONICAL_PREFIX}{self.file_name}"

    @property
    def table_name(self) -> str:
        """Plural table name, e.g. ``entities``."""
        return _TABLE_NAMES[self]


_TABLE_NAMES: dict[RecordKind, str] = {
    RecordKind.ENTITY: "entities",
    RecordKind.RELATIONSHIP: "relationships",
    RecordKind.DOCUMENT: "documents",
    RecordKind.TEXT_UNIT: "text_units",
    RecordKind.COMMUNITY: "communities",
    RecordKind.COMMUNITY_REPORT: "community_reports",
    RecordKind.COVARIATE: "covariates",
}


class Unresolved(NamedTuple):
    """A file name that matched none of the known artifact names."""

    file_name: str


class ArtifactRecord(BaseModel):
    """Base class for all artifact rows."""

    id: str

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Entity(ArtifactRecord):
    """
    An extracted entity.

    Attributes:
        id: Unique identifier (node identity in the graph)
        title: Display name; older artifacts call this column ``name``
        type: Entity type label (e.g. ORGANIZATION, PERSON)
        description: Summarized description
        description_embedding: Optional embedding of the description
    """

    title: str = Field(validation_alias=AliasChoices("title", "name"))
    human_readable_id: int | str | None = None
    type: str | None = None
    description: str | None = None
    text_unit_ids: list[str] = []
    description_embedding: list[float] | None = None
    degree: int | None = None
    frequency: int | None = None


class Relationship(ArtifactRecord):
    """
    A relationship between two entities.

    ``source`` and ``target`` reference entities by id or by title.
    """

    source: str
    target: str
    human_readable_id: int | str | None = None
    description: str | None = None
    weight: float | None = None
    combined_degree: int | None = None
    text_unit_ids: list[str] = []


class Document(ArtifactRecord):
    """An input document."""

    human_readable_id: int | str | None = None
    title: str | None = None
    text: str | None = None
    text_unit_ids: list[str] = []
    metadata: Any = None


class TextUnit(ArtifactRecord):
    """A chunk of a document, linked to the entities it mentions."""

    human_readable_id: int | str | None = None
    text: str | None = None
    n_tokens: int | None = None
    document_ids: list[str] = []
    entity_ids: list[str] = []
    relationship_ids: list[str] = []
    covariate_ids: list[str] = []


class Community(ArtifactRecord):
    """A community of entities at one level of the hierarchy."""

    human_readable_id: int | str | None = None
    community: str | None = None
    level: int | None = None
    parent: str | None = None
    title: str | None = None
    entity_ids: list[str] = []
    relationship_ids: list[str] = []
    text_unit_ids: list[str] = []
    size: int | None = None


class CommunityReport(ArtifactRecord):
    """Generated summary of a community, keyed by the community number."""

    community: str
    human_readable_id: int | str | None = None
    level: int | None = None
    title: str | None = None
    summary: str | None = None
    full_content: str | None = None
    rank: float | None = None
    findings: list[Any] = []


class Covariate(ArtifactRecord):
    """A claim about a subject entity, optionally involving an object entity."""

    subject_id: str
    human_readable_id: int | str | None = None
    covariate_type: str | None = None
    type: str | None = None
    description: str | None = None
    object_id: str | None = None
    status: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    source_text: str | None = None
    text_unit_id: str | None = None


RECORD_MODELS: dict[RecordKind, type[ArtifactRecord]] = {
    RecordKind.ENTITY: Entity,
    RecordKind.RELATIONSHIP: Relationship,
    RecordKind.DOCUMENT: Document,
    RecordKind.TEXT_UNIT: TextUnit,
    RecordKind.COMMUNITY: Community,
    RecordKind.COMMUNITY_REPORT: CommunityReport,
    RecordKind.COVARIATE: Covariate,
}

REQUIRED_COLUMNS: dict[RecordKind, tuple[tuple[str, ...], ...]] = {
    # Each inner tuple lists alternative column names; one must be present.
    RecordKind.ENTITY: (("id",), ("title", "name")),
    RecordKind.RELATIONSHIP: (("id",), ("source",), ("target",)),
    RecordKind.DOCUMENT: (("id",),),
    RecordKind.TEXT_UNIT: (("id",),),
    RecordKind.COMMUNITY: (("id",),),
    RecordKind.COMMUNITY_REPORT: (("id",), ("community",)),
    RecordKind.COVARIATE: (("id",), ("subject_id",)),
}
