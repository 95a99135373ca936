"""
Table Snapshot

ArtifactTables is the immutable value the TableStore hands to readers. A new
instance is built for every ingest/reset; existing instances never change,
so a reader holding one can never observe a half-replaced state.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict

from artifact_kg.types.records import (
    ArtifactRecord,
    Community,
    CommunityReport,
    Covariate,
    Document,
    Entity,
    RecordKind,
    Relationship,
    TextUnit,
)


class ArtifactTables(BaseModel):
    """
    All seven artifact tables at one point in time.

    Attributes are named after the tables (``entities``, ``text_units``...)
    and hold records in ingestion order.
    """

    entities: tuple[Entity, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    documents: tuple[Document, ...] = ()
    text_units: tuple[TextUnit, ...] = ()
    communities: tuple[Community, ...] = ()
    community_reports: tuple[CommunityReport, ...] = ()
    covariates: tuple[Covariate, ...] = ()

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_records(
        cls, records: Mapping[RecordKind, Sequence[ArtifactRecord]]
    ) -> "ArtifactTables":
        """Build a snapshot; kinds missing from ``records`` become empty."""
        values: dict[str, Any] = {
            kind.table_name: tuple(records.get(kind, ())) for kind in RecordKind
        }
        return cls.model_validate(values)

    def get(self, kind: RecordKind) -> tuple[ArtifactRecord, ...]:
        """Return the records of one kind."""
        return getattr(self, kind.table_name)

    def has(self, kind: RecordKind) -> bool:
        """True if the table of ``kind`` holds at least one record."""
        return len(self.get(kind)) > 0

    def counts(self) -> dict[RecordKind, int]:
        """Row count per kind, in canonical order."""
        return {kind: len(self.get(kind)) for kind in RecordKind}

    @property
    def is_empty(self) -> bool:
        return not any(self.counts().values())
