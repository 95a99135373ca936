"""
Table Store

Holds the current decoded records of every artifact kind. It is the single
source of truth read by both graph assembly and tabular views.

Mutation API:
    - ingest(records): replace every table at once (absent kinds -> empty)
    - reset(): clear every table

Both calls build a complete new ArtifactTables snapshot before swapping it
in, so any read issued after a call returns sees the whole new state and no
read ever sees a mix of old and new tables.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import pyarrow as pa

from artifact_kg.types import RECORD_MODELS, ArtifactRecord, ArtifactTables, RecordKind

logger = logging.getLogger(__name__)


class TableStore:
    """
    In-memory artifact tables.

    Usage:
        store = TableStore()
        store.ingest({RecordKind.ENTITY: entities})
        store.snapshot().entities
        store.reset()
    """

    def __init__(self) -> None:
        self._tables = ArtifactTables()
        self._version = 0

    @property
    def version(self) -> int:
        """Incremented on every ingest or reset."""
        return self._version

    def snapshot(self) -> ArtifactTables:
        """Return the current immutable tables."""
        return self._tables

    def get(self, kind: RecordKind) -> tuple[ArtifactRecord, ...]:
        """Return the current records of one kind."""
        return self._tables.get(kind)

    def counts(self) -> dict[RecordKind, int]:
        return self._tables.counts()

    @property
    def is_empty(self) -> bool:
        return self._tables.is_empty

    def ingest(self, records: Mapping[RecordKind, Sequence[ArtifactRecord]]) -> ArtifactTables:
        """
        Replace every table with the records of a freshly decoded batch.

        Args:
            records: Per-kind records; kinds not present become empty

        Returns:
            The new snapshot
        """
        tables = ArtifactTables.from_records(records)
        self._tables = tables
        self._version += 1
        logger.info(
            "Tables replaced: "
            + ", ".join(f"{kind.table_name}={count}" for kind, count in tables.counts().items())
        )
        return tables

    def reset(self) -> None:
        """Clear every table."""
        self._tables = ArtifactTables()
        self._version += 1
        logger.info("Tables cleared")

    # -------------------------------------------------------------------------
    # Tabular views
    # -------------------------------------------------------------------------

    def rows(self, kind: RecordKind) -> list[dict[str, Any]]:
        """Current records of ``kind`` as plain dicts."""
        return [record.model_dump() for record in self.get(kind)]

    def to_arrow(self, kind: RecordKind) -> pa.Table:
        """
        Render one table as a pyarrow Table for inspection.

        Columns follow the record model fields; an empty table still carries
        those columns.
        """
        rows = self.rows(kind)
        if rows:
            return pa.Table.from_pylist(rows)

        fields = RECORD_MODELS[kind].model_fields
        return pa.table({name: pa.array([], type=pa.null()) for name in fields})
