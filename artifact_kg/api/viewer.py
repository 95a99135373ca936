"""
ArtifactViewer - Primary Entry Point

Wires the ingestion pipeline, table store, graph assembler and backend
client together.

Example:
    >>> viewer = ArtifactViewer()
    >>> report = await viewer.ingest_paths(["entities.parquet", "relationships.parquet"])
    >>> viewer.set_flags(include_communities=True)
    >>> graph = viewer.graph()

    # Local ingest and backend upload from the same file set
    >>> report, sync = await viewer.ingest_and_sync(files)
    >>> print(sync.message)

Overlapping ingestions:
    The most recent call wins. Every ingest, default load and reset takes a new
    generation number; when a batch finishes decoding and its generation is
    no longer the latest, it is discarded and reported as stale instead of
    replacing the tables.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from artifact_kg.ingestion.batch import decode_batch
from artifact_kg.types import (
    ArtifactFile,
    ArtifactTables,
    DecodedBatch,
    Graph,
    InclusionFlags,
    IngestReport,
    RecordKind,
    SyncResult,
)

if TYPE_CHECKING:
    import httpx

    from artifact_kg.config.settings import ArtifactConfig
    from artifact_kg.graph.assembler import GraphAssembler
    from artifact_kg.ingestion.defaults import DefaultArtifactLoader
    from artifact_kg.remote.sync import RemoteSyncClient
    from artifact_kg.storage.tables import TableStore

logger = logging.getLogger(__name__)

_LAYER_KINDS: dict[str, RecordKind] = {
    "include_documents": RecordKind.DOCUMENT,
    "include_text_units": RecordKind.TEXT_UNIT,
    "include_communities": RecordKind.COMMUNITY,
    "include_covariates": RecordKind.COVARIATE,
}


class ArtifactViewer:
    """
    In-memory view over one set of knowledge-graph artifacts.

    Args:
        config: Optional configuration. Uses defaults if not provided.
        transport: Optional httpx transport shared by the backend client and
                   the default artifact loader (tests pass a MockTransport)
    """

    def __init__(
        self,
        config: "ArtifactConfig | None" = None,
        *,
        transport: "httpx.AsyncBaseTransport | None" = None,
    ) -> None:
        if config is None:
            from artifact_kg.config import ArtifactConfig
            config = ArtifactConfig()
        self._config = config

        from artifact_kg.graph.assembler import GraphAssembler
        from artifact_kg.ingestion.defaults import DefaultArtifactLoader
        from artifact_kg.remote.sync import RemoteSyncClient
        from artifact_kg.storage.tables import TableStore

        self._store: TableStore = TableStore()
        self._assembler: GraphAssembler = GraphAssembler()
        self._sync: RemoteSyncClient = RemoteSyncClient(config, transport=transport)
        self._loader: DefaultArtifactLoader = DefaultArtifactLoader(config, transport=transport)

        self._flags = InclusionFlags()
        self._generation = 0
        self._user_ingested = False

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> "ArtifactConfig":
        return self._config

    @property
    def store(self) -> "TableStore":
        return self._store

    @property
    def tables(self) -> ArtifactTables:
        """Current immutable table snapshot."""
        return self._store.snapshot()

    @property
    def sync(self) -> "RemoteSyncClient":
        return self._sync

    @property
    def flags(self) -> InclusionFlags:
        return self._flags

    @property
    def generation(self) -> int:
        """Generation number of the latest ingest or reset."""
        return self._generation

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    # -------------------------------------------------------------------------
    # Ingestion
    # -------------------------------------------------------------------------

    async def ingest(self, files: Sequence[ArtifactFile]) -> IngestReport:
        """
        Decode a file set and replace all tables with it.

        Unknown file names are skipped and malformed files are reported in
        the returned IngestReport; neither blocks the rest of the batch.
        """
        started = time.perf_counter()
        generation = self._next_generation()
        self._user_ingested = True

        batch = await decode_batch(files, concurrency=self._config.decode_concurrency)
        return self._apply(batch, generation, source="files", started=started)

    async def ingest_paths(self, paths: Sequence[str | Path]) -> IngestReport:
        """Read files from disk and ingest them."""
        files = await asyncio.to_thread(lambda: [ArtifactFile.from_path(p) for p in paths])
        return await self.ingest(files)

    async def ingest_and_sync(
        self, files: Sequence[ArtifactFile]
    ) -> tuple[IngestReport, SyncResult]:
        """
        Ingest locally and upload + reload on the backend, concurrently.

        The backend result never affects the local tables.
        """
        report, result = await asyncio.gather(
            self.ingest(files),
            self._sync.upload_and_reload(files),
        )
        return report, result

    async def load_defaults(self) -> IngestReport | None:
        """
        Auto-load the default artifacts (development mode only).

        Returns None without touching the network in production mode, once
        user files have been ingested, or when no default file is found.
        Like ingest(), the call takes its generation up front, so a user
        ingest or reset issued while the defaults are fetched wins.
        """
        if not self._config.is_development:
            logger.debug("Default artifact loading disabled outside development mode")
            return None
        if self._user_ingested:
            return None

        started = time.perf_counter()
        generation = self._next_generation()
        locations = await self._loader.discover()
        if not locations:
            return None

        batch = await self._loader.load(locations)
        return self._apply(batch, generation, source="defaults", started=started)

    def _apply(
        self,
        batch: DecodedBatch,
        generation: int,
        *,
        source: str,
        started: float,
    ) -> IngestReport:
        if generation != self._generation:
            logger.info(
                f"Discarding stale batch {generation} (latest generation is {self._generation})"
            )
            return self._report(batch, generation, applied=False, stale=True,
                                source=source, started=started)

        self._store.ingest(batch.records)
        return self._report(batch, generation, applied=True, stale=False,
                            source=source, started=started)

    def _report(
        self,
        batch: DecodedBatch,
        generation: int,
        *,
        applied: bool,
        stale: bool,
        source: str,
        started: float,
    ) -> IngestReport:
        return IngestReport(
            generation=generation,
            applied=applied,
            stale=stale,
            source=source,
            row_counts={kind.table_name: count for kind, count in batch.row_counts().items()},
            skipped=batch.skipped,
            errors=batch.errors,
            warning=batch.warning(),
            duration_seconds=time.perf_counter() - started,
        )

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Clear every table; any ingest still in flight becomes stale."""
        self._next_generation()
        self._store.reset()

    async def clear_output(self) -> SyncResult:
        """Clear the backend output folder, then the local tables on success."""
        result = await self._sync.clear_output()
        if result.ok:
            self.reset()
        return result

    # -------------------------------------------------------------------------
    # Graph
    # -------------------------------------------------------------------------

    def set_flags(self, flags: InclusionFlags | None = None, **changes: Any) -> InclusionFlags:
        """
        Replace or update the current inclusion flags.

        Example:
            viewer.set_flags(include_documents=True)
            viewer.set_flags(InclusionFlags())  # all off
        """
        base = flags if flags is not None else self._flags
        if changes:
            base = InclusionFlags(**{**base.model_dump(), **changes})
        self._flags = base
        return self._flags

    def graph(self, flags: InclusionFlags | None = None) -> Graph:
        """Assemble the graph from the current tables and flags."""
        return self._assembler.assemble(
            self._store.snapshot(), flags if flags is not None else self._flags
        )

    def available_layers(self) -> dict[str, bool]:
        """Which augmentation layers have data to show."""
        tables = self._store.snapshot()
        return {flag: tables.has(kind) for flag, kind in _LAYER_KINDS.items()}

    def stats(self) -> dict[str, int]:
        """Row count per table name."""
        return {kind.table_name: count for kind, count in self._store.counts().items()}
