"""
Result Types

Outcomes of ingestion and backend synchronization. Failures are carried as
values here rather than raised, so callers can show them as status messages.

Ingestion:
    - FileOutcome: What happened to one file of a batch
    - DecodedBatch: Per-kind records of a batch, merged in submission order
    - IngestReport: Summary returned to the caller after an ingest

Backend:
    - SyncResult: Status of one backend call (upload, reload, clear, ...)
    - OutputListing: Contents of the backend output folder
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from artifact_kg.types.records import ArtifactRecord, RecordKind

FileStatus = Literal["decoded", "skipped", "failed"]


class FileOutcome(BaseModel):
    """
    Result of resolving and decoding one file.

    Attributes:
        file_name: Name the file was submitted under
        kind: Resolved record kind (None when skipped)
        status: "decoded", "skipped" (unknown name) or "failed" (bad payload)
        rows: Number of decoded rows
        error: Error message for skipped/failed files
    """

    file_name: str
    kind: RecordKind | None = None
    status: FileStatus
    rows: int = 0
    error: str | None = None


class DecodedBatch(BaseModel):
    """
    Decoded contents of one ingestion batch.

    ``records`` holds, per kind, the rows of every file of that kind
    concatenated in submission order. ``outcomes`` lists every submitted
    file in submission order.
    """

    records: dict[RecordKind, list[ArtifactRecord]] = Field(default_factory=dict)
    outcomes: list[FileOutcome] = []

    @property
    def skipped(self) -> list[str]:
        return [o.file_name for o in self.outcomes if o.status == "skipped"]

    @property
    def errors(self) -> list[str]:
        return [o.error or o.file_name for o in self.outcomes if o.status == "failed"]

    def row_counts(self) -> dict[RecordKind, int]:
        return {kind: len(rows) for kind, rows in self.records.items()}

    def warning(self) -> str | None:
        """Aggregate warning for files that failed to decode, if any."""
        failed = [o.file_name for o in self.outcomes if o.status == "failed"]
        if not failed:
            return None
        return f"{len(failed)} file(s) could not be decoded: {', '.join(failed)}"


class IngestReport(BaseModel):
    """
    Summary of one ingest call.

    Attributes:
        generation: Generation number taken by this call
        applied: Whether the batch replaced the tables
        stale: True if a newer ingest or reset superseded this batch
        source: "files" for user-supplied files, "defaults" for discovery
        row_counts: Rows per table name in the decoded batch
        skipped: Files with unrecognized names
        errors: Decode error messages (non-fatal)
        warning: Aggregate decode warning, if any file failed
        duration_seconds: Wall time of the ingest call
    """

    generation: int
    applied: bool
    stale: bool = False
    source: str = "files"
    row_counts: dict[str, int] = {}
    skipped: list[str] = []
    errors: list[str] = []
    warning: str | None = None
    duration_seconds: float = 0.0

    @property
    def total_rows(self) -> int:
        return sum(self.row_counts.values())


class SyncResult(BaseModel):
    """
    Status of one backend call.

    Attributes:
        ok: Whether the call succeeded
        step: Which call this was ("upload", "reload", "clear_output", ...)
        message: Human-readable status message
        status_code: HTTP status, when a response was received
        data: Decoded JSON body, when available
    """

    ok: bool
    step: str
    message: str
    status_code: int | None = None
    data: dict[str, Any] = {}


class OutputListing(BaseModel):
    """Backend output folder contents, or a message when it has none."""

    ok: bool
    message: str
    files: list[str] = []
