"""
Batch Decoding

Resolves and decodes every file of one ingestion batch.

Files decode concurrently in worker threads (bounded by a semaphore), but
the merge into per-kind record lists happens only after every file has
finished, and follows submission order. The result is a fresh DecodedBatch;
nothing shared is mutated while decoding is in flight.
"""

import asyncio
import logging
from collections.abc import Sequence

from artifact_kg.errors import DecodeError, UnresolvedSchemaError
from artifact_kg.ingestion.decoder import decode_file
from artifact_kg.types import ArtifactFile, ArtifactRecord, DecodedBatch, FileOutcome, RecordKind

logger = logging.getLogger(__name__)


async def decode_batch(
    files: Sequence[ArtifactFile],
    concurrency: int = 4,
) -> DecodedBatch:
    """
    Decode a batch of files.

    Unrecognized names are skipped and malformed files are recorded as
    failed; neither stops the rest of the batch.

    Args:
        files: Files in submission order
        concurrency: Max files decoded at the same time

    Returns:
        DecodedBatch with per-kind records concatenated in submission order
    """
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def _decode_one(
        file: ArtifactFile,
    ) -> tuple[FileOutcome, list[ArtifactRecord]]:
        async with semaphore:
            try:
                kind, records = await asyncio.to_thread(decode_file, file)
            except UnresolvedSchemaError as e:
                logger.info(f"Skipping {file.name}: not a recognized artifact")
                return FileOutcome(file_name=file.name, status="skipped", error=str(e)), []
            except DecodeError as e:
                logger.warning(f"Failed to decode {file.name}: {e}")
                return FileOutcome(file_name=file.name, status="failed", error=str(e)), []

        return FileOutcome(file_name=file.name, kind=kind, status="decoded", rows=len(records)), records

    results = await asyncio.gather(*(_decode_one(f) for f in files))

    merged: dict[RecordKind, list[ArtifactRecord]] = {}
    outcomes: list[FileOutcome] = []
    for outcome, records in results:
        outcomes.append(outcome)
        if outcome.kind is not None:
            merged.setdefault(outcome.kind, []).extend(records)

    batch = DecodedBatch(records=merged, outcomes=outcomes)
    if warning := batch.warning():
        logger.warning(warning)
    return batch
