"""
Columnar Decoder

Decodes one Parquet payload into typed records of a given kind.

Each call is self-contained: it reads only the bytes it is given, so a
malformed file never affects other files of the same batch.

Validation (any failure raises DecodeError):
    1. The payload must be a readable Parquet container.
    2. The required columns of the kind must be present (see
       REQUIRED_COLUMNS; some requirements accept alternative names).
    3. Every row must convert to Python values (string columns must hold
       valid UTF-8) and validate against the kind's record model.
    4. Record ids must be unique within the file.

A file with zero rows but the right columns decodes to an empty list.
Row order is preserved.
"""

import logging

import pyarrow as pa
import pyarrow.parquet as pq
from pydantic import ValidationError

from artifact_kg.errors import DecodeError
from artifact_kg.ingestion.schema import require_kind
from artifact_kg.types import RECORD_MODELS, REQUIRED_COLUMNS, ArtifactFile, ArtifactRecord, RecordKind

logger = logging.getLogger(__name__)


def read_table(data: bytes) -> pa.Table:
    """
    Read raw bytes as a Parquet table.

    Raises:
        DecodeError: If the bytes are not a valid Parquet container
    """
    try:
        return pq.read_table(pa.BufferReader(data))
    except (pa.ArrowException, OSError) as e:
        raise DecodeError(f"not a valid Parquet file ({e})") from e


def missing_columns(table: pa.Table, kind: RecordKind) -> list[str]:
    """Describe required columns of ``kind`` that ``table`` lacks."""
    present = set(table.column_names)
    missing = []
    for alternatives in REQUIRED_COLUMNS[kind]:
        if not present.intersection(alternatives):
            missing.append(" or ".join(alternatives))
    return missing


def decode(data: bytes, kind: RecordKind) -> list[ArtifactRecord]:
    """
    Decode a Parquet payload into records of ``kind``.

    Args:
        data: Raw Parquet bytes
        kind: Record kind selecting the row model

    Returns:
        Records in file row order

    Raises:
        DecodeError: On an invalid container, missing columns, invalid rows
                     or duplicate ids
    """
    table = read_table(data)

    missing = missing_columns(table, kind)
    if missing:
        raise DecodeError(
            f"missing required {kind.value} column(s): {', '.join(missing)}"
        )

    model = RECORD_MODELS[kind]
    records: list[ArtifactRecord] = []
    seen: set[str] = set()

    try:
        rows = table.to_pylist()
    except (pa.ArrowException, UnicodeDecodeError) as e:
        raise DecodeError(f"cannot convert {kind.value} rows ({e})") from e

    for index, row in enumerate(rows):
        try:
            record = model.model_validate(row)
        except ValidationError as e:
            raise DecodeError(
                f"row {index} is not a valid {kind.value}: "
                f"{e.error_count()} validation error(s), first: {e.errors()[0]['msg']}"
            ) from e

        if record.id in seen:
            raise DecodeError(f"duplicate {kind.value} id {record.id!r} at row {index}")
        seen.add(record.id)
        records.append(record)

    logger.debug(f"Decoded {len(records)} {kind.value} row(s)")
    return records


def decode_file(file: ArtifactFile) -> tuple[RecordKind, list[ArtifactRecord]]:
    """
    Resolve a file's kind from its name and decode it.

    Raises:
        UnresolvedSchemaError: If the file name is not a known artifact
        DecodeError: If the payload cannot be decoded (message names the file)
    """
    kind = require_kind(file.name)
    try:
        return kind, decode(file.data, kind)
    except DecodeError as e:
        raise DecodeError(str(e), file_name=file.name) from e
