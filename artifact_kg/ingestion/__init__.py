"""
Ingestion Pipeline

Turns artifact files into typed records ready for the TableStore.

Stages:
    1. Schema resolution - file name -> RecordKind (or Unresolved)
    2. Decoding          - Parquet bytes -> typed records, one file at a time
    3. Batch merge       - per-kind records concatenated in submission order

Modules:
    schema: resolve(), require_kind()
    decoder: decode(), decode_file()
    batch: decode_batch()
    defaults: DefaultArtifactLoader (development auto-loading)
"""

from artifact_kg.ingestion.batch import decode_batch
from artifact_kg.ingestion.decoder import decode, decode_file
from artifact_kg.ingestion.defaults import DefaultArtifactLoader
from artifact_kg.ingestion.schema import CANONICAL_FILE_NAMES, require_kind, resolve

__all__ = [
    "CANONICAL_FILE_NAMES",
    "DefaultArtifactLoader",
    "decode",
    "decode_batch",
    "decode_file",
    "require_kind",
    "resolve",
]
