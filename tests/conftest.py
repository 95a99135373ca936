"""Shared fixtures: in-memory Parquet artifacts modelled on a small GraphRAG run."""

from collections.abc import Callable

import pyarrow as pa
import pyarrow.parquet as pq
import pytest

from artifact_kg.ingestion.decoder import decode_file
from artifact_kg.types import ArtifactFile, ArtifactTables

ENTITY_ROWS = [
    {"id": "e1", "human_readable_id": 0, "title": "ACME", "type": "ORGANIZATION",
     "description": "A company", "text_unit_ids": ["t1"], "degree": 1},
    {"id": "e2", "human_readable_id": 1, "title": "BOB", "type": "PERSON",
     "description": "A person", "text_unit_ids": ["t1", "t2"], "degree": 2},
    {"id": "e3", "human_readable_id": 2, "title": "PARIS", "type": "GEO",
     "description": "A city", "text_unit_ids": ["t2"], "degree": 1},
]

RELATIONSHIP_ROWS = [
    {"id": "r1", "source": "ACME", "target": "BOB", "description": "employs", "weight": 2.0},
    {"id": "r2", "source": "BOB", "target": "PARIS", "description": "lives in", "weight": 1.0},
    {"id": "r3", "source": "BOB", "target": "GHOST", "description": "haunts", "weight": 1.0},
]

DOCUMENT_ROWS = [
    {"id": "d1", "title": "report.txt", "text_unit_ids": ["t1", "t2"]},
]

TEXT_UNIT_ROWS = [
    {"id": "t1", "human_readable_id": 1, "text": "ACME employs Bob.", "n_tokens": 4,
     "document_ids": ["d1"], "entity_ids": ["e1", "e2"]},
    {"id": "t2", "human_readable_id": 2, "text": "Bob lives in Paris.", "n_tokens": 5,
     "document_ids": ["d1"], "entity_ids": ["e2", "e3"]},
]

COMMUNITY_ROWS = [
    {"id": "c1", "community": 0, "level": 0, "title": "Community 0", "entity_ids": ["e1", "e2"]},
]

COMMUNITY_REPORT_ROWS = [
    {"id": "cr1", "community": 0, "title": "ACME and Bob", "summary": "Employment cluster",
     "full_content": "# ACME and Bob", "rank": 7.5},
]

COVARIATE_ROWS = [
    {"id": "cv1", "subject_id": "ACME", "object_id": "BOB", "type": "CLAIM",
     "description": "ACME hired Bob", "status": "TRUE"},
    {"id": "cv2", "subject_id": "NOBODY", "object_id": None, "type": "CLAIM",
     "description": "Unattached claim", "status": "SUSPECTED"},
]

SAMPLE_ROWS = {
    "entities.parquet": ENTITY_ROWS,
    "relationships.parquet": RELATIONSHIP_ROWS,
    "documents.parquet": DOCUMENT_ROWS,
    "text_units.parquet": TEXT_UNIT_ROWS,
    "communities.parquet": COMMUNITY_ROWS,
    "community_reports.parquet": COMMUNITY_REPORT_ROWS,
    "covariates.parquet": COVARIATE_ROWS,
}


def to_parquet(rows: list[dict], schema: pa.Schema | None = None) -> bytes:
    """Serialize rows to Parquet bytes (pass a schema for zero-row tables)."""
    table = pa.Table.from_pylist(rows, schema=schema)
    sink = pa.BufferOutputStream()
    pq.write_table(table, sink)
    return sink.getvalue().to_pybytes()


@pytest.fixture
def make_file() -> Callable[..., ArtifactFile]:
    """Build an ArtifactFile from rows."""

    def _make(name: str, rows: list[dict], schema: pa.Schema | None = None) -> ArtifactFile:
        return ArtifactFile(name=name, data=to_parquet(rows, schema))

    return _make


@pytest.fixture
def sample_files() -> list[ArtifactFile]:
    """One file per artifact table."""
    return [ArtifactFile(name=name, data=to_parquet(rows)) for name, rows in SAMPLE_ROWS.items()]


@pytest.fixture
def sample_tables(sample_files) -> ArtifactTables:
    """The sample files decoded into a table snapshot."""
    records = dict(decode_file(file) for file in sample_files)
    return ArtifactTables.from_records(records)
