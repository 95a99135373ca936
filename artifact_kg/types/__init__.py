"""
Type Definitions

Pydantic models for all data structures.

Record Models (decoded from Parquet artifacts):
    - RecordKind, Unresolved - Artifact table identification
    - Entity, Relationship, Document, TextUnit,
      Community, CommunityReport, Covariate - Table rows
    - ArtifactTables - Immutable snapshot of all tables

Graph Models:
    - Graph, GraphNode, GraphEdge, EdgeKind - Assembled graph
    - InclusionFlags - Augmentation layer toggles

Input / Result Models:
    - ArtifactFile - Named Parquet payload
    - DecodedBatch, FileOutcome, IngestReport - Ingestion outcomes
    - SyncResult, OutputListing - Backend call outcomes
"""

from artifact_kg.types.files import PARQUET_CONTENT_TYPE, ArtifactFile
from artifact_kg.types.graph import EdgeKind, Graph, GraphEdge, GraphNode, InclusionFlags
from artifact_kg.types.records import (
    CANONICAL_PREFIX,
    RECORD_MODELS,
    REQUIRED_COLUMNS,
    ArtifactRecord,
    Community,
    CommunityReport,
    Covariate,
    Document,
    Entity,
    RecordKind,
    Relationship,
    TextUnit,
    Unresolved,
)
from artifact_kg.types.results import (
    DecodedBatch,
    FileOutcome,
    IngestReport,
    OutputListing,
    SyncResult,
)
from artifact_kg.types.tables import ArtifactTables

__all__ = [
    # Records
    "CANONICAL_PREFIX",
    "RECORD_MODELS",
    "REQUIRED_COLUMNS",
    "ArtifactRecord",
    "RecordKind",
    "Unresolved",
    "Entity",
    "Relationship",
    "Document",
    "TextUnit",
    "Community",
    "CommunityReport",
    "Covariate",
    "ArtifactTables",
    # Graph
    "EdgeKind",
    "Graph",
    "GraphEdge",
    "GraphNode",
    "InclusionFlags",
    # Input / Results
    "PARQUET_CONTENT_TYPE",
    "ArtifactFile",
    "DecodedBatch",
    "FileOutcome",
    "IngestReport",
    "OutputListing",
    "SyncResult",
]
