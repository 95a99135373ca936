"""
ArtifactKG - Knowledge Graph Artifact Viewer

Loads the Parquet artifacts of a knowledge-graph indexing run (entities,
relationships, documents, text units, communities, community reports,
covariates) into typed in-memory tables and assembles a filterable
node/edge graph from them.

Example:
    >>> from artifact_kg import ArtifactViewer, InclusionFlags
    >>> viewer = ArtifactViewer()
    >>> report = await viewer.ingest_paths(["output/entities.parquet",
    ...                                     "output/relationships.parquet"])
    >>> graph = viewer.graph(InclusionFlags(include_communities=True))
    >>> print(len(graph.nodes), len(graph.edges))

Main Classes:
    ArtifactViewer: Primary entry point for all operations
    ArtifactConfig: Configuration management
"""

__version__ = "0.1.0"

# Public API - lazy imports keep the CLI and type modules cheap to import
def __getattr__(name: str):
    """Lazy import public API components."""

    if name == "ArtifactViewer":
        from artifact_kg.api.viewer import ArtifactViewer
        return ArtifactViewer

    if name == "ArtifactConfig":
        from artifact_kg.config.settings import ArtifactConfig
        return ArtifactConfig

    if name == "resolve":
        from artifact_kg.ingestion.schema import resolve
        return resolve

    # Types
    if name in ("ArtifactFile", "Graph", "InclusionFlags", "RecordKind"):
        from artifact_kg import types
        return getattr(types, name)

    raise AttributeError(f"module 'artifact_kg' has no attribute {name!r}")


__all__ = [
    # Main classes
    "ArtifactViewer",
    "ArtifactConfig",

    # Functions
    "resolve",

    # Types
    "ArtifactFile",
    "Graph",
    "InclusionFlags",
    "RecordKind",

    # Version
    "__version__",
]
