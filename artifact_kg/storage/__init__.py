"""
Storage

In-memory only: decoded records live for the lifetime of the process and
are replaced wholesale by every ingestion batch.

Modules:
    tables: TableStore, the per-kind record store
"""

from artifact_kg.storage.tables import TableStore

__all__ = ["TableStore"]
