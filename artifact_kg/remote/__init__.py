"""
Remote Backend

Modules:
    sync: RemoteSyncClient (upload, reload and status endpoints)
"""

from artifact_kg.remote.sync import RemoteSyncClient

__all__ = ["RemoteSyncClient"]
