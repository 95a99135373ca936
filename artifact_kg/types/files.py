"""
Artifact Files

An ArtifactFile is one user-supplied (or fetched) file: its name, which
decides the record kind, and its raw bytes, which are decoded locally and
uploaded to the backend unchanged.
"""

from pathlib import Path

from pydantic import BaseModel

PARQUET_CONTENT_TYPE = "application/x-parquet"


class ArtifactFile(BaseModel):
    """
    A named Parquet payload.

    Attributes:
        name: File name or URL; only the base name is used for resolution
        data: Raw file bytes
    """

    name: str
    data: bytes

    @classmethod
    def from_path(cls, path: str | Path) -> "ArtifactFile":
        """Read a file from disk."""
        path = Path(path)
        return cls(name=path.name, data=path.read_bytes())

    @property
    def size(self) -> int:
        return len(self.data)
