"""
Public API

Modules:
    viewer: ArtifactViewer facade
"""

from artifact_kg.api.viewer import ArtifactViewer

__all__ = ["ArtifactViewer"]
