"""
Configuration System

Manages configuration for ArtifactKG with a layered approach.

Configuration Priority (highest to lowest):
    1. Programmatic (passed to ArtifactConfig()) or config file
       (ArtifactConfig.from_file, which passes file values as overrides)
    2. Environment variables (ARTIFACT_KG_* prefix)
    3. Built-in defaults

Modules:
    settings: ArtifactConfig class
"""

from artifact_kg.config.settings import ArtifactConfig

__all__ = ["ArtifactConfig"]
