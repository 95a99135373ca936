"""
ArtifactConfig - Configuration Management

Sensible defaults with full override capability.

Example:
    >>> # Use defaults (reads from environment)
    >>> viewer = ArtifactViewer()

    >>> # Explicit configuration
    >>> config = ArtifactConfig(
    ...     environment="development",
    ...     backend_url="http://graphrag-api:8000",
    ... )
    >>> viewer = ArtifactViewer(config=config)

    >>> # From config file
    >>> config = ArtifactConfig.from_file("./artifact_kg.toml")

Environment Variables:
    ARTIFACT_KG_ENV - "development" enables default artifact loading
    ARTIFACT_KG_BACKEND_URL - Base URL of the artifact backend
    ARTIFACT_KG_PUBLIC_URL - Base URL the default artifacts are served from
    ARTIFACT_KG_ARTIFACTS_PATH - Path segment under the public URL
    ARTIFACT_KG_HTTP_TIMEOUT - Seconds before an HTTP call fails
    ARTIFACT_KG_DECODE_CONCURRENCY - Max files decoded at once
    ARTIFACT_KG_LOG_LEVEL - Logging level for the CLI
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


class ArtifactConfig:
    """Configuration for ArtifactKG."""

    # === Runtime Mode ===

    environment: str = "production"
    """Deployment mode: "development" or "production" """

    # === Backend Configuration ===

    backend_url: str = "http://localhost:8000"
    """Base URL of the backend that stores uploaded artifacts"""

    http_timeout: float = 30.0
    """Timeout in seconds for every HTTP call"""

    # === Default Artifacts ===

    public_url: str = "http://localhost:3000"
    """Base URL the bundled default artifacts are served from"""

    artifacts_path: str = "artifacts"
    """Path segment under public_url holding the default artifacts"""

    probe_content_type: str = "application/octet-stream"
    """Content-Type a default artifact probe must report to be accepted"""

    # === Processing Configuration ===

    decode_concurrency: int = 4
    """Max files decoded concurrently within one batch"""

    # === Logging ===

    log_level: str = "INFO"
    """Log level used by the CLI"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option
        """
        # Load from environment first
        self._load_from_env()

        # Apply explicit overrides
        for key, value in kwargs.items():
            if hasattr(self, key) and not key.startswith("_"):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        if environment := os.getenv("ARTIFACT_KG_ENV"):
            self.environment = environment
        if url := os.getenv("ARTIFACT_KG_BACKEND_URL"):
            self.backend_url = url
        if url := os.getenv("ARTIFACT_KG_PUBLIC_URL"):
            self.public_url = url
        if path := os.getenv("ARTIFACT_KG_ARTIFACTS_PATH"):
            self.artifacts_path = path
        if timeout := os.getenv("ARTIFACT_KG_HTTP_TIMEOUT"):
            self.http_timeout = float(timeout)
        if concurrency := os.getenv("ARTIFACT_KG_DECODE_CONCURRENCY"):
            self.decode_concurrency = int(concurrency)
        if level := os.getenv("ARTIFACT_KG_LOG_LEVEL"):
            self.log_level = level

    @property
    def is_development(self) -> bool:
        """True when default artifact loading is allowed."""
        return self.environment.lower() == "development"

    @property
    def artifacts_base_url(self) -> str:
        """``{public_url}/{artifacts_path}`` without a trailing slash."""
        return f"{self.public_url.rstrip('/')}/{self.artifacts_path.strip('/')}"

    @classmethod
    def from_file(cls, path: str | Path) -> "ArtifactConfig":
        """
        Load configuration from TOML file.

        Nested sections are flattened; section names are not prefixed onto
        keys, except that ``[defaults]`` keys map onto the default-artifact
        options.

        Example TOML:
            environment = "development"

            [backend]
            backend_url = "http://localhost:8000"
            http_timeout = 10.0

            [defaults]
            public_url = "http://localhost:3000"
            artifacts_path = "artifacts"

            [processing]
            decode_concurrency = 8

        Args:
            path: Path to TOML configuration file

        Returns:
            ArtifactConfig instance with values from file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = _load_toml(path)

        flat_config: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, dict):
                flat_config.update(value)
            else:
                flat_config[key] = value

        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "ArtifactConfig":
        """Load configuration from environment variables only."""
        return cls()

    def to_file(self, path: str | Path) -> None:
        """
        Save configuration to TOML file.

        Args:
            path: Path to write TOML configuration file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        sections: dict[str, dict[str, str | int | float]] = {
            "backend": {
                "backend_url": self.backend_url,
                "http_timeout": self.http_timeout,
            },
            "defaults": {
                "public_url": self.public_url,
                "artifacts_path": self.artifacts_path,
                "probe_content_type": self.probe_content_type,
            },
            "processing": {
                "decode_concurrency": self.decode_concurrency,
            },
        }

        # Build TOML string manually (avoids extra dependency)
        lines = [
            "# ArtifactKG Configuration",
            "",
            f'environment = "{self.environment}"',
            f'log_level = "{self.log_level}"',
            "",
        ]

        for section_name, section_values in sections.items():
            lines.append(f"[{section_name}]")
            for key, value in section_values.items():
                if isinstance(value, str):
                    lines.append(f'{key} = "{value}"')
                else:
                    lines.append(f"{key} = {value}")
            lines.append("")

        path.write_text("\n".join(lines))

    def with_overrides(self, **kwargs: Any) -> "ArtifactConfig":
        """Return new config with specified overrides."""
        new_config = ArtifactConfig.__new__(ArtifactConfig)
        for key in dir(self):
            if key.startswith("_"):
                continue
            if isinstance(getattr(type(self), key, None), property):
                continue
            if callable(getattr(self, key)):
                continue
            setattr(new_config, key, getattr(self, key))
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        return new_config
