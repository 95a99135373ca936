"""Tests for ArtifactConfig."""

import tempfile
from pathlib import Path

import pytest

from artifact_kg.config import ArtifactConfig

ENV_VARS = [
    "ARTIFACT_KG_ENV",
    "ARTIFACT_KG_BACKEND_URL",
    "ARTIFACT_KG_PUBLIC_URL",
    "ARTIFACT_KG_ARTIFACTS_PATH",
    "ARTIFACT_KG_HTTP_TIMEOUT",
    "ARTIFACT_KG_DECODE_CONCURRENCY",
    "ARTIFACT_KG_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self):
        """Defaults target a local production setup."""
        config = ArtifactConfig()
        assert config.environment == "production"
        assert not config.is_development
        assert config.backend_url == "http://localhost:8000"
        assert config.probe_content_type == "application/octet-stream"
        assert config.decode_concurrency == 4

    def test_artifacts_base_url(self):
        """The artifact base URL joins public URL and path."""
        config = ArtifactConfig(public_url="http://host:3000/", artifacts_path="/static/artifacts/")
        assert config.artifacts_base_url == "http://host:3000/static/artifacts"

    def test_unknown_option(self):
        """Unknown options raise ValueError."""
        with pytest.raises(ValueError, match="Unknown configuration option"):
            ArtifactConfig(backend="http://x")

    def test_development_case_insensitive(self):
        """The environment name is matched case-insensitively."""
        assert ArtifactConfig(environment="Development").is_development


class TestEnvironment:
    """Tests for environment variable loading."""

    def test_env_vars(self, monkeypatch):
        """Environment variables override defaults."""
        monkeypatch.setenv("ARTIFACT_KG_ENV", "development")
        monkeypatch.setenv("ARTIFACT_KG_BACKEND_URL", "http://api:9000")
        monkeypatch.setenv("ARTIFACT_KG_HTTP_TIMEOUT", "5")
        monkeypatch.setenv("ARTIFACT_KG_DECODE_CONCURRENCY", "2")

        config = ArtifactConfig.from_env()

        assert config.is_development
        assert config.backend_url == "http://api:9000"
        assert config.http_timeout == 5.0
        assert config.decode_concurrency == 2

    def test_explicit_overrides_env(self, monkeypatch):
        """Keyword options win over environment variables."""
        monkeypatch.setenv("ARTIFACT_KG_BACKEND_URL", "http://api:9000")
        config = ArtifactConfig(backend_url="http://other:1")
        assert config.backend_url == "http://other:1"


class TestFiles:
    """Tests for TOML round trips."""

    def test_from_file_flattens_sections(self):
        """Section keys are read as top-level options."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "artifact_kg.toml"
            path.write_text(
                'environment = "development"\n'
                "\n"
                "[backend]\n"
                'backend_url = "http://api:8000"\n'
                "http_timeout = 10.0\n"
                "\n"
                "[processing]\n"
                "decode_concurrency = 8\n"
            )

            config = ArtifactConfig.from_file(path)

        assert config.is_development
        assert config.backend_url == "http://api:8000"
        assert config.http_timeout == 10.0
        assert config.decode_concurrency == 8

    def test_from_missing_file(self):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ArtifactConfig.from_file("/nonexistent/artifact_kg.toml")

    def test_to_file_round_trip(self):
        """to_file output loads back to the same values."""
        config = ArtifactConfig(
            environment="development",
            public_url="http://cdn:3000",
            decode_concurrency=6,
        )
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "config.toml"
            config.to_file(path)
            loaded = ArtifactConfig.from_file(path)

        assert loaded.environment == "development"
        assert loaded.public_url == "http://cdn:3000"
        assert loaded.decode_concurrency == 6
        assert loaded.probe_content_type == config.probe_content_type


class TestWithOverrides:
    """Tests for with_overrides()."""

    def test_copy_with_changes(self):
        """The copy carries the change and leaves the original alone."""
        config = ArtifactConfig(backend_url="http://a:1")
        dev = config.with_overrides(environment="development")

        assert dev.is_development
        assert dev.backend_url == "http://a:1"
        assert not config.is_development

    def test_unknown_override(self):
        """Unknown overrides raise ValueError."""
        with pytest.raises(ValueError):
            ArtifactConfig().with_overrides(nope=1)
