"""
Default Artifact Loader

Development helper that auto-populates the viewer from a conventional
location when no user files have been ingested yet.

Discovery:
    For each canonical file, in canonical order:
        1. {public_url}/{artifacts_path}/create_final_{name}   (preferred)
        2. {public_url}/{artifacts_path}/{name}
    A location is accepted only if a HEAD probe succeeds AND reports
    ``Content-Type: application/octet-stream`` exactly (configurable via
    ``probe_content_type``). Kinds with neither variant reachable are
    skipped.

Loading:
    Each location is fetched and decoded through the same resolve/decode
    path as a locally supplied file. Network failures are non-fatal and
    simply drop that location.

Never used in production mode; ArtifactViewer.load_defaults() enforces this.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import httpx

from artifact_kg.config import ArtifactConfig
from artifact_kg.errors import NetworkError
from artifact_kg.ingestion.batch import decode_batch
from artifact_kg.ingestion.schema import base_name
from artifact_kg.types import ArtifactFile, DecodedBatch, FileOutcome, RecordKind

logger = logging.getLogger(__name__)


class DefaultArtifactLoader:
    """
    Discovers and loads the default artifact files.

    Usage:
        loader = DefaultArtifactLoader(config)
        locations = await loader.discover()
        batch = await loader.load(locations)

    Args:
        config: Supplies public_url, artifacts_path, probe_content_type
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(
        self,
        config: ArtifactConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ArtifactConfig()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.config.http_timeout, transport=self._transport)

    def candidate_urls(self, kind: RecordKind) -> tuple[str, str]:
        """Return (prefixed, plain) URLs for one kind, preferred first."""
        base = self.config.artifacts_base_url
        return f"{base}/{kind.prefixed_file_name}", f"{base}/{kind.file_name}"

    async def exists(self, client: httpx.AsyncClient, url: str) -> bool:
        """Probe one URL; any failure counts as absent."""
        try:
            response = await client.head(url, headers={"Cache-Control": "no-store"})
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Probe failed for {url}: {e}")
            return False
        return (
            response.is_success
            and response.headers.get("content-type") == self.config.probe_content_type
        )

    async def discover(self) -> list[str]:
        """
        Find one reachable location per kind.

        Returns:
            Accepted URLs in canonical kind order
        """

        async def _discover_kind(client: httpx.AsyncClient, kind: RecordKind) -> str | None:
            for url in self.candidate_urls(kind):
                if await self.exists(client, url):
                    return url
            return None

        async with self._client() as client:
            found = await asyncio.gather(*(_discover_kind(client, kind) for kind in RecordKind))

        locations = [url for url in found if url is not None]
        if locations:
            logger.info(f"Discovered {len(locations)} default artifact file(s)")
        else:
            logger.info("No default parquet files found.")
        return locations

    async def fetch(self, client: httpx.AsyncClient, url: str) -> ArtifactFile:
        """
        Download one location.

        Raises:
            NetworkError: On transport failure or a non-2xx status
        """
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"Fetch failed for {url}: HTTP {e.response.status_code}",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(f"Fetch failed for {url}: {e}", url=url) from e
        return ArtifactFile(name=base_name(url), data=response.content)

    async def load(self, locations: Sequence[str]) -> DecodedBatch:
        """
        Fetch and decode the given locations as one batch.

        Locations that cannot be fetched are reported as failed outcomes
        and left out of the records. Outcomes follow location order.
        """
        async with self._client() as client:
            fetched = await asyncio.gather(
                *(self.fetch(client, url) for url in locations),
                return_exceptions=True,
            )

        files: list[ArtifactFile] = []
        fetch_failures: dict[int, FileOutcome] = {}
        for index, (url, result) in enumerate(zip(locations, fetched)):
            if isinstance(result, NetworkError):
                logger.warning(str(result))
                fetch_failures[index] = FileOutcome(
                    file_name=base_name(url), status="failed", error=str(result)
                )
            elif isinstance(result, BaseException):
                raise result
            else:
                files.append(result)

        batch = await decode_batch(files, concurrency=self.config.decode_concurrency)

        decoded = iter(batch.outcomes)
        batch.outcomes = [
            fetch_failures[index] if index in fetch_failures else next(decoded)
            for index in range(len(locations))
        ]
        return batch
