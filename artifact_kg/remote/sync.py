"""
Remote Sync Client

Talks to the backend that keeps its own copy of the artifacts.

Endpoints:
    POST /upload/new_file  - multipart upload, one ``files`` part per file
    POST /reload           - rebuild server-side state from stored files
    GET  /check/settings   - settings status
    POST /clear/output     - delete the server output folder
    GET  /check/output     - list the server output folder

Every public method is fire-and-report: failures come back as a
SyncResult/OutputListing with ``ok=False`` and a status message, never as
an exception, and nothing here touches the local tables.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from artifact_kg.config import ArtifactConfig
from artifact_kg.errors import NetworkError
from artifact_kg.ingestion.schema import base_name
from artifact_kg.types import PARQUET_CONTENT_TYPE, ArtifactFile, OutputListing, SyncResult

logger = logging.getLogger(__name__)


class RemoteSyncClient:
    """
    Async client for the artifact backend.

    Usage:
        client = RemoteSyncClient(config)
        result = await client.upload_and_reload(files)
        print(result.message)

    Args:
        config: Supplies backend_url and http_timeout
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
        return httpx.AsyncClient(
            base_url=self.config.backend_url,
            timeout=self.config.http_timeout,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """
        Send one request and return its JSON body (empty dict if none).

        Raises:
            NetworkError: On transport failure or a non-2xx status
        """
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"{method} {path} returned HTTP {e.response.status_code}",
                url=str(e.request.url),
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(f"{method} {path} failed: {e}", url=path) from e

        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {"data": body}

    # -------------------------------------------------------------------------
    # Upload / Reload
    # -------------------------------------------------------------------------

    async def upload(self, files: Sequence[ArtifactFile]) -> SyncResult:
        """Upload raw file bytes as multipart ``files`` parts."""
        if not files:
            return SyncResult(ok=False, step="upload", message="No files to upload")

        parts = [
            ("files", (base_name(f.name), f.data, PARQUET_CONTENT_TYPE))
            for f in files
        ]
        try:
            data = await self._request("POST", "/upload/new_file", files=parts)
        except NetworkError as e:
            logger.error(f"Error uploading files: {e}")
            return SyncResult(
                ok=False, step="upload", message=f"Error uploading files: {e}",
                status_code=e.status_code,
            )

        logger.info(f"Uploaded {len(files)} file(s)")
        return SyncResult(
            ok=True,
            step="upload",
            message=str(data.get("message") or "Files uploaded successfully"),
            data=data,
        )

    async def reload(self) -> SyncResult:
        """Ask the backend to rebuild its state from the stored files."""
        try:
            data = await self._request("POST", "/reload")
        except NetworkError as e:
            logger.error(f"Error reloading backend: {e}")
            return SyncResult(
                ok=False, step="reload", message=f"Error reloading backend: {e}",
                status_code=e.status_code,
            )

        return SyncResult(
            ok=True,
            step="reload",
            message=str(data.get("message") or data.get("status") or "Server reloaded"),
            data=data,
        )

    async def upload_and_reload(self, files: Sequence[ArtifactFile]) -> SyncResult:
        """
        Upload, then reload only if the upload succeeded.

        Returns:
            The failing step's result, or a combined success result
        """
        uploaded = await self.upload(files)
        if not uploaded.ok:
            return uploaded

        reloaded = await self.reload()
        if not reloaded.ok:
            return reloaded

        return SyncResult(
            ok=True,
            step="reload",
            message="Files uploaded and server reloaded",
            data={"upload": uploaded.data, "reload": reloaded.data},
        )

    # -------------------------------------------------------------------------
    # Status endpoints
    # -------------------------------------------------------------------------

    async def check_settings(self) -> SyncResult:
        try:
            data = await self._request("GET", "/check/settings")
        except NetworkError as e:
            logger.error(f"Error checking settings: {e}")
            return SyncResult(ok=False, step="check_settings", message="Error checking settings")
        return SyncResult(
            ok=True, step="check_settings", message=str(data.get("status", "")), data=data
        )

    async def clear_output(self) -> SyncResult:
        """Delete the backend output folder."""
        try:
            data = await self._request("POST", "/clear/output")
        except NetworkError as e:
            logger.error(f"Error clearing output: {e}")
            return SyncResult(ok=False, step="clear_output", message="Error clearing output")
        return SyncResult(
            ok=True, step="clear_output", message=str(data.get("status", "")), data=data
        )

    async def check_output(self) -> OutputListing:
        """
        List the backend output folder.

        The backend answers ``{"files": [...]}``, or ``{"files": "<message>"}``
        when there is no output folder.
        """
        try:
            data = await self._request("GET", "/check/output")
        except NetworkError as e:
            logger.error(f"Error checking output folder: {e}")
            return OutputListing(ok=False, message="Error checking output folder")

        files = data.get("files", [])
        if isinstance(files, str):
            return OutputListing(ok=True, message=files)

        names = [str(name) for name in files]
        message = "Output folder contents:" if names else "Output folder is empty"
        return OutputListing(ok=True, message=message, files=names)
