"""Async client for the Spring Initializr API.

Wraps the two endpoints the scaffolder needs, ``/metadata/client`` and
``/starter.zip``, with timeout handling and readable error messages. All
methods are async; failures raise ``InitializrError``.

Typical usage::

    client = InitializrClient()
    metadata = await client.fetch_metadata()
    archive = await client.download_project(request)
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from .models import Metadata, ProjectRequest

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://start.spring.io"
METADATA_ACCEPT = "application/vnd.initializr.v2.2+json"


class InitializrError(Exception):
    """Raised when the Initializr service cannot serve a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class InitializrClient:
    """Async client for a Spring Initializr instance.

    The client uses ``httpx.AsyncClient`` for non-blocking HTTP and opens a
    fresh connection per call.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30,
        accept: str = METADATA_ACCEPT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.accept = accept

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            follow_redirects=True,
        )

    def _translate(self, exc: Exception, action: str) -> InitializrError:
        """Map an ``httpx`` failure onto an ``InitializrError``."""
        if isinstance(exc, httpx.ConnectError):
            return InitializrError(
                f"Cannot connect to Spring Initializr at {self.base_url}. Check your network."
            )
        if isinstance(exc, httpx.TimeoutException):
            return InitializrError(
                f"Request to Spring Initializr timed out after {self.timeout}s."
            )
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            return InitializrError(
                f"{action}: Spring Initializr returned HTTP {status}: {exc.response.text[:500]}",
                status_code=status,
            )
        return InitializrError(f"Unexpected error while contacting Spring Initializr: {exc}")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch_metadata(self) -> Metadata:
        """Download and validate the ``/metadata/client`` document.

        Raises:
            InitializrError: On connection, timeout, HTTP or decoding errors.
        """
        logger.debug("Fetching metadata from %s/metadata/client", self.base_url)
        try:
            async with self._client() as client:
                response = await client.get(
                    "/metadata/client", headers={"Accept": self.accept}
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            raise self._translate(exc, "failed to load metadata") from exc
        except ValueError as exc:
            raise InitializrError(f"Spring Initializr sent invalid JSON metadata: {exc}") from exc

        try:
            metadata = Metadata.model_validate(payload)
        except ValidationError as exc:
            raise InitializrError(f"Unexpected metadata format: {exc}") from exc

        logger.debug(
            "Loaded %d dependencies, %d Boot versions",
            len(metadata.dependencies.all()),
            len(metadata.boot_version.values),
        )
        return metadata

    async def download_project(self, request: ProjectRequest) -> bytes:
        """Request a generated project and return the zip bytes.

        Raises:
            InitializrError: If the service rejects the request or cannot be
                reached.
        """
        logger.debug("Requesting %s/starter.zip for %r", self.base_url, request.name)
        try:
            async with self._client() as client:
                response = await client.post("/starter.zip", data=request.to_form())
                response.raise_for_status()
                content = response.content
        except httpx.HTTPError as exc:
            raise self._translate(exc, "failed to generate project") from exc

        logger.debug("Received %d bytes", len(content))
        return content

    async def is_available(self) -> bool:
        """Return ``True`` if the metadata endpoint answers with HTTP 200."""
        try:
            async with self._client() as client:
                response = await client.get(
                    "/metadata/client", headers={"Accept": self.accept}
                )
                return response.status_code == 200
        except httpx.HTTPError:
            return False
