"""Shared pytest fixtures for the springgen test suite.

Provides reusable fixtures for:
- A trimmed-down Initializr metadata document
- In-memory zip archives built from a member list
- A Rich console that writes to a buffer
- Mocked ``httpx.AsyncClient`` instances
"""

from __future__ import annotations

import io
import stat
import zipfile
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from springgen.initializr import Metadata


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


@pytest.fixture
def metadata_payload() -> dict[str, Any]:
    """A ``/metadata/client`` document with the fields springgen reads."""
    return {
        "_links": {"maven-project": {"href": "https://start.spring.io/starter.zip?type=maven-project"}},
        "dependencies": {
            "type": "hierarchical-multi-select",
            "values": [
                {
                    "name": "Web",
                    "values": [
                        {"id": "web", "name": "Spring Web", "description": "Build web apps."},
                        {
                            "id": "webflux",
                            "name": "Spring Reactive Web",
                            "versionRange": "3.2.0",
                        },
                    ],
                },
                {
                    "name": "SQL",
                    "values": [
                        {
                            "id": "data-jpa",
                            "name": "Spring Data JPA",
                            "versionRange": "[3.2.0,3.4.0)",
                        },
                        {
                            "id": "legacy-driver",
                            "name": "Legacy Driver",
                            "versionRange": "[2.7.0,3.0.0-M1)",
                        },
                    ],
                },
                {
                    "name": "Ops",
                    "values": [
                        {
                            "id": "odd-range",
                            "name": "Odd Range",
                            "versionRange": "[not-a-version,3.5.0)",
                        },
                    ],
                },
            ],
        },
        "type": {
            "type": "action",
            "default": "maven-project",
            "values": [
                {
                    "id": "gradle-project",
                    "name": "Gradle - Groovy",
                    "action": "/starter.zip",
                    "tags": {"build": "gradle", "dialect": "groovy", "format": "project"},
                },
                {
                    "id": "maven-project",
                    "name": "Maven",
                    "action": "/starter.zip",
                    "tags": {"build": "maven", "format": "project"},
                },
                {
                    "id": "maven-build",
                    "name": "Maven POM",
                    "action": "/pom.xml",
                    "tags": {"build": "maven", "format": "build"},
                },
            ],
        },
        "packaging": {
            "type": "single-select",
            "default": "jar",
            "values": [{"id": "jar", "name": "Jar"}, {"id": "war", "name": "War"}],
        },
        "javaVersion": {
            "type": "single-select",
            "default": "17",
            "values": [
                {"id": "21", "name": "21"},
                {"id": "17", "name": "17"},
            ],
        },
        "language": {
            "type": "single-select",
            "default": "java",
            "values": [
                {"id": "java", "name": "Java"},
                {"id": "kotlin", "name": "Kotlin"},
            ],
        },
        "bootVersion": {
            "type": "single-select",
            "default": "3.3.1",
            "values": [
                {"id": "3.4.0-SNAPSHOT", "name": "3.4.0 (SNAPSHOT)"},
                {"id": "3.3.1", "name": "3.3.1"},
                {"id": "3.2.7", "name": "3.2.7"},
            ],
        },
        "groupId": {"type": "text", "default": "com.example"},
        "artifactId": {"type": "text", "default": "demo"},
        "version": {"type": "text", "default": "0.0.1-SNAPSHOT"},
        "name": {"type": "text", "default": "demo"},
        "description": {"type": "text", "default": "Demo project for Spring Boot"},
        "packageName": {"type": "text", "default": "com.example.demo"},
    }


@pytest.fixture
def metadata(metadata_payload: dict[str, Any]) -> Metadata:
    """The sample document parsed into a ``Metadata`` model."""
    return Metadata.model_validate(metadata_payload)


# ---------------------------------------------------------------------------
# Archives
# ---------------------------------------------------------------------------


ZipMember = tuple[str, bytes | None, int]


def build_zip(members: list[ZipMember]) -> bytes:
    """Build a zip in memory.

    Each member is ``(name, content, mode)``; ``content=None`` makes a
    directory entry (the name should end with ``/``).
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, content, mode in members:
            info = zipfile.ZipInfo(name)
            info.create_system = 3  # Unix
            if content is None:
                info.external_attr = ((stat.S_IFDIR | mode) << 16) | 0x10
                archive.writestr(info, b"")
            else:
                info.external_attr = (stat.S_IFREG | mode) << 16
                info.compress_type = zipfile.ZIP_DEFLATED
                archive.writestr(info, content)
    return buffer.getvalue()


@pytest.fixture
def make_zip() -> Callable[[list[ZipMember]], bytes]:
    """Factory fixture returning ``build_zip``."""
    return build_zip


@pytest.fixture
def sample_zip() -> bytes:
    """A top-level file, a nested file and an empty directory."""
    return build_zip(
        [
            ("a.txt", b"alpha\r\n", 0o644),
            ("dir/b.txt", b"bravo", 0o644),
            ("emptydir/", None, 0o755),
        ]
    )


# ---------------------------------------------------------------------------
# Terminal & HTTP
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_console() -> Console:
    """A Rich console writing into a buffer instead of the terminal."""
    return Console(file=io.StringIO(), force_terminal=False, width=120)


@pytest.fixture
def mock_async_client() -> AsyncMock:
    """An ``httpx.AsyncClient`` stand-in usable as an async context manager."""
    client = AsyncMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Factory for successful ``httpx.Response`` stand-ins."""

    def _make(payload: Any = None, content: bytes = b"", status_code: int = 200) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = payload
        response.content = content
        response.raise_for_status = MagicMock()
        return response

    return _make
