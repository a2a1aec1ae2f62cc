"""Comparable semantic versions.

Only the subset of semantic-version precedence needed to test whether a
Spring Boot version sits inside a compatibility range is implemented:
numeric ``major.minor.patch`` ordering plus pre-release identifiers
(``3.5.0-M1``, ``3.5.0-SNAPSHOT``). The legacy Spring qualifiers
``RELEASE``, ``FINAL`` and ``GA`` (``2.7.18.RELEASE``) mark a release.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

_VERSION_RE = re.compile(
    r"""
    ^v?
    (?P<major>\d+)
    (?:\.(?P<minor>\d+))?
    (?:\.(?P<patch>\d+))?
    (?:[-.](?P<prerelease>[0-9A-Za-z][0-9A-Za-z.-]*))?
    (?:\+(?P<build>[0-9A-Za-z.-]+))?
    $
    """,
    re.VERBOSE,
)

RELEASE_QUALIFIERS: frozenset[str] = frozenset({"RELEASE", "FINAL", "GA"})


class InvalidVersionError(ValueError):
    """Raised when a string cannot be read as a semantic version."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Invalid version: {raw!r}")


def _identifier_key(identifier: str) -> tuple[int, int | str]:
    # Numeric identifiers sort before alphanumeric ones.
    if identifier.isdigit():
        return (0, int(identifier))
    return (1, identifier)


@total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """An immutable, totally ordered dotted version."""

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: tuple[str, ...] = field(default=())

    @classmethod
    def parse(cls, raw: str) -> "SemanticVersion":
        """Parse ``raw`` into a version.

        Missing minor or patch components read as ``0``. Build metadata
        (``+...``) is accepted and discarded.

        Raises:
            InvalidVersionError: If ``raw`` is not a version string.
        """
        if not isinstance(raw, str):
            raise InvalidVersionError(repr(raw))
        match = _VERSION_RE.match(raw.strip())
        if match is None:
            raise InvalidVersionError(raw)

        prerelease: tuple[str, ...] = ()
        qualifier = match.group("prerelease")
        if qualifier and qualifier.upper() not in RELEASE_QUALIFIERS:
            prerelease = tuple(part for part in qualifier.split(".") if part)

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
            prerelease=prerelease,
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _sort_key(self) -> tuple:
        # A release sorts after every pre-release of the same core version.
        if self.prerelease:
            return (
                self.major,
                self.minor,
                self.patch,
                0,
                tuple(_identifier_key(part) for part in self.prerelease),
            )
        return (self.major, self.minor, self.patch, 1, ())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{core}-{'.'.join(self.prerelease)}"
        return core


def coerce_version(value: "SemanticVersion | str") -> SemanticVersion:
    """Return ``value`` as a ``SemanticVersion``, parsing strings."""
    if isinstance(value, SemanticVersion):
        return value
    return SemanticVersion.parse(value)
