"""Version intervals in mathematical bracket notation.

Initializr metadata states which Spring Boot versions a dependency supports
with a compact range string:

* ``""`` (or missing): every version.
* ``3.2.0``: ``3.2.0`` and anything newer.
* ``[3.2.0,4.0.0)``: ``[`` / ``]`` are inclusive bounds, ``(`` / ``)``
  exclusive ones; either side may be left empty for "unbounded".

Parsing never raises. A bound that is not a valid version is dropped (the
interval becomes unbounded on that side) and a malformed string becomes the
universal interval; both outcomes are reported through ``IntervalParse``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from .version import InvalidVersionError, SemanticVersion, coerce_version

_BRACKETED_RE = re.compile(
    r"""
    ^(?P<open>[\[(])
    \s*(?P<lower>[^,\[\]()]*?)\s*
    ,
    \s*(?P<upper>[^,\[\]()]*?)\s*
    (?P<close>[\])])$
    """,
    re.VERBOSE,
)
_BARE_RE = re.compile(r"^[^\[\](),\s]+$")


class ParseStatus(str, Enum):
    """Whether a range string was understood completely."""
    EXACT = "exact"
    DEGRADED = "degraded"


@dataclass(frozen=True)
class VersionInterval:
    """A range of semantic versions with optional, independently inclusive bounds.

    With both bounds absent the interval is universal and contains every
    version. An inclusivity flag only has meaning when its bound is present.
    """

    lower: SemanticVersion | None = None
    upper: SemanticVersion | None = None
    lower_inclusive: bool = True
    upper_inclusive: bool = False

    @classmethod
    def universal(cls) -> "VersionInterval":
        return cls()

    @classmethod
    def parse(cls, raw: str | None) -> "VersionInterval":
        """Parse a range string, discarding the parse diagnostics."""
        return parse_interval(raw).interval

    @property
    def is_universal(self) -> bool:
        return self.lower is None and self.upper is None

    def contains(self, candidate: SemanticVersion | str) -> bool:
        """Return ``True`` if ``candidate`` falls inside the interval.

        Exclusive bounds reject a candidate equal to the bound; inclusive
        bounds accept it.

        Raises:
            InvalidVersionError: If ``candidate`` is a string that is not a
                version.
        """
        if self.is_universal:
            return True
        version = coerce_version(candidate)

        if self.lower is not None:
            if version < self.lower:
                return False
            if not self.lower_inclusive and version == self.lower:
                return False

        if self.upper is not None:
            if version > self.upper:
                return False
            if not self.upper_inclusive and version == self.upper:
                return False

        return True

    def __contains__(self, candidate: object) -> bool:
        if not isinstance(candidate, (SemanticVersion, str)):
            return False
        return self.contains(candidate)

    def render(self) -> str:
        """Human-readable condition such as ``>=3.2.0 and <4.0.0``.

        Meant for display only; an interval without a lower bound renders
        as the empty string.
        """
        if self.lower is None:
            return ""
        text = f"{'>=' if self.lower_inclusive else '>'}{self.lower}"
        if self.upper is not None:
            text += f" and {'<=' if self.upper_inclusive else '<'}{self.upper}"
        return text

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class IntervalParse:
    """Outcome of parsing a range string.

    ``interval`` is always usable. ``status`` is ``DEGRADED`` when part of
    the input had to be ignored, with ``issues`` explaining what.
    """

    raw: str
    interval: VersionInterval
    status: ParseStatus = ParseStatus.EXACT
    issues: tuple[str, ...] = field(default=())

    @property
    def degraded(self) -> bool:
        return self.status is ParseStatus.DEGRADED


def _parse_bound(text: str, side: str, issues: list[str]) -> SemanticVersion | None:
    if not text:
        return None
    try:
        return SemanticVersion.parse(text)
    except InvalidVersionError:
        issues.append(f"ignored unparsable {side} bound {text!r}")
        return None


def parse_interval(raw: str | None) -> IntervalParse:
    """Parse a range string into an ``IntervalParse``.

    Accepted shapes are the empty string, a bare version and the bracketed
    two-sided form. Anything else degrades to the universal interval.
    """
    text = (raw or "").strip()
    if not text:
        return IntervalParse(raw=raw or "", interval=VersionInterval.universal())

    issues: list[str] = []

    match = _BRACKETED_RE.match(text)
    if match is not None:
        interval = VersionInterval(
            lower=_parse_bound(match.group("lower"), "lower", issues),
            upper=_parse_bound(match.group("upper"), "upper", issues),
            lower_inclusive=match.group("open") == "[",
            upper_inclusive=match.group("close") == "]",
        )
    elif _BARE_RE.match(text):
        interval = VersionInterval(
            lower=_parse_bound(text, "lower", issues),
            lower_inclusive=True,
        )
    else:
        issues.append(f"unrecognised range {text!r}")
        interval = VersionInterval.universal()

    return IntervalParse(
        raw=raw or "",
        interval=interval,
        status=ParseStatus.DEGRADED if issues else ParseStatus.EXACT,
        issues=tuple(issues),
    )
