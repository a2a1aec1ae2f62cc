"""springgen -- Version interval model.

Parses the bracket notation used by Initializr metadata to declare which
Spring Boot versions a dependency supports, and tests versions against it.

Quick usage::

    from springgen.versioning import VersionInterval

    interval = VersionInterval.parse("[3.2.0,4.0.0)")
    interval.contains("3.3.1")   # True
    interval.render()            # ">=3.2.0 and <4.0.0"
"""

from .interval import IntervalParse, ParseStatus, VersionInterval, parse_interval
from .version import InvalidVersionError, SemanticVersion, coerce_version

__all__ = [
    "IntervalParse",
    "InvalidVersionError",
    "ParseStatus",
    "SemanticVersion",
    "VersionInterval",
    "coerce_version",
    "parse_interval",
]
