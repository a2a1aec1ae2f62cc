"""springgen -- Archive materialiser.

Quick usage::

    from springgen.archive import extract_archive

    project_root = extract_archive(zip_bytes, "demo")
"""

from .extractor import (
    ArchiveFilesystemError,
    ExtractionError,
    InvalidArchiveError,
    TargetExistsError,
    check_target_available,
    extract_archive,
)

__all__ = [
    "ArchiveFilesystemError",
    "ExtractionError",
    "InvalidArchiveError",
    "TargetExistsError",
    "check_target_available",
    "extract_archive",
]
