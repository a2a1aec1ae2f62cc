"""Materialise a zip payload as a fresh directory tree.

The generated project arrives as an in-memory zip. ``extract_archive`` opens
it, creates the target directory (which must not exist yet) and writes every
member beneath it in the order the archive stores them, keeping the stored
permission bits. Missing parent directories are created on demand, so the
archive does not need to list directories before their contents.

Extraction is all-or-nothing from the caller's point of view: the first
failure raises and nothing is rolled back, so a failed run can leave a
partially written tree behind.
"""

from __future__ import annotations

import io
import os
import shutil
import stat
import zipfile
import zlib
from pathlib import Path

DEFAULT_DIR_MODE = 0o755
DEFAULT_FILE_MODE = 0o644
COPY_CHUNK_SIZE = 64 * 1024


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ExtractionError(Exception):
    """Base class for every failure raised while materialising an archive."""


class InvalidArchiveError(ExtractionError):
    """Raised when the payload is not a readable zip archive."""

    def __init__(self, message: str, member: str = "") -> None:
        self.member = member
        super().__init__(message)


class ArchiveFilesystemError(ExtractionError):
    """Raised when a directory or file cannot be created or written."""

    def __init__(self, message: str, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(message)


class TargetExistsError(ExtractionError):
    """Raised when the target name is already taken by a file or directory."""

    def __init__(self, name: str, is_dir: bool) -> None:
        self.name = name
        self.is_dir = is_dir
        kind = "directory" if is_dir else "file"
        super().__init__(f"a {kind} named '{name}' already exists")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def check_target_available(name: str, base_dir: str | Path | None = None) -> Path:
    """Make sure ``name`` does not exist under ``base_dir``.

    Args:
        name: Directory name the project will be written to.
        base_dir: Parent directory. Defaults to the current working directory.

    Returns:
        The path the target would occupy.

    Raises:
        TargetExistsError: If a file or directory of that name exists.
    """
    root = Path(base_dir) if base_dir is not None else Path.cwd()
    target = root / name
    if target.is_dir():
        raise TargetExistsError(name, is_dir=True)
    if target.exists() or target.is_symlink():
        raise TargetExistsError(name, is_dir=False)
    return target


def _stored_mode(info: zipfile.ZipInfo, default: int) -> int:
    """Permission bits recorded by a Unix zip producer, else ``default``."""
    mode = stat.S_IMODE(info.external_attr >> 16)
    return mode or default


def _member_path(root: Path, info: zipfile.ZipInfo) -> Path:
    """Resolve a member name against ``root``, refusing paths that escape it."""
    destination = (root / info.filename).resolve()
    resolved_root = root.resolve()
    if destination != resolved_root and resolved_root not in destination.parents:
        raise InvalidArchiveError(
            f"Archive member escapes the target directory: {info.filename}",
            member=info.filename,
        )
    return destination


def _make_dirs(path: Path, mode: int = DEFAULT_DIR_MODE) -> None:
    try:
        path.mkdir(mode=mode, parents=True, exist_ok=True)
    except OSError as exc:
        raise ArchiveFilesystemError(f"Could not create directory {path}: {exc}", path) from exc


def _apply_mode(path: Path, mode: int) -> None:
    # The directory may already exist as the implied parent of an earlier member.
    try:
        os.chmod(path, mode)
    except OSError as exc:
        raise ArchiveFilesystemError(f"Could not set permissions on {path}: {exc}", path) from exc


def _write_member(archive: zipfile.ZipFile, info: zipfile.ZipInfo, destination: Path) -> None:
    _make_dirs(destination.parent)
    mode = _stored_mode(info, DEFAULT_FILE_MODE)

    try:
        fd = os.open(destination, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    except OSError as exc:
        raise ArchiveFilesystemError(
            f"Could not create file {destination}: {exc}", destination
        ) from exc

    with os.fdopen(fd, "wb") as output:
        try:
            with archive.open(info) as source:
                shutil.copyfileobj(source, output, COPY_CHUNK_SIZE)
        except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError) as exc:
            raise InvalidArchiveError(
                f"Could not read archive member {info.filename}: {exc}",
                member=info.filename,
            ) from exc
        except OSError as exc:
            raise ArchiveFilesystemError(
                f"Could not write file {destination}: {exc}", destination
            ) from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_archive(
    data: bytes,
    target: str,
    base_dir: str | Path | None = None,
) -> Path:
    """Unpack a zip payload into a new directory.

    The archive is opened before anything is written, so an invalid payload
    never leaves a directory behind. Directory members are created with
    their stored mode; file members get their ancestors created on demand
    and their content copied byte for byte.

    Args:
        data: Raw zip bytes.
        target: Name of the directory to create.
        base_dir: Parent directory. Defaults to the current working directory.

    Returns:
        Path to the populated target directory.

    Raises:
        InvalidArchiveError: If ``data`` is not a valid zip or a member
            cannot be read.
        TargetExistsError: If ``target`` already exists.
        ArchiveFilesystemError: If any directory or file cannot be created
            or written.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, EOFError) as exc:
        raise InvalidArchiveError(f"Not a valid zip archive: {exc}") from exc

    with archive:
        root = check_target_available(target, base_dir)
        try:
            root.mkdir(mode=DEFAULT_DIR_MODE)
        except FileExistsError as exc:
            raise TargetExistsError(target, is_dir=root.is_dir()) from exc
        except OSError as exc:
            raise ArchiveFilesystemError(f"Could not create directory {root}: {exc}", root) from exc

        for info in archive.infolist():
            destination = _member_path(root, info)
            if info.is_dir():
                mode = _stored_mode(info, DEFAULT_DIR_MODE)
                _make_dirs(destination, mode)
                _apply_mode(destination, mode)
            else:
                _write_member(archive, info, destination)

    return root
