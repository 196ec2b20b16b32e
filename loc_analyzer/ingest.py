"""Input collection: turn files, directory trees and archives into text units.

Everything here sits in front of the classifier: it reads bytes, decodes them
and hands ``SourceUnit`` values on. A unit that cannot be read or decoded is
reported as an ``IngestFailure`` and does not stop the rest of the input.
"""

from __future__ import annotations

import os
import tarfile
import zipfile
import zlib
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

import structlog

from loc_analyzer.core.config import DEFAULT_SKIP_DIRS
from loc_analyzer.exceptions import (
    ArchiveError,
    DecodeFailedError,
    FileReadError,
    IngestError,
)
from loc_analyzer.languages import is_known

log = structlog.get_logger("loc_analyzer.ingest")

_TAR_SUFFIXES = (".tar", ".tar.gz", ".tgz", ".tar.bz2", ".tbz2", ".tar.xz", ".txz")
_ZIP_SUFFIXES = (".zip",)


@dataclass(frozen=True)
class SourceUnit:
    """A named piece of decoded source text."""

    name: str
    content: str


@dataclass(frozen=True)
class IngestFailure:
    """A unit that was skipped, with the reason."""

    name: str
    reason: str


@dataclass
class IngestResult:
    units: list[SourceUnit]
    failures: list[IngestFailure]

    def extend(self, other: IngestResult) -> None:
        self.units.extend(other.units)
        self.failures.extend(other.failures)


def decode(name: str, data: bytes) -> str:
    """Decode *data* as UTF-8, dropping a leading BOM."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DecodeFailedError(name, f"not valid UTF-8 ({e.reason} at byte {e.start})") from e


def read_file(path: Path, name: str | None = None) -> SourceUnit:
    """Read one file from disk into a :class:`SourceUnit`."""
    label = name if name is not None else str(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileReadError(label, e.strerror or str(e)) from e
    return SourceUnit(name=label, content=decode(label, data))


def is_archive(path: Path) -> bool:
    lowered = path.name.lower()
    return lowered.endswith(_ZIP_SUFFIXES) or lowered.endswith(_TAR_SUFFIXES)


def _read_into(result: IngestResult, path: Path, name: str) -> None:
    try:
        result.units.append(read_file(path, name))
    except IngestError as e:
        log.warning("ingest.read_failed", name=e.name, reason=e.reason)
        result.failures.append(IngestFailure(e.name, e.reason))


def walk_directory(
    root: Path,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
    include_unknown: bool = False,
) -> IngestResult:
    """Collect source files under *root*.

    Names are relative to *root* with ``/`` separators. Traversal is sorted so
    the unit order is stable across runs.
    """
    skip = set(skip_dirs)
    result = IngestResult(units=[], failures=[])
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for filename in sorted(filenames):
            if not include_unknown and not is_known(filename):
                continue
            full = Path(dirpath) / filename
            rel = full.relative_to(root).as_posix()
            _read_into(result, full, rel)
    log.debug("ingest.walked", root=str(root), units=len(result.units), failures=len(result.failures))
    return result


_ZIP_MEMBER_ERRORS = (zipfile.BadZipFile, RuntimeError, NotImplementedError, OSError, EOFError, zlib.error)
_TAR_MEMBER_ERRORS = (tarfile.TarError, OSError, EOFError, zlib.error)


def _add_member(
    result: IngestResult,
    name: str,
    read: Callable[[], bytes | None],
    errors: tuple[type[BaseException], ...],
) -> None:
    """Read and decode one archive member; a failure only skips that member."""
    try:
        data = read()
    except errors as e:
        log.warning("ingest.member_failed", name=name, reason=str(e))
        result.failures.append(IngestFailure(name, f"cannot read archive member: {e}"))
        return
    if data is None:
        return
    try:
        content = decode(name, data)
    except DecodeFailedError as e:
        log.warning("ingest.decode_failed", name=e.name, reason=e.reason)
        result.failures.append(IngestFailure(e.name, e.reason))
        return
    result.units.append(SourceUnit(name=name, content=content))


def _read_tar_member(tf: tarfile.TarFile, member: tarfile.TarInfo) -> bytes | None:
    fh = tf.extractfile(member)
    if fh is None:
        return None
    with fh:
        return fh.read()


def _zip_members(path: Path, include_unknown: bool) -> IngestResult:
    result = IngestResult(units=[], failures=[])
    try:
        zf = zipfile.ZipFile(path)
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveError(str(path), f"cannot read zip archive: {e}") from e
    with zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            if not include_unknown and not is_known(info.filename):
                continue
            _add_member(
                result,
                f"{path.name}!{info.filename}",
                lambda info=info: zf.read(info),
                _ZIP_MEMBER_ERRORS,
            )
    return result


def _tar_members(path: Path, include_unknown: bool) -> IngestResult:
    result = IngestResult(units=[], failures=[])
    try:
        tf = tarfile.open(path)
    except (tarfile.TarError, OSError, EOFError, zlib.error) as e:
        raise ArchiveError(str(path), f"cannot read tar archive: {e}") from e
    with tf:
        try:
            for member in tf:
                if not member.isfile():
                    continue
                if not include_unknown and not is_known(member.name):
                    continue
                _add_member(
                    result,
                    f"{path.name}!{member.name}",
                    lambda member=member: _read_tar_member(tf, member),
                    _TAR_MEMBER_ERRORS,
                )
        except _TAR_MEMBER_ERRORS as e:
            # Truncated stream: keep the members read so far.
            log.warning("ingest.archive_truncated", name=str(path), reason=str(e))
            result.failures.append(IngestFailure(str(path), f"archive truncated: {e}"))
    return result


def read_archive(path: Path, include_unknown: bool = False) -> IngestResult:
    """Read every regular file member of a zip or tar archive.

    Member names are reported as ``<archive>!<member>``. Raises
    :class:`ArchiveError` when the archive itself is unreadable.
    """
    lowered = path.name.lower()
    if lowered.endswith(_ZIP_SUFFIXES):
        result = _zip_members(path, include_unknown)
    elif lowered.endswith(_TAR_SUFFIXES):
        result = _tar_members(path, include_unknown)
    else:
        raise ArchiveError(str(path), "unsupported archive type")
    log.debug("ingest.archive_read", archive=str(path), units=len(result.units))
    return result


def collect(
    paths: Iterable[Path],
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
    include_unknown: bool = False,
) -> IngestResult:
    """Dispatch each path to the file, directory or archive reader.

    Explicitly named files are always read, whatever their extension.
    """
    skip = frozenset(skip_dirs)
    result = IngestResult(units=[], failures=[])
    for path in paths:
        if path.is_dir():
            result.extend(walk_directory(path, skip, include_unknown))
        elif is_archive(path):
            try:
                result.extend(read_archive(path, include_unknown))
            except ArchiveError as e:
                log.warning("ingest.archive_failed", name=e.name, reason=e.reason)
                result.failures.append(IngestFailure(e.name, e.reason))
        elif path.exists():
            _read_into(result, path, str(path))
        else:
            log.warning("ingest.missing", name=str(path))
            result.failures.append(IngestFailure(str(path), "no such file or directory"))
    return result
