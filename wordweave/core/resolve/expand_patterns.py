from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Protocol

from wordweave.core.errors import ResolveWarning
from wordweave.core.report import NullReporter, Reporter
from wordweave.core.resolve.glob_match import has_wildcard, wildcard_match


@dataclass(frozen=True)
class DirEntry:
    name: str
    path: str
    is_file: bool


class FileSystem(Protocol):
    def is_file(self, path: str) -> bool: ...

    def is_dir(self, path: str) -> bool: ...

    def scan(self, directory: str) -> Iterable[DirEntry]: ...


class LocalFileSystem:
    """Real filesystem. `scan` yields entries in directory order (unsorted)."""

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def scan(self, directory: str) -> Iterator[DirEntry]:
        with os.scandir(directory) as it:
            for entry in it:
                yield DirEntry(
                    name=entry.name,
                    path=os.path.join(directory, entry.name),
                    is_file=entry.is_file(),
                )


def split_pattern(pattern: str) -> tuple[str, str]:
    """Split a glob into (directory, filename pattern). Empty directory -> '.'."""
    directory, name = os.path.split(pattern)
    return (directory or "."), name


def expand_patterns(
    patterns: Iterable[str],
    *,
    fs: Optional[FileSystem] = None,
    reporter: Optional[Reporter] = None,
) -> list[str]:
    """Resolve literal paths and globs into existing regular files.

    Order follows the input patterns, then directory order inside one glob.
    Missing files and unreadable directories are reported as warnings and
    skipped; this function does not raise for them. An empty result is for
    the caller to treat as fatal.
    """

    fs = fs or LocalFileSystem()
    reporter = reporter or NullReporter()
    resolved: list[str] = []

    for pattern in patterns:
        if not has_wildcard(pattern):
            if fs.is_file(pattern):
                resolved.append(pattern)
            else:
                reporter.warning(
                    ResolveWarning(
                        code="W_FILE_NOT_FOUND",
                        message="file not found or not a regular file",
                        file=pattern,
                    )
                )
            continue

        resolved.extend(_expand_glob(pattern, fs, reporter))

    return resolved


def _expand_glob(pattern: str, fs: FileSystem, reporter: Reporter) -> list[str]:
    directory, name_pattern = split_pattern(pattern)

    if not fs.is_dir(directory):
        reporter.warning(
            ResolveWarning(
                code="W_DIR_NOT_FOUND",
                message=f"directory not found for pattern: {directory}",
                file=pattern,
            )
        )
        return []

    matches: list[str] = []
    try:
        for entry in fs.scan(directory):
            if entry.is_file and wildcard_match(entry.name, name_pattern):
                matches.append(entry.path)
    except OSError as e:
        # Whatever was matched before the failure is kept.
        reporter.warning(
            ResolveWarning(
                code="W_DIR_READ",
                message=f"error reading directory {directory}: {e}",
                file=pattern,
            )
        )
        return matches

    if not matches:
        reporter.warning(
            ResolveWarning(
                code="W_NO_MATCH",
                message="pattern matched no files",
                file=pattern,
            )
        )
    return matches
