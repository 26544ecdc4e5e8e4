"""Source tree traversal for copy instructions.

This module walks the source of a copy instruction and maps every visited
entry to its name inside the package archive.
"""

import stat
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .core.errors import ArchiveError, FileIoError


@dataclass(frozen=True)
class SourceEntry:
    """A file or directory visited while walking a copy source."""

    path: Path  # Path on disk
    relative_path: PurePosixPath  # Path relative to the walk root ("." for the root)
    is_dir: bool


def _is_directory(path: Path) -> bool:
    try:
        mode = path.stat().st_mode
    except OSError as e:
        raise FileIoError(path, e) from e

    if stat.S_ISDIR(mode):
        return True
    if stat.S_ISREG(mode):
        return False
    raise FileIoError(path, OSError("not a regular file or directory"))


def _walk(path: Path, relative_path: PurePosixPath) -> Iterator[SourceEntry]:
    is_dir = _is_directory(path)
    yield SourceEntry(path=path, relative_path=relative_path, is_dir=is_dir)

    if not is_dir:
        return

    try:
        children = sorted(path.iterdir(), key=lambda child: child.name)
    except OSError as e:
        raise FileIoError(path, e) from e

    for child in children:
        yield from _walk(child, relative_path / child.name)


def walk_source(root: Path) -> Iterator[SourceEntry]:
    """Walk a copy source depth-first in lexical order.

    The root itself is always yielded first, even when it is a single file.
    A directory is yielded before any of its contents.

    Example:
        dist/
          a.dll
          lang/en.txt
        -> ".", "a.dll", "lang", "lang/en.txt"

    Args:
        root: File or directory to walk

    Yields:
        SourceEntry for every visited path

    Raises:
        FileIoError: If the root is missing or any entry cannot be read
    """
    yield from _walk(root, PurePosixPath())


def archive_name(target: str, relative_path: PurePosixPath) -> str:
    """Map a walked entry to its archive entry name.

    Example:
        archive_name("BepInEx/plugins", PurePosixPath("lang/en.txt"))
        -> "BepInEx/plugins/lang/en.txt"

    Args:
        target: Target path of the copy instruction ("" is the archive root)
        relative_path: Entry path relative to the copy source

    Returns:
        Forward-slash separated name, "" for the archive root

    Raises:
        ArchiveError: If the name would escape the archive root
    """
    parts = [part for part in target.replace("\\", "/").split("/") if part not in ("", ".")]
    parts.extend(relative_path.parts)

    if ".." in parts:
        raise ArchiveError(f"Archive path {'/'.join(parts)!r} escapes the archive root")

    return "/".join(parts)
