"""Zip archive writer for package builds.

Entries are written in call order with fixed timestamps and permissions, so
identical inputs produce identical archives.
"""

import zipfile
from pathlib import Path

from .core.errors import ArchiveError, DuplicateEntryError, FileIoError

# Earliest timestamp the zip format can represent
FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)

FILE_MODE = 0o100644
DIRECTORY_MODE = 0o040755
MSDOS_DIRECTORY_FLAG = 0x10

# Errors the zipfile module raises while writing
ZIP_WRITE_ERRORS = (OSError, ValueError, zipfile.BadZipFile, zipfile.LargeZipFile)


class PackageArchive:
    """Write-only zip archive that rejects duplicate file entries.

    Directory entries are recorded once; requesting an existing directory
    again is a no-op. The archive root ("") never gets an entry.

    Example:
        >>> with PackageArchive(Path("build/Acme-Widget-1.2.3.zip")) as archive:
        ...     archive.add_directory("BepInEx")
        ...     archive.add_file("BepInEx/Widget.dll", data)
    """

    def __init__(self, path: Path, compression: int = zipfile.ZIP_DEFLATED):
        """Create (or truncate) the archive file.

        Args:
            path: Output path of the zip file
            compression: zipfile compression method

        Raises:
            FileIoError: If the file cannot be opened for writing
        """
        self.path = Path(path)
        self._names: set[str] = set()
        try:
            self._zip = zipfile.ZipFile(self.path, "w", compression=compression)
        except OSError as e:
            raise FileIoError(self.path, e) from e

    def _entry_info(self, name: str, mode: int) -> zipfile.ZipInfo:
        info = zipfile.ZipInfo(name, date_time=FIXED_DATE_TIME)
        info.compress_type = self._zip.compression
        info.external_attr = mode << 16
        return info

    def add_directory(self, name: str) -> None:
        """Add a directory entry (a trailing '/' is appended)."""
        name = name.rstrip("/")
        if not name:
            return

        entry_name = f"{name}/"
        if entry_name in self._names:
            return
        if name in self._names:
            raise DuplicateEntryError(entry_name)

        info = self._entry_info(entry_name, DIRECTORY_MODE)
        info.external_attr |= MSDOS_DIRECTORY_FLAG
        info.compress_type = zipfile.ZIP_STORED
        self._write(info, b"")

    def add_file(self, name: str, data: bytes) -> None:
        """Add a file entry with the given contents.

        Raises:
            DuplicateEntryError: If an entry with this name already exists
            ArchiveError: If the zip writer fails
        """
        if not name or name.endswith("/"):
            raise ArchiveError(f"Invalid archive file name: {name!r}")
        if name in self._names or f"{name}/" in self._names:
            raise DuplicateEntryError(name)

        self._write(self._entry_info(name, FILE_MODE), data)

    def _write(self, info: zipfile.ZipInfo, data: bytes) -> None:
        try:
            self._zip.writestr(info, data)
        except ZIP_WRITE_ERRORS as e:
            raise ArchiveError(f"Failed writing {info.filename} to {self.path}: {e}") from e
        self._names.add(info.filename)

    def close(self) -> None:
        """Write the central directory and close the file.

        Raises:
            ArchiveError: If finalizing the archive fails
        """
        try:
            self._zip.close()
        except ZIP_WRITE_ERRORS as e:
            raise ArchiveError(f"Failed finalizing {self.path}: {e}") from e

    def __enter__(self) -> "PackageArchive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            # Leave the partial archive in place for inspection
            try:
                self._zip.close()
            except ZIP_WRITE_ERRORS:
                pass
