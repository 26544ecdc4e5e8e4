"""Error types raised by the packager.

Every failure surfaced by the library derives from PackagerError so callers
(the CLI in particular) can handle the whole family with a single except
clause. Filesystem failures are always wrapped with the offending path.
"""

from pathlib import Path


class PackagerError(Exception):
    """Base class for all packager errors."""


# Configuration path errors


class ProjectDirIsFileError(PackagerError):
    """The project directory path is occupied by a file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"The path at {self.path} is actually a file.")


class ProjectAlreadyExistsError(PackagerError):
    """A project manifest already exists and overwrite was not requested."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"A project configuration already exists at {self.path}.")


class NoProjectFileError(PackagerError):
    """No project manifest file exists at the given path."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"No project exists at the path {self.path}.")


class PathIsDirectoryError(PackagerError):
    """A path that must name a file names a directory instead."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"The path {self.path} represents a directory.")


# I/O


class FileIoError(PackagerError):
    """A filesystem operation failed on a specific path."""

    def __init__(self, path: Path, error: OSError | UnicodeError) -> None:
        self.path = Path(path)
        self.error = error
        super().__init__(f"A file IO error occurred at path {self.path}: {error}")


# Structural errors


class ManifestDeserializeError(PackagerError):
    """The project manifest does not match the expected schema."""


class MissingManifestFieldError(PackagerError):
    """A required manifest field or section is absent."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing manifest field: {field}")


class ManifestFieldError(PackagerError):
    """A manifest field holds a malformed value."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid manifest field {field}: {reason}")


# Identity / version errors


class VersionParseError(PackagerError, ValueError):
    """A version string is not of the form MAJOR.MINOR.PATCH."""

    def __init__(self, text: str, reason: str = "expected MAJOR.MINOR.PATCH") -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid version {text!r}: {reason}")


class PackageReferenceValidationError(PackagerError, ValueError):
    """A namespace or name is not usable in a package reference."""


class PackageReferenceParseError(PackagerError, ValueError):
    """A package reference string could not be parsed."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid package reference {text!r}: {reason}")


class ReferenceSegmentCountError(PackageReferenceParseError):
    """The reference does not split into namespace, name and version."""

    def __init__(self, text: str, count: int) -> None:
        self.count = count
        super().__init__(text, f"expected 3 '-' separated segments, found {count}")


class ReferenceVersionError(PackageReferenceParseError):
    """The version segment of a reference is not a valid version."""

    def __init__(self, text: str, version_text: str) -> None:
        self.version_text = version_text
        super().__init__(text, f"invalid version segment {version_text!r}")


# Archive errors


class ArchiveError(PackagerError):
    """The zip writer failed or an entry could not be added."""


class DuplicateEntryError(ArchiveError):
    """An archive entry name was written twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate archive entry: {name}")
