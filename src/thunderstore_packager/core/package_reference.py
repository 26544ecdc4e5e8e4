"""Package references and their two serialized forms.

A package reference identifies one release of a package by namespace, name
and version. Its canonical string form is ``Namespace-Name-1.2.3``.

Lists of references are serialized two ways:

- table form: one ``{namespace, name, versionNumber}`` record per reference,
  used for the dependency lists of the project manifest
- string-array form: one canonical string per reference, used by the
  registry manifest (manifest.json)
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .errors import (
    ManifestFieldError,
    PackageReferenceParseError,
    PackageReferenceValidationError,
    ReferenceSegmentCountError,
    ReferenceVersionError,
    VersionParseError,
)
from .types import PackageReferenceTable
from .version import Version

DELIMITER = "-"

# Characters that would make the canonical string ambiguous or unusable as
# an archive file name
FORBIDDEN_CHARS = (DELIMITER, "/", "\\")

TABLE_KEYS = frozenset({"namespace", "name", "versionNumber"})


def validate_identifier(label: str, value: Any) -> None:
    """Check a namespace or name against the canonical reference rules."""
    if not isinstance(value, str):
        raise PackageReferenceValidationError(f"Package {label} must be a string, got {value!r}")
    if not value:
        raise PackageReferenceValidationError(f"Package {label} must not be empty")
    for char in FORBIDDEN_CHARS:
        if char in value:
            raise PackageReferenceValidationError(
                f"Package {label} {value!r} must not contain {char!r}"
            )


@dataclass(frozen=True, order=True)
class PackageReference:
    """A (namespace, name, version) triple.

    Equality and ordering compare namespace, then name, then version.

    Example:
        >>> ref = PackageReference.parse("bbepis-BepInExPack-5.4.2100")
        >>> ref.name
        'BepInExPack'
        >>> str(ref)
        'bbepis-BepInExPack-5.4.2100'
    """

    namespace: str
    name: str
    version: Version

    def __post_init__(self) -> None:
        validate_identifier("namespace", self.namespace)
        validate_identifier("name", self.name)
        if not isinstance(self.version, Version):
            raise PackageReferenceValidationError(
                f"Package version must be a Version, got {self.version!r}"
            )

    @classmethod
    def parse(cls, text: str) -> "PackageReference":
        """Parse a canonical ``Namespace-Name-Version`` string.

        Args:
            text: The canonical reference string

        Returns:
            The parsed PackageReference

        Raises:
            ReferenceSegmentCountError: If the text does not have exactly
                three '-' separated segments
            ReferenceVersionError: If the version segment is invalid
            PackageReferenceValidationError: If namespace or name is empty
        """
        if not isinstance(text, str):
            raise PackageReferenceParseError(repr(text), "expected a string")

        segments = text.split(DELIMITER)
        if len(segments) != 3:
            raise ReferenceSegmentCountError(text, len(segments))

        namespace, name, version_text = segments
        try:
            version = Version.parse(version_text)
        except VersionParseError as e:
            raise ReferenceVersionError(text, version_text) from e

        return cls(namespace, name, version)

    def to_canonical_string(self) -> str:
        return f"{self.namespace}{DELIMITER}{self.name}{DELIMITER}{self.version}"

    def __str__(self) -> str:
        return self.to_canonical_string()


# Table form


def to_table(references: Iterable[PackageReference]) -> list[PackageReferenceTable]:
    """Encode references as ``{namespace, name, versionNumber}`` records."""
    return [
        PackageReferenceTable(
            namespace=ref.namespace,
            name=ref.name,
            versionNumber=str(ref.version),
        )
        for ref in references
    ]


def from_table(entries: Any, field: str = "dependencies") -> list[PackageReference]:
    """Decode a list of table-form records.

    Args:
        entries: The deserialized list (usually straight from TOML)
        field: Manifest field name used in error messages

    Returns:
        References in the same order as the entries

    Raises:
        ManifestFieldError: If the value is not a list, or an entry is not a
            well-formed record with a valid versionNumber
    """
    if not isinstance(entries, list):
        raise ManifestFieldError(field, "expected an array of tables")

    references = []
    for index, entry in enumerate(entries):
        location = f"{field}[{index}]"
        if not isinstance(entry, dict):
            raise ManifestFieldError(location, "expected a table")

        missing = sorted(TABLE_KEYS - entry.keys())
        if missing:
            raise ManifestFieldError(location, f"missing key(s): {', '.join(missing)}")
        unknown = sorted(entry.keys() - TABLE_KEYS)
        if unknown:
            raise ManifestFieldError(location, f"unknown key(s): {', '.join(unknown)}")

        version_text = entry["versionNumber"]
        if not isinstance(version_text, str):
            raise ManifestFieldError(location, "versionNumber must be a string")

        try:
            references.append(
                PackageReference(entry["namespace"], entry["name"], Version.parse(version_text))
            )
        except (PackageReferenceValidationError, VersionParseError) as e:
            raise ManifestFieldError(location, str(e)) from e

    return references


# String-array form


def to_string_array(references: Iterable[PackageReference]) -> list[str]:
    """Encode references as canonical strings."""
    return [ref.to_canonical_string() for ref in references]


def from_string_array(entries: Any, field: str = "dependencies") -> list[PackageReference]:
    """Decode a list of canonical reference strings.

    Raises:
        ManifestFieldError: If the value is not a list of valid references
    """
    if not isinstance(entries, list):
        raise ManifestFieldError(field, "expected an array of strings")

    references = []
    for index, entry in enumerate(entries):
        try:
            references.append(PackageReference.parse(entry))
        except (PackageReferenceParseError, PackageReferenceValidationError) as e:
            raise ManifestFieldError(f"{field}[{index}]", str(e)) from e

    return references
