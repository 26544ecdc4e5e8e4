"""Three-component semantic versions.

Versions are written as ``MAJOR.MINOR.PATCH`` everywhere: in the project
manifest, in package references and in the registry manifest.
"""

import re
from dataclasses import dataclass

from .errors import VersionParseError

# Components are stored as unsigned 64-bit integers by the registry
MAX_COMPONENT = 2**64 - 1

VERSION_PATTERN = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")


@dataclass(frozen=True, order=True)
class Version:
    """Immutable ``major.minor.patch`` version, ordered field-wise."""

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for component in (self.major, self.minor, self.patch):
            if isinstance(component, bool) or not isinstance(component, int):
                raise VersionParseError(repr(component), "components must be integers")
            if not 0 <= component <= MAX_COMPONENT:
                raise VersionParseError(
                    str(component), "components must fit an unsigned 64-bit integer"
                )

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse a version string.

        Args:
            text: String of the form ``MAJOR.MINOR.PATCH``. Leading zeros are
                accepted, anything else (signs, whitespace, extra components)
                is not.

        Returns:
            The parsed Version

        Raises:
            VersionParseError: If the string is not a valid version
        """
        if not isinstance(text, str):
            raise VersionParseError(repr(text), "expected a string")

        match = VERSION_PATTERN.fullmatch(text)
        if match is None:
            raise VersionParseError(text)

        major, minor, patch = (int(group) for group in match.groups())
        if max(major, minor, patch) > MAX_COMPONENT:
            raise VersionParseError(text, "components must fit an unsigned 64-bit integer")

        return cls(major, minor, patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"
