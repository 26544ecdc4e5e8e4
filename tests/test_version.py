"""Tests for the Version type."""

import pytest

from thunderstore_packager.core.errors import VersionParseError
from thunderstore_packager.core.version import MAX_COMPONENT, Version


class TestVersionParse:
    """Test strict MAJOR.MINOR.PATCH parsing."""

    def test_parses_three_components(self) -> None:
        """Test that a well-formed version parses field by field."""
        assert Version.parse("1.2.3") == Version(1, 2, 3)
        assert Version.parse("0.0.0") == Version(0, 0, 0)

    def test_accepts_leading_zeros(self) -> None:
        """Test that leading zeros are allowed and dropped."""
        version = Version.parse("01.002.0003")
        assert version == Version(1, 2, 3)
        assert str(version) == "1.2.3"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "1",
            "1.2",
            "1.2.3.4",
            ".1.2",
            "1.2.",
            "1..2",
            "a.b.c",
            "1.2.x",
            "-1.2.3",
            "+1.2.3",
            " 1.2.3",
            "1.2.3 ",
            "1.2.3\n",
            "1.2.3-beta",
            "１.2.3",
        ],
    )
    def test_rejects_malformed(self, text: str) -> None:
        """Test that anything but three ASCII integers is rejected."""
        with pytest.raises(VersionParseError):
            Version.parse(text)

    def test_rejects_out_of_range_component(self) -> None:
        """Test that components must fit an unsigned 64-bit integer."""
        assert Version.parse(f"{MAX_COMPONENT}.0.0").major == MAX_COMPONENT
        with pytest.raises(VersionParseError, match="64-bit"):
            Version.parse(f"{MAX_COMPONENT + 1}.0.0")

    def test_rejects_non_string(self) -> None:
        """Test that non-string input is a parse error, not a TypeError."""
        with pytest.raises(VersionParseError):
            Version.parse(123)  # type: ignore[arg-type]

    def test_parse_error_is_value_error(self) -> None:
        """Test that parse errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Version.parse("not a version")


class TestVersionConstruction:
    """Test direct construction."""

    def test_rejects_negative_components(self) -> None:
        """Test that negative components are rejected."""
        with pytest.raises(VersionParseError):
            Version(1, -1, 0)

    def test_rejects_non_integer_components(self) -> None:
        """Test that bools and strings are not accepted as components."""
        with pytest.raises(VersionParseError):
            Version(True, 0, 0)  # type: ignore[arg-type]
        with pytest.raises(VersionParseError):
            Version("1", 0, 0)  # type: ignore[arg-type]

    def test_is_immutable(self) -> None:
        """Test that versions cannot be modified after construction."""
        version = Version(1, 2, 3)
        with pytest.raises(AttributeError):
            version.major = 2  # type: ignore[misc]


class TestVersionFormatAndOrder:
    """Test formatting and ordering."""

    @pytest.mark.parametrize("version", [Version(0, 0, 1), Version(10, 20, 30), Version(1, 0, 0)])
    def test_format_parse_roundtrip(self, version: Version) -> None:
        """Test that parsing the canonical form gives back the same version."""
        assert Version.parse(str(version)) == version

    def test_orders_major_first(self) -> None:
        """Test lexicographic ordering on (major, minor, patch)."""
        assert Version(1, 0, 0) > Version(0, 99, 99)
        assert Version(1, 2, 0) > Version(1, 1, 99)
        assert Version(1, 2, 4) > Version(1, 2, 3)
        assert Version(1, 2, 3) <= Version(1, 2, 3)

    def test_sorting(self) -> None:
        """Test that versions sort numerically, not as strings."""
        versions = [Version.parse(v) for v in ["1.10.0", "1.2.0", "0.9.9", "1.2.10"]]
        assert [str(v) for v in sorted(versions)] == ["0.9.9", "1.2.0", "1.2.10", "1.10.0"]

    def test_hashable(self) -> None:
        """Test that equal versions hash equally."""
        assert len({Version(1, 2, 3), Version.parse("1.2.3")}) == 1
