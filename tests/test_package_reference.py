"""Tests for package references and their serialized forms."""

import pytest

from thunderstore_packager.core.errors import (
    ManifestFieldError,
    PackageReferenceParseError,
    PackageReferenceValidationError,
    ReferenceSegmentCountError,
    ReferenceVersionError,
    VersionParseError,
)
from thunderstore_packager.core.package_reference import (
    PackageReference,
    from_string_array,
    from_table,
    to_string_array,
    to_table,
)
from thunderstore_packager.core.version import Version


@pytest.fixture
def references() -> list[PackageReference]:
    """A small ordered dependency list."""
    return [
        PackageReference("bbepis", "BepInExPack", Version(5, 4, 2100)),
        PackageReference("RiskofThunder", "HookGenPatcher", Version(1, 2, 3)),
        PackageReference("tristanmcpherson", "R2API", Version(4, 4, 1)),
    ]


class TestPackageReferenceConstruction:
    """Test namespace/name validation."""

    def test_valid_reference(self) -> None:
        """Test that plain identifiers are accepted."""
        ref = PackageReference("Acme", "Widget", Version(1, 2, 3))
        assert ref.namespace == "Acme"
        assert ref.name == "Widget"
        assert ref.version == Version(1, 2, 3)

    @pytest.mark.parametrize(
        "namespace,name",
        [
            ("", "Widget"),
            ("Acme", ""),
            ("Ac-me", "Widget"),
            ("Acme", "Wid-get"),
            ("Acme/Evil", "Widget"),
            ("Acme", "Wid\\get"),
        ],
    )
    def test_rejects_invalid_parts(self, namespace: str, name: str) -> None:
        """Test that empty or delimiter-containing parts are rejected."""
        with pytest.raises(PackageReferenceValidationError):
            PackageReference(namespace, name, Version(1, 0, 0))

    def test_rejects_non_version(self) -> None:
        """Test that the version must be a Version instance."""
        with pytest.raises(PackageReferenceValidationError):
            PackageReference("Acme", "Widget", "1.0.0")  # type: ignore[arg-type]


class TestPackageReferenceParse:
    """Test parsing of the canonical string form."""

    def test_parses_canonical_string(self) -> None:
        """Test a well-formed reference."""
        ref = PackageReference.parse("Acme-Widget-1.2.3")
        assert ref == PackageReference("Acme", "Widget", Version(1, 2, 3))

    @pytest.mark.parametrize("text,count", [("Acme-Widget", 2), ("A-B-C-1.0.0", 4), ("", 1)])
    def test_wrong_segment_count(self, text: str, count: int) -> None:
        """Test that the segment count error reports how many were found."""
        with pytest.raises(ReferenceSegmentCountError) as exc_info:
            PackageReference.parse(text)
        assert exc_info.value.count == count

    def test_invalid_version_segment(self) -> None:
        """Test that a bad version is reported separately from segment count."""
        with pytest.raises(ReferenceVersionError) as exc_info:
            PackageReference.parse("Acme-Widget-1.2")
        assert exc_info.value.version_text == "1.2"
        assert isinstance(exc_info.value.__cause__, VersionParseError)

    def test_both_parse_errors_share_base(self) -> None:
        """Test that callers can catch every parse failure at once."""
        for text in ("Acme-Widget", "Acme-Widget-x.y.z"):
            with pytest.raises(PackageReferenceParseError):
                PackageReference.parse(text)

    def test_empty_segment_is_validation_error(self) -> None:
        """Test that an empty namespace fails construction validation."""
        with pytest.raises(PackageReferenceValidationError):
            PackageReference.parse("-Widget-1.0.0")

    def test_canonical_roundtrip(self, references: list[PackageReference]) -> None:
        """Test that parse is the inverse of the canonical string."""
        for ref in references:
            assert PackageReference.parse(ref.to_canonical_string()) == ref
            assert str(ref) == ref.to_canonical_string()


class TestPackageReferenceOrdering:
    """Test field-wise comparison."""

    def test_orders_by_namespace_name_version(self) -> None:
        """Test that namespace wins over name, and name over version."""
        a = PackageReference("A", "Z", Version(9, 9, 9))
        b = PackageReference("B", "A", Version(0, 0, 1))
        c = PackageReference("B", "B", Version(0, 0, 1))
        d = PackageReference("B", "B", Version(0, 1, 0))
        assert sorted([d, c, b, a]) == [a, b, c, d]

    def test_equality_and_hash(self) -> None:
        """Test that equal references are interchangeable in sets."""
        refs = {PackageReference.parse("A-B-1.0.0"), PackageReference("A", "B", Version(1, 0, 0))}
        assert len(refs) == 1


class TestTableForm:
    """Test the table (record) serialization."""

    def test_encodes_records(self) -> None:
        """Test the record shape used in thunderstore.toml."""
        ref = PackageReference("A", "B", Version(1, 0, 0))
        assert to_table([ref]) == [{"namespace": "A", "name": "B", "versionNumber": "1.0.0"}]

    def test_roundtrip_preserves_order(self, references: list[PackageReference]) -> None:
        """Test that decoding the encoded list gives back the same ordered list."""
        assert from_table(to_table(references)) == references

    def test_empty_list(self) -> None:
        """Test that an empty list is valid."""
        assert from_table([]) == []

    def test_rejects_non_list(self) -> None:
        """Test that a single table is not accepted in place of a list."""
        with pytest.raises(ManifestFieldError, match="dependencies"):
            from_table({"namespace": "A", "name": "B", "versionNumber": "1.0.0"})

    def test_rejects_missing_key(self) -> None:
        """Test that the entry index and missing key are reported."""
        entries = [
            {"namespace": "A", "name": "B", "versionNumber": "1.0.0"},
            {"namespace": "A", "name": "C"},
        ]
        with pytest.raises(ManifestFieldError) as exc_info:
            from_table(entries, "dev-dependencies")
        assert exc_info.value.field == "dev-dependencies[1]"
        assert "versionNumber" in exc_info.value.reason

    def test_rejects_unknown_key(self) -> None:
        """Test that unexpected keys are not silently dropped."""
        with pytest.raises(ManifestFieldError, match="unknown"):
            from_table([{"namespace": "A", "name": "B", "versionNumber": "1.0.0", "x": 1}])

    def test_rejects_bad_version(self) -> None:
        """Test that a malformed version is a field error caused by the parse error."""
        with pytest.raises(ManifestFieldError) as exc_info:
            from_table([{"namespace": "A", "name": "B", "versionNumber": "1.0"}])
        assert isinstance(exc_info.value.__cause__, VersionParseError)

    def test_rejects_bad_identity(self) -> None:
        """Test that an invalid namespace is a field error."""
        with pytest.raises(ManifestFieldError):
            from_table([{"namespace": "A-A", "name": "B", "versionNumber": "1.0.0"}])

    def test_rejects_non_table_entry(self) -> None:
        """Test that a string entry is rejected in table form."""
        with pytest.raises(ManifestFieldError, match="expected a table"):
            from_table(["A-B-1.0.0"])


class TestStringArrayForm:
    """Test the compact string-array serialization."""

    def test_encodes_strings(self, references: list[PackageReference]) -> None:
        """Test that each reference becomes its canonical string."""
        assert to_string_array(references) == [
            "bbepis-BepInExPack-5.4.2100",
            "RiskofThunder-HookGenPatcher-1.2.3",
            "tristanmcpherson-R2API-4.4.1",
        ]

    def test_roundtrip_preserves_order(self, references: list[PackageReference]) -> None:
        """Test that decoding the encoded list gives back the same ordered list."""
        assert from_string_array(to_string_array(references)) == references

    def test_both_forms_agree(self, references: list[PackageReference]) -> None:
        """Test that both forms decode to the identical list."""
        assert from_table(to_table(references)) == from_string_array(
            to_string_array(references)
        )

    def test_rejects_malformed_entry(self) -> None:
        """Test that the offending index is reported."""
        with pytest.raises(ManifestFieldError) as exc_info:
            from_string_array(["A-B-1.0.0", "A-B"])
        assert exc_info.value.field == "dependencies[1]"
        assert isinstance(exc_info.value.__cause__, ReferenceSegmentCountError)

    def test_rejects_non_string_entry(self) -> None:
        """Test that table entries are rejected in string-array form."""
        with pytest.raises(ManifestFieldError):
            from_string_array([{"namespace": "A", "name": "B", "versionNumber": "1.0.0"}])
