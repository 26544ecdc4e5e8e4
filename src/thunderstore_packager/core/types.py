"""Type definitions for the serialized manifest shapes.

This module defines TypedDict classes that mirror the JSON schemas in
schemas/project.schema.json and schemas/package_manifest_v1.schema.json.
"""

from typing import TypedDict


class PackageReferenceTable(TypedDict):
    """A dependency entry in the project manifest (table form)."""

    namespace: str
    name: str
    versionNumber: str  # MAJOR.MINOR.PATCH


class CopyPathTable(TypedDict):
    """A copy instruction in the project manifest."""

    source: str  # Path relative to the project directory
    target: str  # Path inside the archive ("" is the archive root)


class RegistryManifest(TypedDict):
    """The manifest.json payload embedded in every built package."""

    name: str
    description: str
    version_number: str
    dependencies: list[str]  # Canonical Namespace-Name-Version strings
    website_url: str
