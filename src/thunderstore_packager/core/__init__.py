"""Core identity model and manifest utilities.

This package contains the version and package reference types, the error
taxonomy, the serialized manifest shapes and schema validation. Everything
else in the packager builds on these.
"""

from .errors import PackagerError
from .package_reference import (
    PackageReference,
    from_string_array,
    from_table,
    to_string_array,
    to_table,
)
from .types import PackageReferenceTable, RegistryManifest
from .validator import validate_package_manifest, validate_project_data
from .version import Version

__all__ = [
    "PackagerError",
    "PackageReference",
    "PackageReferenceTable",
    "RegistryManifest",
    "Version",
    "from_string_array",
    "from_table",
    "to_string_array",
    "to_table",
    "validate_package_manifest",
    "validate_project_data",
]
