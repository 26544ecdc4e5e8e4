"""Thunderstore Packager.

This package builds Thunderstore mod packages: it reads a project manifest
(thunderstore.toml), copies the configured files into a zip archive and
embeds the registry manifest, icon and README the registry expects.
"""

# Core library interface
from .pipeline import BuildPipeline, build
from .project import (
    ManifestOverrides,
    ProjectManifest,
    apply_overrides,
    create_new,
)
from .package_manifest import PackageManifestV1

# Identity model
from .core import PackageReference, PackagerError, Version

# CLI
from .cli import main

__version__ = "0.1.0"

__all__ = [
    # Primary library interface
    "BuildPipeline",
    "build",
    "create_new",
    "ManifestOverrides",
    "ProjectManifest",
    "apply_overrides",
    "PackageManifestV1",
    # Identity model
    "PackageReference",
    "PackagerError",
    "Version",
    # CLI
    "main",
]
