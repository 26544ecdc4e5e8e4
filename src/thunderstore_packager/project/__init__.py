"""Project manifest handling and scaffolding."""

from .manifest import (
    DEFAULT_CONFIG_FILENAME,
    BuildData,
    ConfigData,
    CopyPath,
    DependencyData,
    ManifestOverrides,
    PackageData,
    ProjectManifest,
    PublishData,
    apply_overrides,
)
from .scaffold import create_new

__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "BuildData",
    "ConfigData",
    "CopyPath",
    "DependencyData",
    "ManifestOverrides",
    "PackageData",
    "ProjectManifest",
    "PublishData",
    "apply_overrides",
    "create_new",
]
