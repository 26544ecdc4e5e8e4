"""Project scaffolding.

Creates a new mod project: a default thunderstore.toml, a placeholder
icon.png and a README.md generated from a template.
"""

from pathlib import Path

from ..core.errors import (
    FileIoError,
    PathIsDirectoryError,
    ProjectAlreadyExistsError,
    ProjectDirIsFileError,
)
from .manifest import ManifestOverrides, PackageData, ProjectManifest, apply_overrides

# src/thunderstore_packager/project/scaffold.py -> src/thunderstore_packager/resources/
RESOURCE_DIR = Path(__file__).parent.parent / "resources"
ICON_RESOURCE = RESOURCE_DIR / "icon.png"
README_TEMPLATE = RESOURCE_DIR / "readme_template.md"

ICON_FILENAME = "icon.png"
README_FILENAME = "README.md"


def render_readme(package: PackageData) -> str:
    """Fill the README template with the package identity."""
    template = README_TEMPLATE.read_text(encoding="utf-8")
    return template.format(
        namespace=package.namespace,
        name=package.name,
        version=package.version,
        description=package.description,
    )


def _write_manifest(manifest_path: Path, manifest: ProjectManifest, overwrite: bool) -> None:
    mode = "w" if overwrite else "x"
    try:
        with manifest_path.open(mode, encoding="utf-8") as f:
            f.write(manifest.to_toml())
    except FileExistsError as e:
        raise ProjectAlreadyExistsError(manifest_path) from e
    except OSError as e:
        raise FileIoError(manifest_path, e) from e


def create_new(
    config_path: Path,
    overwrite: bool = False,
    overrides: ManifestOverrides | None = None,
) -> ProjectManifest:
    """Create a new project at the directory containing config_path.

    Args:
        config_path: Path of the manifest to create (e.g. mymod/thunderstore.toml)
        overwrite: Replace an existing manifest instead of failing
        overrides: Optional namespace/name/version for the new package

    Returns:
        The manifest that was written

    Raises:
        PathIsDirectoryError: If config_path has no file name component or
            names an existing directory
        ProjectDirIsFileError: If the project directory path is a file
        ProjectAlreadyExistsError: If the manifest exists and overwrite is False
        PackageReferenceValidationError: If an override namespace or name is invalid
        FileIoError: If any file or directory cannot be written
    """
    config_path = Path(config_path)
    if not config_path.name or config_path.is_dir():
        raise PathIsDirectoryError(config_path)

    project_dir = config_path.parent
    if project_dir.exists() and not project_dir.is_dir():
        raise ProjectDirIsFileError(project_dir)

    manifest = apply_overrides(ProjectManifest.default_dev_project(), overrides)
    package = manifest.require_package()

    try:
        project_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileIoError(project_dir, e) from e

    _write_manifest(config_path, manifest, overwrite)

    icon_path = project_dir / ICON_FILENAME
    try:
        icon_path.write_bytes(ICON_RESOURCE.read_bytes())
    except OSError as e:
        raise FileIoError(icon_path, e) from e

    readme_path = project_dir / README_FILENAME
    try:
        readme_path.write_text(render_readme(package), encoding="utf-8")
    except OSError as e:
        raise FileIoError(readme_path, e) from e

    return manifest
