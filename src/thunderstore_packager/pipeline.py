"""Build pipeline for package archives.

This module turns a project manifest into a distributable zip archive. The
steps run strictly in order and the first error aborts the build:

1. load the project manifest and apply identity overrides
2. resolve the output path ``{outdir}/{namespace}-{name}-{version}.zip``
3. write every copy instruction's source tree into the archive
4. write manifest.json, icon.png and README.md
5. finalize the archive

A failed build leaves the partially written archive in place.
"""

from pathlib import Path

from .archive import PackageArchive
from .core.errors import ArchiveError, FileIoError, ManifestDeserializeError
from .core.validator import validate_package_manifest_with_error_details
from .package_manifest import PackageManifestV1
from .project.manifest import (
    BuildData,
    CopyPath,
    ManifestOverrides,
    PackageData,
    ProjectManifest,
    apply_overrides,
)
from .scanner import archive_name, walk_source

MANIFEST_ENTRY = "manifest.json"
ICON_ENTRY = "icon.png"
README_ENTRY = "README.md"


def package_file_name(package: PackageData) -> str:
    """Archive file name for a package, e.g. ``Acme-Widget-1.2.3.zip``."""
    return f"{package.namespace}-{package.name}-{package.version}.zip"


class BuildPipeline:
    """Builds the package archive for one project manifest.

    Example:
        >>> pipeline = BuildPipeline(Path("thunderstore.toml"))
        >>> archive_path = pipeline.build()
        >>>
        >>> # Override identity and output directory
        >>> pipeline = BuildPipeline(
        ...     Path("thunderstore.toml"),
        ...     output_dir=Path("/tmp/out"),
        ...     overrides=ManifestOverrides(version=Version(1, 0, 1)),
        ... )
    """

    def __init__(
        self,
        config_path: Path,
        output_dir: Path | None = None,
        overrides: ManifestOverrides | None = None,
    ):
        """Initialize the pipeline.

        Args:
            config_path: Path to the project manifest (thunderstore.toml)
            output_dir: Directory for the archive. Defaults to the manifest's
                build.outdir, relative to the project directory.
            overrides: Optional namespace/name/version overrides
        """
        self.config_path = Path(config_path)
        self.project_dir = self.config_path.parent
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.overrides = overrides

    def load_manifest(self) -> ProjectManifest:
        """Load the project manifest and apply the overrides.

        Raises:
            NoProjectFileError: If the config path is not an existing file
            PackageReferenceValidationError: If an override namespace or name is invalid
        """
        return apply_overrides(ProjectManifest.load(self.config_path), self.overrides)

    def resolve_output_path(self, package: PackageData, build: BuildData) -> Path:
        """Compute the archive path and create its parent directory.

        Raises:
            FileIoError: If the output directory cannot be created
        """
        output_dir = self.output_dir
        if output_dir is None:
            output_dir = self.project_dir / build.outdir
        output_path = output_dir / package_file_name(package)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileIoError(output_path.parent, e) from e

        return output_path

    def build(self) -> Path:
        """Run the build.

        Returns:
            Path of the written archive

        Raises:
            PackagerError: On the first failing step
        """
        manifest = self.load_manifest()
        package = manifest.require_package()
        build = manifest.require_build()

        output_path = self.resolve_output_path(package, build)
        registry_manifest = PackageManifestV1.from_package_data(
            package, manifest.dependencies.dependencies
        )

        with PackageArchive(output_path) as archive:
            for copy in build.copy:
                self.write_copy_instruction(archive, copy)

            self.write_registry_manifest(archive, registry_manifest)
            archive.add_file(ICON_ENTRY, self._read_bytes(self.project_dir / build.icon))
            archive.add_file(
                README_ENTRY,
                self._read_text(self.project_dir / build.readme).encode("utf-8"),
            )

        return output_path

    def write_copy_instruction(self, archive: PackageArchive, copy: CopyPath) -> None:
        """Write one copy instruction's source tree into the archive.

        Raises:
            ArchiveError: If a single-file source maps to the archive root
                (an empty target), or a target escapes the archive root
        """
        source_path = self.project_dir / copy.source

        for entry in walk_source(source_path):
            name = archive_name(copy.target, entry.relative_path)
            if entry.is_dir:
                archive.add_directory(name)
            elif not name:
                raise ArchiveError(
                    f"Copy source {source_path} is a file and needs a non-empty target"
                )
            else:
                archive.add_file(name, self._read_bytes(entry.path))

    def write_registry_manifest(
        self, archive: PackageArchive, registry_manifest: PackageManifestV1
    ) -> None:
        """Validate and embed manifest.json.

        Raises:
            ManifestDeserializeError: If the derived manifest does not match
                the registry schema
        """
        is_valid, error_msg = validate_package_manifest_with_error_details(
            registry_manifest.to_dict()
        )
        if not is_valid:
            raise ManifestDeserializeError(f"Invalid {MANIFEST_ENTRY}: {error_msg}")

        archive.add_file(MANIFEST_ENTRY, registry_manifest.to_json().encode("utf-8"))

    @staticmethod
    def _read_bytes(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise FileIoError(path, e) from e

    @staticmethod
    def _read_text(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileIoError(path, e) from e


def build(
    config_path: Path,
    output_dir: Path | None = None,
    overrides: ManifestOverrides | None = None,
) -> Path:
    """Build the package archive for a project. See BuildPipeline."""
    return BuildPipeline(config_path, output_dir, overrides).build()
