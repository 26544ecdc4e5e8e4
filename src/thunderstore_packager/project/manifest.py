"""Project manifest (thunderstore.toml) model.

The project manifest describes a mod project: its identity, how to build it,
where to publish it and what it depends on. It is read from TOML, validated
against schemas/project.schema.json and turned into immutable dataclasses.

TOML layout::

    [config]
    schemaVersion = "0.0.1"

    [package]
    namespace = "AuthorName"
    name = "PackageName"
    versionNumber = "0.0.1"
    description = "Example mod description"
    websiteUrl = "https://thunderstore.io"
    containsNsfwContent = false

    [build]
    icon = "./icon.png"
    readme = "./README.md"
    outdir = "./build"

    [[build.copy]]
    source = "./dist"
    target = ""

    [publish]
    communities = ["riskofrain2"]

    [publish.categories]
    riskofrain2 = ["items", "skills"]

    [[dependencies]]
    namespace = "bbepis"
    name = "BepInExPack"
    versionNumber = "5.4.2100"
"""

import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import tomli_w

from ..core.errors import (
    FileIoError,
    ManifestDeserializeError,
    ManifestFieldError,
    MissingManifestFieldError,
    NoProjectFileError,
    PackageReferenceValidationError,
)
from ..core.package_reference import PackageReference, from_table, to_table, validate_identifier
from ..core.types import CopyPathTable
from ..core.validator import validate_project_data
from ..core.version import Version

DEFAULT_CONFIG_FILENAME = "thunderstore.toml"
DEFAULT_SCHEMA_VERSION = Version(0, 0, 1)
DEFAULT_REPOSITORY = "https://thunderstore.io"
DEFAULT_GAME = "risk-of-rain2"
DEFAULT_COMMUNITY = "riskofrain2"


@dataclass(frozen=True)
class ConfigData:
    """The [config] section. Every key is optional."""

    schema_version: Version = DEFAULT_SCHEMA_VERSION
    repository: str = DEFAULT_REPOSITORY
    game: str = DEFAULT_GAME

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConfigData":
        defaults = cls()
        schema_version = data.get("schemaVersion")
        return cls(
            schema_version=(
                Version.parse(schema_version)
                if schema_version is not None
                else defaults.schema_version
            ),
            repository=data.get("repository", defaults.repository),
            game=data.get("game", defaults.game),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "schemaVersion": str(self.schema_version),
            "repository": self.repository,
            "game": self.game,
        }


@dataclass(frozen=True)
class PackageData:
    """The [package] section: identity of the package being built.

    Namespace and name follow the package reference rules, since they end up
    in the archive file name ``{namespace}-{name}-{version}.zip``.

    Raises:
        PackageReferenceValidationError: If namespace or name is empty or
            contains '-', '/' or '\\'
    """

    namespace: str
    name: str
    version: Version
    description: str
    website_url: str = ""
    contains_nsfw_content: bool = False

    def __post_init__(self) -> None:
        validate_identifier("namespace", self.namespace)
        validate_identifier("name", self.name)

    @classmethod
    def scaffold(cls) -> "PackageData":
        """Placeholder identity written into newly created projects."""
        return cls(
            namespace="AuthorName",
            name="PackageName",
            version=Version(0, 0, 1),
            description="Example mod description",
            website_url=DEFAULT_REPOSITORY,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PackageData":
        for key in ("namespace", "name"):
            try:
                validate_identifier(key, data[key])
            except PackageReferenceValidationError as e:
                raise ManifestFieldError(f"package.{key}", str(e)) from e

        return cls(
            namespace=data["namespace"],
            name=data["name"],
            version=Version.parse(data["versionNumber"]),
            description=data["description"],
            website_url=data.get("websiteUrl", ""),
            contains_nsfw_content=data.get("containsNsfwContent", False),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "namespace": self.namespace,
            "name": self.name,
            "versionNumber": str(self.version),
            "description": self.description,
            "websiteUrl": self.website_url,
            "containsNsfwContent": self.contains_nsfw_content,
        }


@dataclass(frozen=True)
class CopyPath:
    """Copy instruction: ``source`` (project relative) goes to ``target`` in the archive."""

    source: Path
    target: str

    @classmethod
    def from_dict(cls, data: CopyPathTable) -> "CopyPath":
        return cls(source=Path(data["source"]), target=data["target"])

    def to_dict(self) -> CopyPathTable:
        return CopyPathTable(source=self.source.as_posix(), target=self.target)


def _default_copy() -> tuple[CopyPath, ...]:
    return (CopyPath(source=Path("./dist"), target=""),)


@dataclass(frozen=True)
class BuildData:
    """The [build] section. Paths are relative to the project directory."""

    icon: Path = Path("./icon.png")
    readme: Path = Path("./README.md")
    outdir: Path = Path("./build")
    copy: tuple[CopyPath, ...] = field(default_factory=_default_copy)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BuildData":
        defaults = cls()
        copy = data.get("copy")
        return cls(
            icon=Path(data.get("icon", defaults.icon)),
            readme=Path(data.get("readme", defaults.readme)),
            outdir=Path(data.get("outdir", defaults.outdir)),
            copy=(
                tuple(CopyPath.from_dict(entry) for entry in copy)
                if copy is not None
                else defaults.copy
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "icon": self.icon.as_posix(),
            "readme": self.readme.as_posix(),
            "outdir": self.outdir.as_posix(),
            "copy": [entry.to_dict() for entry in self.copy],
        }


def normalize_categories(
    categories: Sequence[str] | Mapping[str, Sequence[str]],
    communities: Sequence[str],
) -> dict[str, tuple[str, ...]]:
    """Normalize both accepted category shapes into a per-community mapping.

    The legacy shape is a flat list of categories that applies to every
    community the package is published to.

    Example:
        >>> normalize_categories(["items"], ["riskofrain2", "valheim"])
        {'riskofrain2': ('items',), 'valheim': ('items',)}
    """
    if isinstance(categories, Mapping):
        return {community: tuple(values) for community, values in categories.items()}
    return {community: tuple(categories) for community in communities}


@dataclass(frozen=True)
class PublishData:
    """The [publish] section: target communities and their categories.

    Categories are kept as ``(community, categories)`` pairs in manifest
    order; ``dict(publish.categories)`` gives the mapping.
    """

    communities: tuple[str, ...] = (DEFAULT_COMMUNITY,)
    categories: tuple[tuple[str, tuple[str, ...]], ...] = (
        (DEFAULT_COMMUNITY, ("items", "skills")),
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PublishData":
        communities = tuple(data["communities"])
        return cls(
            communities=communities,
            categories=tuple(normalize_categories(data["categories"], communities).items()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "communities": list(self.communities),
            "categories": {community: list(values) for community, values in self.categories},
        }


@dataclass(frozen=True)
class DependencyData:
    """The top-level ``dependencies`` and ``dev-dependencies`` lists."""

    dependencies: tuple[PackageReference, ...] = ()
    dev_dependencies: tuple[PackageReference, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DependencyData":
        return cls(
            dependencies=tuple(from_table(data.get("dependencies", []), "dependencies")),
            dev_dependencies=tuple(
                from_table(data.get("dev-dependencies", []), "dev-dependencies")
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "dependencies": to_table(self.dependencies),
            "dev-dependencies": to_table(self.dev_dependencies),
        }


@dataclass(frozen=True)
class ManifestOverrides:
    """Identity fields that replace the manifest's [package] values."""

    namespace: str | None = None
    name: str | None = None
    version: Version | None = None


@dataclass(frozen=True)
class ProjectManifest:
    """A complete project manifest.

    Loaded manifests may omit the package, build and publish sections;
    manifests created by default_dev_project() have all of them.
    """

    config: ConfigData = field(default_factory=ConfigData)
    package: PackageData | None = None
    build: BuildData | None = None
    publish: PublishData | None = None
    dependencies: DependencyData = field(default_factory=DependencyData)

    @classmethod
    def default_dev_project(cls) -> "ProjectManifest":
        """Fully populated manifest used when scaffolding a new project."""
        return cls(
            config=ConfigData(),
            package=PackageData.scaffold(),
            build=BuildData(),
            publish=PublishData(),
            dependencies=DependencyData(),
        )

    @classmethod
    def load(cls, path: Path) -> "ProjectManifest":
        """Read and validate a project manifest file.

        Args:
            path: Path to thunderstore.toml

        Returns:
            The parsed manifest

        Raises:
            NoProjectFileError: If path is not an existing file
            FileIoError: If the file cannot be read
            ManifestDeserializeError: If the file is not valid TOML or does
                not match the project schema
            MissingManifestFieldError: If a required field is absent
            VersionParseError: If a version field is malformed
            ManifestFieldError: If a dependency entry is malformed
        """
        path = Path(path)
        if not path.is_file():
            raise NoProjectFileError(path)

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ManifestDeserializeError(f"Failed to read project file. {e}") from e
        except OSError as e:
            raise FileIoError(path, e) from e

        return cls.from_toml(text)

    @classmethod
    def from_toml(cls, text: str) -> "ProjectManifest":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ManifestDeserializeError(f"Failed to read project file. {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectManifest":
        validate_project_data(data)

        package = data.get("package")
        build = data.get("build")
        publish = data.get("publish")
        return cls(
            config=ConfigData.from_dict(data.get("config", {})),
            package=PackageData.from_dict(package) if package is not None else None,
            build=BuildData.from_dict(build) if build is not None else None,
            publish=PublishData.from_dict(publish) if publish is not None else None,
            dependencies=DependencyData.from_dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"config": self.config.to_dict()}
        if self.package is not None:
            data["package"] = self.package.to_dict()
        if self.build is not None:
            data["build"] = self.build.to_dict()
        if self.publish is not None:
            data["publish"] = self.publish.to_dict()
        data.update(self.dependencies.to_dict())
        return data

    def to_toml(self) -> str:
        return tomli_w.dumps(self.to_dict())

    def require_package(self) -> PackageData:
        if self.package is None:
            raise MissingManifestFieldError("package")
        return self.package

    def require_build(self) -> BuildData:
        if self.build is None:
            raise MissingManifestFieldError("build")
        return self.build


def apply_overrides(
    manifest: ProjectManifest, overrides: ManifestOverrides | None
) -> ProjectManifest:
    """Return a copy of the manifest with the override fields applied.

    Overrides only replace values in an existing [package] section; a
    manifest without one is returned unchanged.

    Raises:
        PackageReferenceValidationError: If an override namespace or name is invalid
    """
    if overrides is None or manifest.package is None:
        return manifest

    changes: dict[str, Any] = {
        key: value
        for key, value in (
            ("namespace", overrides.namespace),
            ("name", overrides.name),
            ("version", overrides.version),
        )
        if value is not None
    }
    if not changes:
        return manifest

    return replace(manifest, package=replace(manifest.package, **changes))
