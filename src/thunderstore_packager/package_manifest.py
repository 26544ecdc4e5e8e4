"""Registry manifest (manifest.json) derivation."""

import json
from collections.abc import Iterable
from dataclasses import dataclass

from .core.package_reference import PackageReference, to_string_array
from .core.types import RegistryManifest
from .core.version import Version
from .project.manifest import PackageData


@dataclass(frozen=True)
class PackageManifestV1:
    """The payload the registry reads from a package archive."""

    name: str
    description: str
    version: Version
    dependencies: tuple[PackageReference, ...]
    website_url: str

    @classmethod
    def from_package_data(
        cls, package: PackageData, dependencies: Iterable[PackageReference] = ()
    ) -> "PackageManifestV1":
        return cls(
            name=package.name,
            description=package.description,
            version=package.version,
            dependencies=tuple(dependencies),
            website_url=package.website_url,
        )

    def to_dict(self) -> RegistryManifest:
        return RegistryManifest(
            name=self.name,
            description=self.description,
            version_number=str(self.version),
            dependencies=to_string_array(self.dependencies),
            website_url=self.website_url,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
