"""Command-line interface for the packager.

This module provides the ``ts-pack`` entry point with two commands:
``init`` scaffolds a new project and ``build`` produces the package archive.
"""

import argparse
import sys
from pathlib import Path

from .core.errors import PackagerError
from .core.version import Version
from .pipeline import BuildPipeline
from .project.manifest import DEFAULT_CONFIG_FILENAME, ManifestOverrides
from .project.scaffold import create_new


def _add_identity_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config-path",
        type=Path,
        default=Path(DEFAULT_CONFIG_FILENAME),
        help=f"Path to the project manifest (default: ./{DEFAULT_CONFIG_FILENAME})",
    )
    parser.add_argument("--package-namespace", help="Override the package namespace")
    parser.add_argument("--package-name", help="Override the package name")
    parser.add_argument(
        "--package-version",
        type=Version.parse,
        help="Override the package version (MAJOR.MINOR.PATCH)",
    )


def _overrides(args: argparse.Namespace) -> ManifestOverrides:
    return ManifestOverrides(
        namespace=args.package_namespace,
        name=args.package_name,
        version=args.package_version,
    )


def run_init(args: argparse.Namespace) -> None:
    print(f"Creating project: {args.config_path}", file=sys.stderr)
    manifest = create_new(args.config_path, overwrite=args.overwrite, overrides=_overrides(args))
    package = manifest.require_package()
    print(
        f"Created {package.namespace}-{package.name}-{package.version} "
        f"in {args.config_path.parent}",
        file=sys.stderr,
    )


def run_build(args: argparse.Namespace) -> None:
    print(f"Building package from: {args.config_path}", file=sys.stderr)
    pipeline = BuildPipeline(args.config_path, output_dir=args.output, overrides=_overrides(args))
    output_path = pipeline.build()
    print(f"Wrote: {output_path}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ts-pack",
        description="Create and build Thunderstore mod packages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scaffold a project in ./mymod
  ts-pack init --config-path mymod/thunderstore.toml --package-namespace Acme

  # Build it into mymod/build/
  ts-pack build --config-path mymod/thunderstore.toml

  # Build a release with an overridden version into ./out
  ts-pack build --config-path mymod/thunderstore.toml --output out \\
      --package-version 1.2.3
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_cmd = subparsers.add_parser("init", help="Create a new project")
    _add_identity_arguments(init_cmd)
    init_cmd.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite an existing project manifest",
    )
    init_cmd.set_defaults(handler=run_init)

    build_cmd = subparsers.add_parser("build", help="Build the package archive")
    _add_identity_arguments(build_cmd)
    build_cmd.add_argument(
        "--output",
        type=Path,
        help="Directory to write the archive to (default: build.outdir)",
    )
    build_cmd.set_defaults(handler=run_build)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the packager."""
    args = build_parser().parse_args(argv)

    try:
        args.handler(args)
    except PackagerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
