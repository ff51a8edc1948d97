"""CLI entry point and file output.

Wires together descriptor loading, profile merging, and POM generation.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from .descriptor import load_descriptor, merge_profiles
from .pom import make_pom, make_pom_properties, write_pom, write_pom_properties
from .pom_models import PomError

# Setting this environment variable lets a release depend on snapshots.
SNAPSHOTS_ENV = "POMGEN_SNAPSHOTS_IN_RELEASE"


def generate(
    descriptor_path: Path,
    pom_location: str = "pom.xml",
    properties_location: Optional[str] = None,
    profiles: Optional[list] = None,
    dry_run: bool = False,
    disclaimer: bool = True,
    allow_snapshots: bool = False,
) -> Optional[Path]:
    """Generate the POM (and optionally pom.properties) for a descriptor.

    Args:
        descriptor_path: Path to the JSON project descriptor.
        pom_location: POM path relative to the project root.
        properties_location: pom.properties path relative to the project
            root, or ``None`` to skip it.
        profiles: Profile names to merge into the project before generation.
        dry_run: Print generated content to stdout instead of writing files.
        disclaimer: Append the "autogenerated, do not edit" comment.
        allow_snapshots: Allow a release version to depend on snapshots.

    Returns:
        Absolute path of the written POM, or ``None`` on a dry run.

    Raises:
        PomError: If the descriptor is malformed or the snapshot guard fails.
    """
    project = load_descriptor(descriptor_path)
    if profiles:
        project = merge_profiles(project, profiles)

    if dry_run:
        print("=" * 60)
        print(pom_location)
        print("=" * 60)
        print(make_pom(project, disclaimer=disclaimer, allow_snapshots=allow_snapshots))
        if properties_location:
            print("=" * 60)
            print(properties_location)
            print("=" * 60)
            print(make_pom_properties(project).decode("iso-8859-1"))
        return None

    pom_file = write_pom(
        project, pom_location, disclaimer=disclaimer, allow_snapshots=allow_snapshots,
    )
    if properties_location:
        write_pom_properties(project, properties_location)
    return pom_file


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Write a pom.xml file from a project descriptor for Maven interoperability"
    )
    parser.add_argument("descriptor", type=Path, help="Path to the JSON project descriptor")
    parser.add_argument(
        "--output", "-o", default="pom.xml",
        help="POM location relative to the project root (default: pom.xml)",
    )
    parser.add_argument(
        "--properties", "-p", default=None,
        help="Also write pom.properties to this location, relative to the project root",
    )
    parser.add_argument(
        "--with-profile", "-P", dest="profiles", action="append", default=[],
        help="Merge a descriptor profile into the project (repeatable)",
    )
    parser.add_argument("--dry-run", "-n", action="store_true", help="Print output without writing files")
    parser.add_argument(
        "--no-disclaimer", action="store_true",
        help="Leave out the 'autogenerated, do not edit' comment",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """CLI entry point. Parses arguments and delegates to ``generate()``."""
    args = parse_args(argv)
    try:
        generate(
            args.descriptor,
            pom_location=args.output,
            properties_location=args.properties,
            profiles=args.profiles,
            dry_run=args.dry_run,
            disclaimer=not args.no_disclaimer,
            allow_snapshots=bool(os.environ.get(SNAPSHOTS_ENV)),
        )
    except PomError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
