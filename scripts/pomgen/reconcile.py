"""Release and test views of a project descriptor.

The release view drops the development profiles; the test view merges them
back in. Dependencies that only the test view declares end up ``test``-scoped
in the generated POM.
"""

from dataclasses import replace

from .descriptor import merge_profiles
from .mapping import OPTIONAL_PROFILES, TEST_PROFILES, is_snapshot
from .paths import relativize
from .pom_models import ProjectDescriptor, SnapshotDependencyError


def remove_profiles(project: ProjectDescriptor, profiles) -> ProjectDescriptor:
    """Re-merge the descriptor without the given profiles.

    Args:
        project: Descriptor, possibly with profiles merged in.
        profiles: Profile names to leave out.

    Returns:
        The base descriptor with the remaining included profiles merged.
    """
    remaining = [p for p in project.included_profiles if p not in profiles]
    return merge_profiles(project, remaining)


def build_release_view(project: ProjectDescriptor) -> ProjectDescriptor:
    """Drop the ``user``, ``dev``, ``test`` and ``default`` profiles and relativize paths."""
    return relativize(remove_profiles(project, OPTIONAL_PROFILES))


def build_test_view(project: ProjectDescriptor) -> ProjectDescriptor:
    """Merge the development profiles and any included ones, then relativize paths.

    Starts from the descriptor before any profile was merged and applies
    ``dev``, ``test``, ``default`` followed by ``project.included_profiles``.
    """
    names = list(TEST_PROFILES) + list(project.included_profiles)
    return relativize(merge_profiles(project, names))


def merge_dependencies(release_deps: list, test_deps: list) -> list:
    """Merge release and test-view dependencies into one POM dependency list.

    The union keeps the first occurrence of structurally equal entries.
    A dependency the release list does not contain verbatim is scoped to
    ``test`` unless it already declares a scope; release dependencies are
    never changed.

    Args:
        release_deps: Dependencies of the release view.
        test_deps: Dependencies of the test view.

    Returns:
        The merged, de-duplicated dependency list.
    """
    merged = []
    for dep in list(release_deps) + list(test_deps):
        if dep not in release_deps and dep.scope is None:
            dep = replace(dep, scope="test")
        if dep not in merged:
            merged.append(dep)
    return merged


def check_for_snapshot_deps(project: ProjectDescriptor, allow_snapshots: bool = False):
    """Refuse to generate a release POM that depends on snapshots.

    Args:
        project: The release view of the descriptor.
        allow_snapshots: Skip the check (set from the CLI environment).

    Raises:
        SnapshotDependencyError: If the project version is not a snapshot
            but one of its dependencies is.
    """
    if allow_snapshots or is_snapshot(project.version):
        return
    snapshots = [d for d in project.dependencies if is_snapshot(d.version)]
    if snapshots:
        names = ", ".join(f"{d.coordinate} {d.version}" for d in snapshots)
        raise SnapshotDependencyError(
            f"Release versions may not depend upon snapshots ({names}).\n"
            "Freeze snapshots to dated versions or set the "
            "POMGEN_SNAPSHOTS_IN_RELEASE environment variable to override."
        )
