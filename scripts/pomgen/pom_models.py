"""Project descriptor data model.

Pure data structures describing the project a POM is generated for.
No behavior beyond coordinate splitting and no imports from other pomgen modules.
"""

from dataclasses import dataclass, field
from typing import Optional


def split_coordinate(coordinate: str) -> tuple:
    """Split a ``group/artifact`` coordinate into its Maven parts.

    An unnamespaced coordinate (``clojure``) uses the artifact name as its
    groupId, so ``clojure`` becomes ``("clojure", "clojure")``.

    Args:
        coordinate: A ``group/artifact`` or bare ``artifact`` identifier.

    Returns:
        A ``(group_id, artifact_id)`` tuple.
    """
    group_id, sep, artifact_id = coordinate.partition("/")
    if not sep:
        return coordinate, coordinate
    return group_id, artifact_id


@dataclass(frozen=True)
class Exclusion:
    """A transitive dependency excluded from a ``<dependency>``."""
    coordinate: str
    classifier: Optional[str] = None
    extension: Optional[str] = None

    @property
    def group_id(self) -> str:
        return split_coordinate(self.coordinate)[0]

    @property
    def artifact_id(self) -> str:
        return split_coordinate(self.coordinate)[1]


@dataclass(frozen=True)
class Dependency:
    """A declared project dependency.

    Instances are immutable and compare structurally, so two declarations
    with identical coordinate, version and options are the same dependency.

    Attributes:
        coordinate: ``group/artifact`` or bare ``artifact`` identifier.
        version: Version string (e.g. ``1.11.1`` or ``2.0.0-SNAPSHOT``).
        classifier: Optional classifier (e.g. ``sources``).
        extension: Optional packaging extension, rendered as ``<type>``.
        scope: Maven scope, or ``None`` when undeclared.
        optional: Whether the dependency is ``<optional>true</optional>``.
        exclusions: Tuple of Exclusion instances.
    """
    coordinate: str
    version: Optional[str] = None
    classifier: Optional[str] = None
    extension: Optional[str] = None
    scope: Optional[str] = None
    optional: bool = False
    exclusions: tuple = ()

    @property
    def group_id(self) -> str:
        return split_coordinate(self.coordinate)[0]

    @property
    def artifact_id(self) -> str:
        return split_coordinate(self.coordinate)[1]


@dataclass(frozen=True)
class Repository:
    """A ``<repository>`` entry.

    ``snapshots`` and ``releases`` are ``None`` when undeclared, which the
    POM renders as enabled.
    """
    id: str
    url: Optional[str] = None
    snapshots: Optional[bool] = None
    releases: Optional[bool] = None


@dataclass(frozen=True)
class Parent:
    """The ``<parent>`` POM reference."""
    coordinate: str
    version: Optional[str] = None
    relative_path: Optional[str] = None


@dataclass(frozen=True)
class License:
    name: Optional[str] = None
    url: Optional[str] = None
    distribution: Optional[str] = None
    comments: Optional[str] = None


@dataclass(frozen=True)
class MailingList:
    name: Optional[str] = None
    subscribe: Optional[str] = None
    unsubscribe: Optional[str] = None
    post: Optional[str] = None
    archive: Optional[str] = None
    other_archives: tuple = ()


@dataclass(frozen=True)
class ScmInfo:
    """The content of an ``<scm>`` block.

    Attributes:
        connection: Read-only clone URL, ``scm:git:`` prefixed when inferred.
        developer_connection: Read-write clone URL.
        tag: Commit id the POM was generated from.
        url: Browse URL.
    """
    connection: Optional[str] = None
    developer_connection: Optional[str] = None
    tag: Optional[str] = None
    url: Optional[str] = None


@dataclass
class ProjectDescriptor:
    """The project a POM is generated for.

    Path fields hold absolute paths until the path normalizer rewrites them
    relative to ``root``. ``included_profiles`` and ``without_profiles``
    record which profiles were merged and the descriptor before any merge.

    Attributes:
        root: Absolute project directory.
        group: Maven groupId of the project.
        name: Project name, used as artifactId and ``<name>``.
        version: Project version.
        packaging: Packaging type (defaults to ``jar``).
        classifier: Optional artifact classifier.
        description: ``<description>`` text.
        url: Project home page.
        license: License, or ``None``.
        scm: Explicit SCM map, or ``None`` to infer from ``.git``.
        parent: Parent POM, or ``None``.
        dependencies: Ordered list of Dependency.
        repositories: Ordered list of Repository.
        source_paths: Source directories.
        java_source_paths: Java source directories.
        test_paths: Test source directories.
        resource_paths: Resource directories.
        target_path: Build output root.
        compile_path: Compiled classes directory.
        extensions: Build extensions as Dependency instances.
        mailing_list: MailingList, or ``None``.
        profiles: Profile name to overlay dict of descriptor fields.
        included_profiles: Names of the profiles merged into this descriptor.
        without_profiles: The descriptor before profiles were merged.
    """
    root: Optional[str] = None
    group: Optional[str] = None
    name: Optional[str] = None
    version: Optional[str] = None
    packaging: str = "jar"
    classifier: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    license: Optional[License] = None
    scm: Optional[dict] = None
    parent: Optional[Parent] = None
    dependencies: list = field(default_factory=list)
    repositories: list = field(default_factory=list)
    source_paths: list = field(default_factory=list)
    java_source_paths: list = field(default_factory=list)
    test_paths: list = field(default_factory=list)
    resource_paths: list = field(default_factory=list)
    target_path: Optional[str] = None
    compile_path: Optional[str] = None
    extensions: list = field(default_factory=list)
    mailing_list: Optional[MailingList] = None
    profiles: dict = field(default_factory=dict)
    included_profiles: list = field(default_factory=list)
    without_profiles: Optional["ProjectDescriptor"] = field(default=None, repr=False)


class PomError(Exception):
    """Base class for errors that stop POM generation."""


class DescriptorError(PomError):
    """The project descriptor is malformed."""


class SnapshotDependencyError(PomError):
    """A release version depends on a snapshot."""
