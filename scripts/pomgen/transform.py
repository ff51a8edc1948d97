"""Tag transformer: converts descriptor fragments into POM Element trees.

``transform(tag, value)`` dispatches on the semantic tag of a descriptor
fragment. Tags without a dedicated transform render as a single leaf whose
name is the camelCased tag. Every transform returns ``None`` for absent or
empty input so callers can place results straight into a child list.
"""

from pathlib import Path
from typing import Optional

from .element import Element
from .mapping import (
    HELPER_PLUGIN, LIST_TAGS, MODEL_VERSION, POM_NAMESPACE, SCHEMA_LOCATION,
    XSI_NAMESPACE, camelize,
)
from .pom_models import (
    Dependency, License, MailingList, Parent, ProjectDescriptor, Repository, ScmInfo,
    split_coordinate,
)
from .reconcile import build_test_view, merge_dependencies
from .scm import AUTO, guess_scm, resolve_scm


def leaf(tag: str, value) -> Optional[Element]:
    """Render ``value`` as a text node named after ``tag``.

    Falsy values render nothing; ``True`` renders as ``true``.
    """
    if not value:
        return None
    text = "true" if value is True else str(value)
    return Element(camelize(tag), text)


def _list(tag: str, values) -> Optional[Element]:
    if not values:
        return None
    child_tag = LIST_TAGS[tag]
    return Element(camelize(tag), children=[transform(child_tag, v) for v in values])


def _dependency(dep: Dependency) -> Element:
    return Element("dependency", children=[
        leaf("group-id", dep.group_id),
        leaf("artifact-id", dep.artifact_id),
        leaf("version", dep.version),
        leaf("optional", dep.optional),
        leaf("classifier", dep.classifier),
        leaf("type", dep.extension),
        transform("exclusions", dep.exclusions),
        leaf("scope", dep.scope),
    ])


def _exclusions(exclusions) -> Optional[Element]:
    if not exclusions:
        return None
    return Element("exclusions", children=[
        Element("exclusion", children=[
            leaf("group-id", ex.group_id),
            leaf("artifact-id", ex.artifact_id),
            leaf("classifier", ex.classifier),
            leaf("type", ex.extension),
        ])
        for ex in exclusions
    ])


def _enabled(flag: Optional[bool]) -> Element:
    return Element("enabled", "true" if flag is None or flag else "false")


def _repository(repo: Repository) -> Element:
    return Element("repository", children=[
        leaf("id", repo.id),
        leaf("url", repo.url),
        Element("snapshots", children=[_enabled(repo.snapshots)]),
        Element("releases", children=[_enabled(repo.releases)]),
    ])


def _license(license: Optional[License]) -> Optional[Element]:
    if license is None:
        return None
    tags = [
        leaf(key, getattr(license, key))
        for key in ("name", "url", "distribution", "comments")
    ]
    tags = [t for t in tags if t is not None]
    if not tags:
        return None
    return Element("licenses", children=[Element("license", children=tags)])


def _directories(container: str, item: str, paths) -> Optional[Element]:
    """Render a resources-style block with one ``<directory>`` per path."""
    if not paths:
        return None
    return Element(container, children=[
        Element(item, children=[Element("directory", path)]) for path in paths
    ])


def _extensions(extensions) -> Optional[Element]:
    if not extensions:
        return None
    return Element("extensions", children=[
        Element("extension", children=[
            leaf("artifact-id", ext.artifact_id),
            leaf("group-id", ext.group_id),
            leaf("version", ext.version),
        ])
        for ext in extensions
    ])


def _execution(goal: str, phase: str, sources) -> Optional[Element]:
    if not sources:
        return None
    return Element("execution", children=[
        Element("id", goal),
        Element("phase", phase),
        Element("goals", children=[Element("goal", goal)]),
        Element("configuration", children=[
            Element("sources", children=[Element("source", s) for s in sources]),
        ]),
    ])


def _helper_plugin(extra_sources, extra_test_sources) -> Optional[Element]:
    """Register source directories beyond the first with build-helper-maven-plugin."""
    if not extra_sources and not extra_test_sources:
        return None
    return Element("plugins", children=[
        Element("plugin", children=[
            Element("groupId", HELPER_PLUGIN["group_id"]),
            Element("artifactId", HELPER_PLUGIN["artifact_id"]),
            Element("version", HELPER_PLUGIN["version"]),
            Element("executions", children=[
                _execution("add-source", "generate-sources", extra_sources),
                _execution("add-test-source", "generate-test-sources", extra_test_sources),
            ]),
        ]),
    ])


def _build(views: tuple) -> Element:
    """Render ``<build>`` from the ``(release, test)`` descriptor views.

    Maven supports a single source and test source directory: the first
    path of each becomes ``<sourceDirectory>``/``<testSourceDirectory>`` and
    the rest go to the helper plugin. Test resources come from the test view.
    """
    project, test_project = views
    sources = list(project.source_paths) + list(project.java_source_paths)
    test_sources = list(test_project.test_paths)
    return Element("build", children=[
        leaf("source-directory", sources[0] if sources else None),
        leaf("test-source-directory", test_sources[0] if test_sources else None),
        _directories("resources", "resource", project.resource_paths),
        _directories("testResources", "testResource", test_project.resource_paths),
        _extensions(project.extensions),
        Element("directory", project.target_path),
        Element("outputDirectory", project.compile_path),
        _helper_plugin(sources[1:], test_sources[1:]),
    ])


def _parent(parent: Optional[Parent]) -> Optional[Element]:
    if parent is None:
        return None
    group_id, artifact_id = split_coordinate(parent.coordinate)
    return Element("parent", children=[
        leaf("artifact-id", artifact_id),
        leaf("group-id", group_id),
        leaf("version", parent.version),
        leaf("relative-path", parent.relative_path),
    ])


def _mailing_list(mailing_list: Optional[MailingList]) -> Optional[Element]:
    if mailing_list is None:
        return None
    other_archives = None
    if mailing_list.other_archives:
        other_archives = Element("otherArchives", children=[
            Element("otherArchive", url) for url in mailing_list.other_archives
        ])
    return Element("mailingLists", children=[
        Element("mailingList", children=[
            leaf("name", mailing_list.name),
            leaf("subscribe", mailing_list.subscribe),
            leaf("unsubscribe", mailing_list.unsubscribe),
            leaf("post", mailing_list.post),
            leaf("archive", mailing_list.archive),
            other_archives,
        ]),
    ])


def _scm(scm: Optional[ScmInfo]) -> Optional[Element]:
    if scm is None or scm == ScmInfo():
        return None
    return Element("scm", children=[
        leaf("connection", scm.connection),
        leaf("developer-connection", scm.developer_connection),
        leaf("tag", scm.tag),
        leaf("url", scm.url),
    ])


def project_scm(project: ProjectDescriptor) -> Optional[ScmInfo]:
    """Resolve the project's SCM details from its declaration or ``.git``."""
    declaration = guess_scm(project)
    if declaration != AUTO:
        return resolve_scm(project.scm, None)
    if not project.root:
        return None
    return resolve_scm(AUTO, Path(project.root) / ".git")


def _project(project: ProjectDescriptor) -> Element:
    """Render the root ``<project>`` element from the release view.

    The test view and the merged dependency list are derived here so the
    ``<build>`` and ``<dependencies>`` blocks see development profiles.
    """
    test_project = build_test_view(project)
    dependencies = merge_dependencies(project.dependencies, test_project.dependencies)
    return Element(
        "project",
        attrib={
            "xmlns": POM_NAMESPACE,
            "xmlns:xsi": XSI_NAMESPACE,
            "xsi:schemaLocation": SCHEMA_LOCATION,
        },
        children=[
            Element("modelVersion", MODEL_VERSION),
            transform("parent", project.parent),
            Element("groupId", project.group),
            Element("artifactId", project.name),
            Element("packaging", project.packaging or "jar"),
            Element("version", project.version),
            leaf("classifier", project.classifier),
            Element("name", project.name),
            leaf("description", project.description),
            transform("url", project.url),
            transform("license", project.license),
            transform("mailing-list", project.mailing_list),
            transform("scm", project_scm(project)),
            transform("build", (project, test_project)),
            transform("repositories", project.repositories),
            transform("dependencies", dependencies),
        ],
    )


_TRANSFORMS = {
    "dependency": _dependency,
    "exclusions": _exclusions,
    "repository": _repository,
    "license": _license,
    "build": _build,
    "parent": _parent,
    "mailing-list": _mailing_list,
    "scm": _scm,
    "project": _project,
}


def transform(tag: str, value) -> Optional[Element]:
    """Convert a descriptor fragment into an Element.

    Args:
        tag: Semantic tag of the fragment (``dependency``, ``build``,
            ``project``, a list tag such as ``dependencies``, or any other
            field name for a plain leaf).
        value: The fragment. Its expected type depends on ``tag``.

    Returns:
        The rendered Element, or ``None`` when there is nothing to render.
    """
    if tag in LIST_TAGS:
        return _list(tag, value)
    handler = _TRANSFORMS.get(tag)
    if handler is None:
        return leaf(tag, value)
    return handler(value)
