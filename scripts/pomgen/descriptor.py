"""Project descriptor loading and profile merging.

Reads a JSON project descriptor into a ProjectDescriptor, filling in the
conventional source layout, and overlays named profiles onto a descriptor.
"""

import json
import os
import sys
from dataclasses import fields, is_dataclass, replace
from pathlib import Path

from .pom_models import (
    DescriptorError, Dependency, Exclusion, License, MailingList, Parent,
    ProjectDescriptor, Repository,
)

# Conventional layout applied when a descriptor leaves these fields out.
DEFAULTS = {
    "source_paths": ["src"],
    "test_paths": ["test"],
    "resource_paths": ["resources"],
    "target_path": "target",
    "compile_path": "target/classes",
}

PATH_LIST_FIELDS = ("source_paths", "java_source_paths", "test_paths", "resource_paths")
PATH_FIELDS = ("target_path", "compile_path")

# Fields that are bookkeeping rather than descriptor content.
_INTERNAL_FIELDS = {"profiles", "included_profiles", "without_profiles"}
_DESCRIPTOR_FIELDS = {f.name for f in fields(ProjectDescriptor)} - _INTERNAL_FIELDS
_DEPENDENCY_OPTIONS = {"classifier", "extension", "type", "scope", "optional", "exclusions"}


def _distinct(items) -> list:
    """Drop repeated items, keeping the first occurrence of each."""
    result = []
    for item in items:
        if item not in result:
            result.append(item)
    return result


def _version(spec: list, what: str):
    version = spec[1] if len(spec) > 1 else None
    if version is not None and not isinstance(version, str):
        raise DescriptorError(f"Version of {what} '{spec[0]}' must be a string, got {version!r}")
    return version


def _options(spec: list, index: int, what: str) -> dict:
    opts = spec[index] if len(spec) > index else {}
    if not isinstance(opts, dict):
        raise DescriptorError(f"Options for {what} '{spec[0]}' must be an object, got {opts!r}")
    return opts


def _parse_exclusion(spec) -> Exclusion:
    """Parse an exclusion given as ``"group/artifact"`` or ``[coordinate, {options}]``."""
    if isinstance(spec, str):
        return Exclusion(spec)
    if isinstance(spec, list) and spec and isinstance(spec[0], str):
        opts = _options(spec, 1, "exclusion")
        return Exclusion(
            spec[0],
            classifier=opts.get("classifier"),
            extension=opts.get("extension"),
        )
    raise DescriptorError(f"Invalid exclusion: {spec!r}")


def _parse_dependency(spec) -> Dependency:
    """Parse a ``[coordinate, version, {options}]`` dependency declaration.

    ``type`` is accepted as an alias of ``extension``.

    Args:
        spec: The JSON dependency vector.

    Returns:
        A Dependency instance.

    Raises:
        DescriptorError: If the vector is malformed or carries unknown options.
    """
    if not isinstance(spec, list) or not 1 <= len(spec) <= 3 or not isinstance(spec[0], str):
        raise DescriptorError(f"Invalid dependency: {spec!r}")
    opts = _options(spec, 2, "dependency")
    unknown = set(opts) - _DEPENDENCY_OPTIONS
    if unknown:
        raise DescriptorError(
            f"Unknown option(s) {', '.join(sorted(unknown))} for dependency '{spec[0]}'"
        )
    return Dependency(
        coordinate=spec[0],
        version=_version(spec, "dependency"),
        classifier=opts.get("classifier"),
        extension=opts.get("extension", opts.get("type")),
        scope=opts.get("scope"),
        optional=bool(opts.get("optional", False)),
        exclusions=tuple(_parse_exclusion(e) for e in opts.get("exclusions", [])),
    )


def _parse_repository(spec) -> Repository:
    """Parse ``[id, url]`` or ``[id, {url, snapshots, releases}]``."""
    if not isinstance(spec, list) or len(spec) != 2 or not isinstance(spec[0], str):
        raise DescriptorError(f"Invalid repository: {spec!r}")
    repo_id, opts = spec
    if isinstance(opts, str):
        return Repository(repo_id, url=opts)
    if not isinstance(opts, dict):
        raise DescriptorError(f"Invalid options for repository '{repo_id}': {opts!r}")
    return Repository(
        repo_id,
        url=opts.get("url"),
        snapshots=opts.get("snapshots"),
        releases=opts.get("releases"),
    )


def _parse_parent(spec) -> Parent:
    if not isinstance(spec, list) or not 1 <= len(spec) <= 3 or not isinstance(spec[0], str):
        raise DescriptorError(f"Invalid parent: {spec!r}")
    opts = _options(spec, 2, "parent")
    return Parent(
        spec[0],
        version=_version(spec, "parent"),
        relative_path=opts.get("relative-path"),
    )


def _parse_record(cls, data, what: str):
    """Build a License or MailingList from a JSON object with hyphenated keys."""
    if not isinstance(data, dict):
        raise DescriptorError(f"'{what}' must be an object, got {data!r}")
    known = {f.name for f in fields(cls)}
    kwargs = {}
    for key, value in data.items():
        name = key.replace("-", "_")
        if name not in known:
            raise DescriptorError(f"Unknown key '{key}' in '{what}'")
        kwargs[name] = tuple(value) if isinstance(value, list) else value
    return cls(**kwargs)


def _absolutize(root: str, path):
    if path is None or os.path.isabs(path):
        return path
    return os.path.join(root, path)


def _convert_fields(data: dict, root: str) -> dict:
    """Convert a JSON object with hyphenated keys into ProjectDescriptor kwargs.

    Relative path values are resolved against ``root``. Unknown keys are
    skipped with a warning, since descriptors commonly carry settings for
    other tools.

    Args:
        data: Decoded JSON object (the project or one of its profiles).
        root: Absolute project root.

    Returns:
        A dict of ProjectDescriptor field values.
    """
    result = {}
    for key, value in data.items():
        name = key.replace("-", "_")
        if name in ("root", "profiles"):
            continue
        if name not in _DESCRIPTOR_FIELDS:
            print(f"WARNING: Ignoring unknown descriptor field '{key}'", file=sys.stderr)
            continue
        if name in ("dependencies", "extensions"):
            value = [_parse_dependency(d) for d in value]
        elif name == "repositories":
            value = [_parse_repository(r) for r in value]
        elif name == "parent":
            value = _parse_parent(value)
        elif name == "license":
            value = _parse_record(License, value, key)
        elif name == "mailing_list":
            value = _parse_record(MailingList, value, key)
        elif name == "scm":
            if not isinstance(value, dict):
                raise DescriptorError(f"'scm' must be an object, got {value!r}")
        elif name in PATH_LIST_FIELDS:
            if isinstance(value, str):
                value = [value]
            value = [_absolutize(root, p) for p in value]
        elif name in PATH_FIELDS:
            value = _absolutize(root, value)
        result[name] = value
    return result


def descriptor_from_dict(data: dict, root) -> ProjectDescriptor:
    """Build a ProjectDescriptor from a decoded JSON descriptor.

    Args:
        data: The decoded descriptor object.
        root: Directory the descriptor's relative paths are resolved against.
            A ``root`` key in ``data`` overrides it.

    Returns:
        A ProjectDescriptor with the default layout filled in and all path
        fields absolute.

    Raises:
        DescriptorError: If required fields are missing or malformed.
    """
    if not isinstance(data, dict):
        raise DescriptorError("Project descriptor must be a JSON object")
    root = str(Path(root, data.get("root", ".")).resolve())
    kwargs = _convert_fields(data, root)
    for name, default in DEFAULTS.items():
        if name not in kwargs:
            kwargs[name] = (
                [_absolutize(root, p) for p in default]
                if isinstance(default, list)
                else _absolutize(root, default)
            )
    for required in ("name", "version"):
        if not kwargs.get(required):
            raise DescriptorError(f"Project descriptor has no '{required}'")
    kwargs.setdefault("group", kwargs["name"])
    for name in ("name", "group", "version"):
        if not isinstance(kwargs[name], str):
            raise DescriptorError(f"'{name}' must be a string, got {kwargs[name]!r}")

    profiles = {}
    for profile_name, overlay in (data.get("profiles") or {}).items():
        if not isinstance(overlay, dict):
            raise DescriptorError(f"Profile '{profile_name}' must be an object")
        profiles[profile_name] = _convert_fields(overlay, root)

    return ProjectDescriptor(root=root, profiles=profiles, **kwargs)


def load_descriptor(path: Path) -> ProjectDescriptor:
    """Read a JSON project descriptor from disk.

    The project root defaults to the directory holding the descriptor.

    Args:
        path: Filesystem path to the descriptor file.

    Returns:
        The parsed ProjectDescriptor.

    Raises:
        DescriptorError: If the file is missing, not valid JSON, or malformed.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise DescriptorError(f"No project descriptor found at {path}") from None
    except json.JSONDecodeError as e:
        raise DescriptorError(f"Could not parse {path}: {e}") from e
    return descriptor_from_dict(data, Path(path).parent)


def _overlay_value(current, value):
    """Merge one profile value into the current field value.

    Sequences are concatenated without repeats, mappings and records are
    shallow-merged, anything else is replaced.
    """
    if isinstance(current, list) and isinstance(value, list):
        return _distinct(current + value)
    if isinstance(current, dict) and isinstance(value, dict):
        return {**current, **value}
    if is_dataclass(current) and type(current) is type(value):
        changes = {}
        for f in fields(value):
            v = getattr(value, f.name)
            if v not in (None, ()):
                changes[f.name] = v
        return replace(current, **changes)
    return value


def merge_profiles(project: ProjectDescriptor, names) -> ProjectDescriptor:
    """Overlay named profiles onto the descriptor's profile-free base.

    Profiles are applied in the given order on top of
    ``project.without_profiles`` (or ``project`` itself when nothing was
    merged yet). Names with no matching profile are skipped.

    Args:
        project: The descriptor to merge into.
        names: Profile names to merge.

    Returns:
        A new ProjectDescriptor recording ``names`` as its included profiles.
    """
    base = project.without_profiles or project
    merged = base
    for name in names:
        overlay = base.profiles.get(name)
        if overlay is None:
            continue
        changes = {
            field_name: _overlay_value(getattr(merged, field_name), value)
            for field_name, value in overlay.items()
        }
        merged = replace(merged, **changes)
    return replace(merged, included_profiles=list(names), without_profiles=base)
