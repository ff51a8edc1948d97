"""Rewrites descriptor paths relative to the project root."""

import os
from dataclasses import replace

from .descriptor import PATH_FIELDS, PATH_LIST_FIELDS
from .pom_models import ProjectDescriptor


def _strip_root(path, prefix: str):
    if path is not None and path.startswith(prefix):
        return path[len(prefix):]
    return path


def relativize(project: ProjectDescriptor) -> ProjectDescriptor:
    """Make the descriptor's path fields relative to ``project.root``.

    Strips a leading ``root + os.sep`` from ``target_path``, ``compile_path``
    and every entry of the source, Java source, test and resource path lists.
    Paths outside the root are kept as they are.

    Args:
        project: Descriptor with absolute paths.

    Returns:
        A copy of the descriptor with the rewritten paths.
    """
    if not project.root:
        return project
    prefix = project.root.rstrip(os.sep) + os.sep
    changes = {}
    for name in PATH_FIELDS:
        changes[name] = _strip_root(getattr(project, name), prefix)
    for name in PATH_LIST_FIELDS:
        changes[name] = [_strip_root(p, prefix) for p in getattr(project, name)]
    return replace(project, **changes)
