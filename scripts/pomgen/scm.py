"""Source-control metadata for the ``<scm>`` block.

Recovers the current commit and the GitHub URLs of the ``origin`` remote from
a local ``.git`` directory, or passes an explicitly declared SCM map through.
Inference is best effort: missing metadata means no ``<scm>`` block.
"""

import re
import sys
from pathlib import Path
from typing import Optional

from .pom_models import ProjectDescriptor, ScmInfo

AUTO = "auto"

_REF = re.compile(r"ref: (\S+)")
_URL_LINE = re.compile(r"url\s*=\s*(\S*)\s*")
_ORIGIN_SECTION = '[remote "origin"]'

# git@github.com:user/repo.git and scheme://[git@]github.com/user/repo.git
_GITHUB_PATTERNS = (
    re.compile(r"(?:git@)?github\.com:([^/]+)/([^/]+)\.git"),
    re.compile(r"[^:]+://(?:git@)?github\.com/([^/]+)/([^/]+)\.git"),
)


def guess_scm(project: ProjectDescriptor) -> str:
    """Return the declared SCM name, or ``"auto"`` when none is declared.

    Only a descriptor without an ``scm`` map has its SCM details inferred
    from the ``.git`` directory; a declared map without a ``name`` is git.
    """
    if project.scm:
        return project.scm.get("name") or "git"
    return AUTO


def _read_packed_ref(git_dir: Path, ref_path: str) -> str:
    """Look a ref up in ``packed-refs`` once it has been garbage-collected."""
    with open(git_dir / "packed-refs", encoding="utf-8") as f:
        for line in f:
            parts = line.split()
            if len(parts) == 2 and parts[1] == ref_path:
                return parts[0]
    raise FileNotFoundError(f"No ref {ref_path} in {git_dir}")


def read_git_head(git_dir: Path) -> str:
    """Return the commit id HEAD points at.

    Follows a symbolic ``ref: refs/heads/<branch>`` to the loose ref file, or
    to ``packed-refs`` when the loose file is gone.

    Raises:
        FileNotFoundError: If HEAD or the ref it names cannot be found.
    """
    head = (git_dir / "HEAD").read_text(encoding="utf-8").strip()
    match = _REF.search(head)
    if not match:
        return head
    ref_path = match.group(1)
    try:
        return (git_dir / ref_path).read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return _read_packed_ref(git_dir, ref_path)


def read_git_origin(git_dir: Path) -> Optional[str]:
    """Return the URL of the ``origin`` remote from the git ``config`` file.

    Returns:
        The first ``url = ...`` value in the ``[remote "origin"]`` section,
        or ``None`` when there is no such section or URL.

    Raises:
        FileNotFoundError: If there is no ``config`` file.
    """
    with open(git_dir / "config", encoding="utf-8") as f:
        in_origin = False
        for raw in f:
            line = raw.strip()
            if not in_origin:
                in_origin = line == _ORIGIN_SECTION
                continue
            if line.startswith("["):
                break
            match = _URL_LINE.fullmatch(line)
            if match:
                return match.group(1)
    return None


def parse_github_url(url: Optional[str]) -> Optional[tuple]:
    """Parse a GitHub remote URL into a ``(user, repo)`` pair.

    Returns ``None`` for anything that is not a GitHub SSH or scheme URL.
    """
    if not url:
        return None
    for pattern in _GITHUB_PATTERNS:
        match = pattern.fullmatch(url)
        if match:
            return match.group(1), match.group(2)
    return None


def github_urls(url: Optional[str]) -> Optional[dict]:
    """Derive the public clone, developer clone and browse URLs of a GitHub remote."""
    parsed = parse_github_url(url)
    if parsed is None:
        return None
    user, repo = parsed
    return {
        "public_clone": f"git://github.com/{user}/{repo}.git",
        "dev_clone": f"ssh://git@github.com/{user}/{repo}.git",
        "browse": f"https://github.com/{user}/{repo}",
    }


def _scm_url(url: Optional[str]) -> Optional[str]:
    return f"scm:git:{url}" if url else None


def infer_git_scm(git_dir: Path) -> Optional[ScmInfo]:
    """Infer SCM details from a ``.git`` directory.

    The commit is always reported when HEAD resolves; the URLs only when
    ``origin`` is a GitHub remote.

    Args:
        git_dir: Path to the repository's ``.git`` directory.

    Returns:
        The inferred ScmInfo, or ``None`` when the git metadata is missing
        or unreadable.
    """
    try:
        origin = read_git_origin(git_dir)
        head = read_git_head(git_dir)
    except (FileNotFoundError, NotADirectoryError):
        return None
    except (OSError, UnicodeDecodeError) as e:
        print(f"WARNING: Could not read git metadata in {git_dir}: {e}", file=sys.stderr)
        return None
    urls = github_urls(origin) or {}
    return ScmInfo(
        connection=_scm_url(urls.get("public_clone")),
        developer_connection=_scm_url(urls.get("dev_clone")),
        tag=head,
        url=urls.get("browse"),
    )


def resolve_scm(declaration, git_dir: Path) -> Optional[ScmInfo]:
    """Resolve the SCM details for a project.

    Args:
        declaration: ``"auto"`` to infer from ``git_dir``, otherwise the
            descriptor's explicit SCM map (hyphenated keys).
        git_dir: Path to the project's ``.git`` directory.

    Returns:
        ScmInfo, or ``None`` when inference finds nothing.
    """
    if declaration == AUTO:
        return infer_git_scm(git_dir)
    return ScmInfo(
        connection=declaration.get("connection"),
        developer_connection=declaration.get("developer-connection"),
        tag=declaration.get("tag"),
        url=declaration.get("url"),
    )
