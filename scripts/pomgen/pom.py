"""POM and pom.properties generation.

Entry points used by the CLI: ``make_pom`` renders the POM text,
``make_pom_properties`` the companion properties file, and ``write_pom``
writes the POM under the project root.
"""

from datetime import datetime
from pathlib import Path

from .element import to_xml
from .pom_models import ProjectDescriptor
from .reconcile import build_release_view, check_for_snapshot_deps
from .transform import transform

# A notice placed at the bottom of generated POM files.
DISCLAIMER = (
    "\n<!-- This file was autogenerated by pomgen.\n"
    "  Please do not edit it directly; instead edit the project descriptor and regenerate it.\n"
    "  It should not be considered canonical data. -->\n"
)

# java.util.Properties escapes for keys and values.
_PROPERTY_ESCAPES = {
    "\\": "\\\\",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}


def make_pom(project: ProjectDescriptor, disclaimer: bool = False, allow_snapshots: bool = False) -> str:
    """Render the POM document for a project.

    The development profiles are removed for the release view, the snapshot
    guard runs on it, and the ``<project>`` tree is serialized.

    Args:
        project: The project descriptor, with absolute paths.
        disclaimer: Append the "autogenerated, do not edit" comment.
        allow_snapshots: Allow a release version to depend on snapshots.

    Returns:
        The POM XML text.

    Raises:
        SnapshotDependencyError: If a release depends on snapshots and
            ``allow_snapshots`` is not set.
    """
    release = build_release_view(project)
    check_for_snapshot_deps(release, allow_snapshots)
    text = to_xml(transform("project", release))
    if disclaimer:
        text += DISCLAIMER
    return text


def _escape_property(text: str, is_key: bool) -> str:
    """Escape a key or value the way ``java.util.Properties.store`` does.

    Characters outside printable ASCII become ``\\uXXXX`` escapes (UTF-16
    code units), so the output is plain ISO-8859-1.
    """
    out = []
    for i, ch in enumerate(text):
        if ch == " " and (is_key or i == 0):
            out.append("\\ ")
        elif ch in _PROPERTY_ESCAPES:
            out.append(_PROPERTY_ESCAPES[ch])
        elif " " <= ch <= "~":
            out.append(ch)
        else:
            encoded = ch.encode("utf-16-be")
            for j in range(0, len(encoded), 2):
                out.append(f"\\u{int.from_bytes(encoded[j:j + 2], 'big'):04X}")
    return "".join(out)


def make_pom_properties(project: ProjectDescriptor) -> bytes:
    """Render the ``pom.properties`` file packaged next to the POM.

    Returns:
        Properties-format bytes with ``version``, ``groupId`` and
        ``artifactId`` entries, preceded by a comment and a timestamp.
    """
    timestamp = datetime.now().astimezone().strftime("%a %b %d %H:%M:%S %Z %Y")
    lines = ["#pomgen", f"#{timestamp}"]
    for key, value in (
        ("version", project.version),
        ("groupId", project.group),
        ("artifactId", project.name),
    ):
        lines.append(f"{_escape_property(key, True)}={_escape_property(value or '', False)}")
    return ("\n".join(lines) + "\n").encode("iso-8859-1")


def _write(path: Path, content):
    """Write text or bytes to a file, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    print(f"Wrote {path}")


def write_pom(
    project: ProjectDescriptor,
    pom_location: str = "pom.xml",
    disclaimer: bool = True,
    allow_snapshots: bool = False,
) -> Path:
    """Write the project's POM to disk.

    Args:
        project: The project descriptor.
        pom_location: Path of the POM relative to ``project.root``.
        disclaimer: Append the "autogenerated, do not edit" comment.
        allow_snapshots: Allow a release version to depend on snapshots.

    Returns:
        Absolute path of the written file.
    """
    text = make_pom(project, disclaimer=disclaimer, allow_snapshots=allow_snapshots)
    pom_file = Path(project.root or ".", pom_location).resolve()
    _write(pom_file, text)
    return pom_file


def write_pom_properties(project: ProjectDescriptor, location: str) -> Path:
    """Write ``pom.properties`` relative to the project root and return its absolute path."""
    properties_file = Path(project.root or ".", location).resolve()
    _write(properties_file, make_pom_properties(project))
    return properties_file
