"""POM tag naming tables and fixed build constants.

Pure mapping logic with no XML handling, no file I/O, and no internal
package imports. All functions are stateless string transformations.
"""

import re

# XML namespace and schema of POM model version 4.0.0.
POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = f"{POM_NAMESPACE} http://maven.apache.org/xsd/maven-4.0.0.xsd"
MODEL_VERSION = "4.0.0"

# Container tag → child tag for list-valued fields.
LIST_TAGS = {
    "dependencies": "dependency",
    "repositories": "repository",
}

# Profiles stripped from the release view.
OPTIONAL_PROFILES = ("user", "dev", "test", "default")

# Profiles merged into the test view (before any explicitly included ones).
TEST_PROFILES = ("dev", "test", "default")

# Maven only knows one source and one test source directory; extra ones are
# registered through this plugin.
HELPER_PLUGIN = {
    "group_id": "org.codehaus.mojo",
    "artifact_id": "build-helper-maven-plugin",
    "version": "1.7",
}

SNAPSHOT_MARKER = "SNAPSHOT"

_SEPARATOR = re.compile(r"[-_](\w)")


def camelize(name: str) -> str:
    """Convert a hyphen- or underscore-separated name to a POM tag name.

    Examples:
        ``group-id`` → ``groupId``, ``developer_connection`` → ``developerConnection``.

    Args:
        name: Descriptor field name.

    Returns:
        The lowerCamelCase tag name.
    """
    return _SEPARATOR.sub(lambda m: m.group(1).upper(), name)


def is_snapshot(version) -> bool:
    """Check whether a version string carries the ``SNAPSHOT`` marker."""
    return bool(version) and SNAPSHOT_MARKER in version
