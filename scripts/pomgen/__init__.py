"""Maven pom.xml generation from project descriptors."""

from .cli import generate, main
from .descriptor import load_descriptor, merge_profiles
from .pom import make_pom, make_pom_properties, write_pom
from .pom_models import Dependency, ProjectDescriptor, PomError, SnapshotDependencyError

__all__ = [
    "generate", "main", "load_descriptor", "merge_profiles", "make_pom",
    "make_pom_properties", "write_pom", "Dependency", "ProjectDescriptor",
    "PomError", "SnapshotDependencyError",
]
