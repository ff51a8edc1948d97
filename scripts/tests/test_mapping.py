"""Tests for mapping.py and coordinate handling in pom_models.py."""

from pomgen.mapping import LIST_TAGS, camelize, is_snapshot
from pomgen.pom_models import Dependency, Exclusion, split_coordinate


class TestCamelize:
    def test_hyphenated(self):
        assert camelize("group-id") == "groupId"

    def test_multiple_separators(self):
        assert camelize("test-source-directory") == "testSourceDirectory"

    def test_underscore(self):
        assert camelize("developer_connection") == "developerConnection"

    def test_plain_name_unchanged(self):
        assert camelize("url") == "url"


class TestIsSnapshot:
    def test_snapshot(self):
        assert is_snapshot("2.0.0-SNAPSHOT")

    def test_release(self):
        assert not is_snapshot("2.0.0")

    def test_missing_version(self):
        assert not is_snapshot(None)


class TestListTags:
    def test_children(self):
        assert LIST_TAGS == {"dependencies": "dependency", "repositories": "repository"}


class TestCoordinates:
    def test_namespaced(self):
        assert split_coordinate("org.clojure/clojure") == ("org.clojure", "clojure")

    def test_unnamespaced_group_defaults_to_artifact(self):
        assert split_coordinate("ring") == ("ring", "ring")

    def test_dependency_properties(self):
        dep = Dependency("org.clojure/tools.logging", "1.2.4")
        assert dep.group_id == "org.clojure"
        assert dep.artifact_id == "tools.logging"

    def test_exclusion_properties(self):
        ex = Exclusion("log4j")
        assert ex.group_id == "log4j"
        assert ex.artifact_id == "log4j"

    def test_structural_equality(self):
        a = Dependency("a/b", "1.0", exclusions=(Exclusion("c/d"),))
        b = Dependency("a/b", "1.0", exclusions=(Exclusion("c/d"),))
        assert a == b
        assert hash(a) == hash(b)
