"""Tests for pom.py: end-to-end POM and pom.properties generation."""

import xml.etree.ElementTree as ET

import pytest

from pomgen.descriptor import merge_profiles
from pomgen.element import NS, read_dependencies
from pomgen.pom import (
    DISCLAIMER,
    _escape_property,
    make_pom,
    make_pom_properties,
    write_pom,
    write_pom_properties,
)
from pomgen.pom_models import Dependency, Repository, SnapshotDependencyError


def _parse(text: str) -> ET.Element:
    return ET.fromstring(text)


class TestMakePom:
    def test_basic_document(self, make_project):
        text = make_pom(make_project())
        assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        root = _parse(text)
        assert root.tag == "{http://maven.apache.org/POM/4.0.0}project"
        assert root.find("m:modelVersion", NS).text == "4.0.0"
        assert root.find("m:groupId", NS).text == "com.example"
        assert root.find("m:artifactId", NS).text == "demo"
        assert root.find("m:packaging", NS).text == "jar"
        assert root.find("m:version", NS).text == "1.0.0"

    def test_schema_location(self, make_project):
        root = _parse(make_pom(make_project()))
        location = root.get("{http://www.w3.org/2001/XMLSchema-instance}schemaLocation")
        assert location == "http://maven.apache.org/POM/4.0.0 http://maven.apache.org/xsd/maven-4.0.0.xsd"

    def test_paths_are_relative(self, make_project):
        build = _parse(make_pom(make_project())).find("m:build", NS)
        assert build.find("m:sourceDirectory", NS).text == "src"
        assert build.find("m:testSourceDirectory", NS).text == "test"
        assert build.find("m:directory", NS).text == "target"
        assert build.find("m:outputDirectory", NS).text == "target/classes"
        resource = build.find("m:resources/m:resource/m:directory", NS)
        assert resource.text == "resources"

    def test_empty_resources_omitted(self, make_project):
        build = _parse(make_pom(make_project(resource_paths=[]))).find("m:build", NS)
        assert build.find("m:resources", NS) is None

    def test_snapshot_guard(self, make_project):
        project = make_project(version="1.0.0", dependencies=[Dependency("foo/bar", "2.0.0-SNAPSHOT")])
        with pytest.raises(SnapshotDependencyError):
            make_pom(project)

    def test_snapshot_project_succeeds(self, make_project):
        project = make_project(version="1.0.0-SNAPSHOT", dependencies=[Dependency("foo/bar", "2.0.0-SNAPSHOT")])
        assert "2.0.0-SNAPSHOT" in make_pom(project)

    def test_snapshot_override(self, make_project):
        project = make_project(dependencies=[Dependency("foo/bar", "2.0.0-SNAPSHOT")])
        assert "2.0.0-SNAPSHOT" in make_pom(project, allow_snapshots=True)

    def test_snapshot_in_dev_profile_allowed(self, make_project):
        project = make_project(profiles={"dev": {"dependencies": [Dependency("foo/bar", "2.0.0-SNAPSHOT")]}})
        make_pom(merge_profiles(project, ["dev"]))

    def test_disclaimer(self, make_project):
        assert make_pom(make_project(), disclaimer=True).endswith(DISCLAIMER)
        assert "autogenerated" not in make_pom(make_project())

    def test_dev_dependencies_test_scoped(self, make_project, clojure_dep):
        project = make_project(
            dependencies=[clojure_dep],
            profiles={"dev": {"dependencies": [Dependency("ring/ring-mock", "0.4.0")]}},
        )
        assert read_dependencies(make_pom(merge_profiles(project, ["dev"]))) == [
            ("org.clojure", "clojure", "1.11.1", None),
            ("ring", "ring-mock", "0.4.0", "test"),
        ]

    def test_dependency_round_trip(self, make_project):
        deps = [
            Dependency("org.clojure/clojure", "1.11.1"),
            Dependency("javax.servlet/servlet-api", "2.5", scope="provided"),
            Dependency("cheshire", "5.13.0", optional=True),
        ]
        project = make_project(
            dependencies=deps,
            profiles={"test": {"dependencies": [Dependency("midje", "1.10.9")]}},
        )
        assert read_dependencies(make_pom(project)) == [
            ("org.clojure", "clojure", "1.11.1", None),
            ("javax.servlet", "servlet-api", "2.5", "provided"),
            ("cheshire", "cheshire", "5.13.0", None),
            ("midje", "midje", "1.10.9", "test"),
        ]

    def test_repositories(self, make_project):
        project = make_project(repositories=[Repository("clojars", "https://repo.clojars.org/")])
        repo = _parse(make_pom(project)).find("m:repositories/m:repository", NS)
        assert repo.find("m:id", NS).text == "clojars"
        assert repo.find("m:snapshots/m:enabled", NS).text == "true"

    def test_scm_from_git(self, make_project, git_repo):
        git_repo(origin="https://github.com/foo/bar.git", commit="cafebabe")
        scm = _parse(make_pom(make_project())).find("m:scm", NS)
        assert scm.find("m:connection", NS).text == "scm:git:git://github.com/foo/bar.git"
        assert scm.find("m:developerConnection", NS).text == "scm:git:ssh://git@github.com/foo/bar.git"
        assert scm.find("m:tag", NS).text == "cafebabe"
        assert scm.find("m:url", NS).text == "https://github.com/foo/bar"

    def test_no_git_no_scm(self, make_project):
        assert _parse(make_pom(make_project())).find("m:scm", NS) is None


class TestPomProperties:
    def test_entries(self, make_project):
        lines = make_pom_properties(make_project()).decode("iso-8859-1").splitlines()
        assert lines[0] == "#pomgen"
        assert lines[1].startswith("#")
        assert lines[2:] == ["version=1.0.0", "groupId=com.example", "artifactId=demo"]

    def test_escape_value(self):
        assert _escape_property("a b:c=d", False) == "a b\\:c\\=d"

    def test_escape_leading_space(self):
        assert _escape_property(" x", False) == "\\ x"

    def test_escape_key_spaces(self):
        assert _escape_property("a b", True) == "a\\ b"

    def test_escape_non_ascii(self):
        assert _escape_property("café", False) == "caf\\u00E9"


class TestWritePom:
    def test_writes_under_root(self, make_project, project_root, capsys):
        path = write_pom(make_project(), "target/classes/META-INF/pom.xml")
        assert path == (project_root / "target" / "classes" / "META-INF" / "pom.xml").resolve()
        assert path.read_text(encoding="utf-8").endswith(DISCLAIMER)
        assert f"Wrote {path}" in capsys.readouterr().out

    def test_default_location(self, make_project, project_root):
        assert write_pom(make_project()) == (project_root / "pom.xml").resolve()

    def test_properties_file(self, make_project, project_root):
        path = write_pom_properties(make_project(), "pom.properties")
        assert b"artifactId=demo" in path.read_bytes()
