"""Shared test fixtures for the pom.xml generation test suite."""

import json
from pathlib import Path

import pytest

from pomgen.pom_models import Dependency, ProjectDescriptor


@pytest.fixture
def project_root(tmp_path):
    """An existing, empty project directory."""
    root = tmp_path / "demo"
    root.mkdir()
    return root


@pytest.fixture
def make_project(project_root):
    """Factory fixture building a ProjectDescriptor with absolute paths under ``project_root``."""
    def _make(**overrides) -> ProjectDescriptor:
        root = str(project_root)
        kwargs = dict(
            root=root,
            group="com.example",
            name="demo",
            version="1.0.0",
            source_paths=[f"{root}/src"],
            test_paths=[f"{root}/test"],
            resource_paths=[f"{root}/resources"],
            target_path=f"{root}/target",
            compile_path=f"{root}/target/classes",
        )
        kwargs.update(overrides)
        return ProjectDescriptor(**kwargs)
    return _make


@pytest.fixture
def clojure_dep():
    return Dependency("org.clojure/clojure", "1.11.1")


@pytest.fixture
def git_repo(project_root):
    """Factory fixture that writes a minimal ``.git`` directory into ``project_root``."""
    def _init(
        origin: str = "git@github.com:foo/bar.git",
        head: str = "ref: refs/heads/main",
        commit: str = "abc123",
    ) -> Path:
        git_dir = project_root / ".git"
        (git_dir / "refs" / "heads").mkdir(parents=True)
        (git_dir / "HEAD").write_text(head + "\n", encoding="utf-8")
        (git_dir / "refs" / "heads" / "main").write_text(commit + "\n", encoding="utf-8")
        config = "[core]\n\tbare = false\n"
        if origin:
            config += (
                '[remote "origin"]\n'
                f"\turl = {origin}\n"
                "\tfetch = +refs/heads/*:refs/remotes/origin/*\n"
            )
        config += '[branch "main"]\n\tremote = origin\n'
        (git_dir / "config").write_text(config, encoding="utf-8")
        return git_dir
    return _init


@pytest.fixture
def tmp_descriptor(tmp_path):
    """Factory fixture that writes a JSON project descriptor and returns its path."""
    def _write(data: dict) -> Path:
        path = tmp_path / "project.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
