import json
from pathlib import Path

import pytest

from prebuilder.datacls import Addon, Project, ProjectRole
from prebuilder.io import DiskFileSystem, MemoryFileSystem


@pytest.fixture(autouse=True)
def no_env_exclusions(monkeypatch):
    """Keep a developer's EXCLUDEADDONS out of the tests."""
    monkeypatch.delenv("EXCLUDEADDONS", raising=False)


@pytest.fixture
def mem_fs():
    return MemoryFileSystem()


@pytest.fixture
def disk_fs():
    return DiskFileSystem()


@pytest.fixture
def make_project(mem_fs):
    """Factory for projects rooted at /work/app on the in-memory filesystem by default."""
    def _make(pkg=None, root="/work/app", browsers=("last 1 Chrome versions",), role=ProjectRole.APP, fs=None):
        return Project(
            root=root,
            pkg=pkg if pkg is not None else {"name": "app"},
            targets={"browsers": list(browsers)},
            role=role,
            fs=fs or mem_fs,
        )
    return _make


@pytest.fixture
def make_addon(make_project):
    """Factory for addons installed in the project's node_modules by default."""
    def _make(name="my-addon", project=None, root=None, pkg=None, **kwargs):
        project = project or make_project()
        return Addon(
            name=name,
            root=root or f"{project.root}/node_modules/{name}",
            project=project,
            pkg=pkg if pkg is not None else {"name": name, "version": "1.0.0"},
            **kwargs,
        )
    return _make


@pytest.fixture
def write_package(tmp_path: Path):
    """Write a package.json under tmp_path and return its directory."""
    def _write(relative: str, pkg: dict) -> Path:
        directory = tmp_path / relative
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "package.json").write_text(json.dumps(pkg))
        return directory
    return _write
