import json
from pathlib import Path

import pytest

from prebuilder.cache import CacheStore, derive_key
from prebuilder.datacls import Addon, AddonOptions, Project
from prebuilder.exceptions import StorageError
from prebuilder.trees import DirectoryTree, TeeTree


@pytest.fixture
def project(tmp_path: Path, disk_fs):
    root = tmp_path / "app"
    (root / "node_modules" / "my-addon").mkdir(parents=True)
    return Project(
        root=root,
        pkg={"name": "app", "prebuild": {"prebuild-base-path": str(tmp_path / "cache")}},
        targets={"browsers": ["Chrome 80", "firefox 70"]},
        fs=disk_fs,
    )


@pytest.fixture
def addon(project):
    return Addon(
        name="my-addon",
        root=f"{project.root}/node_modules/my-addon",
        project=project,
        pkg={"name": "my-addon", "version": "1.0.0"},
        options=AddonOptions(babel={"loose": True}, **{"ember-cli-babel": {"compileModules": True}}),
    )


@pytest.fixture
def built(tmp_path: Path):
    """A materialised tree produced by the build engine."""
    def _built(tree_type: str) -> Path:
        directory = tmp_path / "dist" / tree_type
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "index.js").write_text(f"// {tree_type}")
        return directory
    return _built


@pytest.fixture
def store(disk_fs):
    return CacheStore(disk_fs)


def count_writes(monkeypatch, fs, filename):
    writes = []
    original = fs.write_text

    def spy(path, content, *args, **kwargs):
        if str(path).endswith(filename):
            writes.append(str(path))
        return original(path, content, *args, **kwargs)

    monkeypatch.setattr(fs, "write_text", spy)
    return writes


class TestPersist:

    def test_not_eligible_is_pass_through(self, store, addon, built):
        output = DirectoryTree(built("styles"))
        assert store.persist(addon, "styles", output) is output
        assert store.summary_entries() == []

    def test_persist_wraps_output_and_writes_metadata(self, store, addon, built, tmp_path):
        output = DirectoryTree(built("addon"))
        wrapped = store.persist(addon, "addon", output)

        assert isinstance(wrapped, TeeTree)
        key = derive_key(addon)
        entry_dir = tmp_path / "cache" / "my-addon" / key
        metadata = json.loads((entry_dir / "metadata").read_text())
        assert metadata == {
            "name": "my-addon",
            "babelOptions": {"loose": True},
            "options.ember-cli-babel": {"compileModules": True},
            "targets": {"browsers": ["chrome 80", "firefox 70"]},
        }
        # nothing is copied before the tree is materialised
        assert not (entry_dir / "addon" / "index.js").exists()

        assert wrapped.materialize() == output.materialize()
        assert (entry_dir / "addon" / "index.js").read_text() == "// addon"

    def test_unmaterialized_persist_is_not_a_hit(self, store, addon, built, disk_fs, tmp_path):
        store.persist(addon, "addon", DirectoryTree(built("addon")))

        entry_dir = tmp_path / "cache" / "my-addon" / derive_key(addon)
        assert (entry_dir / "metadata").exists()
        assert not (entry_dir / "addon").exists()
        assert CacheStore(disk_fs).try_reuse(addon, "addon") is None

    def test_materialize_copies_once(self, store, addon, built, monkeypatch):
        wrapped = store.persist(addon, "addon", DirectoryTree(built("addon")))
        calls = []
        monkeypatch.setattr(store, "execute_store_plan", lambda plan, path: calls.append(path))
        wrapped.materialize()
        wrapped.materialize()
        assert len(calls) == 1

    def test_two_tree_types_write_one_metadata(self, store, addon, built, tmp_path, monkeypatch):
        writes = count_writes(monkeypatch, store.fs, "metadata")
        store.persist(addon, "addon", DirectoryTree(built("addon"))).materialize()
        store.persist(addon, "templates", DirectoryTree(built("templates"))).materialize()

        assert len(writes) == 1
        entry_dir = tmp_path / "cache" / "my-addon" / derive_key(addon)
        assert (entry_dir / "addon" / "index.js").exists()
        assert (entry_dir / "templates" / "index.js").exists()

    def test_reset_allows_a_new_metadata_write(self, store, addon, built, monkeypatch):
        writes = count_writes(monkeypatch, store.fs, "metadata")
        store.persist(addon, "addon", DirectoryTree(built("addon")))
        store.reset()
        store.persist(addon, "addon", DirectoryTree(built("addon")))
        assert len(writes) == 2

    def test_store_replaces_previous_content(self, store, addon, built, tmp_path):
        stale = tmp_path / "cache" / "my-addon" / derive_key(addon) / "addon" / "stale.js"
        stale.parent.mkdir(parents=True)
        stale.write_text("old")
        store.persist(addon, "addon", DirectoryTree(built("addon"))).materialize()
        assert not stale.exists()

    def test_metadata_failure_propagates(self, store, addon, built, monkeypatch):
        def fail(*args, **kwargs):
            raise StorageError("disk full")

        monkeypatch.setattr(store.fs, "write_text", fail)
        with pytest.raises(StorageError, match="disk full"):
            store.persist(addon, "addon", DirectoryTree(built("addon")))
        assert store.summary_entries() == []

    def test_plan_store_has_no_side_effects(self, store, addon, tmp_path):
        plan = store.plan_store(addon, "addon")
        assert plan.cache_key == derive_key(addon)
        assert plan.store_path.endswith(f"my-addon/{plan.cache_key}/addon")
        assert plan.metadata_path.endswith(f"my-addon/{plan.cache_key}/metadata")
        assert not (tmp_path / "cache").exists()


class TestTryReuse:

    def test_miss_returns_none(self, store, addon):
        assert store.try_reuse(addon, "addon") is None
        assert store.summary_entries() == []

    def test_hit_returns_path_and_records_usage(self, store, addon, built, caplog):
        store.persist(addon, "addon", DirectoryTree(built("addon"))).materialize()
        store.reset()

        with caplog.at_level("INFO"):
            path = store.try_reuse(addon, "addon")

        assert path is not None and Path(path, "index.js").exists()
        [entry] = store.summary_entries()
        assert entry.using_prebuild is True
        assert entry.prebuild_path == path
        assert f"Using prebuilt addon my-addon for treeType addon from {path}" in caplog.text

    def test_not_eligible_is_never_reused(self, store, addon, built, monkeypatch):
        store.persist(addon, "addon", DirectoryTree(built("addon"))).materialize()
        monkeypatch.setenv("EXCLUDEADDONS", "my-addon")
        assert store.try_reuse(addon, "addon") is None

    def test_reuse_then_persist_writes_one_metadata(self, store, addon, built, monkeypatch):
        store.persist(addon, "addon", DirectoryTree(built("addon"))).materialize()
        store.reset()
        writes = count_writes(monkeypatch, store.fs, "metadata")

        assert store.try_reuse(addon, "addon") is not None
        store.persist(addon, "addon", DirectoryTree(built("addon")))
        store.persist(addon, "templates", DirectoryTree(built("templates")))

        assert len(writes) == 1
        [entry] = store.summary_entries()
        assert entry.using_prebuild is False


class TestSummary:

    def test_later_event_only_flips_usage(self, store):
        store.record("k", "first", "/a", "addon", using_prebuild=False)
        store.record("k", "second", "/b", "templates", using_prebuild=True)
        [entry] = store.summary_entries()
        assert (entry.name, entry.prebuild_path, entry.tree_type, entry.using_prebuild) == ("first", "/a", "addon", True)

    def test_entries_keep_insertion_order(self, store):
        for key in ("b", "a", "c"):
            store.record(key, key, f"/{key}", "addon", using_prebuild=False)
        assert [entry.name for entry in store.summary_entries()] == ["b", "a", "c"]

    def test_entries_are_copies(self, store):
        store.record("k", "name", "/a", "addon", using_prebuild=False)
        store.summary_entries()[0].using_prebuild = True
        assert store.summary_entries()[0].using_prebuild is False
