import pytest

from prebuilder.datacls import AddonOptions, PackageInfo, ProjectRole
from prebuilder.exceptions import ManifestMissingError
from prebuilder.project import discover_packages, find_addons, load_project, make_addon, project_addon


class TestLoadProject:

    def test_application(self, write_package, disk_fs):
        root = write_package("app", {"name": "app", "browserslist": ["Chrome 80", "Firefox 70"]})
        project = load_project(root, disk_fs)
        assert project.role == ProjectRole.APP
        assert not project.is_addon()
        assert project.name() == "app"
        assert project.root == str(root)
        assert project.targets == {"browsers": ["Chrome 80", "Firefox 70"]}

    def test_addon_detected_from_keywords(self, write_package, disk_fs):
        root = write_package("my-addon", {"name": "my-addon", "keywords": ["ember-addon"]})
        assert load_project(root, disk_fs).is_addon()

    def test_role_can_be_forced(self, write_package, disk_fs):
        root = write_package("app", {"name": "app"})
        assert load_project(root, disk_fs, role=ProjectRole.ADDON).is_addon()

    def test_single_browserslist_string(self, write_package, disk_fs):
        root = write_package("app", {"name": "app", "browserslist": "defaults"})
        assert load_project(root, disk_fs).targets == {"browsers": ["defaults"]}

    def test_missing_manifest(self, tmp_path, disk_fs):
        with pytest.raises(ManifestMissingError):
            load_project(tmp_path, disk_fs)


class TestDiscovery:

    def test_discovers_nested_and_scoped_packages(self, write_package, disk_fs):
        root = write_package("app", {"name": "app"})
        write_package("app/node_modules/a-addon", {"name": "a-addon", "keywords": ["ember-addon"]})
        write_package("app/node_modules/a-addon/node_modules/b-addon", {"name": "b-addon", "keywords": ["ember-addon"]})
        write_package("app/node_modules/@scope/c-lib", {"name": "@scope/c-lib"})
        (root / "node_modules" / "not-a-package").mkdir()

        project = load_project(root, disk_fs).initialize_addons()

        names = sorted(info.name for info in project.package_info_cache.values())
        assert names == ["@scope/c-lib", "a-addon", "app", "b-addon"]
        assert sorted(info.name for info in find_addons(project)) == ["a-addon", "b-addon"]

    def test_discovery_is_idempotent(self, write_package, disk_fs):
        root = write_package("app", {"name": "app"})
        write_package("app/node_modules/a-addon", {"name": "a-addon", "keywords": ["ember-addon"]})
        project = load_project(root, disk_fs)
        assert discover_packages(project) == 2
        assert discover_packages(project) == 0

    def test_shared_package_recorded_once(self, write_package, disk_fs):
        root = write_package("app", {"name": "app"})
        shared = write_package("shared", {"name": "shared-addon", "keywords": ["ember-addon"]})
        write_package("app/node_modules/a-addon", {"name": "a-addon"})
        (root / "node_modules" / "shared-addon").symlink_to(shared, target_is_directory=True)
        (root / "node_modules" / "a-addon" / "node_modules").mkdir()
        (root / "node_modules" / "a-addon" / "node_modules" / "shared-addon").symlink_to(shared, target_is_directory=True)

        project = load_project(root, disk_fs).initialize_addons()

        assert [info.name for info in find_addons(project)] == ["shared-addon"]
        assert str(shared) in project.package_info_cache


class TestAddons:

    def test_make_addon_from_package_info(self, make_project):
        project = make_project()
        info = PackageInfo(name="scoped-name", real_path="/work/app/node_modules/x", pkg={"name": "scoped-name"}, main_name="x")
        addon = make_addon(info, project, options=AddonOptions(babel={"loose": True}))
        assert addon.name == "x"
        assert addon.root == "/work/app/node_modules/x"
        assert addon.parent.pkg == project.pkg
        assert addon.options.resolved_babel() == {"loose": True}

    def test_project_addon_is_developed(self, make_project):
        project = make_project(pkg={"name": "my-addon", "keywords": ["ember-addon"]}, role=ProjectRole.ADDON)
        addon = project_addon(project)
        assert addon.name == "my-addon"
        assert addon.root == project.root
        assert addon.is_developing_addon()
