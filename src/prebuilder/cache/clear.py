"""
Bulk removal of cached trees.

Removes whole per-addon cache roots, either the project's configured base
path or `<role base>/<addon name>` for every matching addon of the project.
"""

import asyncio
import logging
import os
from fnmatch import fnmatchcase
from typing import List, Optional

from .. import constants
from ..config import PrebuildSettings
from ..datacls import ClearResult, PackageInfo, Project
from ..exceptions import ClearError
from ..io import FileSystem
from ..matching import matches
from ..project import discover_packages, load_project
from ..utils.paths import is_subpath

logger = logging.getLogger(__name__)


def prebuild_base_path(project: Project, info: PackageInfo) -> str:
    """
    Cache root of one addon: `<base>/<addon name>`.

    An application's base path comes from its own manifest, an addon project's
    from the addon's manifest, falling back to `<addon path>/pre-built`.
    """
    owner = info.pkg if project.is_addon() else project.pkg
    base = PrebuildSettings.from_manifest(owner).base_path
    if base is None:
        base = os.path.join(info.real_path, constants.PREBUILT_DIRNAME)
    return os.path.join(base, info.addon_name)


def initialize_nested_apps(project: Project):
    """
    Load the apps declared under `ember-addon.apps` by known packages so their
    packages join the project's package info cache.
    """
    for info in project.package_info_cache.values():
        for app in info.nested_apps():
            app_root = os.path.join(project.root, app)
            nested = load_project(app_root, project.fs)
            nested.package_info_cache = project.package_info_cache
            discover_packages(nested)
            logger.debug(f"Initialized nested app '{nested.name()}' at {nested.root}")


def collect_addons(project: Project) -> List[PackageInfo]:
    """Addons located inside the project root that the project does not exclude"""
    if not len(project.package_info_cache):
        project.initialize_addons()
    initialize_nested_apps(project)

    excluded = project.settings.exclusion_patterns()
    root = project.fs.realpath(project.root)
    addons = []
    for info in project.package_info_cache.values():
        if not info.is_addon() or not is_subpath(info.real_path, root):
            continue
        if excluded and matches(excluded, info.name):
            logger.debug(f"Addon '{info.name}' is excluded, keeping its prebuilt trees")
            continue
        addons.append(info)
    return addons


def clear_targets(project: Project, pattern: Optional[str] = None) -> List[str]:
    """
    Cache roots the clear command removes.

    Raises:
        ConfigurationError: if the project's prebuild section is malformed
    """
    base_path = project.settings.base_path
    if pattern is None and base_path:
        return [base_path]

    addons = collect_addons(project)
    if project.is_addon() and pattern is None:
        pattern = project.name()
    if pattern:
        addons = [info for info in addons if fnmatchcase(info.name, pattern)]
    return [prebuild_base_path(project, info) for info in addons]


async def _remove(path: str, fs: FileSystem) -> ClearResult:
    existed = await asyncio.to_thread(fs.exists, path)
    await asyncio.to_thread(fs.rmtree, path)
    if existed:
        logger.info(f"Deleting prebuilt addon from the path {path}")
    else:
        logger.debug(f"Nothing to delete at {path}")
    return ClearResult(path=path, existed=existed)


async def clear_all(project: Project, pattern: Optional[str] = None) -> List[ClearResult]:
    """
    Remove cached trees of a project.

    Args:
        project: Project whose caches are removed
        pattern: Glob on addon names; all addons when omitted

    Returns:
        List[ClearResult]: one result per removed cache root, in target order

    Raises:
        ClearError: after every removal has finished, if any of them failed
    """
    targets = clear_targets(project, pattern)
    logger.debug(f"Clearing {len(targets)} prebuilt directories")
    results = await asyncio.gather(*(_remove(path, project.fs) for path in targets), return_exceptions=True)

    failures = [(path, result) for path, result in zip(targets, results) if isinstance(result, BaseException)]
    if failures:
        for path, error in failures:
            logger.error(f"Failed to delete prebuilt addon at {path}: {error}")
        path, error = failures[0]
        raise ClearError(f"Failed to delete prebuilt addon at {path}: {error}", failures=failures) from error
    return [result for result in results if isinstance(result, ClearResult)]
