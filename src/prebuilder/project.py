"""
Project loading and package discovery.

Reads the project manifest, works out whether the project is an application
or a reusable addon, and fills the project's package info cache by scanning
`node_modules` directories.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from . import constants
from .config import load_manifest
from .datacls import Addon, AddonOptions, PackageInfo, Project, ProjectRole
from .exceptions import ManifestMissingError
from .io import FileSystem, DiskFileSystem, PathLike

logger = logging.getLogger(__name__)


def detect_role(pkg: Dict[str, Any]) -> ProjectRole:
    """A package whose keywords contain 'ember-addon' is a reusable addon"""
    keywords = pkg.get("keywords") or []
    return ProjectRole.ADDON if constants.ADDON_KEYWORD in keywords else ProjectRole.APP


def read_targets(pkg: Dict[str, Any]) -> Dict[str, Any]:
    """Build targets declared through the manifest's `browserslist` list"""
    browsers = pkg.get(constants.BROWSERSLIST_KEY) or []
    if isinstance(browsers, str):
        browsers = [browsers]
    return {"browsers": list(browsers)}


def load_project(root: PathLike, fs: Optional[FileSystem] = None, role: Optional[ProjectRole] = None) -> Project:
    """
    Load the project rooted at `root`.

    Args:
        root: Directory holding the project's package.json
        fs: File system to read from, the local disk by default
        role: Force the project role instead of detecting it from the manifest

    Returns:
        Project: the loaded project, without discovered packages

    Raises:
        ManifestMissingError: if `root` has no package.json
        ManifestParsingError: if the manifest is not a JSON object
    """
    fs = fs or DiskFileSystem()
    pkg = load_manifest(root, fs)
    project = Project(
        root=root,
        pkg=pkg,
        targets=read_targets(pkg),
        role=role or detect_role(pkg),
        fs=fs,
    )
    logger.debug(f"Loaded {project.role.value} project '{project.name()}' at {project.root}")
    return project


def _package_dirs(node_modules: str, fs: FileSystem) -> List[str]:
    """Package directories directly below a node_modules directory, scoped ones included"""
    found = []
    for entry in fs.listdir(node_modules):
        if not fs.is_dir(entry):
            continue
        if os.path.basename(entry).startswith("@"):
            found.extend(child for child in fs.listdir(entry) if fs.is_dir(child))
        else:
            found.append(entry)
    return found


def _read_package(directory: str, fs: FileSystem) -> Optional[PackageInfo]:
    try:
        pkg = load_manifest(directory, fs)
    except ManifestMissingError:
        logger.debug(f"Skipping '{directory}', no {constants.MANIFEST_FILENAME}")
        return None
    return PackageInfo(
        name=pkg.get("name") or os.path.basename(directory),
        real_path=fs.realpath(directory),
        pkg=pkg,
    )


def discover_packages(project: Project) -> int:
    """
    Fill the project's package info cache.

    The project itself and every package reachable through nested
    `node_modules` directories are recorded once, keyed by real path.

    Returns:
        int: number of newly recorded packages
    """
    fs = project.fs
    cache = project.package_info_cache
    before = len(cache)
    root = fs.realpath(project.root)
    cache.add(PackageInfo(name=project.name() or os.path.basename(root), real_path=root, pkg=project.pkg))

    pending = [root]
    visited = set()
    while pending:
        directory = pending.pop()
        if directory in visited:
            continue
        visited.add(directory)
        node_modules = os.path.join(directory, constants.NODE_MODULES)
        if not fs.is_dir(node_modules):
            continue
        for package_dir in _package_dirs(node_modules, fs):
            info = _read_package(package_dir, fs)
            if info is None or info.real_path in cache:
                continue
            cache.add(info)
            pending.append(info.real_path)

    added = len(cache) - before
    logger.debug(f"Discovered {added} packages for project '{project.name()}'")
    return added


def make_addon(
    info: PackageInfo,
    project: Project,
    parent: Optional[Any] = None,
    options: Optional[AddonOptions] = None,
    developing: bool = False,
) -> Addon:
    """Addon model for a discovered package"""
    return Addon(
        name=info.addon_name,
        root=info.real_path,
        project=project,
        pkg=info.pkg,
        options=options or AddonOptions(),
        parent=parent if parent is not None else project,
        developing=developing,
    )


def find_addons(project: Project) -> List[PackageInfo]:
    """Discovered packages that are addons"""
    return [info for info in project.package_info_cache.values() if info.is_addon()]


def project_addon(project: Project, options: Optional[AddonOptions] = None) -> Addon:
    """
    The addon a reusable addon project builds: the project itself, under development.
    """
    info = PackageInfo(name=project.name() or os.path.basename(project.root), real_path=project.root, pkg=project.pkg)
    return make_addon(info, project, parent=None, options=options, developing=True)
