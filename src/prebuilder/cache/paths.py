"""
Cache entry locations.

A cache entry lives at `<base>/<addon name>/<key>/<tree type>` where `base` is
the configured `prebuild-base-path` of the scope owner, or `<addon root>/pre-built`.
"""

import logging
import os
from typing import Optional

from .. import constants
from ..datacls import Addon
from ..io import FileSystem
from ..utils.paths import abspath

logger = logging.getLogger(__name__)


def scope_base_path(addon: Addon, app_scope: bool) -> str:
    """
    Base directory of the cache for one scope.

    Args:
        addon: Addon the cache entry belongs to
        app_scope: read the base path from the project manifest instead of the addon's

    Returns:
        str: configured base path, or `<addon root>/pre-built`
    """
    settings = addon.project.settings if app_scope else addon.settings
    if settings.base_path is not None:
        return settings.base_path
    return os.path.join(abspath(addon.root), constants.PREBUILT_DIRNAME)


def candidate_path(addon: Addon, key: str, tree_type: str, app_scope: bool) -> str:
    return os.path.join(scope_base_path(addon, app_scope), addon.name, key, tree_type)


def lookup_path(addon: Addon, key: str, tree_type: str, fs: FileSystem) -> Optional[str]:
    """
    Find an existing cache entry, addon scope first then app scope.

    Returns:
        Optional[str]: path of the existing entry directory, None on a miss
    """
    for app_scope in (False, True):
        path = candidate_path(addon, key, tree_type, app_scope)
        if fs.is_dir(path):
            return path
        logger.debug(f"No prebuilt tree at {path}")
    return None


def store_path(addon: Addon, key: str, tree_type: str) -> Optional[str]:
    """
    Where a freshly produced tree is stored.

    An application stores every addon in its own scope. An addon project only
    stores itself, in its own scope; its dependencies are never stored.
    """
    project = addon.project
    if not project.is_addon():
        return candidate_path(addon, key, tree_type, app_scope=True)
    if addon.name == project.name():
        return candidate_path(addon, key, tree_type, app_scope=False)
    return None
