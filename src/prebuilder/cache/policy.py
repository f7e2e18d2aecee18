"""
Eligibility rules deciding whether an (addon, tree type) pair may use or
produce a prebuilt tree.
"""

import logging
from typing import Any, Dict, List, Optional

from .. import constants
from ..config import env_exclusion_patterns
from ..datacls import Addon
from ..io import FileSystem
from ..matching import matches
from ..rules import Version
from ..utils.paths import abspath, find_node_modules, is_subpath

logger = logging.getLogger(__name__)


class EligibilityPolicy:
    """
    Combines the exclusion lists, the structural tree whitelist, the
    self-development exception and the trackability checks.
    """

    def __init__(self, fs: FileSystem):
        self.fs = fs

    def is_cacheable(self, addon: Addon, tree_type: str) -> bool:
        """
        Check if a prebuilt tree may be used or stored for this addon and tree type.

        Raises:
            ConfigurationError: if an exclusion pattern is malformed
        """
        if self.is_excluded(addon):
            logger.debug(f"Addon '{addon.name}' is excluded from prebuild")
            return False
        if tree_type in constants.EXCLUDED_TREES:
            logger.debug(f"Tree '{tree_type}' of addon '{addon.name}' is never prebuilt")
            return False
        if addon.is_developing_addon() and not self.is_project_addon(addon):
            logger.debug(f"Addon '{addon.name}' is being developed, skipping prebuild")
            return False
        if not self.can_track_changes(addon):
            logger.debug(f"Changes to addon '{addon.name}' can not be tracked, skipping prebuild")
            return False
        return True

    def exclusion_patterns(self, addon: Addon) -> List[str]:
        return addon.project.settings.exclusion_patterns() + env_exclusion_patterns()

    def is_excluded(self, addon: Addon) -> bool:
        return matches(self.exclusion_patterns(addon), addon.name)

    @staticmethod
    def is_project_addon(addon: Addon) -> bool:
        """The addon is the reusable addon the project itself is"""
        return addon.project.is_addon() and addon.name == addon.project.name()

    def can_track_changes(self, addon: Addon) -> bool:
        return not self.is_downloaded_from_path(addon) and not self.is_symlinked(addon)

    def is_symlinked(self, addon: Addon) -> bool:
        """
        An addon is not symlinked when its root lies within the project root,
        the project's node_modules, or the node_modules found from the project's parent.
        """
        project_root = abspath(addon.project.root)
        if is_subpath(addon.root, project_root):
            return False
        if is_subpath(addon.root, find_node_modules(project_root, self.fs)):
            return False
        if is_subpath(addon.root, find_node_modules(abspath(f"{project_root}/.."), self.fs)):
            return False
        return True

    def is_downloaded_from_path(self, addon: Addon) -> bool:
        """
        Check if the addon is declared through a path or VCS url rather than a version.

        The project's dependencies and devDependencies are checked first, the
        parent's only when the project did not point to a path.
        """
        found = self._declared_as_path(addon.project.pkg, addon.name)
        if not found and addon.parent is not None:
            found = self._declared_as_path(addon.parent.pkg, addon.name)
        return found

    def _declared_as_path(self, pkg: Optional[Dict[str, Any]], name: str) -> bool:
        for section in constants.DEPENDENCY_SECTIONS:
            declared = ((pkg or {}).get(section) or {}).get(name)
            if declared and is_path(declared):
                return True
        return False


def is_path(declared: Any) -> bool:
    """
    A dependency declaration is path-like when it does not coerce to a valid
    released version, e.g. 'path', '../addon' or a git url.
    """
    coerced = Version.coerce(declared)
    return coerced is None or Version.valid(str(coerced)) is None
