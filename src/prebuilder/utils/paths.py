"""
Path helpers shared by the eligibility checks and the clear command.
"""

import logging
import os
from pathlib import PurePath
from typing import Optional

from .. import constants
from ..io import FileSystem, PathLike

logger = logging.getLogger(__name__)


def abspath(path: PathLike) -> str:
    """Absolute, normalized form of `path` without resolving symlinks."""
    return os.path.abspath(os.fspath(path))


def is_subpath(path: PathLike, parent: Optional[PathLike]) -> bool:
    """
    Check if `path` equals or lies below `parent`, compared component-wise.
    """
    if parent is None:
        return False
    return PurePath(abspath(path)).is_relative_to(PurePath(abspath(parent)))


def find_node_modules(start: PathLike, fs: FileSystem) -> Optional[str]:
    """
    Walk up from `start` and return the nearest existing node_modules directory.
    """
    current = PurePath(abspath(start))
    for directory in (current, *current.parents):
        candidate = directory / constants.NODE_MODULES
        if fs.is_dir(candidate):
            logger.debug(f"Found node_modules for '{start}' at '{candidate}'")
            return str(candidate)
    logger.debug(f"No node_modules found above '{start}'")
    return None
