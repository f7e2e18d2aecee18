"""
Output trees handled by the cache.

- DirectoryTree: an existing directory used as-is
- TeeTree: wraps another tree and copies its output into the cache once it is materialised
"""

import logging
import os
from typing import TYPE_CHECKING, Optional

from .datacls import StorePlan
from .io import PathLike
from .protocols import OutputTree
from .utils.paths import abspath

if TYPE_CHECKING:
    from .cache.store import CacheStore

logger = logging.getLogger(__name__)


class DirectoryTree:
    """An output tree whose content already sits in a directory."""

    def __init__(self, path: PathLike):
        self.path = abspath(os.fspath(path))

    def materialize(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"DirectoryTree({self.path!r})"


class TeeTree:
    """
    Copy-on-materialise wrapper.

    Materialising the wrapper materialises the inner tree, then stores a copy
    of the output at the plan's store path. The copy happens once per wrapper.
    """

    def __init__(self, inner: OutputTree, plan: StorePlan, store: "CacheStore"):
        self.inner = inner
        self.plan = plan
        self.store = store
        self._materialized: Optional[str] = None

    def materialize(self) -> str:
        if self._materialized is None:
            output = self.inner.materialize()
            self.store.execute_store_plan(self.plan, output)
            self._materialized = output
        return self._materialized

    def __repr__(self) -> str:
        return f"TeeTree({self.inner!r} -> {self.plan.store_path!r})"
