import logging
import os
from typing import Dict, List, Optional, Sequence

from . import constants
from .cache import CacheStore, CacheSummaryLog
from .datacls import Addon, Project
from .io import FileSystem, PathLike
from .trees import DirectoryTree
from .project import load_project, project_addon

logger = logging.getLogger(__name__)


class Prebuilder:
    """
    Reuses or stores the prebuilt trees of a project's own addon.

    Each tree is the `<root>/<tree>` directory, taken as already built. A tree
    with a prebuilt copy is reused; any other eligible tree is copied into the cache.
    """

    def __init__(
        self,
        project: Project,
        trees: Optional[Sequence[str]] = None,
        fs: Optional[FileSystem] = None,
        summary_dir: Optional[PathLike] = None,
    ):
        """
        Initialize the prebuilder

        Args:
            project: Project whose own addon is prebuilt
            trees: Tree names to handle, from the manifest or the defaults when omitted
            fs: File system, the project's by default
            summary_dir: Directory receiving prebuild.log, the working directory by default
        """
        self.project = project
        self.fs = fs or project.fs
        self.trees = list(trees) if trees else self._default_trees()
        self.store = CacheStore(self.fs)
        self.summary = CacheSummaryLog(self.store, self.fs, summary_dir)
        self.addon: Addon = project_addon(project)

    def _default_trees(self) -> List[str]:
        configured = self.project.settings.trees
        return list(configured) if configured else list(constants.DEFAULT_TREES)

    def run(self) -> Dict[str, str]:
        """
        Handle every selected tree, then write the usage summary.

        Returns:
            Dict[str, str]: tree name to the directory holding its output

        Raises:
            ConfigurationError: if the exclusion configuration is malformed
            StorageError: if the cache can not be written
        """
        logger.info(f"Prebuilding addon '{self.addon.name}' trees: {', '.join(self.trees)}")
        self.store.reset()
        outputs: Dict[str, str] = {}
        for tree_type in self.trees:
            output = self.build_tree(tree_type)
            if output is not None:
                outputs[tree_type] = output
        self.summary.flush()
        logger.info(f"Prebuild of addon '{self.addon.name}' finished, {len(outputs)} trees handled")
        return outputs

    def build_tree(self, tree_type: str) -> Optional[str]:
        source = os.path.join(self.project.root, tree_type)
        if not self.fs.is_dir(source):
            logger.debug(f"Addon '{self.addon.name}' has no '{tree_type}' tree at {source}")
            return None
        prebuilt = self.store.try_reuse(self.addon, tree_type)
        if prebuilt is not None:
            return prebuilt
        tree = self.store.persist(self.addon, tree_type, DirectoryTree(source))
        return tree.materialize()

    @classmethod
    def from_path(cls, root: PathLike, trees: Optional[Sequence[str]] = None, fs: Optional[FileSystem] = None) -> "Prebuilder":
        return cls(load_project(root, fs), trees=trees, fs=fs)
