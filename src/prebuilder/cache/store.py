import json
import logging
import os
import threading
from typing import Dict, List, Optional, Set

from .. import constants
from ..datacls import Addon, MetadataRecord, StorePlan, UsageSummaryEntry
from ..io import FileSystem
from ..protocols import OutputTree
from ..trees import TeeTree
from ..utils.paths import abspath
from .keys import derive_key, encode_extra, normalize_targets
from .paths import lookup_path, store_path
from .policy import EligibilityPolicy

logger = logging.getLogger(__name__)


class CacheStore:
    """
    Reuses and stores prebuilt trees.

    Holds the state of one build run: the keys whose metadata has been written
    and the usage summary, both guarded by a single lock.
    """

    def __init__(self, fs: FileSystem, policy: Optional[EligibilityPolicy] = None):
        """
        Initialize the cache store

        Args:
            fs: File system the cache lives on
            policy: Eligibility rules, built on the same filesystem when omitted
        """
        self.fs = fs
        self.policy = policy or EligibilityPolicy(fs)
        self._lock = threading.Lock()
        self._stored_keys: Set[str] = set()
        self._summary: Dict[str, UsageSummaryEntry] = {}

    def reset(self):
        """Start a new build run"""
        with self._lock:
            self._stored_keys.clear()
            self._summary.clear()

    def summary_entries(self) -> List[UsageSummaryEntry]:
        with self._lock:
            return [entry.model_copy() for entry in self._summary.values()]

    def record(self, key: str, name: str, path: str, tree_type: str, using_prebuild: bool) -> UsageSummaryEntry:
        """
        Add a usage event to the summary.

        The first event for a key fixes name, path and tree type; later events
        only update `usingPrebuild`.
        """
        with self._lock:
            entry = self._summary.get(key)
            if entry is None:
                entry = UsageSummaryEntry(
                    name=name, prebuild_path=path, tree_type=tree_type, using_prebuild=using_prebuild
                )
                self._summary[key] = entry
            else:
                entry.using_prebuild = using_prebuild
            return entry.model_copy()

    def try_reuse(self, addon: Addon, tree_type: str) -> Optional[str]:
        """
        Look up a prebuilt tree for an addon.

        Returns:
            Optional[str]: directory of the prebuilt tree, None when not eligible or on a miss

        Raises:
            ConfigurationError: if an exclusion pattern is malformed
        """
        if not self.policy.is_cacheable(addon, tree_type):
            return None
        key = derive_key(addon)
        path = lookup_path(addon, key, tree_type, self.fs)
        if path is None:
            logger.info(f"No prebuilt addon {addon.name} for treeType {tree_type}")
            return None
        entry = self.record(key, addon.name, path, tree_type, using_prebuild=True)
        logger.info(f"Using prebuilt addon {entry.name} for treeType {entry.tree_type} from {entry.prebuild_path}")
        return path

    def plan_store(self, addon: Addon, tree_type: str) -> Optional[StorePlan]:
        """
        Work out where a produced tree would be stored, without touching the filesystem.

        Returns:
            Optional[StorePlan]: None when the addon is not eligible or has no store location
        """
        if not self.policy.is_cacheable(addon, tree_type):
            return None
        key = derive_key(addon)
        path = store_path(addon, key, tree_type)
        if path is None:
            logger.debug(f"Addon '{addon.name}' is not stored by project '{addon.project.name()}'")
            return None
        metadata = MetadataRecord(
            name=addon.name,
            babel_options=addon.options.resolved_babel(),
            companion_options=addon.options.ember_cli_babel,
            targets=normalize_targets(addon.project.targets),
        )
        return StorePlan(
            addon_name=addon.name,
            tree_type=tree_type,
            cache_key=key,
            store_path=path,
            metadata_path=os.path.join(os.path.dirname(path), constants.METADATA_FILENAME),
            metadata=metadata,
        )

    def execute_store_plan(self, plan: StorePlan, materialized_path: str):
        """
        Copy a materialised tree into the plan's store path, replacing what was there.

        Raises:
            StorageError: if the copy fails
        """
        if abspath(materialized_path) == abspath(plan.store_path):
            return
        logger.debug(f"Storing prebuilt addon {plan.addon_name} for treeType {plan.tree_type} at {plan.store_path}")
        self.fs.rmtree(plan.store_path)
        self.fs.copytree(materialized_path, plan.store_path)

    def _write_metadata(self, plan: StorePlan):
        self.fs.mkdir(os.path.dirname(plan.metadata_path), parents=True, exist_ok=True)
        content = json.dumps(plan.metadata.model_dump(by_alias=True), indent=2, default=encode_extra)
        self.fs.write_text(plan.metadata_path, content)
        logger.debug(f"Wrote metadata for addon '{plan.addon_name}' to {plan.metadata_path}")

    def persist(self, addon: Addon, tree_type: str, output: OutputTree) -> OutputTree:
        """
        Arrange for a produced tree to be stored in the cache.

        Args:
            addon: Addon the tree belongs to
            tree_type: Name of the tree
            output: Tree produced by the build engine

        Returns:
            OutputTree: `output` unchanged when nothing is stored, otherwise a
            TeeTree copying the output into the cache once materialised

        Raises:
            ConfigurationError: if an exclusion pattern is malformed
            StorageError: if the metadata can not be written
        """
        plan = self.plan_store(addon, tree_type)
        if plan is None:
            return output
        with self._lock:
            if plan.cache_key not in self._stored_keys:
                self._write_metadata(plan)
                self._stored_keys.add(plan.cache_key)
        self.record(plan.cache_key, addon.name, plan.store_path, tree_type, using_prebuild=False)
        return TeeTree(output, plan, self)
