import json
import logging
import os
from typing import Optional

from .. import constants
from ..io import FileSystem, PathLike
from .store import CacheStore

logger = logging.getLogger(__name__)


class CacheSummaryLog:
    """Writes the usage summary of a cache store to `<cwd>/prebuild.log`."""

    def __init__(self, store: CacheStore, fs: Optional[FileSystem] = None, cwd: Optional[PathLike] = None):
        self.store = store
        self.fs = fs or store.fs
        self.cwd = cwd

    @property
    def path(self) -> str:
        cwd = os.fspath(self.cwd) if self.cwd is not None else os.getcwd()
        return os.path.join(cwd, constants.SUMMARY_LOG_FILENAME)

    def flush(self) -> str:
        """
        Replace the summary log with the current summary. The summary itself is kept.

        Returns:
            str: path of the written log

        Raises:
            StorageError: if the log can not be written
        """
        entries = [entry.model_dump(by_alias=True) for entry in self.store.summary_entries()]
        path = self.path
        if self.fs.exists(path):
            self.fs.remove(path)
        self.fs.write_text(path, json.dumps(entries, indent=2))
        logger.info(f"Wrote prebuild summary with {len(entries)} entries to {path}")
        return path
