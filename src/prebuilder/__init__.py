"""
Prebuilder - Build artifact cache for addon build pipelines

Decides per addon and per output tree whether a previously produced tree can
be reused instead of rebuilt, and stores new trees for future builds.

Main modules:
- cache: Cache keys, eligibility, locations, storage, summary and clearing
- matching: Exclusion pattern matching
- project: Project loading and package discovery
- builder: Prebuild of a project's own addon
- config: Manifest loading and `prebuild` section validation
- datacls: Type-safe data classes and models
- io: File system handling (fsspec / morefs)
- rules: Semantic versions
- utils: Logging and path utilities

Quick start example:
```python
from prebuilder import CacheStore, DirectoryTree, create_fs

store = CacheStore(create_fs())
path = store.try_reuse(addon, "addon")
if path is None:
    path = store.persist(addon, "addon", DirectoryTree(built_dir)).materialize()
```
"""

__version__ = "0.3.0"

from .protocols import OutputTree
from .trees import DirectoryTree, TeeTree
from .matching import matches, to_pattern, LiteralPattern, RegexPattern, PatternList, ExclusionPattern
from .cache import (
    derive_key,
    EligibilityPolicy,
    candidate_path,
    lookup_path,
    store_path,
    CacheStore,
    CacheSummaryLog,
    clear_all,
)
from .datacls import Addon, Project, AddonOptions, StaticOption, ComputedOption, BuildOption
from .project import load_project
from .builder import Prebuilder
from .io import FileSystem, DiskFileSystem, MemoryFileSystem, create_fs
from .exceptions import (
    PrebuildError,
    ConfigurationError,
    StorageError,
    ClearError,
)

__all__ = [
    # Version
    '__version__',
    # Protocols
    'OutputTree',
    'DirectoryTree',
    'TeeTree',
    # Matching
    'matches',
    'to_pattern',
    'LiteralPattern',
    'RegexPattern',
    'PatternList',
    'ExclusionPattern',
    # Cache
    'derive_key',
    'EligibilityPolicy',
    'candidate_path',
    'lookup_path',
    'store_path',
    'CacheStore',
    'CacheSummaryLog',
    'clear_all',
    # Models
    'Addon',
    'Project',
    'AddonOptions',
    'StaticOption',
    'ComputedOption',
    'BuildOption',
    'load_project',
    'Prebuilder',
    # IO
    'FileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    'create_fs',
    # Exceptions
    'PrebuildError',
    'ConfigurationError',
    'StorageError',
    'ClearError',
]
