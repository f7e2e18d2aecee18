"""
Prebuilder Cache

- keys: cache key derivation
- policy: eligibility of an (addon, tree type) pair
- paths: cache entry locations
- store: reuse and storage of prebuilt trees
- summary: usage summary log
- clear: bulk removal of cached trees
"""

from .keys import derive_key, canonical_json, normalize_browsers, normalize_targets
from .policy import EligibilityPolicy, is_path
from .paths import candidate_path, lookup_path, store_path
from .store import CacheStore
from .summary import CacheSummaryLog
from .clear import clear_all, clear_targets

__all__ = [
    'derive_key',
    'canonical_json',
    'normalize_browsers',
    'normalize_targets',
    'EligibilityPolicy',
    'is_path',
    'candidate_path',
    'lookup_path',
    'store_path',
    'CacheStore',
    'CacheSummaryLog',
    'clear_all',
    'clear_targets',
]
