"""
Prebuilder Utils Module

- logger: Logging setup and configuration
- paths: Sub-path checks and node_modules lookup

Usage:
    from prebuilder.utils import setup_logger, is_subpath
"""

from .logger import setup_logger, parse_module_levels, normalize_module_name
from .paths import abspath, is_subpath, find_node_modules

__all__ = [
    'setup_logger',
    'parse_module_levels',
    'normalize_module_name',
    'abspath',
    'is_subpath',
    'find_node_modules',
]
