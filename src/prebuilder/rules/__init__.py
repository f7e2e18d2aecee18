"""
Prebuilder Rules Module

- Version: Semantic version parsing and coercion

Usage:
    from prebuilder.rules import Version
"""

from .version import Version

__all__ = [
    'Version',
]
