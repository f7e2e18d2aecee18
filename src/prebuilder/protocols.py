"""
Prebuilder Protocol Definitions

Protocols the cache consumes from the build engine. This module has no
dependencies on other prebuilder modules.
"""

from typing import Protocol, runtime_checkable


# ============================================================================
# Output Tree Protocols
# ============================================================================

@runtime_checkable
class OutputTree(Protocol):
    """
    Protocol for a build output tree.

    The build engine decides what a tree contains; the cache only needs the
    directory the tree ends up in once it is built.
    """

    def materialize(self) -> str:
        """
        Build the tree if needed.

        Returns:
            Path of the directory holding the materialised output
        """
        ...
