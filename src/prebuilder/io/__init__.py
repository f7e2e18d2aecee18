"""
Prebuilder IO Module

- FileSystem: Abstract file system interface used by the cache
- DiskFileSystem: Local disk file system (fsspec)
- MemoryFileSystem: In-memory file system (morefs) for dry runs and testing
- wrap_io_error: Maps OS errors onto StorageError subclasses

Usage:
    from prebuilder.io import create_fs

    fs = create_fs()
    if fs.is_dir("/app/pre-built"):
        fs.rmtree("/app/pre-built")
"""

from .fs import (
    FileSystem,
    GenericFileSystem,
    DiskFileSystem,
    MemoryFileSystem,
    PathLike,
    create_fs,
    wrap_io_error,
)

__all__ = [
    'FileSystem',
    'GenericFileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    'PathLike',
    'create_fs',
    'wrap_io_error',
]
