from abc import ABC, abstractmethod
from typing import List, Union

from typing_extensions import override
import functools
import logging
import os
import shutil
import fsspec
from morefs.memory import MemFS

from ..exceptions import (
    StorageError,
    PathExistsError,
    PathNotFoundError,
    NotAFileError,
    NotADirectoryStorageError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def wrap_io_error(func):
    """Decorator to wrap IO errors into prebuilder storage exceptions."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except StorageError:
            raise
        except FileExistsError as e:
            raise PathExistsError(e) from e
        except FileNotFoundError as e:
            raise PathNotFoundError(e) from e
        except IsADirectoryError as e:
            raise NotAFileError(e) from e
        except NotADirectoryError as e:
            raise NotADirectoryStorageError(e) from e
        except OSError as e:
            raise StorageError(e) from e

    return wrapper

# --------------------------------------------------------
#
# Abstract Base FileSystem Interface
#
# --------------------------------------------------------

class FileSystem(ABC):
    """Prebuild File System Abstract Base Class"""

    @abstractmethod
    def read_text(self, path: PathLike) -> str:
        """Read text from a file"""
        pass

    @abstractmethod
    def write_text(self, path: PathLike, content: str):
        """Write text to a file, creating parent directories"""
        pass

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Check if a path exists"""
        pass

    @abstractmethod
    def is_dir(self, path: PathLike) -> bool:
        """Check if a path is a directory"""
        pass

    @abstractmethod
    def is_file(self, path: PathLike) -> bool:
        """Check if a path is a file"""
        pass

    @abstractmethod
    def mkdir(self, path: PathLike, parents: bool = False, exist_ok: bool = False):
        """Create a directory"""
        pass

    @abstractmethod
    def rmtree(self, path: PathLike):
        """Remove a directory recursively, a missing path is a no-op"""
        pass

    @abstractmethod
    def copytree(self, src: PathLike, dst: PathLike):
        """Copy a directory tree from src into dst"""
        pass

    @abstractmethod
    def listdir(self, path: PathLike) -> List[str]:
        """List directory entries as full paths"""
        pass

    @abstractmethod
    def remove(self, path: PathLike):
        """Remove a single file"""
        pass

    def realpath(self, path: PathLike) -> str:
        """Canonical absolute path with symlinks resolved"""
        return os.path.realpath(os.fspath(path))

# --------------------
#
# Generic FileSystem
#
# --------------------

class GenericFileSystem(FileSystem, ABC):
    """Generic File System base class for fsspec and morefs implementations"""

    def __init__(self, fs_instance, name=None):
        """
        Initialize with a filesystem instance

        Args:
            fs_instance: The underlying filesystem instance (fsspec or morefs)
            name: Optional name for logging purposes
        """
        self.fs = fs_instance
        self.name = name or f"{type(fs_instance).__name__}"

    def path2str(self, path: PathLike) -> str:
        """Convert a path to the string form the backend expects"""
        return os.fspath(path)

    @override
    @wrap_io_error
    def read_text(self, path: PathLike, encoding: str = "utf-8") -> str:
        logger.debug(f"[{self.name}] Reading from: {path}")
        with self.fs.open(self.path2str(path), "r", encoding=encoding) as f:
            return f.read()

    @override
    @wrap_io_error
    def write_text(self, path: PathLike, content: str, encoding: str = "utf-8"):
        logger.debug(f"[{self.name}] Writing to: {path}")
        self.fs.mkdirs(os.path.dirname(self.path2str(path)), exist_ok=True)
        with self.fs.open(self.path2str(path), "w", encoding=encoding) as f:
            f.write(content)

    @override
    def exists(self, path: PathLike) -> bool:
        return self.fs.exists(self.path2str(path))

    @override
    def is_dir(self, path: PathLike) -> bool:
        return self.fs.isdir(self.path2str(path))

    @override
    def is_file(self, path: PathLike) -> bool:
        return self.fs.isfile(self.path2str(path))

    @override
    @wrap_io_error
    def mkdir(self, path: PathLike, parents: bool = False, exist_ok: bool = False):
        if parents:
            self.fs.mkdirs(self.path2str(path), exist_ok=exist_ok)
        elif exist_ok and self.is_dir(path):
            return
        else:
            self.fs.mkdir(self.path2str(path), create_parents=False)

    @override
    @wrap_io_error
    def rmtree(self, path: PathLike):
        if self.fs.exists(self.path2str(path)):
            self.fs.rm(self.path2str(path), recursive=True)
        else:
            logger.debug(f"[{self.name}] Path {path} does not exist, skipping rmtree.")

    @override
    @wrap_io_error
    def copytree(self, src: PathLike, dst: PathLike):
        logger.debug(f"[{self.name}] Copying tree '{src}' to '{dst}'")
        src_str = self.path2str(src).rstrip("/")
        dst_str = self.path2str(dst).rstrip("/")
        self.fs.mkdirs(dst_str, exist_ok=True)
        base = src_str.lstrip("/")
        for item in self.fs.find(src_str, withdirs=True, detail=True).values():
            rel = item["name"].lstrip("/")[len(base):].lstrip("/")
            if not rel:
                continue
            target = f"{dst_str}/{rel}"
            if item["type"] == "directory":
                self.fs.mkdirs(target, exist_ok=True)
            else:
                self.fs.mkdirs(os.path.dirname(target), exist_ok=True)
                with self.fs.open(item["name"], "rb") as fin, self.fs.open(target, "wb") as fout:
                    fout.write(fin.read())

    @override
    @wrap_io_error
    def listdir(self, path: PathLike) -> List[str]:
        return [p.rstrip("/") for p in self.fs.ls(self.path2str(path), detail=False)]

    @override
    @wrap_io_error
    def remove(self, path: PathLike):
        self.fs.rm(self.path2str(path))


class FsspecFileSystem(GenericFileSystem):
    """fsspec-based File System"""

    def __init__(self, protocol="file"):
        fs_instance = fsspec.filesystem(protocol)
        super().__init__(fs_instance, name=f"{protocol}FS")
        self.protocol = protocol

# --------------------
#
# Disk FileSystem
#
# --------------------

class DiskFileSystem(FsspecFileSystem):
    """Local disk file system using fsspec"""

    def __init__(self):
        super().__init__(protocol="file")

    @override
    @wrap_io_error
    def copytree(self, src: PathLike, dst: PathLike):
        logger.debug(f"[{self.name}] Copying tree '{src}' to '{dst}'")
        shutil.copytree(os.fspath(src), os.fspath(dst), dirs_exist_ok=True)

# --------------------
#
# Memory FileSystem
#
# --------------------

class MemoryFileSystem(GenericFileSystem):
    """
    In-memory filesystem backed by morefs, used for dry runs and tests.
    Paths are absolute posix paths.
    """

    def __init__(self):
        super().__init__(MemFS(skip_instance_cache=True), name="MemoryFS")

    @override
    def path2str(self, path: PathLike) -> str:
        path_str = os.fspath(path).replace(os.sep, "/")
        if not path_str.startswith("/"):
            path_str = "/" + path_str
        return path_str

    @override
    def realpath(self, path: PathLike) -> str:
        # no symlinks in memory
        return os.path.abspath(os.fspath(path))

# --------------------
#
# Helper Functions
#
# --------------------

def create_fs(use_vfs: bool = False) -> FileSystem:
    """Create the filesystem the cache operates on."""
    if use_vfs:
        logger.debug("Using in-memory filesystem")
        return MemoryFileSystem()
    return DiskFileSystem()
