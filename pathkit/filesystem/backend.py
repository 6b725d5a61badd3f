"""
Filesystem Backend Module

The capability that FileSystemOps delegates every side effect to.
Backends speak plain strings; path arithmetic never happens here.

Implementations:
- LocalFileSystem: the real disk, via os and shutil
- MemoryFileSystem (memory_fs module): an in-memory node tree
"""

import os
import shutil
from abc import ABC, abstractmethod
from typing import List

from pathkit.logger import get_logger


class FileSystemBackend(ABC):
    """
    Abstract filesystem capability.

    Implementations raise OSError subclasses on I/O failures, the same
    way the builtin file functions do.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether anything exists at path."""

    @abstractmethod
    def is_file(self, path: str) -> bool:
        """Check whether path is a regular file."""

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Check whether path is a directory."""

    @abstractmethod
    def create_dir(self, path: str) -> None:
        """Create a directory. Parents are expected to exist already."""

    @abstractmethod
    def remove_file(self, path: str) -> None:
        """Remove a single file."""

    @abstractmethod
    def remove_dir_recursive(self, path: str) -> None:
        """Remove a directory and everything below it."""

    @abstractmethod
    def list_files(self, path: str, recursive: bool = False) -> List[str]:
        """List files directly in path, or in the whole subtree."""

    @abstractmethod
    def list_dirs(self, path: str, recursive: bool = False) -> List[str]:
        """List directories directly in path, or in the whole subtree."""

    @abstractmethod
    def copy_file(self, src: str, dst: str, overwrite: bool = True) -> None:
        """Copy file contents byte for byte."""

    @abstractmethod
    def write_bytes(self, path: str, data: bytes) -> None:
        """Create or overwrite a file with data."""

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Read a whole file."""


class LocalFileSystem(FileSystemBackend):
    """
    Backend operating on the real disk.

    Listings return joined path strings rooted at the listed directory,
    so they parse back into absolute PathValues.
    """

    def __init__(self):
        self._logger = get_logger('backend')

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def create_dir(self, path: str) -> None:
        if os.path.isdir(path):
            return
        os.mkdir(path)
        self._logger.debug("Created directory", context={'path': path})

    def remove_file(self, path: str) -> None:
        os.remove(path)

    def remove_dir_recursive(self, path: str) -> None:
        shutil.rmtree(path)

    def _walk(self, path: str, recursive: bool, want_files: bool) -> List[str]:
        results: List[str] = []
        for root, dirs, files in os.walk(path):
            dirs.sort()
            names = files if want_files else dirs
            results.extend(os.path.join(root, name) for name in sorted(names))
            if not recursive:
                break
        return results

    def list_files(self, path: str, recursive: bool = False) -> List[str]:
        return self._walk(path, recursive, want_files=True)

    def list_dirs(self, path: str, recursive: bool = False) -> List[str]:
        return self._walk(path, recursive, want_files=False)

    def copy_file(self, src: str, dst: str, overwrite: bool = True) -> None:
        if not overwrite and os.path.exists(dst):
            raise FileExistsError(dst)
        shutil.copyfile(src, dst)

    def write_bytes(self, path: str, data: bytes) -> None:
        with open(path, 'wb') as f:
            f.write(data)

    def read_bytes(self, path: str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()
