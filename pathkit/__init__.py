"""
pathkit - Path values and recursive filesystem operations

Paths are parsed once into an immutable value (drive letter, relative
flag, segments) and all composition, comparison and relativization works
on that value. Filesystem side effects go through a pluggable backend.
"""

__version__ = "1.0.0"

from .filesystem.path import PathValue
from .filesystem.backend import FileSystemBackend, LocalFileSystem
from .filesystem.memory_fs import MemoryFileSystem
from .filesystem.operations import FileSystemOps, DeleteMode
from .core.logging_setup import configure_logging

__all__ = [
    'PathValue',
    'FileSystemBackend',
    'LocalFileSystem',
    'MemoryFileSystem',
    'FileSystemOps',
    'DeleteMode',
    'configure_logging',
]
