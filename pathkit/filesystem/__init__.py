"""
pathkit Filesystem Module

- PathValue: immutable path value (parse, render, combine, relativize)
- FileSystemBackend: the injected filesystem capability
- LocalFileSystem / MemoryFileSystem: disk and in-memory backends
- FileSystemOps: recursive create, copy, delete and enumerate
"""

from .path import PathValue
from .backend import FileSystemBackend, LocalFileSystem
from .memory_fs import MemoryFileSystem, Node, NodeType
from .operations import FileSystemOps, DeleteMode

__all__ = [
    # Path
    'PathValue',
    # Backends
    'FileSystemBackend',
    'LocalFileSystem',
    'MemoryFileSystem',
    'Node',
    'NodeType',
    # Operations
    'FileSystemOps',
    'DeleteMode',
]
