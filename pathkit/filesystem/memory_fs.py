"""
In-Memory Filesystem Module

A FileSystemBackend kept entirely in memory:
- Hierarchical node tree with one root per drive letter
- Files hold their bytes, directories map names to child nodes
- Nodes can be locked to simulate files held open by another process

Errors mirror what the real disk raises (FileNotFoundError,
FileExistsError, NotADirectoryError, IsADirectoryError, OSError) so code
tested against this backend behaves the same on LocalFileSystem.
"""

import errno
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Tuple

from .backend import FileSystemBackend
from .path import PathValue
from pathkit.logger import get_logger


class NodeType(Enum):
    """Types of nodes."""
    FILE = 1
    DIRECTORY = 2


@dataclass
class Node:
    """A file or directory in the in-memory tree."""
    node_type: NodeType
    data: bytes = b''
    entries: dict[str, 'Node'] = field(default_factory=dict, repr=False)
    locked: bool = False
    mtime: float = field(default_factory=time.time)

    @property
    def is_directory(self) -> bool:
        return self.node_type == NodeType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.node_type == NodeType.FILE

    def walk(self) -> List['Node']:
        """This node and every node below it."""
        nodes = [self]
        stack = [self]
        while stack:
            current = stack.pop()
            for child in current.entries.values():
                nodes.append(child)
                stack.append(child)
        return nodes


class MemoryFileSystem(FileSystemBackend):
    """
    In-memory filesystem backend.

    Only absolute paths are accepted. Each backend call holds an
    internal lock, so individual calls are atomic with respect to each
    other; sequences of calls are not.

    Example:
        >>> fs = MemoryFileSystem()
        >>> fs.create_dir('/tmp')
        >>> fs.write_bytes('/tmp/a.txt', b'hello')
        >>> fs.list_files('/tmp')
        ['/tmp/a.txt']
    """

    def __init__(self):
        self._roots: dict[Optional[str], Node] = {}
        self._lock = threading.RLock()
        self._logger = get_logger('memory_fs')

    def _split(self, path: str) -> Tuple[PathValue, Node]:
        parsed = PathValue(path)
        if parsed.is_relative:
            raise ValueError(f"MemoryFileSystem requires absolute paths: {path}")
        root = self._roots.setdefault(parsed.drive_letter, Node(NodeType.DIRECTORY))
        return parsed, root

    def _lookup(self, path: str) -> Optional[Node]:
        parsed, node = self._split(path)
        for segment in parsed.segments:
            if not node.is_directory:
                return None
            node = node.entries.get(segment)
            if node is None:
                return None
        return node

    def _lookup_parent(self, path: str) -> Tuple[Node, str]:
        """Resolve the directory that should contain path."""
        parsed, _ = self._split(path)
        if parsed.is_empty:
            raise FileExistsError(errno.EEXIST, "Root already exists", path)

        parent = self._lookup(str(parsed.up()))
        if parent is None:
            raise FileNotFoundError(errno.ENOENT, "Parent directory does not exist", path)
        if not parent.is_directory:
            raise NotADirectoryError(errno.ENOTDIR, "Parent is not a directory", path)
        return parent, parsed.file_name

    def exists(self, path: str) -> bool:
        with self._lock:
            return self._lookup(path) is not None

    def is_file(self, path: str) -> bool:
        with self._lock:
            node = self._lookup(path)
            return node is not None and node.is_file

    def is_dir(self, path: str) -> bool:
        with self._lock:
            node = self._lookup(path)
            return node is not None and node.is_directory

    def create_dir(self, path: str) -> None:
        with self._lock:
            existing = self._lookup(path)
            if existing is not None:
                if existing.is_directory:
                    return
                raise FileExistsError(errno.EEXIST, "A file exists at this path", path)

            parent, name = self._lookup_parent(path)
            parent.entries[name] = Node(NodeType.DIRECTORY)

        self._logger.debug("Created directory", context={'path': path})

    def remove_file(self, path: str) -> None:
        with self._lock:
            node = self._lookup(path)
            if node is None:
                raise FileNotFoundError(errno.ENOENT, "No such file", path)
            if node.is_directory:
                raise IsADirectoryError(errno.EISDIR, "Is a directory", path)
            if node.locked:
                raise OSError(errno.EBUSY, "File is in use", path)

            parent, name = self._lookup_parent(path)
            del parent.entries[name]

    def remove_dir_recursive(self, path: str) -> None:
        with self._lock:
            node = self._lookup(path)
            if node is None:
                raise FileNotFoundError(errno.ENOENT, "No such directory", path)
            if not node.is_directory:
                raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)

            # Nothing is removed if any node in the subtree is in use
            if any(n.locked for n in node.walk()):
                raise OSError(errno.EBUSY, "Directory contains files in use", path)

            parsed, root = self._split(path)
            if parsed.is_empty:
                root.entries.clear()
                return

            parent, name = self._lookup_parent(path)
            del parent.entries[name]

    def _list(self, path: str, recursive: bool, want_type: NodeType) -> List[str]:
        with self._lock:
            node = self._lookup(path)
            if node is None:
                raise FileNotFoundError(errno.ENOENT, "No such directory", path)
            if not node.is_directory:
                raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)

            results: List[str] = []
            pending = [(PathValue(path), node)]
            while pending:
                base, directory = pending.pop(0)
                for name in sorted(directory.entries):
                    child = directory.entries[name]
                    child_path = base.combine(name)
                    if child.node_type == want_type:
                        results.append(str(child_path))
                    if recursive and child.is_directory:
                        pending.append((child_path, child))
            return results

    def list_files(self, path: str, recursive: bool = False) -> List[str]:
        return self._list(path, recursive, NodeType.FILE)

    def list_dirs(self, path: str, recursive: bool = False) -> List[str]:
        return self._list(path, recursive, NodeType.DIRECTORY)

    def copy_file(self, src: str, dst: str, overwrite: bool = True) -> None:
        with self._lock:
            source = self._lookup(src)
            if source is None:
                raise FileNotFoundError(errno.ENOENT, "No such file", src)
            if source.is_directory:
                raise IsADirectoryError(errno.EISDIR, "Is a directory", src)

            target = self._lookup(dst)
            if target is not None:
                if target.is_directory:
                    raise IsADirectoryError(errno.EISDIR, "Is a directory", dst)
                if not overwrite:
                    raise FileExistsError(errno.EEXIST, "File exists", dst)
                if target.locked:
                    raise OSError(errno.EBUSY, "File is in use", dst)

            parent, name = self._lookup_parent(dst)
            parent.entries[name] = Node(NodeType.FILE, data=source.data)

    def write_bytes(self, path: str, data: bytes) -> None:
        with self._lock:
            existing = self._lookup(path)
            if existing is not None:
                if existing.is_directory:
                    raise IsADirectoryError(errno.EISDIR, "Is a directory", path)
                if existing.locked:
                    raise OSError(errno.EBUSY, "File is in use", path)

            parent, name = self._lookup_parent(path)
            parent.entries[name] = Node(NodeType.FILE, data=bytes(data))

    def read_bytes(self, path: str) -> bytes:
        with self._lock:
            node = self._lookup(path)
            if node is None:
                raise FileNotFoundError(errno.ENOENT, "No such file", path)
            if node.is_directory:
                raise IsADirectoryError(errno.EISDIR, "Is a directory", path)
            return node.data

    def lock(self, path: str) -> None:
        """Mark a node as in use; removing it raises OSError until unlocked."""
        with self._lock:
            node = self._lookup(path)
            if node is None:
                raise FileNotFoundError(errno.ENOENT, "No such file", path)
            node.locked = True

    def unlock(self, path: str) -> None:
        with self._lock:
            node = self._lookup(path)
            if node is None:
                raise FileNotFoundError(errno.ENOENT, "No such file", path)
            node.locked = False
