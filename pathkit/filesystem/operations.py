"""
Filesystem Operations Module

Recursive create, copy, delete and enumerate operations over PathValues.
All path arithmetic goes through PathValue; all side effects go through
the injected FileSystemBackend. Paths are rendered to strings only at
the backend boundary.
"""

import random
import tempfile
from enum import Enum
from typing import Optional, Callable, List, Union

from .backend import FileSystemBackend, LocalFileSystem
from .path import PathValue, PathLike
from pathkit.core.config_loader import get_config
from pathkit.exceptions import (
    RelativePathError,
    SourceNotFoundError,
    NotFoundError,
)
from pathkit.logger import get_logger, log_function_call


PathPredicate = Callable[[PathValue], bool]


class DeleteMode(Enum):
    """How delete() treats I/O conflicts while removing a directory."""
    NORMAL = 'normal'
    SOFT = 'soft'


def _default_random_source() -> int:
    return random.randrange(0, 2 ** 31 - 1)


class FileSystemOps:
    """
    Filesystem operations bound to a backend.

    The object holds no state besides its collaborators; every call
    depends only on its arguments and the backend's current contents.

    Example:
        >>> ops = FileSystemOps(MemoryFileSystem())
        >>> ops.create_file('/work/notes/todo.txt')
        PathValue('/work/notes/todo.txt')
        >>> ops.copy('/work', '/backup')
        >>> [str(p) for p in ops.files('/backup/notes')]
        ['/backup/notes/todo.txt']
    """

    def __init__(
        self,
        backend: Optional[FileSystemBackend] = None,
        temp_root: Optional[PathLike] = None,
        random_source: Optional[Callable[[], int]] = None
    ):
        self._backend = backend if backend is not None else LocalFileSystem()
        self._temp_root = PathValue(temp_root) if temp_root is not None else None
        self._random_source = random_source or _default_random_source
        self._logger = get_logger('ops')

    @property
    def backend(self) -> FileSystemBackend:
        return self._backend

    @staticmethod
    def _as_path(path: PathLike) -> PathValue:
        return path if isinstance(path, PathValue) else PathValue(path)

    @staticmethod
    def _require_absolute(path: PathValue, operation: str) -> None:
        if path.is_relative:
            raise RelativePathError(str(path), operation=operation)

    # Inspection

    def exists(self, path: PathLike) -> bool:
        """Check whether a file or directory exists at path."""
        path = self._as_path(path)
        return self.file_exists(path) or self.directory_exists(path)

    def file_exists(self, path: PathLike) -> bool:
        return self._backend.is_file(str(self._as_path(path)))

    def directory_exists(self, path: PathLike) -> bool:
        return self._backend.is_dir(str(self._as_path(path)))

    # Creation

    def ensure_directory_exists(self, directory: PathLike) -> PathValue:
        """
        Create directory and any missing ancestors.

        Walks up until an existing directory is found, then creates the
        missing ones top-down.

        Raises:
            EmptyPathError: If no ancestor exists at all, which means the
                backend has no root directory
        """
        directory = self._as_path(directory)

        missing: List[PathValue] = []
        current = directory
        while not self._backend.is_dir(str(current)):
            missing.append(current)
            current = current.up()

        for path in reversed(missing):
            self._backend.create_dir(str(path))

        return directory

    def create_file(self, path: PathLike) -> PathValue:
        """
        Create an empty file, creating parent directories as needed.

        Args:
            path: Absolute path of the file

        Returns:
            The path itself

        Raises:
            RelativePathError: If path is relative
        """
        path = self._as_path(path)
        self._require_absolute(path, 'create_file')

        self.ensure_directory_exists(path.up())
        self._backend.write_bytes(str(path), b'')

        self._logger.debug("Created file", context={'path': str(path)})
        return path

    def create_directory(self, path: PathLike) -> PathValue:
        """
        Create a directory and any missing ancestors.

        Idempotent when the directory already exists.

        Raises:
            RelativePathError: If path is relative
        """
        path = self._as_path(path)
        self._require_absolute(path, 'create_directory')

        self.ensure_directory_exists(path)

        self._logger.debug("Created directory", context={'path': str(path)})
        return path

    @log_function_call()
    def create_temp_directory(self, prefix: Optional[str] = None) -> PathValue:
        """
        Create a fresh directory under the temp root.

        Candidate names are '<prefix>_<random int>'; the first one that
        does not exist yet is created and returned.
        """
        config = get_config().filesystem
        prefix = prefix or config.temp_prefix

        temp_root = self._temp_root
        if temp_root is None:
            temp_root = PathValue(config.temp_root or tempfile.gettempdir())

        while True:
            candidate = temp_root.combine(f"{prefix}_{self._random_source()}")
            if not self.exists(candidate):
                return self.create_directory(candidate)

    # Copy

    def copy(
        self,
        src: PathLike,
        dst: PathLike,
        predicate: Optional[PathPredicate] = None
    ) -> None:
        """
        Copy a file or a directory tree.

        A directory is copied child by child; each child lands at
        dst.combine(child.relative_to(src)). When predicate is given it is
        asked about every destination, and a rejected directory skips its
        whole subtree.

        Args:
            src: Absolute source path
            dst: Absolute destination path
            predicate: Optional filter over destination paths

        Raises:
            RelativePathError: If src or dst is relative
            SourceNotFoundError: If src is neither a file nor a directory
        """
        src = self._as_path(src)
        dst = self._as_path(dst)
        self._require_absolute(src, 'copy')
        self._require_absolute(dst, 'copy')

        overwrite = get_config().filesystem.overwrite_on_copy

        pending = [(src, dst)]
        while pending:
            source, destination = pending.pop()

            if predicate is not None and not predicate(destination):
                self._logger.debug(
                    "Skipped by predicate", context={'dst': str(destination)}
                )
                continue

            if self._backend.is_file(str(source)):
                self.ensure_directory_exists(destination.up())
                self._backend.copy_file(str(source), str(destination), overwrite)
                self._logger.debug(
                    "Copied file",
                    context={'src': str(source), 'dst': str(destination)}
                )
            elif self._backend.is_dir(str(source)):
                self.ensure_directory_exists(destination)
                children = self.contents(source)
                for child in reversed(children):
                    pending.append(
                        (child, destination.combine(child.relative_to(source)))
                    )
            else:
                raise SourceNotFoundError(str(source))

    # Delete

    def delete(self, path: PathLike, mode: DeleteMode = DeleteMode.NORMAL) -> None:
        """
        Delete a file or a directory tree.

        In SOFT mode an OSError raised while removing a directory (for
        example because a file inside is in use) is logged and dropped.

        Raises:
            RelativePathError: If path is relative
            NotFoundError: If nothing exists at path
        """
        path = self._as_path(path)
        self._require_absolute(path, 'delete')

        if self._backend.is_file(str(path)):
            self._backend.remove_file(str(path))
        elif self._backend.is_dir(str(path)):
            try:
                self._backend.remove_dir_recursive(str(path))
            except OSError as e:
                if mode == DeleteMode.NORMAL:
                    raise
                self._logger.warning(
                    "Soft delete left directory in place",
                    context={'path': str(path), 'error': e}
                )
                return
        else:
            raise NotFoundError(str(path))

        self._logger.debug("Deleted", context={'path': str(path)})

    # Enumeration

    def files(
        self,
        path: PathLike,
        recursive: Union[bool, PathPredicate] = False
    ) -> List[PathValue]:
        """
        List files in a directory.

        Passing a callable instead of a bool lists the top-level files
        and keeps those the callable accepts.
        """
        path = self._as_path(path)

        if callable(recursive):
            predicate = recursive
            return [f for f in self.files(path) if predicate(f)]

        return [PathValue(s) for s in self._backend.list_files(str(path), recursive)]

    def directories(self, path: PathLike, recursive: bool = False) -> List[PathValue]:
        """List directories in a directory."""
        path = self._as_path(path)
        return [PathValue(s) for s in self._backend.list_dirs(str(path), recursive)]

    def contents(self, path: PathLike, recursive: bool = False) -> List[PathValue]:
        """Files followed by directories."""
        return self.files(path, recursive) + self.directories(path, recursive)
