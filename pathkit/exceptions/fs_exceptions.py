"""
Filesystem Exceptions

Exceptions raised by the filesystem operations layer: an absolute-only
operation invoked on a relative path, or a copy/delete source that does
not exist.
"""

from typing import Optional, Any

from .base import PathKitError


class FileSystemException(PathKitError):
    """
    Base exception for all filesystem operation errors.

    Attributes:
        message: Human-readable error description
        path: File path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, error_code=error_code or 4000, context=ctx)
        self.path = path


class RelativePathError(FileSystemException):
    """
    An operation that requires an absolute path received a relative one.

    Relative paths must be anchored with combine() before they can be
    handed to the filesystem.

    Example:
        >>> raise RelativePathError("mydir/myfile.txt", operation="create_file")
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(
            message=f"Operation requires an absolute path: {path}",
            path=path,
            error_code=4010,
            context=ctx
        )
        self.operation = operation


class SourceNotFoundError(FileSystemException):
    """
    The source of a copy exists as neither a file nor a directory.

    Example:
        >>> raise SourceNotFoundError("/tmp/missing")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Copy source does not exist: {path}",
            path=path,
            error_code=4011,
            context=context
        )


class NotFoundError(FileSystemException):
    """
    The target of a delete exists as neither a file nor a directory.

    Example:
        >>> raise NotFoundError("/tmp/missing")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Path does not exist: {path}",
            path=path,
            error_code=4012,
            context=context
        )
