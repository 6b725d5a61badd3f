"""
Path Exceptions

Exceptions raised by the path value model itself: composition,
ancestry and relativization failures. None of these touch the
filesystem; they describe a misuse of path arithmetic.
"""

from typing import Optional, Any

from .base import PathKitError


class PathException(PathKitError):
    """
    Base exception for path arithmetic errors.

    Attributes:
        path: Rendered path the operation was invoked on (if applicable)
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path is not None:
            ctx["path"] = path
        super().__init__(message, error_code=error_code or 3000, context=ctx)
        self.path = path


class InvalidCombinationError(PathException):
    """
    A non-relative path was appended to another path.

    Only relative fragments can be combined onto a base; an absolute
    or drive-rooted fragment carries its own anchor.

    Example:
        >>> raise InvalidCombinationError("/usr", "/etc")
    """

    def __init__(
        self,
        path: str,
        appended: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["appended"] = appended
        super().__init__(
            message=f"Cannot combine a non-relative path: {appended}",
            path=path,
            error_code=3001,
            context=ctx
        )
        self.appended = appended


class EmptyPathError(PathException):
    """
    An operation that needs at least one segment was called on an empty path.

    Raised by up()/parent(), file_name and extension_with_dot.
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
            message=f"Operation requires a non-empty path: {operation or 'unknown'}",
            path=path,
            error_code=3002,
            context=ctx
        )
        self.operation = operation


class UnrelatedPathsError(PathException):
    """
    relative_to() was invoked with a base that is not an ancestor.

    Example:
        >>> raise UnrelatedPathsError("/a/b", "/c")
    """

    def __init__(
        self,
        path: str,
        base: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["base"] = base
        super().__init__(
            message=(
                f"Paths are unrelated: {path!r} cannot be made "
                f"relative to {base!r}"
            ),
            path=path,
            error_code=3003,
            context=ctx
        )
        self.base = base
