"""
pathkit Exception Hierarchy

All custom exceptions inherit from PathKitError.

Architecture:
    PathKitError (Base)
    ├── PathException
    │   ├── InvalidCombinationError
    │   ├── EmptyPathError
    │   └── UnrelatedPathsError
    ├── FileSystemException
    │   ├── RelativePathError
    │   ├── SourceNotFoundError
    │   └── NotFoundError
    └── ConfigValidationError
"""

from .base import (
    PathKitError,
    ConfigValidationError,
)

from .path_exceptions import (
    PathException,
    InvalidCombinationError,
    EmptyPathError,
    UnrelatedPathsError,
)

from .fs_exceptions import (
    FileSystemException,
    RelativePathError,
    SourceNotFoundError,
    NotFoundError,
)

__all__ = [
    # Base
    "PathKitError",
    "ConfigValidationError",
    # Path exceptions
    "PathException",
    "InvalidCombinationError",
    "EmptyPathError",
    "UnrelatedPathsError",
    # Filesystem exceptions
    "FileSystemException",
    "RelativePathError",
    "SourceNotFoundError",
    "NotFoundError",
]
