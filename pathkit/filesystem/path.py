"""
Path Value Module

Immutable value type over filesystem path strings.

A path is decomposed into three fields:
- an optional drive letter ("C" for "C:/work")
- a relative flag (False when the path starts with a separator)
- an ordered tuple of non-empty segments

Both '/' and '\\' are accepted as separators. Redundant separators are
collapsed, and '.' / '..' are kept as literal segments; nothing is
resolved against the filesystem.
"""

import os
import re
from typing import Optional, Tuple, Union

from pathkit.exceptions import (
    InvalidCombinationError,
    EmptyPathError,
    UnrelatedPathsError,
)


_SEPARATORS = re.compile(r'[/\\]')

PathLike = Union[str, 'PathValue']


def _split_drive(text: str) -> Tuple[Optional[str], str]:
    """
    Split a leading drive letter off a path string.

    Returns:
        Tuple of (drive_letter or None, remainder)
    """
    if len(text) >= 2 and text[1] == ':':
        return text[0], text[2:]
    return None, text


class PathValue:
    """
    An immutable, structurally comparable filesystem path.

    Example:
        >>> p = PathValue('C:/work/src/main.py')
        >>> p.drive_letter, p.is_relative, p.segments
        ('C', False, ('work', 'src', 'main.py'))
        >>> str(p.up())
        'C:/work/src'
        >>> str(p.relative_to('C:/work'))
        'src/main.py'
    """

    __slots__ = ('_segments', '_is_relative', '_drive_letter')

    def __init__(self, path: PathLike = ""):
        if isinstance(path, PathValue):
            segments, is_relative, drive_letter = (
                path._segments, path._is_relative, path._drive_letter
            )
        elif isinstance(path, (str, os.PathLike)):
            segments, is_relative, drive_letter = self._parse_fields(os.fspath(path))
        else:
            raise TypeError(
                f"PathValue expects a str or PathValue, got {type(path).__name__}"
            )

        object.__setattr__(self, '_segments', segments)
        object.__setattr__(self, '_is_relative', is_relative)
        object.__setattr__(self, '_drive_letter', drive_letter)

    @staticmethod
    def _parse_fields(text: str) -> Tuple[Tuple[str, ...], bool, Optional[str]]:
        drive_letter, remainder = _split_drive(text)
        split = _SEPARATORS.split(remainder)

        # A leading separator leaves an empty first element
        is_relative = remainder == '' or split[0] != ''

        segments = tuple(s for s in split if s)
        return segments, is_relative, drive_letter

    @classmethod
    def parse(cls, text: str) -> 'PathValue':
        """
        Parse a path string.

        Args:
            text: Path string, using '/' or '\\' as separators

        Returns:
            New PathValue
        """
        return cls(text)

    @classmethod
    def _from_parts(
        cls,
        segments: Tuple[str, ...],
        is_relative: bool,
        drive_letter: Optional[str]
    ) -> 'PathValue':
        instance = cls.__new__(cls)
        object.__setattr__(instance, '_segments', tuple(segments))
        object.__setattr__(instance, '_is_relative', is_relative)
        object.__setattr__(instance, '_drive_letter', drive_letter)
        return instance

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # Inspection

    @property
    def segments(self) -> Tuple[str, ...]:
        return self._segments

    @property
    def is_relative(self) -> bool:
        return self._is_relative

    @property
    def is_absolute(self) -> bool:
        return not self._is_relative

    @property
    def drive_letter(self) -> Optional[str]:
        return self._drive_letter

    @property
    def is_empty(self) -> bool:
        return len(self._segments) == 0

    @property
    def file_name(self) -> str:
        """Last segment of the path."""
        if self.is_empty:
            raise EmptyPathError(str(self), operation="file_name")
        return self._segments[-1]

    @property
    def extension_with_dot(self) -> str:
        """
        Extension of the last segment including the dot.

        Everything from the final '.' onward, or '' when there is none.
        """
        last = self.file_name
        index = last.rfind('.')
        if index < 0:
            return ''
        return last[index:]

    def has_extension(self, extension: str) -> bool:
        """Check the extension; 'txt' and '.txt' are treated alike."""
        with_dot = extension if extension.startswith('.') else '.' + extension
        return with_dot == self.extension_with_dot

    # Composition

    def combine(self, *parts: PathLike) -> 'PathValue':
        """
        Append one or more relative paths.

        A fragment contributes segments only, never an anchor. Besides
        absolute fragments, relative ones with a drive letter ('C:b') are
        refused too, since their drive would otherwise be silently lost.

        Args:
            *parts: Relative path strings or PathValues, appended in order

        Returns:
            New PathValue anchored like this one

        Raises:
            InvalidCombinationError: If any part is absolute or carries
                a drive letter
        """
        segments = self._segments
        for part in parts:
            append = part if isinstance(part, PathValue) else PathValue(part)
            if not append.is_relative or append.drive_letter is not None:
                raise InvalidCombinationError(str(self), str(append))
            segments = segments + append._segments

        return PathValue._from_parts(segments, self._is_relative, self._drive_letter)

    def __truediv__(self, other: PathLike) -> 'PathValue':
        return self.combine(other)

    def up(self) -> 'PathValue':
        """
        Drop the last segment.

        Raises:
            EmptyPathError: If the path has no segments
        """
        if self.is_empty:
            raise EmptyPathError(str(self), operation="up")
        return PathValue._from_parts(
            self._segments[:-1], self._is_relative, self._drive_letter
        )

    def parent(self) -> 'PathValue':
        """Alias of up()."""
        return self.up()

    def is_below_or_equal(self, base: PathLike) -> bool:
        """
        Check whether base is this path or one of its ancestors.

        Walks up one segment at a time. The walk stops before the empty
        path, so an empty path is never below-or-equal to anything.
        """
        base = base if isinstance(base, PathValue) else PathValue(base)

        candidate = self
        while not candidate.is_empty:
            if candidate == base:
                return True
            candidate = candidate.up()
        return False

    def relative_to(self, base: PathLike) -> 'PathValue':
        """
        Express this path relative to an ancestor-or-equal base.

        Args:
            base: Path that this path is below or equal to

        Returns:
            New relative PathValue without a drive letter

        Raises:
            UnrelatedPathsError: If base is not an ancestor-or-equal
        """
        base = base if isinstance(base, PathValue) else PathValue(base)

        if not self.is_below_or_equal(base):
            raise UnrelatedPathsError(str(self), str(base))

        return PathValue._from_parts(
            self._segments[len(base._segments):], True, None
        )

    # Equality and rendering

    def equals(self, other: object) -> bool:
        """Structural equality over drive letter, relative flag and segments."""
        if not isinstance(other, PathValue):
            return False
        return (
            self._is_relative == other._is_relative
            and self._drive_letter == other._drive_letter
            and self._segments == other._segments
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathValue):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self._is_relative, self._drive_letter, self._segments))

    def to_string(self) -> str:
        """Render as '[drive:][/]seg/seg/...'."""
        prefix = ''
        if self._drive_letter is not None:
            prefix += self._drive_letter + ':'
        if not self._is_relative:
            prefix += '/'
        return prefix + '/'.join(self._segments)

    def __str__(self) -> str:
        return self.to_string()

    def __fspath__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PathValue({self.to_string()!r})"
