"""Error handling for largesql.

Provides the public exception hierarchy. Every error raised by the package derives from :class:`LargeSqlError`, and
each concrete error also derives from the builtin a caller would naturally catch (``OSError`` for I/O faults,
``ValueError`` for malformed input).
"""

from __future__ import annotations

import os


class LargeSqlError(Exception):
    """Base class for errors raised by largesql."""


class SourceError(LargeSqlError, OSError):
    """The SQL source could not be opened or a read failed mid-stream.

    Raised when :class:`~largesql.ChunkReader` cannot open its file (missing, permission denied, locked, a directory)
    or when reading or decoding fails after some chunks have already been produced. The error is fatal for the file:
    the reader is closed before the exception propagates. Chunks returned before the failure remain valid.

    The original exception is always available as ``__cause__``.

    Attributes:
        message: Human-readable error description.
        path: Path of the source file.
        line_number: Number of physical lines successfully read before the failure (``0`` when the failure happened
            before the first line, e.g. on open). Decoding happens in blocks of several kilobytes, so an undecodable
            byte surfaces when its block is first read: the offending line is at or after ``line_number + 1``, and
            ``line_number`` is only a lower bound for it.

    Examples:
        >>> from largesql import ChunkReader, SourceError
        >>> try:
        ...     ChunkReader("missing.sql")
        ... except SourceError as e:
        ...     print(e.line_number)
        0
    """

    def __init__(self, message: str, *, path: str | os.PathLike[str], line_number: int = 0) -> None:
        """Create a SourceError.

        Args:
            message: Human-readable error description.
            path: Path of the source file.
            line_number: Number of physical lines read before the failure.
        """
        super().__init__(message)
        self.message = message
        self.path = os.fspath(path)
        self.line_number = line_number

    def __str__(self) -> str:
        return self.message


class FormatViolationError(LargeSqlError, ValueError):
    """An insert line does not follow the ``INSERT INTO [schema].[Table] (`` convention.

    The reader extracts table names by position (see :func:`~largesql.extract_table_name`) and refuses to guess when
    the bracket pattern is absent. The error is recoverable by the caller: the reader stays open and keeps the
    offending line pending, so calling :meth:`~largesql.ChunkReader.next_chunk` again raises the same error instead
    of silently skipping input. A caller typically falls back to executing the file whole, or aborts it.

    Attributes:
        message: Human-readable error description.
        line: The offending line, without its terminator.
        line_number: 1-based physical line number of the offending line (``0`` when unknown).
        reason: Short machine-friendly description of what was missing.
    """

    def __init__(self, message: str, *, line: str, line_number: int = 0, reason: str = "") -> None:
        """Create a FormatViolationError.

        Args:
            message: Human-readable error description.
            line: The offending line.
            line_number: 1-based physical line number of the offending line.
            reason: Short description of what was missing.
        """
        super().__init__(message)
        self.message = message
        self.line = line
        self.line_number = line_number
        self.reason = reason
