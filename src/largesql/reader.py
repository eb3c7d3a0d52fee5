"""Chunked reading of large generated SQL data-load scripts.

A :class:`ChunkReader` walks a script once, line by line, and hands out one self-contained batch per call: the lines
preceding the next run of inserts, then every consecutive insert for one table, wrapped in a transaction and
terminated by a ``GO`` batch separator. Only one line of lookahead is kept between calls, so memory use is bounded by
the size of a single chunk regardless of the file size.
"""

from __future__ import annotations

import logging
import os
import re
from typing import TYPE_CHECKING, Final

from largesql.constants import (
    BATCH_SEPARATOR,
    BEGIN_TRANSACTION,
    COMMIT_TRANSACTION,
    INSERT_PREFIX,
    STATEMENT_CLOSE,
)
from largesql.cursor import Cursor
from largesql.encoding import open_text
from largesql.errors import FormatViolationError, SourceError
from largesql.settings import ReaderSettings
from largesql.table import extract_table_name, table_marker

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType
    from typing import BinaryIO, TextIO

logger = logging.getLogger(__name__)

_BEGIN_TRANSACTION_RE: Final = re.compile(re.escape(BEGIN_TRANSACTION), re.IGNORECASE)


class ChunkReader:
    """Split a large SQL script into transaction-wrapped batches, one per call.

    The reader owns one file handle from construction until :meth:`close`. Use it as a context manager, or iterate
    over it, to consume every chunk::

        with ChunkReader("data.sql") as reader:
            for chunk in reader:
                execute(chunk)

    Each chunk holds the lines preceding the next ``INSERT INTO`` line (DDL, comments, ...) followed by the
    consecutive insert lines whose text contains the same table name, up to :attr:`ReaderSettings.max_lines` lines.
    The line that ends a chunk is kept as lookahead and starts the next one.

    Instances are not thread-safe.

    Args:
        path: Script to read.
        settings: Reader configuration; defaults to :class:`ReaderSettings` ``()``.

    Raises:
        SourceError: If the file cannot be opened.
    """

    def __init__(self, path: str | os.PathLike[str], *, settings: ReaderSettings | None = None) -> None:
        self.path = os.fspath(path)
        self.settings = settings if settings is not None else ReaderSettings()
        self.cursor = Cursor.start()
        self.lines_read = 0
        self.chunks_read = 0
        self._raw: BinaryIO | None = None
        self._text: TextIO | None = None
        try:
            self._raw, self._text, self.encoding = open_text(self.path, self.settings.fallback_encoding)
        except OSError as e:
            raise SourceError(f"Cannot open {self.path}: {e.strerror or e}", path=self.path) from e

    def __repr__(self) -> str:
        state = self.cursor.state.name
        return f"<{type(self).__name__} path={self.path!r} state={state} lines_read={self.lines_read}>"

    def __enter__(self) -> ChunkReader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __iter__(self) -> Iterator[str]:
        while True:
            chunk = self.next_chunk()
            if not chunk:
                return
            yield chunk

    @property
    def closed(self) -> bool:
        return self._text is None

    def next_chunk(self) -> str:
        """Read the next batch.

        Returns:
            The chunk text, starting with ``BEGIN TRANSACTION`` (unless the content already mentions it) and ending
            with ``COMMIT TRANSACTION`` and ``GO``; an empty string once the script is exhausted.

        Raises:
            FormatViolationError: If an insert line does not follow the ``[schema].[Table] (`` convention. The reader
                stays open and does not advance past the offending line.
            SourceError: If reading or decoding fails. The reader is closed.
            ValueError: If the reader is closed.
        """
        if self.closed:
            raise ValueError(f"I/O operation on closed {type(self).__name__}")
        if self.cursor.is_exhausted:
            return ""

        lines: list[str] = []
        line = self._first_line()
        line = self._load_preamble(line, lines)
        if line is None:
            self.cursor = Cursor.exhausted()
        else:
            line = self._load_inserts(line, lines)
            self.cursor = Cursor.after(line)

        if not lines:
            return ""

        self.chunks_read += 1
        logger.debug(
            "Chunk %d of %s: %d lines, next %s", self.chunks_read, self.path, len(lines), self.cursor.state.name
        )

        if lines[-1].casefold() != COMMIT_TRANSACTION.casefold():
            lines.append(COMMIT_TRANSACTION)
        lines.append(BATCH_SEPARATOR)

        separator = self.settings.line_separator
        contents = separator.join(lines)
        if _BEGIN_TRANSACTION_RE.search(contents) is None:
            contents = BEGIN_TRANSACTION + separator + contents
        return contents

    def close(self) -> None:
        """Release the underlying stream. Safe to call more than once."""
        text, raw = self._text, self._raw
        self._text = self._raw = None
        if text is None:
            return
        try:
            text.close()
        finally:
            if raw is not None:
                raw.close()
        logger.debug("Closed %s after %d lines", self.path, self.lines_read)

    def _read_line(self) -> str | None:
        """Return the next physical line without its terminator, or ``None`` at end of stream."""
        if self._text is None:
            raise ValueError(f"I/O operation on closed {type(self).__name__}")
        try:
            line = self._text.readline()
        except (OSError, UnicodeDecodeError) as e:
            line_number = self.lines_read
            self.close()
            raise SourceError(
                f"Read failed in {self.path} at or after line {line_number + 1}: {e}",
                path=self.path,
                line_number=line_number,
            ) from e
        if not line:
            return None
        self.lines_read += 1
        return line[:-1] if line.endswith("\n") else line

    def _first_line(self) -> str | None:
        if self.cursor.has_pending:
            line = self.cursor.pending_line
            self.cursor = Cursor.start()
            return line
        return self._read_line()

    def _load_preamble(self, line: str | None, lines: list[str]) -> str | None:
        while line is not None and not line.startswith(INSERT_PREFIX):
            lines.append(line)
            line = self._read_line()
        return line

    def _load_inserts(self, line: str, lines: list[str]) -> str | None:
        # The current line is always the last one read, so its number is lines_read.
        try:
            table_name = extract_table_name(line, line_number=self.lines_read)
        except FormatViolationError:
            self.cursor = Cursor.pending(line)
            raise

        marker = table_marker(table_name)
        max_lines = self.settings.max_lines
        current: str | None = line
        while current is not None and marker in current and len(lines) < max_lines:
            if current.startswith(INSERT_PREFIX) and not current.endswith(STATEMENT_CLOSE):
                current += self._read_line() or ""
            lines.append(current)
            current = self._read_line()
        return current


def read_chunks(path: str | os.PathLike[str], *, settings: ReaderSettings | None = None) -> Iterator[str]:
    """Yield every chunk of *path*, closing the file when iteration ends or is abandoned.

    Args:
        path: Script to read.
        settings: Reader configuration.

    Yields:
        Chunk texts, in file order.

    Raises:
        SourceError: If the file cannot be opened or read.
        FormatViolationError: If an insert line does not follow the naming convention.
    """
    with ChunkReader(path, settings=settings) as reader:
        yield from reader
