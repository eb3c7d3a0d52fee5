"""Lookahead cursor carried between chunks."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class CursorState(enum.Enum):
    """Where the next chunk starts."""

    #: Nothing buffered; the next chunk starts with the next physical line.
    AT_PREAMBLE = "preamble"
    #: The line that ended the previous insert-block is buffered and starts the next chunk.
    AT_TABLE_BLOCK = "table-block"
    #: End of stream was reached; no further chunks.
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Cursor:
    """Immutable one-line lookahead.

    ``pending_line`` is set exactly when ``state`` is :attr:`CursorState.AT_TABLE_BLOCK`. An empty string is a real
    pending line (a blank line in the source), distinct from end of stream.
    """

    state: CursorState
    pending_line: str | None = None

    def __post_init__(self) -> None:
        if (self.state is CursorState.AT_TABLE_BLOCK) != (self.pending_line is not None):
            raise ValueError(f"{self.state.name} cursor cannot have pending_line={self.pending_line!r}")

    @classmethod
    def start(cls) -> Cursor:
        return cls(CursorState.AT_PREAMBLE)

    @classmethod
    def pending(cls, line: str) -> Cursor:
        if line is None:
            raise ValueError("pending line must be a string; use Cursor.exhausted() for end of stream")
        return cls(CursorState.AT_TABLE_BLOCK, line)

    @classmethod
    def exhausted(cls) -> Cursor:
        return cls(CursorState.EXHAUSTED)

    @classmethod
    def after(cls, line: str | None) -> Cursor:
        """Cursor for the line that ended a chunk, ``None`` meaning end of stream."""
        return cls.exhausted() if line is None else cls.pending(line)

    @property
    def is_exhausted(self) -> bool:
        return self.state is CursorState.EXHAUSTED

    @property
    def has_pending(self) -> bool:
        return self.state is CursorState.AT_TABLE_BLOCK
