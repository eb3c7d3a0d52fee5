"""Reader configuration."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from largesql.constants import FALLBACK_ENCODING, LINE_SEPARATOR, MAX_CHUNK_LINES

if TYPE_CHECKING:
    from collections.abc import Mapping

#: Accepted spellings for the line separator, on the command line and in the environment.
LINE_SEPARATORS: Final[Mapping[str, str]] = {
    "crlf": "\r\n",
    "lf": "\n",
}


@dataclass(frozen=True)
class ReaderSettings:
    """Tunable parameters of a :class:`~largesql.ChunkReader`.

    The defaults reproduce the chunk layout expected by SQL Server tooling: ``cp1252`` for files without a byte-order
    mark, ``CRLF`` line breaks and a cap of 131072 lines per chunk.

    Attributes:
        fallback_encoding: Codec used when the source carries no byte-order mark.
        max_lines: Buffered-line cap checked while an insert-block accumulates.
        line_separator: Text placed between chunk lines.
    """

    fallback_encoding: str = FALLBACK_ENCODING
    max_lines: int = MAX_CHUNK_LINES
    line_separator: str = LINE_SEPARATOR

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.fallback_encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding {self.fallback_encoding!r}") from None
        if self.max_lines < 1:
            raise ValueError(f"max_lines must be positive, got {self.max_lines}")
        if self.line_separator not in LINE_SEPARATORS.values():
            raise ValueError(f"line_separator must be CRLF or LF, got {self.line_separator!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ReaderSettings:
        """Build settings from ``LARGESQL_*`` environment variables.

        Recognized variables are ``LARGESQL_FALLBACK_ENCODING``, ``LARGESQL_MAX_LINES`` and
        ``LARGESQL_LINE_SEPARATOR`` (``crlf`` or ``lf``). Unset variables keep their defaults.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, str | int] = {}

        encoding = env.get("LARGESQL_FALLBACK_ENCODING")
        if encoding:
            kwargs["fallback_encoding"] = encoding

        max_lines = env.get("LARGESQL_MAX_LINES")
        if max_lines:
            try:
                kwargs["max_lines"] = int(max_lines)
            except ValueError:
                raise ValueError(f"LARGESQL_MAX_LINES must be an integer, got {max_lines!r}") from None

        separator = env.get("LARGESQL_LINE_SEPARATOR")
        if separator:
            try:
                kwargs["line_separator"] = LINE_SEPARATORS[separator.lower()]
            except KeyError:
                raise ValueError(f"LARGESQL_LINE_SEPARATOR must be 'crlf' or 'lf', got {separator!r}") from None

        return cls(**kwargs)  # type: ignore[arg-type]
