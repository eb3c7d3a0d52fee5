"""Splitting chunk text into executable batches on ``GO`` separator lines."""

from __future__ import annotations

import re

from largesql.constants import BATCH_SEPARATOR


def split_batches(text: str, *, separator: str = BATCH_SEPARATOR) -> list[str]:
    """Split script text into the batches a SQL Server client would submit one by one.

    A separator is a line containing only *separator* (case-insensitive, surrounding whitespace ignored). Separator
    lines are removed; batches holding only whitespace are dropped. Line breaks inside a batch are preserved as-is.

    Args:
        text: Script text, typically one chunk returned by :meth:`~largesql.ChunkReader.next_chunk`.
        separator: Batch separator keyword.

    Returns:
        The batch bodies in order, without their separator lines.

    Example:
        >>> split_batches("BEGIN TRANSACTION\\nSELECT 1\\nCOMMIT TRANSACTION\\nGO")
        ['BEGIN TRANSACTION\\nSELECT 1\\nCOMMIT TRANSACTION']
    """
    if not separator or separator.strip() != separator:
        raise ValueError(f"Invalid batch separator {separator!r}")

    pattern = re.compile(rf"^[ \t]*{re.escape(separator)}[ \t]*(?:\r\n|\r|\n|$)", re.IGNORECASE | re.MULTILINE)
    batches: list[str] = []
    start = 0
    for match in pattern.finditer(text):
        batches.append(text[start : match.start()])
        start = match.end()
    batches.append(text[start:])
    return [batch.rstrip("\r\n") for batch in batches if batch.strip()]
