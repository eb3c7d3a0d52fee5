"""Chunked reading of large generated SQL data-load scripts."""

import logging

from largesql.batches import split_batches
from largesql.constants import BATCH_SEPARATOR, BEGIN_TRANSACTION, COMMIT_TRANSACTION, MAX_CHUNK_LINES
from largesql.cursor import Cursor, CursorState
from largesql.encoding import sniff_bom
from largesql.errors import FormatViolationError, LargeSqlError, SourceError
from largesql.reader import ChunkReader, read_chunks
from largesql.settings import ReaderSettings
from largesql.table import extract_table_name, table_marker

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BATCH_SEPARATOR",
    "BEGIN_TRANSACTION",
    "ChunkReader",
    "COMMIT_TRANSACTION",
    "Cursor",
    "CursorState",
    "extract_table_name",
    "FormatViolationError",
    "LargeSqlError",
    "MAX_CHUNK_LINES",
    "read_chunks",
    "ReaderSettings",
    "sniff_bom",
    "SourceError",
    "split_batches",
    "table_marker",
]
