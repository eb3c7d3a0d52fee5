"""Table-name extraction from raw insert lines.

The reader does not parse SQL. It finds the table of an insert statement by position, assuming the layout emitted by
SQL Server script generators::

    INSERT INTO [dbo].[Customer] ([Id], [Name]) VALUES (1, N'Ada')
                      ^        ^^
                      |        |+- first "(" of the line
                      |        +-- "] " immediately before it
                      +----------- name starts after the first ".["

The name is whatever lies between the first ``.[`` and the two characters preceding the first ``(``. Lines that do
not match this layout are rejected with :class:`~largesql.FormatViolationError` rather than reinterpreted: a more
permissive rule would move chunk boundaries.
"""

from __future__ import annotations

from largesql.constants import PARAMETER_LIST_OPEN, SCHEMA_DELIMITER, TABLE_NAME_SUFFIX
from largesql.errors import FormatViolationError


def _violation(line: str, line_number: int | None, reason: str) -> FormatViolationError:
    where = f"line {line_number}" if line_number else "insert line"
    return FormatViolationError(
        f"Cannot extract table name from {where}: {reason}",
        line=line,
        line_number=line_number or 0,
        reason=reason,
    )


def extract_table_name(line: str, *, line_number: int | None = None) -> str:
    """Return the bare table name of an ``INSERT INTO [schema].[Table] (`` line.

    Args:
        line: An insert line, without its terminator.
        line_number: 1-based physical line number, used in error reports.

    Returns:
        The table name without brackets, e.g. ``"Customer"``.

    Raises:
        FormatViolationError: If the line does not follow the bracketed naming convention.

    Example:
        >>> extract_table_name("INSERT INTO [dbo].[Customer] ([Id]) VALUES (1)")
        'Customer'
    """
    delimiter = line.find(SCHEMA_DELIMITER)
    if delimiter < 0:
        raise _violation(line, line_number, f"missing schema delimiter {SCHEMA_DELIMITER!r}")

    paren = line.find(PARAMETER_LIST_OPEN)
    if paren < 0:
        raise _violation(line, line_number, f"missing column list {PARAMETER_LIST_OPEN!r}")

    start = delimiter + len(SCHEMA_DELIMITER)
    end = paren - len(TABLE_NAME_SUFFIX)
    if end <= start:
        raise _violation(line, line_number, "column list opens before the table name")
    if line[end:paren] != TABLE_NAME_SUFFIX:
        raise _violation(line, line_number, f"table name is not followed by {TABLE_NAME_SUFFIX!r}")

    return line[start:end]


def table_marker(table_name: str) -> str:
    """Return the text every line of an insert-block must contain, e.g. ``".[Customer]"``.

    The bare name is too weak a marker: ``T`` occurs in ``INSERT`` itself, so blocks are delimited by the bracketed,
    schema-qualified form instead.
    """
    return f"{SCHEMA_DELIMITER}{table_name}]"
