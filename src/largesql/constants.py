"""Module-level constants shared by the chunk reader and the batch splitter."""

from __future__ import annotations

from typing import Final

# ── Statement recognition ──────────────────────────────────────────

#: Literal line prefix marking an insert statement. Matched case-sensitively.
INSERT_PREFIX: Final = "INSERT INTO"

#: Delimiter opening the table part of a schema-qualified name (``[dbo].[Table]``).
SCHEMA_DELIMITER: Final = ".["

#: Text expected between the table name and the column-list parenthesis.
TABLE_NAME_SUFFIX: Final = "] "

#: Character opening the column list of an insert statement.
PARAMETER_LIST_OPEN: Final = "("

#: Character an insert line must end with to be considered complete.
STATEMENT_CLOSE: Final = ")"

# ── Injected boilerplate ───────────────────────────────────────────

BEGIN_TRANSACTION: Final = "BEGIN TRANSACTION"
COMMIT_TRANSACTION: Final = "COMMIT TRANSACTION"
BATCH_SEPARATOR: Final = "GO"

# ── Limits and layout ──────────────────────────────────────────────

#: Hard cap on buffered lines while an insert-block accumulates.
MAX_CHUNK_LINES: Final = 131072

#: Separator used to join chunk lines.
LINE_SEPARATOR: Final = "\r\n"

#: Encoding used when the source carries no byte-order mark.
FALLBACK_ENCODING: Final = "cp1252"
