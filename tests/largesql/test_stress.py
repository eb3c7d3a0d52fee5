"""Stress tests at the default line cap.

All tests in this module are marked ``@pytest.mark.stress`` so they can be excluded from fast runs with
``pytest -m "not stress"``.
"""

from __future__ import annotations

import pytest

from largesql import MAX_CHUNK_LINES, ChunkReader

from .conftest import chunk_lines

pytestmark = pytest.mark.stress


def _write_inserts(path, n: int) -> None:
    with open(path, "w", encoding="cp1252", newline="\n") as f:
        for i in range(n):
            f.write(f"INSERT INTO [dbo].[Big] ([Id]) VALUES ({i})\n")


def test_default_cap_splits_large_table(tmp_path):
    path = tmp_path / "big.sql"
    total = MAX_CHUNK_LINES + 10
    _write_inserts(path, total)

    with ChunkReader(path) as reader:
        first = chunk_lines(reader.next_chunk())
        second = chunk_lines(reader.next_chunk())
        assert reader.next_chunk() == ""

    # BEGIN + inserts + COMMIT + GO
    assert len(first) == MAX_CHUNK_LINES + 3
    assert first[-3] == f"INSERT INTO [dbo].[Big] ([Id]) VALUES ({MAX_CHUNK_LINES - 1})"
    assert second[1] == f"INSERT INTO [dbo].[Big] ([Id]) VALUES ({MAX_CHUNK_LINES})"
    assert len(second) == 10 + 3
