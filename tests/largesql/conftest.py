from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from largesql import ChunkReader, ReaderSettings

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence
    from pathlib import Path

CRLF = "\r\n"

# -- Script fixtures -----------------------------------------------------------


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing *lines* to a fresh file and returning its path."""
    counter = iter(range(1_000_000))

    def _write(
        lines: Sequence[str],
        *,
        encoding: str = "cp1252",
        newline: str = "\n",
        bom: bytes = b"",
        trailing_newline: bool = True,
    ) -> Path:
        path = tmp_path / f"script_{next(counter)}.sql"
        text = newline.join(lines)
        if trailing_newline and lines:
            text += newline
        path.write_bytes(bom + text.encode(encoding))
        return path

    return _write


@pytest.fixture
def open_reader() -> Iterator[Callable[..., ChunkReader]]:
    """Factory opening readers that are closed at teardown."""
    readers: list[ChunkReader] = []

    def _open(path: Path, **settings: object) -> ChunkReader:
        reader = ChunkReader(path, settings=ReaderSettings(**settings) if settings else None)  # type: ignore[arg-type]
        readers.append(reader)
        return reader

    yield _open
    for reader in readers:
        reader.close()


# -- Assertion helpers ---------------------------------------------------------


def chunk_lines(chunk: str, separator: str = CRLF) -> list[str]:
    """Split a chunk into its lines."""
    return chunk.split(separator)


def body_lines(chunk: str, separator: str = CRLF) -> list[str]:
    """Lines of a chunk without the injected BEGIN/COMMIT/GO boilerplate."""
    lines = chunk_lines(chunk, separator)
    assert lines[-1] == "GO"
    assert lines[-2].upper() == "COMMIT TRANSACTION"
    lines = lines[:-2]
    if lines and lines[0] == "BEGIN TRANSACTION":
        lines = lines[1:]
    return lines


@pytest.fixture
def chunks_of(open_reader: Callable[..., ChunkReader]) -> Callable[..., list[str]]:
    """Read every chunk of a file; asserts the reader reports exhaustion afterwards."""

    def _chunks(path: Path, **settings: object) -> list[str]:
        reader = open_reader(path, **settings)
        chunks = list(reader)
        assert reader.next_chunk() == ""
        assert reader.cursor.is_exhausted
        return chunks

    return _chunks
