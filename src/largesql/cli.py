"""Command-line entry point: ``largesql INPUT [-o DIR]``."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from largesql.errors import FormatViolationError, SourceError
from largesql.reader import ChunkReader
from largesql.settings import LINE_SEPARATORS, ReaderSettings

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("largesql")

EXIT_SOURCE_ERROR = 1
EXIT_FORMAT_VIOLATION = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="largesql",
        description="Split a large generated SQL data-load script into transaction-wrapped batches.",
    )
    parser.add_argument("input", type=Path, help="SQL script to split")
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=None,
        help="Write chunk_00001.sql, chunk_00002.sql, ... into this directory (default: print chunks to stdout)",
    )
    parser.add_argument(
        "--encoding",
        default=None,
        help="Encoding for files without a byte-order mark (default: LARGESQL_FALLBACK_ENCODING or cp1252)",
    )
    parser.add_argument(
        "--max-lines",
        type=int,
        default=None,
        help="Line cap per chunk (default: LARGESQL_MAX_LINES or 131072)",
    )
    parser.add_argument(
        "--line-separator",
        choices=sorted(LINE_SEPARATORS),
        default=None,
        help="Line break written between chunk lines (default: LARGESQL_LINE_SEPARATOR or crlf)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def _settings_from_args(args: argparse.Namespace) -> ReaderSettings:
    settings = ReaderSettings.from_env()
    overrides: dict[str, str | int] = {}
    if args.encoding is not None:
        overrides["fallback_encoding"] = args.encoding
    if args.max_lines is not None:
        overrides["max_lines"] = args.max_lines
    if args.line_separator is not None:
        overrides["line_separator"] = LINE_SEPARATORS[args.line_separator]
    return dataclasses.replace(settings, **overrides)  # type: ignore[arg-type]


def _write_chunks(reader: ChunkReader, output_dir: Path | None) -> int:
    count = 0
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
    for chunk in reader:
        count += 1
        if output_dir is None:
            sys.stdout.write(chunk)
            sys.stdout.write(reader.settings.line_separator)
            continue
        target = output_dir / f"chunk_{count:05d}.sql"
        # newline="" keeps the reader's line separator untouched.
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(chunk)
        logger.info("Wrote %s (%d characters, %d lines read so far)", target, len(chunk), reader.lines_read)
    return count


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = _settings_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        with ChunkReader(args.input, settings=settings) as reader:
            count = _write_chunks(reader, args.output_dir)
    except SourceError as e:
        logger.error("%s", e)
        return EXIT_SOURCE_ERROR
    except FormatViolationError as e:
        logger.error("%s: %r", e, e.line)
        return EXIT_FORMAT_VIOLATION
    except OSError as e:
        logger.error("Cannot write chunks: %s", e)
        return EXIT_SOURCE_ERROR

    logger.info(
        "Split %s into %d chunks (%d lines, encoding %s)", args.input, count, reader.lines_read, reader.encoding
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
