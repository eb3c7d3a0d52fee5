"""Byte-order-mark sniffing and construction of the decoding stream."""

from __future__ import annotations

import codecs
import io
import logging
from typing import TYPE_CHECKING, BinaryIO, Final, TextIO

if TYPE_CHECKING:
    import os

logger = logging.getLogger(__name__)

# UTF-32 marks must be checked first: the UTF-32-LE mark starts with the UTF-16-LE one.
_BOMS: Final = (
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)

_MAX_BOM_LENGTH: Final = 4

#: Error handler name used for every decoding stream opened by :func:`open_text`.
UNDEFINED_BYTE_ERRORS: Final = "largesql-undefined-byte"


def _decode_undefined_byte(exc: UnicodeError) -> tuple[str, int]:
    """Map bytes a single-byte code page leaves undefined to the code point of the same value.

    Windows decodes the holes of cp1252 (0x81, 0x8D, 0x8F, 0x90, 0x9D) as the C1 control characters U+0081 and so on.
    Only table-driven single-byte codecs report their errors as ``"charmap"``; errors from any other codec, such as
    malformed UTF-8, are re-raised unchanged.
    """
    if not isinstance(exc, UnicodeDecodeError) or exc.encoding != "charmap":
        raise exc
    undefined = exc.object[exc.start : exc.end]
    return "".join(chr(byte) for byte in undefined), exc.end


codecs.register_error(UNDEFINED_BYTE_ERRORS, _decode_undefined_byte)


def sniff_bom(prefix: bytes) -> tuple[str, int] | None:
    """Identify the encoding announced by a byte-order mark.

    Args:
        prefix: The first bytes of the stream (at least four when available).

    Returns:
        ``(codec, bom_length)`` when *prefix* starts with a known mark, else ``None``.

    Example:
        >>> sniff_bom(b"\\xef\\xbb\\xbfINSERT")
        ('utf-8', 3)
    """
    for bom, codec in _BOMS:
        if prefix.startswith(bom):
            return codec, len(bom)
    return None


def open_text(path: str | os.PathLike[str], fallback_encoding: str) -> tuple[BinaryIO, TextIO, str]:
    """Open *path* for binary read and wrap it in a line-buffered decoder.

    The byte-order mark, if any, is consumed before decoding starts so it never appears in the first line. Universal
    newline handling is enabled: ``\\r\\n``, ``\\n`` and ``\\r`` all end a line.

    The caller owns both returned handles. If wrapping fails the binary handle is closed before the exception
    propagates.

    Args:
        path: File to open.
        fallback_encoding: Codec used when no byte-order mark is present.

    Returns:
        ``(binary_handle, text_stream, encoding)``.

    Raises:
        OSError: If the file cannot be opened or its first bytes cannot be read.
    """
    raw = open(path, "rb")  # noqa: SIM115
    try:
        # peek() leaves the bytes in the buffer, so non-seekable sources work too.
        sniffed = sniff_bom(raw.peek(_MAX_BOM_LENGTH)[:_MAX_BOM_LENGTH])
        if sniffed is None:
            encoding = fallback_encoding
        else:
            encoding, bom_length = sniffed
            raw.read(bom_length)
        text = io.TextIOWrapper(raw, encoding=encoding, errors=UNDEFINED_BYTE_ERRORS, newline=None)
    except BaseException:
        raw.close()
        raise
    logger.debug("Opened %s with encoding %s (bom: %s)", path, encoding, sniffed is not None)
    return raw, text, encoding
