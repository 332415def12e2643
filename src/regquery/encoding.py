"""Byte encodings of search terms and the hex text form of binary data.

The hive stores render binary value data and slack as upper-case hex byte
pairs joined by dashes (``41-42-43``). A literal term is therefore looked
for, and highlighted, through the same rendering of its single-byte and
UTF-16LE encodings.
"""

from __future__ import annotations

from regquery.constants import HEX_BYTE_SEPARATOR


def hex_rendering(data: bytes) -> str:
    """Render bytes as dash separated upper-case hex pairs.

    Examples
    --------
    >>> hex_rendering(b"AB")
    '41-42'
    >>> hex_rendering(b"")
    ''

    """
    return HEX_BYTE_SEPARATOR.join(f"{byte:02X}" for byte in data)


def single_byte_encoding(term: str) -> bytes:
    """Encode a term one byte per character; characters outside ASCII become ``?``."""
    return term.encode("ascii", errors="replace")


def unicode_encoding(term: str) -> bytes:
    """Encode a term as two-byte little-endian UTF-16 without a byte order mark."""
    return term.encode("utf-16-le")


def term_encodings(term: str) -> tuple[bytes, bytes]:
    """Return the single-byte and UTF-16LE encodings of a term, in that order."""
    return single_byte_encoding(term), unicode_encoding(term)
