"""Decoding of single UTF-8 sequences and rune-wise cursor movement."""

from __future__ import annotations

UTF_INVALID = 0xFFFD
UTF_SIZ = 4

_UTF_BYTE = (0x80, 0x00, 0xC0, 0xE0, 0xF0)
_UTF_MASK = (0xC0, 0x80, 0xE0, 0xF0, 0xF8)
_UTF_MIN = (0, 0, 0x80, 0x800, 0x10000)
_UTF_MAX = (0x10FFFF, 0x7F, 0x7FF, 0xFFFF, 0x10FFFF)


def _decode_byte(byte: int) -> tuple[int, int]:
    """Return the payload bits of ``byte`` and its kind.

    Kind 0 is a continuation byte, 1 to 4 a lead byte of a sequence of
    that length, and 5 a byte that fits none of these.
    """
    for kind, (mask, lead) in enumerate(zip(_UTF_MASK, _UTF_BYTE)):
        if byte & mask == lead:
            return byte & ~mask & 0xFF, kind
    return 0, len(_UTF_MASK)


def decode(data: bytes) -> tuple[int, int]:
    """Decode the sequence at the start of ``data``.

    Returns the code point and the number of bytes it takes. Invalid input
    gives :data:`UTF_INVALID`; the length is then how far to skip, or 0
    when the sequence is cut short.
    """
    data = bytes(data[:UTF_SIZ])
    if not data:
        return UTF_INVALID, 0
    value, length = _decode_byte(data[0])
    if not 1 <= length <= UTF_SIZ:
        return UTF_INVALID, 1
    consumed = 1
    for byte in data[1:length]:
        bits, kind = _decode_byte(byte)
        if kind:
            return UTF_INVALID, consumed
        value = (value << 6) | bits
        consumed += 1
    if consumed < length:
        return UTF_INVALID, 0
    if not _UTF_MIN[length] <= value <= _UTF_MAX[length] or 0xD800 <= value <= 0xDFFF:
        value = UTF_INVALID
    return value, length


def next_rune(data: bytes, cursor: int, inc: int) -> int:
    """Return the byte offset of the next rune from ``cursor``.

    ``inc`` is +1 to move forward or -1 to move back; continuation bytes
    are skipped. Moving back from the start gives -1.
    """
    pos = cursor + inc
    while pos + inc >= 0 and pos < len(data) and data[pos] & 0xC0 == 0x80:
        pos += inc
    return pos