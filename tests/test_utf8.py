import pytest

from dynmenu.utf8 import UTF_INVALID, decode, next_rune


@pytest.mark.parametrize("char", ["a", "\x7f", "\u00e9", "\u07ff", "\u20ac", "\uffff", "\U0001f600", "\U0010ffff"])
def test_round_trip_valid_characters(char):
    encoded = char.encode("utf-8")
    assert decode(encoded) == (ord(char), len(encoded))


def test_decode_only_first_sequence():
    text = "\u20acabc".encode("utf-8")
    assert decode(text) == (ord("\u20ac"), len("\u20ac".encode("utf-8")))


def test_decode_empty():
    assert decode(b"") == (UTF_INVALID, 0)


def test_stray_continuation_byte_skips_one():
    assert decode(b"\x80abc") == (UTF_INVALID, 1)


def test_invalid_lead_byte_skips_one():
    assert decode(b"\xff") == (UTF_INVALID, 1)


def test_truncated_sequence_reports_zero():
    assert decode("\u20ac".encode("utf-8")[:2]) == (UTF_INVALID, 0)


def test_broken_continuation_stops_at_offending_byte():
    value, length = decode(b"\xe2a")
    assert value == UTF_INVALID
    assert length == len(b"\xe2")


def test_overlong_encoding_is_invalid():
    data = b"\xc0\x80"
    assert decode(data) == (UTF_INVALID, len(data))


def test_surrogate_is_invalid():
    data = b"\xed\xa0\x80"
    assert decode(data) == (UTF_INVALID, len(data))


def test_next_rune_forward_and_back():
    prefix = "a".encode("utf-8")
    data = "a\u00e9".encode("utf-8")
    assert next_rune(data, 0, +1) == len(prefix)
    assert next_rune(data, len(prefix), +1) == len(data)
    assert next_rune(data, len(data), -1) == len(prefix)
    assert next_rune(data, len(prefix), -1) == 0


def test_next_rune_before_start():
    assert next_rune(b"abc", 0, -1) == -1


def test_next_rune_walks_whole_string():
    text = "x\u00e9\u20ac\U0001f600y"
    data = text.encode("utf-8")
    forward = []
    pos = 0
    while pos < len(data):
        pos = next_rune(data, pos, +1)
        forward.append(pos)
    assert len(forward) == len(text)
    assert forward[-1] == len(data)
    backward = []
    while pos > 0:
        pos = next_rune(data, pos, -1)
        backward.append(pos)
    assert backward == [0, *forward[:-1]][::-1]