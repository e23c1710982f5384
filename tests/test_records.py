import pytest

from bit_reader import BitReader
from bit_writer import BitWriter
from codec_errors import ValueOutOfRange
from records import CommonValue, Delta, Literal, Nibble, PatternRun, Run, ZeroRun


def serialize(record):
    writer = BitWriter()
    record.write(writer)
    return writer.getvalue()


@pytest.mark.parametrize(
    "record, expected",
    [
        (ZeroRun(5), b"\xf0\x05"),
        (ZeroRun(255), b"\xf0\xff"),
        (Delta(0x10, 1, 5), bytes([0xC5, 0x10, 0x11])),
        (Delta(20, -3, 5), bytes([0xC5, 20, 13])),
        (Nibble(b"\x01\x02\x03\x04\x05"), bytes([0x45, 0x12, 0x34, 0x50])),
        (Nibble(b"\x0f\x00\x0a\x0b"), bytes([0x44, 0xF0, 0xAB])),
        (PatternRun(b"\x12\x34", 4), bytes([0xE0, 0x24, 0x12, 0x34])),
        (CommonValue(5, 15), bytes([0xF2, 0xF5])),
        (Run(0xAA, 63), bytes([0xBF, 0xAA])),
        (Literal(b"\x03\x74"), bytes([0x02, 0x03, 0x74])),
    ],
)
def test_wire_layout(record, expected):
    encoded = serialize(record)
    assert encoded == expected
    assert len(encoded) == record.encoded_size


@pytest.mark.parametrize(
    "build",
    [
        lambda: ZeroRun(256),
        lambda: Delta(0, 16, 3),
        lambda: Delta(0, -16, 3),
        lambda: Delta(0x80, 1, 3),
        lambda: Delta(0, 1, 64),
        lambda: Delta(0, 1, 32),
        lambda: Delta(0, 1, 48),
        lambda: Delta(0, 1, 50),
        lambda: Nibble(b"\x10"),
        lambda: Nibble(b"\x01" * 64),
        lambda: PatternRun(b"x" * 16, 2),
        lambda: PatternRun(b"ab", 16),
        lambda: CommonValue(8, 3),
        lambda: CommonValue(0, 16),
        lambda: Run(0x100, 3),
        lambda: Run(1, 64),
        lambda: Literal(b"x" * 64),
    ],
)
def test_fields_are_validated(build):
    with pytest.raises(ValueOutOfRange):
        build()


def test_expand():
    assert ZeroRun(4).expand() == bytes(4)
    assert Delta(0x7E, 1, 4).expand() == bytes([0x7E, 0x7F, 0x00, 0x01])
    assert Delta(2, -3, 3).expand() == bytes([2, 127, 124])
    assert PatternRun(b"ab", 3).expand() == b"ababab"
    assert CommonValue(6, 4).expand() == b"\x7f" * 4
    assert Run(0x42, 3).expand() == b"\x42\x42\x42"
    assert Nibble(b"\x01\x02\x03").expand() == b"\x01\x02\x03"
    assert Literal(b"xyz").expand() == b"xyz"


def test_span_matches_expansion():
    for record in (ZeroRun(7), Delta(1, 2, 9), PatternRun(b"abc", 5), CommonValue(1, 12)):
        assert record.span == len(record.expand())


def test_read_back_odd_nibbles():
    reader = BitReader(b"\x12\x34\x50\x99")
    record = Nibble.read(reader, 0x45)
    assert record == Nibble(b"\x01\x02\x03\x04\x05")
    assert reader.read_byte() == 0x99


def test_read_back_pattern():
    reader = BitReader(b"\x32abc")
    assert PatternRun.read(reader, 0xE0) == PatternRun(b"abc", 2)
    assert reader.at_end()


def test_equality_and_repr():
    assert Run(1, 3) == Run(1, 3)
    assert Run(1, 3) != Run(1, 4)
    assert Run(1, 3) != CommonValue(1, 3)
    assert len({Literal(b"a"), Literal(b"a")}) == 1
    assert repr(Delta(4, 0, 3)) == "Delta(start=4, delta=0, length=3)"
    assert CommonValue(5, 3).value == 0xFF
