import pytest

from bit_reader import BitReader
from bit_writer import BitWriter
from codec_errors import CapacityExceeded, MalformedStream, ValueOutOfRange


def test_writer_packs_fields_msb_first():
    writer = BitWriter()
    writer.write_bits_msb(1, 2)
    writer.write_bits_msb(5, 6)
    writer.write_bits_msb(0xA, 4)
    writer.write_bits_msb(0xB, 4)
    assert writer.getvalue() == b"\x45\xab"


def test_writer_pads_to_byte():
    writer = BitWriter()
    writer.write_bits_msb(0xF, 4)
    assert writer.byte_count == 1
    assert writer.getvalue() == b"\xf0"


def test_writer_rejects_oversized_values():
    writer = BitWriter()
    with pytest.raises(ValueOutOfRange):
        writer.write_bits_msb(64, 6)
    with pytest.raises(ValueOutOfRange):
        writer.write_bits_msb(-1, 4)
    with pytest.raises(ValueError):
        writer.write_bits_msb(1, -1)


def test_writer_bytes_need_alignment():
    writer = BitWriter()
    writer.write_bits_msb(1, 1)
    with pytest.raises(ValueError):
        writer.write_bytes(b"\x00")


def test_writer_capacity():
    writer = BitWriter(capacity=2)
    writer.write_byte(0x01)
    writer.write_bytes(b"\x02")
    with pytest.raises(CapacityExceeded) as exc_info:
        writer.write_bits_msb(1, 1)
    assert exc_info.value.capacity == 2
    assert exc_info.value.needed == 3
    assert writer.getvalue() == b"\x01\x02"


def test_reader_reads_fields():
    reader = BitReader(b"\xab\x01\x02")
    assert reader.read_bits_msb(4) == 0xA
    assert reader.read_bits_msb(4) == 0xB
    assert reader.remaining_bytes == 2
    assert reader.read_bytes(2) == b"\x01\x02"
    assert reader.at_end()


def test_reader_byte_align():
    reader = BitReader(b"\xf0\x07")
    assert reader.read_bits_msb(4) == 0xF
    reader.byte_align()
    assert reader.read_byte() == 0x07


def test_reader_never_reads_past_end():
    reader = BitReader(b"\xab")
    reader.read_byte()
    with pytest.raises(MalformedStream):
        reader.read_bits_msb(1)

    reader = BitReader(b"\x01")
    with pytest.raises(MalformedStream):
        reader.read_bytes(2)
    assert reader.read_byte() == 0x01


def test_reader_empty():
    reader = BitReader(b"")
    assert reader.at_end()
    assert reader.read_bits_msb(0) == 0
