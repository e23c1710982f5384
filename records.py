"""
Record types of the multi-strategy format.

Each class is one encoding mode and carries exactly the fields that mode
needs. A record validates its fields when it is built, writes itself to a
BitWriter, reads itself back from a BitReader and expands to the bytes it
stands for.
"""

from bit_reader import BitReader
from bit_writer import BitWriter
from codec_errors import ValueOutOfRange
from common_values import (
    COMMON_VALUES,
    DELTA_BIAS,
    DELTA_MODULUS,
    EXT_COMMON_VAL,
    EXT_PATTERN,
    EXT_ZERO_RUN,
    LENGTH_MASK,
    MAX_DELTA_STEP,
    MAX_FIELD_4,
    MAX_FIELD_6,
    MAX_ZERO_RUN,
    MODE_DELTA,
    MODE_LITERAL,
    MODE_NIBBLE,
    MODE_RLE,
    is_reserved_delta_length,
)


def _check(name: str, value: int, low: int, high: int):
    if not low <= value <= high:
        raise ValueOutOfRange(f"{name}={value} outside [{low}, {high}]")


def _write_tag(writer: BitWriter, mode: int, length: int):
    writer.write_bits_msb(mode >> 6, 2)
    writer.write_bits_msb(length, 6)


class Record:
    """Common behaviour of all record types."""

    name = "record"
    _fields: tuple[str, ...] = ()

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self._fields)

    def __hash__(self):
        return hash((type(self),) + tuple(getattr(self, f) for f in self._fields))

    def __repr__(self):
        args = ", ".join(f"{f}={getattr(self, f)!r}" for f in self._fields)
        return f"{type(self).__name__}({args})"

    @property
    def span(self) -> int:
        """Number of original bytes this record stands for."""
        raise NotImplementedError

    @property
    def encoded_size(self) -> int:
        """Number of bytes this record takes in the encoded stream."""
        raise NotImplementedError

    def write(self, writer: BitWriter):
        raise NotImplementedError

    def expand(self) -> bytes:
        raise NotImplementedError


class ZeroRun(Record):
    """0xF0, length byte: up to 255 zero bytes."""

    name = "zero run"
    _fields = ("length",)

    def __init__(self, length: int):
        _check("length", length, 0, MAX_ZERO_RUN)
        self.length = length

    @property
    def span(self):
        return self.length

    @property
    def encoded_size(self):
        return 2

    def write(self, writer):
        writer.write_byte(EXT_ZERO_RUN)
        writer.write_byte(self.length)

    @classmethod
    def read(cls, reader: BitReader, control: int) -> "ZeroRun":
        return cls(reader.read_byte())

    def expand(self):
        return bytes(self.length)


class PatternRun(Record):
    """0xE0, (length << 4 | count), unit bytes: a unit repeated count times."""

    name = "pattern"
    _fields = ("unit", "count")

    def __init__(self, unit: bytes, count: int):
        _check("pattern length", len(unit), 0, MAX_FIELD_4)
        _check("repeat count", count, 0, MAX_FIELD_4)
        self.unit = bytes(unit)
        self.count = count

    @property
    def span(self):
        return len(self.unit) * self.count

    @property
    def encoded_size(self):
        return 2 + len(self.unit)

    def write(self, writer):
        writer.write_byte(EXT_PATTERN)
        writer.write_bits_msb(len(self.unit), 4)
        writer.write_bits_msb(self.count, 4)
        writer.write_bytes(self.unit)

    @classmethod
    def read(cls, reader, control):
        length = reader.read_bits_msb(4)
        count = reader.read_bits_msb(4)
        return cls(reader.read_bytes(length), count)

    def expand(self):
        return self.unit * self.count


class CommonValue(Record):
    """0xF2, (length << 4 | index): a short run of a common-value table entry."""

    name = "common value"
    _fields = ("index", "length")

    def __init__(self, index: int, length: int):
        _check("common value index", index, 0, len(COMMON_VALUES) - 1)
        _check("length", length, 0, MAX_FIELD_4)
        self.index = index
        self.length = length

    @property
    def value(self) -> int:
        return COMMON_VALUES[self.index]

    @property
    def span(self):
        return self.length

    @property
    def encoded_size(self):
        return 2

    def write(self, writer):
        writer.write_byte(EXT_COMMON_VAL)
        writer.write_bits_msb(self.length, 4)
        writer.write_bits_msb(self.index, 4)

    @classmethod
    def read(cls, reader, control):
        length = reader.read_bits_msb(4)
        index = reader.read_bits_msb(4)
        return cls(index, length)

    def expand(self):
        return bytes([self.value]) * self.length


class Run(Record):
    """10LLLLLL, value: up to 63 copies of one byte."""

    name = "run"
    _fields = ("value", "length")

    def __init__(self, value: int, length: int):
        _check("value", value, 0, 0xFF)
        _check("length", length, 0, MAX_FIELD_6)
        self.value = value
        self.length = length

    @property
    def span(self):
        return self.length

    @property
    def encoded_size(self):
        return 2

    def write(self, writer):
        _write_tag(writer, MODE_RLE, self.length)
        writer.write_byte(self.value)

    @classmethod
    def read(cls, reader, control):
        return cls(reader.read_byte(), control & LENGTH_MASK)

    def expand(self):
        return bytes([self.value]) * self.length


class Delta(Record):
    """
    11LLLLLL, start, delta + 16: an arithmetic sequence of 7-bit values.

    Value i of the sequence is (start + i * delta) mod 128.
    """

    name = "delta"
    _fields = ("start", "delta", "length")

    def __init__(self, start: int, delta: int, length: int):
        _check("start", start, 0, DELTA_MODULUS - 1)
        _check("delta", delta, -MAX_DELTA_STEP, MAX_DELTA_STEP)
        _check("length", length, 0, MAX_FIELD_6)
        if is_reserved_delta_length(length):
            raise ValueOutOfRange(f"Delta length {length} collides with a sentinel")
        self.start = start
        self.delta = delta
        self.length = length

    @property
    def span(self):
        return self.length

    @property
    def encoded_size(self):
        return 3

    def write(self, writer):
        _write_tag(writer, MODE_DELTA, self.length)
        writer.write_byte(self.start)
        writer.write_byte(self.delta + DELTA_BIAS)

    @classmethod
    def read(cls, reader, control):
        start = reader.read_byte()
        delta = reader.read_byte() - DELTA_BIAS
        return cls(start, delta, control & LENGTH_MASK)

    def expand(self):
        return bytes(
            (self.start + i * self.delta) % DELTA_MODULUS for i in range(self.length)
        )


class Nibble(Record):
    """
    01LLLLLL, packed bytes: values below 16, two per byte, high nibble first.
    An odd trailing value sits in the high nibble of a final byte.
    """

    name = "nibble"
    _fields = ("values",)

    def __init__(self, values: bytes):
        _check("count", len(values), 0, MAX_FIELD_6)
        for v in values:
            _check("nibble", v, 0, 0x0F)
        self.values = bytes(values)

    @property
    def span(self):
        return len(self.values)

    @property
    def encoded_size(self):
        return 1 + (len(self.values) + 1) // 2

    def write(self, writer):
        _write_tag(writer, MODE_NIBBLE, len(self.values))
        for v in self.values:
            writer.write_bits_msb(v, 4)
        writer.byte_align()

    @classmethod
    def read(cls, reader, control):
        count = control & LENGTH_MASK
        values = bytes(reader.read_bits_msb(4) for _ in range(count))
        reader.byte_align()
        return cls(values)

    def expand(self):
        return self.values


class Literal(Record):
    """00LLLLLL, raw bytes: up to 63 bytes copied verbatim."""

    name = "literal"
    _fields = ("data",)

    def __init__(self, data: bytes):
        _check("count", len(data), 0, MAX_FIELD_6)
        self.data = bytes(data)

    @property
    def span(self):
        return len(self.data)

    @property
    def encoded_size(self):
        return 1 + len(self.data)

    def write(self, writer):
        _write_tag(writer, MODE_LITERAL, len(self.data))
        writer.write_bytes(self.data)

    @classmethod
    def read(cls, reader, control):
        return cls(reader.read_bytes(control & LENGTH_MASK))

    def expand(self):
        return self.data
