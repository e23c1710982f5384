"""
Multi-strategy byte compression.

The encoder walks the buffer left to right and, at every position, picks
one record type (zero run, delta sequence, nibble pack, repeating pattern,
common-value run, plain run or literal). The decoder walks the records in
the same order and expands them.
"""

from collections import Counter
from typing import BinaryIO

from bit_reader import BitReader
from bit_writer import BitWriter
from codec_errors import CapacityExceeded, MalformedStream, ValueOutOfRange
from common_values import (
    EXT_COMMON_VAL,
    EXT_INCR_SEQ,
    EXT_PATTERN,
    EXT_ZERO_RUN,
    MAX_FIELD_4,
    MAX_FIELD_6,
    MODE_DELTA,
    MODE_LITERAL,
    MODE_MASK,
    MODE_NIBBLE,
    MODE_RLE,
    common_value_index,
    is_reserved_delta_length,
)
from compressor_ABC import Compressor
from records import (
    CommonValue,
    Delta,
    Literal,
    Nibble,
    PatternRun,
    Record,
    Run,
    ZeroRun,
)
from strategy_detectors import (
    detect_delta_sequence,
    detect_nibble_run,
    detect_run,
    detect_zero_run,
    find_pattern,
    should_stop_literal,
)

SENTINEL_RECORDS = {
    EXT_ZERO_RUN: ZeroRun,
    EXT_PATTERN: PatternRun,
    EXT_COMMON_VAL: CommonValue,
}

MODE_RECORDS = {
    MODE_LITERAL: Literal,
    MODE_NIBBLE: Nibble,
    MODE_RLE: Run,
    MODE_DELTA: Delta,
}


def choose_record(data: bytes, pos: int) -> Record:
    """
    Pick the record that encodes the bytes starting at pos.

    Strategies are tried in priority order: zero run, delta sequence,
    nibble pack, then pattern against plain run by bytes saved, and
    finally a literal.
    """
    zero_run = detect_zero_run(data, pos)
    if zero_run:
        return ZeroRun(zero_run)

    found = detect_delta_sequence(data, pos)
    if found is not None:
        delta, length = found
        while is_reserved_delta_length(length):
            length -= 1
        return Delta(data[pos], delta, length)

    nibbles = detect_nibble_run(data, pos)
    if nibbles:
        return Nibble(data[pos : pos + nibbles])

    pattern = find_pattern(data, pos)
    run = detect_run(data, pos)
    if pattern is not None and (not run or pattern.saved > run - 2):
        return PatternRun(pattern.unit, pattern.count)

    if run:
        value = data[pos]
        index = common_value_index(value)
        if index is not None and run <= MAX_FIELD_4:
            return CommonValue(index, run)
        return Run(value, run)

    end = pos + 1
    limit = min(len(data), pos + MAX_FIELD_6)
    while end < limit and not should_stop_literal(data, end):
        end += 1
    return Literal(data[pos:end])


class MultiStrategyCompressor(Compressor):
    """
    Encoder and decoder for the multi-strategy record format.
    """

    def __init__(self, capacity: int | None = None, verbose: bool = False):
        """
        :param capacity: maximum size in bytes of any produced buffer
                         (None means unbounded)
        :param verbose: print every record as it is chosen or read
        """
        self.capacity = capacity
        self.verbose = verbose

    def plan(self, data: bytes) -> list[Record]:
        """Split data into the records the encoder would emit."""
        data = bytes(data)
        records = []
        pos = 0
        while pos < len(data):
            record = choose_record(data, pos)
            if self.verbose:
                print(f"{record.name} at position {pos}: {record!r}")
            records.append(record)
            pos += record.span
        return records

    def write_records(self, records: list[Record]) -> bytes:
        """Serialise records, honouring the capacity limit."""
        writer = BitWriter(capacity=self.capacity)
        for record in records:
            record.write(writer)
        return writer.getvalue()

    def encode(self, data: bytes) -> bytes:
        if not data:
            return b""
        return self.write_records(self.plan(data))

    def read_records(self, encoded: bytes) -> list[Record]:
        """
        Parse an encoded buffer into records.

        Raises MalformedStream if a record runs past the end of the buffer,
        uses the reserved sentinel or carries an impossible field.
        """
        reader = BitReader(encoded)
        records = []
        while not reader.at_end():
            offset = reader.pos // 8
            control = reader.read_byte()
            if control == EXT_INCR_SEQ:
                raise MalformedStream(
                    f"Reserved control byte 0x{control:02X} at offset {offset}"
                )
            record_cls = SENTINEL_RECORDS.get(control)
            if record_cls is None:
                record_cls = MODE_RECORDS[control & MODE_MASK]
            try:
                record = record_cls.read(reader, control)
            except ValueOutOfRange as e:
                raise MalformedStream(f"Invalid record at offset {offset}: {e}") from e
            if self.verbose:
                print(f"{record.name} at offset {offset}: {record!r}")
            records.append(record)
        return records

    def decode(self, encoded: bytes) -> bytes:
        if not encoded:
            return b""
        output = bytearray()
        for record in self.read_records(encoded):
            if self.capacity is not None and len(output) + record.span > self.capacity:
                raise CapacityExceeded(self.capacity, len(output) + record.span)
            output += record.expand()
        return bytes(output)

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        data = input_stream.read()
        records = self.plan(data)
        encoded = self.write_records(records) if records else b""
        output_stream.write(encoded)

        log = [self.size_log(len(data), len(encoded))]
        counts = Counter(record.name for record in records)
        spans = Counter()
        for record in records:
            spans[record.name] += record.span
        for name, count in counts.most_common():
            log.append(f"{name}: {count} records, {spans[name]} bytes")
        return "\n".join(log)


def encode(data: bytes, capacity: int | None = None) -> bytes:
    """Encode data with the multi-strategy format."""
    return MultiStrategyCompressor(capacity=capacity).encode(data)


def decode(encoded: bytes, capacity: int | None = None) -> bytes:
    """Decode a buffer produced by encode()."""
    return MultiStrategyCompressor(capacity=capacity).decode(encoded)


byte_compress = encode
byte_decompress = decode
