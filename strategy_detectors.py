"""
Pattern detectors used by the multi-strategy encoder.

Every detector is a pure function of (data, pos): it looks at the bytes
starting at the cursor and reports how far its pattern extends.
"""

from typing import NamedTuple

from common_values import (
    DELTA_MODULUS,
    MAX_DELTA_STEP,
    MAX_FIELD_6,
    MAX_NIBBLE_RUN,
    MAX_PATTERN_LENGTH,
    MAX_PATTERN_REPEATS,
    MAX_ZERO_RUN,
    MIN_DELTA_LENGTH,
    MIN_NIBBLE_RUN,
    MIN_PATTERN_LENGTH,
    MIN_RUN,
    MIN_ZERO_RUN,
)


class Pattern(NamedTuple):
    """Best repeating unit found at a cursor position."""

    unit: bytes
    count: int

    @property
    def length(self) -> int:
        return len(self.unit)

    @property
    def saved(self) -> int:
        return pattern_savings(len(self.unit), self.count)


def pattern_savings(length: int, count: int) -> int:
    """Bytes saved by one pattern record: covered span minus its own size."""
    return count * length - (2 + length)


def _run_length(data: bytes, pos: int, value: int, limit: int) -> int:
    end = min(len(data), pos + limit)
    i = pos
    while i < end and data[i] == value:
        i += 1
    return i - pos


def detect_zero_run(data: bytes, pos: int) -> int:
    """
    Count consecutive zero bytes from pos, capped at 255.
    Returns 0 when the run is too short to be worth a zero-run record.
    """
    count = _run_length(data, pos, 0x00, MAX_ZERO_RUN)
    return count if count >= MIN_ZERO_RUN else 0


def detect_run(data: bytes, pos: int) -> int:
    """
    Count consecutive bytes equal to data[pos], capped at 63.
    Returns 0 for runs shorter than 3.
    """
    if pos >= len(data):
        return 0
    count = _run_length(data, pos, data[pos], MAX_FIELD_6)
    return count if count >= MIN_RUN else 0


def detect_delta_sequence(data: bytes, pos: int) -> tuple[int, int] | None:
    """
    Detect an arithmetic sequence of 7-bit values starting at pos.

    The step is data[pos+1] - data[pos]; each following byte must equal
    (previous + step) mod 128. Returns (delta, length) for sequences of
    at least 3 values whose step lies in [-15, 15], otherwise None.
    """
    if pos + 2 > len(data):
        return None
    first, second = data[pos], data[pos + 1]
    if first >= DELTA_MODULUS or second >= DELTA_MODULUS:
        return None
    delta = second - first
    if not -MAX_DELTA_STEP <= delta <= MAX_DELTA_STEP:
        return None

    length = 2
    end = min(len(data), pos + MAX_FIELD_6)
    i = pos + 2
    while i < end and data[i] == (data[i - 1] + delta) % DELTA_MODULUS:
        length += 1
        i += 1

    if length < MIN_DELTA_LENGTH:
        return None
    return delta, length


def detect_nibble_run(data: bytes, pos: int) -> int:
    """
    Count consecutive bytes below 16 from pos, capped at 62.
    Returns 0 for fewer than 4 such bytes.
    """
    end = min(len(data), pos + MAX_NIBBLE_RUN)
    i = pos
    while i < end and data[i] < 0x10:
        i += 1
    count = i - pos
    return count if count >= MIN_NIBBLE_RUN else 0


def find_pattern(data: bytes, pos: int) -> Pattern | None:
    """
    Find the repeating unit at pos that saves the most bytes.

    Unit lengths 2..15 are tried while at least two copies fit in the
    remaining buffer; repeats are counted up to 15. On equal savings
    the shorter unit is kept.
    """
    best = None
    best_saved = 0
    n = len(data)

    for length in range(MIN_PATTERN_LENGTH, MAX_PATTERN_LENGTH + 1):
        if pos + length * 2 > n:
            break
        unit = data[pos : pos + length]
        count = 1
        i = pos + length
        while (
            count < MAX_PATTERN_REPEATS
            and i + length <= n
            and data[i : i + length] == unit
        ):
            count += 1
            i += length

        if count < 2:
            continue
        saved = pattern_savings(length, count)
        if best is None or saved > best_saved:
            best = Pattern(bytes(unit), count)
            best_saved = saved

    return best


def should_stop_literal(data: bytes, pos: int) -> bool:
    """
    One-step lookahead for literal accumulation: stop before a run of
    three or more identical bytes or an encodable delta sequence.
    """
    if detect_run(data, pos):
        return True
    return detect_delta_sequence(data, pos) is not None
