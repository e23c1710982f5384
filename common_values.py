"""
Constants shared by the multi-strategy encoder and decoder:
mode tags, sentinel bytes, field limits and the common-value table.
"""

# Base modes live in the two high bits of a control byte
MODE_LITERAL = 0x00
MODE_NIBBLE = 0x40
MODE_RLE = 0x80
MODE_DELTA = 0xC0
MODE_MASK = 0xC0
LENGTH_MASK = 0x3F

# Sentinel bytes select the extended modes
EXT_PATTERN = 0xE0
EXT_ZERO_RUN = 0xF0
EXT_INCR_SEQ = 0xF1  # reserved, never emitted
EXT_COMMON_VAL = 0xF2

SENTINELS = frozenset({EXT_PATTERN, EXT_ZERO_RUN, EXT_INCR_SEQ, EXT_COMMON_VAL})

# Field widths
MAX_FIELD_6 = 63
MAX_FIELD_4 = 15
MAX_ZERO_RUN = 255

# Detector thresholds
MIN_ZERO_RUN = 3
MIN_RUN = 3
MIN_DELTA_LENGTH = 3
MAX_DELTA_STEP = 15
DELTA_BIAS = 16
DELTA_MODULUS = 0x80
MIN_NIBBLE_RUN = 4
MAX_NIBBLE_RUN = 62
MIN_PATTERN_LENGTH = 2
MAX_PATTERN_LENGTH = 15
MAX_PATTERN_REPEATS = 15

# Frequent byte values, referenced by index in common-value records
COMMON_VALUES = (0x00, 0x01, 0x02, 0x03, 0x04, 0xFF, 0x7F, 0x20)


def common_value_index(value: int) -> int | None:
    """
    Return the index of value in COMMON_VALUES, or None if it is not there.
    """
    try:
        return COMMON_VALUES.index(value)
    except ValueError:
        return None


def is_reserved_delta_length(length: int) -> bool:
    """True if a delta tag with this length would read back as a sentinel."""
    return (MODE_DELTA | length) in SENTINELS
