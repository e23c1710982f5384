"""
Exceptions raised by the byte codecs.
"""


class CodecError(ValueError):
    """Base class for every error raised while encoding or decoding."""


class CapacityExceeded(CodecError):
    """The output would not fit into the capacity given by the caller."""

    def __init__(self, capacity: int, needed: int):
        super().__init__(
            f"Output needs at least {needed} bytes, capacity is {capacity}"
        )
        self.capacity = capacity
        self.needed = needed


class MalformedStream(CodecError):
    """The encoded stream is truncated or holds a record that cannot exist."""


class ValueOutOfRange(CodecError):
    """A record field does not fit into its bit width."""
