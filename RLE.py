"""
Run-Length Encoding (RLE) Compression Module

Baseline single-mode codec. A control byte with the high bit set is a run
(count in the low seven bits, followed by the value); any other control
byte is a literal count followed by that many raw bytes.
"""

from codec_errors import MalformedStream
from compressor_ABC import Compressor

RLE_FLAG = 0x80
MIN_RUN_LENGTH = 2
MAX_RUN_LENGTH = 127


class RLECompressor(Compressor):
    """Class for RLE compression and decompression"""

    @staticmethod
    def _run_at(data: bytes, pos: int) -> int:
        count = 1
        while (
            pos + count < len(data)
            and data[pos + count] == data[pos]
            and count < MAX_RUN_LENGTH
        ):
            count += 1
        return count

    def encode(self, data: bytes) -> bytes:
        """
        Compress data using RLE.

        Args:
            data: Input data as bytes

        Returns:
            Encoded bytes
        """
        result = bytearray()
        pos = 0

        while pos < len(data):
            run = self._run_at(data, pos)
            if run >= MIN_RUN_LENGTH:
                result.append(RLE_FLAG | run)
                result.append(data[pos])
                pos += run
                continue

            start = pos
            while pos < len(data) and pos - start < MAX_RUN_LENGTH:
                if self._run_at(data, pos) >= MIN_RUN_LENGTH:
                    break
                pos += 1

            result.append(pos - start)
            result.extend(data[start:pos])

        return bytes(result)

    def decode(self, encoded: bytes) -> bytes:
        """
        Decompress RLE data.

        Args:
            encoded: Bytes produced by encode()

        Returns:
            Decompressed data as bytes
        """
        result = bytearray()
        pos = 0
        n = len(encoded)

        while pos < n:
            control = encoded[pos]
            pos += 1
            if control & RLE_FLAG:
                if pos >= n:
                    raise MalformedStream(f"Run at offset {pos - 1} has no value byte")
                result.extend(encoded[pos : pos + 1] * (control & 0x7F))
                pos += 1
            else:
                if pos + control > n:
                    raise MalformedStream(
                        f"Literal at offset {pos - 1} needs {control} bytes, "
                        f"only {n - pos} left"
                    )
                result.extend(encoded[pos : pos + control])
                pos += control

        return bytes(result)
