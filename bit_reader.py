from bitarray import bitarray
from bitarray.util import ba2int

from codec_errors import MalformedStream


class BitReader:
    """
    Клас для зчитування бітів (старший біт першим) з буфера байтів.
    Ніколи не читає за межами буфера.
    """

    def __init__(self, data: bytes):
        """
        :param data: закодований буфер
        """
        self.bits = bitarray(endian="big")
        self.bits.frombytes(bytes(data))
        self.pos = 0  # поточна позиція в бітовому потоці

    def read_bits_msb(self, n: int) -> int:
        """
        Зчитує n бітів та повертає ціле число.
        Біти читаються від старшого до молодшого (MSB first).
        """
        if self.pos + n > len(self.bits):
            raise MalformedStream(
                f"Stream truncated: need {n} bits at bit {self.pos}, "
                f"only {len(self.bits) - self.pos} left"
            )
        if n == 0:
            return 0
        val = ba2int(self.bits[self.pos : self.pos + n])
        self.pos += n
        return val

    def read_byte(self) -> int:
        """Зчитує один повний байт."""
        return self.read_bits_msb(8)

    def read_bytes(self, n: int) -> bytes:
        """
        Зчитує n байтів. Позиція має бути вирівняна до байта.
        """
        if self.pos % 8 != 0:
            raise ValueError("Позиція не вирівняна до байта")
        if self.pos + n * 8 > len(self.bits):
            raise MalformedStream(
                f"Stream truncated: need {n} bytes at byte {self.pos // 8}, "
                f"only {self.remaining_bytes} left"
            )
        chunk = self.bits[self.pos : self.pos + n * 8].tobytes()
        self.pos += n * 8
        return chunk

    def byte_align(self):
        """
        Переміщує позицію до початку наступного байту.
        """
        offset = self.pos % 8
        if offset != 0:
            self.pos += 8 - offset

    @property
    def remaining_bytes(self) -> int:
        return (len(self.bits) - self.pos) // 8

    def at_end(self) -> bool:
        return self.pos >= len(self.bits)
