from bitarray import bitarray

from codec_errors import CapacityExceeded, ValueOutOfRange


class BitWriter:
    """
    Записувач бітів у bitarray (старший біт першим) з перевіркою місткості.
    Використовується для керуючих байтів, інфо-байтів та упакованих нібблів.
    """

    def __init__(self, capacity: int | None = None):
        """
        :param capacity: максимальна кількість байтів на виході (None - без обмеження)
        """
        self.bits = bitarray(endian="big")
        self.capacity = capacity

    def _reserve(self, length: int):
        if self.capacity is None:
            return
        needed = (len(self.bits) + length + 7) // 8
        if needed > self.capacity:
            raise CapacityExceeded(self.capacity, needed)

    def write_bits_msb(self, value: int, length: int):
        """
        Записує length бітів зі значення value (старший біт першим, MSB first).
        Значення, що не вміщується в length біт, не записується.
        """
        if length < 0:
            raise ValueError("Довжина не може бути негативною")
        if length == 0:
            return
        if value < 0 or value >> length:
            raise ValueOutOfRange(f"Value {value} does not fit into {length} bits")
        self._reserve(length)
        for i in range(length - 1, -1, -1):
            self.bits.append((value >> i) & 1)

    def write_byte(self, value: int):
        """Записує один повний байт."""
        self.write_bits_msb(value, 8)

    def write_bytes(self, data: bytes):
        """
        Записує послідовність байтів. Потік має бути вирівняний до байта.
        """
        if len(self.bits) % 8 != 0:
            raise ValueError("Потік не вирівняний до байта")
        self._reserve(len(data) * 8)
        self.bits.frombytes(bytes(data))

    def byte_align(self):
        """
        Додає нулі до вирівнювання в байт.
        """
        pad = -len(self.bits) % 8
        if pad:
            self._reserve(pad)
            self.bits.extend([0] * pad)

    @property
    def byte_count(self) -> int:
        """Кількість байтів, записаних на цей момент (з неповним байтом)."""
        return (len(self.bits) + 7) // 8

    def getvalue(self) -> bytes:
        """
        Повертає записані дані як bytes (після вирівнювання).
        """
        self.byte_align()
        return self.bits.tobytes()
