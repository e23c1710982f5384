from abc import ABC, abstractmethod
import io
from typing import BinaryIO, Tuple


class Compressor(ABC):
    """
    Інтерфейс, що описує операції стиснення та розпакування буфера байтів
    з використанням різних алгоритмів.
    """

    @abstractmethod
    def encode(self, data: bytes) -> bytes:
        """
        Стискає буфер байтів повністю в пам'яті.

        Args:
            data: Вхідні дані

        Returns:
            Стиснені дані
        """

    @abstractmethod
    def decode(self, encoded: bytes) -> bytes:
        """
        Розпаковує буфер, створений методом encode.

        Args:
            encoded: Стиснені дані

        Returns:
            Розпаковані дані
        """

    @staticmethod
    def size_log(before: int, after: int, action: str = "compressed") -> str:
        """
        Формує рядок зі зміною розміру для логування.
        """
        diff = before - after
        if action == "compressed":
            ratio = (1 - after / before) * 100 if before else 0.0
            if diff > 0:
                return f"Size reduced by {diff} bytes ({ratio:.1f}% total saving)"
            return f"Size increased by {-diff} bytes"
        if diff < 0:
            return f"Size increased by {-diff} bytes"
        return f"Size reduced by {diff} bytes"

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Читає всі байти з вхідного потоку, стискає їх та записує результат
        у вказаний вихідний потік.

        Args:
            input_stream: Вхідний потік для даних
            output_stream: Вихідний потік для запису стиснених даних

        Returns:
            Рядок з інформацією для логування
        """
        data = input_stream.read()
        encoded = self.encode(data)
        output_stream.write(encoded)
        return self.size_log(len(data), len(encoded))

    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Читає стиснені байти з потоку, розпаковує їх та записує результат
        у вказаний вихідний потік.

        Args:
            input_stream: Вхідний потік для стиснених даних
            output_stream: Вихідний потік для запису розпакованих даних

        Returns:
            Рядок з інформацією для логування
        """
        encoded = input_stream.read()
        data = self.decode(encoded)
        output_stream.write(data)
        return self.size_log(len(encoded), len(data), action="decompressed")

    @classmethod
    def compress_file(cls, input_file: str, output_file: str) -> str:
        """
        Допоміжний метод для стиснення файлу.

        Args:
            input_file: Шлях до вхідного файлу
            output_file: Шлях до вихідного файлу

        Returns:
            Інформація про стиснення
        """
        compressor = cls()
        with open(input_file, 'rb') as in_file, open(output_file, 'wb') as out_file:
            return compressor.compress(in_file, out_file)

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str) -> str:
        """
        Допоміжний метод для розпакування файлу.

        Args:
            input_file: Шлях до стисненого файлу
            output_file: Шлях до вихідного файлу

        Returns:
            Інформація про розпакування
        """
        compressor = cls()
        with open(input_file, 'rb') as in_file, open(output_file, 'wb') as out_file:
            return compressor.decompress(in_file, out_file)

    @classmethod
    def compress_bytes(cls, data: bytes) -> Tuple[bytes, str]:
        """
        Допоміжний метод для стиснення байтів.

        Args:
            data: Вхідні дані для стиснення

        Returns:
            Кортеж (стиснені дані, інформація про стиснення)
        """
        compressor = cls()
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.compress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info

    @classmethod
    def decompress_bytes(cls, data: bytes) -> Tuple[bytes, str]:
        """
        Допоміжний метод для розпакування байтів.

        Args:
            data: Стиснені дані для розпакування

        Returns:
            Кортеж (розпаковані дані, інформація про розпакування)
        """
        compressor = cls()
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.decompress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info
