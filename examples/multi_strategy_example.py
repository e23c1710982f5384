"""
Example script demonstrating the baseline RLE codec and the multi-strategy codec
on a small buffer and, optionally, on a file.
"""

import os
import sys
from pathlib import Path

# Add the parent directory to Python path
sys.path.append(str(Path(__file__).parent.parent))

from benchmark import ORIGINAL_EXAMPLE
from multi_strategy import MultiStrategyCompressor
from RLE import RLECompressor


def hex_dump(data: bytes, per_line: int = 8) -> str:
    lines = []
    for i in range(0, len(data), per_line):
        lines.append(" ".join(f"0x{b:02X}" for b in data[i : i + per_line]))
    return "\n".join(lines)


def main():
    print(f"Original data ({len(ORIGINAL_EXAMPLE)} bytes):")
    print(hex_dump(ORIGINAL_EXAMPLE))

    codecs = {
        "Simple RLE": RLECompressor(),
        "Advanced": MultiStrategyCompressor(verbose=True),
    }
    for name, codec in codecs.items():
        print(f"\n{name}:")
        compressed = codec.encode(ORIGINAL_EXAMPLE)
        saved = (1 - len(compressed) / len(ORIGINAL_EXAMPLE)) * 100
        print(f"{name} compressed ({len(compressed)} bytes, {saved:.1f}% saved):")
        print(hex_dump(compressed))

        restored = codec.decode(compressed)
        status = "PASSED" if restored == ORIGINAL_EXAMPLE else "FAILED"
        print(f"{name} decompression: {status}")

    # Example 2: compress a file
    file_input = "input.bin"
    if os.path.exists(file_input):
        output = "compressed_multi.bin"
        print(f"\nCompressing file: {file_input}")
        print(MultiStrategyCompressor.compress_file(file_input, output))
        print(MultiStrategyCompressor.decompress_file(output, f"decompressed_{file_input}"))
        os.remove(output)


if __name__ == "__main__":
    main()
