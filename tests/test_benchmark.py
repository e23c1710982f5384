import numpy as np
import pytest

from benchmark import (
    PATTERNS,
    CodecBenchmark,
    generate_pattern,
    main,
    pick_winner,
    run_single_test,
)
from multi_strategy import MultiStrategyCompressor
from RLE import RLECompressor


@pytest.mark.parametrize("kind", sorted(PATTERNS))
def test_generated_patterns_are_7_bit(kind):
    data = generate_pattern(kind, 200, np.random.default_rng(0))
    assert isinstance(data, bytes)
    assert len(data) == 200
    assert max(data) < 0x80


def test_specific_patterns():
    rng = np.random.default_rng(1)
    assert generate_pattern("zeros", 10, rng) == bytes(10)
    assert generate_pattern("sequence", 130, rng) == bytes(i % 128 for i in range(130))
    assert generate_pattern("pattern", 6, rng) == b"\x12\x34\x56\x78\x12\x34"
    assert max(generate_pattern("nibbles", 100, rng)) < 0x10


def test_unknown_pattern():
    with pytest.raises(ValueError):
        generate_pattern("noise", 10, np.random.default_rng())


@pytest.mark.parametrize("codec", [RLECompressor(), MultiStrategyCompressor()])
def test_single_test_verifies(codec):
    result = run_single_test(codec, bytes(64))
    assert result["verified"]
    assert result["original_size"] == 64
    assert result["compressed_size"] < 64
    assert result["compression_ratio"] > 0


def test_pick_winner():
    assert pick_winner({"compression_ratio": 50.0}, {"compression_ratio": 70.0}) == (
        "Advanced",
        20.0,
    )
    assert pick_winner({"compression_ratio": 40.0}, {"compression_ratio": 10.0}) == (
        "Simple",
        30.0,
    )
    assert pick_winner({"compression_ratio": 5.0}, {"compression_ratio": 5.05}) == (
        "Draw",
        0.0,
    )


def test_run_all(capsys):
    bench = CodecBenchmark(seed=3, size=64, iterations=2)
    avg_simple, avg_advanced = bench.run_all()
    out = capsys.readouterr().out
    assert "ORIGINAL EXAMPLE TEST" in out
    assert "FAILED" not in out
    assert "SUMMARY" in out
    assert len(bench.totals["Simple RLE"]) == len(PATTERNS)
    assert isinstance(avg_simple, float)
    assert isinstance(avg_advanced, float)


def test_pattern_rows_verify():
    bench = CodecBenchmark(seed=7, size=128, iterations=1)
    for _, simple, advanced in bench.run_pattern_tests() + bench.run_size_scaling():
        assert simple["verified"]
        assert advanced["verified"]


def test_main(capsys):
    main(["--seed", "1", "--size", "32", "--iterations", "1"])
    assert "SPEED BENCHMARK (1 iterations on 32-byte buffer)" in capsys.readouterr().out
