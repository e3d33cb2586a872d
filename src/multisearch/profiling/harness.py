"""Throughput harness for build and scan.

Generates a reproducible set of random patterns over a small alphabet,
builds a finder from them, then scans a random text of the requested
length and reports timings. A small alphabet keeps the match density
high, which is the expensive case for the output-chain walk.
"""
from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass

from multisearch.search.multi_search import Algorithm, MultiSearch


@dataclass(slots=True)
class BenchmarkResult:
    """Timing results from a single benchmark run."""
    pattern_count: int
    text_length: int
    vertex_count: int
    build_time_ms: float
    scan_time_ms: float
    matches: int
    symbols_per_sec: float


def generate_patterns(
    count: int,
    alphabet: str,
    min_length: int,
    max_length: int,
    rng: random.Random,
) -> list[str]:
    """Return `count` distinct random patterns (fewer if the space is too small)."""
    seen: set[str] = set()
    attempts = 0
    while len(seen) < count and attempts < count * 20:
        attempts += 1
        length = rng.randint(min_length, max_length)
        seen.add("".join(rng.choice(alphabet) for _ in range(length)))
    return sorted(seen)


def run_benchmark(
    pattern_count: int = 1_000,
    text_length: int = 100_000,
    alphabet: str = string.ascii_lowercase[:8],
    min_length: int = 3,
    max_length: int = 8,
    seed: int = 42,
    algorithm: Algorithm = Algorithm.AHO_CORASICK,
) -> BenchmarkResult:
    """Build a finder over generated patterns and scan generated text."""
    rng = random.Random(seed)
    patterns = generate_patterns(pattern_count, alphabet, min_length, max_length, rng)
    text = "".join(rng.choice(alphabet) for _ in range(text_length))

    t0 = time.perf_counter()
    search = MultiSearch(algorithm)
    for i, pattern in enumerate(patterns):
        search.register(pattern, i)
    finder = search.build_finder()
    build_ms = (time.perf_counter() - t0) * 1000

    t0 = time.perf_counter()
    matches = sum(1 for _ in finder.search_in(text))
    scan_s = time.perf_counter() - t0

    return BenchmarkResult(
        pattern_count=len(patterns),
        text_length=text_length,
        vertex_count=finder.automaton.vertex_count,
        build_time_ms=build_ms,
        scan_time_ms=scan_s * 1000,
        matches=matches,
        symbols_per_sec=text_length / scan_s if scan_s > 0 else float("inf"),
    )
