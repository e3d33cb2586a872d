"""Benchmark harness and reporting for multisearch."""

from multisearch.profiling.harness import (
    BenchmarkResult,
    generate_patterns,
    run_benchmark,
)
from multisearch.profiling.report import format_report

__all__ = [
    "BenchmarkResult",
    "format_report",
    "generate_patterns",
    "run_benchmark",
]
