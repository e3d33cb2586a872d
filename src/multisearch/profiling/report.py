"""Report formatting for benchmark results."""
from __future__ import annotations

from multisearch.profiling.harness import BenchmarkResult


def format_report(result: BenchmarkResult, label: str = "Aho-Corasick") -> str:
    """Format a BenchmarkResult as a readable report string."""
    lines = [
        f"=== {label} ===",
        f"Patterns:          {result.pattern_count:,}",
        f"Vertices:          {result.vertex_count:,}",
        f"Text length:       {result.text_length:,}",
        f"",
        f"Build time:        {result.build_time_ms:.1f} ms",
        f"Scan time:         {result.scan_time_ms:.1f} ms",
        f"Throughput:        {result.symbols_per_sec:,.0f} symbols/sec",
        f"Matches:           {result.matches:,}",
    ]
    return "\n".join(lines)
