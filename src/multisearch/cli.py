"""multisearch CLI entry point.

Usage: multisearch [-v] [command]

    multisearch scan -p she -p he notes.txt
    multisearch compile -f words.txt -o words.msac
    multisearch scan -a words.msac --count notes.txt
    multisearch bench --patterns 5000
"""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable

from multisearch.domain.errors import MultiSearchError
from multisearch.search.strings import StringFinder, StringMultiSearch

log = logging.getLogger(__name__)


def _add_pattern_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-p", "--pattern", action="append", default=[], dest="patterns",
        help="Pattern to search for (repeatable).",
    )
    p.add_argument(
        "-f", "--pattern-file", action="append", default=[], dest="pattern_files",
        help="File with one pattern per line (repeatable). Blank lines are skipped.",
    )


def _add_scan_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "scan",
        help="Report every occurrence of the patterns in files or stdin.",
    )
    _add_pattern_args(p)
    p.add_argument(
        "-a", "--automaton",
        help="Load a compiled automaton written by 'compile' instead of -p/-f.",
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "--count", action="store_true",
        help="Print only the number of matches.",
    )
    mode.add_argument(
        "--any", action="store_true",
        help="Print nothing; exit 0 on the first match, 1 if there is none.",
    )
    p.add_argument("files", nargs="*", help="Files to scan (default: stdin).")


def _add_compile_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "compile",
        help="Compile patterns and save the automaton to a file.",
    )
    _add_pattern_args(p)
    p.add_argument("-o", "--output", required=True, help="Where to write the automaton.")


def _add_bench_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "bench",
        help="Run the build/scan throughput harness.",
    )
    p.add_argument(
        "--patterns", type=int, default=1_000,
        help="Number of generated patterns (default: 1000)",
    )
    p.add_argument(
        "--text-length", type=int, default=100_000,
        help="Length of the generated text (default: 100000)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible runs (default: 42)",
    )


def _collect_patterns(args: argparse.Namespace) -> list[str]:
    """Patterns from -p and -f, in order, without duplicates."""
    patterns: list[str] = list(args.patterns)
    for path in args.pattern_files:
        with open(path, encoding="utf-8") as fp:
            patterns.extend(line.rstrip("\r\n") for line in fp)
    return list(dict.fromkeys(p for p in patterns if p))


def _build_finder(parser: argparse.ArgumentParser, args: argparse.Namespace) -> StringFinder:
    patterns = _collect_patterns(args)
    if not patterns:
        parser.error("no patterns given (use -p or -f)")
    search = StringMultiSearch()
    try:
        for pattern in patterns:
            # The pattern text doubles as its id.
            search.register(pattern, pattern)
    except MultiSearchError as exc:
        parser.error(str(exc))
    log.debug("Registered %d patterns", len(patterns))
    return search.build_finder()


def _read_inputs(files: list[str]) -> Iterable[tuple[str, str]]:
    if not files:
        yield "-", sys.stdin.read()
        return
    for path in files:
        with open(path, encoding="utf-8") as fp:
            yield path, fp.read()


def _run_scan(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    if args.automaton:
        if args.patterns or args.pattern_files:
            parser.error("-a/--automaton cannot be combined with -p/-f")
        with open(args.automaton, "rb") as fp:
            try:
                finder = StringFinder.from_bytes(fp.read())
            except MultiSearchError as exc:
                parser.error(f"{args.automaton}: {exc}")
    else:
        finder = _build_finder(parser, args)

    show_name = len(args.files) > 1
    total = 0
    for name, text in _read_inputs(args.files):
        if args.any:
            if finder.contains_any(text):
                return 0
            continue
        for match in finder.search_in(text):
            total += 1
            if args.count:
                continue
            label = ",".join(sorted(str(i) for i in match.ids))
            prefix = f"{name}:" if show_name else ""
            print(f"{prefix}{match.start}\t{match.length}\t{label}")

    if args.any:
        return 1
    if args.count:
        print(total)
    return 0


def _run_compile(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    finder = _build_finder(parser, args)
    with open(args.output, "wb") as fp:
        fp.write(finder.to_bytes())
    log.info("Wrote automaton to %s", args.output)
    return 0


def _run_bench(args: argparse.Namespace) -> int:
    from multisearch.profiling.harness import run_benchmark
    from multisearch.profiling.report import format_report

    result = run_benchmark(
        pattern_count=args.patterns,
        text_length=args.text_length,
        seed=args.seed,
    )
    print(format_report(result))
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="multisearch",
        description="Find every occurrence of many patterns in one pass (Aho-Corasick).",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log debug output to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_scan_parser(subparsers)
    _add_compile_parser(subparsers)
    _add_bench_parser(subparsers)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "scan":
            code = _run_scan(parser, args)
        elif args.command == "compile":
            code = _run_compile(parser, args)
        else:
            code = _run_bench(args)
    except OSError as exc:
        # Missing or unreadable -f, -a, -o or input files.
        parser.error(f"{exc.filename or exc}: {exc.strerror or exc}")
    sys.exit(code)
