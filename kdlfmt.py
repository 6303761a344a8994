"""CLI for parsing KDL documents and writing their canonical form."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable

from kdlparse import KdlFormatter, ParseException, parse_document
from kdlparse.golden import GoldenResult, run_golden


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Parse KDL documents and print or write their canonical form."
    )
    parser.add_argument(
        "input",
        help="Path to a .kdl file or a directory of .kdl files.",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Directory where canonical files should be written (default: print to stdout).",
    )
    parser.add_argument(
        "--indent",
        default="    ",
        help="Indentation characters to use (default: four spaces).",
    )
    parser.add_argument(
        "--sort-properties",
        action="store_true",
        help="Write properties in key order instead of source order.",
    )
    parser.add_argument(
        "--expected-dir",
        default=None,
        help="Compare INPUT (a directory) against expected outputs of the same name; "
        "an input without an expected file must fail to parse.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable parser debug logging.",
    )
    return parser.parse_args(argv)


def collect_inputs(path: Path) -> list[Path]:
    if path.is_dir():
        files = sorted(p for p in path.glob("*.kdl") if p.is_file())
        if not files:
            raise FileNotFoundError(f"No .kdl files found in directory: {path}")
        return files
    if path.is_file():
        return [path]
    raise FileNotFoundError(f"Input path does not exist: {path}")


def format_text(text: str, formatter: KdlFormatter, verbose: bool = False) -> str:
    document = parse_document(text, config={"enable_logger": verbose})
    return document.serialize(formatter)


def generate(files: Iterable[Path], output_dir: Path | None, formatter: KdlFormatter, verbose: bool = False) -> None:
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
    for source in files:
        text = source.read_text(encoding="utf-8")
        try:
            normalized = format_text(text, formatter, verbose)
        except ParseException as exc:
            raise RuntimeError(f"Failed to parse {source}") from exc
        if output_dir is None:
            sys.stdout.write(normalized)
            continue
        destination = output_dir / source.name
        destination.write_text(normalized, encoding="utf-8")
        try:
            display_path = destination.relative_to(Path.cwd())
        except ValueError:
            display_path = destination
        print(f"Wrote {display_path}")


def report(results: list[GoldenResult]) -> int:
    failures = 0
    for result in results:
        if result.passed:
            print(f"PASS {result.case.name}")
            continue
        failures += 1
        if result.expected_failure:
            print(f"FAIL {result.case.name}: expected a parse failure")
        elif result.error is not None:
            print(f"FAIL {result.case.name}: {result.error}")
        else:
            print(f"FAIL {result.case.name}: output differs")
            print("---- expected ----")
            print(result.expected, end="")
            print("---- actual ----")
            print(result.actual, end="")
    print(f"{len(results) - failures}/{len(results)} passed")
    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    input_path = Path(args.input)
    formatter = KdlFormatter(indent=args.indent, sort_properties=args.sort_properties)
    if args.expected_dir is not None:
        return report(run_golden(input_path, Path(args.expected_dir), formatter))
    files = collect_inputs(input_path)
    output_dir = Path(args.output_dir) if args.output_dir else None
    generate(files, output_dir, formatter, verbose=args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
