"""Golden-file checks: parse each input and compare with its expected canonical text."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .builder import parse_document
from .errors import ParseException
from .formatter import KdlFormatter


@dataclass(slots=True)
class GoldenCase:
    name: str
    input_path: Path
    # None means the input must fail to parse.
    expected_path: Path | None


@dataclass(slots=True)
class GoldenResult:
    case: GoldenCase
    passed: bool
    actual: str | None = None
    expected: str | None = None
    error: ParseException | None = None

    @property
    def expected_failure(self) -> bool:
        return self.case.expected_path is None


def collect_cases(input_dir: Path, expected_dir: Path) -> list[GoldenCase]:
    if not input_dir.is_dir():
        raise FileNotFoundError(f"Input directory does not exist: {input_dir}")
    cases: list[GoldenCase] = []
    for source in sorted(p for p in input_dir.iterdir() if p.is_file()):
        expected = expected_dir / source.name
        cases.append(GoldenCase(source.name, source, expected if expected.is_file() else None))
    return cases


def run_case(case: GoldenCase, formatter: KdlFormatter | None = None) -> GoldenResult:
    text = case.input_path.read_text(encoding="utf-8")
    try:
        document = parse_document(text)
    except ParseException as exc:
        return GoldenResult(case, passed=case.expected_path is None, error=exc)

    actual = document.serialize(formatter)
    if case.expected_path is None:
        return GoldenResult(case, passed=False, actual=actual)
    expected = case.expected_path.read_text(encoding="utf-8")
    return GoldenResult(case, passed=actual == expected, actual=actual, expected=expected)


def run_golden(input_dir: Path, expected_dir: Path, formatter: KdlFormatter | None = None) -> list[GoldenResult]:
    return [run_case(case, formatter) for case in collect_cases(input_dir, expected_dir)]


__all__ = ["GoldenCase", "GoldenResult", "collect_cases", "run_case", "run_golden"]
