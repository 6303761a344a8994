from pathlib import Path

import pytest

import kdlfmt


def test_prints_canonical_text(tmp_path: Path, capsys):
    source = tmp_path / "doc.kdl"
    source.write_text("a   1 /-2 {\n  b\n}\n", encoding="utf-8")
    assert kdlfmt.main([str(source)]) == 0
    assert capsys.readouterr().out == "a 1 {\n    b\n}\n"


def test_writes_output_directory(tmp_path: Path):
    inputs = tmp_path / "in"
    inputs.mkdir()
    (inputs / "one.kdl").write_text("x k=2 j=1", encoding="utf-8")
    (inputs / "notes.txt").write_text("ignored", encoding="utf-8")
    out = tmp_path / "out"
    assert kdlfmt.main([str(inputs), "-o", str(out), "--sort-properties", "--indent", "\t"]) == 0
    assert (out / "one.kdl").read_text(encoding="utf-8") == "x j=1 k=2\n"
    assert not (out / "notes.txt").exists()


def test_parse_failure_is_reported(tmp_path: Path):
    source = tmp_path / "bad.kdl"
    source.write_text("a {", encoding="utf-8")
    with pytest.raises(RuntimeError, match="Failed to parse"):
        kdlfmt.main([str(source)])


def test_missing_input(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        kdlfmt.main([str(tmp_path / "missing.kdl")])


def test_golden_mode_exit_codes(tmp_path: Path, capsys):
    inputs = tmp_path / "input"
    expected = tmp_path / "expected"
    inputs.mkdir()
    expected.mkdir()
    (inputs / "ok.kdl").write_text("n 0b11", encoding="utf-8")
    (expected / "ok.kdl").write_text("n 3\n", encoding="utf-8")
    (inputs / "fails.kdl").write_text("n (t", encoding="utf-8")
    assert kdlfmt.main([str(inputs), "--expected-dir", str(expected)]) == 0
    assert "2/2 passed" in capsys.readouterr().out

    (expected / "ok.kdl").write_text("n 4\n", encoding="utf-8")
    assert kdlfmt.main([str(inputs), "--expected-dir", str(expected)]) == 1
    assert "FAIL ok.kdl" in capsys.readouterr().out
