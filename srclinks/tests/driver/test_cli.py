# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from srclinks.cli import main


def _source(tmp_path: Path, name: str, text: str) -> Path:
	path = tmp_path / name
	path.write_text(text, encoding="utf-8")
	return path


def test_single_file_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _source(tmp_path, "a.ts", "const a = 1\na\n")
	assert main([str(src)]) == 0
	out = capsys.readouterr().out
	assert '<span class="definition" id="symbol-a">a</span>' in out


def test_single_file_to_output_path(tmp_path: Path) -> None:
	src = _source(tmp_path, "a.ts", "const a = 1\n")
	dest = tmp_path / "a.html"
	assert main([str(src), "-o", str(dest), "--definition-class", "def"]) == 0
	assert 'class="def"' in dest.read_text(encoding="utf-8")


def test_several_files_need_an_output_directory(tmp_path: Path) -> None:
	a = _source(tmp_path, "a.ts", "const a = 1\n")
	b = _source(tmp_path, "b.js", "var b = 2\n")
	with pytest.raises(SystemExit) as excinfo:
		main([str(a), str(b)])
	assert excinfo.value.code == 2
	outdir = tmp_path / "out"
	assert main([str(a), str(b), "-o", str(outdir)]) == 0
	assert sorted(p.name for p in outdir.iterdir()) == ["a.ts.html", "b.js.html"]


def test_equal_base_names_keep_their_directories(tmp_path: Path) -> None:
	(tmp_path / "a").mkdir()
	(tmp_path / "b").mkdir()
	a = _source(tmp_path, "a/index.ts", "export const a = 1\n")
	b = _source(tmp_path, "b/index.ts", "export const b = 2\n")
	outdir = tmp_path / "out"
	assert main([str(a), str(b), "-o", str(outdir)]) == 0
	assert 'id="a"' in (outdir / "a" / "index.ts.html").read_text(encoding="utf-8")
	assert 'id="b"' in (outdir / "b" / "index.ts.html").read_text(encoding="utf-8")


def test_parse_error_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _source(tmp_path, "bad.ts", "const = ;\n")
	assert main([str(src), "--json"]) == 1
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == 1
	(diag,) = payload["diagnostics"]
	assert diag["phase"] == "parser"
	assert diag["severity"] == "error"
	assert diag["file"] == str(src)
	assert diag["line"] == 1
	assert payload["outputs"] == {}


def test_fallback_still_reports_the_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _source(tmp_path, "bad.ts", "const = ;\n")
	assert main([str(src), "--fallback"]) == 1
	captured = capsys.readouterr()
	assert captured.out == "const = ;\n"
	assert f"{src}:1:" in captured.err
	assert ": error:" in captured.err


def test_json_includes_outputs_and_notes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _source(tmp_path, "dup.ts", "var a = 1\nvar a = 2\n")
	assert main([str(src), "--json", "--no-linkify"]) == 0
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == 0
	assert [d["code"] for d in payload["diagnostics"]] == ["XREF-AMBIGUOUS-DECL"]
	assert 'id="symbol-a"' in payload["outputs"][str(src)]


def test_invalid_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _source(tmp_path, "a.ts", "const a = 1\n")
	cfg = _source(tmp_path, "cfg.json", '{"format": "srclinks-config", "version": 0, "nope": 1}')
	assert main([str(src), "--config", str(cfg)]) == 1
	err = capsys.readouterr().err
	assert "unknown config key 'nope'" in err


def test_missing_source(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	assert main([str(tmp_path / "nope.ts")]) == 1
	assert "cannot read source" in capsys.readouterr().err
