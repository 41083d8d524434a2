# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
srclinks command line: annotate JavaScript/TypeScript files as hyperlinked
HTML.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import os
import sys
from pathlib import Path

from srclinks.annotate import annotate_source, parse_error_diagnostic
from srclinks.config import Config, ConfigError, load_config
from srclinks.core.diagnostics import Diagnostic, has_errors
from srclinks.core.span import Span
from srclinks.parser import SourceParseError


def _diag_to_json(diag: Diagnostic, phase: str, source: Path) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	file = diag.span.file or str(source)
	return {
		"phase": diag.phase or phase,
		"code": diag.code,
		"message": diag.message,
		"severity": diag.severity,
		"file": file,
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


def _report(
	diagnostics: list[tuple[Diagnostic, Path]],
	*,
	as_json: bool,
	exit_code: int,
	outputs: dict[str, str] | None = None,
) -> int:
	if as_json:
		payload: dict = {
			"exit_code": exit_code,
			"diagnostics": [_diag_to_json(d, "xref", source) for d, source in diagnostics],
		}
		if outputs is not None:
			payload["outputs"] = outputs
		print(json.dumps(payload))
	else:
		for d, source in diagnostics:
			print(d.format_human(str(source)), file=sys.stderr)
	return exit_code


def _output_names(sources: list[Path]) -> dict[Path, Path]:
	"""
	`<path>.html` per source, relative to the deepest directory holding all
	of them, so equal base names in different directories stay apart.
	"""
	if not sources:
		return {}
	resolved = {source: source.resolve() for source in sources}
	root = Path(os.path.commonpath([path.parent for path in resolved.values()]))
	return {source: path.relative_to(root).with_name(f"{path.name}.html") for source, path in resolved.items()}


def main(argv: list[str] | None = None) -> int:
	"""
	Annotate each SOURCE and write the markup.

	One source without -o goes to stdout; with -o it goes to that file. Several
	sources need -o naming a directory, which receives `<path>.html` per input
	with paths taken relative to the directory the sources share.
	With --json, prints structured diagnostics and an exit_code (plus the
	markup under "outputs" when it is not written to files); otherwise prints
	human-readable messages to stderr. Exit code is 1 when any error
	diagnostic was produced.
	"""
	parser = argparse.ArgumentParser(prog="srclinks", description="Render JS/TS sources as cross-referenced HTML")
	parser.add_argument("source", type=Path, nargs="+", help="Path(s) to JavaScript/TypeScript source file(s)")
	parser.add_argument("-o", "--output", type=Path, help="Output file (one source) or directory (several sources)")
	parser.add_argument("--config", type=Path, help="Path to a srclinks-config JSON file")
	parser.add_argument(
		"--no-linkify",
		dest="linkify",
		action="store_false",
		default=None,
		help="Do not turn URLs in plain text into links",
	)
	parser.add_argument(
		"--fallback",
		dest="fallback_on_parse_error",
		action="store_true",
		default=None,
		help="Render files that fail to parse as escaped plain text",
	)
	parser.add_argument("--definition-class", help="CSS class of definition anchors")
	parser.add_argument("--reference-class", help="CSS class of reference links")
	parser.add_argument("--string-class", help="CSS class of module specifier strings")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/code/message/severity/file/line/column)",
	)
	args = parser.parse_args(argv)

	sources: list[Path] = list(args.source)
	if len(sources) > 1 and args.output is None:
		parser.error("several sources require -o/--output naming a directory")

	config = Config()
	if args.config is not None:
		try:
			config = load_config(args.config)
		except ConfigError as err:
			diag = Diagnostic(message=str(err), code="CONFIG", phase="config", span=Span(file=str(args.config)))
			return _report([(diag, args.config)], as_json=args.json, exit_code=1)
	overrides = {
		key: value
		for key, value in (
			("linkify", args.linkify),
			("fallback_on_parse_error", args.fallback_on_parse_error),
			("definition_class", args.definition_class),
			("reference_class", args.reference_class),
			("string_class", args.string_class),
		)
		if value is not None
	}
	config = dataclasses.replace(config, **overrides)

	diagnostics: list[tuple[Diagnostic, Path]] = []
	rendered: dict[Path, str] = {}
	for source in sources:
		try:
			text = source.read_text(encoding="utf-8")
		except (OSError, UnicodeDecodeError) as err:
			msg = f"cannot read source: {getattr(err, 'strerror', None) or err}"
			diagnostics.append((Diagnostic(message=msg, code="INPUT", phase="input", span=Span(file=str(source))), source))
			continue
		try:
			result = annotate_source(text, file_name=str(source), config=config)
		except SourceParseError as err:
			diagnostics.append((parse_error_diagnostic(err), source))
			continue
		diagnostics.extend((d, source) for d in result.diagnostics)
		rendered[source] = result.html

	outputs: dict[str, str] | None = None
	if args.output is None:
		if args.json:
			outputs = {str(source): html for source, html in rendered.items()}
		else:
			for html in rendered.values():
				sys.stdout.write(html)
	elif len(sources) == 1:
		for html in rendered.values():
			args.output.write_text(html, encoding="utf-8")
	else:
		args.output.mkdir(parents=True, exist_ok=True)
		names = _output_names(sources)
		for source, html in rendered.items():
			target = args.output / names[source]
			target.parent.mkdir(parents=True, exist_ok=True)
			target.write_text(html, encoding="utf-8")

	exit_code = 1 if has_errors([d for d, _ in diagnostics]) else 0
	return _report(diagnostics, as_json=args.json, exit_code=exit_code, outputs=outputs)


__all__ = ["main"]
