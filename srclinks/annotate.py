# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Annotation entry points: parse, bind, cross-reference, render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from srclinks.checker import Checker
from srclinks.config import Config
from srclinks.core.diagnostics import Diagnostic
from srclinks.parser import SourceFile, SourceParseError, parse_source
from srclinks.xref import collect_replacements, render


@dataclass
class AnnotateResult:
	html: str
	diagnostics: list[Diagnostic] = field(default_factory=list)


def parse_error_diagnostic(err: SourceParseError) -> Diagnostic:
	return Diagnostic(
		message=str(err),
		code="PARSE-ERROR",
		phase="parser",
		severity="error",
		span=err.span,
	)


def annotate_source(
	source_text: str,
	*,
	file_name: str = "input.ts",
	config: Optional[Config] = None,
	lib_files: Optional[Iterable[SourceFile]] = None,
) -> AnnotateResult:
	"""
	Annotate one file and return the markup plus the pass diagnostics.

	Parse failures raise `SourceParseError` unless
	`config.fallback_on_parse_error` is set, in which case the whole text is
	rendered as escaped plain text and an error diagnostic is returned.
	"""
	config = config or Config()
	diagnostics: list[Diagnostic] = []
	try:
		source = parse_source(source_text, file_name)
	except SourceParseError as err:
		if not config.fallback_on_parse_error:
			raise
		diagnostics.append(parse_error_diagnostic(err))
		return AnnotateResult(render(source_text, [], linkify=config.linkify), diagnostics)

	checker = Checker(source, lib_files=lib_files)
	replacements = collect_replacements(
		source,
		checker,
		classes=config.markup_classes(),
		diagnostics=diagnostics,
	)
	return AnnotateResult(render(source_text, replacements, linkify=config.linkify), diagnostics)


def annotate(source_text: str, *, file_name: str = "input.ts", config: Optional[Config] = None) -> str:
	"""Annotated markup for `source_text`; deterministic for identical input."""
	return annotate_source(source_text, file_name=file_name, config=config).html


__all__ = ["AnnotateResult", "annotate", "annotate_source", "parse_error_diagnostic"]
