# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the parser, the cross-referencer and the CLI.

There is no logging layer: every observable event of an annotation pass is a
Diagnostic appended to a list owned by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a diagnostic (error/warning/note)."""

	message: str
	code: str | None = None
	# Optional phase label (`parser`, `xref`, `config`).
	#
	# Diagnostics from one pass end up in a single list; the phase keeps JSON
	# output and test expectations unambiguous.
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		# Normalize missing spans to the sentinel Span() so downstream tooling
		# can rely on a structured object instead of None.
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	@property
	def is_error(self) -> bool:
		return self.severity == "error"

	def format_human(self, default_file: str | None = None) -> str:
		"""`file:line:column: severity: message`, with `?` for unknown fields."""
		file = self.span.file or default_file or "<input>"
		line = self.span.line if self.span.line is not None else "?"
		column = self.span.column if self.span.column is not None else "?"
		return f"{file}:{line}:{column}: {self.severity}: {self.message}"


def has_errors(diagnostics: list[Diagnostic]) -> bool:
	return any(d.is_error for d in diagnostics)


__all__ = ["Diagnostic", "has_errors"]
