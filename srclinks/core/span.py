# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source span representation shared by the parser, the cross-referencer and
diagnostics.

A Span carries the half-open character range `[start, end)` into the file
text plus best-effort file/line/column info.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (offsets plus best-effort file/line/column)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	start: Optional[int] = None
	end: Optional[int] = None

	def __post_init__(self) -> None:
		if self.start is not None and self.end is not None and not 0 <= self.start <= self.end:
			raise ValueError(f"invalid span [{self.start}, {self.end})")

	@classmethod
	def from_offsets(cls, text: str, start: int, end: int, *, file: str | None = None) -> "Span":
		"""Build a Span for `text[start:end]`, computing 1-based line/column."""
		line, column = _line_col(text, start)
		end_line, end_column = _line_col(text, end)
		return cls(
			file=file,
			line=line,
			column=column,
			end_line=end_line,
			end_column=end_column,
			start=start,
			end=end,
		)


def _line_col(text: str, offset: int) -> tuple[int, int]:
	line = text.count("\n", 0, offset) + 1
	column = offset - (text.rfind("\n", 0, offset) + 1) + 1
	return line, column


__all__ = ["Span"]
