# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Output fragments and text replacements.

A `Token` is one piece of output. Safe tokens hold markup that is emitted
verbatim; unsafe tokens hold raw source text that is escaped and linkified at
render time. Content may itself be a list of tokens (a containment tree).

A `Replacement` swaps the source range `[start, end)` for an ordered list of
tokens. The replacement set of one file must be non-overlapping once sorted by
start; anything else is a defect and raises `OverlappingReplacementError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Union


class OverlappingReplacementError(AssertionError):
	"""Two replacements claim overlapping source text."""

	def __init__(self, first: "Replacement", second: "Replacement") -> None:
		super().__init__(
			f"replacement [{second.start}, {second.end}) overlaps [{first.start}, {first.end})"
		)
		self.first = first
		self.second = second


@dataclass(frozen=True)
class Token:
	offset: int
	safe: bool
	content: Union[str, tuple["Token", ...]]

	def __post_init__(self) -> None:
		# Nested content is stored as a tuple so tokens stay hashable.
		if isinstance(self.content, list):
			object.__setattr__(self, "content", tuple(self.content))


@dataclass(frozen=True)
class Replacement:
	start: int
	end: int
	fragments: tuple[Token, ...] = field(default_factory=tuple)

	def __post_init__(self) -> None:
		if not 0 <= self.start <= self.end:
			raise ValueError(f"invalid replacement span [{self.start}, {self.end})")
		if isinstance(self.fragments, list):
			object.__setattr__(self, "fragments", tuple(self.fragments))


Content = Union[str, Token, Sequence[Token]]


def safe(offset: int, content: str | Sequence[Token]) -> Token:
	return Token(offset, True, tuple(content) if not isinstance(content, str) else content)


def unsafe(offset: int, content: str | Sequence[Token]) -> Token:
	return Token(offset, False, tuple(content) if not isinstance(content, str) else content)


def embed(offset: int, content: Content) -> list[Token]:
	"""Normalize wrapper content: strings become one unsafe token, lists are spliced."""
	if isinstance(content, str):
		return [unsafe(offset, content)]
	if isinstance(content, Token):
		return [content]
	return list(content)


def sort_replacements(replacements: Iterable[Replacement]) -> list[Replacement]:
	"""
	Return the replacements ordered by start offset.

	Raises `OverlappingReplacementError` when two replacements overlap. Touching
	ranges (`a.end == b.start`) are fine.
	"""
	ordered = sorted(replacements, key=lambda r: (r.start, r.end))
	for prev, cur in zip(ordered, ordered[1:]):
		if prev.end > cur.start:
			raise OverlappingReplacementError(prev, cur)
	return ordered


__all__ = [
	"Content",
	"OverlappingReplacementError",
	"Replacement",
	"Token",
	"embed",
	"safe",
	"sort_replacements",
	"unsafe",
]
