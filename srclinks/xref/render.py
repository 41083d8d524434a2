# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Splice replacements into source text and render the token stream.

Text outside replacements becomes unsafe tokens. Unsafe tokens are escaped
with markupsafe and linkified; safe tokens are emitted verbatim.
"""

from __future__ import annotations

from typing import Iterable

from srclinks.core.html import escape_and_linkify
from srclinks.core.tokens import Replacement, Token, sort_replacements, unsafe


def apply_replacements(text: str, replacements: Iterable[Replacement]) -> list[Token]:
	"""Interleave the untouched gaps of `text` with the replacement fragments."""
	tokens: list[Token] = []
	pos = 0
	for repl in sort_replacements(replacements):
		if pos < repl.start:
			tokens.append(unsafe(pos, text[pos : repl.start]))
		tokens.extend(repl.fragments)
		pos = repl.end
	if pos < len(text):
		tokens.append(unsafe(pos, text[pos:]))
	return tokens


def render_tokens(tokens: Iterable[Token], *, linkify: bool = True) -> str:
	out: list[str] = []
	stack = list(reversed(list(tokens)))
	while stack:
		tok = stack.pop()
		if isinstance(tok.content, tuple):
			stack.extend(reversed(tok.content))
		elif tok.safe:
			out.append(str(tok.content))
		else:
			out.append(str(escape_and_linkify(tok.content, enabled=linkify)))
	return "".join(out)


def render(text: str, replacements: Iterable[Replacement], *, linkify: bool = True) -> str:
	"""
	Render `text` with `replacements` applied.

	Raises `OverlappingReplacementError` when two replacements overlap.
	"""
	return render_tokens(apply_replacements(text, replacements), linkify=linkify)


__all__ = ["apply_replacements", "render", "render_tokens"]
