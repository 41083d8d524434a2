# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Markup fragments for definitions, references and module specifiers.

Attribute values and literal text go through `Markup.format`, so they are
escaped exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass

from markupsafe import Markup

from srclinks.core.tokens import Content, Token, embed, safe


@dataclass(frozen=True)
class MarkupClasses:
	definition: str = "definition"
	reference: str = "ref"
	string: str = "hljs-string"


DEFAULT_CLASSES = MarkupClasses()


def _length(content: Content, length: int | None) -> int:
	if length is not None:
		return length
	if isinstance(content, str):
		return len(content)
	raise ValueError("length is required for token content")


def definition(
	start: int,
	ident: str,
	content: Content,
	length: int | None = None,
	*,
	classes: MarkupClasses = DEFAULT_CLASSES,
) -> list[Token]:
	"""`<span class="definition" id="ID">content</span>`"""
	return [
		safe(start, Markup('<span class="{}" id="{}">').format(classes.definition, ident)),
		*embed(start, content),
		safe(start + _length(content, length), Markup("</span>")),
	]


def reference(
	start: int,
	href: str,
	content: Content,
	length: int | None = None,
	*,
	classes: MarkupClasses = DEFAULT_CLASSES,
) -> list[Token]:
	"""`<a class="ref" href="TARGET">content</a>`"""
	return [
		safe(start, Markup('<a class="{}" href="{}">').format(classes.reference, href)),
		*embed(start, content),
		safe(start + _length(content, length), Markup("</a>")),
	]


def module_specifier(start: int, source: str, *, classes: MarkupClasses = DEFAULT_CLASSES) -> list[Token]:
	"""Styled, anchor-free span around a module specifier literal."""
	return [safe(start, Markup('<span class="{}">{}</span>').format(classes.string, source))]


__all__ = ["DEFAULT_CLASSES", "MarkupClasses", "definition", "module_specifier", "reference"]
