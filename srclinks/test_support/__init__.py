# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for tests that need parsed and bound sources.

These helpers avoid re-spelling parse/bind boilerplate and let tests pick an
identifier occurrence by its text instead of by offset.
"""

from __future__ import annotations

from srclinks.checker import Checker
from srclinks.parser import Node, NodeKind, SourceFile, iter_nodes, parse_source


def check_source(text: str, file_name: str = "input.ts") -> tuple[SourceFile, Checker]:
	"""Parse `text` and bind it against the default built-in library."""
	source = parse_source(text, file_name)
	return source, Checker(source)


def identifiers(source: SourceFile, name: str) -> list[Node]:
	"""Every IDENTIFIER node spelled `name`, in source order."""
	return [n for n in iter_nodes(source) if n.kind is NodeKind.IDENTIFIER and n.text == name]


def identifier(source: SourceFile, name: str, occurrence: int = 0) -> Node:
	"""The `occurrence`-th (0-based) identifier spelled `name`."""
	found = identifiers(source, name)
	if occurrence >= len(found):
		raise LookupError(f"identifier {name!r} #{occurrence} not found (have {len(found)})")
	return found[occurrence]


def first_of_kind(root: Node, kind: NodeKind) -> Node:
	for node in iter_nodes(root):
		if node.kind is kind:
			return node
	raise LookupError(f"no {kind.name} node")


__all__ = ["check_source", "first_of_kind", "identifier", "identifiers"]
