# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Anchor id allocation.

An `IdAllocator` lives for exactly one annotation pass. Ids are memoized per
node so every occurrence that asks for the same declaration gets the same
string; `clear()` drops the cache when the pass ends.
"""

from __future__ import annotations

from typing import Optional, Protocol

from markupsafe import escape

from srclinks.checker.symbols import Symbol
from srclinks.parser.ast import Node, NodeKind, SourceFile, source_file_of

from .statements import get_statement


class SymbolOracle(Protocol):
	def resolve_symbol(self, node: Optional[Node]) -> Optional[Symbol]: ...

	def get_exports(self, source_file: Optional[SourceFile]) -> Optional[dict[str, Symbol]]: ...

	def is_builtin_declaration(self, decl: Node) -> bool: ...


def enclosing_parameter(node: Node) -> Optional[Node]:
	"""The node itself or its nearest ancestor of kind PARAMETER."""
	current: Optional[Node] = node
	while current is not None:
		if current.kind is NodeKind.PARAMETER:
			return current
		current = current.parent
	return None


class IdAllocator:
	"""
	Allocates definition ids, in order of preference:

	1. the public name of the export entry that re-exports the node's symbol;
	2. `symbol-<text>-<offset>` for names not declared at file level;
	3. `<id of owning function>-<text>` for parameters of named functions
	   (the offset form for anonymous ones);
	4. `symbol-<text>`.
	"""

	def __init__(self, checker: SymbolOracle) -> None:
		self.checker = checker
		self._cache: dict[Node, str] = {}

	def __len__(self) -> int:
		return len(self._cache)

	def clear(self) -> None:
		self._cache.clear()

	def id_for(self, node: Node) -> str:
		cached = self._cache.get(node)
		if cached is not None:
			return cached
		ident = self._allocate(node)
		self._cache[node] = ident
		return ident

	def _allocate(self, node: Node) -> str:
		text = node.text or ""
		fallback = f"symbol-{escape(text)}-{node.start}"

		exported = self._export_name(node)
		if exported is not None:
			return exported

		parent = get_statement(node).parent
		if parent is None or parent.kind is not NodeKind.SOURCE_FILE:
			return fallback

		param = enclosing_parameter(node)
		if param is None:
			return f"symbol-{text}"
		owner = param.parent
		if owner is None or owner.name is None:
			return fallback
		return f"{self.id_for(owner.name)}-{text}"

	def _export_name(self, node: Node) -> Optional[str]:
		symbol = self.checker.resolve_symbol(node)
		if symbol is None:
			return None
		exports = self.checker.get_exports(source_file_of(node))
		if not exports:
			return None
		for public_name, exported in exports.items():
			for decl in exported.declarations:
				if (
					self.checker.resolve_symbol(decl.property_name) is symbol
					or self.checker.resolve_symbol(decl.name) is symbol
				):
					return public_name
		return None


__all__ = ["IdAllocator", "SymbolOracle", "enclosing_parameter"]
