# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Symbols and lexical scopes built by the binder.

A `Symbol` is the identity shared by every declaration of one name in one
scope (re-declarations merge). Alias symbols stand for imported or re-exported
bindings. `exports` and `members` hold the names reachable as `N.z`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from srclinks.parser.ast import Node


class SymbolFlags(enum.IntFlag):
	NONE = 0
	VARIABLE = enum.auto()
	FUNCTION = enum.auto()
	CLASS = enum.auto()
	INTERFACE = enum.auto()
	TYPE_ALIAS = enum.auto()
	NAMESPACE = enum.auto()
	PARAMETER = enum.auto()
	TYPE_PARAMETER = enum.auto()
	MEMBER = enum.auto()
	ALIAS = enum.auto()
	ENUM = enum.auto()


@dataclass(eq=False)
class Symbol:
	name: str
	flags: SymbolFlags = SymbolFlags.NONE
	declarations: list[Node] = field(default_factory=list)
	# Exported names of a namespace or members of an enum; the file-level table
	# lives on the binder.
	exports: Optional[dict[str, "Symbol"]] = None
	# Class member table.
	members: Optional[dict[str, "Symbol"]] = None

	def add_declaration(self, decl: Node, flags: SymbolFlags) -> None:
		self.flags |= flags
		self.declarations.append(decl)

	def __repr__(self) -> str:
		return f"Symbol({self.name!r}, {self.flags!r}, decls={len(self.declarations)})"


class ScopeKind(enum.Enum):
	GLOBAL = "global"
	MODULE = "module"
	FUNCTION = "function"
	NAMESPACE = "namespace"
	BLOCK = "block"
	CATCH = "catch"
	CLASS = "class"
	TYPE = "type"
	ENUM = "enum"


# Scopes that receive `var` declarations.
FUNCTION_LEVEL = frozenset({ScopeKind.GLOBAL, ScopeKind.MODULE, ScopeKind.FUNCTION, ScopeKind.NAMESPACE})


@dataclass(eq=False)
class Scope:
	kind: ScopeKind
	parent: Optional["Scope"] = None
	symbols: dict[str, Symbol] = field(default_factory=dict)

	def declare(self, name: str, decl: Node, flags: SymbolFlags) -> Symbol:
		"""Add a declaration, merging with an existing symbol of the same name."""
		sym = self.symbols.get(name)
		if sym is None:
			sym = Symbol(name)
			self.symbols[name] = sym
		sym.add_declaration(decl, flags)
		return sym

	def lookup(self, name: str) -> Optional[Symbol]:
		scope: Optional[Scope] = self
		while scope is not None:
			sym = scope.symbols.get(name)
			if sym is not None:
				return sym
			scope = scope.parent
		return None

	def function_level(self) -> "Scope":
		scope = self
		while scope.kind not in FUNCTION_LEVEL and scope.parent is not None:
			scope = scope.parent
		return scope


__all__ = ["FUNCTION_LEVEL", "Scope", "ScopeKind", "Symbol", "SymbolFlags"]
