# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Symbol-resolution oracle for one source file.

`Checker` binds the built-in library files into a shared global scope, binds
the file on top of it and answers the three questions the cross-referencer
asks: what symbol an identifier denotes, what a module exports, and whether a
declaration comes from the built-in library.
"""

from __future__ import annotations

from typing import Iterable, Optional

from srclinks.parser.ast import Node, SourceFile, source_file_of

from .binder import Binder
from .libfiles import default_lib_files, load_lib_file
from .symbols import Scope, ScopeKind, Symbol, SymbolFlags


class Checker:
	def __init__(self, source_file: SourceFile, *, lib_files: Optional[Iterable[SourceFile]] = None) -> None:
		self.source_file = source_file
		self.lib_files = list(lib_files) if lib_files is not None else default_lib_files()
		self.globals = Scope(ScopeKind.GLOBAL)
		for lib in self.lib_files:
			Binder(lib, self.globals).bind()
		self._binder = Binder(source_file, self.globals).bind()

	def resolve_symbol(self, node: Optional[Node]) -> Optional[Symbol]:
		"""Symbol denoted by an identifier of the checked file, or None."""
		if node is None:
			return None
		return self._binder.resolved.get(node)

	def get_exports(self, source_file: Optional[SourceFile]) -> Optional[dict[str, Symbol]]:
		"""Export table of a module file; None for scripts and foreign files."""
		if source_file is not self.source_file:
			return None
		return self._binder.exports

	def is_builtin_declaration(self, decl: Node) -> bool:
		source = source_file_of(decl)
		return source is not None and source.is_default_lib


__all__ = ["Binder", "Checker", "Scope", "ScopeKind", "Symbol", "SymbolFlags", "default_lib_files", "load_lib_file"]
