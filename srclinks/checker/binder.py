# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Scope binder: declares symbols for one source file and resolves identifier
references lexically.

One pass over the tree declares every binding into the scope it belongs to
(`var` and hoisted functions into the nearest function-level scope,
`let`/`const`/`class` into the enclosing block) and records each identifier
reference together with the scope it appears in. References are resolved after
the walk, so hoisted and later-declared names are visible.

Names that denote properties rather than bindings (after `.`, object keys,
interface members, the remote half of `{a as b} from "m"`, labels) are never
recorded and resolve to nothing. The one exception is `N.z` where `N`
resolves to a namespace, an enum or a class: `z` then resolves to the
namespace export, the enum member or the static class member of that name.
"""

from __future__ import annotations

from typing import Iterable, Optional

from srclinks.parser.ast import FUNCTION_LIKE, Node, NodeKind, SourceFile

from .symbols import Scope, ScopeKind, Symbol, SymbolFlags


def _name_text(name: Node) -> str:
	"""Identifier text, or the value of a string used as a name."""
	if name.kind is NodeKind.STRING_LITERAL:
		return name.value or ""
	return name.text or ""


def _member_of(owner: Symbol, name: str) -> Optional[Symbol]:
	"""Namespace and enum exports, and static class members, reached through `owner.name`."""
	if owner.flags & (SymbolFlags.NAMESPACE | SymbolFlags.ENUM) and owner.exports:
		found = owner.exports.get(name)
		if found is not None:
			return found
	if owner.flags & SymbolFlags.CLASS and owner.members:
		found = owner.members.get(name)
		if found is not None and any("static" in decl.modifiers for decl in found.declarations):
			return found
	return None


_CLASS_MEMBERS = frozenset(
	{
		NodeKind.CONSTRUCTOR,
		NodeKind.METHOD_DECLARATION,
		NodeKind.GET_ACCESSOR,
		NodeKind.SET_ACCESSOR,
		NodeKind.PROPERTY_DECLARATION,
	}
)


class Binder:
	"""
	Binds one file on top of a global scope.

	Module files (any import/export) get their own module scope below
	`globals_scope`; script files declare straight into it, merging with
	whatever is already there (the built-in prelude).

	Results:
	  - `resolved`: identifier node -> Symbol
	  - `exports`: ordered export table, or None for scripts
	"""

	def __init__(self, source_file: SourceFile, globals_scope: Scope) -> None:
		self.source_file = source_file
		self.globals = globals_scope
		self.resolved: dict[Node, Symbol] = {}
		self.exports: Optional[dict[str, Symbol]] = {} if source_file.is_module else None
		self._scope = globals_scope
		self._export_table: Optional[dict[str, Symbol]] = self.exports
		# (identifier, scope, name to look up)
		self._references: list[tuple[Node, Scope, str]] = []
		# (property name, owner expression) of `a.b` and `A.B`, innermost first.
		self._members: list[tuple[Node, Node]] = []

	def bind(self) -> "Binder":
		if self.source_file.is_module:
			self._scope = Scope(ScopeKind.MODULE, parent=self.globals)
		self._visit_statements(self.source_file.children)
		self._resolve_references()
		return self

	# -- plumbing -----------------------------------------------------------

	def _push_scope(self, kind: ScopeKind) -> Scope:
		self._scope = Scope(kind, parent=self._scope)
		return self._scope

	def _pop_scope(self) -> None:
		assert self._scope.parent is not None
		self._scope = self._scope.parent

	def visit(self, node: Optional[Node]) -> None:
		if node is None:
			return
		method = getattr(self, f"_visit_{node.kind.name.lower()}", None)
		if method is None:
			self._visit_children(node)
		else:
			method(node)

	def _visit_children(self, node: Node, *, skip: Iterable[Optional[Node]] = ()) -> None:
		skipped = [s for s in skip if s is not None]
		for child in node.children:
			if any(child is s for s in skipped):
				continue
			self.visit(child)

	def _visit_statements(self, statements: list[Node]) -> None:
		for stmt in statements:
			self.visit(stmt)

	def _reference(self, node: Node, name: Optional[str] = None) -> None:
		self._references.append((node, self._scope, name if name is not None else node.text or ""))

	def _declare(
		self,
		name: Optional[Node],
		decl: Node,
		flags: SymbolFlags,
		scope: Optional[Scope] = None,
	) -> Optional[Symbol]:
		if name is None or name.kind is not NodeKind.IDENTIFIER:
			return None
		sym = (scope or self._scope).declare(name.text or "", decl, flags)
		self.resolved[name] = sym
		return sym

	def _declare_binding(self, binding: Node, decl: Node, flags: SymbolFlags, scope: Scope) -> list[Symbol]:
		"""Declare an identifier or every name bound by a destructuring pattern."""
		if binding.kind is NodeKind.IDENTIFIER:
			sym = self._declare(binding, decl, flags, scope)
			return [sym] if sym is not None else []
		declared: list[Symbol] = []
		for element in binding.children:
			if element.kind is not NodeKind.BINDING_ELEMENT:
				continue
			if element.property_name is not None and element.property_name.kind is NodeKind.COMPUTED_PROPERTY_NAME:
				self.visit(element.property_name)
			if element.name is not None:
				declared.extend(self._declare_binding(element.name, element, flags, scope))
			self.visit(element.initializer)
		return declared

	def _export(self, name: str, sym: Symbol) -> None:
		if self._export_table is not None:
			self._export_table[name] = sym

	def _export_declaration(self, node: Node, sym: Optional[Symbol], flags: SymbolFlags) -> None:
		if "export" not in node.modifiers:
			return
		if "default" in node.modifiers:
			self._export("default", sym if sym is not None else Symbol("default", flags, [node]))
		elif sym is not None:
			self._export(sym.name, sym)

	def _resolve_references(self) -> None:
		for node, scope, name in self._references:
			sym = scope.lookup(name)
			if sym is not None:
				self.resolved[node] = sym
		for name, owner in self._members:
			container = self._owner_symbol(owner)
			member = _member_of(container, name.text or "") if container is not None else None
			if member is not None:
				self.resolved[name] = member

	def _owner_symbol(self, expr: Node) -> Optional[Symbol]:
		if expr.kind in (NodeKind.PROPERTY_ACCESS_EXPRESSION, NodeKind.QUALIFIED_NAME):
			return self.resolved.get(expr.name) if expr.name is not None else None
		return self.resolved.get(expr)

	# -- names --------------------------------------------------------------

	def _visit_identifier(self, node: Node) -> None:
		self._reference(node)

	def _visit_property_access_expression(self, node: Node) -> None:
		self.visit(node.expression)
		if node.expression is not None and node.name is not None and node.name.kind is NodeKind.IDENTIFIER:
			self._members.append((node.name, node.expression))

	_visit_qualified_name = _visit_property_access_expression

	def _visit_property_assignment(self, node: Node) -> None:
		if node.name is not None and node.name.kind is NodeKind.COMPUTED_PROPERTY_NAME:
			self.visit(node.name)
		self.visit(node.initializer)

	def _visit_binding_element(self, node: Node) -> None:
		# Destructuring assignment targets; declarations go through `_declare_binding`.
		if node.property_name is not None and node.property_name.kind is NodeKind.COMPUTED_PROPERTY_NAME:
			self.visit(node.property_name)
		self.visit(node.name)
		self.visit(node.initializer)

	def _visit_named_tuple_member(self, node: Node) -> None:
		self._visit_children(node, skip=(node.name,))

	def _visit_property_signature(self, node: Node) -> None:
		if node.name is not None and node.name.kind is NodeKind.COMPUTED_PROPERTY_NAME:
			self.visit(node.name)
		self._visit_children(node, skip=(node.name,))

	# -- scopes -------------------------------------------------------------

	def _visit_block(self, node: Node) -> None:
		self._push_scope(ScopeKind.BLOCK)
		try:
			self._visit_statements(node.children)
		finally:
			self._pop_scope()

	def _visit_for_statement(self, node: Node) -> None:
		self._push_scope(ScopeKind.BLOCK)
		try:
			self._visit_children(node)
		finally:
			self._pop_scope()

	_visit_for_in_statement = _visit_for_statement
	_visit_for_of_statement = _visit_for_statement
	_visit_case_block = _visit_for_statement
	_visit_mapped_type = _visit_for_statement

	def _visit_conditional_type(self, node: Node) -> None:
		# Holds the names introduced by `infer` in its check.
		self._push_scope(ScopeKind.TYPE)
		try:
			self._visit_children(node)
		finally:
			self._pop_scope()

	def _visit_catch_clause(self, node: Node) -> None:
		self._push_scope(ScopeKind.CATCH)
		try:
			for child in node.children:
				if child.kind is NodeKind.VARIABLE_DECLARATION:
					self._bind_variable(child, self._scope)
				else:
					self.visit(child)
		finally:
			self._pop_scope()

	# -- variables ----------------------------------------------------------

	def _bind_variable(self, decl: Node, scope: Scope) -> list[Symbol]:
		declared: list[Symbol] = []
		if decl.name is not None:
			declared = self._declare_binding(decl.name, decl, SymbolFlags.VARIABLE, scope)
		self._visit_children(decl, skip=(decl.name,))
		return declared

	def _bind_declaration_list(self, node: Node) -> list[Symbol]:
		scope = self._scope.function_level() if node.keyword == "var" else self._scope
		declared: list[Symbol] = []
		for decl in node.children:
			if decl.kind is NodeKind.VARIABLE_DECLARATION:
				declared.extend(self._bind_variable(decl, scope))
		return declared

	def _visit_variable_declaration_list(self, node: Node) -> None:
		self._bind_declaration_list(node)

	def _visit_variable_statement(self, node: Node) -> None:
		for child in node.children:
			if child.kind is not NodeKind.VARIABLE_DECLARATION_LIST:
				self.visit(child)
				continue
			for sym in self._bind_declaration_list(child):
				if "export" in node.modifiers:
					self._export(sym.name, sym)

	# -- functions ----------------------------------------------------------

	def _bind_function(self, node: Node) -> None:
		"""Parameters, type parameters and the body share one function scope."""
		self._push_scope(ScopeKind.FUNCTION)
		try:
			for child in node.children:
				if child is node.name:
					continue
				if child.kind is NodeKind.PARAMETER:
					self._bind_parameter(child)
				elif child is node.body and child.kind is NodeKind.BLOCK:
					self._visit_statements(child.children)
				else:
					self.visit(child)
		finally:
			self._pop_scope()

	def _bind_parameter(self, param: Node) -> None:
		if param.name is not None:
			self._declare_binding(param.name, param, SymbolFlags.PARAMETER, self._scope)
		self._visit_children(param, skip=(param.name,))

	def _visit_parameter(self, node: Node) -> None:
		# Only reached for type-level signatures: nothing is declared.
		self._visit_children(node, skip=(node.name,))

	def _visit_type_parameter(self, node: Node) -> None:
		self._declare(node.name, node, SymbolFlags.TYPE_PARAMETER)
		self._visit_children(node, skip=(node.name,))

	_visit_infer_type = _visit_type_parameter

	def _visit_function_declaration(self, node: Node) -> None:
		sym = self._declare(node.name, node, SymbolFlags.FUNCTION)
		self._export_declaration(node, sym, SymbolFlags.FUNCTION)
		self._bind_function(node)

	def _visit_function_expression(self, node: Node) -> None:
		# A function expression's own name is visible only inside it.
		self._push_scope(ScopeKind.FUNCTION)
		try:
			self._declare(node.name, node, SymbolFlags.FUNCTION)
			self._bind_function(node)
		finally:
			self._pop_scope()

	def _visit_arrow_function(self, node: Node) -> None:
		self._bind_function(node)

	def _visit_method_declaration(self, node: Node) -> None:
		# Object-literal methods and accessors; their names are keys.
		if node.name is not None and node.name.kind is NodeKind.COMPUTED_PROPERTY_NAME:
			self.visit(node.name)
		self._bind_function(node)

	_visit_get_accessor = _visit_method_declaration
	_visit_set_accessor = _visit_method_declaration

	def _bind_signature(self, node: Node) -> None:
		self._push_scope(ScopeKind.TYPE)
		try:
			for child in node.children:
				if child is node.name:
					if child.kind is NodeKind.COMPUTED_PROPERTY_NAME:
						self.visit(child)
					continue
				self.visit(child)
		finally:
			self._pop_scope()

	_visit_method_signature = _bind_signature
	_visit_call_signature = _bind_signature
	_visit_construct_signature = _bind_signature
	_visit_index_signature = _bind_signature
	_visit_function_type = _bind_signature
	_visit_constructor_type = _bind_signature

	# -- classes ------------------------------------------------------------

	def _visit_class_declaration(self, node: Node) -> None:
		sym = self._declare(node.name, node, SymbolFlags.CLASS)
		self._export_declaration(node, sym, SymbolFlags.CLASS)
		self._bind_class(node, sym)

	def _visit_class_expression(self, node: Node) -> None:
		self._push_scope(ScopeKind.BLOCK)
		try:
			sym = self._declare(node.name, node, SymbolFlags.CLASS)
			self._bind_class(node, sym)
		finally:
			self._pop_scope()

	def _bind_class(self, node: Node, sym: Optional[Symbol]) -> None:
		members = Scope(ScopeKind.CLASS)
		if sym is not None:
			if sym.members is None:
				sym.members = members.symbols
			else:
				members.symbols = sym.members
		self._push_scope(ScopeKind.CLASS)
		try:
			for child in node.children:
				if child is node.name:
					continue
				if child.kind in _CLASS_MEMBERS:
					self._bind_member(child, members)
				else:
					self.visit(child)
		finally:
			self._pop_scope()

	def _bind_member(self, member: Node, members: Scope) -> None:
		name = member.name
		if name is not None and name.kind is NodeKind.IDENTIFIER:
			self._declare(name, member, SymbolFlags.MEMBER, members)
		elif name is not None and name.kind is NodeKind.COMPUTED_PROPERTY_NAME:
			self.visit(name)
		if member.kind in FUNCTION_LIKE:
			self._bind_function(member)
		else:
			self._visit_children(member, skip=(name,))

	# -- type-level declarations --------------------------------------------

	def _bind_type_declaration(self, node: Node, flags: SymbolFlags) -> None:
		sym = self._declare(node.name, node, flags)
		self._export_declaration(node, sym, flags)
		self._push_scope(ScopeKind.TYPE)
		try:
			self._visit_children(node, skip=(node.name,))
		finally:
			self._pop_scope()

	def _visit_interface_declaration(self, node: Node) -> None:
		self._bind_type_declaration(node, SymbolFlags.INTERFACE)

	def _visit_type_alias_declaration(self, node: Node) -> None:
		self._bind_type_declaration(node, SymbolFlags.TYPE_ALIAS)

	def _visit_enum_declaration(self, node: Node) -> None:
		sym = self._declare(node.name, node, SymbolFlags.ENUM)
		self._export_declaration(node, sym, SymbolFlags.ENUM)
		members = Scope(ScopeKind.ENUM, parent=self._scope)
		if sym is not None:
			if sym.exports is None:
				sym.exports = members.symbols
			else:
				members.symbols = sym.exports
		self._scope = members
		try:
			for member in node.children:
				if member.kind is NodeKind.ENUM_MEMBER:
					self._declare(member.name, member, SymbolFlags.MEMBER)
					self.visit(member.initializer)
		finally:
			self._pop_scope()

	def _visit_module_declaration(self, node: Node) -> None:
		if node.name is None:
			self._bind_global_augmentation(node)
			return
		sym = self._declare(node.name, node, SymbolFlags.NAMESPACE)
		self._export_declaration(node, sym, SymbolFlags.NAMESPACE)
		table: dict[str, Symbol] = {}
		if sym is not None:
			if sym.exports is None:
				sym.exports = table
			table = sym.exports
		outer_table = self._export_table
		self._export_table = table
		self._push_scope(ScopeKind.NAMESPACE)
		try:
			if node.body is not None:
				self._visit_statements(node.body.children)
		finally:
			self._pop_scope()
			self._export_table = outer_table

	def _bind_global_augmentation(self, node: Node) -> None:
		"""`declare global { ... }` declares straight into the global scope."""
		outer_scope, outer_table = self._scope, self._export_table
		self._scope, self._export_table = self.globals, None
		try:
			if node.body is not None:
				self._visit_statements(node.body.children)
		finally:
			self._scope, self._export_table = outer_scope, outer_table

	# -- modules ------------------------------------------------------------

	def _visit_import_declaration(self, node: Node) -> None:
		for clause in node.children:
			if clause.kind is not NodeKind.IMPORT_CLAUSE:
				continue
			self._declare(clause.name, clause, SymbolFlags.ALIAS)
			for bindings in clause.children:
				if bindings.kind is NodeKind.NAMESPACE_IMPORT:
					self._declare(bindings.name, bindings, SymbolFlags.ALIAS)
				elif bindings.kind is NodeKind.NAMED_IMPORTS:
					for spec in bindings.children:
						self._declare(spec.name, spec, SymbolFlags.ALIAS)

	def _visit_import_equals_declaration(self, node: Node) -> None:
		sym = self._declare(node.name, node, SymbolFlags.ALIAS)
		self._export_declaration(node, sym, SymbolFlags.ALIAS)
		ref = node.module_reference
		if ref is not None and ref.kind is not NodeKind.EXTERNAL_MODULE_REFERENCE:
			self.visit(ref)

	def _visit_export_declaration(self, node: Node) -> None:
		remote = node.module_specifier is not None
		for child in node.children:
			if child.kind is NodeKind.NAMED_EXPORTS:
				for spec in child.children:
					self._bind_export_specifier(spec, remote=remote)
			elif child.kind is NodeKind.NAMESPACE_EXPORT and child.name is not None:
				alias = Symbol(_name_text(child.name), SymbolFlags.ALIAS, [child])
				self.resolved[child.name] = alias
				self._export(alias.name, alias)

	def _bind_export_specifier(self, spec: Node, *, remote: bool) -> None:
		public = spec.name
		if public is None:
			return
		alias = Symbol(_name_text(public), SymbolFlags.ALIAS, [spec])
		self._export(alias.name, alias)
		if remote:
			# `export {a as b} from "m"`: `b` names the re-export, `a` is remote.
			self.resolved[public] = alias
			return
		# Local re-export: both halves denote the local binding.
		local = spec.property_name or public
		if local.kind is not NodeKind.IDENTIFIER:
			return
		self._reference(local)
		if spec.property_name is not None and public.kind is NodeKind.IDENTIFIER:
			self._reference(public, local.text)

	def _visit_export_assignment(self, node: Node) -> None:
		key = "export=" if node.keyword == "=" else "default"
		self._export(key, Symbol(key, SymbolFlags.ALIAS, [node]))
		self.visit(node.expression)


__all__ = ["Binder"]
