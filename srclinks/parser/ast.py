# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parent-linked syntax tree for JavaScript/TypeScript sources.

Every node has a closed `NodeKind`, character offsets `[start, end)` into the
file text, its children in source order and a `parent` link. Role links
(`name`, `property_name`, `module_specifier`, ...) point at children and are
what the binder and the cross-referencer read. Nodes compare by identity.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional


class NodeKind(enum.Enum):
	SOURCE_FILE = enum.auto()
	BLOCK = enum.auto()
	MODULE_BLOCK = enum.auto()
	CASE_BLOCK = enum.auto()
	CASE_CLAUSE = enum.auto()
	DEFAULT_CLAUSE = enum.auto()

	IDENTIFIER = enum.auto()
	STRING_LITERAL = enum.auto()
	NUMERIC_LITERAL = enum.auto()
	TEMPLATE_LITERAL = enum.auto()
	REGULAR_EXPRESSION_LITERAL = enum.auto()
	KEYWORD_EXPRESSION = enum.auto()

	# modules
	IMPORT_DECLARATION = enum.auto()
	IMPORT_CLAUSE = enum.auto()
	NAMESPACE_IMPORT = enum.auto()
	NAMED_IMPORTS = enum.auto()
	IMPORT_SPECIFIER = enum.auto()
	IMPORT_EQUALS_DECLARATION = enum.auto()
	EXTERNAL_MODULE_REFERENCE = enum.auto()
	EXPORT_DECLARATION = enum.auto()
	NAMED_EXPORTS = enum.auto()
	EXPORT_SPECIFIER = enum.auto()
	NAMESPACE_EXPORT = enum.auto()
	EXPORT_ASSIGNMENT = enum.auto()

	# declarations
	VARIABLE_STATEMENT = enum.auto()
	VARIABLE_DECLARATION_LIST = enum.auto()
	VARIABLE_DECLARATION = enum.auto()
	OBJECT_BINDING_PATTERN = enum.auto()
	ARRAY_BINDING_PATTERN = enum.auto()
	BINDING_ELEMENT = enum.auto()
	FUNCTION_DECLARATION = enum.auto()
	FUNCTION_EXPRESSION = enum.auto()
	ARROW_FUNCTION = enum.auto()
	PARAMETER = enum.auto()
	TYPE_PARAMETER = enum.auto()
	CLASS_DECLARATION = enum.auto()
	CLASS_EXPRESSION = enum.auto()
	HERITAGE_CLAUSE = enum.auto()
	CONSTRUCTOR = enum.auto()
	METHOD_DECLARATION = enum.auto()
	GET_ACCESSOR = enum.auto()
	SET_ACCESSOR = enum.auto()
	PROPERTY_DECLARATION = enum.auto()
	CLASS_STATIC_BLOCK = enum.auto()
	DECORATOR = enum.auto()
	INDEX_SIGNATURE = enum.auto()
	INTERFACE_DECLARATION = enum.auto()
	TYPE_ALIAS_DECLARATION = enum.auto()
	ENUM_DECLARATION = enum.auto()
	ENUM_MEMBER = enum.auto()
	MODULE_DECLARATION = enum.auto()

	# statements
	EXPRESSION_STATEMENT = enum.auto()
	IF_STATEMENT = enum.auto()
	FOR_STATEMENT = enum.auto()
	FOR_IN_STATEMENT = enum.auto()
	FOR_OF_STATEMENT = enum.auto()
	WHILE_STATEMENT = enum.auto()
	DO_STATEMENT = enum.auto()
	RETURN_STATEMENT = enum.auto()
	THROW_STATEMENT = enum.auto()
	BREAK_STATEMENT = enum.auto()
	CONTINUE_STATEMENT = enum.auto()
	TRY_STATEMENT = enum.auto()
	CATCH_CLAUSE = enum.auto()
	SWITCH_STATEMENT = enum.auto()
	LABELED_STATEMENT = enum.auto()
	WITH_STATEMENT = enum.auto()

	# expressions
	BINARY_EXPRESSION = enum.auto()
	CONDITIONAL_EXPRESSION = enum.auto()
	UNARY_EXPRESSION = enum.auto()
	AWAIT_EXPRESSION = enum.auto()
	YIELD_EXPRESSION = enum.auto()
	CALL_EXPRESSION = enum.auto()
	NEW_EXPRESSION = enum.auto()
	PROPERTY_ACCESS_EXPRESSION = enum.auto()
	ELEMENT_ACCESS_EXPRESSION = enum.auto()
	NON_NULL_EXPRESSION = enum.auto()
	PARENTHESIZED_EXPRESSION = enum.auto()
	SPREAD_ELEMENT = enum.auto()
	ARRAY_LITERAL_EXPRESSION = enum.auto()
	OBJECT_LITERAL_EXPRESSION = enum.auto()
	PROPERTY_ASSIGNMENT = enum.auto()
	COMPUTED_PROPERTY_NAME = enum.auto()
	AS_EXPRESSION = enum.auto()
	SATISFIES_EXPRESSION = enum.auto()
	META_PROPERTY = enum.auto()

	# types
	TYPE_REFERENCE = enum.auto()
	QUALIFIED_NAME = enum.auto()
	TYPE_LITERAL = enum.auto()
	PROPERTY_SIGNATURE = enum.auto()
	METHOD_SIGNATURE = enum.auto()
	CALL_SIGNATURE = enum.auto()
	CONSTRUCT_SIGNATURE = enum.auto()
	MAPPED_TYPE = enum.auto()
	UNION_TYPE = enum.auto()
	INTERSECTION_TYPE = enum.auto()
	FUNCTION_TYPE = enum.auto()
	CONSTRUCTOR_TYPE = enum.auto()
	CONDITIONAL_TYPE = enum.auto()
	INFER_TYPE = enum.auto()
	INDEXED_ACCESS_TYPE = enum.auto()
	TYPE_PREDICATE = enum.auto()
	TYPE_OPERATOR = enum.auto()
	TYPE_QUERY = enum.auto()
	ARRAY_TYPE = enum.auto()
	TUPLE_TYPE = enum.auto()
	REST_TYPE = enum.auto()
	NAMED_TUPLE_MEMBER = enum.auto()
	LITERAL_TYPE = enum.auto()
	KEYWORD_TYPE = enum.auto()


# Nodes whose children are statements.
STATEMENT_CONTAINERS = frozenset(
	{
		NodeKind.SOURCE_FILE,
		NodeKind.BLOCK,
		NodeKind.MODULE_BLOCK,
		NodeKind.CASE_CLAUSE,
		NodeKind.DEFAULT_CLAUSE,
	}
)

FUNCTION_LIKE = frozenset(
	{
		NodeKind.FUNCTION_DECLARATION,
		NodeKind.FUNCTION_EXPRESSION,
		NodeKind.ARROW_FUNCTION,
		NodeKind.CONSTRUCTOR,
		NodeKind.METHOD_DECLARATION,
		NodeKind.GET_ACCESSOR,
		NodeKind.SET_ACCESSOR,
	}
)

# Type-level signatures: their parameters name nothing that code can refer to.
SIGNATURE_LIKE = frozenset(
	{
		NodeKind.METHOD_SIGNATURE,
		NodeKind.CALL_SIGNATURE,
		NodeKind.CONSTRUCT_SIGNATURE,
		NodeKind.INDEX_SIGNATURE,
		NodeKind.FUNCTION_TYPE,
		NodeKind.CONSTRUCTOR_TYPE,
	}
)


@dataclass(eq=False)
class Node:
	kind: NodeKind
	start: int = 0
	end: int = 0
	children: list["Node"] = field(default_factory=list)
	parent: Optional["Node"] = field(default=None, repr=False)
	# Identifier name, or the source text of a literal.
	text: Optional[str] = None
	# Decoded value of a string literal.
	value: Optional[str] = None
	# `var`/`let`/`const` on declaration lists, `...` on rest elements,
	# `default`/`=` on export assignments, `import` on dynamic imports.
	keyword: Optional[str] = None
	modifiers: frozenset[str] = frozenset()
	name: Optional["Node"] = field(default=None, repr=False)
	property_name: Optional["Node"] = field(default=None, repr=False)
	module_specifier: Optional["Node"] = field(default=None, repr=False)
	module_reference: Optional["Node"] = field(default=None, repr=False)
	expression: Optional["Node"] = field(default=None, repr=False)
	initializer: Optional["Node"] = field(default=None, repr=False)
	params: list["Node"] = field(default_factory=list, repr=False)
	type_parameters: list["Node"] = field(default_factory=list, repr=False)
	body: Optional["Node"] = field(default=None, repr=False)

	def __repr__(self) -> str:
		if self.text is not None and self.kind is not NodeKind.SOURCE_FILE:
			return f"Node({self.kind.name}, {self.text!r}, [{self.start}, {self.end}))"
		return f"Node({self.kind.name}, [{self.start}, {self.end}))"

	def get_text(self, source: "SourceFile") -> str:
		return source.text[self.start : self.end]


@dataclass(eq=False, repr=False)
class SourceFile(Node):
	"""Root node; `text` is the whole file."""

	file_name: str = "input.ts"
	is_default_lib: bool = False
	is_module: bool = False


def link_parents(root: Node) -> None:
	"""Point every child's `parent` at its owner (iterative)."""
	stack = [root]
	while stack:
		node = stack.pop()
		for child in node.children:
			child.parent = node
			stack.append(child)


def iter_nodes(root: Node) -> Iterator[Node]:
	"""Pre-order iteration: a node before its children, children in source order."""
	stack = [root]
	while stack:
		node = stack.pop()
		yield node
		stack.extend(reversed(node.children))


def walk(root: Node, visit: Callable[[Node], None]) -> None:
	for node in iter_nodes(root):
		visit(node)


def ancestors(node: Node) -> Iterator[Node]:
	"""The node's parent, grandparent, ... up to the root."""
	current = node.parent
	while current is not None:
		yield current
		current = current.parent


def source_file_of(node: Node) -> Optional[SourceFile]:
	current: Optional[Node] = node
	while current is not None:
		if isinstance(current, SourceFile):
			return current
		current = current.parent
	return None


__all__ = [
	"FUNCTION_LIKE",
	"Node",
	"NodeKind",
	"SIGNATURE_LIKE",
	"STATEMENT_CONTAINERS",
	"SourceFile",
	"ancestors",
	"iter_nodes",
	"link_parents",
	"source_file_of",
	"walk",
]
