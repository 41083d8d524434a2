# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
tree-sitter based parser for JavaScript/TypeScript modules.

The concrete syntax tree comes from the `tree_sitter_typescript` grammars
(the TSX flavour for `.tsx` files and for JavaScript, which may carry JSX).
It is converted into the parent-linked `Node` tree from `ast.py`: node types
that carry role links get a `_build_<type>` method, the rest map onto a kind
through `_GENERIC_KINDS`, and wrapper types are spliced into their parent.

tree-sitter reports byte offsets into the UTF-8 encoding of the text; every
`Node` carries character offsets.
"""

from __future__ import annotations

import functools
import re
from typing import Optional, Union

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node as TSNode, Parser

from srclinks.core.span import Span

from .ast import Node, NodeKind, SourceFile, link_parents

TYPESCRIPT_LANGUAGE = Language(tstypescript.language_typescript())
TSX_LANGUAGE = Language(tstypescript.language_tsx())

# File name suffixes parsed with the TSX grammar.
_TSX_SUFFIXES = (".tsx", ".jsx", ".js", ".mjs", ".cjs")


class SourceParseError(ValueError):
	"""Raised when source text does not parse."""

	def __init__(self, message: str, *, loc: Span) -> None:
		super().__init__(message)
		self.loc = loc

	@property
	def span(self) -> Span:
		return self.loc


@functools.lru_cache(maxsize=None)
def _parser(tsx: bool) -> Parser:
	return Parser(TSX_LANGUAGE if tsx else TYPESCRIPT_LANGUAGE)


class _Offsets:
	"""The UTF-8 bytes handed to tree-sitter plus a byte -> character map."""

	def __init__(self, text: str) -> None:
		self.data = text.encode("utf-8", "surrogatepass")
		self._chars: Optional[list[int]] = None
		if len(self.data) != len(text):
			chars = [0] * (len(self.data) + 1)
			pos = 0
			for index, ch in enumerate(text):
				code = ord(ch)
				width = 1 if code < 0x80 else 2 if code < 0x800 else 3 if code < 0x10000 else 4
				chars[pos : pos + width] = [index] * width
				pos += width
			chars[pos] = len(text)
			self._chars = chars

	def char(self, byte: int) -> int:
		return byte if self._chars is None else self._chars[byte]


_SIMPLE_ESCAPES = {
	"n": "\n",
	"t": "\t",
	"r": "\r",
	"b": "\b",
	"f": "\f",
	"v": "\v",
	"0": "\0",
}
_ESCAPE_RE = re.compile(r"\\(x[0-9a-fA-F]{2}|u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|0(?![0-9])|\r\n|[\s\S])")


def _decode_string_token(raw: str) -> str:
	"""Decode a quoted JS string literal (quotes included) to its value."""

	def replace(match: re.Match[str]) -> str:
		esc = match.group(1)
		if esc[0] in "xu" and len(esc) > 1:
			return chr(int(esc[1:].strip("{}"), 16))
		if esc[0] in "\r\n\u2028\u2029":
			return ""
		return _SIMPLE_ESCAPES.get(esc, esc)

	return _ESCAPE_RE.sub(replace, raw[1:-1])


# Syntax that names nothing and holds no names.
_SKIPPED = frozenset(
	{
		"comment",
		"hash_bang_line",
		"html_comment",
		"optional_chain",
		"statement_identifier",
		"accessibility_modifier",
		"override_modifier",
		"empty_statement",
		"debugger_statement",
		"import",
		"existential_type",
	}
)

_IDENTIFIER_TYPES = frozenset(
	{
		"identifier",
		"property_identifier",
		"private_property_identifier",
		"shorthand_property_identifier",
		"shorthand_property_identifier_pattern",
		"type_identifier",
	}
)

# Property names only count where a builder gives them a role.
_PROPERTY_TYPES = frozenset({"property_identifier", "private_property_identifier"})

_LEAF_KINDS: dict[str, NodeKind] = {
	"this": NodeKind.KEYWORD_EXPRESSION,
	"super": NodeKind.KEYWORD_EXPRESSION,
	"true": NodeKind.KEYWORD_EXPRESSION,
	"false": NodeKind.KEYWORD_EXPRESSION,
	"null": NodeKind.KEYWORD_EXPRESSION,
	"undefined": NodeKind.KEYWORD_EXPRESSION,
	"predefined_type": NodeKind.KEYWORD_TYPE,
	"this_type": NodeKind.KEYWORD_TYPE,
	"number": NodeKind.NUMERIC_LITERAL,
	"regex": NodeKind.REGULAR_EXPRESSION_LITERAL,
}

_MODIFIER_TOKENS = frozenset(
	{"static", "async", "get", "set", "readonly", "abstract", "declare", "override", "accessor", "*", "const"}
)

_GENERIC_KINDS: dict[str, NodeKind] = {
	"statement_block": NodeKind.BLOCK,
	"switch_body": NodeKind.CASE_BLOCK,
	"switch_case": NodeKind.CASE_CLAUSE,
	"switch_default": NodeKind.DEFAULT_CLAUSE,
	"if_statement": NodeKind.IF_STATEMENT,
	"for_statement": NodeKind.FOR_STATEMENT,
	"while_statement": NodeKind.WHILE_STATEMENT,
	"do_statement": NodeKind.DO_STATEMENT,
	"return_statement": NodeKind.RETURN_STATEMENT,
	"throw_statement": NodeKind.THROW_STATEMENT,
	"break_statement": NodeKind.BREAK_STATEMENT,
	"continue_statement": NodeKind.CONTINUE_STATEMENT,
	"try_statement": NodeKind.TRY_STATEMENT,
	"switch_statement": NodeKind.SWITCH_STATEMENT,
	"labeled_statement": NodeKind.LABELED_STATEMENT,
	"with_statement": NodeKind.WITH_STATEMENT,
	"assignment_expression": NodeKind.BINARY_EXPRESSION,
	"augmented_assignment_expression": NodeKind.BINARY_EXPRESSION,
	"binary_expression": NodeKind.BINARY_EXPRESSION,
	"sequence_expression": NodeKind.BINARY_EXPRESSION,
	"ternary_expression": NodeKind.CONDITIONAL_EXPRESSION,
	"unary_expression": NodeKind.UNARY_EXPRESSION,
	"update_expression": NodeKind.UNARY_EXPRESSION,
	"await_expression": NodeKind.AWAIT_EXPRESSION,
	"yield_expression": NodeKind.YIELD_EXPRESSION,
	"spread_element": NodeKind.SPREAD_ELEMENT,
	"array": NodeKind.ARRAY_LITERAL_EXPRESSION,
	"object": NodeKind.OBJECT_LITERAL_EXPRESSION,
	"as_expression": NodeKind.AS_EXPRESSION,
	"type_assertion": NodeKind.AS_EXPRESSION,
	"satisfies_expression": NodeKind.SATISFIES_EXPRESSION,
	"meta_property": NodeKind.META_PROPERTY,
	"decorator": NodeKind.DECORATOR,
	"class_static_block": NodeKind.CLASS_STATIC_BLOCK,
	"class_heritage": NodeKind.HERITAGE_CLAUSE,
	"extends_type_clause": NodeKind.HERITAGE_CLAUSE,
	"named_imports": NodeKind.NAMED_IMPORTS,
	"export_clause": NodeKind.NAMED_EXPORTS,
	"union_type": NodeKind.UNION_TYPE,
	"intersection_type": NodeKind.INTERSECTION_TYPE,
	"array_type": NodeKind.ARRAY_TYPE,
	"tuple_type": NodeKind.TUPLE_TYPE,
	"rest_type": NodeKind.REST_TYPE,
	"literal_type": NodeKind.LITERAL_TYPE,
	"template_literal_type": NodeKind.LITERAL_TYPE,
	"type_query": NodeKind.TYPE_QUERY,
	"index_type_query": NodeKind.TYPE_OPERATOR,
	"readonly_type": NodeKind.TYPE_OPERATOR,
	"lookup_type": NodeKind.INDEXED_ACCESS_TYPE,
	"object_type": NodeKind.TYPE_LITERAL,
	"interface_body": NodeKind.TYPE_LITERAL,
	"conditional_type": NodeKind.CONDITIONAL_TYPE,
}

_MODULE_SYNTAX = frozenset(
	{
		NodeKind.IMPORT_DECLARATION,
		NodeKind.IMPORT_EQUALS_DECLARATION,
		NodeKind.EXPORT_DECLARATION,
		NodeKind.EXPORT_ASSIGNMENT,
	}
)

_Built = Union[Node, list[Node], None]


def _key(ts: TSNode) -> tuple[int, int, str]:
	return ts.start_byte, ts.end_byte, ts.type


def _has_token(ts: TSNode, token: str) -> bool:
	return any(not child.is_named and child.type == token for child in ts.children)


class _Parts:
	"""Built children of one tree-sitter node, addressable by grammar field."""

	def __init__(self, ts: TSNode, built: dict[tuple[int, int, str], list[Node]]) -> None:
		self.ts = ts
		self.built = built

	def of(self, child: Optional[TSNode]) -> Optional[Node]:
		if child is None:
			return None
		nodes = self.built.get(_key(child))
		return nodes[0] if nodes else None

	def field(self, name: str) -> Optional[Node]:
		return self.of(self.ts.child_by_field_name(name))


class _TreeBuilder:
	"""Converts a tree-sitter tree into `Node`s (`_build_<type>` per node type)."""

	def __init__(self, text: str, offsets: _Offsets) -> None:
		self.text = text
		self.offsets = offsets

	# -- plumbing ---------------------------------------------------------

	def build(self, ts: TSNode) -> list[Node]:
		"""Build one tree-sitter node; wrappers may yield several nodes or none."""
		if not ts.is_named or ts.type in _SKIPPED:
			return []
		leaf = self._leaf(ts)
		if leaf is not None:
			return [leaf]
		method = getattr(self, f"_build_{ts.type}", None)
		if method is not None:
			built: _Built = method(ts)
			if built is None:
				return []
			return built if isinstance(built, list) else [built]
		kind = _GENERIC_KINDS.get(ts.type)
		if kind is None:
			return self._children(ts)
		start, end = self._span(ts)
		return [Node(kind, start, end, children=self._children(ts))]

	def _children(self, ts: TSNode) -> list[Node]:
		out: list[Node] = []
		for child in ts.children:
			if child.type not in _PROPERTY_TYPES:
				out.extend(self.build(child))
		return out

	def _single(self, ts: Optional[TSNode]) -> Optional[Node]:
		if ts is None:
			return None
		built = self.build(ts)
		return built[0] if built else None

	def _collect(self, ts: TSNode) -> tuple[list[Node], _Parts]:
		children: list[Node] = []
		built: dict[tuple[int, int, str], list[Node]] = {}
		for child in ts.children:
			nodes = self.build(child)
			children.extend(nodes)
			built[_key(child)] = nodes
		return children, _Parts(ts, built)

	def _compose(self, kind: NodeKind, ts: TSNode) -> tuple[Node, _Parts]:
		children, parts = self._collect(ts)
		start, end = self._span(ts)
		return Node(kind, start, end, children=children), parts

	def _span(self, ts: TSNode) -> tuple[int, int]:
		return self.offsets.char(ts.start_byte), self.offsets.char(ts.end_byte)

	def _text(self, ts: TSNode) -> str:
		start, end = self._span(ts)
		return self.text[start:end]

	def _modifiers(self, ts: TSNode) -> frozenset[str]:
		found: set[str] = set()
		for child in ts.children:
			if child.type in ("accessibility_modifier", "override_modifier"):
				found.add(self._text(child))
			elif not child.is_named:
				# `static get` may arrive as one token.
				found.update(word for word in child.type.split() if word in _MODIFIER_TOKENS)
		return frozenset(found)

	def _leaf(self, ts: TSNode) -> Optional[Node]:
		if ts.type in _IDENTIFIER_TYPES:
			kind = NodeKind.IDENTIFIER
		elif ts.type == "string":
			start, end = self._span(ts)
			raw = self.text[start:end]
			return Node(NodeKind.STRING_LITERAL, start, end, text=raw, value=_decode_string_token(raw))
		else:
			leaf_kind = _LEAF_KINDS.get(ts.type)
			if leaf_kind is None:
				return None
			kind = leaf_kind
		start, end = self._span(ts)
		return Node(kind, start, end, text=self.text[start:end])

	# -- source file --------------------------------------------------------

	def build_source_file(self, ts: TSNode, *, file_name: str, is_default_lib: bool) -> SourceFile:
		statements = self._children(ts)
		source = SourceFile(
			NodeKind.SOURCE_FILE,
			0,
			len(self.text),
			children=statements,
			text=self.text,
			file_name=file_name,
			is_default_lib=is_default_lib,
			is_module=any(
				stmt.kind in _MODULE_SYNTAX or "export" in stmt.modifiers for stmt in statements
			),
		)
		link_parents(source)
		return source

	# -- literals -------------------------------------------------------------

	def _build_template_string(self, ts: TSNode) -> Node:
		# Children are the interpolated expressions.
		node, _ = self._compose(NodeKind.TEMPLATE_LITERAL, ts)
		node.text = self.text[node.start : node.end]
		return node

	# -- variables and bindings ---------------------------------------------

	def _declaration_list(self, ts: TSNode, keyword: str) -> Node:
		declarations, _ = self._compose(NodeKind.VARIABLE_DECLARATION_LIST, ts)
		declarations.keyword = keyword
		return Node(
			NodeKind.VARIABLE_STATEMENT,
			declarations.start,
			declarations.end,
			children=[declarations],
		)

	def _build_lexical_declaration(self, ts: TSNode) -> Node:
		kind = ts.child_by_field_name("kind")
		return self._declaration_list(ts, kind.type if kind is not None else ts.children[0].type)

	def _build_variable_declaration(self, ts: TSNode) -> Node:
		return self._declaration_list(ts, "var")

	def _build_variable_declarator(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.VARIABLE_DECLARATION, ts)
		node.name = parts.field("name")
		node.initializer = parts.field("value")
		return node

	def _pattern(self, kind: NodeKind, ts: TSNode) -> Node:
		start, end = self._span(ts)
		elements = [self._element(child) for child in ts.named_children if child.type not in _SKIPPED]
		return Node(kind, start, end, children=elements)

	def _build_object_pattern(self, ts: TSNode) -> Node:
		return self._pattern(NodeKind.OBJECT_BINDING_PATTERN, ts)

	def _build_array_pattern(self, ts: TSNode) -> Node:
		return self._pattern(NodeKind.ARRAY_BINDING_PATTERN, ts)

	def _element(self, ts: TSNode) -> Node:
		start, end = self._span(ts)
		node = Node(NodeKind.BINDING_ELEMENT, start, end)
		target: Optional[TSNode] = ts
		if ts.type == "pair_pattern":
			node.property_name = self._single(ts.child_by_field_name("key"))
			target = ts.child_by_field_name("value")
		if target is not None and target.type in ("assignment_pattern", "object_assignment_pattern"):
			node.name = self._single(target.child_by_field_name("left"))
			node.initializer = self._single(target.child_by_field_name("right"))
		elif target is not None and target.type == "rest_pattern":
			node.keyword = "..."
			inner = [child for child in target.named_children if child.type not in _SKIPPED]
			node.name = self._single(inner[0]) if inner else None
		else:
			node.name = self._single(target)
		node.children = [n for n in (node.property_name, node.name, node.initializer) if n is not None]
		return node

	# -- functions ----------------------------------------------------------

	def _function_like(self, kind: NodeKind, ts: TSNode) -> Node:
		node, parts = self._compose(kind, ts)
		node.name = parts.field("name")
		node.params = [n for n in node.children if n.kind is NodeKind.PARAMETER]
		node.type_parameters = [n for n in node.children if n.kind is NodeKind.TYPE_PARAMETER]
		node.body = parts.field("body")
		node.modifiers = self._modifiers(ts)
		return node

	def _build_function_declaration(self, ts: TSNode) -> Node:
		return self._function_like(NodeKind.FUNCTION_DECLARATION, ts)

	_build_generator_function_declaration = _build_function_declaration
	_build_function_signature = _build_function_declaration

	def _build_function_expression(self, ts: TSNode) -> Node:
		return self._function_like(NodeKind.FUNCTION_EXPRESSION, ts)

	_build_function = _build_function_expression
	_build_generator_function = _build_function_expression

	def _build_arrow_function(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.ARROW_FUNCTION, ts)
		name = parts.field("parameter")
		if name is not None:
			# `x => ...`: a bare identifier stands for the parameter list.
			param = Node(NodeKind.PARAMETER, name.start, name.end, children=[name], name=name)
			node.children[node.children.index(name)] = param
		node.params = [n for n in node.children if n.kind is NodeKind.PARAMETER]
		node.type_parameters = [n for n in node.children if n.kind is NodeKind.TYPE_PARAMETER]
		node.body = parts.field("body")
		node.modifiers = self._modifiers(ts)
		return node

	def _build_required_parameter(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.PARAMETER, ts)
		pattern = ts.child_by_field_name("pattern")
		if pattern is not None and pattern.type == "rest_pattern":
			node.keyword = "..."
		name = parts.of(pattern)
		# `this` parameters bind nothing.
		if name is not None and name.kind is not NodeKind.KEYWORD_EXPRESSION:
			node.name = name
		node.initializer = parts.field("value")
		node.modifiers = self._modifiers(ts)
		return node

	_build_optional_parameter = _build_required_parameter

	def _build_type_parameter(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.TYPE_PARAMETER, ts)
		node.name = parts.field("name")
		return node

	_build_mapped_type_clause = _build_type_parameter

	# -- classes ------------------------------------------------------------

	def _class_like(self, kind: NodeKind, ts: TSNode) -> Node:
		node, parts = self._compose(kind, ts)
		node.name = parts.field("name")
		node.type_parameters = [n for n in node.children if n.kind is NodeKind.TYPE_PARAMETER]
		node.modifiers = self._modifiers(ts)
		return node

	def _build_class_declaration(self, ts: TSNode) -> Node:
		return self._class_like(NodeKind.CLASS_DECLARATION, ts)

	_build_abstract_class_declaration = _build_class_declaration

	def _build_class(self, ts: TSNode) -> Node:
		return self._class_like(NodeKind.CLASS_EXPRESSION, ts)

	def _member(self, kind: NodeKind, ts: TSNode) -> Node:
		node, parts = self._compose(kind, ts)
		node.name = parts.field("name")
		node.params = [n for n in node.children if n.kind is NodeKind.PARAMETER]
		node.type_parameters = [n for n in node.children if n.kind is NodeKind.TYPE_PARAMETER]
		node.body = parts.field("body")
		node.initializer = parts.field("value")
		node.modifiers = self._modifiers(ts)
		if (
			kind is NodeKind.METHOD_DECLARATION
			and ts.parent is not None
			and ts.parent.type == "class_body"
			and node.name is not None
			and node.name.kind is NodeKind.IDENTIFIER
			and node.name.text == "constructor"
		):
			node.kind = NodeKind.CONSTRUCTOR
			node.children.remove(node.name)
			node.name = None
		return node

	def _build_method_definition(self, ts: TSNode) -> Node:
		modifiers = self._modifiers(ts)
		if "get" in modifiers:
			return self._member(NodeKind.GET_ACCESSOR, ts)
		if "set" in modifiers:
			return self._member(NodeKind.SET_ACCESSOR, ts)
		return self._member(NodeKind.METHOD_DECLARATION, ts)

	def _build_method_signature(self, ts: TSNode) -> Node:
		# Overload and abstract signatures inside a class are members too.
		in_class = ts.parent is not None and ts.parent.type == "class_body"
		return self._member(NodeKind.METHOD_DECLARATION if in_class else NodeKind.METHOD_SIGNATURE, ts)

	_build_abstract_method_signature = _build_method_signature

	def _build_public_field_definition(self, ts: TSNode) -> Node:
		return self._member(NodeKind.PROPERTY_DECLARATION, ts)

	def _build_property_signature(self, ts: TSNode) -> Node:
		return self._member(NodeKind.PROPERTY_SIGNATURE, ts)

	def _build_call_signature(self, ts: TSNode) -> Node:
		return self._member(NodeKind.CALL_SIGNATURE, ts)

	def _build_construct_signature(self, ts: TSNode) -> Node:
		return self._member(NodeKind.CONSTRUCT_SIGNATURE, ts)

	def _build_function_type(self, ts: TSNode) -> Node:
		return self._member(NodeKind.FUNCTION_TYPE, ts)

	def _build_constructor_type(self, ts: TSNode) -> Node:
		return self._member(NodeKind.CONSTRUCTOR_TYPE, ts)

	def _build_index_signature(self, ts: TSNode) -> Node:
		if any(child.type == "mapped_type_clause" for child in ts.named_children):
			node, _ = self._compose(NodeKind.MAPPED_TYPE, ts)
			return node
		node, parts = self._compose(NodeKind.INDEX_SIGNATURE, ts)
		node.name = parts.field("name")
		return node

	# -- type-level declarations --------------------------------------------

	def _named(self, kind: NodeKind, ts: TSNode) -> Node:
		node, parts = self._compose(kind, ts)
		node.name = parts.field("name")
		node.type_parameters = [n for n in node.children if n.kind is NodeKind.TYPE_PARAMETER]
		node.modifiers = self._modifiers(ts)
		return node

	def _build_interface_declaration(self, ts: TSNode) -> Node:
		return self._named(NodeKind.INTERFACE_DECLARATION, ts)

	def _build_type_alias_declaration(self, ts: TSNode) -> Node:
		return self._named(NodeKind.TYPE_ALIAS_DECLARATION, ts)

	def _build_enum_declaration(self, ts: TSNode) -> Node:
		return self._named(NodeKind.ENUM_DECLARATION, ts)

	def _build_enum_body(self, ts: TSNode) -> list[Node]:
		members: list[Node] = []
		for child in ts.named_children:
			if child.type in _SKIPPED:
				continue
			if child.type == "enum_assignment":
				member, parts = self._compose(NodeKind.ENUM_MEMBER, child)
				member.name = parts.field("name")
				member.initializer = parts.field("value")
			else:
				name = self._single(child)
				if name is None:
					continue
				member = Node(NodeKind.ENUM_MEMBER, name.start, name.end, children=[name], name=name)
			members.append(member)
		return members

	def _build_internal_module(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.MODULE_DECLARATION, ts)
		node.name = parts.field("name")
		node.body = parts.field("body")
		if node.body is not None:
			node.body.kind = NodeKind.MODULE_BLOCK
		return node

	_build_module = _build_internal_module

	def _build_ambient_declaration(self, ts: TSNode) -> list[Node]:
		children, _ = self._collect(ts)
		start, end = self._span(ts)
		if _has_token(ts, "global"):
			# `declare global { ... }`: an unnamed module declaration.
			body = next((n for n in children if n.kind is NodeKind.BLOCK), None)
			if body is not None:
				body.kind = NodeKind.MODULE_BLOCK
			node = Node(NodeKind.MODULE_DECLARATION, start, end, children=children, body=body)
			node.modifiers = frozenset({"declare"})
			return [node]
		named = [child for child in ts.named_children if child.type not in _SKIPPED]
		if not children or not named or named[0].type in _PROPERTY_TYPES:
			return [n for n in children if n.kind is not NodeKind.IDENTIFIER]
		inner = children[0]
		inner.modifiers = inner.modifiers | {"declare"}
		inner.start = start
		return children

	def _build_generic_type(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.TYPE_REFERENCE, ts)
		node.name = parts.field("name")
		return node

	def _build_nested_type_identifier(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.QUALIFIED_NAME, ts)
		node.expression = parts.field("module")
		node.name = parts.field("name")
		return node

	def _build_nested_identifier(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.QUALIFIED_NAME, ts)
		node.expression = parts.field("object")
		node.name = parts.field("property")
		return node

	def _build_type_predicate(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.TYPE_PREDICATE, ts)
		node.name = parts.field("name")
		return node

	def _build_infer_type(self, ts: TSNode) -> Node:
		node, _ = self._compose(NodeKind.INFER_TYPE, ts)
		node.name = node.children[0] if node.children else None
		return node

	def _build_tuple_parameter(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.NAMED_TUPLE_MEMBER, ts)
		node.name = parts.field("name")
		return node

	_build_optional_tuple_parameter = _build_tuple_parameter

	# -- modules ------------------------------------------------------------

	def _build_import_statement(self, ts: TSNode) -> Node:
		children, parts = self._collect(ts)
		start, end = self._span(ts)
		for child in children:
			if child.kind is NodeKind.IMPORT_EQUALS_DECLARATION:
				# `import x = require("m")`: the clause becomes the statement.
				child.start, child.end = start, end
				return child
		node = Node(NodeKind.IMPORT_DECLARATION, start, end, children=children)
		node.module_specifier = parts.field("source")
		return node

	def _build_import_clause(self, ts: TSNode) -> Node:
		node, _ = self._compose(NodeKind.IMPORT_CLAUSE, ts)
		if node.children and node.children[0].kind is NodeKind.IDENTIFIER:
			node.name = node.children[0]
		return node

	def _build_namespace_import(self, ts: TSNode) -> Node:
		node, _ = self._compose(NodeKind.NAMESPACE_IMPORT, ts)
		node.name = node.children[0] if node.children else None
		return node

	def _specifier(self, kind: NodeKind, ts: TSNode) -> Node:
		node, parts = self._compose(kind, ts)
		alias = parts.field("alias")
		if alias is not None:
			node.property_name = parts.field("name")
			node.name = alias
		else:
			node.name = parts.field("name")
		return node

	def _build_import_specifier(self, ts: TSNode) -> Node:
		return self._specifier(NodeKind.IMPORT_SPECIFIER, ts)

	def _build_export_specifier(self, ts: TSNode) -> Node:
		return self._specifier(NodeKind.EXPORT_SPECIFIER, ts)

	def _build_import_require_clause(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.IMPORT_EQUALS_DECLARATION, ts)
		node.name = node.children[0] if node.children else None
		source = parts.field("source")
		require = next((child for child in ts.children if child.type == "require"), None)
		ref_start = self.offsets.char(require.start_byte) if require is not None else node.start
		ref = Node(
			NodeKind.EXTERNAL_MODULE_REFERENCE,
			ref_start,
			node.end,
			children=[source] if source is not None else [],
			expression=source,
		)
		node.children = [n for n in (node.name, ref) if n is not None]
		node.module_reference = ref
		return node

	def _build_import_alias(self, ts: TSNode) -> Node:
		node, _ = self._compose(NodeKind.IMPORT_EQUALS_DECLARATION, ts)
		node.name = node.children[0] if node.children else None
		node.module_reference = node.children[1] if len(node.children) > 1 else None
		return node

	def _build_namespace_export(self, ts: TSNode) -> Node:
		node, _ = self._compose(NodeKind.NAMESPACE_EXPORT, ts)
		node.name = node.children[0] if node.children else None
		return node

	def _build_export_statement(self, ts: TSNode) -> Node:
		children, parts = self._collect(ts)
		start, end = self._span(ts)
		decorators = [n for n in children if n.kind is NodeKind.DECORATOR]
		declaration = parts.field("declaration")
		if declaration is not None:
			modifiers = {"export"}
			if _has_token(ts, "default"):
				modifiers.add("default")
			declaration.modifiers = declaration.modifiers | modifiers
			declaration.start = start
			declaration.children[:0] = decorators
			return declaration
		value = parts.field("value")
		if value is not None or _has_token(ts, "="):
			expression = value or next((n for n in children if n.kind is not NodeKind.DECORATOR), None)
			return Node(
				NodeKind.EXPORT_ASSIGNMENT,
				start,
				end,
				children=children,
				expression=expression,
				keyword="default" if value is not None else "=",
			)
		node = Node(NodeKind.EXPORT_DECLARATION, start, end, children=children)
		node.module_specifier = parts.field("source")
		return node

	# -- statements ---------------------------------------------------------

	def _build_expression_statement(self, ts: TSNode) -> Node:
		node, _ = self._compose(NodeKind.EXPRESSION_STATEMENT, ts)
		if len(node.children) == 1 and node.children[0].kind is NodeKind.MODULE_DECLARATION:
			# `namespace N {}` may come wrapped as an expression.
			return node.children[0]
		node.expression = node.children[0] if node.children else None
		return node

	def _build_for_in_statement(self, ts: TSNode) -> Node:
		kind = NodeKind.FOR_OF_STATEMENT if _has_token(ts, "of") else NodeKind.FOR_IN_STATEMENT
		node, parts = self._compose(kind, ts)
		left = parts.field("left")
		declared = ts.child_by_field_name("kind")
		if declared is None:
			declared = next((c for c in ts.children if c.type in ("var", "let", "const")), None)
		if declared is not None and left is not None:
			decl = Node(NodeKind.VARIABLE_DECLARATION, left.start, left.end, children=[left], name=left)
			declarations = Node(
				NodeKind.VARIABLE_DECLARATION_LIST,
				self.offsets.char(declared.start_byte),
				left.end,
				children=[decl],
				keyword=declared.type,
			)
			node.children[node.children.index(left)] = declarations
		return node

	def _build_catch_clause(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.CATCH_CLAUSE, ts)
		param = parts.field("parameter")
		if param is not None:
			decl = Node(NodeKind.VARIABLE_DECLARATION, param.start, param.end, children=[param], name=param)
			node.children[node.children.index(param)] = decl
		node.body = parts.field("body")
		return node

	# -- expressions --------------------------------------------------------

	def _with_expression(self, kind: NodeKind, ts: TSNode, field: Optional[str] = None) -> Node:
		node, parts = self._compose(kind, ts)
		if field is not None:
			node.expression = parts.field(field)
		else:
			node.expression = node.children[0] if node.children else None
		return node

	def _build_member_expression(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.PROPERTY_ACCESS_EXPRESSION, ts)
		node.expression = parts.field("object")
		node.name = parts.field("property")
		return node

	def _build_subscript_expression(self, ts: TSNode) -> Node:
		return self._with_expression(NodeKind.ELEMENT_ACCESS_EXPRESSION, ts, "object")

	def _build_call_expression(self, ts: TSNode) -> Node:
		function = ts.child_by_field_name("function")
		if function is not None and function.type == "import":
			node, _ = self._compose(NodeKind.CALL_EXPRESSION, ts)
			node.keyword = "import"
			return node
		return self._with_expression(NodeKind.CALL_EXPRESSION, ts, "function")

	def _build_new_expression(self, ts: TSNode) -> Node:
		return self._with_expression(NodeKind.NEW_EXPRESSION, ts, "constructor")

	def _build_non_null_expression(self, ts: TSNode) -> Node:
		return self._with_expression(NodeKind.NON_NULL_EXPRESSION, ts)

	def _build_parenthesized_expression(self, ts: TSNode) -> Node:
		return self._with_expression(NodeKind.PARENTHESIZED_EXPRESSION, ts)

	def _build_computed_property_name(self, ts: TSNode) -> Node:
		return self._with_expression(NodeKind.COMPUTED_PROPERTY_NAME, ts)

	def _build_pair(self, ts: TSNode) -> Node:
		node, parts = self._compose(NodeKind.PROPERTY_ASSIGNMENT, ts)
		node.name = parts.field("key")
		node.initializer = parts.field("value")
		return node


def _first_error(root: TSNode) -> Optional[TSNode]:
	"""Leftmost ERROR or MISSING node (iterative pre-order)."""
	stack = [root]
	while stack:
		ts = stack.pop()
		if ts.type == "ERROR" or ts.is_missing:
			return ts
		stack.extend(reversed([child for child in ts.children if child.has_error or child.is_missing]))
	return None


def _describe(bad: TSNode, offsets: _Offsets) -> str:
	if bad.is_missing:
		return f"missing {bad.type!r}"
	leaf = bad
	while leaf.child_count:
		leaf = leaf.children[0]
	token = offsets.data[leaf.start_byte : leaf.end_byte].decode("utf-8", "replace")
	if not token:
		return "unexpected end of input"
	return f"unexpected {token!r}"


def parse_source(text: str, file_name: str = "input.ts", *, is_default_lib: bool = False) -> SourceFile:
	"""
	Parse one JS/TS file into a parent-linked `SourceFile`.

	Raises `SourceParseError` (with a Span pointing at the first offending
	input) when the text does not parse.
	"""
	offsets = _Offsets(text)
	tree = _parser(file_name.endswith(_TSX_SUFFIXES)).parse(offsets.data)
	root = tree.root_node
	if root.has_error:
		bad = _first_error(root)
		pos = offsets.char(bad.start_byte) if bad is not None else len(text)
		message = _describe(bad, offsets) if bad is not None else "syntax error"
		raise SourceParseError(message, loc=Span.from_offsets(text, pos, pos, file=file_name))
	return _TreeBuilder(text, offsets).build_source_file(root, file_name=file_name, is_default_lib=is_default_lib)


__all__ = ["SourceParseError", "TSX_LANGUAGE", "TYPESCRIPT_LANGUAGE", "parse_source"]
