# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
One cross-reference pass over a source file.

The collector walks every node once, classifies identifiers, decorates module
specifier literals and returns the sorted, non-overlapping replacement list.
Anchor ids come from a pass-local `IdAllocator` that is cleared on every exit
path.
"""

from __future__ import annotations

from typing import Optional

from srclinks.core.diagnostics import Diagnostic
from srclinks.core.span import Span
from srclinks.core.tokens import Replacement, sort_replacements
from srclinks.parser.ast import Node, NodeKind, SourceFile, walk

from . import markup
from .classify import Classification, Outcome, classify
from .ids import IdAllocator, SymbolOracle
from .remote import remote_link


class _Collector:
	def __init__(
		self,
		source_file: SourceFile,
		checker: SymbolOracle,
		allocator: IdAllocator,
		classes: markup.MarkupClasses,
		diagnostics: list[Diagnostic],
	) -> None:
		self.source_file = source_file
		self.checker = checker
		self.ids = allocator
		self.classes = classes
		self.diagnostics = diagnostics
		self.replacements: list[Replacement] = []
		# id -> node that owns the anchor
		self._anchors: dict[str, Node] = {}
		self._reported_symbols: set[int] = set()
		self._reported_ids: set[str] = set()

	def visit(self, node: Node) -> None:
		if node.kind is NodeKind.IDENTIFIER:
			self._identifier(node)
		elif node.kind in (NodeKind.IMPORT_DECLARATION, NodeKind.EXPORT_DECLARATION):
			if node.module_specifier is not None:
				self._specifier(node.module_specifier)
		elif node.kind is NodeKind.IMPORT_EQUALS_DECLARATION:
			ref = node.module_reference
			if (
				ref is not None
				and ref.kind is NodeKind.EXTERNAL_MODULE_REFERENCE
				and ref.expression is not None
				and ref.expression.kind is NodeKind.STRING_LITERAL
			):
				self._specifier(ref.expression)

	def _span(self, node: Node) -> Span:
		return Span.from_offsets(self.source_file.text or "", node.start, node.end, file=self.source_file.file_name)

	def _replace(self, node: Node, fragments: list) -> None:
		self.replacements.append(Replacement(node.start, node.end, tuple(fragments)))

	def _specifier(self, literal: Node) -> None:
		source = self.source_file.text[literal.start : literal.end] if self.source_file.text else ""
		self._replace(literal, markup.module_specifier(literal.start, source, classes=self.classes))

	def _anchor(self, node: Node) -> str:
		ident = self.ids.id_for(node)
		owner = self._anchors.setdefault(ident, node)
		if owner is not node and ident not in self._reported_ids:
			self._reported_ids.add(ident)
			self.diagnostics.append(
				Diagnostic(
					message=f"duplicate anchor id {ident!r}",
					code="XREF-DUPLICATE-ID",
					phase="xref",
					severity="note",
					span=self._span(node),
					notes=[f"first used at offset {owner.start}"],
				)
			)
		return ident

	def _note_ambiguous(self, result: Classification) -> None:
		sym = result.symbol
		if not result.ambiguous or sym is None or id(sym) in self._reported_symbols:
			return
		self._reported_symbols.add(id(sym))
		self.diagnostics.append(
			Diagnostic(
				message=f"symbol {sym.name!r} has more than one local declaration; using the first",
				code="XREF-AMBIGUOUS-DECL",
				phase="xref",
				severity="note",
				span=self._span(result.declaration) if result.declaration is not None else Span(),
			)
		)

	def _identifier(self, node: Node) -> None:
		result = classify(node, self.checker)
		self._note_ambiguous(result)
		text = node.text or ""
		start = node.start
		outcome = result.outcome
		if outcome is Outcome.IMPORTED_LINKED:
			href = remote_link(node, result.statement)
			inner = markup.reference(start, href, text, classes=self.classes) if href is not None else text
			self._replace(node, markup.definition(start, self._anchor(node), inner, len(text), classes=self.classes))
		elif outcome in (Outcome.IMPORTED, Outcome.DEFINITION):
			self._replace(node, markup.definition(start, self._anchor(node), text, classes=self.classes))
		elif outcome is Outcome.REMOTE_REFERENCE:
			href = remote_link(node, result.statement)
			if href is not None:
				self._replace(node, markup.reference(start, href, text, classes=self.classes))
		elif outcome is Outcome.REFERENCE:
			assert result.declaration is not None and result.declaration.name is not None
			target = self.ids.id_for(result.declaration.name)
			self._replace(node, markup.reference(start, f"#{target}", text, classes=self.classes))


def collect_replacements(
	source_file: SourceFile,
	checker: SymbolOracle,
	*,
	classes: markup.MarkupClasses = markup.DEFAULT_CLASSES,
	diagnostics: Optional[list[Diagnostic]] = None,
) -> list[Replacement]:
	"""
	Run one pass and return its replacements sorted by start offset.

	Raises `OverlappingReplacementError` if two replacements overlap.
	Informational diagnostics are appended to `diagnostics` when given.
	"""
	allocator = IdAllocator(checker)
	collector = _Collector(source_file, checker, allocator, classes, diagnostics if diagnostics is not None else [])
	try:
		walk(source_file, collector.visit)
	finally:
		allocator.clear()
	return sort_replacements(collector.replacements)


__all__ = ["collect_replacements"]
