# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Identifier classification.

Every identifier gets exactly one `Outcome`, decided by an ordered rule table:
the first rule whose predicate holds wins.

  1. IMPORTED_LINKED   bound name of an import/export-from clause that maps
                       one-to-one onto a remote export
  2. IMPORTED          bound name of such a clause that does not (namespace
                       imports, `{a as b}` renames)
  3. REMOTE_REFERENCE  unresolved renamed-from half of `{a as b} from "m"`
  4. UNRESOLVED        no symbol, or nothing to link to
  5. BUILTIN           every declaration lives in the built-in library
  6. DEFINITION        the declaring occurrence
  7. REFERENCE         any other occurrence
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional

from srclinks.checker.symbols import Symbol
from srclinks.parser.ast import Node, NodeKind

from .ids import SymbolOracle
from .statements import get_statement, has_module_specifier


class Outcome(enum.Enum):
	IMPORTED_LINKED = "imported-linked"
	IMPORTED = "imported"
	REMOTE_REFERENCE = "remote-reference"
	UNRESOLVED = "unresolved"
	BUILTIN = "builtin"
	DEFINITION = "definition"
	REFERENCE = "reference"


@dataclass(frozen=True)
class Facts:
	"""What the rules look at, computed once per identifier."""

	node: Node
	statement: Node
	symbol: Optional[Symbol]
	in_module_clause: bool
	is_bound_name: bool
	remote_eligible: bool
	is_property_name: bool
	all_builtin: bool
	declaration: Optional[Node]
	ambiguous: bool


@dataclass(frozen=True)
class Classification:
	outcome: Outcome
	node: Node
	statement: Node
	symbol: Optional[Symbol] = None
	# Canonical declaration; DEFINITION/REFERENCE ids hang off its name.
	declaration: Optional[Node] = None
	ambiguous: bool = False


def canonical_declaration(symbol: Symbol, checker: SymbolOracle) -> tuple[Optional[Node], bool]:
	"""
	Pick the declaration whose name is the symbol's anchor.

	A single declaration is used as is. Otherwise built-in declarations are
	dropped and the first remaining one wins; the flag reports whether more than
	one local declaration competed.
	"""
	decls = symbol.declarations
	if not decls:
		return None, False
	if len(decls) == 1:
		return decls[0], False
	local = [d for d in decls if not checker.is_builtin_declaration(d)]
	if not local:
		return decls[0], False
	return local[0], len(local) > 1


def gather_facts(node: Node, checker: SymbolOracle) -> Facts:
	symbol = checker.resolve_symbol(node)
	statement = get_statement(node)
	owner = node.parent
	in_clause = has_module_specifier(statement)
	is_bound_name = owner is not None and owner.name is node
	remote_eligible = (
		owner is not None
		and owner.kind not in (NodeKind.NAMESPACE_IMPORT, NodeKind.NAMESPACE_EXPORT)
		and (owner.property_name is None or owner.property_name is node)
	)
	declaration: Optional[Node] = None
	ambiguous = False
	all_builtin = False
	if symbol is not None and symbol.declarations:
		all_builtin = all(checker.is_builtin_declaration(d) for d in symbol.declarations)
		if not all_builtin:
			declaration, ambiguous = canonical_declaration(symbol, checker)
	return Facts(
		node=node,
		statement=statement,
		symbol=symbol,
		in_module_clause=in_clause,
		is_bound_name=is_bound_name,
		remote_eligible=remote_eligible,
		is_property_name=owner is not None and owner.property_name is node,
		all_builtin=all_builtin,
		declaration=declaration,
		ambiguous=ambiguous,
	)


def _imported_linked(f: Facts) -> bool:
	return f.in_module_clause and f.is_bound_name and f.remote_eligible


def _imported(f: Facts) -> bool:
	return f.in_module_clause and f.is_bound_name


def _remote_reference(f: Facts) -> bool:
	return f.symbol is None and f.in_module_clause and f.is_property_name


def _unresolved(f: Facts) -> bool:
	return f.symbol is None or not f.symbol.declarations


def _builtin(f: Facts) -> bool:
	return f.all_builtin


def _definition(f: Facts) -> bool:
	return f.declaration is not None and f.declaration.name is f.node


def _reference(f: Facts) -> bool:
	# Something must carry the anchor we link to.
	return f.declaration is not None and f.declaration.name is not None


RULES: tuple[tuple[Outcome, Callable[[Facts], bool]], ...] = (
	(Outcome.IMPORTED_LINKED, _imported_linked),
	(Outcome.IMPORTED, _imported),
	(Outcome.REMOTE_REFERENCE, _remote_reference),
	(Outcome.UNRESOLVED, _unresolved),
	(Outcome.BUILTIN, _builtin),
	(Outcome.DEFINITION, _definition),
	(Outcome.REFERENCE, _reference),
)


def classify(node: Node, checker: SymbolOracle) -> Classification:
	"""Classify one identifier node (first matching rule wins)."""
	facts = gather_facts(node, checker)
	outcome = Outcome.UNRESOLVED
	for candidate, rule in RULES:
		if rule(facts):
			outcome = candidate
			break
	return Classification(
		outcome=outcome,
		node=node,
		statement=facts.statement,
		symbol=facts.symbol,
		declaration=facts.declaration,
		ambiguous=facts.ambiguous,
	)


__all__ = ["Classification", "Facts", "Outcome", "RULES", "canonical_declaration", "classify", "gather_facts"]
