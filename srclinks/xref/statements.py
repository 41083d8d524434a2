# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Statement lookup: which top-level construct does a node belong to?"""

from __future__ import annotations

from srclinks.parser.ast import STATEMENT_CONTAINERS, Node, NodeKind


def get_statement(node: Node) -> Node:
	"""
	Nearest ancestor-or-self whose parent holds statements.

	Containers are the source file, blocks, module blocks and case/default
	clauses; the statement itself is returned, never the container. A node
	without a parent is its own statement.
	"""
	statement = node
	while statement.parent is not None and statement.parent.kind not in STATEMENT_CONTAINERS:
		statement = statement.parent
	return statement


def has_module_specifier(statement: Node) -> bool:
	"""True for `import ... from "m"` and `export ... from "m"` statements."""
	return (
		statement.kind in (NodeKind.IMPORT_DECLARATION, NodeKind.EXPORT_DECLARATION)
		and statement.module_specifier is not None
	)


__all__ = ["get_statement", "has_module_specifier"]
