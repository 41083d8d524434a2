# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Links to symbols exported by other modules."""

from __future__ import annotations

from typing import Optional

from srclinks.parser.ast import Node, NodeKind

_NAMED_LISTS = (NodeKind.NAMED_IMPORTS, NodeKind.NAMED_EXPORTS)


def remote_link(node: Node, statement: Node) -> Optional[str]:
	"""
	`"<module>#<exported name>"` for a name bound by an import/export clause.

	The exported name is the renamed-from property of `{a as b}`, the name
	itself inside a plain `{a}` list, and `default` otherwise (default
	imports). Returns None when the statement names no module.
	"""
	specifier = statement.module_specifier
	if specifier is None or node.parent is None:
		return None
	owner = node.parent
	if owner.property_name is not None:
		remote = owner.property_name
		# `{"a-b" as c}` names the export with a string.
		exported = remote.value if remote.kind is NodeKind.STRING_LITERAL else remote.text
	elif owner.parent is not None and owner.parent.kind in _NAMED_LISTS and owner.name is not None:
		exported = owner.name.text
	else:
		exported = "default"
	return f"{specifier.value}#{exported}"


__all__ = ["remote_link"]
