# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from srclinks.parser import NodeKind
from srclinks.test_support import check_source, identifier
from srclinks.xref import Outcome, classify
from srclinks.xref.classify import RULES, canonical_declaration


def _outcome(text: str, name: str, occurrence: int = 0) -> Outcome:
	src, checker = check_source(text)
	return classify(identifier(src, name, occurrence), checker).outcome


def test_rules_are_ordered() -> None:
	assert [outcome for outcome, _ in RULES] == [
		Outcome.IMPORTED_LINKED,
		Outcome.IMPORTED,
		Outcome.REMOTE_REFERENCE,
		Outcome.UNRESOLVED,
		Outcome.BUILTIN,
		Outcome.DEFINITION,
		Outcome.REFERENCE,
	]


def test_plain_named_import_is_linked() -> None:
	assert _outcome('import { a } from "./m"\n', "a") is Outcome.IMPORTED_LINKED


def test_default_import_is_linked() -> None:
	assert _outcome('import d from "./m"\n', "d") is Outcome.IMPORTED_LINKED


def test_re_export_from_is_linked() -> None:
	assert _outcome('export { a } from "./m"\n', "a") is Outcome.IMPORTED_LINKED


def test_renamed_and_namespace_imports_are_only_defined() -> None:
	text = 'import { a as b } from "./m"\nimport * as ns from "./n"\nexport * as all from "./o"\n'
	assert _outcome(text, "b") is Outcome.IMPORTED
	assert _outcome(text, "ns") is Outcome.IMPORTED
	assert _outcome(text, "all") is Outcome.IMPORTED


def test_renamed_from_half_is_a_remote_reference() -> None:
	assert _outcome('import { a as b } from "./m"\n', "a") is Outcome.REMOTE_REFERENCE
	assert _outcome('export { a as b } from "./m"\n', "a") is Outcome.REMOTE_REFERENCE


def test_unresolved_names() -> None:
	assert _outcome("notDeclaredAnywhere()\n", "notDeclaredAnywhere") is Outcome.UNRESOLVED
	assert _outcome("const o = {}\no.prop\n", "prop") is Outcome.UNRESOLVED


def test_builtins() -> None:
	assert _outcome("console.log(1)\n", "console") is Outcome.BUILTIN
	assert _outcome("const p = new Promise(resolve)\n", "Promise") is Outcome.BUILTIN


def test_definition_and_reference() -> None:
	text = "function f() {}\nf()\n"
	assert _outcome(text, "f", 0) is Outcome.DEFINITION
	assert _outcome(text, "f", 1) is Outcome.REFERENCE


def test_local_redeclaration_of_builtin_is_linked() -> None:
	text = "var console = {}\nconsole\n"
	assert _outcome(text, "console", 0) is Outcome.DEFINITION
	assert _outcome(text, "console", 1) is Outcome.REFERENCE


def test_local_export_rename_links_to_the_local_binding() -> None:
	text = "const x = 1\nexport { x as y }\n"
	assert _outcome(text, "x", 0) is Outcome.DEFINITION
	assert _outcome(text, "x", 1) is Outcome.REFERENCE
	assert _outcome(text, "y") is Outcome.REFERENCE


def test_ambiguous_declarations_pick_the_first() -> None:
	src, checker = check_source("var a = 1\nvar a = 2\na\n")
	result = classify(identifier(src, "a", 2), checker)
	assert result.outcome is Outcome.REFERENCE
	assert result.ambiguous
	assert result.declaration is result.symbol.declarations[0]
	assert result.declaration.kind is NodeKind.VARIABLE_DECLARATION
	# The second declaration's own name is therefore a reference.
	assert classify(identifier(src, "a", 1), checker).outcome is Outcome.REFERENCE


def test_canonical_declaration_skips_builtins() -> None:
	src, checker = check_source("var console = {}\n")
	sym = checker.resolve_symbol(identifier(src, "console"))
	decl, ambiguous = canonical_declaration(sym, checker)
	assert decl is not None and not checker.is_builtin_declaration(decl)
	assert not ambiguous
