# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from srclinks.test_support import check_source, identifier
from srclinks.xref import IdAllocator


def _ids(text: str, *names: tuple[str, int]) -> list[str]:
	src, checker = check_source(text)
	ids = IdAllocator(checker)
	return [ids.id_for(identifier(src, name, occurrence)) for name, occurrence in names]


def test_parameters_are_qualified_by_their_function() -> None:
	assert _ids("function f(x) {}\nfunction g(x) {}\n", ("x", 0), ("x", 1)) == ["symbol-f-x", "symbol-g-x"]


def test_top_level_names() -> None:
	assert _ids("const a = 1\nclass C {}\n", ("a", 0), ("C", 0)) == ["symbol-a", "symbol-C"]


def test_nested_names_get_offset_ids() -> None:
	text = "function f() {\n\tconst inner = 1\n}\n"
	assert _ids(text, ("inner", 0)) == [f"symbol-inner-{text.index('inner')}"]


def test_parameters_of_anonymous_functions_get_offset_ids() -> None:
	text = "const h = function (p) { return p }\nconst k = (q) => q\n"
	assert _ids(text, ("p", 0), ("q", 0)) == [
		f"symbol-p-{text.index('p)')}",
		f"symbol-q-{text.index('q)')}",
	]


def test_exported_names_use_their_public_name() -> None:
	text = "export function f(a) {}\nexport const v = 1\n"
	assert _ids(text, ("f", 0), ("a", 0), ("v", 0)) == ["f", "f-a", "v"]


def test_re_exported_import_uses_the_export_name() -> None:
	text = 'import { a as b } from "./m"\nexport { b as c }\n'
	assert _ids(text, ("b", 0)) == ["c"]


def test_ids_are_memoized_until_cleared() -> None:
	src, checker = check_source("const a = 1\n")
	ids = IdAllocator(checker)
	node = identifier(src, "a")
	first = ids.id_for(node)
	assert ids.id_for(node) is first
	assert len(ids) == 1
	ids.clear()
	assert len(ids) == 0
	assert ids.id_for(node) == first
