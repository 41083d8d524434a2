# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from srclinks.parser import parse_source
from srclinks.test_support import identifier
from srclinks.xref import get_statement, remote_link


def _link(text: str, name: str) -> str | None:
	node = identifier(parse_source(text), name)
	return remote_link(node, get_statement(node))


def test_named_import() -> None:
	assert _link('import { a } from "./m"\n', "a") == "./m#a"


def test_aliased_import_links_both_halves_to_the_remote_name() -> None:
	text = 'import { a as b } from "./m"\n'
	assert _link(text, "a") == "./m#a"
	assert _link(text, "b") == "./m#a"


def test_default_import() -> None:
	assert _link('import d, { e } from "./m"\n', "d") == "./m#default"


def test_re_export_from() -> None:
	assert _link('export { x } from "lib/util"\n', "x") == "lib/util#x"


def test_specifier_value_is_decoded() -> None:
	assert _link("import { a } from './dir\\u002fm'\n", "a") == "./dir/m#a"


def test_no_module_specifier() -> None:
	assert _link("const x = 1\nexport { x }\n", "x") is None
