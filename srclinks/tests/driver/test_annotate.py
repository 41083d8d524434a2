# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from srclinks import Config, SourceParseError, annotate, annotate_source


def test_annotate_module_end_to_end() -> None:
	out = annotate('import {x} from "./m"\nconsole.log(x)\n', file_name="main.ts")
	assert out.startswith('import {<span class="definition" id="symbol-x"><a class="ref" href="./m#x">x</a></span>}')
	assert 'console.log(<a class="ref" href="#symbol-x">x</a>)' in out
	assert "console</" not in out


def test_output_is_deterministic() -> None:
	text = "function f(a, b) { return a + b }\nexport const g = f\n"
	assert annotate(text) == annotate(text)


def test_parse_errors_raise_without_fallback() -> None:
	with pytest.raises(SourceParseError):
		annotate_source("const = ;\n")


def test_fallback_renders_escaped_text() -> None:
	result = annotate_source("const <x> = ;\n", file_name="bad.ts", config=Config(fallback_on_parse_error=True))
	assert result.html == "const &lt;x&gt; = ;\n"
	(diag,) = result.diagnostics
	assert diag.phase == "parser"
	assert diag.is_error
	assert diag.span.file == "bad.ts"


def test_config_controls_classes_and_linkify() -> None:
	text = "// https://example.com\nconst a = 1\n"
	config = Config(definition_class="d", linkify=False)
	out = annotate(text, config=config)
	assert '<span class="d" id="symbol-a">a</span>' in out
	assert "<a href=" not in out
	assert '<a href="https://example.com">' in annotate(text)


def test_template_interpolations_are_linked() -> None:
	out = annotate("const x = 1\nconst s = `${x}!`\n")
	assert '`${<a class="ref" href="#symbol-x">x</a>}!`' in out


def test_namespace_and_enum_members_are_linked() -> None:
	out = annotate("namespace N { export const z = 1 }\nenum E { A }\nN.z + E.A\n")
	assert '<a class="ref" href="#symbol-N">N</a>.<a class="ref" href="#symbol-z' in out
	assert '<a class="ref" href="#symbol-E">E</a>.<a class="ref" href="#symbol-A' in out
