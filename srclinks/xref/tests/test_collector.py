# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from srclinks.core.diagnostics import Diagnostic
from srclinks.test_support import check_source
from srclinks.xref import IdAllocator, MarkupClasses, collect_replacements, render
from srclinks.xref import collector as collector_mod


def _annotate(text: str, diagnostics: list[Diagnostic] | None = None) -> str:
	src, checker = check_source(text)
	return render(text, collect_replacements(src, checker, diagnostics=diagnostics))


def test_imported_name_is_anchored_and_linked_remotely() -> None:
	out = _annotate('import {x} from "./m"\nconsole.log(x)\n')
	assert out == (
		'import {<span class="definition" id="symbol-x"><a class="ref" href="./m#x">x</a></span>}'
		' from <span class="hljs-string">&#34;./m&#34;</span>\n'
		'console.log(<a class="ref" href="#symbol-x">x</a>)\n'
	)


def test_definitions_and_references() -> None:
	out = _annotate("function f(x) { return x }\nf(1)\n")
	assert '<span class="definition" id="symbol-f">f</span>' in out
	assert '<span class="definition" id="symbol-f-x">x</span>' in out
	assert 'return <a class="ref" href="#symbol-f-x">x</a>' in out
	assert '<a class="ref" href="#symbol-f">f</a>(1)' in out


def test_builtins_are_never_linked() -> None:
	src, checker = check_source('console.log(parseInt("1"))\n')
	assert collect_replacements(src, checker) == []


def test_replacements_are_sorted_and_disjoint() -> None:
	src, checker = check_source('import a, { b as c } from "./m"\nconst d = a(c)\nexport { d }\n')
	replacements = collect_replacements(src, checker)
	assert replacements
	for prev, cur in zip(replacements, replacements[1:]):
		assert prev.end <= cur.start


def test_import_equals_specifier_is_decorated() -> None:
	out = _annotate('import fs = require("fs")\nfs.readFileSync\n')
	assert '<span class="hljs-string">&#34;fs&#34;</span>' in out
	assert '<a class="ref" href="#symbol-fs">fs</a>.readFileSync' in out


def test_custom_classes() -> None:
	text = "const a = 1\na\n"
	src, checker = check_source(text)
	classes = MarkupClasses(definition="def", reference="xref", string="str")
	out = render(text, collect_replacements(src, checker, classes=classes))
	assert out == 'const <span class="def" id="symbol-a">a</span> = 1\n<a class="xref" href="#symbol-a">a</a>\n'


def test_duplicate_ids_are_reported_once() -> None:
	diagnostics: list[Diagnostic] = []
	_annotate("class C {\n\tm() {}\n}\nconst m = 1\nm\n", diagnostics)
	dups = [d for d in diagnostics if d.code == "XREF-DUPLICATE-ID"]
	assert len(dups) == 1
	assert dups[0].severity == "note"
	assert dups[0].phase == "xref"
	assert dups[0].span.line == 4


def test_ambiguous_declarations_are_reported_once() -> None:
	diagnostics: list[Diagnostic] = []
	_annotate("var a = 1\nvar a = 2\na\na\n", diagnostics)
	notes = [d for d in diagnostics if d.code == "XREF-AMBIGUOUS-DECL"]
	assert len(notes) == 1
	assert notes[0].span.line == 1


class _RecordingAllocator(IdAllocator):
	instances: list["_RecordingAllocator"] = []

	def __init__(self, checker) -> None:
		super().__init__(checker)
		self.instances.append(self)


def test_id_cache_is_cleared_after_the_pass(monkeypatch: pytest.MonkeyPatch) -> None:
	monkeypatch.setattr(collector_mod, "IdAllocator", _RecordingAllocator)
	_RecordingAllocator.instances.clear()
	_annotate("const a = 1\na\n")
	(allocator,) = _RecordingAllocator.instances
	assert len(allocator) == 0


def test_id_cache_is_cleared_when_the_pass_fails(monkeypatch: pytest.MonkeyPatch) -> None:
	real_classify = collector_mod.classify
	calls = []

	def failing_classify(node, checker):
		calls.append(node)
		if len(calls) > 1:
			raise RuntimeError("boom")
		return real_classify(node, checker)

	monkeypatch.setattr(collector_mod, "IdAllocator", _RecordingAllocator)
	monkeypatch.setattr(collector_mod, "classify", failing_classify)
	_RecordingAllocator.instances.clear()
	with pytest.raises(RuntimeError):
		_annotate("const a = 1\na\n")
	(allocator,) = _RecordingAllocator.instances
	assert len(allocator) == 0
