# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from srclinks.core.html import escape_and_linkify, linkify
from srclinks.core.span import Span
from srclinks.core.diagnostics import Diagnostic, has_errors


def test_escapes_markup_characters() -> None:
	assert str(escape_and_linkify("a < b && c > d")) == "a &lt; b &amp;&amp; c &gt; d"


def test_linkifies_urls_and_keeps_trailing_punctuation_outside() -> None:
	out = str(escape_and_linkify("see https://example.com/x."))
	assert out == 'see <a href="https://example.com/x">https://example.com/x</a>.'


def test_schemaless_names_stay_plain_text() -> None:
	out = str(linkify("const u = res.id + www.example.org; // see //cdn.example.com"))
	assert "<a" not in out


def test_url_stops_at_quote() -> None:
	out = str(escape_and_linkify('"https://example.com/c"'))
	assert out == '&#34;<a href="https://example.com/c">https://example.com/c</a>&#34;'


def test_text_around_and_inside_links_is_escaped() -> None:
	out = str(linkify("a<b https://example.com/?x=1&y=2 c>d"))
	assert out == (
		'a&lt;b <a href="https://example.com/?x=1&amp;y=2">https://example.com/?x=1&amp;y=2</a> c&gt;d'
	)


def test_linkify_can_be_disabled() -> None:
	out = str(escape_and_linkify("https://example.com", enabled=False))
	assert out == "https://example.com"


def test_span_from_offsets_computes_line_and_column() -> None:
	span = Span.from_offsets("ab\ncd", 4, 5, file="x.ts")
	assert (span.line, span.column) == (2, 2)
	assert (span.start, span.end) == (4, 5)


def test_diagnostic_human_format_and_errors() -> None:
	note = Diagnostic(message="dup", severity="note", span=Span(file="a.ts", line=3, column=1))
	err = Diagnostic(message="bad", phase="parser")
	assert note.format_human() == "a.ts:3:1: note: dup"
	assert err.format_human("b.ts") == "b.ts:?:?: error: bad"
	assert not has_errors([note])
	assert has_errors([note, err])
