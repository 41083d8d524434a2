# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from srclinks.core.tokens import OverlappingReplacementError, Replacement, Token, safe, unsafe
from srclinks.xref import apply_replacements, render


def test_plain_text_is_escaped() -> None:
	assert render("a < b", []) == "a &lt; b"


def test_safe_fragments_are_not_escaped_again() -> None:
	out = render("x & y", [Replacement(0, 1, (safe(0, "<b>X</b>"),))])
	assert out == "<b>X</b> &amp; y"


def test_nested_tokens_render_in_order() -> None:
	inner = Token(0, True, (safe(0, "<i>"), unsafe(0, "<"), safe(1, "</i>")))
	assert render("<", [Replacement(0, 1, (inner,))]) == "<i>&lt;</i>"


def test_gaps_become_unsafe_tokens() -> None:
	frag = safe(2, "C")
	tokens = apply_replacements("abcd", [Replacement(2, 3, (frag,))])
	assert tokens == [unsafe(0, "ab"), frag, unsafe(3, "d")]


def test_urls_in_gaps_are_linkified() -> None:
	text = "// see https://example.com\n"
	assert render(text, []) == '// see <a href="https://example.com">https://example.com</a>\n'
	assert render(text, [], linkify=False) == text


def test_overlap_is_rejected() -> None:
	with pytest.raises(OverlappingReplacementError):
		render("abcdef", [Replacement(0, 3), Replacement(2, 4)])
