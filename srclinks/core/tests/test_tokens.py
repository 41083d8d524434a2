# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from srclinks.core.tokens import (
	OverlappingReplacementError,
	Replacement,
	Token,
	embed,
	safe,
	sort_replacements,
	unsafe,
)


def test_sort_orders_by_start() -> None:
	a = Replacement(5, 6, (safe(5, "b"),))
	b = Replacement(0, 2, (safe(0, "a"),))
	assert sort_replacements([a, b]) == [b, a]


def test_touching_replacements_are_allowed() -> None:
	a = Replacement(0, 3)
	b = Replacement(3, 4)
	assert sort_replacements([b, a]) == [a, b]


def test_overlap_raises() -> None:
	a = Replacement(0, 4)
	b = Replacement(2, 6)
	with pytest.raises(OverlappingReplacementError) as excinfo:
		sort_replacements([b, a])
	assert excinfo.value.first is a
	assert excinfo.value.second is b
	# Overlaps are defects, not recoverable input errors.
	assert isinstance(excinfo.value, AssertionError)


def test_invalid_replacement_span() -> None:
	with pytest.raises(ValueError):
		Replacement(4, 2)


def test_nested_content_is_stored_as_tuple() -> None:
	inner = unsafe(0, "x")
	tok = Token(0, True, [inner])
	assert tok.content == (inner,)
	assert hash(tok) == hash(Token(0, True, (inner,)))


def test_embed_normalizes_content() -> None:
	tok = safe(1, "<b>")
	assert embed(1, "x") == [unsafe(1, "x")]
	assert embed(1, tok) == [tok]
	assert embed(1, [tok, tok]) == [tok, tok]
