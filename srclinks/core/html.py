# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
HTML escaping and URL linkification for raw source text.

`escape` is markupsafe's. `linkify` finds URLs with linkify-it on the raw text
and escapes the text around and inside each match, so matches never see the
entity references produced by the escaper.
"""

from __future__ import annotations

from linkify_it import LinkifyIt
from markupsafe import Markup, escape

# Only explicit schemes: schemaless matching would link property chains such
# as `res.id` (two-letter TLDs) all over source code.
_LINKIFY = LinkifyIt(options={"fuzzy_link": False, "fuzzy_email": False}).add("//", None)

_ANCHOR = Markup('<a href="{}">{}</a>')


def linkify(text: str) -> Markup:
	"""Escape raw `text`, turning URLs with an explicit scheme into `<a href>` links."""
	matches = _LINKIFY.match(text) if _LINKIFY.pretest(text) else None
	if not matches:
		return escape(text)
	out: list[str] = []
	pos = 0
	for m in matches:
		out.append(escape(text[pos : m.index]))
		out.append(_ANCHOR.format(m.url, m.text))
		pos = m.last_index
	out.append(escape(text[pos:]))
	return Markup("").join(out)


def escape_and_linkify(text: str, *, enabled: bool = True) -> Markup:
	if not enabled:
		return escape(text)
	return linkify(text)


__all__ = ["escape", "escape_and_linkify", "linkify"]
