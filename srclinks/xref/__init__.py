"""
srclinks.xref: the cross-reference engine.

Modules:
  - statements: enclosing statement lookup
  - classify: ordered identifier classification rules
  - ids: per-pass anchor id allocation
  - remote: `module#export` links
  - markup: definition/reference/specifier fragments
  - collector: one pass producing replacements
  - render: splicing and escaping
"""

from __future__ import annotations

from .classify import Classification, Outcome, classify
from .collector import collect_replacements
from .ids import IdAllocator
from .markup import MarkupClasses
from .remote import remote_link
from .render import apply_replacements, render
from .statements import get_statement, has_module_specifier

__all__ = [
	"Classification",
	"IdAllocator",
	"MarkupClasses",
	"Outcome",
	"apply_replacements",
	"classify",
	"collect_replacements",
	"get_statement",
	"has_module_specifier",
	"remote_link",
	"render",
]
