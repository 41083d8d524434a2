"""
srclinks: render JavaScript/TypeScript source as cross-referenced HTML.

Subpackages:
  - core: spans, diagnostics, output tokens and HTML escaping
  - parser: tree-sitter reader and the parent-linked syntax tree
  - checker: binder, scopes and the built-in library declarations
  - xref: classification, anchor ids and the replacement collector
"""

from __future__ import annotations

from .annotate import AnnotateResult, annotate, annotate_source
from .config import Config, ConfigError, load_config
from .parser import SourceParseError, parse_source

__version__ = "0.1.0"

__all__ = [
	"AnnotateResult",
	"Config",
	"ConfigError",
	"SourceParseError",
	"annotate",
	"annotate_source",
	"load_config",
	"parse_source",
]
