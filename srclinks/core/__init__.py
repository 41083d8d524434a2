"""
srclinks.core: shared data types used across the parser, checker and xref passes.

Modules:
  - span: source spans (offsets + line/column)
  - diagnostics: Diagnostic records collected per pass
  - tokens: output tokens and text replacements
  - html: markupsafe escaping and URL linkification
"""

__all__ = [
	"diagnostics",
	"html",
	"span",
	"tokens",
]
