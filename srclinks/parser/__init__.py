"""
srclinks parser: tree-sitter based reader for JavaScript/TypeScript modules
plus the parent-linked syntax tree it produces.
"""

from __future__ import annotations

from .ast import Node, NodeKind, SourceFile, ancestors, iter_nodes, source_file_of, walk
from .parser import SourceParseError, parse_source

__all__ = [
	"Node",
	"NodeKind",
	"SourceFile",
	"SourceParseError",
	"ancestors",
	"iter_nodes",
	"parse_source",
	"source_file_of",
	"walk",
]
