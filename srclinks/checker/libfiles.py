# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Bundled built-in library sources.

Library files are parsed once per process and shared; binding them is done
per `Checker`, so cached trees are never mutated.
"""

from __future__ import annotations

import functools
from pathlib import Path

from srclinks.parser import SourceFile, parse_source

_LIB_DIR = Path(__file__).with_name("lib")
DEFAULT_LIB_NAMES = ("prelude.d.ts",)
# File names of library sources start with this prefix.
LIB_PREFIX = "/@lib/"


@functools.lru_cache(maxsize=None)
def load_lib_file(name: str) -> SourceFile:
	"""Parse `lib/<name>`; raises FileNotFoundError for unknown names."""
	text = (_LIB_DIR / name).read_text(encoding="utf-8")
	return parse_source(text, f"{LIB_PREFIX}{name}", is_default_lib=True)


def default_lib_files() -> list[SourceFile]:
	return [load_lib_file(name) for name in DEFAULT_LIB_NAMES]


__all__ = ["DEFAULT_LIB_NAMES", "LIB_PREFIX", "default_lib_files", "load_lib_file"]
