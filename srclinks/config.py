# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Annotation settings and the JSON config file loader.

Format (pinned for v0, JSON):
{
  "format": "srclinks-config",
  "version": 0,
  "definition_class": "definition",   // optional
  "reference_class": "ref",           // optional
  "string_class": "hljs-string",      // optional
  "linkify": true,                    // optional
  "fallback_on_parse_error": false    // optional
}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from srclinks.xref.markup import MarkupClasses

CONFIG_FORMAT = "srclinks-config"
CONFIG_VERSION = 0


class ConfigError(ValueError):
	"""Raised for unreadable or invalid config files."""

	def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
		super().__init__(f"{path}: {message}" if path is not None else message)
		self.path = path


@dataclass(frozen=True)
class Config:
	definition_class: str = "definition"
	reference_class: str = "ref"
	string_class: str = "hljs-string"
	linkify: bool = True
	# Render unparsable files as escaped plain text instead of failing.
	fallback_on_parse_error: bool = False

	def markup_classes(self) -> MarkupClasses:
		return MarkupClasses(
			definition=self.definition_class,
			reference=self.reference_class,
			string=self.string_class,
		)


_FIELD_TYPES: dict[str, type] = {
	f.name: (bool if f.name in ("linkify", "fallback_on_parse_error") else str) for f in fields(Config)
}


def config_from_mapping(obj: Mapping[str, Any], *, path: Optional[Path] = None) -> Config:
	if obj.get("format") != CONFIG_FORMAT or obj.get("version") != CONFIG_VERSION:
		raise ConfigError("unsupported config format/version", path=path)
	values: dict[str, Any] = {}
	for key, value in obj.items():
		if key in ("format", "version"):
			continue
		expected = _FIELD_TYPES.get(key)
		if expected is None:
			raise ConfigError(f"unknown config key {key!r}", path=path)
		if not isinstance(value, expected):
			raise ConfigError(f"config key {key!r} must be a {expected.__name__}", path=path)
		if expected is str and not value:
			raise ConfigError(f"config key {key!r} must not be empty", path=path)
		values[key] = value
	return Config(**values)


def load_config(path: Path) -> Config:
	"""Load a config file; raises ConfigError (a ValueError) when invalid."""
	try:
		obj = json.loads(path.read_text(encoding="utf-8"))
	except OSError as err:
		raise ConfigError(f"cannot read config: {err.strerror or err}", path=path) from err
	except json.JSONDecodeError as err:
		raise ConfigError(f"invalid JSON at line {err.lineno}: {err.msg}", path=path) from err
	if not isinstance(obj, dict):
		raise ConfigError("config must be a JSON object", path=path)
	return config_from_mapping(obj, path=path)


__all__ = ["CONFIG_FORMAT", "CONFIG_VERSION", "Config", "ConfigError", "config_from_mapping", "load_config"]
