# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from srclinks import Config, ConfigError, load_config


def _write(tmp_path: Path, obj: object) -> Path:
	path = tmp_path / "srclinks.json"
	path.write_text(json.dumps(obj), encoding="utf-8")
	return path


def test_load_full_config(tmp_path: Path) -> None:
	path = _write(
		tmp_path,
		{
			"format": "srclinks-config",
			"version": 0,
			"definition_class": "def",
			"reference_class": "xref",
			"string_class": "str",
			"linkify": False,
			"fallback_on_parse_error": True,
		},
	)
	config = load_config(path)
	assert config == Config("def", "xref", "str", False, True)
	classes = config.markup_classes()
	assert (classes.definition, classes.reference, classes.string) == ("def", "xref", "str")


def test_defaults(tmp_path: Path) -> None:
	assert load_config(_write(tmp_path, {"format": "srclinks-config", "version": 0})) == Config()


@pytest.mark.parametrize(
	"obj",
	[
		[],
		{"format": "other", "version": 0},
		{"format": "srclinks-config", "version": 1},
		{"format": "srclinks-config", "version": 0, "colour": "red"},
		{"format": "srclinks-config", "version": 0, "linkify": "yes"},
		{"format": "srclinks-config", "version": 0, "reference_class": ""},
	],
)
def test_invalid_configs(tmp_path: Path, obj: object) -> None:
	with pytest.raises(ConfigError):
		load_config(_write(tmp_path, obj))


def test_unreadable_and_malformed_files(tmp_path: Path) -> None:
	with pytest.raises(ConfigError):
		load_config(tmp_path / "missing.json")
	bad = tmp_path / "bad.json"
	bad.write_text("{not json", encoding="utf-8")
	with pytest.raises(ConfigError) as excinfo:
		load_config(bad)
	assert isinstance(excinfo.value, ValueError)
	assert excinfo.value.path == bad
