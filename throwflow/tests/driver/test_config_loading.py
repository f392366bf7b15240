# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Config JSON loading and validation.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from throwflow.config import AnalyzerConfig, ConfigError, config_from_obj, load_config_json


def _obj(**fields):
	return {"format": "throwflow-config", "version": 0, **fields}


def test_defaults():
	cfg = config_from_obj(_obj())
	assert cfg == AnalyzerConfig()
	assert not cfg.recursive
	assert cfg.exception_classes_with_optional_throws == ()


def test_full_config():
	cfg = config_from_obj(
		_obj(
			warn_about_undocumented_exceptions_thrown_by_invoked_functions=True,
			exception_classes_with_optional_throws=["LogicException | Error", ""],
		)
	)
	assert cfg.recursive
	# Empty strings are kept here; the ignore list skips them.
	assert cfg.exception_classes_with_optional_throws == ("LogicException | Error", "")


@pytest.mark.parametrize(
	"obj",
	[
		[],
		{"version": 0},
		{"format": "throwflow-config", "version": 1},
		_obj(warn_about_undocumented_exceptions_thrown_by_invoked_functions="yes"),
		_obj(exception_classes_with_optional_throws="LogicException"),
		_obj(exception_classes_with_optional_throws=["A", 3]),
	],
)
def test_rejects_bad_shapes(obj):
	with pytest.raises(ConfigError):
		config_from_obj(obj)


def test_config_error_is_a_value_error():
	assert issubclass(ConfigError, ValueError)


def test_load_from_file(tmp_path: Path):
	path = tmp_path / "cfg.json"
	path.write_text(json.dumps(_obj(exception_classes_with_optional_throws=["Error"])), encoding="utf-8")
	assert load_config_json(path).exception_classes_with_optional_throws == ("Error",)


def test_load_wraps_io_and_json_errors(tmp_path: Path):
	with pytest.raises(ConfigError, match="cannot read"):
		load_config_json(tmp_path / "missing.json")
	bad = tmp_path / "bad.json"
	bad.write_text("{not json", encoding="utf-8")
	with pytest.raises(ConfigError, match="not valid JSON"):
		load_config_json(bad)


def test_with_overrides():
	base = AnalyzerConfig(exception_classes_with_optional_throws=("Error",))
	assert base.with_overrides() is base
	cfg = base.with_overrides(recursive=True, extra_ignored=["LogicException"])
	assert cfg.recursive
	assert cfg.exception_classes_with_optional_throws == ("Error", "LogicException")
	assert base.with_overrides(recursive=False).recursive is False
