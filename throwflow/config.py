# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Analyzer configuration.

Format (pinned for v0, JSON):
{
  "format": "throwflow-config",
  "version": 0,
  "warn_about_undocumented_exceptions_thrown_by_invoked_functions": false,
  "exception_classes_with_optional_throws": ["LogicException", "Error"]
}

Both keys are optional. Entries in the ignore list that are not strings are
rejected; empty or malformed type strings are tolerated here and skipped by
the ignore-list cache.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Optional, Tuple

CONFIG_FORMAT = "throwflow-config"
CONFIG_VERSION = 0


class ConfigError(ValueError):
	"""Raised when a configuration file is unreadable or has the wrong shape."""


@dataclass(frozen=True)
class AnalyzerConfig:
	# When set, calls propagate the callee's declared contract into the caller.
	warn_about_undocumented_exceptions_thrown_by_invoked_functions: bool = False
	# Type strings (`A` or `A | B`) that never need a `throws` declaration.
	exception_classes_with_optional_throws: Tuple[str, ...] = ()

	@property
	def recursive(self) -> bool:
		return self.warn_about_undocumented_exceptions_thrown_by_invoked_functions

	def with_overrides(
		self,
		recursive: Optional[bool] = None,
		extra_ignored: Iterable[str] = (),
	) -> "AnalyzerConfig":
		cfg = self
		if recursive is not None:
			cfg = replace(cfg, warn_about_undocumented_exceptions_thrown_by_invoked_functions=recursive)
		extra = tuple(extra_ignored)
		if extra:
			cfg = replace(cfg, exception_classes_with_optional_throws=cfg.exception_classes_with_optional_throws + extra)
		return cfg


def config_from_obj(obj: object) -> AnalyzerConfig:
	if not isinstance(obj, dict):
		raise ConfigError("config must be a JSON object")
	if obj.get("format") != CONFIG_FORMAT or obj.get("version") != CONFIG_VERSION:
		raise ConfigError("unsupported config format/version")
	recursive = obj.get("warn_about_undocumented_exceptions_thrown_by_invoked_functions", False)
	if not isinstance(recursive, bool):
		raise ConfigError("warn_about_undocumented_exceptions_thrown_by_invoked_functions must be a boolean")
	ignored = obj.get("exception_classes_with_optional_throws", [])
	if not isinstance(ignored, list) or not all(isinstance(item, str) for item in ignored):
		raise ConfigError("exception_classes_with_optional_throws must be a list of strings")
	return AnalyzerConfig(
		warn_about_undocumented_exceptions_thrown_by_invoked_functions=recursive,
		exception_classes_with_optional_throws=tuple(ignored),
	)


def load_config_json(path: Path) -> AnalyzerConfig:
	try:
		obj = json.loads(path.read_text(encoding="utf-8"))
	except OSError as err:
		raise ConfigError(f"cannot read config {path}: {err}") from err
	except json.JSONDecodeError as err:
		raise ConfigError(f"config {path} is not valid JSON: {err}") from err
	return config_from_obj(obj)


__all__ = ["AnalyzerConfig", "ConfigError", "config_from_obj", "load_config_json"]
