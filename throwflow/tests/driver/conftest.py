# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import logging

import pytest


@pytest.fixture(autouse=True)
def _isolate_cli_logging():
	"""
	`main()` installs a stderr handler on the package logger on first use.

	Drop it after each test so later tests do not write to a stream that
	capsys has already closed.
	"""
	pkg_logger = logging.getLogger("throwflow")
	before = list(pkg_logger.handlers)
	level = pkg_logger.level
	yield
	for handler in list(pkg_logger.handlers):
		if handler not in before:
			pkg_logger.removeHandler(handler)
	pkg_logger.setLevel(level)
