# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
IgnoreList: lazy parsing, caching, reset and malformed-entry handling.
"""

from __future__ import annotations

import logging
import threading

from throwflow.analysis import IgnoreList
from throwflow.codebase import CodeBase
from throwflow.core.type_set import EMPTY, Type, TypeSet
from throwflow.parser import parse_type_union


class _CountingParse:
	def __init__(self) -> None:
		self.calls = 0
		self._lock = threading.Lock()

	def __call__(self, text: str):
		with self._lock:
			self.calls += 1
		return parse_type_union(text)


def test_parses_lazily_and_caches():
	parse = _CountingParse()
	ignore = IgnoreList(["LogicException | Error", "AppError"], parse=parse)
	assert not ignore.is_loaded
	assert parse.calls == 0
	assert ignore.types() == TypeSet.of("LogicException", "Error", "AppError")
	assert ignore.is_loaded
	ignore.types()
	assert parse.calls == 2


def test_reset_forces_recalculation():
	parse = _CountingParse()
	ignore = IgnoreList(["LogicException"], parse=parse)
	ignore.types()
	ignore.reset()
	assert not ignore.is_loaded
	ignore.types()
	assert parse.calls == 2


def test_reconfigure_replaces_entries():
	ignore = IgnoreList(["LogicException"])
	assert ignore.types() == TypeSet.of("LogicException")
	ignore.reconfigure(["Error"])
	assert ignore.types() == TypeSet.of("Error")


def test_empty_and_malformed_entries_are_skipped(caplog):
	ignore = IgnoreList(["", "   ", "A |", 42, "B"])
	with caplog.at_level(logging.WARNING, logger="throwflow.analysis.ignore_list"):
		assert ignore.types() == TypeSet.of("B")
	assert any("A |" in rec.getMessage() for rec in caplog.records)


def test_no_entries_means_empty_set():
	assert IgnoreList().types() == EMPTY


def test_should_report_uses_expanded_types():
	codebase = CodeBase()
	ignore = IgnoreList(["LogicException"])
	assert not ignore.should_report(codebase.expand(Type("InvalidArgumentException")), codebase)
	assert not ignore.should_report(codebase.expand(Type("LogicException")), codebase)
	assert ignore.should_report(codebase.expand(Type("RuntimeException")), codebase)
	assert IgnoreList().should_report(codebase.expand(Type("RuntimeException")), codebase)


def test_concurrent_first_use_builds_once():
	parse = _CountingParse()
	ignore = IgnoreList(["LogicException"], parse=parse)
	barrier = threading.Barrier(8)
	results = []

	def worker() -> None:
		barrier.wait()
		results.append(ignore.types())

	threads = [threading.Thread(target=worker) for _ in range(8)]
	for t in threads:
		t.start()
	for t in threads:
		t.join()
	assert parse.calls == 1
	assert len(results) == 8
	assert all(r == TypeSet.of("LogicException") for r in results)
