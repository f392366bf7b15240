# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Analyzer entry points.

AnalysisSession owns the configuration and the ignore-list cache; one session
per independent run (or per worker thread/process). ThrowAnalyzer binds a
session to the handler table its configuration selects. The table is looked up
from the session on every use, so `AnalysisSession.reconfigure()` applies to
live analyzers. `load()` resets the ignore-list cache, so reloading an analyzer
never observes a stale ignore list.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from throwflow.codebase import CodeBase
from throwflow.config import AnalyzerConfig
from throwflow.core.diagnostics import Diagnostic
from throwflow.parser import ast as A

from .context import AnalysisContext
from .ignore_list import IgnoreList
from .throw_checks import SiteHandler, handlers_for
from .walker import ScopeWalker


class AnalysisSession:
	def __init__(self, config: Optional[AnalyzerConfig] = None) -> None:
		self.config = config or AnalyzerConfig()
		self.ignore_list = IgnoreList(self.config.exception_classes_with_optional_throws)

	def reconfigure(self, config: AnalyzerConfig) -> None:
		self.config = config
		self.ignore_list.reconfigure(config.exception_classes_with_optional_throws)

	def reset(self) -> None:
		self.ignore_list.reset()


class ThrowAnalyzer:
	def __init__(self, session: Optional[AnalysisSession] = None) -> None:
		self.session = session or AnalysisSession()
		self.load()

	@property
	def handlers(self) -> Mapping[type, SiteHandler]:
		return handlers_for(self.session.config)

	def load(self) -> Mapping[type, SiteHandler]:
		self.session.reset()
		return self.handlers

	def analyze(self, codebase: CodeBase, programs: Iterable[A.Program]) -> List[Diagnostic]:
		ctx = AnalysisContext.for_codebase(codebase, self.session.ignore_list)
		walker = ScopeWalker(ctx, self.handlers)
		for program in programs:
			walker.walk_program(program)
		return ctx.diagnostics


def analyze_programs(programs: List[A.Program], config: Optional[AnalyzerConfig] = None) -> List[Diagnostic]:
	"""Build a codebase over `programs` and run a fresh analyzer on it."""
	codebase = CodeBase.from_programs(programs)
	return ThrowAnalyzer(AnalysisSession(config)).analyze(codebase, programs)


__all__ = ["AnalysisSession", "ThrowAnalyzer", "analyze_programs"]
