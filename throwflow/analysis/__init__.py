# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
throwflow.analysis: exception-flow checks against declared `throws` contracts.

Pipeline per site:
  walker (ancestor chain) -> handler table -> caught-type filter
  -> ignore list -> contract comparison -> Diagnostic

Public API:
  - AnalysisSession / ThrowAnalyzer / analyze_programs
  - without_caught, enclosing_catch_types, HandlerScope
  - IgnoreList
"""

from .analyzer import AnalysisSession, ThrowAnalyzer, analyze_programs
from .caught import TypeServices, without_caught
from .context import AnalysisContext
from .ignore_list import IgnoreList
from .scope_chain import HandlerScope, ScopeChain, enclosing_catch_types, enclosing_handlers, push
from .throw_checks import RECURSIVE_HANDLERS, THROW_HANDLERS, Site, handlers_for
from .walker import ScopeWalker

__all__ = [
	"AnalysisSession",
	"ThrowAnalyzer",
	"analyze_programs",
	"TypeServices",
	"without_caught",
	"AnalysisContext",
	"IgnoreList",
	"HandlerScope",
	"ScopeChain",
	"enclosing_catch_types",
	"enclosing_handlers",
	"push",
	"RECURSIVE_HANDLERS",
	"THROW_HANDLERS",
	"Site",
	"handlers_for",
	"ScopeWalker",
]
