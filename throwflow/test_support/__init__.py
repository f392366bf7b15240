# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for tests that need a parsed codebase or analysis results.

These avoid re-spelling the parse -> CodeBase -> analyzer plumbing in every
test and give compact views of diagnostics (code + args) for assertions.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from throwflow.analysis import AnalysisContext, AnalysisSession, IgnoreList, ThrowAnalyzer
from throwflow.codebase import CodeBase, FunctionScope
from throwflow.config import AnalyzerConfig
from throwflow.core.diagnostics import Diagnostic
from throwflow.parser import ast as A
from throwflow.parser import parse_program


def make_config(recursive: bool = False, ignored: Sequence[str] = ()) -> AnalyzerConfig:
	return AnalyzerConfig(
		warn_about_undocumented_exceptions_thrown_by_invoked_functions=recursive,
		exception_classes_with_optional_throws=tuple(ignored),
	)


def analyze(
	source: str,
	recursive: bool = False,
	ignored: Sequence[str] = (),
	session: Optional[AnalysisSession] = None,
) -> List[Diagnostic]:
	"""Parse one source, build its codebase and run a (fresh or given) session."""
	program = parse_program(source, path="test.tf")
	codebase = CodeBase.from_programs([program])
	if session is None:
		session = AnalysisSession(make_config(recursive=recursive, ignored=ignored))
	return ThrowAnalyzer(session).analyze(codebase, [program])


def summarize(diagnostics: Iterable[Diagnostic]) -> List[Tuple[Optional[str], Tuple[str, ...]]]:
	"""(code, args) pairs, in emission order."""
	return [(d.code, d.args) for d in diagnostics]


def build_codebase(source: str) -> Tuple[A.Program, CodeBase]:
	program = parse_program(source, path="test.tf")
	return program, CodeBase.from_programs([program])


def build_context(source: str, ignored: Sequence[str] = ()) -> Tuple[A.Program, AnalysisContext]:
	program, codebase = build_codebase(source)
	return program, AnalysisContext.for_codebase(codebase, IgnoreList(ignored))


def scope_of(codebase: CodeBase, name: str, owner: Optional[str] = None) -> FunctionScope:
	"""FunctionScope for a declared function (or `owner::name` method)."""
	if owner is None:
		entity = codebase.function(name)
	else:
		info = codebase.class_info(owner)
		entity = info.methods.get(name) if info is not None else None
	if entity is None:
		raise KeyError(name if owner is None else f"{owner}::{name}")
	return FunctionScope.for_entity(entity)


def find_nodes(root: object, kind: type) -> List[object]:
	"""All nodes of `kind` under `root`, including inside nested closures."""
	from throwflow.parser.visit import iter_children

	out: List[object] = []
	stack = [root]
	while stack:
		cur = stack.pop()
		if isinstance(cur, kind):
			out.append(cur)
		stack.extend(reversed(list(iter_children(cur))))
	return out


__all__ = [
	"make_config",
	"analyze",
	"summarize",
	"build_codebase",
	"build_context",
	"scope_of",
	"find_nodes",
]
