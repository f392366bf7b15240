# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-run analysis context handed to every site handler.

Bundles the codebase-backed type services, the session's ignore list and the
diagnostic sink.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from throwflow.codebase import CodeBase, TypeInferrer
from throwflow.core.diagnostics import Diagnostic
from throwflow.core.issues import IssueKind, render
from throwflow.core.span import Span
from throwflow.core.type_set import Type, TypeSet
from throwflow.parser import ast as A

from .ignore_list import IgnoreList


@dataclass
class AnalysisContext:
	codebase: CodeBase
	inferrer: TypeInferrer
	ignore_list: IgnoreList
	diagnostics: List[Diagnostic] = field(default_factory=list)

	@classmethod
	def for_codebase(cls, codebase: CodeBase, ignore_list: IgnoreList) -> "AnalysisContext":
		return cls(codebase=codebase, inferrer=TypeInferrer(codebase), ignore_list=ignore_list)

	def expand(self, t: Type) -> TypeSet:
		return self.codebase.expand(t)

	def can_cast(self, source: TypeSet, target: TypeSet) -> bool:
		return self.codebase.can_cast(source, target)

	def infer_catch_clause_types(self, clause: A.CatchClause) -> TypeSet:
		return self.inferrer.infer_catch_clause_types(clause)

	def emit(self, kind: IssueKind, args: Tuple[str, ...], loc: A.Located, file: Optional[str]) -> None:
		self.diagnostics.append(
			Diagnostic(
				message=render(kind, args),
				code=kind.value,
				phase="throws",
				severity="warning",
				span=Span.from_loc(loc, file=file),
				args=args,
			)
		)


__all__ = ["AnalysisContext"]
