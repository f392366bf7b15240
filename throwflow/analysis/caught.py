# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Caught-type filter: drop candidate exception types that an enclosing catch
clause would intercept.

A type is caught when its expansion is covered by any clause of any enclosing
handler. Clause order and first-match semantics are not modelled, so an
earlier narrower clause never "hides" a later broader one.
"""

from __future__ import annotations

from typing import Protocol

from throwflow.core.type_set import Type, TypeSet
from throwflow.parser import ast as A

from .scope_chain import ScopeChain, enclosing_catch_types


class TypeServices(Protocol):
	def expand(self, t: Type) -> TypeSet: ...

	def can_cast(self, source: TypeSet, target: TypeSet) -> bool: ...

	def infer_catch_clause_types(self, clause: A.CatchClause) -> TypeSet: ...


def without_caught(candidate: TypeSet, chain: ScopeChain, types: TypeServices) -> TypeSet:
	if not candidate:
		return candidate
	working = candidate
	for caught in enclosing_catch_types(chain, types.infer_catch_clause_types):
		for t in working:
			if types.expand(t).covers(caught, types.can_cast):
				working = working.without(t)
				if not working:
					return working
	return working


__all__ = ["TypeServices", "without_caught"]
