# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Ancestor chains and the handler scopes found on them.

A chain is an immutable tuple of markers, innermost first, from a site's
immediate parent up to the root of its function-like scope. The walker pushes
every ancestor node, except that a `try` statement is pushed as a HandlerScope
marker. Everything lexically inside the try (body, catch blocks, finally block)
sees its clauses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Tuple

from throwflow.core.type_set import TypeSet
from throwflow.parser import ast as A

logger = logging.getLogger(__name__)

ScopeChain = Tuple[object, ...]

ROOT: ScopeChain = ()


@dataclass(frozen=True, eq=False)
class HandlerScope:
	"""A `try` statement lexically enclosing the site."""

	node: A.TryStmt

	@property
	def catches(self) -> list[A.CatchClause]:
		return self.node.catches


def push(chain: ScopeChain, marker: object) -> ScopeChain:
	return (marker,) + chain


def enclosing_handlers(chain: ScopeChain) -> Iterator[HandlerScope]:
	"""Handler scopes on the chain, innermost first; other markers are skipped."""
	for marker in chain:
		if isinstance(marker, HandlerScope):
			yield marker


def enclosing_catch_types(
	chain: ScopeChain,
	infer_catch: Callable[[A.CatchClause], TypeSet],
) -> Iterator[TypeSet]:
	"""
	Yield each enclosing catch clause's caught types.

	Innermost handler first; within a handler, clauses in declaration order.
	Clauses whose type cannot be inferred are skipped.
	"""
	for handler in enclosing_handlers(chain):
		for clause in handler.catches:
			caught = infer_catch(clause)
			if not caught:
				logger.debug("skipping catch clause at line %d: unknown caught type", clause.loc.line)
				continue
			yield caught


__all__ = [
	"ScopeChain",
	"ROOT",
	"HandlerScope",
	"push",
	"enclosing_handlers",
	"enclosing_catch_types",
]
