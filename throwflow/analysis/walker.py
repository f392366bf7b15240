# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Traversal driver for the throw analysis.

The walker visits every function-like scope of a program (functions, methods,
closures) and the top-level script, building the ancestor chain as it
descends. Nodes are dispatched post-order: a node's handler runs after all of
its children have been visited. Closures start a fresh scope with an empty
chain; `try` blocks around a closure expression do not guard the closure body.

Sites outside a function-like scope (top-level statements) are traversed so
their closures are found, but no handler runs for them.
"""

from __future__ import annotations

from typing import Mapping, Optional

from throwflow.codebase import CallableEntity, FunctionScope
from throwflow.parser import ast as A
from throwflow.parser.visit import iter_children

from .context import AnalysisContext
from .scope_chain import ROOT, HandlerScope, ScopeChain, push
from .throw_checks import Site, SiteHandler


class ScopeWalker:
	def __init__(self, ctx: AnalysisContext, handlers: Mapping[type, SiteHandler]) -> None:
		self.ctx = ctx
		self.handlers = handlers

	def walk_program(self, program: A.Program) -> None:
		for cdef in program.classes:
			for mdef in cdef.methods:
				self._walk_definition(mdef)
		for fdef in program.functions:
			self._walk_definition(fdef)
		if program.statements:
			script = FunctionScope.for_script(program.statements)
			for stmt in program.statements:
				self._visit(stmt, script, ROOT)

	def _walk_definition(self, node: A.FunctionDef) -> None:
		entity = self.ctx.codebase.entity_for(node)
		if entity is None or entity.is_abstract:
			return
		self.walk_function(entity)

	def walk_function(self, entity: CallableEntity, parent: Optional[FunctionScope] = None) -> None:
		if entity.body is None:
			return
		scope = FunctionScope.for_entity(entity, parent)
		self._visit(entity.body, scope, ROOT)
	def _visit(self, node: object, scope: FunctionScope, chain: ScopeChain) -> None:
		if isinstance(node, A.Closure):
			entity = self.ctx.codebase.entity_for(node)
			if entity is not None:
				self.walk_function(entity, parent=scope)
			return
		marker = HandlerScope(node) if isinstance(node, A.TryStmt) else node
		inner = push(chain, marker)
		for child in iter_children(node):
			self._visit(child, scope, inner)
		handler = self.handlers.get(type(node))
		if handler is not None and scope.is_function_like:
			handler(self.ctx, node, Site(node=node, scope=scope, chain=chain))


__all__ = ["ScopeWalker"]
