# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Throw-site and call-site checks against declared `throws` contracts.

Each handler receives one Site (node + enclosing function-like scope + ancestor
chain), computes the exception types that can escape it, removes the ones an
enclosing catch intercepts, and compares the rest with the enclosing function's
contract:

  - nothing declared            -> ThrowTypeAbsent[ForCall]
  - declared but not covering   -> ThrowTypeMismatch[ForCall]
  - covered                     -> no diagnostic

Types covered by the configured ignore list are never reported.

Two handler tables exist. THROW_HANDLERS only checks `throw` statements;
RECURSIVE_HANDLERS also checks ordinary, method and static calls using the
callee's declared contract as the candidate set. `handlers_for(config)` picks
one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from throwflow.codebase import CallableEntity, FunctionScope, Resolution
from throwflow.config import AnalyzerConfig
from throwflow.core.issues import IssueKind
from throwflow.core.type_set import TypeSet
from throwflow.parser import ast as A

from .caught import without_caught
from .context import AnalysisContext
from .scope_chain import ScopeChain

logger = logging.getLogger(__name__)

SiteNode = Union[A.ThrowStmt, A.Call, A.MethodCall, A.StaticCall]


@dataclass(frozen=True)
class Site:
	node: SiteNode
	scope: FunctionScope
	chain: ScopeChain

	@property
	def function(self) -> CallableEntity:
		entity = self.scope.entity
		if entity is None:
			raise RuntimeError("site is not inside a function-like scope")
		return entity


# Handlers receive the dispatched node with its concrete type, plus the Site.
SiteHandler = Callable[[AnalysisContext, Any, Site], None]


def warn_about_possibly_thrown_types(
	ctx: AnalysisContext,
	site: Site,
	types: TypeSet,
	callee: Optional[CallableEntity] = None,
) -> None:
	"""Compare surviving types with the enclosing contract and report gaps."""
	analyzed = site.function
	contract = analyzed.throws
	fn_repr = analyzed.representation()
	callee_args = (callee.representation(),) if callee is not None else ()
	for t in types:
		expanded = ctx.expand(t)
		if not ctx.ignore_list.should_report(expanded, ctx):
			continue
		if not contract:
			kind = IssueKind.THROW_TYPE_ABSENT_FOR_CALL if callee else IssueKind.THROW_TYPE_ABSENT
			ctx.emit(kind, (fn_repr, str(t)) + callee_args, site.node.loc, analyzed.file)
			continue
		if not expanded.covers(contract, ctx.can_cast):
			kind = IssueKind.THROW_TYPE_MISMATCH_FOR_CALL if callee else IssueKind.THROW_TYPE_MISMATCH
			ctx.emit(kind, (fn_repr, str(t)) + callee_args + (str(contract),), site.node.loc, analyzed.file)


def check_throw(ctx: AnalysisContext, node: A.ThrowStmt, site: Site) -> None:
	thrown = ctx.inferrer.infer_expr_types(node.value, site.scope)
	if not thrown:
		# Unknown thrown type is not an error.
		logger.debug("%s: unknown thrown type at line %d", site.function.representation(), node.loc.line)
		return
	escaping = without_caught(thrown, site.chain, ctx)
	if not escaping:
		return
	warn_about_possibly_thrown_types(ctx, site, escaping)


def _check_resolved_calls(ctx: AnalysisContext, site: Site, resolution: Resolution) -> None:
	if not resolution.ok:
		logger.debug(
			"%s: abstaining at line %d (%s: %s)",
			site.function.representation(),
			site.node.loc.line,
			resolution.reason.name if resolution.reason else "?",
			resolution.detail,
		)
		return
	for callee in resolution.candidates:
		escaping = without_caught(callee.throws, site.chain, ctx)
		if escaping:
			warn_about_possibly_thrown_types(ctx, site, escaping, callee=callee)


def check_call(ctx: AnalysisContext, node: A.Call, site: Site) -> None:
	_check_resolved_calls(ctx, site, ctx.inferrer.calls.resolve_call(node, site.scope))


def check_method_call(ctx: AnalysisContext, node: A.MethodCall, site: Site) -> None:
	method_name = node.method
	if not isinstance(method_name, str):
		method_name = ctx.inferrer.any_string_literal(method_name, site.scope)
		if method_name is None:
			logger.debug("%s: dynamic method name at line %d", site.function.representation(), node.loc.line)
			return
	resolution = ctx.inferrer.calls.resolve_method(node, method_name, site.scope, is_static=False)
	_check_resolved_calls(ctx, site, resolution)


def check_static_call(ctx: AnalysisContext, node: A.StaticCall, site: Site) -> None:
	resolution = ctx.inferrer.calls.resolve_static(node, site.scope, forgiving=True)
	_check_resolved_calls(ctx, site, resolution)


THROW_HANDLERS: Mapping[type, SiteHandler] = {
	A.ThrowStmt: check_throw,
}

RECURSIVE_HANDLERS: Mapping[type, SiteHandler] = {
	**THROW_HANDLERS,
	A.Call: check_call,
	A.MethodCall: check_method_call,
	A.StaticCall: check_static_call,
}


def handlers_for(config: AnalyzerConfig) -> Mapping[type, SiteHandler]:
	return RECURSIVE_HANDLERS if config.recursive else THROW_HANDLERS


__all__ = [
	"Site",
	"SiteHandler",
	"warn_about_possibly_thrown_types",
	"check_throw",
	"check_call",
	"check_method_call",
	"check_static_call",
	"THROW_HANDLERS",
	"RECURSIVE_HANDLERS",
	"handlers_for",
]
