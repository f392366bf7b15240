# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Expression type inference over the CodeBase.

Only what the throw analysis needs is modelled: `new T()` is `T`, `this` is
the enclosing class, typed parameters are their annotation, locals are the
union of everything bound to them, and calls are the union of their resolved
targets' declared return types. Anything else (including catch binders) is
the empty set, which callers treat as "unknown".
"""

from __future__ import annotations

from typing import Callable, Dict, FrozenSet, Optional, Tuple

from throwflow.core.type_set import EMPTY, Type, TypeSet, union_all
from throwflow.parser import ast as A

from .call_resolver import CallResolver, Resolution
from .codebase import CodeBase
from .scope import FunctionScope

_Visiting = FrozenSet[Tuple[int, str]]

_BOOL_OPS = {"==", "!=", "<", ">", "<=", ">=", "&&", "||"}


def _literal_type(value: object) -> TypeSet:
	if value is None:
		return TypeSet.of("null")
	if isinstance(value, bool):
		return TypeSet.of("bool")
	if isinstance(value, int):
		return TypeSet.of("int")
	if isinstance(value, float):
		return TypeSet.of("float")
	return TypeSet.of("string")


class TypeInferrer:
	def __init__(self, codebase: CodeBase) -> None:
		self.codebase = codebase
		self.calls = CallResolver(codebase, self)
		self._dispatch: Dict[type, Callable[[A.Expr, FunctionScope, _Visiting], TypeSet]] = {
			A.Name: self._infer_name,
			A.This: self._infer_this,
			A.Literal: lambda e, s, v: _literal_type(e.value),
			A.New: lambda e, s, v: TypeSet.of(e.class_name),
			A.Closure: lambda e, s, v: TypeSet.of("Closure"),
			A.Call: self._infer_call,
			A.MethodCall: self._infer_method_call,
			A.StaticCall: self._infer_static_call,
			A.Binary: self._infer_binary,
			A.Not: lambda e, s, v: TypeSet.of("bool"),
		}

	def infer_expr_types(self, expr: A.Expr, scope: FunctionScope) -> TypeSet:
		return self._infer(expr, scope, frozenset())

	def infer_catch_clause_types(self, clause: A.CatchClause) -> TypeSet:
		return TypeSet.from_iter(clause.types)

	def any_string_literal(self, expr: A.Expr, scope: FunctionScope) -> Optional[str]:
		"""
		Fold `expr` to a single string if it can only ever be one literal.

		Handles literals, locals bound only to one literal value, and `+`
		concatenation of those.
		"""
		return self._fold_string(expr, scope, frozenset())

	# ---- internals --------------------------------------------------------

	def _infer(self, expr: A.Expr, scope: FunctionScope, visiting: _Visiting) -> TypeSet:
		fn = self._dispatch.get(type(expr))
		if fn is None:
			return EMPTY
		return fn(expr, scope, visiting)

	def _infer_name(self, expr: A.Name, scope: FunctionScope, visiting: _Visiting) -> TypeSet:
		binding = scope.lookup(expr.ident)
		if binding is None:
			return EMPTY
		if binding.is_param:
			return TypeSet.of(binding.param_type) if binding.param_type else EMPTY
		owner = binding.scope or scope
		key = (id(owner), expr.ident)
		if key in visiting:
			return EMPTY
		inner = visiting | {key}
		return union_all(self._infer(v, owner, inner) for v in binding.values)

	def _infer_this(self, expr: A.This, scope: FunctionScope, visiting: _Visiting) -> TypeSet:
		if scope.class_name is None:
			return EMPTY
		return TypeSet.of(scope.class_name)

	def _returns_of(self, resolution: Resolution) -> TypeSet:
		if not resolution.ok:
			return EMPTY
		return TypeSet.from_iter(c.returns for c in resolution.candidates if c.returns is not None)

	def _infer_call(self, expr: A.Call, scope: FunctionScope, visiting: _Visiting) -> TypeSet:
		return self._returns_of(self.calls.resolve_call(expr, scope))

	def _infer_method_call(self, expr: A.MethodCall, scope: FunctionScope, visiting: _Visiting) -> TypeSet:
		name = expr.method if isinstance(expr.method, str) else self.any_string_literal(expr.method, scope)
		if name is None:
			return EMPTY
		return self._returns_of(self.calls.resolve_method(expr, name, scope))

	def _infer_static_call(self, expr: A.StaticCall, scope: FunctionScope, visiting: _Visiting) -> TypeSet:
		return self._returns_of(self.calls.resolve_static(expr, scope))

	def _infer_binary(self, expr: A.Binary, scope: FunctionScope, visiting: _Visiting) -> TypeSet:
		if expr.op in _BOOL_OPS:
			return TypeSet.of("bool")
		left = self._infer(expr.left, scope, visiting)
		right = self._infer(expr.right, scope, visiting)
		if expr.op == "+" and Type("string") in left and Type("string") in right:
			return TypeSet.of("string")
		if left == right == TypeSet.of("int"):
			return left
		return EMPTY

	def _fold_string(self, expr: A.Expr, scope: FunctionScope, visiting: _Visiting) -> Optional[str]:
		if isinstance(expr, A.Literal):
			return expr.value if isinstance(expr.value, str) else None
		if isinstance(expr, A.Binary) and expr.op == "+":
			left = self._fold_string(expr.left, scope, visiting)
			right = self._fold_string(expr.right, scope, visiting)
			if left is None or right is None:
				return None
			return left + right
		if isinstance(expr, A.Name):
			binding = scope.lookup(expr.ident)
			if binding is None or binding.is_param or not binding.values:
				return None
			owner = binding.scope or scope
			key = (id(owner), expr.ident)
			if key in visiting:
				return None
			folded = {self._fold_string(v, owner, visiting | {key}) for v in binding.values}
			if len(folded) != 1:
				return None
			return folded.pop()
		return None


__all__ = ["TypeInferrer"]
