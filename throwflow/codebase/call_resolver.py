# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Call-target resolution for ordinary calls, method calls and static calls.

Resolution never raises for source-level problems. It returns a Resolution
value: either one or more candidate callables, or an AbstainReason saying why
no target could be determined. Callers branch on the value.

Rules:
  - ordinary call `f()`: a local bound to closures yields every bound closure;
    `(fn () {...})()` yields the closure; a global function yields itself;
    an unknown name is NOT_FOUND; any other callee shape is UNRESOLVABLE.
  - method call `r.m()`: receiver type unknown is UNRESOLVABLE; receivers that
    are not declared classes, a missing method, or a static method reached
    through an instance are DEFERRED_TO_OTHER_PASS (undeclared-class /
    undeclared-method checks own those). First receiver class (by name) that
    has the method wins.
  - static call `T::m()`: `self`/`static`/`parent` resolve against the
    enclosing class. Unknown class or method is NOT_FOUND. In forgiving mode
    instance methods are accepted and interface ambiguity picks the first
    declaration; strict mode reports DEFERRED_TO_OTHER_PASS / AMBIGUOUS.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional, Tuple

from throwflow.parser import ast as A

from .codebase import CodeBase
from .entities import CallableEntity
from .scope import FunctionScope

if TYPE_CHECKING:
	from .infer import TypeInferrer


class AbstainReason(Enum):
	NOT_FOUND = auto()
	AMBIGUOUS = auto()
	DEFERRED_TO_OTHER_PASS = auto()
	UNRESOLVABLE = auto()


@dataclass(frozen=True)
class Resolution:
	candidates: Tuple[CallableEntity, ...] = ()
	reason: Optional[AbstainReason] = None
	detail: str = ""

	@property
	def ok(self) -> bool:
		return self.reason is None

	@classmethod
	def found(cls, *candidates: CallableEntity) -> "Resolution":
		return cls(candidates=tuple(candidates))

	@classmethod
	def abstain(cls, reason: AbstainReason, detail: str = "") -> "Resolution":
		return cls(reason=reason, detail=detail)


class CallResolver:
	def __init__(self, codebase: CodeBase, inferrer: "TypeInferrer") -> None:
		self.codebase = codebase
		self.inferrer = inferrer

	def resolve_call(self, call: A.Call, scope: FunctionScope) -> Resolution:
		func = call.func
		if isinstance(func, A.Closure):
			entity = self.codebase.entity_for(func)
			if entity is None:
				return Resolution.abstain(AbstainReason.UNRESOLVABLE, "closure not registered")
			return Resolution.found(entity)
		if not isinstance(func, A.Name):
			return Resolution.abstain(AbstainReason.UNRESOLVABLE, "callee is not a name")
		binding = scope.lookup(func.ident)
		if binding is not None:
			closures = [
				self.codebase.entity_for(v) for v in binding.values if isinstance(v, A.Closure)
			]
			closures = [c for c in closures if c is not None]
			if closures:
				return Resolution.found(*closures)
			return Resolution.abstain(AbstainReason.UNRESOLVABLE, f"local '{func.ident}' is not a known closure")
		entity = self.codebase.function(func.ident)
		if entity is None:
			return Resolution.abstain(AbstainReason.NOT_FOUND, f"undeclared function {func.ident}")
		return Resolution.found(entity)

	def resolve_method(
		self,
		call: A.MethodCall,
		method_name: str,
		scope: FunctionScope,
		is_static: bool = False,
	) -> Resolution:
		receiver_types = self.inferrer.infer_expr_types(call.receiver, scope)
		if not receiver_types:
			return Resolution.abstain(AbstainReason.UNRESOLVABLE, "cannot infer receiver type")
		known = [t for t in receiver_types if self.codebase.class_info(t.name) is not None]
		if not known:
			return Resolution.abstain(
				AbstainReason.DEFERRED_TO_OTHER_PASS, f"undeclared class {receiver_types}"
			)
		for t in known:
			found = self.codebase.lookup_method(t.name, method_name)
			if not found:
				continue
			method = found[0]
			if method.is_static and not is_static:
				return Resolution.abstain(
					AbstainReason.DEFERRED_TO_OTHER_PASS,
					f"static method {method.representation()} called on an instance",
				)
			return Resolution.found(method)
		return Resolution.abstain(
			AbstainReason.DEFERRED_TO_OTHER_PASS, f"undeclared method {receiver_types}::{method_name}"
		)

	def resolve_static(self, call: A.StaticCall, scope: FunctionScope, forgiving: bool = True) -> Resolution:
		class_name = self._static_class_name(call.class_name, scope)
		if class_name is None or self.codebase.class_info(class_name) is None:
			return Resolution.abstain(AbstainReason.NOT_FOUND, f"undeclared class {call.class_name}")
		found = self.codebase.lookup_method(class_name, call.method)
		if not found:
			return Resolution.abstain(AbstainReason.NOT_FOUND, f"undeclared method {class_name}::{call.method}")
		if len(found) > 1 and not forgiving:
			names = ", ".join(m.representation() for m in found)
			return Resolution.abstain(AbstainReason.AMBIGUOUS, f"ambiguous static target: {names}")
		method = found[0]
		if not method.is_static and not forgiving:
			return Resolution.abstain(
				AbstainReason.DEFERRED_TO_OTHER_PASS,
				f"instance method {method.representation()} called statically",
			)
		return Resolution.found(method)

	def _static_class_name(self, name: str, scope: FunctionScope) -> Optional[str]:
		if name in ("self", "static"):
			return scope.class_name
		if name == "parent":
			if scope.class_name is None:
				return None
			info = self.codebase.class_info(scope.class_name)
			return info.parent if info is not None else None
		return name


__all__ = ["AbstainReason", "Resolution", "CallResolver"]
