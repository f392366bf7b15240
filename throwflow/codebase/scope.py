# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lexical scopes for name lookup during inference and call resolution.

One FunctionScope exists per function-like body (function, method, closure),
plus a script scope for top-level statements. Bindings are flow-insensitive:
every `let`/assignment to a name anywhere in the body contributes a value.
Closures see their enclosing scopes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from throwflow.parser import ast as A
from throwflow.parser.visit import walk_scope

from .entities import CallableEntity


@dataclass
class NameBinding:
	"""
	What a name refers to: a typed parameter or local values.

	`scope` is the scope that declares the name; bound values are inferred
	there, not in the scope the lookup started from.
	"""

	param_type: Optional[str] = None
	is_param: bool = False
	values: List[A.Expr] = field(default_factory=list)
	scope: Optional["FunctionScope"] = None


@dataclass
class FunctionScope:
	entity: Optional[CallableEntity]  # None for top-level script code
	class_name: Optional[str] = None
	params: Dict[str, Optional[str]] = field(default_factory=dict)
	bindings: Dict[str, List[A.Expr]] = field(default_factory=dict)
	parent: Optional["FunctionScope"] = None

	@property
	def is_function_like(self) -> bool:
		return self.entity is not None

	@classmethod
	def for_entity(cls, entity: CallableEntity, parent: Optional["FunctionScope"] = None) -> "FunctionScope":
		node = entity.node
		class_name = entity.owner
		if class_name is None and parent is not None:
			class_name = parent.class_name
		scope = cls(
			entity=entity,
			class_name=class_name,
			params={p.name: p.type_name for p in node.params},
			parent=parent,
		)
		if node.body is not None:
			scope._collect_bindings([node.body])
		return scope

	@classmethod
	def for_script(cls, statements: Sequence[A.Stmt]) -> "FunctionScope":
		scope = cls(entity=None)
		scope._collect_bindings(statements)
		return scope

	def _collect_bindings(self, roots: Sequence[object]) -> None:
		for root in roots:
			for node in walk_scope(root):
				if isinstance(node, (A.LetStmt, A.AssignStmt)):
					self.bindings.setdefault(node.name, []).append(node.value)

	def lookup(self, name: str) -> Optional[NameBinding]:
		scope: Optional[FunctionScope] = self
		while scope is not None:
			if name in scope.params:
				return NameBinding(param_type=scope.params[name], is_param=True, scope=scope)
			if name in scope.bindings:
				return NameBinding(values=list(scope.bindings[name]), scope=scope)
			scope = scope.parent
		return None


__all__ = ["FunctionScope", "NameBinding"]
