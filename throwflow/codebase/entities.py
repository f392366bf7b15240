# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Callable and class entities recorded by the CodeBase.

A CallableEntity owns the declared exception contract of one function, method,
static method or closure. An empty `throws` set means "nothing declared".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional

from throwflow.core.type_set import Type, TypeSet
from throwflow.parser import ast as A


class CallableKind(Enum):
	FUNCTION = auto()
	METHOD = auto()
	STATIC_METHOD = auto()
	CLOSURE = auto()


@dataclass(eq=False)
class CallableEntity:
	name: str
	kind: CallableKind
	throws: TypeSet
	node: A.FunctionLike
	returns: Optional[Type] = None
	owner: Optional[str] = None
	file: Optional[str] = None

	@property
	def is_static(self) -> bool:
		return self.kind is CallableKind.STATIC_METHOD

	@property
	def is_abstract(self) -> bool:
		return isinstance(self.node, A.FunctionDef) and self.node.body is None

	@property
	def body(self) -> Optional[A.Block]:
		return self.node.body

	def representation(self) -> str:
		"""Name used in diagnostics: `f`, `Class::m` or `{closure@line}`."""
		if self.kind is CallableKind.CLOSURE:
			return f"{{closure@{self.node.loc.line}}}"
		if self.owner is not None:
			return f"{self.owner}::{self.name}"
		return self.name

	def __repr__(self) -> str:
		return f"CallableEntity({self.representation()}, throws={self.throws})"


@dataclass
class ClassInfo:
	name: str
	parent: Optional[str] = None
	interfaces: List[str] = field(default_factory=list)
	is_interface: bool = False
	methods: Dict[str, CallableEntity] = field(default_factory=dict)
	file: Optional[str] = None


__all__ = ["CallableKind", "CallableEntity", "ClassInfo"]
