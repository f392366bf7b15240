# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
CodeBase: every class, interface, function, method and closure seen across the
analyzed programs, plus the type-hierarchy services the throw analysis needs.

Hierarchy services:
  - expand(t): `t` plus all ancestor classes and implemented/extended
    interfaces (cycle-safe, memoized). Unknown types expand to themselves.
  - can_cast(source, target): nominal overlap between the two sets, or a
    `mixed` target. Callers pass expanded sources so this acts as a subtype
    check.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from throwflow.core.type_set import Type, TypeSet
from throwflow.parser import ast as A
from throwflow.parser.parser import parse_program
from throwflow.parser.visit import walk_scope

from .entities import CallableEntity, CallableKind, ClassInfo

logger = logging.getLogger(__name__)

MIXED = Type("mixed")

PRELUDE_SOURCE = """
interface Throwable {}
class Exception implements Throwable {}
class Error implements Throwable {}
class RuntimeException extends Exception {}
class LogicException extends Exception {}
class InvalidArgumentException extends LogicException {}
class TypeError extends Error {}
"""


class CodeBase:
	"""Declarations collected from one or more parsed programs."""

	def __init__(self, with_prelude: bool = True) -> None:
		self.classes: Dict[str, ClassInfo] = {}
		self.functions: Dict[str, CallableEntity] = {}
		self._by_node: Dict[int, CallableEntity] = {}
		self._expand_cache: Dict[Type, TypeSet] = {}
		if with_prelude:
			self.add_program(parse_program(PRELUDE_SOURCE, path="<prelude>"))

	@classmethod
	def from_programs(cls, programs: Iterable[A.Program], with_prelude: bool = True) -> "CodeBase":
		codebase = cls(with_prelude=with_prelude)
		for program in programs:
			codebase.add_program(program)
		return codebase

	# ---- collection -------------------------------------------------------

	def add_program(self, program: A.Program) -> None:
		self._expand_cache.clear()
		for cdef in program.classes:
			self._add_class(cdef, program.path)
		for fdef in program.functions:
			if fdef.name in self.functions:
				logger.debug("function %s redeclared in %s", fdef.name, program.path)
			entity = self._register(fdef, CallableKind.FUNCTION, program.path)
			self.functions[fdef.name] = entity
		for stmt in program.statements:
			self._collect_closures(stmt, program.path)

	def _add_class(self, cdef: A.ClassDef, path: Optional[str]) -> None:
		if cdef.name in self.classes:
			logger.debug("class %s redeclared in %s", cdef.name, path)
		info = ClassInfo(
			name=cdef.name,
			parent=cdef.parent,
			interfaces=list(cdef.interfaces),
			is_interface=cdef.is_interface,
			file=path,
		)
		for mdef in cdef.methods:
			kind = CallableKind.STATIC_METHOD if mdef.is_static else CallableKind.METHOD
			info.methods[mdef.name] = self._register(mdef, kind, path)
		self.classes[cdef.name] = info

	def _register(self, node: A.FunctionLike, kind: CallableKind, path: Optional[str]) -> CallableEntity:
		entity = CallableEntity(
			name=getattr(node, "name", "{closure}"),
			kind=kind,
			throws=TypeSet.from_iter(node.throws),
			node=node,
			returns=Type(node.returns) if node.returns else None,
			owner=getattr(node, "owner", None),
			file=path,
		)
		self._by_node[id(node)] = entity
		if node.body is not None:
			self._collect_closures(node.body, path)
		return entity

	def _collect_closures(self, root: object, path: Optional[str]) -> None:
		for node in walk_scope(root):
			if isinstance(node, A.Closure) and node is not root:
				self._register(node, CallableKind.CLOSURE, path)

	# ---- lookup -----------------------------------------------------------

	def entity_for(self, node: A.FunctionLike) -> Optional[CallableEntity]:
		return self._by_node.get(id(node))

	def function(self, name: str) -> Optional[CallableEntity]:
		return self.functions.get(name)

	def class_info(self, name: str) -> Optional[ClassInfo]:
		return self.classes.get(name)

	def callables(self) -> List[CallableEntity]:
		"""All registered callables in registration order."""
		return list(self._by_node.values())

	def _class_chain(self, name: str) -> List[ClassInfo]:
		chain: List[ClassInfo] = []
		seen: set[str] = set()
		cur: Optional[str] = name
		while cur is not None and cur not in seen:
			seen.add(cur)
			info = self.classes.get(cur)
			if info is None:
				break
			chain.append(info)
			cur = info.parent
		return chain

	def lookup_method(self, class_name: str, method: str) -> List[CallableEntity]:
		"""
		Find `method` on `class_name`.

		A hit on the class itself or one of its parents wins outright and is
		returned alone. Otherwise every interface (direct or inherited) that
		declares the method is returned, sorted by interface name.
		"""
		for info in self._class_chain(class_name):
			if method in info.methods:
				return [info.methods[method]]
		out: List[CallableEntity] = []
		for t in self.expand(Type(class_name)):
			info = self.classes.get(t.name)
			if info is None or not info.is_interface:
				continue
			if method in info.methods:
				out.append(info.methods[method])
		return out

	# ---- hierarchy --------------------------------------------------------

	def expand(self, t: Type) -> TypeSet:
		cached = self._expand_cache.get(t)
		if cached is not None:
			return cached
		seen: set[Type] = set()
		pending = [t]
		while pending:
			cur = pending.pop()
			if cur in seen:
				continue
			seen.add(cur)
			info = self.classes.get(cur.name)
			if info is None:
				continue
			if info.parent:
				pending.append(Type(info.parent))
			pending.extend(Type(i) for i in info.interfaces)
		out = TypeSet(frozenset(seen))
		self._expand_cache[t] = out
		return out

	def expand_set(self, types: TypeSet) -> TypeSet:
		out = TypeSet()
		for t in types:
			out = out.union(self.expand(t))
		return out

	def can_cast(self, source: TypeSet, target: TypeSet) -> bool:
		if MIXED in target:
			return True
		return bool(source.types & target.types)

	def is_subtype(self, t: Type, ancestor: Type) -> bool:
		return ancestor in self.expand(t)


__all__ = ["CodeBase", "MIXED", "PRELUDE_SOURCE"]
