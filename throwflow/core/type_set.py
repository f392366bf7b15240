# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type / TypeSet algebra.

A Type is a nominal reference to a class, interface or builtin category; two
types are equal iff their names are equal. Nothing here knows about the class
hierarchy: expansion (ancestor/interface closure) and the cast predicate are
owned by the codebase and passed in where needed.

TypeSet is an immutable value. Every operation returns a new set; an empty set
is falsy and means "nothing (more) to report".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, Iterator


@dataclass(frozen=True, order=True)
class Type:
	"""Nominal type reference."""

	name: str

	def __str__(self) -> str:
		return self.name


CastPredicate = Callable[["TypeSet", "TypeSet"], bool]


@dataclass(frozen=True)
class TypeSet:
	"""Unordered set of types (duplicates collapse)."""

	types: FrozenSet[Type] = frozenset()

	@classmethod
	def of(cls, *items: Type | str) -> "TypeSet":
		return cls.from_iter(items)

	@classmethod
	def from_iter(cls, items: Iterable[Type | str]) -> "TypeSet":
		return cls(frozenset(t if isinstance(t, Type) else Type(t) for t in items))

	def __iter__(self) -> Iterator[Type]:
		# Deterministic order so diagnostics come out stable.
		return iter(sorted(self.types))

	def __len__(self) -> int:
		return len(self.types)

	def __bool__(self) -> bool:
		return bool(self.types)

	def __contains__(self, item: object) -> bool:
		if isinstance(item, str):
			item = Type(item)
		return item in self.types

	def __str__(self) -> str:
		return "|".join(t.name for t in self)

	def is_empty(self) -> bool:
		return not self.types

	def union(self, other: "TypeSet") -> "TypeSet":
		if not other.types:
			return self
		if not self.types:
			return other
		return TypeSet(self.types | other.types)

	def with_type(self, t: Type) -> "TypeSet":
		return TypeSet(self.types | {t})

	def without(self, t: Type) -> "TypeSet":
		if t not in self.types:
			return self
		return TypeSet(self.types - {t})

	def covers(self, target: "TypeSet", can_cast: CastPredicate) -> bool:
		"""
		True iff this set, taken as a whole, can be cast to `target`.

		Callers pass an *expanded* set (a type plus its ancestors) so that the
		nominal `can_cast` predicate acts as a subtype check.
		"""
		if not self.types or not target.types:
			return False
		return can_cast(self, target)


EMPTY = TypeSet()


def union_all(sets: Iterable[TypeSet]) -> TypeSet:
	out = EMPTY
	for s in sets:
		out = out.union(s)
	return out


__all__ = ["Type", "TypeSet", "EMPTY", "CastPredicate", "union_all"]
