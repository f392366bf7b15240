# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Ignore-list cache for exception types that never need a `throws` declaration.

The configured strings are parsed lazily on first use and cached until
`reset()`. First-use initialization is serialized with a lock so a cache shared
between threads is built exactly once.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List, Optional

from lark.exceptions import UnexpectedInput

from throwflow.core.type_set import EMPTY, TypeSet
from throwflow.parser import parse_type_union

from .caught import TypeServices

logger = logging.getLogger(__name__)


class IgnoreList:
	def __init__(
		self,
		type_strings: Iterable[object] = (),
		parse: Callable[[str], List[str]] = parse_type_union,
	) -> None:
		self._type_strings = tuple(type_strings)
		self._parse = parse
		self._cached: Optional[TypeSet] = None
		self._lock = threading.Lock()

	@property
	def is_loaded(self) -> bool:
		return self._cached is not None

	def types(self) -> TypeSet:
		cached = self._cached
		if cached is not None:
			return cached
		with self._lock:
			if self._cached is None:
				self._cached = self._calculate()
			return self._cached

	def reset(self) -> None:
		with self._lock:
			self._cached = None

	def reconfigure(self, type_strings: Iterable[object]) -> None:
		with self._lock:
			self._type_strings = tuple(type_strings)
			self._cached = None

	def should_report(self, expanded: TypeSet, types: TypeServices) -> bool:
		ignored = self.types()
		if not ignored:
			return True
		return not expanded.covers(ignored, types.can_cast)

	def _calculate(self) -> TypeSet:
		out = EMPTY
		for entry in self._type_strings:
			if not isinstance(entry, str) or not entry.strip():
				continue
			try:
				names = self._parse(entry)
			except UnexpectedInput:
				logger.warning("ignoring malformed type in exception_classes_with_optional_throws: %r", entry)
				continue
			out = out.union(TypeSet.from_iter(names))
		return out


__all__ = ["IgnoreList"]
