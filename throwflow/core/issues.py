# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Issue kinds produced by the throw analysis, with their message templates.

Templates are positional; `render` substitutes the diagnostic args in order:
  ThrowTypeAbsent:          function, thrown type
  ThrowTypeAbsentForCall:   function, thrown type, callee
  ThrowTypeMismatch:        function, thrown type, declared contract
  ThrowTypeMismatchForCall: function, thrown type, callee, declared contract
"""

from __future__ import annotations

from enum import Enum


class IssueKind(Enum):
	THROW_TYPE_ABSENT = "ThrowTypeAbsent"
	THROW_TYPE_ABSENT_FOR_CALL = "ThrowTypeAbsentForCall"
	THROW_TYPE_MISMATCH = "ThrowTypeMismatch"
	THROW_TYPE_MISMATCH_FOR_CALL = "ThrowTypeMismatchForCall"

	@property
	def for_call(self) -> bool:
		return self in (IssueKind.THROW_TYPE_ABSENT_FOR_CALL, IssueKind.THROW_TYPE_MISMATCH_FOR_CALL)


_TEMPLATES: dict[IssueKind, str] = {
	IssueKind.THROW_TYPE_ABSENT: "{0}() can throw {1} here, but has no 'throws' declaration for that type",
	IssueKind.THROW_TYPE_ABSENT_FOR_CALL: (
		"{0}() can throw {1} because it calls {2}(), but has no 'throws' declaration for that type"
	),
	IssueKind.THROW_TYPE_MISMATCH: "{0}() throws {1}, but it only declares 'throws {2}'",
	IssueKind.THROW_TYPE_MISMATCH_FOR_CALL: (
		"{0}() throws {1} because it calls {2}(), but it only declares 'throws {3}'"
	),
}


def render(kind: IssueKind, args: tuple[str, ...]) -> str:
	"""Format the message for `kind`; `args` must match the template arity."""
	return _TEMPLATES[kind].format(*args)


__all__ = ["IssueKind", "render"]
