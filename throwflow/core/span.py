# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source span used by diagnostics.

Parser nodes only carry a `Located(line, column)`; the driver attaches the file
name when it turns a site into a Span. Everything is optional so diagnostics
for synthetic inputs (tests, config errors) still render.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None

	@classmethod
	def from_loc(cls, loc: Any, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a parser location.

		If `loc` is already a Span it is returned unchanged (with `file` filled
		in when it was missing); otherwise line/column are read off whatever
		object the parser handed us.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			if loc.file is None and file is not None:
				return replace(loc, file=file)
			return loc
		return cls(
			file=file or getattr(loc, "file", None),
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
		)

	def format(self) -> str:
		"""Render as `file:line:col`, with `?` for unknown parts."""
		line = "?" if self.line is None else str(self.line)
		col = "?" if self.column is None else str(self.column)
		return f"{self.file or '<unknown>'}:{line}:{col}"


__all__ = ["Span"]
