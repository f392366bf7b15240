"""
Common diagnostic structure for the parser, config loader and throw analysis.

A diagnostic is a message plus optional span/metadata. Throw-analysis
diagnostics also carry `code` (the issue kind) and `args`, the raw values that
were substituted into the message template, so tooling can match on them
without parsing text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .span import Span


@dataclass
class Diagnostic:
	"""Represents an analyzer diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Phase label: "parser", "config" or "throws".
	phase: str | None = None
	severity: str = "warning"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)
	args: Tuple[str, ...] = ()

	def __post_init__(self) -> None:
		# Normalize missing spans to the sentinel Span() so downstream tooling
		# can rely on a structured object instead of None.
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def format_human(self) -> str:
		code = f"[{self.code}] " if self.code else ""
		return f"{self.span.format()}: {self.severity}: {code}{self.message}"

	def to_json(self) -> Dict[str, Any]:
		"""Render to a structured JSON-friendly dict."""
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"args": list(self.args),
			"notes": list(self.notes),
		}
