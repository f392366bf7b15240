# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line driver: parse `.tf` sources, build one shared codebase, run the
throw analysis and print diagnostics.

Exit codes: 0 clean, 1 diagnostics were produced (parse errors included),
2 configuration or I/O problems.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from lark.exceptions import UnexpectedInput

from throwflow.analysis import AnalysisSession, ThrowAnalyzer
from throwflow.codebase import CodeBase
from throwflow.config import AnalyzerConfig, ConfigError, load_config_json
from throwflow.core.diagnostics import Diagnostic
from throwflow.core.span import Span
from throwflow.parser import ast as A
from throwflow.parser import parse_program

logger = logging.getLogger(__name__)


def _parse_diagnostic(err: UnexpectedInput, path: Optional[str]) -> Diagnostic:
	line = getattr(err, "line", None)
	column = getattr(err, "column", None)
	first_line = str(err).strip().splitlines()[0] if str(err).strip() else "syntax error"
	return Diagnostic(
		message=first_line,
		phase="parser",
		severity="error",
		span=Span(file=path, line=line if line and line > 0 else None, column=column if column and column > 0 else None),
	)


def parse_sources(sources: Sequence[Tuple[str, Optional[str]]]) -> Tuple[List[A.Program], List[Diagnostic]]:
	"""Parse (text, path) pairs; files that fail to parse become diagnostics."""
	programs: List[A.Program] = []
	diagnostics: List[Diagnostic] = []
	for text, path in sources:
		try:
			programs.append(parse_program(text, path=path))
		except UnexpectedInput as err:
			diagnostics.append(_parse_diagnostic(err, path))
	return programs, diagnostics


def analyze_sources(
	sources: Sequence[Tuple[str, Optional[str]]],
	config: Optional[AnalyzerConfig] = None,
	session: Optional[AnalysisSession] = None,
) -> List[Diagnostic]:
	"""
	Parse and analyze several sources against one shared codebase.

	Parse errors are returned alongside analysis diagnostics; files that parse
	are still analyzed. Results are ordered by file, line and column.
	"""
	programs, diagnostics = parse_sources(sources)
	if session is None:
		session = AnalysisSession(config)
	elif config is not None:
		session.reconfigure(config)
	codebase = CodeBase.from_programs(programs)
	diagnostics.extend(ThrowAnalyzer(session).analyze(codebase, programs))
	return sorted(diagnostics, key=_sort_key)


def analyze_source(text: str, path: Optional[str] = None, config: Optional[AnalyzerConfig] = None) -> List[Diagnostic]:
	return analyze_sources([(text, path)], config=config)


def _sort_key(diag: Diagnostic) -> tuple:
	span = diag.span
	return (span.file or "", span.line or 0, span.column or 0, diag.code or "", diag.message)


def _configure_logging(verbosity: int) -> None:
	level = logging.WARNING
	if verbosity == 1:
		level = logging.INFO
	elif verbosity >= 2:
		level = logging.DEBUG
	root = logging.getLogger("throwflow")
	root.setLevel(level)
	if not root.handlers:
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter(fmt="%(levelname)s %(name)s: %(message)s"))
		root.addHandler(handler)


def _error_payload(msg: str, phase: str, file: Optional[str]) -> dict:
	return Diagnostic(message=msg, phase=phase, severity="error", span=Span(file=file)).to_json()


def main(argv: list[str] | None = None) -> int:
	"""
	Check `throws` contracts in the given sources.

	With --json, prints {"exit_code", "diagnostics"} to stdout; otherwise prints
	`file:line:col: severity: [Code] message` lines to stderr.
	"""
	parser = argparse.ArgumentParser(prog="throwflow", description="Check declared exception contracts")
	parser.add_argument("source", type=Path, nargs="+", help="Path(s) to .tf source file(s)")
	parser.add_argument("--config", type=Path, help="Path to a throwflow-config JSON file")
	parser.add_argument(
		"--recursive",
		action="store_true",
		default=None,
		help="Also report exceptions declared by invoked functions and methods",
	)
	parser.add_argument(
		"--ignore-throws",
		dest="ignore_throws",
		action="append",
		default=[],
		metavar="TYPE",
		help="Exception type that never needs a throws declaration (repeatable)",
	)
	parser.add_argument("--json", action="store_true", help="Emit diagnostics as JSON")
	parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
	args = parser.parse_args(argv)

	_configure_logging(args.verbose)

	try:
		config = load_config_json(args.config) if args.config else AnalyzerConfig()
	except ConfigError as err:
		return _fail(str(err), "config", str(args.config), args.json)
	config = config.with_overrides(recursive=args.recursive, extra_ignored=args.ignore_throws)

	sources: List[Tuple[str, Optional[str]]] = []
	for path in args.source:
		try:
			sources.append((path.read_text(encoding="utf-8"), str(path)))
		except OSError as err:
			return _fail(f"cannot read {path}: {err}", "io", str(path), args.json)

	logger.info("analyzing %d file(s) (recursive=%s)", len(sources), config.recursive)
	diagnostics = analyze_sources(sources, config=config)
	exit_code = 1 if diagnostics else 0
	if args.json:
		print(json.dumps({"exit_code": exit_code, "diagnostics": [d.to_json() for d in diagnostics]}))
	else:
		for diag in diagnostics:
			print(diag.format_human(), file=sys.stderr)
	return exit_code


def _fail(msg: str, phase: str, file: Optional[str], as_json: bool) -> int:
	if as_json:
		print(json.dumps({"exit_code": 2, "diagnostics": [_error_payload(msg, phase, file)]}))
	else:
		print(f"{file or '<unknown>'}:?:?: error: {msg}", file=sys.stderr)
	return 2


__all__ = ["main", "analyze_source", "analyze_sources", "parse_sources"]
