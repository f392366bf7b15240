"""
throwflow parser: lark grammar for `.tf` sources and the AST builder.

Public API:
  - parse_program(source, path=None) -> Program
  - parse_file(path) -> Program
  - parse_type_union(text) -> list of type names (`A | B`)
"""

from __future__ import annotations

from pathlib import Path

from . import ast
from .parser import parse_program, parse_type_union


def parse_file(path: Path) -> ast.Program:
	return parse_program(path.read_text(encoding="utf-8"), path=str(path))


__all__ = ["ast", "parse_program", "parse_file", "parse_type_union"]
