# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
throwflow: exception-contract checker for `.tf` sources.

Subpackages:
  core: Type/TypeSet algebra, spans and diagnostics
  parser: lark grammar + AST builder
  codebase: class hierarchy, expression typing and call resolution
  analysis: caught-type filtering, ignore list, throw/call site checks
"""

__all__ = ["core", "parser", "codebase", "analysis", "config", "driver"]
