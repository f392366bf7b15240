# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
throwflow.codebase: the program model the throw analysis consults.

  - CodeBase: declarations, class hierarchy expansion, cast predicate
  - TypeInferrer: expression and catch-clause typing
  - CallResolver / Resolution / AbstainReason: call-target resolution
  - FunctionScope: lexical scopes for name lookup
"""

from .call_resolver import AbstainReason, CallResolver, Resolution
from .codebase import CodeBase
from .entities import CallableEntity, CallableKind, ClassInfo
from .infer import TypeInferrer
from .scope import FunctionScope, NameBinding

__all__ = [
	"AbstainReason",
	"CallResolver",
	"Resolution",
	"CodeBase",
	"CallableEntity",
	"CallableKind",
	"ClassInfo",
	"TypeInferrer",
	"FunctionScope",
	"NameBinding",
]
