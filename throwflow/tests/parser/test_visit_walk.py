# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from throwflow.parser import ast as A
from throwflow.parser import parse_program
from throwflow.parser.visit import iter_children, walk_scope


def test_walk_scope_stops_at_nested_closures():
	program = parse_program("fn f() { let cb = fn () { throw new A(); }; throw new B(); }")
	body = program.functions[0].body
	nodes = list(walk_scope(body))
	closures = [n for n in nodes if isinstance(n, A.Closure)]
	throws = [n for n in nodes if isinstance(n, A.ThrowStmt)]
	assert len(closures) == 1
	assert [t.value.class_name for t in throws] == ["B"]

	# Rooted at the closure itself, its body is walked.
	inner = [n for n in walk_scope(closures[0]) if isinstance(n, A.ThrowStmt)]
	assert [t.value.class_name for t in inner] == ["A"]


def test_try_children_are_body_catches_then_finally():
	program = parse_program("fn f() { try { } catch (A e) { } finally { } }")
	try_stmt = program.functions[0].body.statements[0]
	children = list(iter_children(try_stmt))
	assert children[0] is try_stmt.body
	assert children[1] is try_stmt.catches[0]
	assert children[2] is try_stmt.finally_block


def test_unknown_node_type_is_rejected():
	with pytest.raises(TypeError):
		list(iter_children(object()))
