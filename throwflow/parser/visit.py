# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Child enumeration for AST nodes.

`iter_children(node)` yields the direct children of any statement, expression,
block or catch clause in source order. Traversals (closure collection,
binding collection, the throw-analysis walker) are built on it so they agree on
what "inside" means.
"""

from __future__ import annotations

from typing import Callable, Iterator

from . import ast as A


def _block(node: A.Block) -> Iterator[object]:
	yield from node.statements


def _let(node: A.LetStmt | A.AssignStmt) -> Iterator[object]:
	yield node.value


def _return(node: A.ReturnStmt) -> Iterator[object]:
	if node.value is not None:
		yield node.value


def _throw(node: A.ThrowStmt) -> Iterator[object]:
	yield node.value


def _try(node: A.TryStmt) -> Iterator[object]:
	yield node.body
	yield from node.catches
	if node.finally_block is not None:
		yield node.finally_block


def _catch(node: A.CatchClause) -> Iterator[object]:
	yield node.block


def _if(node: A.IfStmt) -> Iterator[object]:
	yield node.condition
	yield node.then_block
	if node.else_block is not None:
		yield node.else_block


def _while(node: A.WhileStmt) -> Iterator[object]:
	yield node.condition
	yield node.body


def _expr_stmt(node: A.ExprStmt) -> Iterator[object]:
	yield node.value


def _leaf(node: object) -> Iterator[object]:
	return iter(())


def _new(node: A.New) -> Iterator[object]:
	yield from node.args


def _closure(node: A.Closure) -> Iterator[object]:
	yield node.body


def _call(node: A.Call) -> Iterator[object]:
	yield node.func
	yield from node.args


def _method_call(node: A.MethodCall) -> Iterator[object]:
	yield node.receiver
	if not isinstance(node.method, str):
		yield node.method
	yield from node.args


def _static_call(node: A.StaticCall) -> Iterator[object]:
	yield from node.args


def _binary(node: A.Binary) -> Iterator[object]:
	yield node.left
	yield node.right


def _not(node: A.Not) -> Iterator[object]:
	yield node.operand


_CHILDREN: dict[type, Callable[[object], Iterator[object]]] = {
	A.Block: _block,
	A.LetStmt: _let,
	A.AssignStmt: _let,
	A.ReturnStmt: _return,
	A.ThrowStmt: _throw,
	A.TryStmt: _try,
	A.CatchClause: _catch,
	A.IfStmt: _if,
	A.WhileStmt: _while,
	A.ExprStmt: _expr_stmt,
	A.Name: _leaf,
	A.This: _leaf,
	A.Literal: _leaf,
	A.New: _new,
	A.Closure: _closure,
	A.Call: _call,
	A.MethodCall: _method_call,
	A.StaticCall: _static_call,
	A.Binary: _binary,
	A.Not: _not,
}


def iter_children(node: object) -> Iterator[object]:
	fn = _CHILDREN.get(type(node))
	if fn is None:
		raise TypeError(f"no child enumeration for {type(node).__name__}")
	return fn(node)


def walk_scope(node: object) -> Iterator[object]:
	"""
	Pre-order walk of `node` that does not descend into nested closures.

	The closure node itself is yielded (it is an expression of the enclosing
	scope); its body belongs to the closure's own scope.
	"""
	stack = [node]
	while stack:
		cur = stack.pop()
		yield cur
		if isinstance(cur, A.Closure) and cur is not node:
			continue
		stack.extend(reversed(list(iter_children(cur))))


__all__ = ["iter_children", "walk_scope"]
