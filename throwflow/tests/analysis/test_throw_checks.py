# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`throw` statement checks against the enclosing function's contract.
"""

from __future__ import annotations

from throwflow.test_support import analyze, summarize

ABSENT = "ThrowTypeAbsent"
MISMATCH = "ThrowTypeMismatch"


def test_undeclared_throw_is_reported():
	diags = analyze("fn f() { throw new RuntimeException(); }")
	assert summarize(diags) == [(ABSENT, ("f", "RuntimeException"))]
	(diag,) = diags
	assert diag.message == "f() can throw RuntimeException here, but has no 'throws' declaration for that type"
	assert diag.phase == "throws"
	assert diag.severity == "warning"
	assert diag.span.file == "test.tf"
	assert diag.span.line == 1


def test_exact_and_ancestor_contracts_cover():
	assert analyze("fn f() throws RuntimeException { throw new RuntimeException(); }") == []
	assert analyze("fn f() throws Exception { throw new RuntimeException(); }") == []
	assert analyze("fn f() throws Throwable { throw new TypeError(); }") == []
	assert analyze("fn f() throws Error | LogicException { throw new InvalidArgumentException(); }") == []


def test_contract_that_does_not_cover_is_a_mismatch():
	diags = analyze("fn f() throws LogicException | Error { throw new RuntimeException(); }")
	assert summarize(diags) == [(MISMATCH, ("f", "RuntimeException", "Error|LogicException"))]
	assert diags[0].message == "f() throws RuntimeException, but it only declares 'throws Error|LogicException'"


def test_mixed_contract_covers_anything():
	assert analyze("fn f() throws mixed { throw new Whatever(); }") == []


def test_undeclared_class_is_still_checked_nominally():
	assert summarize(analyze("fn f() { throw new AppError(); }")) == [(ABSENT, ("f", "AppError"))]
	assert analyze("fn f() throws AppError { throw new AppError(); }") == []


def test_throw_inside_try_body_is_filtered_by_catch():
	src = """
fn f() {
	try {
		if (true) {
			while (false) { throw new InvalidArgumentException(); }
		}
	} catch (LogicException e) {
	}
}
"""
	assert analyze(src) == []


def test_throw_in_catch_block_is_filtered_by_its_own_try():
	src = """
class A extends Exception {}
class B extends A {}
fn f() {
	try {
	} catch (A e) {
		throw new B();
	}
}
"""
	assert analyze(src) == []


def test_uncovered_throw_in_catch_block_is_reported():
	src = """
fn f() {
	try {
	} catch (LogicException e) {
		throw new RuntimeException();
	}
}
"""
	diags = analyze(src)
	assert summarize(diags) == [(ABSENT, ("f", "RuntimeException"))]
	assert diags[0].span.line == 5


def test_throw_in_finally_is_filtered_by_its_own_try():
	src = "fn f() { try { } catch (Exception e) { } finally { throw new RuntimeException(); } }"
	assert analyze(src) == []
	src = "fn f() { try { } catch (LogicException e) { } finally { throw new TypeError(); } }"
	assert summarize(analyze(src)) == [(ABSENT, ("f", "TypeError"))]


def test_outer_handler_guards_inner_catch_block():
	src = """
fn f() {
	try {
		try {
		} catch (LogicException e) {
			throw new RuntimeException();
		}
	} catch (RuntimeException e) {
	}
}
"""
	assert analyze(src) == []


def test_uncaught_part_of_thrown_union_is_reported():
	src = """
fn f() throws A {
	let e = new A();
	e = new B();
	e = new C();
	try {
		throw e;
	} catch (C ignored) {
	}
}
"""
	assert summarize(analyze(src)) == [(MISMATCH, ("f", "B", "A"))]


def test_unknown_thrown_type_abstains():
	assert analyze("fn f(x) { throw x; }") == []
	assert analyze("fn f() { try { } catch (Exception e) { throw e; } }") == []
	assert analyze("fn f() { throw 1 + x; }") == []


def test_typed_parameter_throw_is_checked():
	assert summarize(analyze("fn f(e: LogicException) { throw e; }")) == [(ABSENT, ("f", "LogicException"))]


def test_methods_use_owner_in_name():
	src = """
class Repo {
	fn load() { throw new RuntimeException(); }
	static fn open() throws LogicException { throw new RuntimeException(); }
}
"""
	assert summarize(analyze(src)) == [
		(ABSENT, ("Repo::load", "RuntimeException")),
		(MISMATCH, ("Repo::open", "RuntimeException", "LogicException")),
	]


def test_closures_have_their_own_contract():
	src = """
fn f() throws Exception {
	let cb = fn () {
		throw new RuntimeException();
	};
	let ok = fn () throws RuntimeException { throw new RuntimeException(); };
}
"""
	assert summarize(analyze(src)) == [(ABSENT, ("{closure@3}", "RuntimeException"))]


def test_try_around_closure_does_not_guard_its_body():
	src = """
fn f() {
	try {
		let cb = fn () { throw new RuntimeException(); };
	} catch (Exception e) {
	}
}
"""
	assert summarize(analyze(src)) == [(ABSENT, ("{closure@4}", "RuntimeException"))]


def test_top_level_code_is_not_checked_but_its_closures_are():
	assert analyze("throw new RuntimeException();") == []
	src = """
let cb = fn () {
	throw new LogicException();
};
"""
	assert summarize(analyze(src)) == [(ABSENT, ("{closure@2}", "LogicException"))]


def test_ignored_types_are_never_reported():
	src = "fn f() { throw new InvalidArgumentException(); throw new TypeError(); throw new RuntimeException(); }"
	diags = analyze(src, ignored=["LogicException", "Error"])
	assert summarize(diags) == [(ABSENT, ("f", "RuntimeException"))]


def test_multiple_throws_report_in_source_order():
	src = """
fn f() {
	throw new A();
	throw new B();
}
"""
	diags = analyze(src)
	assert summarize(diags) == [(ABSENT, ("f", "A")), (ABSENT, ("f", "B"))]
	assert [d.span.line for d in diags] == [3, 4]


def test_throw_handling_is_the_same_in_recursive_mode():
	src = "fn f() throws LogicException { throw new RuntimeException(); }"
	assert summarize(analyze(src, recursive=True)) == summarize(analyze(src))


def test_outer_local_is_typed_in_its_declaring_scope():
	src = """
fn f(p: A) throws A {
	let e = p;
	let h = fn (p: B) throws A {
		throw e;
	};
}
"""
	assert analyze(src) == []
