# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
CodeBase collection and hierarchy services (expand, can_cast, lookup_method).
"""

from __future__ import annotations

from throwflow.codebase import CallableKind, CodeBase
from throwflow.core.type_set import Type, TypeSet
from throwflow.parser import ast as A
from throwflow.parser import parse_program
from throwflow.test_support import build_codebase, find_nodes


def test_prelude_hierarchy_expands_to_ancestors_and_interfaces():
	codebase = CodeBase()
	assert codebase.expand(Type("InvalidArgumentException")) == TypeSet.of(
		"InvalidArgumentException", "LogicException", "Exception", "Throwable"
	)
	assert codebase.expand(Type("TypeError")) == TypeSet.of("TypeError", "Error", "Throwable")
	assert codebase.is_subtype(Type("RuntimeException"), Type("Throwable"))
	assert not codebase.is_subtype(Type("RuntimeException"), Type("Error"))


def test_unknown_type_expands_to_itself():
	codebase = CodeBase()
	assert codebase.expand(Type("Mystery")) == TypeSet.of("Mystery")


def test_without_prelude_nothing_is_declared():
	codebase = CodeBase(with_prelude=False)
	assert codebase.class_info("Exception") is None
	assert codebase.expand(Type("Exception")) == TypeSet.of("Exception")


def test_cyclic_hierarchy_terminates():
	_, codebase = build_codebase(
		"""
interface A extends B {}
interface B extends A {}
class C extends D implements A {}
class D extends C {}
"""
	)
	assert codebase.expand(Type("C")) == TypeSet.of("A", "B", "C", "D")
	# Parent chain walk is cycle-safe too.
	assert codebase.lookup_method("C", "nope") == []


def test_add_program_invalidates_expand_cache():
	codebase = CodeBase()
	assert codebase.expand(Type("AppError")) == TypeSet.of("AppError")
	codebase.add_program(parse_program("class AppError extends RuntimeException {}"))
	assert Type("Exception") in codebase.expand(Type("AppError"))


def test_can_cast_is_nominal_overlap_or_mixed():
	codebase = CodeBase()
	expanded = codebase.expand(Type("RuntimeException"))
	assert codebase.can_cast(expanded, TypeSet.of("Exception"))
	assert not codebase.can_cast(expanded, TypeSet.of("LogicException"))
	assert codebase.can_cast(TypeSet.of("Anything"), TypeSet.of("mixed"))


def test_registers_functions_methods_and_closures():
	program, codebase = build_codebase(
		"""
class Repo {
	static fn open() throws IoError { }
	fn close() { let cb = fn () throws A { }; }
}
fn helper() throws A | B { }
let top = fn () { };
"""
	)
	helper = codebase.function("helper")
	assert helper.kind is CallableKind.FUNCTION
	assert helper.throws == TypeSet.of("A", "B")
	assert helper.representation() == "helper"

	repo = codebase.class_info("Repo")
	assert repo.methods["open"].kind is CallableKind.STATIC_METHOD
	assert repo.methods["open"].is_static
	assert repo.methods["open"].representation() == "Repo::open"
	assert repo.methods["close"].kind is CallableKind.METHOD
	assert repo.file == "test.tf"

	closures = find_nodes(program.classes[0].methods[1].body, A.Closure)
	closures += find_nodes(program.statements[0], A.Closure)
	assert len(closures) == 2
	for closure in closures:
		entity = codebase.entity_for(closure)
		assert entity is not None
		assert entity.kind is CallableKind.CLOSURE
		assert entity.representation() == f"{{closure@{closure.loc.line}}}"
	assert codebase.entity_for(closures[0]).throws == TypeSet.of("A")


def test_interface_methods_are_abstract():
	_, codebase = build_codebase("interface Store { fn get() throws NotFound; }")
	method = codebase.class_info("Store").methods["get"]
	assert method.is_abstract
	assert method.body is None


def test_lookup_method_prefers_class_chain():
	_, codebase = build_codebase(
		"""
interface Readable { fn read() throws IoError; }
class Base implements Readable { fn read() throws A { } }
class Child extends Base { }
"""
	)
	(found,) = codebase.lookup_method("Child", "read")
	assert found.representation() == "Base::read"


def test_lookup_method_falls_back_to_interfaces_in_name_order():
	_, codebase = build_codebase(
		"""
interface Zed { fn run() throws Z; }
interface Alpha { fn run() throws A; }
class Impl implements Zed, Alpha { }
"""
	)
	found = codebase.lookup_method("Impl", "run")
	assert [m.representation() for m in found] == ["Alpha::run", "Zed::run"]
	assert codebase.lookup_method("Impl", "missing") == []
