# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Issue templates and Diagnostic rendering.
"""

from __future__ import annotations

from throwflow.core.diagnostics import Diagnostic
from throwflow.core.issues import IssueKind, render
from throwflow.core.span import Span
from throwflow.parser.ast import Located


def test_render_each_issue_kind():
	assert render(IssueKind.THROW_TYPE_ABSENT, ("f", "E")) == (
		"f() can throw E here, but has no 'throws' declaration for that type"
	)
	assert "because it calls g()" in render(IssueKind.THROW_TYPE_ABSENT_FOR_CALL, ("f", "E", "g"))
	assert render(IssueKind.THROW_TYPE_MISMATCH, ("f", "E", "A|B")).endswith("only declares 'throws A|B'")
	msg = render(IssueKind.THROW_TYPE_MISMATCH_FOR_CALL, ("f", "E", "C::m", "A"))
	assert msg == "f() throws E because it calls C::m(), but it only declares 'throws A'"


def test_for_call_flag():
	assert IssueKind.THROW_TYPE_ABSENT_FOR_CALL.for_call
	assert IssueKind.THROW_TYPE_MISMATCH_FOR_CALL.for_call
	assert not IssueKind.THROW_TYPE_ABSENT.for_call
	assert not IssueKind.THROW_TYPE_MISMATCH.for_call


def test_span_from_loc_fills_file():
	span = Span.from_loc(Located(line=3, column=5), file="a.tf")
	assert span == Span(file="a.tf", line=3, column=5)
	assert Span.from_loc(None, file="a.tf") == Span(file="a.tf")
	assert Span.from_loc(Span(line=1), file="b.tf").file == "b.tf"
	assert span.format() == "a.tf:3:5"
	assert Span().format() == "<unknown>:?:?"


def test_diagnostic_normalizes_missing_span_and_renders():
	diag = Diagnostic(message="boom", span=None)  # type: ignore[arg-type]
	assert diag.span == Span()

	diag = Diagnostic(
		message="f() can throw E here",
		code="ThrowTypeAbsent",
		phase="throws",
		span=Span(file="x.tf", line=2, column=1),
		args=("f", "E"),
	)
	assert diag.format_human() == "x.tf:2:1: warning: [ThrowTypeAbsent] f() can throw E here"
	payload = diag.to_json()
	assert payload["code"] == "ThrowTypeAbsent"
	assert payload["args"] == ["f", "E"]
	assert (payload["file"], payload["line"], payload["column"]) == ("x.tf", 2, 1)
