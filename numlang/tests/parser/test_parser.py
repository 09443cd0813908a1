# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest
from lark.exceptions import UnexpectedInput

from numlang.core.diagnostics import Custom, ExpectedFound
from numlang.core.span import Span
from numlang.parser import ast, parse_program, parse_source


def test_let_statement_spans():
	src = "let x = 1 + 2;"
	prog = parse_program(src)
	assert prog.span == Span(0, len(src))
	(stmt,) = prog.statements
	assert isinstance(stmt, ast.Let)
	assert stmt.span == Span(0, 14)
	assert stmt.name == ast.Ident("x", Span(4, 5))
	value = stmt.value
	assert isinstance(value, ast.Binary)
	assert value.span == Span(8, 13)
	assert value.op == ast.Operator("+", Span(10, 11))
	assert value.lhs == ast.Literal(1.0, Span(8, 9))
	assert value.rhs == ast.Literal(2.0, Span(12, 13))


def test_operator_precedence_and_left_associativity():
	prog = parse_program("1 - 2 - 3 * 4;")
	(stmt,) = prog.statements
	assert isinstance(stmt, ast.ExprStmt)
	expr = stmt.expr
	# (1 - 2) - (3 * 4)
	assert isinstance(expr, ast.Binary) and expr.op.symbol == "-"
	assert isinstance(expr.lhs, ast.Binary) and expr.lhs.op.symbol == "-"
	assert isinstance(expr.rhs, ast.Binary) and expr.rhs.op.symbol == "*"


def test_prefix_and_parentheses():
	prog = parse_program("print -(x / 2);")
	(stmt,) = prog.statements
	assert isinstance(stmt, ast.Print)
	expr = stmt.expr
	assert isinstance(expr, ast.Prefix)
	assert expr.op == ast.Operator("-", Span(6, 7))
	assert isinstance(expr.expr, ast.Binary)
	assert expr.expr.lhs == ast.Var(ast.Ident("x", Span(8, 9)), Span(8, 9))


def test_nested_blocks_and_comments():
	src = """
# outer
let x = 1;
{
	let y = x; # inner
	{ print y; }
}
"""
	prog = parse_program(src)
	assert [type(s) for s in prog.statements] == [ast.Let, ast.Block]
	block = prog.statements[1]
	assert [type(s) for s in block.statements] == [ast.Let, ast.Block]
	assert block.span.text(src).startswith("{")
	assert block.span.text(src).endswith("}")


def test_decimal_literal():
	(stmt,) = parse_program("2.5;").statements
	assert stmt.expr == ast.Literal(2.5, Span(0, 3))


def test_empty_program():
	prog = parse_program("")
	assert prog.statements == ()
	assert prog.span == Span(0, 0)


def test_keyword_prefix_is_an_identifier():
	(stmt,) = parse_program("let letter = 1;").statements
	assert stmt.name.name == "letter"


def test_parse_program_propagates_lark_errors():
	with pytest.raises(UnexpectedInput):
		parse_program("let = 1;")


def test_missing_semicolon_reports_expected_found():
	src = "let x = 1"
	res = parse_source(src)
	assert not res.ok
	assert res.program is None
	err = res.error
	assert isinstance(err, ExpectedFound)
	assert err.found is None
	assert err.span == Span(len(src), len(src))
	assert "';'" in err.expected
	assert err.code() == 1


def test_unexpected_token_reports_found_text():
	res = parse_source("let = 1;")
	err = res.error
	assert isinstance(err, ExpectedFound)
	assert err.found == "="
	assert err.span == Span(4, 5)
	assert "identifier" in err.expected


def test_unexpected_character():
	res = parse_source("let x = 1 $ 2;")
	err = res.error
	assert isinstance(err, ExpectedFound)
	assert err.found == "$"
	assert err.span == Span(10, 11)


def test_parse_source_success():
	res = parse_source("print 1;")
	assert res.ok
	assert isinstance(res.program.statements[0], ast.Print)


def test_deeply_nested_input_is_a_diagnostic():
	src = "print " + "-" * 3000 + "1;"
	res = parse_source(src)
	assert res.program is None
	assert isinstance(res.error, Custom)
	assert res.error.span == Span(0, len(src))
	assert res.error.message == "Expression nesting too deep"
