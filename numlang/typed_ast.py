# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Typed tree produced by a successful check.

Mirrors `numlang.parser.ast` node for node. Every expression carries its
resolved `Type`, operators are lowered to enums, and every node keeps the span
of the syntax node it was built from.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from numlang.core.span import Span
from numlang.core.types_core import Type
from numlang.parser.ast import Ident


class UnaryOp(Enum):
	NEG = "-"

	def __str__(self) -> str:
		return self.value


class BinaryOp(Enum):
	ADD = "+"
	SUB = "-"
	MUL = "*"
	DIV = "/"

	def __str__(self) -> str:
		return self.value


@dataclass(frozen=True)
class TOperator:
	op: UnaryOp | BinaryOp
	span: Span


class TExpr:
	ty: Type
	span: Span


@dataclass(frozen=True)
class TVar(TExpr):
	name: Ident
	ty: Type
	span: Span


@dataclass(frozen=True)
class TLiteral(TExpr):
	value: float
	ty: Type
	span: Span


@dataclass(frozen=True)
class TPrefix(TExpr):
	op: TOperator
	expr: TExpr
	ty: Type
	span: Span


@dataclass(frozen=True)
class TBinary(TExpr):
	op: TOperator
	lhs: TExpr
	rhs: TExpr
	ty: Type
	span: Span


class TStmt:
	span: Span


@dataclass(frozen=True)
class TExprStmt(TStmt):
	expr: TExpr
	span: Span


@dataclass(frozen=True)
class TBlock(TStmt):
	statements: Tuple[TStmt, ...]
	span: Span


@dataclass(frozen=True)
class TLet(TStmt):
	name: Ident
	value: TExpr
	span: Span


@dataclass(frozen=True)
class TPrint(TStmt):
	expr: TExpr
	span: Span


@dataclass(frozen=True)
class TProgram:
	statements: Tuple[TStmt, ...]
	span: Span


def format_program(program: TProgram) -> str:
	"""Render a typed program as an indented s-expression listing, one statement per line."""
	lines: List[str] = []
	for stmt in program.statements:
		_format_stmt(stmt, 0, lines)
	return "\n".join(lines)


def _format_stmt(stmt: TStmt, depth: int, lines: List[str]) -> None:
	pad = "  " * depth
	if isinstance(stmt, TBlock):
		lines.append(f"{pad}(block")
		for inner in stmt.statements:
			_format_stmt(inner, depth + 1, lines)
		lines.append(f"{pad})")
	elif isinstance(stmt, TLet):
		lines.append(f"{pad}(let {stmt.name.name} {format_expr(stmt.value)})")
	elif isinstance(stmt, TPrint):
		lines.append(f"{pad}(print {format_expr(stmt.expr)})")
	elif isinstance(stmt, TExprStmt):
		lines.append(f"{pad}{format_expr(stmt.expr)}")
	else:
		raise TypeError(f"unexpected typed statement: {type(stmt).__name__}")


def format_expr(expr: TExpr) -> str:
	if isinstance(expr, TVar):
		return f"{expr.name.name}: {expr.ty}"
	if isinstance(expr, TLiteral):
		return f"{expr.value:g}: {expr.ty}"
	if isinstance(expr, TPrefix):
		return f"({expr.op.op} {format_expr(expr.expr)}): {expr.ty}"
	if isinstance(expr, TBinary):
		return f"({expr.op.op} {format_expr(expr.lhs)} {format_expr(expr.rhs)}): {expr.ty}"
	raise TypeError(f"unexpected typed expression: {type(expr).__name__}")
