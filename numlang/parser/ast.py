# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Syntax tree produced by the front end and consumed by the type checker.

Every node carries the span of the source text it was built from. Nodes are
frozen: the checker reads them and builds a separate typed tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from numlang.core.span import Span


@dataclass(frozen=True)
class Ident:
	name: str
	span: Span


@dataclass(frozen=True)
class Operator:
	"""Operator spelling as written in the source (`-`, `+`, `*`, `/`)."""

	symbol: str
	span: Span


class Expr:
	span: Span


@dataclass(frozen=True)
class Var(Expr):
	name: Ident
	span: Span


@dataclass(frozen=True)
class Literal(Expr):
	value: float
	span: Span


@dataclass(frozen=True)
class Prefix(Expr):
	op: Operator
	expr: Expr
	span: Span


@dataclass(frozen=True)
class Binary(Expr):
	op: Operator
	lhs: Expr
	rhs: Expr
	span: Span


class Stmt:
	span: Span


@dataclass(frozen=True)
class ExprStmt(Stmt):
	expr: Expr
	span: Span


@dataclass(frozen=True)
class Block(Stmt):
	statements: Tuple[Stmt, ...]
	span: Span


@dataclass(frozen=True)
class Let(Stmt):
	name: Ident
	value: Expr
	span: Span


@dataclass(frozen=True)
class Print(Stmt):
	expr: Expr
	span: Span


@dataclass(frozen=True)
class Program:
	statements: Tuple[Stmt, ...]
	span: Span


Node = Union[Program, Stmt, Expr]
