from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from numlang.core.diagnostics import Custom, Error, ExpectedFound
from numlang.core.span import Span

from .ast import (
	Binary,
	Block,
	Expr,
	ExprStmt,
	Ident,
	Let,
	Literal,
	Operator,
	Prefix,
	Print,
	Program,
	Stmt,
	Var,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start="program",
	propagate_positions=True,
	maybe_placeholders=False,
)

# Regex terminals have no literal spelling to show in "expected ..." lists.
_TERMINAL_DESCRIPTIONS = {
	"NAME": "identifier",
	"NUMBER": "number",
	"$END": "end of input",
}


class TreeShapeError(ValueError):
	"""Raised when the parse tree does not have the shape the builder expects."""

	def __init__(self, message: str, span: Span) -> None:
		super().__init__(message)
		self.span = span


def parse_program(source: str) -> Program:
	"""Parse `source` into a syntax tree; lark errors propagate to the caller."""
	tree = _PARSER.parse(source)
	return _build_program(tree, source)


def error_from_lark(err: UnexpectedInput, source: str) -> Error:
	"""Convert a lark parse failure into an `ExpectedFound` or `Custom` diagnostic."""
	if isinstance(err, UnexpectedToken):
		token = err.token
		expected = _describe_terminals(err.expected)
		if token.type == "$END":
			end = len(source)
			return ExpectedFound(span=Span(end, end), expected=expected, found=None)
		start = token.start_pos if token.start_pos is not None else 0
		end = token.end_pos if token.end_pos is not None else start
		return ExpectedFound(span=Span(start, end), expected=expected, found=str(token.value))
	if isinstance(err, UnexpectedCharacters):
		pos = err.pos_in_stream
		return ExpectedFound(
			span=Span(pos, min(pos + 1, len(source))),
			expected=_describe_terminals(err.allowed or ()),
			found=err.char,
		)
	if isinstance(err, UnexpectedEOF):
		end = len(source)
		return ExpectedFound(span=Span(end, end), expected=_describe_terminals(err.expected), found=None)
	pos = max(getattr(err, "pos_in_stream", 0) or 0, 0)
	return Custom(span=Span(pos, pos), message=str(err))


def _describe_terminals(names) -> tuple[str, ...]:
	described = set()
	for name in names:
		if name in _TERMINAL_DESCRIPTIONS:
			described.add(_TERMINAL_DESCRIPTIONS[name])
			continue
		try:
			term = _PARSER.get_terminal(name)
		except KeyError:
			described.add(name.lower())
			continue
		if term.pattern.type == "str":
			described.add(f"'{term.pattern.value}'")
		else:
			described.add(name.lower())
	return tuple(sorted(described))


def _build_program(tree: Tree, source: str) -> Program:
	statements = tuple(_build_stmt(child) for child in tree.children if isinstance(child, Tree))
	return Program(statements=statements, span=Span(0, len(source)))


def _build_stmt(tree: Tree) -> Stmt:
	kind = _name(tree)
	span = _span(tree)
	if kind == "let_stmt":
		name_token = tree.children[0]
		return Let(name=_ident(name_token), value=_build_expr(tree.children[1]), span=span)
	if kind == "print_stmt":
		return Print(expr=_build_expr(tree.children[0]), span=span)
	if kind == "block":
		statements = tuple(_build_stmt(child) for child in tree.children if isinstance(child, Tree))
		return Block(statements=statements, span=span)
	if kind == "expr_stmt":
		return ExprStmt(expr=_build_expr(tree.children[0]), span=span)
	raise TreeShapeError(f"unsupported statement node: {kind}", span)


def _build_expr(node: Tree | Token) -> Expr:
	if not isinstance(node, Tree):
		raise TreeShapeError(f"unexpected token in expression position: {node!r}", _token_span(node))
	kind = _name(node)
	span = _span(node)
	if kind == "number":
		return Literal(value=float(node.children[0].value), span=span)
	if kind == "var":
		token = node.children[0]
		return Var(name=_ident(token), span=span)
	if kind == "prefix":
		op_token, operand = node.children
		return Prefix(op=_operator(op_token), expr=_build_expr(operand), span=span)
	if kind == "binary":
		lhs, op_token, rhs = node.children
		return Binary(op=_operator(op_token), lhs=_build_expr(lhs), rhs=_build_expr(rhs), span=span)
	raise TreeShapeError(f"unsupported expression node: {kind}", span)


def _ident(token: Token) -> Ident:
	return Ident(name=token.value, span=_token_span(token))


def _operator(token: Token) -> Operator:
	return Operator(symbol=token.value, span=_token_span(token))


def _span(tree: Tree) -> Span:
	meta = tree.meta
	if getattr(meta, "empty", True):
		children: List[Span] = [
			_span(c) if isinstance(c, Tree) else _token_span(c) for c in tree.children
		]
		if not children:
			return Span()
		return Span(children[0].start, children[-1].end)
	return Span(meta.start_pos, meta.end_pos)


def _token_span(token: Token) -> Span:
	start: Optional[int] = token.start_pos
	end: Optional[int] = token.end_pos
	if start is None:
		return Span()
	return Span(start, end if end is not None else start + len(token.value))


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)
