# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type checker: walks the syntax tree, resolves names through lexical scopes,
feeds constraints to the inference engine and builds the typed tree.

One `Scopes` stack and one `Engine` are created per `check()` call and shared
across the whole walk. Statements are checked in order, so a binding is only
visible to statements after it (and never inside its own initializer).

By default the first failure ends the check. With `CheckOptions(accumulate=True)`
independent failures are collected instead: both operands of a binary
expression are checked even if the first fails, and a failing statement is
recorded while checking moves on to the next one. A `let` whose value failed
does not bind its name, so later uses report `UndefinedVariable`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from numlang.core.diagnostics import (
	CannotApplyBinaryOperator,
	CannotApplyUnaryOperator,
	CheckFailed,
	Custom,
	Error,
	TypeMismatch,
	UndefinedVariable,
	combine,
)
from numlang.core.scopes import Scopes
from numlang.core.types_core import Type, TypeId, Unknown, type_to_info
from numlang.infer import Engine
from numlang.parser import ast
from numlang.typed_ast import (
	BinaryOp,
	TBinary,
	TBlock,
	TExpr,
	TExprStmt,
	TLet,
	TLiteral,
	TOperator,
	TPrefix,
	TPrint,
	TProgram,
	TStmt,
	TVar,
	UnaryOp,
)

logger = logging.getLogger(__name__)

# Operator applicability. Binary operands are unified first, so the binary
# table is keyed by operand types only.
PREFIX_RULES: Dict[Tuple[UnaryOp, Type], Type] = {
	(UnaryOp.NEG, Type.NUM): Type.NUM,
}

BINARY_RULES: Dict[Tuple[Type, Type], Type] = {
	(Type.NUM, Type.NUM): Type.NUM,
}

_UNARY_SPELLINGS: Dict[str, UnaryOp] = {op.value: op for op in UnaryOp}
_BINARY_SPELLINGS: Dict[str, BinaryOp] = {op.value: op for op in BinaryOp}


@dataclass(frozen=True)
class CheckOptions:
	accumulate: bool = False


@dataclass(frozen=True)
class CheckResult:
	typed: Optional[TProgram]
	error: Optional[Error] = None

	@property
	def ok(self) -> bool:
		return self.error is None


def typecheck(program: ast.Program, options: Optional[CheckOptions] = None) -> CheckResult:
	"""Check `program` and return either its typed tree or a diagnostic."""
	return TypeChecker(options).check(program)


class TypeChecker:
	def __init__(self, options: Optional[CheckOptions] = None) -> None:
		self.options = options or CheckOptions()
		self.engine = Engine()
		self.bindings: Scopes[str, TypeId] = Scopes()
		self._errors: List[Error] = []

	def check(self, program: ast.Program) -> CheckResult:
		self.engine = Engine()
		self.bindings = Scopes()
		self._errors = []
		try:
			with self.bindings.scope():
				statements = self._check_statements(program.statements)
		except CheckFailed as failure:
			logger.debug("check failed: %s", failure.error)
			return CheckResult(typed=None, error=failure.error)
		if self._errors:
			return CheckResult(typed=None, error=combine(self._errors))
		logger.debug("check ok: %d statements, %d slots", len(statements), len(self.engine))
		return CheckResult(typed=TProgram(statements=statements, span=program.span))

	def _check_statements(self, statements: Sequence[ast.Stmt]) -> Tuple[TStmt, ...]:
		typed: List[TStmt] = []
		for stmt in statements:
			if not self.options.accumulate:
				typed.append(self._check_stmt(stmt))
				continue
			try:
				typed.append(self._check_stmt(stmt))
			except CheckFailed as failure:
				self._errors.append(failure.error)
		return tuple(typed)

	def _check_stmt(self, stmt: ast.Stmt) -> TStmt:
		if isinstance(stmt, ast.ExprStmt):
			return TExprStmt(expr=self._check_expr(stmt.expr), span=stmt.span)
		if isinstance(stmt, ast.Block):
			with self.bindings.scope():
				statements = self._check_statements(stmt.statements)
			return TBlock(statements=statements, span=stmt.span)
		if isinstance(stmt, ast.Let):
			return self._check_let(stmt)
		if isinstance(stmt, ast.Print):
			return TPrint(expr=self._check_expr(stmt.expr), span=stmt.span)
		raise TypeError(f"unexpected statement node: {type(stmt).__name__}")

	def _check_let(self, stmt: ast.Let) -> TLet:
		value = self._check_expr(stmt.value)
		value_id = self.engine.insert(type_to_info(value.ty), value.span)
		var_id = self.engine.insert(Unknown(), stmt.name.span)
		self.engine.unify(value_id, var_id)
		# Bind only now: the name is not visible inside its own initializer.
		self.bindings.insert(stmt.name.name, var_id)
		logger.debug("bind %s -> #%d", stmt.name.name, var_id)
		return TLet(name=stmt.name, value=value, span=stmt.span)

	def _check_expr(self, expr: ast.Expr) -> TExpr:
		if isinstance(expr, ast.Var):
			type_id = self.bindings.get(expr.name.name)
			if type_id is None:
				raise CheckFailed(UndefinedVariable(name=expr.name.name, span=expr.span))
			return TVar(name=expr.name, ty=self.engine.reconstruct(type_id), span=expr.span)
		if isinstance(expr, ast.Literal):
			return TLiteral(value=expr.value, ty=Type.NUM, span=expr.span)
		if isinstance(expr, ast.Prefix):
			return self._check_prefix(expr)
		if isinstance(expr, ast.Binary):
			return self._check_binary(expr)
		raise TypeError(f"unexpected expression node: {type(expr).__name__}")

	def _check_prefix(self, expr: ast.Prefix) -> TPrefix:
		op = self._lower_unary(expr.op)
		operand = self._check_expr(expr.expr)
		operand_id = self.engine.insert(type_to_info(operand.ty), operand.span)
		operand_ty = self.engine.reconstruct(operand_id)
		ty = PREFIX_RULES.get((op, operand_ty))
		if ty is None:
			raise CheckFailed(CannotApplyUnaryOperator(span=expr.op.span, op=op, ty=operand_ty))
		return TPrefix(op=TOperator(op, expr.op.span), expr=operand, ty=ty, span=expr.span)

	def _check_binary(self, expr: ast.Binary) -> TBinary:
		op = self._lower_binary(expr.op)
		lhs, rhs = self._check_operands(expr.lhs, expr.rhs)
		lhs_id = self.engine.insert(type_to_info(lhs.ty), lhs.span)
		rhs_id = self.engine.insert(type_to_info(rhs.ty), rhs.span)
		try:
			self.engine.unify(lhs_id, rhs_id)
		except CheckFailed as failure:
			if not isinstance(failure.error, TypeMismatch):
				raise
			raise CheckFailed(
				CannotApplyBinaryOperator(span=expr.op.span, op=op, ty1=lhs.ty, ty2=rhs.ty)
			) from failure
		lhs_ty = self.engine.reconstruct(lhs_id)
		rhs_ty = self.engine.reconstruct(rhs_id)
		ty = BINARY_RULES.get((lhs_ty, rhs_ty))
		if ty is None:
			raise CheckFailed(CannotApplyBinaryOperator(span=expr.op.span, op=op, ty1=lhs_ty, ty2=rhs_ty))
		return TBinary(op=TOperator(op, expr.op.span), lhs=lhs, rhs=rhs, ty=ty, span=expr.span)

	def _check_operands(self, lhs: ast.Expr, rhs: ast.Expr) -> Tuple[TExpr, TExpr]:
		if not self.options.accumulate:
			return self._check_expr(lhs), self._check_expr(rhs)
		typed: List[TExpr] = []
		errors: List[Error] = []
		for operand in (lhs, rhs):
			try:
				typed.append(self._check_expr(operand))
			except CheckFailed as failure:
				errors.append(failure.error)
		if errors:
			raise CheckFailed(combine(errors))
		return typed[0], typed[1]

	def _lower_unary(self, op: ast.Operator) -> UnaryOp:
		lowered = _UNARY_SPELLINGS.get(op.symbol)
		if lowered is None:
			raise CheckFailed(Custom(span=op.span, message=f"Unknown prefix operator '{op.symbol}'"))
		return lowered

	def _lower_binary(self, op: ast.Operator) -> BinaryOp:
		lowered = _BINARY_SPELLINGS.get(op.symbol)
		if lowered is None:
			raise CheckFailed(Custom(span=op.span, message=f"Unknown binary operator '{op.symbol}'"))
		return lowered


__all__ = [
	"BINARY_RULES",
	"PREFIX_RULES",
	"CheckOptions",
	"CheckResult",
	"TypeChecker",
	"typecheck",
]
