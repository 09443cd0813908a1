# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostics produced by the parser boundary and the type checker.

Every diagnostic is an immutable value carrying its own spans and type
snapshots, so it can be rendered after the checker's scopes and inference
engine are gone. Rendering is split in two: `make_report()` produces plain
report tuples here, and the terminal/JSON presentation lives in the driver.

Each diagnostic kind has a numeric code used for the process exit status; an
aggregate (`Many`) reports the highest code among its members.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Iterable, List, NamedTuple, Optional, Tuple

from .span import Span
from .types_core import Type, TypeInfo

if TYPE_CHECKING:
	from numlang.typed_ast import BinaryOp, UnaryOp


class Color(Enum):
	"""Color tag attached to a report label; the renderer decides what it means."""

	RED = "red"
	YELLOW = "yellow"
	BLUE = "blue"
	CYAN = "cyan"


class Label(NamedTuple):
	text: str
	color: Color
	span: Span


class Report(NamedTuple):
	message: str
	labels: List[Label]
	notes: List[str]


class Error:
	"""Base of all diagnostic variants."""

	_code: ClassVar[int] = 0

	def make_report(self) -> List[Report]:
		return [self._report()]

	def _report(self) -> Report:  # pragma: no cover - every leaf overrides
		raise NotImplementedError

	def code(self) -> int:
		return self._code

	def leaves(self) -> Iterable["Error"]:
		"""Yield leaf diagnostics in depth-first order."""
		yield self


class CheckFailed(Exception):
	"""Carries a diagnostic out of the checker's recursion."""

	def __init__(self, error: Error) -> None:
		super().__init__(error)
		self.error = error


# Parser-boundary diagnostics.


@dataclass(frozen=True)
class ExpectedFound(Error):
	span: Span
	expected: Tuple[str, ...]
	found: Optional[str]

	_code: ClassVar[int] = 1

	def _report(self) -> Report:
		headline = "Unexpected token in input" if self.found is not None else "Unexpected end of input"
		expected = ", ".join(self.expected) if self.expected else "something else"
		found = self.found if self.found is not None else "eof"
		return Report(
			f"{headline}, expected {expected}",
			[Label(f"Unexpected token '{found}'", Color.YELLOW, self.span)],
			[],
		)


@dataclass(frozen=True)
class Custom(Error):
	span: Span
	message: str

	_code: ClassVar[int] = 0

	def _report(self) -> Report:
		return Report(self.message, [Label("", Color.YELLOW, self.span)], [])


@dataclass(frozen=True)
class Many(Error):
	errors: Tuple[Error, ...] = ()

	def make_report(self) -> List[Report]:
		reports: List[Report] = []
		for err in self.errors:
			reports.extend(err.make_report())
		return reports

	def code(self) -> int:
		return max((err.code() for err in self.errors), default=0)

	def leaves(self) -> Iterable[Error]:
		for err in self.errors:
			yield from err.leaves()


# Type checker diagnostics.


@dataclass(frozen=True)
class UndefinedVariable(Error):
	name: str
	span: Span

	_code: ClassVar[int] = 2

	def _report(self) -> Report:
		return Report(
			f"Undefined variable '{self.name}'",
			[Label("not found in this scope", Color.YELLOW, self.span)],
			[],
		)


@dataclass(frozen=True)
class CannotInferType(Error):
	span: Span

	_code: ClassVar[int] = 3

	def _report(self) -> Report:
		return Report(
			"Cannot infer type",
			[Label("Cannot infer the type of this expression", Color.YELLOW, self.span)],
			["help: try adding a type annotation"],
		)


@dataclass(frozen=True)
class TypeMismatch(Error):
	span1: Span
	span2: Span
	ty1: TypeInfo
	ty2: TypeInfo

	_code: ClassVar[int] = 4

	def _report(self) -> Report:
		return Report(
			"Type mismatch",
			[
				Label(f"Type '{self.ty1}' here", Color.YELLOW, self.span1),
				Label(f"Type '{self.ty2}' here", Color.YELLOW, self.span2),
			],
			[],
		)


@dataclass(frozen=True)
class CannotApplyUnaryOperator(Error):
	span: Span
	op: "UnaryOp"
	ty: Type

	_code: ClassVar[int] = 5

	def _report(self) -> Report:
		return Report(
			f"Cannot apply operator '{self.op}' to type '{self.ty}'",
			[Label(f"Cannot apply this operator to type '{self.ty}'", Color.YELLOW, self.span)],
			[],
		)


@dataclass(frozen=True)
class CannotApplyBinaryOperator(Error):
	span: Span
	op: "BinaryOp"
	ty1: Type
	ty2: Type

	_code: ClassVar[int] = 6

	def _report(self) -> Report:
		return Report(
			f"Cannot apply binary operator '{self.op}' to types '{self.ty1}' and '{self.ty2}'",
			[
				Label(
					f"Cannot apply this operator to types '{self.ty1}' and '{self.ty2}'",
					Color.YELLOW,
					self.span,
				)
			],
			[],
		)


def combine(errors: Iterable[Error]) -> Optional[Error]:
	"""
	Fold a sequence of diagnostics into one value.

	Returns None for an empty sequence and the diagnostic itself when there is
	exactly one; otherwise wraps them in `Many`, preserving order.
	"""
	collected = tuple(errors)
	if not collected:
		return None
	if len(collected) == 1:
		return collected[0]
	return Many(collected)


__all__ = [
	"Color",
	"Label",
	"Report",
	"Error",
	"CheckFailed",
	"ExpectedFound",
	"Custom",
	"Many",
	"UndefinedVariable",
	"CannotInferType",
	"TypeMismatch",
	"CannotApplyUnaryOperator",
	"CannotApplyBinaryOperator",
	"combine",
]
