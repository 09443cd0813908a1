# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
numlang front end.

`parse_program` parses source text into the syntax tree consumed by the type
checker and lets lark errors propagate. `parse_source` is the driver-facing
variant: it collects parser failures as diagnostics instead of throwing, so
callers can report them the same way as checker diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lark.exceptions import UnexpectedInput

from numlang.core.diagnostics import Custom, Error
from numlang.core.span import Span

from . import ast
from .parser import TreeShapeError, error_from_lark, parse_program


@dataclass(frozen=True)
class ParseResult:
	program: Optional[ast.Program]
	error: Optional[Error] = None

	@property
	def ok(self) -> bool:
		return self.error is None


def parse_source(source: str) -> ParseResult:
	try:
		program = parse_program(source)
	except UnexpectedInput as err:
		return ParseResult(program=None, error=error_from_lark(err, source))
	except TreeShapeError as err:
		return ParseResult(program=None, error=Custom(span=err.span, message=str(err)))
	except RecursionError:
		return ParseResult(
			program=None,
			error=Custom(span=Span(0, len(source)), message="Expression nesting too deep"),
		)
	return ParseResult(program=program)


__all__ = ["ast", "ParseResult", "parse_program", "parse_source", "error_from_lark"]
