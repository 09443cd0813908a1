# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source span representation shared by the syntax tree, the typed tree and
diagnostics.

A Span is a half-open `[start, end)` offset pair into the source text. Spans are
copied from syntax nodes onto typed nodes unchanged; nothing downstream of the
parser synthesizes or merges them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Span:
	"""Half-open `[start, end)` offset range into the source."""

	start: int = 0
	end: int = 0

	def __post_init__(self) -> None:
		if self.start < 0 or self.end < self.start:
			raise ValueError(f"invalid span ({self.start}, {self.end})")

	def __str__(self) -> str:
		return f"{self.start}..{self.end}"

	def text(self, source: str) -> str:
		"""Return the slice of `source` covered by this span."""
		return source[self.start : self.end]


def line_col(source: str, offset: int) -> Tuple[int, int]:
	"""
	Map an offset to a 1-based `(line, column)` pair.

	Offsets past the end of the source clamp to the position just after the
	last character.
	"""
	offset = min(max(offset, 0), len(source))
	line = source.count("\n", 0, offset) + 1
	line_start = source.rfind("\n", 0, offset) + 1
	return line, offset - line_start + 1


__all__ = ["Span", "line_col"]
