# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Minimal type core shared by the inference engine and the checker.

`Type` is the closed set of concrete types an expression can resolve to. The
language currently has a single numeric type; new primitive kinds are added by
extending the enum and the operator tables in the checker.

`TypeInfo` is what an inference slot holds while solving: nothing yet
(`Unknown`), "same as that other slot" (`Ref`), or a concrete type (`Known`).
All three are immutable values so diagnostics can keep snapshots of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


TypeId = int  # opaque handle into the inference engine


class Type(Enum):
	"""Concrete types understood by the checker."""

	NUM = "Num"

	def __str__(self) -> str:
		return self.value


@dataclass(frozen=True)
class Unknown:
	"""Slot with no information yet."""

	def __str__(self) -> str:
		return "Unknown"


@dataclass(frozen=True)
class Ref:
	"""Slot that resolves by following another slot."""

	target: TypeId

	def __str__(self) -> str:
		return f"Ref({self.target})"


@dataclass(frozen=True)
class Known:
	"""Slot resolved to a concrete type."""

	ty: Type

	def __str__(self) -> str:
		return str(self.ty)


TypeInfo = Union[Unknown, Ref, Known]


def type_to_info(ty: Type) -> TypeInfo:
	return Known(ty)


__all__ = ["Type", "TypeId", "TypeInfo", "Unknown", "Ref", "Known", "type_to_info"]
