# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Constraint engine for type inference.

Type variables are integer ids into a single arena owned by the engine. Each
slot holds a `TypeInfo` (`Unknown`, `Ref` to another slot, or `Known`) plus the
span of the expression that created it. Unification links an unknown slot to
the other side with a `Ref`; reconstruction follows `Ref` chains down to a
concrete type.

This is union-find without rank or path compression. Constraint graphs are as
deep as the expression tree at most, so chains stay short; what matters is
that every chain is followed to its end before deciding anything.

Failures are raised as `CheckFailed` carrying the diagnostic value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

from numlang.core.diagnostics import CannotInferType, CheckFailed, TypeMismatch
from numlang.core.span import Span
from numlang.core.types_core import Known, Ref, Type, TypeId, TypeInfo, Unknown

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Slot:
	info: TypeInfo
	span: Span


class Engine:
	def __init__(self) -> None:
		self._id_counter: TypeId = 0
		self._vars: Dict[TypeId, Slot] = {}

	def __len__(self) -> int:
		return len(self._vars)

	def insert(self, info: TypeInfo, span: Span) -> TypeId:
		"""Allocate a new slot; ids start at 1 and are never reused."""
		self._id_counter += 1
		type_id = self._id_counter
		self._vars[type_id] = Slot(info, span)
		logger.debug("insert #%d = %s @ %s", type_id, info, span)
		return type_id

	def slot(self, type_id: TypeId) -> Slot:
		"""Snapshot of slot `type_id` (raises KeyError for ids never allocated)."""
		return self._vars[type_id]

	def _root(self, type_id: TypeId) -> TypeId:
		"""Follow `Ref` links from `type_id` to the first slot that is not a reference."""
		seen = set()
		while True:
			info = self._vars[type_id].info
			if not isinstance(info, Ref):
				return type_id
			if type_id in seen:
				raise RuntimeError(f"reference cycle through slot #{type_id}")
			seen.add(type_id)
			type_id = info.target

	def unify(self, a: TypeId, b: TypeId) -> None:
		"""
		Assert that slots `a` and `b` describe the same type.

		References are chased on both sides first. An unknown side is rebound to
		point at the other side (`a` wins when both are unknown). Two different
		concrete types raise `TypeMismatch` with both slots' spans and types.
		"""
		a = self._root(a)
		b = self._root(b)
		if a == b:
			return
		slot_a = self._vars[a]
		slot_b = self._vars[b]

		if isinstance(slot_a.info, Unknown):
			self._vars[a] = Slot(Ref(b), slot_a.span)
			logger.debug("unify #%d -> #%d", a, b)
			return
		if isinstance(slot_b.info, Unknown):
			self._vars[b] = Slot(Ref(a), slot_b.span)
			logger.debug("unify #%d -> #%d", b, a)
			return

		if isinstance(slot_a.info, Known) and isinstance(slot_b.info, Known):
			if slot_a.info.ty is slot_b.info.ty:
				return
			logger.debug("unify #%d (%s) with #%d (%s): mismatch", a, slot_a.info, b, slot_b.info)
			raise CheckFailed(
				TypeMismatch(
					span1=slot_a.span,
					span2=slot_b.span,
					ty1=slot_a.info,
					ty2=slot_b.info,
				)
			)
		raise RuntimeError(f"cannot unify {slot_a.info!r} with {slot_b.info!r}")

	def reconstruct(self, type_id: TypeId) -> Type:
		"""
		Resolve slot `type_id` to a concrete type.

		Raises `CannotInferType` at the slot's span when its chain ends in an
		unknown slot.
		"""
		span = self._vars[type_id].span
		info = self._vars[self._root(type_id)].info
		if isinstance(info, Known):
			return info.ty
		logger.debug("reconstruct #%d: unresolved", type_id)
		raise CheckFailed(CannotInferType(span=span))


__all__ = ["Engine", "Slot"]
