# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Inference engine: slot allocation, unification and reconstruction."""

from enum import Enum

import pytest

from numlang.core.diagnostics import CannotInferType, CheckFailed, TypeMismatch
from numlang.core.span import Span
from numlang.core.types_core import Known, Ref, Type, Unknown
from numlang.infer import Engine


class _FakeType(Enum):
	"""Second concrete type, only used to exercise the mismatch path."""

	BOOL = "Bool"

	def __str__(self) -> str:
		return self.value


def test_insert_allocates_increasing_ids():
	engine = Engine()
	a = engine.insert(Unknown(), Span(0, 1))
	b = engine.insert(Known(Type.NUM), Span(2, 3))
	assert a == 1
	assert b == 2
	assert len(engine) == 2
	assert engine.slot(b).info == Known(Type.NUM)
	assert engine.slot(b).span == Span(2, 3)


def test_unknown_becomes_reference_to_known():
	engine = Engine()
	a = engine.insert(Unknown(), Span(0, 1))
	b = engine.insert(Known(Type.NUM), Span(2, 3))
	engine.unify(a, b)
	assert engine.slot(a).info == Ref(b)
	assert engine.slot(a).span == Span(0, 1)
	assert engine.reconstruct(a) is Type.NUM


def test_known_then_unknown_rebinds_right_side():
	engine = Engine()
	a = engine.insert(Known(Type.NUM), Span(0, 1))
	b = engine.insert(Unknown(), Span(2, 3))
	engine.unify(a, b)
	assert engine.slot(a).info == Known(Type.NUM)
	assert engine.slot(b).info == Ref(a)


def test_two_unknowns_left_side_points_right():
	engine = Engine()
	a = engine.insert(Unknown(), Span(0, 1))
	b = engine.insert(Unknown(), Span(2, 3))
	engine.unify(a, b)
	assert engine.slot(a).info == Ref(b)
	assert engine.slot(b).info == Unknown()


def test_same_concrete_types_unify_without_mutation():
	engine = Engine()
	a = engine.insert(Known(Type.NUM), Span(0, 1))
	b = engine.insert(Known(Type.NUM), Span(2, 3))
	engine.unify(a, b)
	assert engine.slot(a).info == Known(Type.NUM)
	assert engine.slot(b).info == Known(Type.NUM)


def test_unify_follows_reference_chains_fully():
	engine = Engine()
	a = engine.insert(Unknown(), Span(0, 1))
	b = engine.insert(Unknown(), Span(1, 2))
	c = engine.insert(Unknown(), Span(2, 3))
	engine.unify(a, b)
	engine.unify(b, c)
	num = engine.insert(Known(Type.NUM), Span(3, 4))
	engine.unify(a, num)
	# The end of the chain is resolved, not the first link.
	assert engine.slot(c).info == Ref(num)
	assert engine.slot(a).info == Ref(b)
	for slot in (a, b, c):
		assert engine.reconstruct(slot) is Type.NUM


def test_unifying_slot_with_itself_through_chain_is_noop():
	engine = Engine()
	a = engine.insert(Unknown(), Span(0, 1))
	b = engine.insert(Unknown(), Span(1, 2))
	engine.unify(a, b)
	engine.unify(b, a)
	engine.unify(a, a)
	assert engine.slot(a).info == Ref(b)
	assert engine.slot(b).info == Unknown()


def test_concrete_mismatch_carries_both_original_spans():
	engine = Engine()
	a = engine.insert(Known(Type.NUM), Span(0, 1))
	b = engine.insert(Known(_FakeType.BOOL), Span(5, 9))
	with pytest.raises(CheckFailed) as excinfo:
		engine.unify(a, b)
	err = excinfo.value.error
	assert isinstance(err, TypeMismatch)
	assert err.span1 == Span(0, 1)
	assert err.span2 == Span(5, 9)
	assert err.ty1 == Known(Type.NUM)
	assert err.ty2 == Known(_FakeType.BOOL)
	# Failed unification leaves both slots untouched.
	assert engine.slot(a).info == Known(Type.NUM)
	assert engine.slot(b).info == Known(_FakeType.BOOL)


def test_mismatch_through_references_reports_conflicting_slots():
	engine = Engine()
	num = engine.insert(Known(Type.NUM), Span(0, 1))
	var = engine.insert(Unknown(), Span(10, 11))
	engine.unify(var, num)
	other = engine.insert(Known(_FakeType.BOOL), Span(20, 24))
	with pytest.raises(CheckFailed) as excinfo:
		engine.unify(var, other)
	err = excinfo.value.error
	assert isinstance(err, TypeMismatch)
	assert (err.span1, err.span2) == (Span(0, 1), Span(20, 24))


def test_reconstruct_unresolved_is_cannot_infer():
	engine = Engine()
	a = engine.insert(Unknown(), Span(4, 7))
	with pytest.raises(CheckFailed) as excinfo:
		engine.reconstruct(a)
	assert excinfo.value.error == CannotInferType(span=Span(4, 7))


def test_reconstruct_chain_ending_unresolved_reports_requested_span():
	engine = Engine()
	a = engine.insert(Unknown(), Span(0, 2))
	b = engine.insert(Unknown(), Span(8, 9))
	engine.unify(a, b)
	with pytest.raises(CheckFailed) as excinfo:
		engine.reconstruct(a)
	assert excinfo.value.error == CannotInferType(span=Span(0, 2))


def test_unknown_slot_id_is_key_error():
	engine = Engine()
	with pytest.raises(KeyError):
		engine.reconstruct(42)
