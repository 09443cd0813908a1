# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Lexical scope stack: push/pop, shadowing, lookup order."""

import pytest

from numlang.core.scopes import Scopes


def test_lookup_walks_from_innermost_frame():
	scopes: Scopes[str, int] = Scopes()
	scopes.push_scope()
	scopes.insert("x", 1)
	scopes.push_scope()
	scopes.insert("x", 2)
	assert scopes.get("x") == 2
	scopes.pop_scope()
	assert scopes.get("x") == 1


def test_outer_bindings_visible_from_inner_frame():
	scopes: Scopes[str, int] = Scopes()
	scopes.push_scope()
	scopes.insert("x", 1)
	scopes.push_scope()
	assert scopes.get("x") == 1
	assert "x" in scopes


def test_insert_overwrites_within_same_frame():
	scopes: Scopes[str, int] = Scopes()
	scopes.push_scope()
	scopes.insert("x", 1)
	scopes.insert("x", 2)
	assert scopes.get("x") == 2
	scopes.pop_scope()
	assert scopes.get("x") is None


def test_pop_discards_frame_bindings():
	scopes: Scopes[str, int] = Scopes()
	scopes.push_scope()
	scopes.push_scope()
	scopes.insert("y", 3)
	scopes.pop_scope()
	assert scopes.get("y") is None
	assert scopes.depth == 1


def test_missing_key_is_none():
	scopes: Scopes[str, int] = Scopes()
	scopes.push_scope()
	assert scopes.get("nope") is None


def test_pop_without_frame_is_programmer_error():
	scopes: Scopes[str, int] = Scopes()
	with pytest.raises(RuntimeError):
		scopes.pop_scope()


def test_insert_without_frame_is_programmer_error():
	scopes: Scopes[str, int] = Scopes()
	with pytest.raises(RuntimeError):
		scopes.insert("x", 1)


def test_scope_context_manager_pops_on_error():
	scopes: Scopes[str, int] = Scopes()
	scopes.push_scope()
	with pytest.raises(ValueError):
		with scopes.scope():
			scopes.insert("tmp", 1)
			raise ValueError("boom")
	assert scopes.depth == 1
	assert scopes.get("tmp") is None


def test_generic_over_key_and_value_types():
	scopes: Scopes[tuple, str] = Scopes()
	scopes.push_scope()
	scopes.insert((1, 2), "pair")
	assert scopes.get((1, 2)) == "pair"
