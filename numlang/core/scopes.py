# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lexical scope stack.

A plain stack of dicts, innermost frame last. Lookups walk from the innermost
frame outwards; inserts only ever touch the innermost frame, so rebinding a
name in the same frame overwrites it and a nested frame shadows without
merging. Frames are discarded wholesale on pop.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Generic, Hashable, Iterator, List, Optional, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Scopes(Generic[K, V]):
	def __init__(self) -> None:
		self._frames: List[Dict[K, V]] = []

	@property
	def depth(self) -> int:
		return len(self._frames)

	def push_scope(self) -> None:
		self._frames.append({})
		logger.debug("push scope (depth=%d)", len(self._frames))

	def pop_scope(self) -> None:
		if not self._frames:
			raise RuntimeError("pop_scope called with no open scope")
		self._frames.pop()
		logger.debug("pop scope (depth=%d)", len(self._frames))

	@contextmanager
	def scope(self) -> Iterator[None]:
		"""Push a frame for the duration of the `with` body."""
		self.push_scope()
		try:
			yield
		finally:
			self.pop_scope()

	def insert(self, key: K, value: V) -> None:
		if not self._frames:
			raise RuntimeError("insert called with no open scope")
		self._frames[-1][key] = value

	def get(self, key: K) -> Optional[V]:
		for frame in reversed(self._frames):
			if key in frame:
				return frame[key]
		return None

	def __contains__(self, key: object) -> bool:
		return any(key in frame for frame in self._frames)

	def __repr__(self) -> str:
		return f"Scopes({self._frames!r})"


__all__ = ["Scopes"]
