# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Core data shared across numlang: spans, the type core, lexical scopes and
diagnostics. Nothing in here depends on the parser or the checker.
"""

from .span import Span, line_col
from .types_core import Known, Ref, Type, TypeId, TypeInfo, Unknown
from .scopes import Scopes

__all__ = [
	"Span",
	"line_col",
	"Type",
	"TypeId",
	"TypeInfo",
	"Unknown",
	"Ref",
	"Known",
	"Scopes",
]
