# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
numlang: front end and static type checker for a small expression language.

Pipeline:
  parser        source text -> syntax tree (lark)
  type_checker  syntax tree -> typed tree or diagnostics
                (scopes in core.scopes, inference in infer)

The CLI entrypoint is `numlang.numc:main`.
"""

__version__ = "0.1.0"

__all__ = ["core", "parser", "infer", "type_checker", "typed_ast", "numc"]
