# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
numc: command-line driver for the numlang front end and type checker.

Parses a source file, type checks it and reports diagnostics. The exit status
is 0 on success and the diagnostic code otherwise (1 when the code is 0, so a
failure never exits cleanly).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from numlang.core.diagnostics import Error, Report
from numlang.core.span import line_col
from numlang.parser import parse_source
from numlang.type_checker import CheckOptions, typecheck
from numlang.typed_ast import format_program

logger = logging.getLogger(__name__)


def exit_code_for(error: Error) -> int:
	return error.code() or 1


def format_report(report: Report, code: int, source: str, path: Path) -> str:
	"""Render one report as plain text: headline, one line per label, then notes."""
	lines = [f"error[E{code}]: {report.message}"]
	for label in report.labels:
		line, column = line_col(source, label.span.start)
		location = f"{path}:{line}:{column}"
		lines.append(f"  --> {location}: {label.text}" if label.text else f"  --> {location}")
	for note in report.notes:
		lines.append(f"  = {note}")
	return "\n".join(lines)


def _report_to_json(report: Report, code: int, phase: str, source: str, path: Path) -> dict:
	"""Render a Report to a structured JSON-friendly dict."""
	line: Optional[int] = None
	column: Optional[int] = None
	if report.labels:
		line, column = line_col(source, report.labels[0].span.start)
	labels = []
	for label in report.labels:
		label_line, label_column = line_col(source, label.span.start)
		labels.append(
			{
				"text": label.text,
				"color": label.color.value,
				"start": label.span.start,
				"end": label.span.end,
				"line": label_line,
				"column": label_column,
			}
		)
	return {
		"phase": phase,
		"code": code,
		"message": report.message,
		"severity": "error",
		"file": str(path),
		"line": line,
		"column": column,
		"labels": labels,
		"notes": list(report.notes),
	}


def main(argv: List[str] | None = None) -> int:
	"""
	Parse and type check a numlang file.

	With --json, prints `{"exit_code": ..., "diagnostics": [...]}` to stdout;
	otherwise prints human-readable diagnostics to stderr.
	"""
	ap = argparse.ArgumentParser(prog="numc", description="numc: numlang parser and type checker")
	ap.add_argument("source", type=Path, help="numlang source file")
	ap.add_argument("--json", action="store_true", help="Emit diagnostics as JSON on stdout")
	ap.add_argument(
		"--accumulate",
		action="store_true",
		help="Keep checking after a failure and report every independent diagnostic",
	)
	ap.add_argument("--dump-typed", action="store_true", help="Print the typed tree on success")
	ap.add_argument("-v", "--verbose", action="store_true", help="Log checker internals to stderr")
	args = ap.parse_args(argv)

	if args.verbose:
		logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

	try:
		source = args.source.read_text()
	except OSError as err:
		msg = f"cannot read {args.source}: {err.strerror or err}"
		if args.json:
			print(json.dumps({"exit_code": 1, "diagnostics": [{"phase": "driver", "message": msg, "severity": "error", "file": str(args.source), "line": None, "column": None, "labels": [], "notes": []}]}))
		else:
			print(f"error: {msg}", file=sys.stderr)
		return 1

	phase = "parser"
	parsed = parse_source(source)
	error = parsed.error
	typed = None
	if error is None:
		phase = "typecheck"
		logger.debug("parsed %s: %d statements", args.source, len(parsed.program.statements))
		result = typecheck(parsed.program, CheckOptions(accumulate=args.accumulate))
		error = result.error
		typed = result.typed

	if error is not None:
		exit_code = exit_code_for(error)
		# Each report carries the code of the leaf diagnostic it came from.
		reports = [(leaf.code(), r) for leaf in error.leaves() for r in leaf.make_report()]
		if args.json:
			print(
				json.dumps(
					{
						"exit_code": exit_code,
						"diagnostics": [_report_to_json(r, code, phase, source, args.source) for code, r in reports],
					}
				)
			)
		else:
			for code, report in reports:
				print(format_report(report, code, source, args.source), file=sys.stderr)
		return exit_code

	if args.json:
		print(json.dumps({"exit_code": 0, "diagnostics": []}))
	elif args.dump_typed and typed is not None:
		print(format_program(typed))
	return 0


if __name__ == "__main__":
	raise SystemExit(main())
