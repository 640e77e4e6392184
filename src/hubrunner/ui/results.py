"""
Failure rendering for per-agent result trees.

Walks a parsed result tree and prints each failing test under the
top-level suite that owns it.
"""

from __future__ import annotations

from typing import Iterator, Tuple

from rich.console import Console
from rich.text import Text

from hubrunner.models.results import AgentOutcome, SuiteResult, TestResult

GOOD = "✔"
BAD = "✖"


def _walk(node: SuiteResult) -> Iterator[TestResult]:
	for child in node.children.values():
		if isinstance(child, SuiteResult):
			yield from _walk(child)
		elif child.failed:
			yield child


def iter_failures(tree: SuiteResult) -> Iterator[Tuple[str, TestResult]]:
	"""Yield ``(suite_name, test)`` for every failing test in ``tree``.

	Only top-level suites reporting failures are entered; the suite
	name is always the top-level one, however deep the test sits.
	"""
	for suite in tree.children.values():
		if not isinstance(suite, SuiteResult) or not suite.failed:
			continue
		for test in _walk(suite):
			yield suite.name, test


def failure_lines(tree: SuiteResult) -> list[Text]:
	"""Render the failure block for a tree, one ``Text`` per line."""
	lines: list[Text] = []
	last_suite: str | None = None
	for suite_name, test in iter_failures(tree):
		if suite_name != last_suite:
			lines.append(Text.assemble("   in ", (suite_name, "bold")))
			last_suite = suite_name
		first, *rest = test.message.split("\n")
		lines.append(
		    Text.assemble("     ", (test.name, "bold red"), ": ", first))
		for line in rest:
			lines.append(Text("       " + line))
	return lines


def print_failures(console: Console, outcome: AgentOutcome) -> None:
	"""Print the summary line and failure block for a failing agent."""
	console.print(
	    Text.assemble((BAD, "red"), " ", (outcome.name, "bold"), " on ",
	                  outcome.agent),
	    soft_wrap=True,
	    highlight=False,
	)
	for line in failure_lines(outcome.tree):
		console.print(line, soft_wrap=True, highlight=False)
	console.print("")


__all__ = [
    "GOOD",
    "BAD",
    "iter_failures",
    "failure_lines",
    "print_failures",
]
