"""
Operator-facing messages.

Renders per-agent error notices, the final tally and the report for
unhandled faults.
"""

from __future__ import annotations

import platform
import traceback
from importlib.metadata import PackageNotFoundError, version

from rich.console import Console
from rich.text import Text

from hubrunner.models.batch import RunVerdict
from hubrunner.ui.results import BAD, GOOD

PACKAGE_NAME = "hubrunner"


def get_version() -> str:
	"""Return the installed hubrunner version."""
	try:
		return version(PACKAGE_NAME)
	except PackageNotFoundError:
		return "0.0.0"


def _say(console: Console, *parts) -> None:
	console.print(Text.assemble(*parts), soft_wrap=True, highlight=False)


def print_script_error(console: Console, agent: str, details: dict) -> None:
	"""Report an uncaught script error raised inside an agent."""
	_say(console, (f"{BAD} Script error", "red"), ": ",
	     str(details.get("message", "")))
	_say(console, "  URL: ", str(details.get("url", "")))
	_say(console, "  Line: ", str(details.get("line", "")))
	_say(console, "  User-Agent: ", agent)


def print_agent_error(console: Console, agent: str, details: dict) -> None:
	"""Report an agent-level error."""
	_say(console, (f"{BAD} Error", "red"), ": ",
	     str(details.get("message", "")))
	_say(console, "  User-Agent: ", agent)


def print_tally(console: Console, verdict: RunVerdict) -> None:
	"""Print the aggregate pass/fail line."""
	duration = f"({verdict.duration_ms}ms)"
	if verdict.failed:
		_say(console, ("Failures", "red"), ": ",
		     f"{verdict.failed} of {verdict.total} tests failed. {duration}")
	else:
		_say(console, (f"{verdict.total} tests passed!", "green"), " ",
		     duration)


def format_fault(
    exc: BaseException,
    *,
    tty: bool,
    bug_url: str,
    app_version: str | None = None,
) -> Text:
	"""Format an unhandled fault with the context needed for a bug report.

	Parameters:
		exc: The exception that escaped the run.
		tty: Whether stderr is a terminal; picks the multi-line layout.
		bug_url: Where to report the bug.
		app_version: Version to show. Defaults to the installed version.

	Returns:
		Renderable text for stderr.
	"""
	app_version = app_version or get_version()
	trace = "".join(
	    traceback.format_exception(type(exc), exc,
	                               exc.__traceback__)).rstrip()
	py = platform.python_version()
	if tty:
		return Text.assemble(
		    (f"{BAD} Whoops!", "red"),
		    f" {trace}\n\n",
		    f"If you believe this is a bug in {PACKAGE_NAME}, please report it.\n",
		    "    ",
		    (bug_url, "bold"),
		    f"\n    {PACKAGE_NAME} v{app_version}\n",
		    f"    Python {py} ({platform.platform()})",
		)
	return Text(f"{PACKAGE_NAME} v{app_version} (Python {py}) Error: {trace}\n"
	            f"Report this bug at {bug_url}")


__all__ = [
    "GOOD",
    "BAD",
    "get_version",
    "print_script_error",
    "print_agent_error",
    "print_tally",
    "format_fault",
]
