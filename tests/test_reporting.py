from hubrunner.models.batch import RunVerdict
from hubrunner.ui.reporting import (
    format_fault,
    get_version,
    print_agent_error,
    print_script_error,
    print_tally,
)

from dummies import make_console, output


def test_tally_all_passed():
	console = make_console()
	print_tally(console, RunVerdict(passed=6, failed=0, duration_ms=42))
	assert output(console) == "6 tests passed! (42ms)\n"


def test_tally_failures():
	console = make_console()
	print_tally(console, RunVerdict(passed=2, failed=1, duration_ms=7))
	assert output(console) == "Failures: 1 of 3 tests failed. (7ms)\n"


def test_script_error_block():
	console = make_console()
	print_script_error(console, "Safari 17", {
	    "message": "ReferenceError: x is not defined",
	    "url": "http://hub/test.html",
	    "line": 12,
	})
	assert output(console).splitlines() == [
	    "✖ Script error: ReferenceError: x is not defined",
	    "  URL: http://hub/test.html",
	    "  Line: 12",
	    "  User-Agent: Safari 17",
	]


def test_agent_error_block():
	console = make_console()
	print_agent_error(console, "Chrome", {"message": "Timed out"})
	assert output(console).splitlines() == [
	    "✖ Error: Timed out",
	    "  User-Agent: Chrome",
	]


def _raise_and_capture():
	try:
		raise RuntimeError("kaboom")
	except RuntimeError as exc:
		return exc


def test_fault_report_non_tty_is_compact():
	text = format_fault(_raise_and_capture(), tty=False,
	                    bug_url="https://bugs.example", app_version="1.2.3")
	plain = text.plain
	assert plain.startswith("hubrunner v1.2.3 (Python ")
	assert "Error: Traceback" in plain
	assert "RuntimeError: kaboom" in plain
	assert plain.endswith("Report this bug at https://bugs.example")


def test_fault_report_tty_has_context():
	text = format_fault(_raise_and_capture(), tty=True,
	                    bug_url="https://bugs.example", app_version="1.2.3")
	plain = text.plain
	assert plain.startswith("✖ Whoops!")
	assert "RuntimeError: kaboom" in plain
	assert "please report it" in plain
	assert "https://bugs.example" in plain
	assert "hubrunner v1.2.3" in plain
	assert "Python " in plain


def test_get_version_returns_string():
	assert isinstance(get_version(), str)
	assert get_version()
