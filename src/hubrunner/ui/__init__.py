"""User interface components.

This subpackage renders everything the operator sees on stderr.

Key modules:
    - progress: In-place progress line
    - results: Failure blocks walked from agent result trees
    - reporting: Agent error notices, final tally, fault reports
"""

from hubrunner.ui.progress import SPINNER, ProgressReporter, render_progress
from hubrunner.ui.results import (
    GOOD,
    BAD,
    failure_lines,
    iter_failures,
    print_failures,
)
from hubrunner.ui.reporting import (
    format_fault,
    get_version,
    print_agent_error,
    print_script_error,
    print_tally,
)

__all__ = [
    "SPINNER",
    "ProgressReporter",
    "render_progress",
    "GOOD",
    "BAD",
    "failure_lines",
    "iter_failures",
    "print_failures",
    "format_fault",
    "get_version",
    "print_agent_error",
    "print_script_error",
    "print_tally",
]
