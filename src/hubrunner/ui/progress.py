"""
Single-line progress display.

``render_progress`` is a pure function of a ``ProgressSnapshot``;
``ProgressReporter`` owns the spinner position, heartbeat count and
start time, and redraws the line in place on a terminal.
"""

from __future__ import annotations

import math
import time
from typing import Callable

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType

from hubrunner.models.batch import BatchAggregate, ProgressSnapshot

SPINNER = ("/", "|", "\\", "-")


def render_progress(snapshot: ProgressSnapshot) -> str:
	"""Render the progress line for ``snapshot``."""
	spin = SPINNER[snapshot.spin_index % len(SPINNER)]
	# half up, not half to even
	percent = math.floor(snapshot.percent + 0.5)
	return (f"Testing... {spin} {percent}% complete "
	        f"({snapshot.current}/{snapshot.total}) "
	        f"{snapshot.tests_per_second:.2f} tests/sec ")


class ProgressReporter:
	"""Redraw the progress line from the current batch counters."""

	def __init__(
	    self,
	    console: Console,
	    clock: Callable[[], float] = time.monotonic,
	) -> None:
		self.console = console
		self.clock = clock
		self.started_at = clock()
		self.beats = 0
		self.spin_index = 0
		self._last_counts: tuple[int, int] | None = None
		self._dirty = False

	def beat(self) -> None:
		"""Count one heartbeat."""
		self.beats += 1

	def elapsed_ms(self) -> float:
		return (self.clock() - self.started_at) * 1000

	def snapshot(self, aggregate: BatchAggregate) -> ProgressSnapshot:
		return ProgressSnapshot(
		    current=aggregate.current_index,
		    total=aggregate.total_expected,
		    beats=self.beats,
		    elapsed_ms=self.elapsed_ms(),
		    spin_index=self.spin_index,
		)

	def update(self, aggregate: BatchAggregate) -> str:
		"""Draw the progress line for ``aggregate`` and advance the spinner.

		On a terminal the line is redrawn in place on every call. Otherwise
		a plain line is written only when the counts change, so heartbeats
		do not flood captured logs.
		"""
		line = render_progress(self.snapshot(aggregate))
		counts = (aggregate.current_index, aggregate.total_expected)
		if self.console.is_terminal:
			self.console.control(
			    Control(ControlType.CARRIAGE_RETURN,
			            (ControlType.ERASE_IN_LINE, 2)))
			self.console.print(line, end="", highlight=False, soft_wrap=True)
			self._dirty = True
		elif counts != self._last_counts:
			self.console.print(line, highlight=False, soft_wrap=True)
		self._last_counts = counts
		self.spin_index = (self.spin_index + 1) % len(SPINNER)
		return line

	def finish(self) -> None:
		"""Move past the in-place line so later output starts fresh."""
		if self._dirty:
			self.console.line()
			self._dirty = False


__all__ = ["SPINNER", "render_progress", "ProgressReporter"]
