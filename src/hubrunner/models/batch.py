"""
Batch models.

Defines the immutable batch request, the run-scoped aggregate that
event handlers fold results into, and the derived verdict.
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from .results import AgentOutcome


class BatchRequest(BaseModel):
	"""Test files submitted as one batch."""

	model_config = ConfigDict(frozen=True)

	basedir: Path
	tests: Tuple[str, ...]

	@classmethod
	def from_files(cls, files: list[str],
	               basedir: Path | None = None) -> "BatchRequest":
		"""Build a request rooted at ``basedir`` (default: cwd)."""
		return cls(basedir=(basedir or Path.cwd()).resolve(),
		           tests=tuple(files))

	def as_options(self) -> dict:
		"""Return the options mapping passed to ``create_batch``."""
		return {"basedir": str(self.basedir), "tests": list(self.tests)}


class RunVerdict(BaseModel):
	"""Final verdict of a run, computed once at ``complete``."""

	model_config = ConfigDict(frozen=True)

	passed: int
	failed: int
	duration_ms: int = 0

	@property
	def total(self) -> int:
		return self.passed + self.failed

	@property
	def success(self) -> bool:
		return self.failed == 0

	@property
	def exit_code(self) -> int:
		return 0 if self.success else 1


class ProgressSnapshot(BaseModel):
	"""Point-in-time view of a run used for rendering."""

	model_config = ConfigDict(frozen=True)

	current: int = 0
	total: int = 0
	beats: int = 0
	elapsed_ms: float = 0.0
	spin_index: int = 0

	@property
	def percent(self) -> float:
		if not self.total:
			return 0.0
		return self.current / self.total * 100

	@property
	def tests_per_second(self) -> float:
		if self.elapsed_ms <= 0:
			return 0.0
		return (self.beats * 1000) / self.elapsed_ms


class BatchAggregate(BaseModel):
	"""Counters accumulated over one batch.

	``total_expected`` starts as the number of test files and is
	multiplied by the agent count once the batch is dispatched.
	"""

	passed: int = Field(default=0, ge=0)
	failed: int = Field(default=0, ge=0)
	current_index: int = Field(default=0, ge=0)
	total_expected: int = Field(default=0, ge=0)

	@classmethod
	def for_request(cls, request: BatchRequest) -> "BatchAggregate":
		return cls(total_expected=len(request.tests))

	def record_dispatch(self, agent_count: int) -> None:
		self.total_expected *= agent_count

	def record_result(self, outcome: AgentOutcome) -> None:
		self.current_index += 1
		self.passed += outcome.passed
		self.failed += outcome.failed

	def verdict(self, duration_ms: int = 0) -> RunVerdict:
		return RunVerdict(passed=self.passed, failed=self.failed,
		                  duration_ms=duration_ms)


__all__ = [
    "BatchRequest",
    "BatchAggregate",
    "ProgressSnapshot",
    "RunVerdict",
]
