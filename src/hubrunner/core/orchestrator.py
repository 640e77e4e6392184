"""
Batch orchestration.

Submits a batch to a connected hub client, folds the per-agent event
stream into a ``BatchAggregate`` and resolves with the run verdict at
the ``complete`` event.

All handlers run on the event loop thread the transport dispatches
from, so the aggregate is only ever touched by one handler at a time.
Events from different agents may interleave freely; the aggregate is
a pure sum plus a monotonically increasing index.
"""

from __future__ import annotations

import asyncio
import functools
import time
from typing import Any, Callable, Dict, Mapping, Optional

from rich.console import Console
from rich.text import Text

from hubrunner.errors import EmptyDispatchError
from hubrunner.models.batch import BatchAggregate, BatchRequest, RunVerdict
from hubrunner.models.results import AgentOutcome
from hubrunner.ui.progress import ProgressReporter
from hubrunner.ui.reporting import (
    print_agent_error,
    print_script_error,
    print_tally,
)
from hubrunner.ui.results import GOOD, print_failures
from hubrunner.utils.logging import get_logger
from hubrunner.utils.protocols import (
    BatchProtocol,
    EventHandler,
    HubClientProtocol,
)

logger = get_logger(__name__)


def _as_mapping(details: Any) -> Mapping[str, Any]:
	if isinstance(details, Mapping):
		return details
	return {"message": str(details)} if details is not None else {}


class BatchOrchestrator:
	"""Drive one batch from submission to verdict."""

	def __init__(
	    self,
	    client: HubClientProtocol,
	    request: BatchRequest,
	    console: Console,
	    *,
	    clock: Callable[[], float] = time.monotonic,
	) -> None:
		"""
		Initialize the orchestrator.

		Parameters:
			client: Connected hub client.
			request: Files to submit.
			console: Console for operator output.
			clock: Monotonic clock in seconds, injectable for tests.
		"""
		self.client = client
		self.request = request
		self.console = console
		self.clock = clock
		self.aggregate = BatchAggregate.for_request(request)
		self.progress = ProgressReporter(console, clock)
		self.started_at = clock()
		self.verdict: Optional[RunVerdict] = None
		self.error: Optional[BaseException] = None
		self._done: Optional[asyncio.Future[RunVerdict]] = None

	@property
	def finished(self) -> bool:
		return self.verdict is not None or self.error is not None

	def handlers(self) -> Dict[str, EventHandler]:
		"""Return the handler for every batch event, keyed by event name."""
		table: Dict[str, EventHandler] = {
		    "dispatch": self.on_dispatch,
		    "agentResult": self.on_agent_result,
		    "agentScriptError": self.on_agent_script_error,
		    "agentError": self.on_agent_error,
		    "agentProgress": self.on_agent_progress,
		    "agentBeat": self.on_agent_beat,
		    "agentComplete": self.on_agent_complete,
		    "complete": self.on_complete,
		}
		return {name: self._guarded(name, h) for name, h in table.items()}

	def _guarded(self, event: str, handler: EventHandler) -> EventHandler:
		"""Drop events after the run ended; turn handler errors into a failure."""

		@functools.wraps(handler)
		def wrapper(*args: Any) -> None:
			if self.finished:
				logger.debug("ignoring %s after run ended", event)
				return
			try:
				handler(*args)
			except Exception as exc:
				logger.debug("%s handler failed", event, exc_info=True)
				self._fail(exc)

		return wrapper

	def submit(self) -> BatchProtocol:
		"""Create the batch and subscribe to its events."""
		logger.debug("submitting %d test file(s) from %s",
		             len(self.request.tests), self.request.basedir)
		batch = self.client.create_batch(self.request.as_options())
		for event, handler in self.handlers().items():
			batch.on(event, handler)
		return batch

	async def run(self) -> RunVerdict:
		"""Submit the batch and wait for its verdict.

		Raises:
			EmptyDispatchError: The batch was dispatched to no agents.
		"""
		self._done = asyncio.get_running_loop().create_future()
		self.submit()
		return await self._done

	def _finish(self, verdict: RunVerdict) -> None:
		self.verdict = verdict
		if self._done is not None and not self._done.done():
			self._done.set_result(verdict)

	def _fail(self, exc: BaseException) -> None:
		if self.finished:
			return
		self.progress.finish()
		self.error = exc
		if self._done is not None and not self._done.done():
			self._done.set_exception(exc)

	def _say(self, text: Text | str) -> None:
		self.progress.finish()
		self.console.print(text, soft_wrap=True, highlight=False)

	def on_dispatch(self, agents: list[str]) -> None:
		agents = list(agents or [])
		if not agents:
			self._fail(EmptyDispatchError())
			return
		self._say(
		    Text.assemble((GOOD, "green"), " Testing started on ",
		                  ", ".join(agents)))
		self.aggregate.record_dispatch(len(agents))

	def on_agent_result(self, agent: str, details: Mapping[str, Any]) -> None:
		outcome = AgentOutcome.from_payload(agent, _as_mapping(details))
		self.aggregate.record_result(outcome)
		logger.debug("result from %s: %d passed, %d failed", agent,
		             outcome.passed, outcome.failed)
		if outcome.failed:
			self.progress.finish()
			print_failures(self.console, outcome)

	def on_agent_script_error(self, agent: str, details: Any) -> None:
		self.progress.finish()
		print_script_error(self.console, agent, _as_mapping(details))

	def on_agent_error(self, agent: str, details: Any) -> None:
		self.progress.finish()
		print_agent_error(self.console, agent, _as_mapping(details))

	def on_agent_progress(self, agent: str, *details: Any) -> None:
		self.progress.update(self.aggregate)

	def on_agent_beat(self, agent: str, *details: Any) -> None:
		self.progress.beat()
		self.progress.update(self.aggregate)

	def on_agent_complete(self, agent: str, *details: Any) -> None:
		self._say(Text.assemble((GOOD, "green"), " Agent completed: ", agent))

	def on_complete(self, *details: Any) -> None:
		self.progress.update(self.aggregate)
		self.progress.finish()
		duration_ms = int((self.clock() - self.started_at) * 1000)
		verdict = self.aggregate.verdict(duration_ms)
		print_tally(self.console, verdict)
		logger.debug("batch complete: %d passed, %d failed in %dms",
		             verdict.passed, verdict.failed, duration_ms)
		self._finish(verdict)


__all__ = ["BatchOrchestrator"]
