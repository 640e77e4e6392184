"""
Protocol definitions for dependency injection.

Defines Protocol classes for the hub, the hub client and the batch
handle so the orchestration layer can be driven by any backend and
tested with fake implementations.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

EventHandler = Callable[..., Any]


class BatchProtocol(Protocol):
	"""
	Protocol for a submitted batch.

	A batch is a source of named events (``dispatch``, ``agentResult``,
	``agentScriptError``, ``agentError``, ``agentProgress``, ``agentBeat``,
	``agentComplete``, ``complete``). Handlers receive the event payload
	positionally, agent identifier first.
	"""

	def on(self, event: str, handler: EventHandler) -> Any:
		"""Register a handler for a named batch event."""
		...


class HubClientProtocol(Protocol):
	"""
	Protocol for a hub client connection.

	Defines the expected methods for talking to a hub.
	"""

	async def connect(self) -> Any:
		"""Connect to the hub; raise OSError on failure."""
		...

	async def get_agents(self) -> list[str]:
		"""Return identifiers of the agents currently attached."""
		...

	def create_batch(self, options: dict) -> BatchProtocol:
		"""Submit ``{"basedir", "tests"}`` and return the batch handle."""
		...

	def on(self, event: str, handler: EventHandler) -> Any:
		"""Register a handler for ``agentConnect`` / ``agentDisconnect``."""
		...

	async def close(self) -> Any:
		"""Close the connection and release resources."""
		...


class HubProtocol(Protocol):
	"""
	Protocol for a hub server.

	``listen`` raises ``OSError`` with ``errno.EADDRINUSE`` when the port
	is already bound.
	"""

	async def listen(self, port: int) -> Any:
		"""Bind and start serving on the given port."""
		...

	async def wait_closed(self) -> Any:
		"""Wait until the hub stops serving."""
		...

	async def close(self) -> Any:
		"""Stop serving."""
		...


__all__ = [
    "EventHandler",
    "BatchProtocol",
    "HubClientProtocol",
    "HubProtocol",
]
