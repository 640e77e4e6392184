"""
Agent readiness.

Decides, from the agents already attached to the hub, whether a batch
can be submitted now, must fail, or has to wait for the operator.
"""

from __future__ import annotations

import sys

from rich.console import Console

from hubrunner.errors import NoAgentsAvailableError
from hubrunner.utils.logging import get_logger, sanitize_text
from hubrunner.utils.prompt import ConfirmFn, read_line
from hubrunner.utils.protocols import HubClientProtocol

logger = get_logger(__name__)

CONFIRM_PROMPT = "When ready, press Enter to begin testing.\n"


def stderr_is_interactive() -> bool:
	"""Return True when stderr is attached to a terminal."""
	return sys.stderr.isatty()


class AgentNotifier:
	"""Log agents attaching to and leaving the hub."""

	def __init__(self, console: Console) -> None:
		self.console = console
		self.connected: list[str] = []

	def on_connect(self, agent: str) -> None:
		self.connected.append(agent)
		self.console.print(f"  Agent connected: {agent}", highlight=False)

	def on_disconnect(self, agent: str) -> None:
		if agent in self.connected:
			self.connected.remove(agent)
		self.console.print(f"  Agent disconnected: {agent}", highlight=False)

	def attach(self, client: HubClientProtocol) -> None:
		client.on("agentConnect", self.on_connect)
		client.on("agentDisconnect", self.on_disconnect)


async def wait_for_agents(
    client: HubClientProtocol,
    console: Console,
    url: str,
    *,
    interactive: bool | None = None,
    confirm: ConfirmFn | None = None,
) -> list[str]:
	"""
	Wait until the batch may be submitted.

	Every agent already attached is announced as connected. With no
	agents, a non-interactive run fails at once; an interactive run
	waits for the operator to press Enter.

	Parameters:
		client: Connected hub client.
		console: Console for operator messages.
		url: Hub URL, shown while waiting.
		interactive: Whether stderr is a terminal. Detected when None.
		confirm: Coroutine reading the confirmation line.

	Returns:
		Agents attached when the decision was made.

	Raises:
		NoAgentsAvailableError: No agents and nobody to wait for them.
	"""
	if interactive is None:
		interactive = stderr_is_interactive()
	notifier = AgentNotifier(console)
	notifier.attach(client)

	agents = list(await client.get_agents())
	for agent in agents:
		notifier.on_connect(agent)

	if agents:
		logger.debug("%d agent(s) attached, submitting", len(agents))
		return agents

	if not interactive:
		# Probably driven by another program; waiting could hang forever.
		raise NoAgentsAvailableError(sanitize_text(url))

	console.print(f"Waiting for agents to connect at {sanitize_text(url)}.",
	              highlight=False)
	if confirm is None:
		await read_line(CONFIRM_PROMPT, console)
	else:
		await confirm(CONFIRM_PROMPT)
	return list(notifier.connected)


__all__ = [
    "CONFIRM_PROMPT",
    "AgentNotifier",
    "stderr_is_interactive",
    "wait_for_agents",
]
