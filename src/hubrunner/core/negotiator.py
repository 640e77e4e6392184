"""
Hub connection negotiation.

Connects to an existing hub when one answers, otherwise starts a hub
in this process and connects to that. Each path is attempted once.
"""

from __future__ import annotations

import asyncio
import errno

from rich.console import Console

from hubrunner.errors import BindConflictError, HubConnectionError
from hubrunner.hub_client import create_client, create_hub
from hubrunner.models.config import Config
from hubrunner.models.connection import (
    ConnectedToRemoteHub,
    ConnectionOutcome,
    HubCreatedLocally,
)
from hubrunner.utils.logging import get_logger, sanitize_text
from hubrunner.utils.protocols import HubProtocol

logger = get_logger(__name__)

CONNECT_ERRORS = (OSError, asyncio.TimeoutError, HubConnectionError)


async def start_hub(hub: HubProtocol, port: int) -> None:
	"""Start ``hub`` on ``port``, turning a bind conflict into a fatal error.

	Raises:
		BindConflictError: The port is already in use.
		OSError: Any other listen failure.
	"""
	try:
		await hub.listen(port)
	except OSError as exc:
		if exc.errno == errno.EADDRINUSE:
			raise BindConflictError(port) from exc
		raise
	logger.debug("hub listening on port %d", port)


async def create_local_hub(config: Config,
                           console: Console) -> HubCreatedLocally:
	"""Start a hub on the configured port and connect a client to it.

	Parameters:
		config: Application configuration (port, host, log level).
		console: Console for operator messages.

	Returns:
		HubCreatedLocally holding both handles.
	"""
	url = config.local_hub_url
	console.print(f"Creating a Hub at {url}", highlight=False)
	hub = create_hub(config)
	await start_hub(hub, config.port)
	try:
		client = create_client(url, config)
		await client.connect()
	except BaseException:
		await hub.close()
		raise
	return HubCreatedLocally(hub=hub, client=client, url=url)


async def negotiate_connection(
    config: Config,
    console: Console,
    requested_url: str | None = None,
) -> ConnectionOutcome:
	"""
	Resolve a working hub connection.

	Tries ``requested_url`` (or the configured default) once. When that
	fails, the failure is reported only if the URL was requested
	explicitly, and a local hub is created instead.

	Parameters:
		config: Application configuration.
		console: Console for operator messages.
		requested_url: Hub URL named by the operator, if any.

	Returns:
		ConnectedToRemoteHub or HubCreatedLocally.
	"""
	url = requested_url or config.hub_url
	client = create_client(url, config)
	try:
		await client.connect()
	except CONNECT_ERRORS as exc:
		shown = sanitize_text(url)
		if requested_url:
			console.print(
			    f"Unable to connect to Hub at {shown} with "
			    f"{sanitize_text(repr(exc))}",
			    highlight=False,
			)
		logger.debug("connect to %s failed, creating local hub", shown,
		             exc_info=True)
		# TODO: add a --no-fallback flag so a dead explicit hub fails the run
		return await create_local_hub(config, console)
	console.print(f"Connected to {sanitize_text(url)}", highlight=False)
	return ConnectedToRemoteHub(client=client, url=url)


__all__ = [
    "CONNECT_ERRORS",
    "start_hub",
    "create_local_hub",
    "negotiate_connection",
]
