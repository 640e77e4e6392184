"""
Main orchestrator for a hub run.

Chains connection negotiation, agent readiness and batch
orchestration into one run, and starts standalone hubs.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from hubrunner.core.negotiator import negotiate_connection, start_hub
from hubrunner.core.orchestrator import BatchOrchestrator
from hubrunner.core.waiter import wait_for_agents
from hubrunner.hub_client import create_hub
from hubrunner.models.batch import BatchRequest, RunVerdict
from hubrunner.models.config import Config
from hubrunner.models.connection import HubCreatedLocally
from hubrunner.models.run_params import RunParams
from hubrunner.utils.logging import get_logger, sanitize_text
from hubrunner.utils.prompt import ConfirmFn

logger = get_logger(__name__)


async def run_batch(
    config: Config,
    run_params: RunParams,
    console: Console | None = None,
    *,
    interactive: bool | None = None,
    confirm: ConfirmFn | None = None,
    basedir: Path | None = None,
) -> RunVerdict:
	"""
	Run the batch described by ``run_params`` to completion.

	Ensures the client (and a locally created hub) are closed however
	the run ends.

	Parameters:
		config: Application configuration.
		run_params: Validated run parameters.
		console: Console for operator output. Defaults to stderr.
		interactive: Overrides terminal detection for the agent wait.
		confirm: Overrides the interactive confirmation reader.
		basedir: Base directory of the batch. Defaults to cwd.

	Returns:
		The run verdict.
	"""
	console = console or Console(stderr=True)
	request = BatchRequest.from_files(run_params.files, basedir)
	logger.debug("run_batch start files=%d basedir=%s", len(request.tests),
	             request.basedir)

	outcome = await negotiate_connection(config, console, run_params.hub)
	logger.debug("connection resolved: %s at %s",
	             type(outcome).__name__, sanitize_text(outcome.url))
	try:
		await wait_for_agents(
		    outcome.client,
		    console,
		    outcome.url,
		    interactive=interactive,
		    confirm=confirm,
		)
		verdict = await BatchOrchestrator(outcome.client, request,
		                                  console).run()
	finally:
		await outcome.client.close()
		if isinstance(outcome, HubCreatedLocally):
			await outcome.hub.close()
	logger.debug("run_batch done passed=%d failed=%d", verdict.passed,
	             verdict.failed)
	return verdict


async def start_server(config: Config, console: Console | None = None) -> None:
	"""Start a standalone hub and serve until it closes."""
	console = console or Console(stderr=True)
	hub = create_hub(config)
	await start_hub(hub, config.port)
	console.print(f"Hub listening on port {config.port}.", highlight=False)
	try:
		await hub.wait_closed()
	finally:
		await hub.close()


__all__ = ["run_batch", "start_server"]
