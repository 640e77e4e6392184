import pytest

from hubrunner.core.waiter import CONFIRM_PROMPT, wait_for_agents
from hubrunner.errors import NoAgentsAvailableError

from dummies import DummyClient, make_console, output


@pytest.mark.asyncio
async def test_attached_agents_proceed_immediately():
	client = DummyClient(agents=["Chrome", "Firefox"])
	console = make_console()
	prompts = []

	async def confirm(prompt):
		prompts.append(prompt)
		return ""

	agents = await wait_for_agents(client, console, "http://hub",
	                               interactive=False, confirm=confirm)

	assert agents == ["Chrome", "Firefox"]
	assert prompts == []
	text = output(console)
	assert "  Agent connected: Chrome" in text
	assert "  Agent connected: Firefox" in text


@pytest.mark.asyncio
async def test_no_agents_non_interactive_fails_fast():
	client = DummyClient(agents=[])
	console = make_console()

	with pytest.raises(NoAgentsAvailableError) as exc_info:
		await wait_for_agents(client, console, "http://hub:9000",
		                      interactive=False)

	assert "Unable to connect to Hub or start an interactive session" in str(
	    exc_info.value)
	assert "http://hub:9000" in str(exc_info.value)
	assert "Waiting" not in output(console)


@pytest.mark.asyncio
async def test_no_agents_interactive_waits_for_confirmation():
	client = DummyClient(agents=[])
	console = make_console()
	prompts = []

	async def confirm(prompt):
		prompts.append(prompt)
		# an agent attaches while the operator is deciding
		client.emit("agentConnect", "Safari")
		return ""

	agents = await wait_for_agents(client, console, "http://hub:9000",
	                               interactive=True, confirm=confirm)

	assert prompts == [CONFIRM_PROMPT]
	assert agents == ["Safari"]
	text = output(console)
	assert "Waiting for agents to connect at http://hub:9000." in text
	assert "  Agent connected: Safari" in text


@pytest.mark.asyncio
async def test_disconnects_are_logged():
	client = DummyClient(agents=["Chrome"])
	console = make_console()

	await wait_for_agents(client, console, "http://hub", interactive=False)
	client.emit("agentDisconnect", "Chrome")

	assert "  Agent disconnected: Chrome" in output(console)


@pytest.mark.asyncio
async def test_detects_interactivity_from_stderr(monkeypatch):
	monkeypatch.setattr("hubrunner.core.waiter.stderr_is_interactive",
	                    lambda: False)
	with pytest.raises(NoAgentsAvailableError):
		await wait_for_agents(DummyClient(), make_console(), "http://hub")
