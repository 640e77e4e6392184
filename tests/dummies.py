"""Fake hub, client and batch used across the test suite."""

from __future__ import annotations

import asyncio
import io

from rich.console import Console


def make_console(terminal: bool = False) -> Console:
	"""Console writing to memory; read it back with ``output(console)``."""
	return Console(file=io.StringIO(), width=200, force_terminal=terminal,
	               color_system=None)


def output(console: Console) -> str:
	return console.file.getvalue()


class DummyBatch:

	def __init__(self):
		self.handlers = {}

	def on(self, event, handler):
		self.handlers.setdefault(event, []).append(handler)

	def emit(self, event, *args):
		for handler in self.handlers.get(event, []):
			handler(*args)


class DummyClient:

	def __init__(self, url="http://hub:9000", agents=None, connect_error=None,
	             script=None):
		self.url = url
		self.agents = list(agents or [])
		self.connect_error = connect_error
		self.script = script
		self.connected = False
		self.closed = False
		self.handlers = {}
		self.batches = []
		self.batch_options = []

	async def connect(self):
		if self.connect_error:
			raise self.connect_error
		self.connected = True

	async def get_agents(self):
		return list(self.agents)

	def on(self, event, handler):
		self.handlers.setdefault(event, []).append(handler)

	def emit(self, event, *args):
		for handler in self.handlers.get(event, []):
			handler(*args)

	def create_batch(self, options):
		batch = DummyBatch()
		self.batches.append(batch)
		self.batch_options.append(options)
		if self.script is not None:
			# replay once every handler is registered
			asyncio.get_running_loop().call_soon(self._play, batch)
		return batch

	def _play(self, batch):
		for event, args in self.script:
			batch.emit(event, *args)

	async def close(self):
		self.closed = True


class DummyHub:

	def __init__(self, options=None, listen_error=None):
		self.options = options
		self.listen_error = listen_error
		self.listened_on = None
		self.closed = False

	async def listen(self, port):
		if self.listen_error:
			raise self.listen_error
		self.listened_on = port

	async def wait_closed(self):
		return None

	async def close(self):
		self.closed = True


def suite_payload(name, tests):
	"""Build a suite payload from ``{test_name: (result, message)}``."""
	suite = {
	    "name": name,
	    "type": "testsuite",
	    "passed": sum(1 for r, _ in tests.values() if r == "pass"),
	    "failed": sum(1 for r, _ in tests.values() if r == "fail"),
	}
	for test_name, (result, message) in tests.items():
		suite[test_name] = {
		    "name": test_name,
		    "type": "test",
		    "result": result,
		    "message": message,
		}
	return suite


def result_payload(name, *suites):
	"""Build an ``agentResult`` payload from suite payloads."""
	payload = {
	    "name": name,
	    "type": "report",
	    "passed": sum(s["passed"] for s in suites),
	    "failed": sum(s["failed"] for s in suites),
	}
	payload["total"] = payload["passed"] + payload["failed"]
	for suite in suites:
		payload[suite["name"]] = suite
	return payload


def passing_payload(name="page_test", count=3):
	return result_payload(
	    name,
	    suite_payload("Suite", {
	        f"test{i}": ("pass", "Test passed") for i in range(count)
	    }),
	)


def passing_client(url):
	"""Client factory for a one-agent run where every test passes."""
	return DummyClient(
	    url=url,
	    agents=["Chrome"],
	    script=[
	        ("dispatch", (["Chrome"],)),
	        ("agentBeat", ("Chrome",)),
	        ("agentResult", ("Chrome", passing_payload(count=2))),
	        ("agentComplete", ("Chrome",)),
	        ("complete", ()),
	    ],
	)
