"""
Callback-driven interactive confirmation.

The confirmation is a future resolved by a reader callback on the
running event loop, so waiting for the operator never blocks the loop.
Streams the loop cannot poll are read in a worker thread instead.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Awaitable, Callable, TextIO

from rich.console import Console

from hubrunner.utils.logging import get_logger

logger = get_logger(__name__)

ConfirmFn = Callable[[str], Awaitable[str]]


async def read_line(
    prompt: str,
    console: Console | None = None,
    stream: TextIO | None = None,
) -> str:
	"""Print ``prompt`` and wait for one line on ``stream``.

	Parameters:
		prompt: Text shown before waiting.
		console: Console used for the prompt. Defaults to stderr.
		stream: Input stream. Defaults to ``sys.stdin``.

	Returns:
		The line read, without its trailing newline. Empty at EOF.
	"""
	console = console or Console(stderr=True)
	stream = stream or sys.stdin
	loop = asyncio.get_running_loop()
	answer: asyncio.Future[str] = loop.create_future()

	def _on_readable() -> None:
		line = stream.readline()
		if not answer.done():
			answer.set_result(line.rstrip("\n"))

	console.print(prompt, end="", highlight=False)
	fd = stream.fileno()
	try:
		loop.add_reader(fd, _on_readable)
	except (OSError, NotImplementedError):
		# regular files and /dev/null cannot be polled
		logger.debug("fd %d not pollable, reading in a worker thread", fd)
		line = await loop.run_in_executor(None, stream.readline)
		return line.rstrip("\n")
	try:
		return await answer
	finally:
		loop.remove_reader(fd)


__all__ = ["ConfirmFn", "read_line"]
