import os

import pytest

from hubrunner.utils.prompt import read_line

from dummies import make_console, output


@pytest.mark.asyncio
async def test_read_line_resolves_on_input():
	read_fd, write_fd = os.pipe()
	os.write(write_fd, b"go\n")
	console = make_console()
	with os.fdopen(read_fd) as stream:
		line = await read_line("Ready? ", console, stream)
	os.close(write_fd)

	assert line == "go"
	assert output(console) == "Ready? "


@pytest.mark.asyncio
async def test_read_line_at_eof_is_empty():
	read_fd, write_fd = os.pipe()
	os.close(write_fd)
	with os.fdopen(read_fd) as stream:
		line = await read_line("Ready? ", make_console(), stream)

	assert line == ""


@pytest.mark.asyncio
async def test_read_line_from_regular_file(tmp_path):
	answers = tmp_path / "answers.txt"
	answers.write_text("go\nignored\n")
	console = make_console()
	with answers.open() as stream:
		line = await read_line("Ready? ", console, stream)

	assert line == "go"
	assert output(console) == "Ready? "


@pytest.mark.asyncio
async def test_read_line_from_devnull_is_empty():
	with open(os.devnull) as stream:
		line = await read_line("Ready? ", make_console(), stream)

	assert line == ""
