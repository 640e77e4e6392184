from __future__ import annotations

import asyncio
import sys
from typing import Callable, List, Optional, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.text import Text
from typer.main import get_command

from hubrunner.core.runner import run_batch, start_server
from hubrunner.core.waiter import stderr_is_interactive
from hubrunner.errors import HubRunnerError, NoFilesError
from hubrunner.models.config import DEFAULT_BUG_URL, Config, load_env
from hubrunner.models.run_params import RunParams
from hubrunner.ui.reporting import format_fault, get_version
from hubrunner.ui.results import BAD
from hubrunner.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

USAGE = ("usage: hubrunner [--version | -v] [--server | -s] [--port=<n>]"
         " [--hub=<url>] [-v | -vv] [--help] [--] [<HTML files>]")

VERBOSITY_LEVELS = {1: "info", 2: "debug"}

T = TypeVar("T")

cli = typer.Typer(add_completion=False)


def _version_callback(value: bool) -> None:
	if value:
		typer.echo(get_version())
		raise typer.Exit()


@cli.callback()
def root(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the hubrunner version and exit",
    ),
) -> None:
	"""
	Root callback for the hubrunner CLI.

	Run browser test files on the agents attached to a hub, or start a hub.
	"""
	return None


def guarded(console: Console, fn: Callable[[], T],
            bug_url: str = DEFAULT_BUG_URL) -> T:
	"""
	Run ``fn`` inside the process-wide error boundary.

	Known fatal conditions print one line; anything else is reported
	once with version context. Both exit with status 1.

	Parameters:
		console: Console used for the diagnostic.
		fn: Zero-argument callable doing the work.
		bug_url: Where unhandled faults should be reported.

	Returns:
		Whatever ``fn`` returns.
	"""
	try:
		return fn()
	except typer.Exit:
		raise
	except KeyboardInterrupt:
		raise typer.Exit(130)
	except HubRunnerError as exc:
		logger.debug("fatal: %s", exc, exc_info=True)
		console.print(Text.assemble((BAD, "red"), " ", str(exc)),
		              soft_wrap=True, highlight=False)
		raise typer.Exit(exc.exit_code)
	except Exception as exc:
		console.print(
		    format_fault(exc, tty=stderr_is_interactive(), bug_url=bug_url),
		    soft_wrap=True,
		    highlight=False,
		)
		raise typer.Exit(1)


def _loglevel(loglevel: str | None, verbose: int) -> str | None:
	"""Resolve the log level; an explicit --loglevel wins over -v/-vv."""
	if loglevel is not None or not verbose:
		return loglevel
	return VERBOSITY_LEVELS[min(verbose, max(VERBOSITY_LEVELS))]


def _params(**fields) -> RunParams:
	try:
		return RunParams(**fields)
	except ValidationError as exc:
		raise typer.BadParameter(str(exc))


def _load_config(params: RunParams) -> Config:
	load_env()
	config = Config()
	config.apply_overrides(params)
	configure_logging(config.effective_log_level)
	return config


def serve_impl(
    port: int | None = None,
    loglevel: str | None = None,
    debug: bool | None = None,
    console: Console | None = None,
) -> None:
	"""Start a standalone hub and serve until it stops."""
	console = console or Console(stderr=True)
	params = _params(port=port, loglevel=loglevel, debug=debug)

	config = guarded(console, lambda: _load_config(params))
	guarded(console, lambda: asyncio.run(start_server(config, console)),
	        config.bug_url)


def run_impl(
    files: List[str],
    server: bool = False,
    port: int | None = None,
    hub: str | None = None,
    loglevel: str | None = None,
    debug: bool | None = None,
    console: Console | None = None,
) -> None:
	"""
	Run the given test files on the agents of a hub.

	Without files, ``server`` starts a standalone hub instead; with
	neither, the usage is printed and the process exits with status 1.

	Parameters:
		files: Test files to run, in order.
		server: Start a hub when no files are given.
		port: Port for a locally created hub.
		hub: Hub URL to connect to first.
		loglevel: Log level name ("info" or "debug").
		debug: Force debug logging.
		console: Console for operator output. Defaults to stderr.
	"""
	console = console or Console(stderr=True)
	params = _params(files=files or [], port=port, hub=hub,
	                 loglevel=loglevel, debug=debug)

	if not params.files:
		if server:
			serve_impl(port, loglevel, debug, console=console)
			return

		def _no_files() -> None:
			raise NoFilesError(USAGE)

		guarded(console, _no_files)
	if server:
		console.print("Ignoring --server option.", highlight=False)

	config = guarded(console, lambda: _load_config(params))

	def _run() -> int:
		verdict = asyncio.run(run_batch(config, params, console))
		return verdict.exit_code

	exit_code = guarded(console, _run, config.bug_url)
	raise typer.Exit(exit_code)


@cli.command()
def run(
    files: Optional[List[str]] = typer.Argument(
        None, help="HTML test files to run"),
    server: bool = typer.Option(False, "--server", "-s",
                                help="Start a hub when no files are given"),
    port: int = typer.Option(None, "--port", "-p",
                             help="Port for a locally created hub"),
    hub: str = typer.Option(None, "--hub", help="Hub URL to connect to"),
    loglevel: str = typer.Option(None, "--loglevel",
                                 help="Log level: info or debug"),
    debug: bool = typer.Option(None, "--debug/--no-debug",
                               help="Force debug logging"),
    verbose: int = typer.Option(0, "-v", count=True,
                                help="-v for info, -vv for debug logging"),
) -> None:
	"""
	Run test files on every agent attached to a hub.

	This is the main CLI command; it is also what a bare
	`hubrunner <files>` invocation runs.
	"""
	run_impl(files or [], server, port, hub, _loglevel(loglevel, verbose),
	         debug)


@cli.command()
def serve(
    port: int = typer.Option(None, "--port", "-p", help="Port to listen on"),
    loglevel: str = typer.Option(None, "--loglevel",
                                 help="Log level: info or debug"),
    debug: bool = typer.Option(None, "--debug/--no-debug",
                               help="Force debug logging"),
    verbose: int = typer.Option(0, "-v", count=True,
                                help="-v for info, -vv for debug logging"),
) -> None:
	"""Start a standalone hub."""
	serve_impl(port, _loglevel(loglevel, verbose), debug)


ROOT_OPTIONS = ("--version", "--help")


def entrypoint(argv=None, *, standalone_mode: bool = True):
	"""
	Typer entrypoint that defaults to `run` when appropriate.

	Allows calling 'hubrunner test.html' or 'hubrunner --server' without
	explicitly specifying the 'run' subcommand.

	Parameters:
		argv: Command-line arguments. Defaults to sys.argv[1:].
		standalone_mode: If True, Click handles exit codes.

	Returns:
		Result of the Click application main invocation.
	"""
	args = sys.argv[1:] if argv is None else list(argv)
	# a leading bare -v asks for the version
	if args[:1] == ["-v"]:
		args[0] = "--version"

	_click_app = get_command(cli)
	commands = getattr(_click_app, "commands", {}).keys()
	# default to run unless a subcommand or a root-only option comes first
	if not args or (args[0] not in commands and args[0] not in ROOT_OPTIONS):
		args = ["run"] + args
	return _click_app.main(
	    args=args,
	    prog_name="hubrunner",
	    standalone_mode=standalone_mode,
	)


if __name__ == "__main__":
	entrypoint()
