"""
Error taxonomy for a hub run.

Every fatal condition the run can reach on purpose is a
``HubRunnerError``; the CLI reports it once and exits with
``exit_code``. Anything else reaching the CLI is treated as an
unhandled fault.
"""

from __future__ import annotations


class HubRunnerError(Exception):
	"""Base class for fatal, operator-facing run errors."""

	exit_code = 1


class HubConnectionError(HubRunnerError):
	"""Raised by backends when a hub cannot be reached."""


class BindConflictError(HubRunnerError):
	"""The local hub could not bind its port."""

	def __init__(self, port: int) -> None:
		self.port = port
		super().__init__(
		    f"Unable to start the Hub because port {port} is in use.")


class NoAgentsAvailableError(HubRunnerError):
	"""No agents are attached and there is no terminal to wait on."""

	def __init__(self, url: str | None = None) -> None:
		self.url = url
		msg = "Unable to connect to Hub or start an interactive session."
		if url:
			msg += (f" No agents are attached to {url}; connect a browser "
			        "first or run from a terminal to wait for one.")
		super().__init__(msg)


class EmptyDispatchError(HubRunnerError):
	"""The batch was dispatched to zero agents."""

	def __init__(self) -> None:
		super().__init__("No browsers connected, exiting.")


class BackendNotConfiguredError(HubRunnerError):
	"""No hub or client factory was configured."""

	def __init__(self, kind: str, env_var: str) -> None:
		self.kind = kind
		self.env_var = env_var
		super().__init__(f"No {kind} backend configured. Set {env_var} to "
		                 "an import path such as 'package.module:Factory'.")


class NoFilesError(HubRunnerError):
	"""Neither test files nor --server were given."""

	def __init__(self, usage: str) -> None:
		super().__init__(f"{usage}\nNo files specified. "
		                 "To launch the Hub, specify --server.")


__all__ = [
    "HubRunnerError",
    "HubConnectionError",
    "BindConflictError",
    "NoAgentsAvailableError",
    "EmptyDispatchError",
    "BackendNotConfiguredError",
    "NoFilesError",
]
