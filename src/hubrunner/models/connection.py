"""
Connection outcome models.

Exactly one of these is produced per run. Which one it is changes how
the run is reported, not how it is orchestrated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from hubrunner.utils.protocols import HubClientProtocol, HubProtocol


@dataclass(frozen=True)
class ConnectedToRemoteHub:
	"""Connected to a hub that was already running."""

	client: HubClientProtocol
	url: str


@dataclass(frozen=True)
class HubCreatedLocally:
	"""Started a hub in this process and connected to it."""

	hub: HubProtocol
	client: HubClientProtocol
	url: str


ConnectionOutcome = Union[ConnectedToRemoteHub, HubCreatedLocally]

__all__ = ["ConnectedToRemoteHub", "HubCreatedLocally", "ConnectionOutcome"]
