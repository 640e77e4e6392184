"""
Hub and client factory module.

Builds hub servers and hub clients from the backends named in the
runtime configuration.
"""

from __future__ import annotations

from hubrunner.errors import BackendNotConfiguredError
from hubrunner.models.config import Config
from hubrunner.utils.logging import get_logger, sanitize_text
from hubrunner.utils.protocols import HubClientProtocol, HubProtocol

logger = get_logger(__name__)


def create_client(url: str, config: Config) -> HubClientProtocol:
	"""Factory for a hub client pointed at ``url``."""
	if config.client_factory is None:
		raise BackendNotConfiguredError("client", "HUBRUNNER_CLIENT_FACTORY")
	logger.debug("creating hub client for %s", sanitize_text(url))
	return config.client_factory(url)


def create_hub(config: Config) -> HubProtocol:
	"""Factory for a hub server using the configured log level."""
	if config.hub_factory is None:
		raise BackendNotConfiguredError("hub", "HUBRUNNER_HUB_FACTORY")
	return config.hub_factory({"log_level": config.effective_log_level})


__all__ = ["create_client", "create_hub"]
