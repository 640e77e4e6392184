from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, ImportString, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

DEFAULT_PORT = 9000
DEFAULT_HUB_URL = f"http://localhost:{DEFAULT_PORT}"
LOG_LEVELS = ("info", "debug")
DEFAULT_BUG_URL = "https://github.com/hubrunner/hubrunner/issues"


def load_env(env_file: str | Path | None = None) -> None:
	"""Load environment variables from an `.env` file if present."""
	env_path = Path(env_file) if env_file else Path(".env")
	if env_path.exists():
		load_dotenv(env_path)


class Config(BaseSettings):
	"""Runtime configuration loaded from environment variables."""

	model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

	hub_url: str = Field(
	    DEFAULT_HUB_URL,
	    alias="HUBRUNNER_HUB_URL",
	    description="Hub URL tried first when --hub is not given",
	)
	port: int = Field(
	    DEFAULT_PORT,
	    alias="HUBRUNNER_PORT",
	    description="Port for a locally created hub",
	)
	host: str = Field(
	    "localhost",
	    alias="HUBRUNNER_HOST",
	    description="Host name used to reach a locally created hub",
	)
	log_level: str = Field("info", alias="LOG_LEVEL",
	                       description="Log level for hubrunner and the hub")
	debug: bool = Field(False, alias="HUBRUNNER_DEBUG",
	                    description="Force debug logging")
	hub_factory: ImportString | None = Field(
	    default=None,
	    alias="HUBRUNNER_HUB_FACTORY",
	    description="Import path of the hub class, 'pkg.mod:Hub'",
	)
	client_factory: ImportString | None = Field(
	    default=None,
	    alias="HUBRUNNER_CLIENT_FACTORY",
	    description="Import path of the client factory, 'pkg.mod:create_client'",
	)
	bug_url: str = Field(
	    DEFAULT_BUG_URL,
	    alias="HUBRUNNER_BUG_URL",
	    description="Where unhandled faults should be reported",
	)

	@field_validator("port")
	@classmethod
	def validate_port(cls, v: Any) -> Any:
		if not 0 < int(v) < 65536:
			raise ValueError("port must be between 1 and 65535")
		return v

	@field_validator("log_level")
	@classmethod
	def normalize_log_level(cls, v: str) -> str:
		return v.lower()

	@property
	def local_hub_url(self) -> str:
		"""Return the URL of a hub created on this machine."""
		return f"http://{self.host}:{self.port}"

	@property
	def effective_log_level(self) -> str:
		"""Return ``debug`` when debug is forced, else the log level."""
		return "debug" if self.debug else self.log_level

	def apply_overrides(self, run_params: "RunParams") -> None:
		"""Apply CLI overrides from RunParams onto this config.

		Only non-None fields in run_params are applied, preserving
		environment-based defaults for anything the user didn't explicitly set.

		Parameters:
			run_params: Validated run parameters with optional overrides.
		"""
		_OVERRIDES: list[tuple[str, str]] = [
			("port", "port"),
			("loglevel", "log_level"),
			("debug", "debug"),
		]
		for param_field, config_field in _OVERRIDES:
			value = getattr(run_params, param_field)
			if value is not None:
				setattr(self, config_field, value)


__all__ = [
    "Config",
    "load_env",
    "DEFAULT_PORT",
    "DEFAULT_HUB_URL",
    "DEFAULT_BUG_URL",
    "LOG_LEVELS",
]
