"""
Run parameters model.

Defines validated run parameters captured from the command line.
"""

from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from .config import LOG_LEVELS


class RunParams(BaseModel):
	"""Validated run parameters for the CLI and runner.

	``hub`` is only set when the operator named a hub explicitly;
	that is what decides whether a failed connection is reported
	before falling back to a local hub.
	"""

	files: List[str] = Field(default_factory=list,
	                         description="Test files, in submission order")
	port: Optional[int] = Field(default=None, description="Local hub port")
	hub: Optional[str] = Field(default=None,
	                           description="Explicitly requested hub URL")
	loglevel: Optional[str] = Field(default=None, description="Log level")
	debug: Optional[bool] = Field(default=None,
	                              description="Force debug logging")

	@field_validator('port')
	@classmethod
	def validate_port(cls, v: Optional[int]) -> Optional[int]:
		if v is None:
			return v
		if not 0 < v < 65536:
			raise ValueError("port must be between 1 and 65535")
		return v

	@field_validator('loglevel')
	@classmethod
	def validate_loglevel(cls, v: Optional[str]) -> Optional[str]:
		if v is None:
			return v
		if v.lower() not in LOG_LEVELS:
			raise ValueError(f"loglevel must be one of {', '.join(LOG_LEVELS)}")
		return v.lower()

	@field_validator('hub')
	@classmethod
	def blank_hub_is_unset(cls, v: Optional[str]) -> Optional[str]:
		if v is not None and not v.strip():
			return None
		return v


__all__ = ["RunParams"]
