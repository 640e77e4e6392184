"""
hubrunner models.

This subpackage contains the Pydantic models and small value types
used throughout the application.

Key models:
    - Config: Application configuration loaded from environment
    - RunParams: Parameters captured from the command line
    - BatchRequest / BatchAggregate / RunVerdict: batch state
    - AgentOutcome / SuiteResult / TestResult: per-agent results
    - ConnectedToRemoteHub / HubCreatedLocally: connection outcome
"""

from .config import Config, load_env, DEFAULT_HUB_URL, DEFAULT_PORT
from .run_params import RunParams
from .results import (
    AgentOutcome,
    ResultNode,
    SuiteResult,
    TestResult,
    has_results,
    parse_result_node,
)
from .batch import BatchAggregate, BatchRequest, ProgressSnapshot, RunVerdict
from .connection import (
    ConnectedToRemoteHub,
    ConnectionOutcome,
    HubCreatedLocally,
)

__all__ = [
    "Config",
    "load_env",
    "DEFAULT_HUB_URL",
    "DEFAULT_PORT",
    "RunParams",
    "AgentOutcome",
    "ResultNode",
    "SuiteResult",
    "TestResult",
    "has_results",
    "parse_result_node",
    "BatchAggregate",
    "BatchRequest",
    "ProgressSnapshot",
    "RunVerdict",
    "ConnectedToRemoteHub",
    "ConnectionOutcome",
    "HubCreatedLocally",
]
