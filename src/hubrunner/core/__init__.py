"""Core orchestration logic for a hub run.

Key modules:
    - negotiator: Connect to a hub or create one locally
    - waiter: Decide whether agents are ready for a batch
    - orchestrator: Submit a batch and fold its events into a verdict
    - runner: run_batch() and start_server() pipelines
"""

from hubrunner.core.negotiator import (
    create_local_hub,
    negotiate_connection,
    start_hub,
)
from hubrunner.core.waiter import AgentNotifier, wait_for_agents
from hubrunner.core.orchestrator import BatchOrchestrator
from hubrunner.core.runner import run_batch, start_server

__all__ = [
    # negotiator
    "create_local_hub",
    "negotiate_connection",
    "start_hub",
    # waiter
    "AgentNotifier",
    "wait_for_agents",
    # orchestrator
    "BatchOrchestrator",
    # runner
    "run_batch",
    "start_server",
]
