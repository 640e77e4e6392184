"""
hubrunner - run browser test files on the agents attached to a hub.

This package connects to (or starts) a hub, waits for test agents,
submits a batch of test files and turns the agents' event stream into
live progress and a single pass/fail verdict.

Main entry points:
    - hubrunner.main: CLI entrypoint
    - hubrunner.core.runner: run_batch() and start_server()
    - hubrunner.models.config: Config and load_env()
"""
