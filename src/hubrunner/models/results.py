"""
Per-agent result models.

An agent reports its results as a nested mapping. Nodes that carry
``passed``/``failed``/``type`` counters are suites (or test cases
grouping tests); anything else is a single test. The distinction is
made once, when the payload is parsed, so later walks never probe
the raw mapping again.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Union

from pydantic import BaseModel, Field

RESULT_MARKERS = ("passed", "failed", "type")


def has_results(node: Any) -> bool:
	"""Return True when ``node`` has the shape of a results-bearing node."""
	return isinstance(node, Mapping) and all(k in node
	                                         for k in RESULT_MARKERS)


class TestResult(BaseModel):
	"""A single test."""

	__test__ = False

	name: str
	result: str = ""
	message: str = ""

	@property
	def failed(self) -> bool:
		return self.result == "fail"


class SuiteResult(BaseModel):
	"""A suite or test case with its counters and children."""

	name: str
	type: str = ""
	passed: int = 0
	failed: int = 0
	children: Dict[str, "ResultNode"] = Field(default_factory=dict)


ResultNode = Union[SuiteResult, TestResult]
SuiteResult.model_rebuild()


def _as_int(value: Any) -> int:
	try:
		return int(value or 0)
	except (TypeError, ValueError):
		return 0


def parse_result_node(key: str, payload: Mapping[str, Any]) -> ResultNode:
	"""Build a result node from a raw payload mapping.

	Non-mapping members (counters, names, type tags) are not children
	and are dropped.

	Parameters:
		key: Name of the node in its parent, used when it has no ``name``.
		payload: Raw mapping received from the agent.

	Returns:
		A ``SuiteResult`` for results-bearing mappings, else a ``TestResult``.
	"""
	name = str(payload.get("name") or key)
	if has_results(payload):
		return SuiteResult(
		    name=name,
		    type=str(payload.get("type") or ""),
		    passed=_as_int(payload.get("passed")),
		    failed=_as_int(payload.get("failed")),
		    children={
		        str(k): parse_result_node(str(k), v)
		        for k, v in payload.items()
		        if isinstance(v, Mapping)
		    },
		)
	return TestResult(
	    name=name,
	    result=str(payload.get("result") or ""),
	    message=str(payload.get("message") or ""),
	)


class AgentOutcome(BaseModel):
	"""Results one agent reported for the batch."""

	agent: str
	name: str = ""
	passed: int = 0
	failed: int = 0
	tree: SuiteResult

	@classmethod
	def from_payload(cls, agent: str,
	                 payload: Mapping[str, Any]) -> "AgentOutcome":
		"""Parse an ``agentResult`` payload into an outcome.

		The root always becomes a ``SuiteResult`` so its children are
		walked as suites even if the payload lacks a ``type`` tag.
		"""
		name = str(payload.get("name") or "")
		root = parse_result_node(name, payload)
		if not isinstance(root, SuiteResult):
			root = SuiteResult(
			    name=name,
			    children={
			        str(k): parse_result_node(str(k), v)
			        for k, v in payload.items()
			        if isinstance(v, Mapping)
			    },
			)
		return cls(
		    agent=agent,
		    name=name,
		    passed=_as_int(payload.get("passed")),
		    failed=_as_int(payload.get("failed")),
		    tree=root,
		)


__all__ = [
    "RESULT_MARKERS",
    "has_results",
    "TestResult",
    "SuiteResult",
    "ResultNode",
    "parse_result_node",
    "AgentOutcome",
]
