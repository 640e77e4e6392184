import itertools
from pathlib import Path

import pytest

from hubrunner.models.batch import (
    BatchAggregate,
    BatchRequest,
    ProgressSnapshot,
    RunVerdict,
)
from hubrunner.models.results import AgentOutcome


def _outcome(agent, passed, failed):
	return AgentOutcome.from_payload(agent, {
	    "name": "t",
	    "type": "report",
	    "passed": passed,
	    "failed": failed,
	})


def test_request_from_files_resolves_basedir(tmp_path):
	req = BatchRequest.from_files(["a.html", "b.html"], tmp_path)
	assert req.basedir == tmp_path.resolve()
	assert req.tests == ("a.html", "b.html")
	assert req.as_options() == {
	    "basedir": str(tmp_path.resolve()),
	    "tests": ["a.html", "b.html"],
	}


def test_request_defaults_to_cwd(tmp_path, monkeypatch):
	monkeypatch.chdir(tmp_path)
	assert BatchRequest.from_files(["a.html"]).basedir == Path.cwd().resolve()


def test_request_is_immutable(tmp_path):
	req = BatchRequest.from_files(["a.html"], tmp_path)
	with pytest.raises(Exception):
		req.tests = ("b.html",)


def test_dispatch_multiplies_total():
	agg = BatchAggregate.for_request(
	    BatchRequest.from_files(["a", "b", "c"], Path(".")))
	assert agg.total_expected == 3
	agg.record_dispatch(2)
	assert agg.total_expected == 6


@pytest.mark.parametrize("order", list(itertools.permutations(range(3))))
def test_totals_independent_of_order(order):
	outcomes = [
	    _outcome("a", 3, 0),
	    _outcome("b", 1, 2),
	    _outcome("c", 0, 5),
	]
	agg = BatchAggregate(total_expected=3)
	for i in order:
		agg.record_result(outcomes[i])
	assert agg.passed == 4
	assert agg.failed == 7
	assert agg.current_index == 3


def test_verdict():
	agg = BatchAggregate(passed=6)
	assert agg.verdict(12).exit_code == 0
	agg.failed = 1
	verdict = agg.verdict(12)
	assert verdict.success is False
	assert verdict.exit_code == 1
	assert verdict.total == 7
	assert verdict.duration_ms == 12


def test_zero_total_percent_is_zero():
	snap = ProgressSnapshot(current=0, total=0)
	assert snap.percent == 0.0


def test_percent_and_rate():
	snap = ProgressSnapshot(current=3, total=6, beats=4, elapsed_ms=2000)
	assert snap.percent == 50.0
	assert snap.tests_per_second == 2.0


def test_rate_without_elapsed_time_is_zero():
	assert ProgressSnapshot(beats=5, elapsed_ms=0).tests_per_second == 0.0


def test_verdict_is_frozen():
	verdict = RunVerdict(passed=1, failed=0)
	with pytest.raises(Exception):
		verdict.failed = 2
