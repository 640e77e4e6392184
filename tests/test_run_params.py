import pytest

from hubrunner.models.run_params import RunParams


def test_files_keep_order():
	rp = RunParams(files=["b.html", "a.html", "c.html"])
	assert rp.files == ["b.html", "a.html", "c.html"]


def test_blank_hub_counts_as_unset():
	rp = RunParams(files=["a.html"], hub="  ")
	assert rp.hub is None


def test_rejects_bad_port():
	with pytest.raises(ValueError):
		RunParams(files=["a.html"], port=70000)


def test_loglevel_validation():
	assert RunParams(loglevel="DEBUG").loglevel == "debug"
	with pytest.raises(ValueError):
		RunParams(loglevel="verbose")
