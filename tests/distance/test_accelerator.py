import logging

import pytest

from genomecmp.distance import accel
from genomecmp.distance.levenshtein import exact_levenshtein

_PROBES = {("a", "b"): 1, ("kitten", "sitting"): 3, ("ACGT", "ACGT"): 0}


@pytest.fixture(autouse=True)
def reset_backend():
    accel.reset_accelerator()
    yield
    accel.reset_accelerator()


class _WrongBackend:
    @staticmethod
    def align(a, b, mode, task):
        return {"editDistance": 99}


class _FlakyBackend:
    calls = 0

    @classmethod
    def align(cls, a, b, mode, task):
        if (a, b) in _PROBES:
            return {"editDistance": _PROBES[(a, b)]}
        cls.calls += 1
        raise RuntimeError("backend exploded")


def test_missing_backend_falls_back(monkeypatch):
    monkeypatch.setattr(accel, "edlib", None)
    assert not accel.accelerator_available()
    assert exact_levenshtein("kitten", "sitting") == 3


def test_failed_self_check_disables_backend(monkeypatch, caplog):
    monkeypatch.setattr(accel, "edlib", _WrongBackend)
    with caplog.at_level(logging.WARNING, logger="genomecmp.distance.accel"):
        assert not accel.accelerator_available()
    assert "self-check failed" in caplog.text
    assert exact_levenshtein("flaw", "lawn") == 2


def test_runtime_failure_falls_back_and_warns_once(monkeypatch, caplog):
    monkeypatch.setattr(accel, "edlib", _FlakyBackend)
    with caplog.at_level(logging.WARNING, logger="genomecmp.distance.accel"):
        assert accel.accelerator_available()
        assert exact_levenshtein("flaw", "lawn") == 2
        assert exact_levenshtein("GATTACA", "GCATGCU") == 4
    assert _FlakyBackend.calls == 2
    assert caplog.text.count("falling back") == 1


def test_backend_results_match_reference():
    pytest.importorskip("edlib")
    assert accel.accelerator_available()
    assert exact_levenshtein("GATTACA", "GCATGCU") == exact_levenshtein(
        "GATTACA", "GCATGCU", use_accelerator=False
    )
