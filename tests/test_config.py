"""Tests for configuration helpers."""

from etymo_dict.config import env_number


def test_env_number_reads_value(monkeypatch):
    monkeypatch.setenv("ETYMO_TEST_TIMEOUT", " 2.5 ")
    errors = []

    assert env_number("ETYMO_TEST_TIMEOUT", 15.0, float, errors) == 2.5
    assert errors == []


def test_env_number_uses_default_when_unset(monkeypatch):
    monkeypatch.delenv("ETYMO_TEST_ATTEMPTS", raising=False)
    errors = []

    assert env_number("ETYMO_TEST_ATTEMPTS", 2, int, errors) == 2
    assert errors == []


def test_env_number_records_bad_value(monkeypatch):
    monkeypatch.setenv("ETYMO_TEST_ATTEMPTS", "two")
    errors = []

    assert env_number("ETYMO_TEST_ATTEMPTS", 2, int, errors) == 2
    assert errors == ["ETYMO_TEST_ATTEMPTS must be a number, got 'two'"]
