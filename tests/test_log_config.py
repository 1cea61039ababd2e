"""Tests for log_config level selection."""

import logging

import pytest

from log_config import level_from_env


@pytest.mark.parametrize(
    "value, expected",
    [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("", logging.INFO),
        ("BASIC_FORMAT", logging.INFO),
        ("loud", logging.INFO),
    ],
)
def test_level_from_env(monkeypatch, value, expected):
    monkeypatch.setenv("AUTOSINK_LOG_LEVEL", value)
    assert level_from_env() == expected


def test_level_from_env_unset(monkeypatch):
    monkeypatch.delenv("AUTOSINK_LOG_LEVEL", raising=False)
    assert level_from_env(logging.ERROR) == logging.ERROR
