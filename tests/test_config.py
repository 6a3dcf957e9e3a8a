"""
Unit tests for configuration helpers.
"""

import logging

import pytest

from pharmaventory.config import DEFAULT_BACKEND_URL, configure_logging, get_settings, resolve_backend_url


@pytest.mark.parametrize("raw, expected", [
    (None, DEFAULT_BACKEND_URL),
    ("", DEFAULT_BACKEND_URL),
    ("   ", DEFAULT_BACKEND_URL),
    ("https://pharma.example.com", "https://pharma.example.com"),
    ("https://pharma.example.com/", "https://pharma.example.com"),
    ("https://pharma.example.com///", "https://pharma.example.com"),
    ("https://pharma.example.com/api", "https://pharma.example.com"),
    ("https://pharma.example.com/api/", "https://pharma.example.com"),
    ("https://pharma.example.com/api//", "https://pharma.example.com"),
    ("https://pharma.example.com/apis", "https://pharma.example.com/apis"),
    ("https://pharma.example.com/v1/api", "https://pharma.example.com/v1"),
])
def test_resolve_backend_url(raw, expected):
    assert resolve_backend_url(raw) == expected


def test_get_settings_defaults(monkeypatch):
    monkeypatch.delenv("BACKEND_URL", raising=False)
    monkeypatch.delenv("REQUEST_TIMEOUT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    settings = get_settings()

    assert settings.backend_url == DEFAULT_BACKEND_URL
    assert settings.request_timeout == 10.0
    assert settings.log_level == "INFO"
    assert settings.storage_key == "pharmaventory_session"
    assert settings.toast_seconds == 4


def test_get_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("BACKEND_URL", "https://pharma.example.com/api")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.backend_url == "https://pharma.example.com"
    assert settings.request_timeout == 2.5
    assert settings.log_level == "DEBUG"


def test_get_settings_invalid_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("REQUEST_TIMEOUT", "soon")

    assert get_settings().request_timeout == 10.0


def test_configure_logging_accepts_explicit_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging("WARNING")

    assert calls[0]["level"] == "WARNING"
    assert "%(levelname)s" in calls[0]["format"]
