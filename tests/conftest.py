"""Shared test fixtures and configuration."""

import os

import pytest

from multifield_search.config import get_settings
from multifield_search.observability.context import trace_context


# Complete test environment that overrides every configurable value
TEST_ENV = {
    "MULTIFIELD_SEARCH_DEFAULT_MIN_SCORE": "0.3",
    "MULTIFIELD_SEARCH_DEFAULT_REQUIRE_ALL_TERMS": "false",
    "MULTIFIELD_SEARCH_STRICT_EXTRACTORS": "false",
    "MULTIFIELD_SEARCH_LOG_LEVEL": "info",
    "MULTIFIELD_SEARCH_LOG_JSON": "true",
    "MULTIFIELD_SEARCH_LOG_QUERIES": "false",
    "MULTIFIELD_SEARCH_METRICS_ENABLED": "true",
    "MULTIFIELD_SEARCH_TRACING_ENABLED": "true",
    "MULTIFIELD_SEARCH_SERVICE_NAME": "multifield-search-tests",
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Pin settings to the test environment and reset per-test context."""
    for key in list(os.environ):
        if key.startswith("MULTIFIELD_SEARCH_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("MULTIFIELD_SEARCH_DEFAULT_MAX_RESULTS", raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)

    get_settings.cache_clear()
    token = trace_context.set(None)
    yield
    trace_context.reset(token)
    get_settings.cache_clear()


@pytest.fixture
def contractors():
    """Small contractor directory used across ranking tests."""
    return [
        {"name": "Elite Construction Co.", "owner": "John Smith", "city": "Denver"},
        {"name": "Acme Roofing", "owner": "Mary Jones", "city": "Austin"},
        {"name": "Acme", "owner": "Pat Lee", "city": "Boston"},
        {"name": "Beta Plumbing", "owner": "Sam Reed", "city": "Chicago"},
    ]
