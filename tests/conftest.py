"""Shared pytest fixtures for appwire tests."""

import pytest

from appwire.settings import AppWireSettings


@pytest.fixture()
def settings() -> AppWireSettings:
    """Default container settings, independent of the environment."""
    return AppWireSettings(collapse_identical_candidates=True, check_lookup_types=True)


@pytest.fixture()
def strict_settings() -> AppWireSettings:
    """Settings that report identical candidates under one key as ambiguous."""
    return AppWireSettings(collapse_identical_candidates=False, check_lookup_types=True)


@pytest.fixture()
def invocations() -> list[str]:
    """Names of producers in the order they were invoked."""
    return []
