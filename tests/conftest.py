"""Test configuration for unibidi.

This module isolates the tests from the developer's environment, so
settings always start from their defaults.
"""

import os

import pytest

from unibidi.config import Settings, get_settings

# Clear UNIBIDI_* variables BEFORE any settings are loaded
for _name in [name for name in os.environ if name.startswith("UNIBIDI_")]:
    del os.environ[_name]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop the cached settings around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with default values, ignoring any .env file."""
    return Settings(_env_file=None)
