"""Unit test fixtures with mocked dependencies."""

import pytest


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings getters are cached; reset them so env changes take effect."""
    from infrastructure.settings import (
        get_database_settings,
        get_globalconf_settings,
        get_settings,
    )

    for getter in (get_settings, get_database_settings, get_globalconf_settings):
        getter.cache_clear()
    yield
    for getter in (get_settings, get_database_settings, get_globalconf_settings):
        getter.cache_clear()
