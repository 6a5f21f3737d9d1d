import pytest

from config import TestingSettings, get_settings
from logging_config import configure_logging
from repositories import reset_repositories

configure_logging(TestingSettings())


@pytest.fixture(autouse=True)
def reset_state():
    """Reset repositories and cached settings before each test."""
    reset_repositories()
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def quiet_settings():
    """Testing settings with the stdout report switched off."""
    return TestingSettings(enable_report=False)
