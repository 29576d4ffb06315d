"""Shared fixtures for the localeweave test suite."""

import sys
from pathlib import Path

# Ensure the application root (app/) is importable during collection, also
# when pytest is invoked without the configured pythonpath.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402

from localeweave.i18n.context import current_locale  # noqa: E402
from localeweave.logging import configure_logging  # noqa: E402
from localeweave.services.providers import get_settings  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def silence_logging():
    """Suppress log output for the whole test session."""
    configure_logging()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Fresh settings per test, without touching the process LC_TIME."""
    monkeypatch.setenv("I18N_APPLY_TIME_LOCALE", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_current_locale():
    """Ensure no registered locale leaks between tests."""
    current_locale.clear()
    yield
    current_locale.clear()


@pytest.fixture
def set_settings_env(monkeypatch):
    """Set environment variables and reload settings.

    Usage:
        set_settings_env(I18N_DEFAULT_LANGUAGE="de")
    """

    def _set(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        get_settings.cache_clear()

    return _set
