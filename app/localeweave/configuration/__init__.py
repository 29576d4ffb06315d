"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Locale and translation settings class

Example:
    ```python
    from localeweave.services import get_settings

    settings = get_settings()
    folder = settings.i18n.translations_dir
    ```
"""

from localeweave.configuration.i18n import I18nSettings
from localeweave.configuration.settings import Settings

__all__ = ["Settings", "I18nSettings"]
