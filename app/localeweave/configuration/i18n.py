"""Locale resolution and translation lookup settings."""

from typing import List

from pydantic import Field, field_validator

from localeweave.configuration.base import FeatureSettings


class I18nSettings(FeatureSettings):
    """Configuration for locale detection and translation sources.

    Environment Variables:
        I18N_DEFAULT_LANGUAGE: Language of the fallback locale (default: en)
        I18N_DEFAULT_REGION: Region of the fallback locale (default: US)
        I18N_DEFAULT_CHARSET: Charset of the fallback locale (default: empty)
        I18N_USE_URL_PATH: Try the URL path before any other signal (default: True)
        I18N_ACCEPTED_REQUEST_PARAMS: JSON list of request keys holding a locale
            (default: ["locale", "language", "lang"])
        I18N_TRANSLATIONS_DIR: Folder with per-locale translation files
        I18N_FILE_EXTENSION: Extension of translation files (default: .yml)
        I18N_APPLY_TIME_LOCALE: Apply resolved locales to LC_TIME (default: True)
        I18N_LOCALE_TABLE_FILE: YAML file mapping locale ids to native names

    Example:
        ```python
        from localeweave.services import get_settings

        settings = get_settings()

        folder = settings.i18n.translations_dir
        if settings.i18n.use_url_path:
            # Resolve from "/de-AT/..." style paths first...
        ```
    """

    default_language: str = Field(
        default="en",
        alias="I18N_DEFAULT_LANGUAGE",
        description="Two letter language code of the fallback locale",
    )
    default_region: str = Field(
        default="US",
        alias="I18N_DEFAULT_REGION",
        description="Two letter region code of the fallback locale",
    )
    default_charset: str = Field(
        default="",
        alias="I18N_DEFAULT_CHARSET",
        description="Charset of the fallback locale",
    )
    use_url_path: bool = Field(
        default=True,
        alias="I18N_USE_URL_PATH",
        description="Resolve the locale from the URL path before other signals",
    )
    accepted_request_params: List[str] = Field(
        default_factory=lambda: ["locale", "language", "lang"],
        alias="I18N_ACCEPTED_REQUEST_PARAMS",
        description="Request keys that may carry a locale value",
    )
    translations_dir: str = Field(
        default="",
        alias="I18N_TRANSLATIONS_DIR",
        description="Folder with per-locale translation files",
    )
    file_extension: str = Field(
        default=".yml",
        alias="I18N_FILE_EXTENSION",
        description="Extension of translation files",
    )
    apply_time_locale: bool = Field(
        default=True,
        alias="I18N_APPLY_TIME_LOCALE",
        description="Apply resolved locale variants to LC_TIME",
    )
    locale_table_file: str = Field(
        default="",
        alias="I18N_LOCALE_TABLE_FILE",
        description="YAML mapping of locale ids to native platform names",
    )

    @field_validator("file_extension")
    @classmethod
    def validate_file_extension(cls, v: str) -> str:
        """Ensure the extension starts with a dot."""
        v = v.strip()
        if v and not v.startswith("."):
            return f".{v}"
        return v
