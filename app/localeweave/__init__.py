"""localeweave - locale detection and translation lookup."""

from localeweave.i18n import (
    DictTranslationSource,
    Locale,
    LocaleResolver,
    LocaleSignals,
    Translator,
    create_locale,
    create_translator,
    current_locale,
)

__version__ = "0.2.0"

__all__ = [
    "DictTranslationSource",
    "Locale",
    "LocaleResolver",
    "LocaleSignals",
    "Translator",
    "create_locale",
    "create_translator",
    "current_locale",
]
