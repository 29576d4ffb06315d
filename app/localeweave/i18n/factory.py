"""Factory functions for creating i18n components.

Provides convenience functions for wiring translators and locale tables from
the application settings.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from localeweave.i18n.models import Locale
from localeweave.i18n.platform import LocaleTable, NativeLocaleTable, PosixLocaleTable
from localeweave.i18n.sources import DictTranslationSource
from localeweave.i18n.translator import Translator
from localeweave.logging import get_module_logger
from localeweave.services.providers import get_settings

logger = get_module_logger()


def create_locale_table(table_file: Optional[Union[str, Path]] = None) -> LocaleTable:
    """Create the platform locale table.

    Args:
        table_file: YAML mapping of locale ids to native names
            (default: settings.i18n.locale_table_file).

    Returns:
        NativeLocaleTable if a table file is configured, else PosixLocaleTable.

    Raises:
        ValueError: If the configured table file cannot be read.
    """
    table_file = table_file or get_settings().i18n.locale_table_file
    if not table_file:
        return PosixLocaleTable()
    return NativeLocaleTable.from_file(Path(table_file))


def create_translator(
    folder: Optional[Union[str, Path]] = None,
    locale: Optional[Locale] = None,
    data: Optional[Mapping[Any, Any]] = None,
    numeric_ids: bool = False,
) -> Translator:
    """Create a Translator over a DictTranslationSource.

    Args:
        folder: Folder with per-locale translation files
            (default: settings.i18n.translations_dir; none if empty).
        locale: Source locale (default: the registered current locale).
        data: Static translations; they win over file translations.
        numeric_ids: Coerce digit-string identifiers to int.

    Returns:
        Translator: Configured translator instance

    Usage:
        Locale("de", "AT").register_as_global_instance()
        translator = create_translator(folder="/srv/app/i18n")
        translator.translate_by_text("Hello, my name is %s.", "Max")
    """
    if folder is None:
        folder = get_settings().i18n.translations_dir or None

    options = {"folder": str(folder)} if folder else None
    source = DictTranslationSource(
        locale, data or {}, options, numeric_ids=numeric_ids
    )
    translator = Translator(source)

    logger.info(
        "translator_created",
        folder=str(folder) if folder else None,
        locale=str(source.locale) if source.locale is not None else None,
        entry_count=len(source.entries),
        valid=source.is_valid,
    )
    return translator
