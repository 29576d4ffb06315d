"""i18n system - locale detection and translation lookup.

Main components:
- parsing: parsers turning raw locale signals into LocaleParts
- platform: LocaleTable implementations for native locale names
- models: Locale, TranslationEntry, LocaleSignals
- context: LocaleContext holding the current locale
- resolvers: LocaleResolver cascade and create_locale()
- sources: TranslationSource and DictTranslationSource
- translator: Translator and Localizable
"""

from localeweave.i18n.context import LocaleContext, current_locale
from localeweave.i18n.factory import create_locale_table, create_translator
from localeweave.i18n.models import (
    Locale,
    LocaleSignals,
    TranslationEntry,
    build_variants,
)
from localeweave.i18n.parsing import (
    DEFAULT_ACCEPTED_KEYS,
    parse_accept_language,
    parse_keyed_map,
    parse_system_locale,
    parse_url_path,
)
from localeweave.i18n.platform import (
    LocaleParts,
    LocaleTable,
    NativeLocaleTable,
    PosixLocaleTable,
)
from localeweave.i18n.resolvers import LocaleResolver, create_locale
from localeweave.i18n.sources import DictTranslationSource, TranslationSource
from localeweave.i18n.translator import Localizable, Translator

__all__ = [
    "DEFAULT_ACCEPTED_KEYS",
    "DictTranslationSource",
    "Locale",
    "LocaleContext",
    "LocaleParts",
    "LocaleResolver",
    "LocaleSignals",
    "LocaleTable",
    "Localizable",
    "NativeLocaleTable",
    "PosixLocaleTable",
    "TranslationEntry",
    "TranslationSource",
    "Translator",
    "build_variants",
    "create_locale",
    "create_locale_table",
    "create_translator",
    "current_locale",
    "parse_accept_language",
    "parse_keyed_map",
    "parse_system_locale",
    "parse_url_path",
]
