"""Translator for resolving identifiers to translated texts.

Thin facade over a TranslationSource: unknown identifiers fall back to a
caller default or to the identifier itself, and printf-style arguments are
substituted into the resolved text.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from localeweave.i18n.models import TranslationEntry
from localeweave.i18n.sources import Identifier, TranslationSource
from localeweave.logging import get_module_logger

logger = get_module_logger()


class Translator:
    """Resolves translations from a TranslationSource.

    Attributes:
        source: TranslationSource the translations are read from.
        categories: Category names of the source when it was assigned.
    """

    def __init__(self, source: TranslationSource):
        """Initialize Translator.

        Args:
            source: TranslationSource to read translations from.
        """
        self.source = source
        self.categories: List[str] = source.get_all_categories()
        logger.info(
            "initialized_translator",
            locale=str(source.locale) if source.locale is not None else None,
            category_count=len(self.categories),
        )

    def get_source(self) -> TranslationSource:
        return self.source

    def set_source(self, source: TranslationSource) -> "Translator":
        """Replace the source and refresh the categories snapshot."""
        self.source = source
        self.categories = source.get_all_categories()
        return self

    def get_categories(self) -> List[str]:
        return list(self.categories)

    def get_translation(
        self, identifier: Identifier, default_translation: Optional[str] = None
    ) -> str:
        """Get the translated text for an identifier.

        Args:
            identifier: Text or numeric identifier.
            default_translation: Returned if the identifier is unknown.

        Returns:
            The translated text, else default_translation, else the
            identifier as a string.
        """
        entry = self.source.read(identifier)
        if not isinstance(entry, TranslationEntry):
            logger.debug("translation_not_found", identifier=str(identifier))
            if default_translation is None:
                return str(identifier)
            return default_translation
        return entry.text

    def get_translations(self, category: Optional[str] = None) -> Dict[Identifier, str]:
        """Get identifier -> text for a category, or for all entries.

        The order follows the source declaration order.
        """
        translations = self.source.read(None, category) or {}
        return {identifier: entry.text for identifier, entry in translations.items()}

    def translate_by_number(
        self, number: int, default_translation: Optional[str] = None, *args: Any
    ) -> str:
        """Translate a numeric identifier and substitute printf-style args.

        Usage:
            translator.translate_by_number(12, "%d files deleted", 3)
        """
        return self._format(self.get_translation(number, default_translation), args)

    def translate_by_text(self, text: str, *args: Any) -> str:
        """Translate a text identifier and substitute printf-style args.

        Usage:
            translator.translate_by_text("Hello, my name is %s.", "Max")
        """
        return self._format(self.get_translation(text), args)

    def _format(self, text: str, args: tuple) -> str:
        if not args:
            return text
        try:
            return text % args
        except (TypeError, ValueError) as e:
            logger.warning(
                "translation_format_failed",
                text=text,
                arg_count=len(args),
                error=str(e),
            )
            return text


class Localizable(ABC):
    """Classes that translate their own texts expose their Translator."""

    @abstractmethod
    def get_translator(self) -> Translator:
        pass
