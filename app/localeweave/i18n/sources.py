"""Translation sources.

A translation source holds the identifier -> TranslationEntry mapping for one
locale. DictTranslationSource keeps the mapping in memory and can layer YAML
translation files on top of static data.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from localeweave.i18n.context import current_locale
from localeweave.i18n.models import Locale, TranslationEntry
from localeweave.logging import get_module_logger
from localeweave.services.providers import get_settings

logger = get_module_logger()

Identifier = Union[str, int]


def is_identifier(value: Any) -> bool:
    """Check that value can be used as a translation identifier."""
    return isinstance(value, (str, int)) and not isinstance(value, bool)


class TranslationSource(ABC):
    """Abstract base for translation sources.

    Holds the source locale and a small options bag. Implementations define
    how entries are stored, read and reloaded.

    Attributes:
        locale: Locale of the translations, or None if none is known.
    """

    def __init__(self, locale: Optional[Locale] = None):
        """Initialize the source.

        Args:
            locale: Source locale. Defaults to the registered current locale.
        """
        self.locale = locale if locale is not None else current_locale.get_instance()
        self._options: Dict[str, Any] = {}
        self._loaded = False

    @property
    def is_valid(self) -> bool:
        """True if the source has loaded data and has a locale."""
        return self._loaded and self.locale is not None

    def get_locale(self) -> Optional[Locale]:
        return self.locale

    def get_options(self) -> Dict[str, Any]:
        return dict(self._options)

    def get_option(self, name: str, default: Any = False) -> Any:
        """Get an option value.

        If the option is unknown, a non-None default is stored as the
        option's value and returned. A None default is only returned.

        Args:
            name: Option name.
            default: Value remembered and returned for unknown options.
        """
        if not self.has_option(name):
            if default is None:
                return None
            self._options[name] = default
        return self._options[name]

    def has_option(self, name: str) -> bool:
        return name in self._options

    def set_option(self, name: str, value: Any) -> "TranslationSource":
        self._options[name] = value
        return self

    @abstractmethod
    def read(
        self, identifier: Optional[Identifier] = None, category: Optional[str] = None
    ) -> Union[TranslationEntry, Dict[Identifier, TranslationEntry], None]:
        """Read one or more translations.

        Args:
            identifier: Translation identifier, or None to read many.
            category: Optional category filter.

        Returns:
            - no identifier, no category: all entries
            - identifier: the entry, or None if unknown or in another category
            - category only: entries of that category (possibly empty)
        """
        pass

    @abstractmethod
    def reload(self) -> "TranslationSource":
        """Reload the source from its current options."""
        pass

    @abstractmethod
    def get_all_categories(self) -> List[str]:
        """Return all category names known by the source."""
        pass


class DictTranslationSource(TranslationSource):
    """In-memory translation source with optional file backing.

    Known options:

    data
        Static translations, set through set_data().
    file
        Path to a YAML translation file.
    folder
        Folder with one YAML file per locale. The file is picked from the
        source locale, most specific first, e.g. for de_AT.UTF-8:
        ``de_AT/UTF-8.yml``, ``de_AT.yml``, ``de.yml``.

    File content is a mapping of identifier to either the translated text or
    a mapping with ``text`` and optional ``category``::

        1: Einfacher Text
        3:
          text: Ein Text mit Kategorie
          category: Foo

    Records without ``text`` are dropped. File data never replaces
    identifiers that are already present, so static data wins over files.

    Attributes:
        entries: Identifier -> TranslationEntry, in declaration order.
        categories: Distinct category names, in first-seen order.
        numeric_ids: Whether digit-string identifiers are coerced to int.
    """

    def __init__(
        self,
        locale: Optional[Locale] = None,
        data: Optional[Mapping[Any, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
        numeric_ids: bool = False,
    ):
        """Initialize the source and load it.

        Args:
            locale: Source locale. Defaults to the registered current locale.
            data: Static translations.
            options: Initial options (e.g., {"folder": "/srv/i18n"}).
            numeric_ids: Coerce digit-string identifiers to int.
        """
        super().__init__(locale)
        self.numeric_ids = numeric_ids
        self.entries: Dict[Identifier, TranslationEntry] = {}
        self.categories: List[str] = []
        if options:
            self._options.update(options)
        self.set_data(data or {})

    @property
    def has_numeric_identifier(self) -> bool:
        return self.numeric_ids

    @classmethod
    def load_from_folder(
        cls, folder: Union[str, Path], locale: Optional[Locale] = None, **kwargs
    ) -> "DictTranslationSource":
        """Create a source backed by a folder of per-locale files.

        Falls back to an empty source if the folder source cannot be built.
        """
        try:
            return cls(locale, {}, {"folder": str(folder)}, **kwargs)
        except Exception as e:
            logger.warning(
                "translation_folder_source_failed", folder=str(folder), error=str(e)
            )
            return cls(locale, {}, **kwargs)

    def set_data(
        self, data: Mapping[Any, Any], do_reload: bool = True
    ) -> "DictTranslationSource":
        """Replace the entries with the given translations.

        Values may be bare strings or mappings with ``text`` and optional
        ``category``. Records without ``text`` are dropped.

        Args:
            data: Identifier -> text or record.
            do_reload: Layer file or folder translations on top afterwards.
        """
        self._apply(self._normalize(data))
        if do_reload:
            self.reload()
        return self

    def reload(self) -> "DictTranslationSource":
        """Reload from the folder or file option, if any.

        Without a usable option the current entries are kept.
        """
        if self.has_option("folder"):
            return self.reload_from_folder()

        file = self._options.get("file")
        if not file or not Path(file).is_file():
            return self

        return self.reload_from_file()

    def reload_from_folder(self) -> "DictTranslationSource":
        """Pick the most specific locale file in the folder and load it.

        If no candidate exists, the ``file`` and ``folder`` options are
        removed and the current entries are kept.
        """
        folder = Path(str(self._options["folder"]))
        extension = get_settings().i18n.file_extension

        candidates: List[Path] = []
        if self.locale is not None:
            language = self.locale.language
            region = self.locale.region
            charset = self.locale.charset
            if region:
                if charset:
                    candidates.append(
                        folder / f"{language}_{region}" / f"{charset}{extension}"
                    )
                candidates.append(folder / f"{language}_{region}{extension}")
            candidates.append(folder / f"{language}{extension}")

        for candidate in candidates:
            if candidate.is_file():
                self._options["file"] = str(candidate)
                self._options["folder"] = str(folder)
                return self.reload_from_file()

        logger.info(
            "translation_folder_miss",
            folder=str(folder),
            locale=str(self.locale) if self.locale is not None else None,
        )
        self._options.pop("file", None)
        self._options.pop("folder", None)
        return self

    def reload_from_file(self) -> "DictTranslationSource":
        """Load the ``file`` option and add its new identifiers.

        Unreadable or malformed files count as empty. Identifiers that are
        already present keep their current entry.
        """
        file = str(self._options.get("file", ""))
        loaded = self._load_file(file)

        merged = dict(self.entries)
        for identifier, entry in self._normalize(loaded).items():
            # NOTE: existing identifiers win, file data only adds new ones.
            if identifier not in merged:
                merged[identifier] = entry

        self._apply(merged)
        logger.info(
            "loaded_translation_file",
            file=file,
            entry_count=len(self.entries),
            category_count=len(self.categories),
        )
        return self

    def read(
        self, identifier: Optional[Identifier] = None, category: Optional[str] = None
    ) -> Union[TranslationEntry, Dict[Identifier, TranslationEntry], None]:
        if not is_identifier(identifier):
            if category is None:
                return dict(self.entries)
            return {
                key: entry
                for key, entry in self.entries.items()
                if entry.category == category
            }

        entry = self.entries.get(self._normalize_identifier(identifier))
        if entry is None:
            return None
        if category is not None and entry.category != category:
            return None
        return entry

    def get_all_categories(self) -> List[str]:
        return list(self.categories)

    def _load_file(self, file: str) -> Mapping[Any, Any]:
        try:
            with open(file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning("translation_file_unreadable", file=file, error=str(e))
            return {}

        if not isinstance(data, dict):
            if data is not None:
                logger.warning(
                    "invalid_translation_file_format", file=file, expected="dict"
                )
            return {}
        return data

    def _normalize(self, data: Mapping[Any, Any]) -> Dict[Identifier, TranslationEntry]:
        entries: Dict[Identifier, TranslationEntry] = {}
        for key, value in data.items():
            identifier = self._normalize_identifier(key)
            if identifier is None:
                continue

            if isinstance(value, TranslationEntry):
                entries[identifier] = value
            elif isinstance(value, Mapping):
                text = value.get("text")
                if text is None:
                    continue
                category = value.get("category")
                entries[identifier] = TranslationEntry(
                    text=str(text),
                    category=str(category) if category is not None else None,
                )
            elif value is not None:
                entries[identifier] = TranslationEntry(text=str(value))
        return entries

    def _normalize_identifier(self, key: Any) -> Optional[Identifier]:
        if self.numeric_ids and isinstance(key, str) and key.strip().isdigit():
            return int(key.strip())
        if is_identifier(key):
            return key
        logger.debug("skipped_translation_identifier", identifier=repr(key))
        return None

    def _apply(self, entries: Dict[Identifier, TranslationEntry]) -> None:
        categories: List[str] = []
        for entry in entries.values():
            if entry.category is not None and entry.category not in categories:
                categories.append(entry.category)

        self.entries = entries
        self.categories = categories
        self._options["data"] = entries
        self._loaded = True
