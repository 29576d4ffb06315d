"""Platform locale tables.

Some platforms name their locales differently from the logical
"language_REGION.charset" form (e.g., "German_Austria.1252"). A LocaleTable
translates between the two so that locale variants can include the native
names and OS locale settings can be read back into language/region/charset.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, NamedTuple, Optional

import yaml

from localeweave.logging import get_module_logger

logger = get_module_logger()


class LocaleParts(NamedTuple):
    """Language, region and charset parsed from a raw locale signal.

    Attributes:
        language: Two letter language code.
        region: Two letter region code, or "" when absent.
        charset: Charset name, or "" when absent.
    """

    language: str
    region: str = ""
    charset: str = ""


def split_locale_id(locale_id: str) -> Optional[LocaleParts]:
    """Split a "ll[_-]CC[.charset][@modifier]" id into its parts.

    The modifier is dropped wherever it appears.

    Returns:
        LocaleParts, or None if the language part is not two letters.
    """
    base, _, modifier_tail = locale_id.partition("@")
    # "de_AT@euro.UTF-8" keeps a charset after the modifier
    _, _, tail_charset = modifier_tail.partition(".")

    base, _, charset = base.partition(".")
    charset = charset or tail_charset

    language, region = base, ""
    for separator in ("_", "-"):
        if separator in base:
            language, region = base.split(separator, 1)
            break

    if len(language) != 2 or not language.isalpha():
        return None
    if len(region) != 2:
        region = ""

    return LocaleParts(language.lower(), region.upper(), charset)


class LocaleTable(ABC):
    """Abstract platform locale table.

    Attributes:
        native_settings: True if the OS reports its locale as ";"-delimited
            native settings that must be mapped through the table.
    """

    native_settings: bool = False

    @abstractmethod
    def to_native(self, canonical: str) -> Optional[str]:
        """Translate a canonical locale string to the native locale name.

        Args:
            canonical: Locale in "language[_region][.charset]" form.

        Returns:
            Native name, or None if the platform has no native form.
        """
        pass

    @abstractmethod
    def to_locale_id(self, native: str) -> Optional[str]:
        """Translate a native locale name back to a locale id.

        Returns:
            Locale id, or None if the name is unknown.
        """
        pass

    def expand(self, locale_id: str) -> Optional[LocaleParts]:
        """Decompose a locale id into language, region and charset."""
        return split_locale_id(locale_id)


class PosixLocaleTable(LocaleTable):
    """Table for POSIX-like systems where native and logical names coincide."""

    def to_native(self, canonical: str) -> Optional[str]:
        return None

    def to_locale_id(self, native: str) -> Optional[str]:
        return native or None


class NativeLocaleTable(LocaleTable):
    """Mapping-driven table for platforms with their own locale names.

    Maps canonical locale ids ("de_AT", "de_AT.UTF-8") to native names
    ("German_Austria.1252"). Lookups ignore case.

    Attributes:
        mapping: Canonical id -> native name.
    """

    native_settings = True

    def __init__(self, mapping: Mapping[str, str]):
        self.mapping: Dict[str, str] = {str(k): str(v) for k, v in mapping.items()}
        self._forward = {k.lower(): v for k, v in self.mapping.items()}
        self._reverse = {v.lower(): k for k, v in self.mapping.items()}
        self._reverse_base = {
            v.lower().partition(".")[0]: k for k, v in self.mapping.items()
        }

    @classmethod
    def from_file(cls, path: Path) -> "NativeLocaleTable":
        """Build a table from a YAML mapping file.

        Raises:
            ValueError: If the file cannot be read or is not a mapping.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error("locale_table_unreadable", file=str(path), error=str(e))
            raise ValueError(f"Failed to read locale table {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Locale table {path} must contain a mapping")

        logger.info("loaded_locale_table", file=str(path), entry_count=len(data))
        return cls(data)

    def to_native(self, canonical: str) -> Optional[str]:
        key = canonical.lower()
        if key in self._forward:
            return self._forward[key]
        return self._forward.get(key.partition(".")[0])

    def to_locale_id(self, native: str) -> Optional[str]:
        key = native.strip().lower()
        if not key:
            return None
        if key in self._reverse:
            return self._reverse[key]
        return self._reverse_base.get(key.partition(".")[0])
