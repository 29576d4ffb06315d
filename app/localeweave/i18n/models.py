"""Locale and translation models for the i18n system.

Defines the resolved Locale value object, translation entries and the raw
signals a locale is resolved from.
"""

import locale as os_locale
import os
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import parse_qs

from localeweave.i18n.platform import LocaleParts, LocaleTable
from localeweave.logging import get_module_logger
from localeweave.services.providers import get_settings

logger = get_module_logger()

SYSTEM_LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")


def _variant_tiers(
    language: str, region: str, charset: str
) -> Tuple[List[str], List[str], List[str]]:
    """Group locale strings by specificity: with charset, with region, language."""
    if region and charset:
        return (
            [f"{language}_{region}.{charset}", f"{language}-{region}.{charset}"],
            [f"{language}_{region}", f"{language}-{region}"],
            [language],
        )
    if region:
        return [], [f"{language}_{region}", f"{language}-{region}"], [language]
    return [], [], [language]


def build_variants(
    language: str,
    region: str = "",
    charset: str = "",
    table: Optional[LocaleTable] = None,
) -> Tuple[str, ...]:
    """Build the ordered locale strings used to match resource names.

    Most specific first, always ending with the bare language. A charset is
    only used together with a region. When the table knows a native name for
    the locale, the native strings precede the logical ones at each level of
    specificity.

    Args:
        language: Two letter language code.
        region: Two letter region code or "".
        charset: Charset or "".
        table: Optional platform locale table.

    Returns:
        Tuple of locale strings (e.g., ("de_AT", "de-AT", "de")).
    """
    logical = _variant_tiers(language, region, charset)
    tiers = logical

    native = None
    if table is not None:
        canonical = format_locale(language, region, charset)
        native = table.to_native(canonical)

    if native:
        native_language, _, rest = native.partition("_")
        native_region, _, native_charset = rest.partition(".")
        native_tiers = _variant_tiers(native_language, native_region, native_charset)
        tiers = tuple(n + l for n, l in zip(native_tiers, logical))

    variants: List[str] = []
    for tier in tiers:
        for variant in tier:
            if variant not in variants:
                variants.append(variant)

    return tuple(variants)


def format_locale(language: str, region: str = "", charset: str = "") -> str:
    """Return the canonical "language[_region][.charset]" form."""
    return (
        language
        + (f"_{region}" if region else "")
        + (f".{charset}" if charset else "")
    )


def apply_time_locale(variants: Tuple[str, ...]) -> Optional[str]:
    """Apply the first usable variant as the process LC_TIME locale.

    Returns:
        The applied variant, or None if the OS accepted none of them.
    """
    for variant in variants:
        try:
            os_locale.setlocale(os_locale.LC_TIME, variant)
            return variant
        except (os_locale.Error, ValueError):
            continue
    return None


@dataclass(frozen=True)
class Locale:
    """A resolved locale.

    Language is stored lower case and region upper case. The variants are
    derived once at construction and never change.

    Attributes:
        language: Two letter language code (e.g., "de").
        region: Two letter region code (e.g., "AT") or "".
        charset: Optional charset (e.g., "UTF-8") or "".
        table: Optional platform locale table used for native variants.
        variants: Ordered locale strings, most specific first.
    """

    language: str
    region: str = ""
    charset: str = ""
    table: Optional[LocaleTable] = field(default=None, compare=False, repr=False)
    variants: Tuple[str, ...] = field(init=False, compare=False)

    def __post_init__(self):
        language = (self.language or "").strip().lower()
        if not language:
            raise ValueError("Locale language must not be empty")

        object.__setattr__(self, "language", language)
        object.__setattr__(self, "region", (self.region or "").strip().upper())
        object.__setattr__(self, "charset", (self.charset or "").strip())
        object.__setattr__(
            self,
            "variants",
            build_variants(self.language, self.region, self.charset, self.table),
        )

        if get_settings().i18n.apply_time_locale:
            apply_time_locale(self.variants)

    @classmethod
    def from_parts(
        cls, parts: LocaleParts, table: Optional[LocaleTable] = None
    ) -> "Locale":
        """Create a Locale from parsed LocaleParts."""
        return cls(parts.language, parts.region, parts.charset, table=table)

    @property
    def lid(self) -> str:
        """Language id (alias of language)."""
        return self.language

    @property
    def cid(self) -> str:
        """Country id (alias of region)."""
        return self.region

    @property
    def country(self) -> str:
        return self.region

    def __str__(self) -> str:
        """Return the canonical form (e.g., "de_AT.UTF-8")."""
        return format_locale(self.language, self.region, self.charset)

    def register_as_global_instance(self, context=None) -> "Locale":
        """Register this locale as the current locale.

        Args:
            context: LocaleContext to register with. Defaults to the
                process-wide current_locale context.

        Returns:
            This Locale, for chaining.
        """
        from localeweave.i18n.context import current_locale

        (context or current_locale).register(self)
        return self


@dataclass(frozen=True)
class TranslationEntry:
    """A single translated text.

    Attributes:
        text: Translated text.
        category: Optional category name the text belongs to.
    """

    text: str
    category: Optional[str] = None


def read_system_locale(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Read the OS default locale string.

    Uses the first non-empty of LC_ALL, LC_MESSAGES and LANG, falling back to
    the process LC_ALL setting.
    """
    environ = os.environ if environ is None else environ
    for name in SYSTEM_LOCALE_ENV_VARS:
        value = environ.get(name)
        if value:
            return value

    try:
        return os_locale.setlocale(os_locale.LC_ALL)
    except os_locale.Error:
        return None


@dataclass
class LocaleSignals:
    """Raw request and OS signals a locale can be resolved from.

    Attributes:
        url_path: Current request path (e.g., "/de-AT/products").
        form: Submitted form fields (POST-like).
        query: Query parameters (GET-like).
        session: Session values, or None if no session is available.
        accept_language: Raw Accept-Language header value.
        system_locale: Raw OS default locale string.
    """

    url_path: Optional[str] = None
    form: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    session: Optional[Mapping[str, Any]] = None
    accept_language: Optional[str] = None
    system_locale: Optional[str] = None

    @classmethod
    def from_environ(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        form: Optional[Mapping[str, Any]] = None,
        session: Optional[Mapping[str, Any]] = None,
    ) -> "LocaleSignals":
        """Collect signals from a CGI/WSGI style environ.

        The URL path comes from REQUEST_URI, SCRIPT_URL or PATH_INFO, the
        query map from QUERY_STRING (first value per key). The system locale
        is always read from the process environment.

        Args:
            environ: Request environ. Defaults to os.environ.
            form: Parsed form fields, if the caller has them.
            session: Session values, if a session is available.
        """
        environ = os.environ if environ is None else environ

        url_path = (
            environ.get("REQUEST_URI")
            or environ.get("SCRIPT_URL")
            or environ.get("PATH_INFO")
        )
        query = {
            key: values[0]
            for key, values in parse_qs(environ.get("QUERY_STRING", "")).items()
            if values
        }

        return cls(
            url_path=url_path,
            form=form or {},
            query=query,
            session=session,
            accept_language=environ.get("HTTP_ACCEPT_LANGUAGE"),
            system_locale=read_system_locale(),
        )
