"""Locale resolution from request and OS signals.

Runs a fixed cascade over the available signals and returns the first
locale that can be parsed:

1. URL path (optional)
2. Form fields (POST-like)
3. Query parameters (GET-like)
4. Session values (if a session exists)
5. Accept-Language header
6. OS default locale
7. Caller-supplied fallback
"""

from typing import Any, Mapping, Optional, Sequence

from localeweave.i18n.models import Locale, LocaleSignals
from localeweave.i18n.parsing import (
    parse_accept_language,
    parse_keyed_map,
    parse_system_locale,
    parse_url_path,
)
from localeweave.i18n.platform import LocaleTable
from localeweave.logging import get_module_logger
from localeweave.services.providers import get_settings

logger = get_module_logger()

DEFAULT_REQUEST_PARAMS = ("locale", "language", "lang")


class LocaleResolver:
    """Resolves a Locale from LocaleSignals.

    Each stage either yields a Locale or fails and the next stage runs. No
    stage is retried and results are never merged across stages.

    Attributes:
        fallback_locale: Locale returned when no stage succeeds.
        use_url_path: Whether the URL path stage runs.
        accepted_keys: Request keys for the form, query and session stages.
            An empty sequence skips those three stages.
        table: Platform locale table for OS parsing and native variants.
    """

    def __init__(
        self,
        fallback_locale: Locale,
        use_url_path: bool = True,
        accepted_keys: Sequence[str] = DEFAULT_REQUEST_PARAMS,
        table: Optional[LocaleTable] = None,
    ):
        self.fallback_locale = fallback_locale
        self.use_url_path = use_url_path
        self.accepted_keys = tuple(accepted_keys)
        self.table = table
        self.log = logger.bind(fallback_locale=str(fallback_locale))

    def from_url_path(self, path: Optional[str]) -> Optional[Locale]:
        parts = parse_url_path(path)
        return Locale.from_parts(parts, self.table) if parts else None

    def from_keyed_map(self, data: Optional[Mapping[str, Any]]) -> Optional[Locale]:
        parts = parse_keyed_map(data, self.accepted_keys)
        return Locale.from_parts(parts, self.table) if parts else None

    def from_header(self, accept_language: Optional[str]) -> Optional[Locale]:
        parts = parse_accept_language(accept_language)
        return Locale.from_parts(parts, self.table) if parts else None

    def from_system(self, raw: Optional[str]) -> Optional[Locale]:
        parts = parse_system_locale(raw, self.table)
        return Locale.from_parts(parts, self.table) if parts else None

    def resolve(self, signals: LocaleSignals) -> Locale:
        """Resolve the best-fit Locale for the given signals.

        Args:
            signals: Raw request and OS signals.

        Returns:
            The first Locale a stage produces, or the fallback locale.
        """
        stages = []
        if self.use_url_path:
            stages.append(("url_path", self.from_url_path, signals.url_path))

        if self.accepted_keys:
            stages.append(("form", self.from_keyed_map, signals.form))
            stages.append(("query", self.from_keyed_map, signals.query))
            if signals.session is not None:
                stages.append(("session", self.from_keyed_map, signals.session))

        stages.append(("accept_language", self.from_header, signals.accept_language))
        stages.append(("system", self.from_system, signals.system_locale))

        for stage, parse, value in stages:
            locale = parse(value)
            if locale is not None:
                self.log.info("locale_resolved", stage=stage, locale=str(locale))
                return locale

        self.log.info("locale_fallback_used")
        return self.fallback_locale


def create_locale(
    fallback_locale: Optional[Locale] = None,
    signals: Optional[LocaleSignals] = None,
    use_url_path: Optional[bool] = None,
    accepted_keys: Optional[Sequence[str]] = None,
    table: Optional[LocaleTable] = None,
) -> Locale:
    """Resolve a Locale using configured defaults.

    Arguments left as None are taken from settings.i18n; signals default to
    LocaleSignals.from_environ().

    Usage:
        locale = create_locale(Locale("de", "AT", "UTF-8"))
        locale.register_as_global_instance()
    """
    i18n = get_settings().i18n

    if fallback_locale is None:
        fallback_locale = Locale(
            i18n.default_language,
            i18n.default_region,
            i18n.default_charset,
            table=table,
        )

    resolver = LocaleResolver(
        fallback_locale=fallback_locale,
        use_url_path=i18n.use_url_path if use_url_path is None else use_url_path,
        accepted_keys=(
            i18n.accepted_request_params if accepted_keys is None else accepted_keys
        ),
        table=table,
    )
    return resolver.resolve(signals or LocaleSignals.from_environ())
