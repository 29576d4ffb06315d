"""Current locale provider.

Collaborators that do not carry an explicit Locale (e.g., a translation
source created without one) read it from a LocaleContext. The context holds a
single slot: the last registered locale wins. It is not synchronized and is
meant for single-threaded, request-scoped use.

Usage:
    from localeweave.i18n import Locale, current_locale

    Locale("de", "AT").register_as_global_instance()
    current_locale.get_instance()  # Locale(language='de', region='AT', ...)

    # Scoped registration, restored on exit
    with current_locale.use(Locale("fr", "FR")):
        ...
"""

from contextlib import contextmanager
from typing import TYPE_CHECKING, Generator, Optional

from localeweave.logging import get_module_logger

if TYPE_CHECKING:
    from localeweave.i18n.models import Locale

logger = get_module_logger()


class LocaleContext:
    """Holds the current Locale for ambient lookups."""

    def __init__(self, locale: Optional["Locale"] = None):
        self._locale = locale

    def register(self, locale: "Locale") -> "Locale":
        """Register a locale, replacing any previous one.

        Returns:
            The registered locale.
        """
        self._locale = locale
        logger.debug("registered_current_locale", locale=str(locale))
        return locale

    def has_instance(self) -> bool:
        return self._locale is not None

    def get_instance(self) -> Optional["Locale"]:
        """Return the registered locale, or None if none is registered."""
        return self._locale

    def clear(self) -> None:
        """Remove the registered locale."""
        self._locale = None

    @contextmanager
    def use(self, locale: "Locale") -> Generator["Locale", None, None]:
        """Register a locale for the duration of the block.

        The previously registered locale (or none) is restored on exit.
        """
        previous = self._locale
        self.register(locale)
        try:
            yield locale
        finally:
            self._locale = previous


# Process-wide default context
current_locale = LocaleContext()
