"""Tests for localeweave.i18n.models module."""

import locale as os_locale
from dataclasses import FrozenInstanceError

import pytest

from localeweave.i18n import (
    Locale,
    LocaleContext,
    LocaleParts,
    LocaleSignals,
    PosixLocaleTable,
    TranslationEntry,
    build_variants,
    current_locale,
)
from localeweave.i18n.models import apply_time_locale, read_system_locale
from tests.factories.i18n import make_locale

pytestmark = pytest.mark.unit


@pytest.fixture
def setlocale_calls(monkeypatch):
    """Record LC_TIME requests; only "de_AT" is accepted by the fake OS."""
    calls = []

    def fake_setlocale(category, value=None):
        calls.append(value)
        if value != "de_AT":
            raise os_locale.Error("unsupported locale setting")
        return value

    monkeypatch.setattr(os_locale, "setlocale", fake_setlocale)
    return calls


class TestLocale:
    """Tests for the Locale value object."""

    def test_normalizes_case(self):
        """Language is lower case and region upper case."""
        locale = Locale("DE", "at", "UTF-8")
        assert locale.language == "de"
        assert locale.region == "AT"
        assert locale.charset == "UTF-8"

    def test_empty_language_rejected(self):
        """A Locale needs a language."""
        with pytest.raises(ValueError):
            Locale("")
        with pytest.raises(ValueError):
            Locale("  ", "AT")

    def test_is_immutable(self):
        """Fields cannot be reassigned."""
        locale = make_locale()
        with pytest.raises(FrozenInstanceError):
            locale.language = "fr"

    def test_equality_ignores_table(self):
        """Locales compare by language, region and charset."""
        assert Locale("de", "AT", table=PosixLocaleTable()) == Locale("de", "AT")
        assert Locale("de", "AT") != Locale("de", "DE")

    def test_str_canonical_form(self):
        """str() renders language[_region][.charset]."""
        assert str(Locale("de")) == "de"
        assert str(Locale("de", "AT")) == "de_AT"
        assert str(Locale("de", "AT", "UTF-8")) == "de_AT.UTF-8"
        assert str(Locale("de", charset="UTF-8")) == "de.UTF-8"

    def test_aliases(self):
        """lid, cid and country alias language and region."""
        locale = make_locale()
        assert locale.lid == "de"
        assert locale.cid == "AT"
        assert locale.country == "AT"

    def test_from_parts(self):
        """Locales are built from parsed parts."""
        assert Locale.from_parts(LocaleParts("fr", "CA")) == Locale("fr", "CA")

    def test_register_as_global_instance(self):
        """Registering makes the locale the current one."""
        locale = make_locale().register_as_global_instance()
        assert current_locale.get_instance() is locale

    def test_register_with_explicit_context(self):
        """An explicit context is used instead of the process default."""
        context = LocaleContext()
        locale = make_locale().register_as_global_instance(context)
        assert context.get_instance() is locale
        assert current_locale.has_instance() is False


class TestVariants:
    """Tests for locale variant generation."""

    def test_language_only(self):
        """A bare language has one variant."""
        assert Locale("de").variants == ("de",)

    def test_language_and_region(self):
        """Region variants precede the language."""
        assert Locale("de", "AT").variants == ("de_AT", "de-AT", "de")

    def test_language_region_charset(self):
        """Charset variants come first and the language last."""
        assert Locale("de", "AT", "UTF-8").variants == (
            "de_AT.UTF-8",
            "de-AT.UTF-8",
            "de_AT",
            "de-AT",
            "de",
        )

    def test_charset_without_region_ignored(self):
        """A charset is only used together with a region."""
        assert Locale("de", charset="UTF-8").variants == ("de",)

    def test_posix_table_adds_nothing(self):
        """Tables without native names keep the logical variants."""
        locale = Locale("de", "AT", table=PosixLocaleTable())
        assert locale.variants == ("de_AT", "de-AT", "de")

    def test_native_variants_interleaved(self, native_table):
        """Native names precede logical ones at each specificity."""
        locale = Locale("de", "AT", "UTF-8", table=native_table)
        assert locale.variants == (
            "German_Austria.1252",
            "German-Austria.1252",
            "de_AT.UTF-8",
            "de-AT.UTF-8",
            "German_Austria",
            "German-Austria",
            "de_AT",
            "de-AT",
            "German",
            "de",
        )
        assert locale.variants[-1] == "de"

    def test_native_variants_unknown_locale(self, native_table):
        """Locales missing from the table keep the logical variants."""
        assert Locale("it", "IT", table=native_table).variants == (
            "it_IT",
            "it-IT",
            "it",
        )

    def test_deterministic(self, native_table):
        """The same input always yields the same variants."""
        first = build_variants("de", "AT", "UTF-8", native_table)
        second = build_variants("de", "AT", "UTF-8", native_table)
        assert first == second
        assert len(first) == len(set(first))


class TestTimeLocale:
    """Tests for applying variants to LC_TIME."""

    def test_apply_first_accepted_variant(self, setlocale_calls):
        """Variants are tried in order until the OS accepts one."""
        variants = ("de_AT.UTF-8", "de-AT.UTF-8", "de_AT", "de-AT", "de")
        assert apply_time_locale(variants) == "de_AT"
        assert setlocale_calls == ["de_AT.UTF-8", "de-AT.UTF-8", "de_AT"]

    def test_apply_none_accepted(self, setlocale_calls):
        """If the OS accepts no variant nothing is applied."""
        assert apply_time_locale(("fr_FR", "fr")) is None
        assert setlocale_calls == ["fr_FR", "fr"]

    def test_construction_applies_when_enabled(self, setlocale_calls, set_settings_env):
        """Constructing a Locale sets LC_TIME when enabled."""
        set_settings_env(I18N_APPLY_TIME_LOCALE="true")
        Locale("de", "AT", "UTF-8")
        assert setlocale_calls[-1] == "de_AT"

    def test_construction_skips_when_disabled(self, setlocale_calls):
        """Test settings disable LC_TIME changes."""
        Locale("de", "AT")
        assert setlocale_calls == []


class TestTranslationEntry:
    """Tests for TranslationEntry."""

    def test_defaults(self):
        """Category is optional."""
        entry = TranslationEntry("Hallo")
        assert entry.text == "Hallo"
        assert entry.category is None


class TestSystemLocale:
    """Tests for read_system_locale()."""

    def test_precedence(self):
        """LC_ALL wins over LC_MESSAGES and LANG."""
        environ = {"LANG": "en_US.UTF-8", "LC_MESSAGES": "fr_FR", "LC_ALL": "de_AT"}
        assert read_system_locale(environ) == "de_AT"
        assert read_system_locale({"LANG": "en_US.UTF-8", "LC_ALL": ""}) == "en_US.UTF-8"

    def test_falls_back_to_process_locale(self, monkeypatch):
        """Without environment values the process locale is queried."""
        monkeypatch.setattr(os_locale, "setlocale", lambda category, value=None: "C")
        assert read_system_locale({}) == "C"


class TestLocaleSignals:
    """Tests for LocaleSignals."""

    def test_defaults_are_empty(self):
        """Signals default to absent values and empty maps."""
        signals = LocaleSignals()
        assert signals.url_path is None
        assert signals.form == {}
        assert signals.query == {}
        assert signals.session is None

    def test_from_environ(self, monkeypatch):
        """Request values come from the environ, the OS locale from the process."""
        for name in ("LC_MESSAGES", "LANG"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("LC_ALL", "de_AT.UTF-8")
        environ = {
            "REQUEST_URI": "/fr/page",
            "QUERY_STRING": "lang=it&language=es&language=pt",
            "HTTP_ACCEPT_LANGUAGE": "en-GB,en;q=0.8",
        }
        session = {"language": "nl"}

        signals = LocaleSignals.from_environ(environ, form={"language": "de"}, session=session)

        assert signals.url_path == "/fr/page"
        assert signals.query == {"lang": "it", "language": "es"}
        assert signals.form == {"language": "de"}
        assert signals.session == session
        assert signals.accept_language == "en-GB,en;q=0.8"
        assert signals.system_locale == "de_AT.UTF-8"

    def test_from_environ_path_fallbacks(self):
        """PATH_INFO is used when REQUEST_URI and SCRIPT_URL are absent."""
        signals = LocaleSignals.from_environ({"PATH_INFO": "/de/"})
        assert signals.url_path == "/de/"
        assert signals.query == {}
        assert signals.accept_language is None
