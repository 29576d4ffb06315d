"""Feature-level fixtures for i18n tests.

Provides translation folders and platform locale tables for locale
resolution and translation scenarios.
"""

import pytest
import yaml

from localeweave.i18n import NativeLocaleTable


def write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, allow_unicode=True, sort_keys=False)
    return path


@pytest.fixture
def translations_dir(tmp_path):
    """Create a translation folder with files of decreasing specificity.

    Returns a directory structure like:
    - de_AT/UTF-8.yml
    - de_AT.yml
    - de.yml
    - fr.yml
    """
    folder = tmp_path / "i18n"
    write_yaml(
        folder / "de_AT" / "UTF-8.yml",
        {"greeting": "Servus (UTF-8)", "farewell": {"text": "Baba", "category": "Short"}},
    )
    write_yaml(folder / "de_AT.yml", {"greeting": "Servus"})
    write_yaml(
        folder / "de.yml",
        {
            "greeting": "Hallo",
            "farewell": {"text": "Auf Wiedersehen", "category": "Long"},
            "Hello, my name is %s.": "Hallo, mein Name ist %s.",
        },
    )
    write_yaml(folder / "fr.yml", {"greeting": "Bonjour"})
    return folder


@pytest.fixture
def yaml_writer():
    """Write a mapping to a YAML file, keeping key order."""
    return write_yaml


@pytest.fixture
def native_table():
    """Table mapping canonical ids to Windows-style native names."""
    return NativeLocaleTable(
        {
            "de_AT": "German_Austria.1252",
            "en_US": "English_United States.1252",
            "fr_FR": "French_France.1252",
        }
    )
