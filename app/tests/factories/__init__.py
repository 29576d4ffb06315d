"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_locale,
    make_signals,
    make_source,
    make_translation_data,
)

__all__ = [
    "make_locale",
    "make_signals",
    "make_source",
    "make_translation_data",
]
