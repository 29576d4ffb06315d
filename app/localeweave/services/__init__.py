"""Service providers."""

from localeweave.services.providers import get_settings

__all__ = ["get_settings"]
