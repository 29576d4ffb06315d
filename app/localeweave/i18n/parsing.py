"""Locale string parsing for the different signal sources.

Each signal source has its own grammar. The parsers here are pure functions
that turn a raw value into LocaleParts, or return None when the value carries
no usable locale.
"""

import re
from typing import Any, Mapping, Optional, Sequence

from localeweave.i18n.platform import LocaleParts, LocaleTable, PosixLocaleTable

DEFAULT_ACCEPTED_KEYS = ("locale", "language", "lang", "loc", "lc", "lng")

_URL_PATH_PATTERN = re.compile(r"^/([a-zA-Z]{2})([_-]([a-zA-Z]{2}))?/")
_KEYED_VALUE_PATTERN = re.compile(r"^([a-zA-Z]{2})([_-]([a-zA-Z]{2}))?")
_SYSTEM_LOCALE_PATTERN = re.compile(
    r"^[a-z]{2}([_-][a-z]{2})?(@[a-z_-]+)?(\.[a-z0-9_-]{1,14})?$",
    re.IGNORECASE,
)


def parse_url_path(path: Optional[str]) -> Optional[LocaleParts]:
    """Parse a locale from the first segment of a URL path.

    Accepts "/de/..." and "/de-AT/..." or "/de_AT/...". The segment must be
    followed by a slash.

    Args:
        path: URL path (e.g., "/de-AT/products").

    Returns:
        LocaleParts, or None if the path does not start with a locale segment.
    """
    if not path:
        return None

    match = _URL_PATH_PATTERN.match(path)
    if not match:
        return None

    region = match.group(3).upper() if match.group(2) else ""
    return LocaleParts(match.group(1).lower(), region)


def parse_keyed_map(
    data: Optional[Mapping[str, Any]],
    accepted_keys: Sequence[str] = DEFAULT_ACCEPTED_KEYS,
) -> Optional[LocaleParts]:
    """Parse a locale from a key/value map such as form fields or a session.

    Keys are compared case-insensitively and a key whose value is None
    counts as absent. The accepted keys only decide whether the map carries
    a locale at all: the value is always read from the "language" key,
    whichever accepted key matched. Maps that match on "locale" but have no
    "language" key therefore yield None. This mirrors long-standing behavior
    and changing it alters which locale is resolved.

    Args:
        data: Key/value map (e.g., POST fields, query parameters, session).
        accepted_keys: Keys to look for, in priority order.

    Returns:
        LocaleParts, or None if no usable value was found.
    """
    if not data:
        return None

    lowered = {str(key).lower(): value for key, value in data.items()}

    value = None
    for key in accepted_keys:
        if lowered.get(key.lower()) is None:
            continue
        # NOTE: intentionally reads "language", not the matched key.
        value = lowered.get("language")
        break

    if value is None:
        return None

    value = str(value).strip()
    if not value:
        return None

    match = _KEYED_VALUE_PATTERN.match(value)
    if not match:
        return None

    region = match.group(3).upper() if match.group(2) else ""
    return LocaleParts(match.group(1).lower(), region)


def parse_accept_language(header: Optional[str]) -> Optional[LocaleParts]:
    """Parse a locale from an Accept-Language header value.

    Candidates are taken in header order and quality weights are ignored:
    the first candidate with a two letter language wins. A region is kept
    only if it is exactly two characters; a charset may follow the region
    after a dot (e.g., "de-AT.UTF-8").

    Args:
        header: Raw header (e.g., "de-AT,de;q=0.8,en;q=0.5").

    Returns:
        LocaleParts, or None if no candidate has a two letter language.
    """
    if not header:
        return None

    for candidate in header.split(","):
        tag = candidate.split(";", 1)[0]

        parts = tag.split("-", 1)
        if len(parts) < 2:
            parts = tag.split("_", 1)

        language = parts[0].strip()
        if len(language) != 2:
            continue

        region = ""
        charset = ""
        if len(parts) > 1:
            region_parts = parts[1].split(".", 1)
            region = region_parts[0].strip()
            if len(region_parts) > 1:
                charset = region_parts[1].strip()
            region = region.upper() if len(region) == 2 else ""

        return LocaleParts(language.lower(), region, charset)

    return None


def parse_system_locale(
    raw: Optional[str],
    table: Optional[LocaleTable] = None,
) -> Optional[LocaleParts]:
    """Parse the OS default locale string.

    Strings shorter than two characters and the "C" locale are rejected.
    Tables that read native settings get the raw value as ";"-delimited
    "CATEGORY=name" entries (or bare names); LC_CTYPE entries are skipped and
    the first entry the table knows wins. Otherwise the raw value must look
    like a POSIX locale name ("de_AT", "de_AT@euro", "de_AT.UTF-8").

    Args:
        raw: OS-reported locale string.
        table: Platform locale table. Defaults to PosixLocaleTable.

    Returns:
        LocaleParts, or None if the string is not usable.
    """
    if not raw or len(raw) < 2:
        return None

    table = table or PosixLocaleTable()

    if table.native_settings:
        for element in raw.split(";"):
            name, sep, value = element.partition("=")
            if sep:
                if name.strip().upper() == "LC_CTYPE":
                    continue
                native = value
            else:
                native = element

            locale_id = table.to_locale_id(native)
            if locale_id is None:
                continue

            parts = table.expand(locale_id)
            if parts is not None:
                return parts

        return None

    if not _SYSTEM_LOCALE_PATTERN.match(raw):
        return None

    return table.expand(raw)
