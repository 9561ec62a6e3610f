"""Case-insensitive lookups over plain header dicts.

Headers stay ordinary ``dict[str, str]`` objects so handlers can read and
write them directly; only lookups ignore case.
"""

from collections.abc import Mapping


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    """Return the value of header *name*, or ``None`` if missing."""
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def has_header(headers: Mapping[str, str], name: str) -> bool:
    """True if header *name* is present, in any case."""
    name = name.lower()
    return any(key.lower() == name for key in headers)
