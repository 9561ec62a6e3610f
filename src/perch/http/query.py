"""Query string parsing.

Query values are plain strings. When a key repeats, the last value wins,
matching how API Gateway flattens ``queryStringParameters``.
"""

from collections.abc import Mapping
from urllib.parse import parse_qsl, urlencode


def parse_query(query_string: str) -> dict[str, str]:
    """Parse a raw query string into a ``{name: value}`` dict.

    Blank values are kept (``?flag=`` yields ``{"flag": ""}``).
    """
    if not query_string:
        return {}
    return dict(parse_qsl(query_string, keep_blank_values=True))


def build_query(params: Mapping[str, str]) -> str:
    """Inverse of ``parse_query`` for events that carry no raw query string."""
    return urlencode(list(params.items()))
