"""
Sanitizing user text before it is interpolated into PostgREST filters.
"""

from typing import Any


def sanitize_for_search(value: Any) -> str:
    """
    Make a string safe for ilike / or() filter patterns.

    Removes the LIKE wildcards % and _ and doubles single quotes.
    Anything that isn't a string becomes "".
    """
    if value is None or not isinstance(value, str):
        return ""
    return value.replace("'", "''").replace("%", "").replace("_", "")
