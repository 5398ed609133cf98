"""Fragment extraction for vague, comma separated queries."""

import re

FRAGMENT_SEPARATOR = re.compile(r"[,;]\s*")


def extract_fragments(query: str) -> list[str]:
    """Split a query into the clues it is made of.

    "Blue folder; last week, AI" becomes ["blue folder", "last week", "ai"].
    A query without at least two non-empty pieces is kept whole, trimmed and
    lowercased, so non-empty input never yields an empty list.

    Args:
        query: Raw user query

    Returns:
        Ordered list of fragments
    """
    fragments = [
        fragment.strip()
        for fragment in FRAGMENT_SEPARATOR.split(query.lower())
        if fragment.strip()
    ]
    return fragments if len(fragments) > 1 else [query.strip().lower()]
