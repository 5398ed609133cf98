"""Heuristic confidence score for a set of knowledge matches."""

import re

from smart_recall.query.models import KnowledgeMatch

NO_MATCH_CONFIDENCE = 0.3
MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 0.95


def calculate_confidence(query: str, matches: list[KnowledgeMatch]) -> float:
    """Score how well the matches cover the words of the query.

    Each match contributes the number of query words found in its title or
    content, and the full query word count to the denominator, so the result
    is a bounded signal rather than a proportion. Leading or trailing
    whitespace yields an empty word, which is found in every match.

    Args:
        query: User query
        matches: Retrieved knowledge matches

    Returns:
        0.3 without matches, otherwise a value in [0.1, 0.95]
    """
    if not matches:
        return NO_MATCH_CONFIDENCE

    query_words = re.split(r"\s+", query.lower())
    total_matches = 0
    total_words = 0

    for match in matches:
        text = f"{match.title} {match.content}".lower()
        total_matches += sum(1 for word in query_words if word in text)
        total_words += len(query_words)

    return min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, total_matches / total_words))
