"""
Match scoring between a candidate attribute name and the typed prefix.
"""

from difflib import SequenceMatcher

from layoutassist.lsp.protocol import MatchLevel

DEFAULT_FUZZY_THRESHOLD = 70


def partial_ratio(candidate: str, partial: str) -> int:
    """
    Best similarity (0-100) between ``partial`` and any same-length window of
    ``candidate``.
    """
    if not partial or not candidate:
        return 0
    if len(partial) >= len(candidate):
        return round(SequenceMatcher(None, candidate, partial).ratio() * 100)

    width = len(partial)
    best = 0.0
    for start in range(len(candidate) - width + 1):
        ratio = SequenceMatcher(None, candidate[start:start + width], partial).ratio()
        if ratio > best:
            best = ratio
            if best == 1.0:
                break
    return round(best * 100)


class MatchScorer:
    """Classifies candidates as equal, prefix, fuzzy partial or no match."""

    def __init__(self, fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD):
        self.fuzzy_threshold = fuzzy_threshold

    def classify(self, candidate: str, partial: str) -> MatchLevel:
        if candidate == partial:
            return MatchLevel.CASE_SENSITIVE_EQUAL

        lower_candidate = candidate.lower()
        lower_partial = partial.lower()
        if lower_candidate == lower_partial:
            return MatchLevel.CASE_INSENSITIVE_EQUAL
        if candidate.startswith(partial):
            return MatchLevel.CASE_SENSITIVE_PREFIX
        if lower_candidate.startswith(lower_partial):
            return MatchLevel.CASE_INSENSITIVE_PREFIX
        if partial_ratio(lower_candidate, lower_partial) >= self.fuzzy_threshold:
            return MatchLevel.PARTIAL_MATCH
        return MatchLevel.NO_MATCH

