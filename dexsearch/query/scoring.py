"""String similarity scoring for name lookups.

Two complementary metrics are computed for every candidate:

- Levenshtein edit distance (lower is better)
- Jaro similarity boosted by a common-prefix bonus (higher is better)

The prefix bonus is applied unconditionally, unlike rapidfuzz's
``JaroWinkler`` which only boosts scores above 0.7, so the Jaro part comes
from rapidfuzz and the bonus is added here.
"""

from rapidfuzz.distance import Jaro, Levenshtein

from dexsearch.query.models import MatchScore

PREFIX_SCALE = 0.1
MAX_PREFIX_LENGTH = 4


def common_prefix_length(a: str, b: str, limit: int = MAX_PREFIX_LENGTH) -> int:
    """Count leading characters shared by both strings, up to ``limit``."""
    length = 0
    for ca, cb in zip(a[:limit], b[:limit]):
        if ca != cb:
            break
        length += 1
    return length


def jaro_winkler(candidate: str, query: str) -> float:
    """Prefix-boosted Jaro similarity in [0.0, 1.0].

    Both strings empty, or either one empty, scores 0.0.
    """
    if not candidate or not query:
        return 0.0

    jaro = Jaro.similarity(candidate, query)
    prefix = common_prefix_length(candidate, query)
    return jaro + prefix * PREFIX_SCALE * (1.0 - jaro)


def score(candidate: str, query: str) -> MatchScore:
    """Score an already normalized candidate name against a normalized query.

    Args:
        candidate: Candidate name, normalized by the caller
        query: Query text, normalized by the caller

    Returns:
        MatchScore with edit distance and prefix-boosted Jaro similarity.
        Both metrics are symmetric in their arguments.
    """
    return MatchScore(
        distance=Levenshtein.distance(candidate, query),
        similarity=jaro_winkler(candidate, query),
    )
