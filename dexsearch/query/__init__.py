"""Fuzzy name matching and ranking."""

from dexsearch.query.engine import QueryEngine, normalize, rank
from dexsearch.query.models import Match, MatchScore
from dexsearch.query.scoring import score

__all__ = [
    "QueryEngine",
    "normalize",
    "rank",
    "score",
    "Match",
    "MatchScore",
]
