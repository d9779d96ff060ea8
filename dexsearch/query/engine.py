import logging
from typing import Any, List, Optional, Sequence

from dexsearch.models import Entity
from dexsearch.query.models import Match
from dexsearch.query.scoring import score

logger = logging.getLogger(__name__)


def normalize(text: str) -> str:
    """Fold case for matching. Whitespace and punctuation are kept."""
    return text.lower()


def rank(entities: Sequence[Entity[Any]], query: str, limit: int) -> List[Match]:
    """Score every entity name against the query and keep the best ``limit``.

    Matches are ordered by similarity (descending), then edit distance
    (ascending). The sort is stable, so entities with identical scores keep
    their input order.

    Args:
        entities: Records to rank
        query: Free-text query
        limit: Maximum number of matches to return

    Returns:
        Up to ``limit`` matches, best first. Empty when there are no
        entities or ``limit`` is 0.

    Raises:
        ValueError: If limit is negative
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    search_query = normalize(query)
    matches = [
        Match(entity=entity, score=score(normalize(entity.name), search_query))
        for entity in entities
    ]
    matches.sort(key=lambda m: m.score.sort_key())
    return matches[:limit]


class QueryEngine:
    """Fuzzy name lookup over a loaded, read-only dataset."""

    def __init__(self, entities: Sequence[Entity[Any]]):
        """Initialize QueryEngine with the records to search.

        Args:
            entities: Loaded records, typically from RecordStore.load()
        """
        self.entities = tuple(entities)

    def search(self, query: str, limit: int = 5) -> List[Match]:
        """Rank all records against the query, logging each candidate."""
        results = rank(self.entities, query, limit)

        for i, match in enumerate(results, 1):
            logger.info(
                f"match #{i}, {match.entity.name} ({self._number(match.entity)}), "
                f"similarity: {match.score.similarity}, distance: {match.score.distance}"
            )

        return results

    def best_match(self, query: str) -> Optional[Match]:
        """Return the single best match, or None for an empty dataset."""
        results = rank(self.entities, query, 1)
        return results[0] if results else None

    @staticmethod
    def _number(entity: Entity[Any]) -> Any:
        return getattr(entity.fields, "pokedex_number", entity.entity_id)
