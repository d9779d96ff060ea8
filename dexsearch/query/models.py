from dataclasses import dataclass
from typing import Any, Tuple

from dexsearch.models import Entity


@dataclass(frozen=True)
class MatchScore:
    """How closely a candidate name matches a query."""

    distance: int        # edit distance, lower is better
    similarity: float    # [0.0, 1.0], higher is better

    def sort_key(self) -> Tuple[float, int]:
        """Key ordering scores best first: similarity, then distance."""
        return (-self.similarity, self.distance)

    @staticmethod
    def compare(a: "MatchScore", b: "MatchScore") -> int:
        """Three-way comparison, negative when ``a`` ranks before ``b``."""
        if a.similarity != b.similarity:
            return -1 if a.similarity > b.similarity else 1
        if a.distance != b.distance:
            return -1 if a.distance < b.distance else 1
        return 0


@dataclass(frozen=True)
class Match:
    """An entity paired with its score against one query."""

    entity: Entity[Any]
    score: MatchScore

    def __str__(self) -> str:
        """Human-readable representation for logs and CLI output."""
        return (f"{self.entity.name} [similarity: {self.score.similarity:.3f}, "
                f"distance: {self.score.distance}]")
