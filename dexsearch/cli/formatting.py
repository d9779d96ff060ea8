"""Output formatting utilities for CLI with Rich integration."""

import json
from enum import Enum
from io import StringIO
from typing import List

from rich.console import Console
from rich.table import Table
from rich.text import Text

from dexsearch.query.models import Match


class OutputFormat(str, Enum):
    """Formats accepted by the matches command."""
    TABLE = "table"
    JSON = "json"


def _pokedex_number(match: Match):
    return getattr(match.entity.fields, "pokedex_number", None)


def format_matches_json(matches: List[Match]) -> str:
    """Format ranked matches as JSON.

    Args:
        matches: Ranked matches, best first

    Returns:
        JSON string representation
    """
    data = [
        {
            "rank": i,
            "id": m.entity.entity_id,
            "name": m.entity.name,
            "pokedex_number": _pokedex_number(m),
            "similarity": m.score.similarity,
            "distance": m.score.distance,
        }
        for i, m in enumerate(matches, 1)
    ]
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_matches_table(matches: List[Match]) -> str:
    """Format ranked matches as a rich table.

    Args:
        matches: Ranked matches, best first

    Returns:
        Formatted table string
    """
    if not matches:
        return "No matches found"

    table = Table(title="Matches", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan", width=24)
    table.add_column("№", style="yellow", justify="right")
    table.add_column("Similarity", style="green", justify="right")
    table.add_column("Distance", style="red", justify="right")

    for i, m in enumerate(matches, 1):
        number = _pokedex_number(m)
        table.add_row(
            str(i),
            m.entity.name[:24],
            "" if number is None else str(number),
            f"{m.score.similarity:.4f}",
            str(m.score.distance),
        )

    # Render to string using StringIO
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=True, width=120)
    console.print(table)
    return buffer.getvalue().rstrip()


def format_matches(matches: List[Match], format: str = "table") -> str:
    """Format matches in the specified format ('table' or 'json').

    Raises:
        ValueError: If the format is not one of OutputFormat
    """
    if OutputFormat(format) is OutputFormat.JSON:
        return format_matches_json(matches)
    return format_matches_table(matches)


def format_failure(message: str, width: int = 80) -> str:
    """Render a centred red failure message surrounded by blank lines."""
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=True, width=width)
    console.print()
    console.print(Text(message, style="red"), justify="center")
    console.print()
    return buffer.getvalue().rstrip("\n")
