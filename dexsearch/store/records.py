"""Parsing of the tabular Pokédex dataset into entity records.

The dataset is read with pandas as plain text and every column is then
converted by the explicit schema below, so a bad cell is reported with its
line and column instead of being silently coerced.
"""

import io
import logging
import math
from importlib import resources
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set, Tuple, Union

import pandas as pd

from dexsearch.models import Entity, Pokemon, PokemonStatus
from dexsearch.store.exceptions import EmptyFieldError, LoadError, MalformedDataError

logger = logging.getLogger(__name__)

DATASET_FILE = "pokedex.csv"

PokemonEntity = Entity[Pokemon]


def _text(value: str) -> str:
    return value.strip()


def _count(value: str) -> int:
    number = int(value)
    if number < 0:
        raise ValueError(f"expected a non-negative integer, got {number}")
    return number


def _decimal(value: str) -> float:
    number = float(value)
    if not math.isfinite(number) or number < 0:
        raise ValueError(f"expected a non-negative number, got {value}")
    return number


def _percentage(value: str) -> float:
    number = _decimal(value)
    if number > 100:
        raise ValueError(f"expected a percentage, got {value}")
    return number


def _status(value: str) -> PokemonStatus:
    return PokemonStatus(value.strip())


def _optional(converter: Callable[[str], object]) -> Callable[[str], object]:
    def convert(value: str):
        if not value.strip():
            return None
        return converter(value)

    return convert


# Column name -> converter, in the field order of Pokemon.
POKEMON_SCHEMA: Dict[str, Callable[[str], object]] = {
    "pokedex_number": _count,
    "generation": _count,
    "status": _status,
    "species": _text,
    "type_1": _text,
    "type_2": _text,
    "height_m": _optional(_decimal),
    "weight_kg": _optional(_decimal),
    "abilities_number": _count,
    "ability_1": _text,
    "ability_2": _text,
    "ability_hidden": _text,
    "total_points": _count,
    "hp": _count,
    "attack": _count,
    "defense": _count,
    "sp_attack": _count,
    "sp_defense": _count,
    "speed": _count,
    "catch_rate": _optional(_count),
    "base_friendship": _optional(_count),
    "base_experience": _optional(_count),
    "growth_rate": _text,
    "egg_type_number": _count,
    "egg_type_1": _text,
    "egg_type_2": _text,
    "percentage_male": _optional(_percentage),
    "egg_cycles": _optional(_count),
}

# Header order of the bundled dataset.
REQUIRED_COLUMNS: List[str] = [
    "id",
    "pokedex_number",
    "name",
    *(column for column in POKEMON_SCHEMA if column != "pokedex_number"),
]


def _convert(column: str, converter: Callable[[str], object], value: str, source: str, line: int):
    try:
        return converter(value)
    except ValueError as e:
        raise MalformedDataError(
            f"Invalid value {value!r} for column '{column}': {e}",
            source=source,
            line=line,
            column=column,
            cause=e,
        ) from e


def _parse_row(row: Dict[str, object], line: int, source: str, seen_ids: Set[int]) -> PokemonEntity:
    for column in REQUIRED_COLUMNS:
        if not isinstance(row[column], str):
            raise MalformedDataError(
                f"Row is missing a value for column '{column}'",
                source=source,
                line=line,
                column=column,
            )

    name = row["name"].strip()
    if not name:
        raise EmptyFieldError("Record has an empty name", source=source, line=line, column="name")

    entity_id = _convert("id", _count, row["id"], source, line)
    if entity_id in seen_ids:
        raise MalformedDataError(
            f"Duplicate record id {entity_id}", source=source, line=line, column="id"
        )
    seen_ids.add(entity_id)

    values = {
        column: _convert(column, converter, row[column], source, line)
        for column, converter in POKEMON_SCHEMA.items()
    }
    return Entity(entity_id=entity_id, name=name, fields=Pokemon(**values))


def parse_records(raw: bytes, source: str = "<bytes>") -> Tuple[PokemonEntity, ...]:
    """Parse CSV bytes into entity records.

    Args:
        raw: UTF-8 encoded CSV with a header row
        source: Label used in error messages

    Returns:
        All records in source order

    Raises:
        MalformedDataError: If the bytes, header or a value cannot be parsed
        EmptyFieldError: If a record has an empty name
    """
    try:
        frame = pd.read_csv(io.BytesIO(raw), dtype=str, keep_default_na=False, encoding="utf-8")
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise MalformedDataError(f"Could not parse dataset: {e}", source=source, cause=e) from e

    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise MalformedDataError(
            f"Missing required column(s): {', '.join(missing)}", source=source
        )

    seen_ids: Set[int] = set()
    records = [
        # Line 1 is the header
        _parse_row(row, offset + 2, source, seen_ids)
        for offset, row in enumerate(frame.to_dict(orient="records"))
    ]

    logger.debug(f"Loaded {len(records)} records from {source}")
    return tuple(records)


class RecordStore:
    """Owns the raw dataset bytes and the records parsed from them."""

    def __init__(self, raw: bytes, source: str = "<bytes>"):
        self.raw = raw
        self.source = source
        self._records: Optional[Tuple[PokemonEntity, ...]] = None

    @classmethod
    def bundled(cls) -> "RecordStore":
        """Create a store over the dataset shipped with the package."""
        resource = resources.files("dexsearch") / "data" / DATASET_FILE
        return cls(resource.read_bytes(), source=DATASET_FILE)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "RecordStore":
        """Create a store over a CSV file on disk.

        Raises:
            LoadError: If the file cannot be read
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise LoadError(f"Could not read dataset: {e}", source=str(path), cause=e) from e
        return cls(raw, source=str(path))

    def load(self) -> Tuple[PokemonEntity, ...]:
        """Parse the dataset, all or nothing.

        Returns:
            Every record in source order

        Raises:
            LoadError: If any part of the dataset is invalid
        """
        if self._records is None:
            self._records = parse_records(self.raw, source=self.source)
        return self._records
