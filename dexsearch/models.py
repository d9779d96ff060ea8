"""Data models for dexsearch."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

EGG_CYCLE_FACTOR = 257


@dataclass(frozen=True)
class Entity(Generic[T]):
    """A single named record of the dataset.

    The ranking core only reads ``name``; everything else lives in the
    opaque ``fields`` payload.
    """

    entity_id: int
    name: str
    fields: T

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError(f"Entity {self.entity_id} must have a non-empty name")


class PokemonStatus(Enum):
    """Rarity status of a Pokémon as it appears in the dataset."""

    NORMAL = "Normal"
    LEGENDARY = "Legendary"
    MYTHICAL = "Mythical"
    SUB_LEGENDARY = "Sub Legendary"

    @property
    def display_name(self) -> str:
        if self in (PokemonStatus.LEGENDARY, PokemonStatus.SUB_LEGENDARY):
            return "Legendary"
        return self.value


@dataclass(frozen=True)
class EggCycleStats:
    """Egg cycles with the range of steps needed to hatch."""

    cycles: int
    max_steps: int
    min_steps: int

    @classmethod
    def from_cycles(cls, cycles: int) -> "EggCycleStats":
        if cycles < 1:
            raise ValueError(f"Egg cycles must be positive, got {cycles}")
        return cls(
            cycles=cycles,
            max_steps=cycles * EGG_CYCLE_FACTOR,
            min_steps=(cycles - 1) * EGG_CYCLE_FACTOR + 1,
        )


@dataclass(frozen=True)
class Pokemon:
    """Descriptive fields of a Pokédex entry."""

    pokedex_number: int
    generation: int
    status: PokemonStatus = PokemonStatus.NORMAL
    species: str = ""

    # Typing and measurements
    type_1: str = ""
    type_2: str = ""
    height_m: Optional[float] = None
    weight_kg: Optional[float] = None

    # Abilities
    abilities_number: int = 0
    ability_1: str = ""
    ability_2: str = ""
    ability_hidden: str = ""

    # Base stats
    total_points: int = 0
    hp: int = 0
    attack: int = 0
    defense: int = 0
    sp_attack: int = 0
    sp_defense: int = 0
    speed: int = 0

    # Training
    catch_rate: Optional[int] = None
    base_friendship: Optional[int] = None
    base_experience: Optional[int] = None
    growth_rate: str = ""

    # Breeding
    egg_type_number: int = 0
    egg_type_1: str = ""
    egg_type_2: str = ""
    percentage_male: Optional[float] = None
    egg_cycles: Optional[int] = None

    def egg_cycle_stats(self) -> Optional[EggCycleStats]:
        """Return hatch step ranges, or None when egg cycles are unknown."""
        if not self.egg_cycles:
            return None
        return EggCycleStats.from_cycles(self.egg_cycles)
