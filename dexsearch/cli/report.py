"""Pokédex report rendering for the best match."""

from io import StringIO
from typing import List, Optional, Union

from rich.console import Console
from rich.table import Table
from rich.text import Text

from dexsearch.models import Entity, Pokemon, PokemonStatus

EMPTY_VALUE = Text("-", style="dim")


def _number(value: float) -> str:
    return f"{value:g}"


def _join(values: List[str], separator: str) -> str:
    return separator.join(v for v in values if v)


def _value(value: Optional[Union[str, int, float]], suffix: str = "") -> Text:
    """Render a present value in cyan, or the dim placeholder when missing."""
    if value is None or value == "":
        return EMPTY_VALUE.copy()
    if isinstance(value, float):
        value = _number(value)
    return Text(f"{value}{suffix}", style="cyan")


def pokemon_status(pokemon: Pokemon) -> Optional[str]:
    if pokemon.status is PokemonStatus.NORMAL:
        return None
    return f"{pokemon.status.display_name} Pokémon"


def pokemon_types(pokemon: Pokemon) -> str:
    return _join([pokemon.type_1, pokemon.type_2], " | ")


def pokemon_egg_groups(pokemon: Pokemon) -> str:
    return _join([pokemon.egg_type_1, pokemon.egg_type_2], ", ")


def pokemon_genders(pokemon: Pokemon) -> Optional[str]:
    if pokemon.percentage_male is None:
        return None
    male = pokemon.percentage_male
    return f"{_number(male)}% male, {_number(100.0 - male)}% female"


def pokemon_egg_cycles(pokemon: Pokemon) -> Optional[Text]:
    stats = pokemon.egg_cycle_stats()
    if stats is None:
        return None
    text = Text(f"{stats.cycles} ", style="cyan")
    text.append(f"({stats.min_steps:,}–{stats.max_steps:,} steps)", style="dim white")
    return text


class ReportPrinter:
    """Lays out a two-column report: right-aligned labels, left-aligned values."""

    def __init__(self, console: Console, width: int = 80):
        self.console = console
        self.width = width

    def print_center(self, message: Union[str, Text]) -> None:
        self.console.print(message, justify="center", width=self.width)

    def section(self, heading: str) -> Table:
        grid = Table.grid(padding=(0, 2, 0, 0))
        grid.add_column(justify="right", width=self.width // 2 - 1)
        grid.add_column(justify="left")
        grid.add_row(Text(heading, style="bold"), "")
        return grid

    def print_section(self, grid: Table) -> None:
        self.console.print(grid)
        self.console.print()


def _pokedex_section(printer: ReportPrinter, entity: Entity[Pokemon]) -> Table:
    pokemon = entity.fields
    grid = printer.section("Pokédex data")
    grid.add_row("National №", Text(str(pokemon.pokedex_number), style="yellow"))
    grid.add_row("Type", Text(pokemon_types(pokemon), style="magenta"))
    grid.add_row("Species", _value(pokemon.species))
    grid.add_row("Height", _value(pokemon.height_m, " m"))
    grid.add_row("Weight", _value(pokemon.weight_kg, " kg"))
    grid.add_row(
        "Ability" if pokemon.abilities_number == 1 else "Abilities",
        _value(pokemon.ability_1),
    )
    if pokemon.ability_2:
        grid.add_row("", _value(pokemon.ability_2))
    if pokemon.ability_hidden:
        hidden = _value(pokemon.ability_hidden)
        hidden.append(" (hidden ability)", style="dim")
        grid.add_row("", hidden)
    return grid


def _stats_section(printer: ReportPrinter, pokemon: Pokemon) -> Table:
    grid = printer.section("Base Stats")
    for label, value in [
        ("HP", pokemon.hp),
        ("Attack", pokemon.attack),
        ("Defense", pokemon.defense),
        ("Sp. Attack", pokemon.sp_attack),
        ("Sp. Defense", pokemon.sp_defense),
        ("Speed", pokemon.speed),
    ]:
        grid.add_row(label, _value(value))
    grid.add_row("Total", Text(str(pokemon.total_points), style="bold cyan"))
    return grid


def _training_section(printer: ReportPrinter, pokemon: Pokemon) -> Table:
    grid = printer.section("Training")
    grid.add_row("Catch Rate", _value(pokemon.catch_rate))
    grid.add_row("Base Friendship", _value(pokemon.base_friendship))
    grid.add_row("Base Experience", _value(pokemon.base_experience))
    grid.add_row("Growth Rate", _value(pokemon.growth_rate))
    return grid


def _breeding_section(printer: ReportPrinter, pokemon: Pokemon) -> Table:
    grid = printer.section("Breeding")
    grid.add_row("Egg Groups", _value(pokemon_egg_groups(pokemon)))
    grid.add_row("Gender", _value(pokemon_genders(pokemon)))
    grid.add_row("Egg Cycles", pokemon_egg_cycles(pokemon) or EMPTY_VALUE.copy())
    return grid


def format_entity_report(entity: Entity[Pokemon], width: int = 80) -> str:
    """Render the full Pokédex report for one entity.

    Args:
        entity: Record to describe
        width: Console width used for centring and the label column

    Returns:
        Report string with terminal styling
    """
    pokemon = entity.fields
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=True, width=width)
    printer = ReportPrinter(console, width)

    printer.print_center(Text(entity.name, style="yellow"))
    status = pokemon_status(pokemon)
    if status:
        printer.print_center(Text(status, style="green"))
    printer.print_center(f"Generation {pokemon.generation}")
    console.print()

    printer.print_section(_pokedex_section(printer, entity))
    printer.print_section(_stats_section(printer, pokemon))
    printer.print_section(_training_section(printer, pokemon))
    printer.print_section(_breeding_section(printer, pokemon))

    return buffer.getvalue().rstrip()
