"""CLI commands for dexsearch.

Each command is a composition root: it resolves configuration, builds the
record store, hands the loaded records to a QueryEngine and renders the
outcome.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import typer

from dexsearch.cli.config import DEFAULT_CONFIG, get_config, init_config
from dexsearch.cli.formatting import OutputFormat, format_failure, format_matches
from dexsearch.cli.report import format_entity_report
from dexsearch.cli.sprite import SpriteError, download_sprite, render_sprite, sprite_url
from dexsearch.models import Entity, Pokemon
from dexsearch.query import QueryEngine
from dexsearch.store import LoadError, RecordStore

logger = logging.getLogger(__name__)


def load_entities(config: Dict[str, Any]) -> Tuple[Entity[Pokemon], ...]:
    """Load records from the configured dataset, or the bundled one.

    Raises:
        LoadError: If the dataset cannot be read or parsed
    """
    dataset_path = config.get("dataset_path")
    if dataset_path:
        store = RecordStore.from_path(dataset_path)
    else:
        store = RecordStore.bundled()
    return store.load()


def print_sprite(entity: Entity[Pokemon], config: Dict[str, Any]) -> None:
    """Download and print the sprite; failures never abort the report."""
    url = sprite_url(entity.name, config["sprite_base_url"])

    try:
        data = download_sprite(url, timeout=config["timeout"])
    except SpriteError as e:
        typer.echo(format_failure(f"Image: {e}", config["width"]))
        return

    try:
        typer.echo(render_sprite(data, width=config["sprite_width"], console_width=config["width"]))
    except SpriteError as e:
        logger.warning(f"image failed to print: {e}")


def lookup(
    query: str = typer.Argument(..., help="Pokémon name to look up (typos welcome)"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", min=0, help="Number of candidates to rank and log"
    ),
    no_sprite: bool = typer.Option(False, "--no-sprite", help="Skip downloading the sprite"),
    width: Optional[int] = typer.Option(None, "--width", "-w", min=20, help="Report width in columns"),
) -> None:
    """Show the Pokédex entry that best matches a query.

    Example:
        $ dexsearch lookup charzad
        $ dexsearch lookup "mr mime" --no-sprite
    """
    try:
        config = get_config({"limit": limit, "width": width})
        engine = QueryEngine(load_entities(config))

        results = engine.search(query, limit=config["limit"])
        if not results:
            typer.echo(format_failure("Couldn't find any matches", config["width"]))
            raise typer.Exit(0)

        best = results[0].entity
        if config["sprite"] and not no_sprite:
            print_sprite(best, config)
            typer.echo()

        typer.echo(format_entity_report(best, width=config["width"]))
        typer.echo()

    except typer.Exit:
        raise
    except LoadError as e:
        typer.echo(f"❌ Dataset error: {e}", err=True)
        raise typer.Exit(2)
    except Exception as e:
        typer.echo(f"❌ Error: {str(e)}", err=True)
        raise typer.Exit(1)


def matches(
    query: str = typer.Argument(..., help="Pokémon name to look up"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=0, help="Maximum matches to show"),
    output: Optional[OutputFormat] = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List the best-ranked candidates with their scores.

    Example:
        $ dexsearch matches char --limit 10
        $ dexsearch matches pika --output json
    """
    try:
        config = get_config({"limit": limit, "output": output.value if output else None})
        engine = QueryEngine(load_entities(config))

        results = engine.search(query, limit=config["limit"])
        typer.echo(format_matches(results, config["output"]))

    except LoadError as e:
        typer.echo(f"❌ Dataset error: {e}", err=True)
        raise typer.Exit(2)
    except Exception as e:
        typer.echo(f"❌ Error: {str(e)}", err=True)
        raise typer.Exit(1)


def config_show() -> None:
    """Show current configuration settings.

    Example:
        $ dexsearch config-show
    """
    try:
        config = get_config()

        typer.echo("\n⚙️  Current Configuration")
        typer.echo(f"{'─' * 60}")

        for key, value in sorted(config.items()):
            typer.echo(f"{key:<20} : {value}")

        typer.echo(f"{'─' * 60}\n")

    except Exception as e:
        typer.echo(f"❌ Error: {str(e)}", err=True)
        raise typer.Exit(1)


def config_init(
    config_path: Optional[str] = typer.Option(
        None, "--path", "-p", help="Custom config file path (.json or .yaml)"
    ),
) -> None:
    """Initialize a new configuration file.

    If no path is provided, uses ~/.dexsearch/config.json.

    Example:
        $ dexsearch config-init
        $ dexsearch config-init --path ./dexsearch.yaml
    """
    try:
        path = Path(config_path) if config_path else Path.home() / ".dexsearch" / "config.json"

        if path.exists():
            if not typer.confirm(f"File {path} already exists. Overwrite?"):
                typer.echo("❌ Cancelled")
                raise typer.Exit(1)

        if not init_config(path):
            typer.echo("❌ Failed to initialize configuration")
            raise typer.Exit(1)

        typer.echo(f"✅ Configuration initialized at {path}")
        typer.echo("📝 Default settings:")
        for key, value in DEFAULT_CONFIG.items():
            typer.echo(f"   {key}: {value}")

    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"❌ Error: {str(e)}", err=True)
        raise typer.Exit(1)
