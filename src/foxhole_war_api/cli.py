"""Command-line interface for the Foxhole War API client."""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table

from .client import WarApiClient
from .config import ClientConfig, Shard, load_client_config
from .exceptions import WarApiError
from .models import MapData

app = typer.Typer(
    name="foxhole-war",
    help="Foxhole War API - query war state and map data",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    shard: Optional[Shard] = typer.Option(None, "--shard", "-s", help="Shard: live, live-2"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override the shard base URL"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to client config YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Resolve client configuration shared by all commands."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    try:
        file_config = load_client_config(config) if config else None
        client_config = ClientConfig.from_env(file_config)

        overrides = {
            key: value
            for key, value in (("shard", shard), ("timeout", timeout), ("base_url", base_url))
            if value is not None
        }
        if overrides:
            client_config = ClientConfig(**{**client_config.model_dump(), **overrides})
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)

    ctx.obj = client_config


def _client(ctx: typer.Context) -> WarApiClient:
    return WarApiClient(ctx.obj)


def _fail(error: WarApiError):
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


@app.command()
def war(ctx: typer.Context):
    """Show the status of the current war."""
    try:
        with _client(ctx) as client:
            data = client.war_data()
    except WarApiError as e:
        _fail(e)

    table = Table(title=f"War {data.war_number}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("War ID", data.war_id)
    table.add_row("Winner", data.winner.value)
    table.add_row("Conquest Start", data.conquest_started_at.isoformat())
    table.add_row(
        "Conquest End",
        data.conquest_ended_at.isoformat() if data.conquest_ended_at else "-",
    )
    table.add_row(
        "Resistance Start",
        data.resistance_started_at.isoformat() if data.resistance_started_at else "-",
    )
    table.add_row("Required Victory Towns", str(data.required_victory_towns))
    console.print(table)


@app.command()
def maps(ctx: typer.Context):
    """List all map names on the shard."""
    try:
        with _client(ctx) as client:
            names = client.map_names()
    except WarApiError as e:
        _fail(e)

    for i, name in enumerate(names, 1):
        console.print(f"{i:>3}. {name}")


def _display_map_data(map_name: str, data: MapData, as_json: bool):
    if as_json:
        console.print(JSON(data.model_dump_json(by_alias=True)))
        return

    console.print(
        Panel(
            f"""[bold]Region:[/bold] {data.region_id}
[bold]Version:[/bold] {data.version}
[bold]Last Updated:[/bold] {data.last_updated_at.isoformat()}
[bold]Scorched Victory Towns:[/bold] {data.scorched_victory_towns}
[bold]Items:[/bold] {len(data.map_items)}  [bold]Labels:[/bold] {len(data.map_text_items)}""",
            title=map_name,
            expand=False,
        )
    )

    if data.map_items:
        items_table = Table(title="Map Items")
        items_table.add_column("Icon", style="cyan")
        items_table.add_column("Team", style="magenta")
        items_table.add_column("X", justify="right")
        items_table.add_column("Y", justify="right")
        items_table.add_column("Flags", justify="right")

        for item in data.map_items:
            items_table.add_row(
                item.icon_type.name,
                item.team_id.value,
                f"{item.x:.4f}",
                f"{item.y:.4f}",
                str(item.flags),
            )

        console.print(items_table)

    if data.map_text_items:
        labels_table = Table(title="Labels")
        labels_table.add_column("Text", style="cyan")
        labels_table.add_column("Marker", style="green")
        labels_table.add_column("X", justify="right")
        labels_table.add_column("Y", justify="right")

        for label in data.map_text_items:
            labels_table.add_row(
                label.text,
                label.map_marker_type.value,
                f"{label.x:.4f}",
                f"{label.y:.4f}",
            )

        console.print(labels_table)


@app.command()
def static(
    ctx: typer.Context,
    map_name: str = typer.Argument(..., help="Map name, e.g. TheFingersHex"),
    as_json: bool = typer.Option(False, "--json", help="Print raw camelCase JSON"),
):
    """Show static map data (labels, resource nodes)."""
    try:
        with _client(ctx) as client:
            data = client.map_data_static(map_name)
    except WarApiError as e:
        _fail(e)

    _display_map_data(map_name, data, as_json)


@app.command()
def dynamic(
    ctx: typer.Context,
    map_name: str = typer.Argument(..., help="Map name, e.g. TheFingersHex"),
    as_json: bool = typer.Option(False, "--json", help="Print raw camelCase JSON"),
):
    """Show public dynamic map data (ownership of towns and bases)."""
    try:
        with _client(ctx) as client:
            data = client.map_data_dynamic(map_name)
    except WarApiError as e:
        _fail(e)

    _display_map_data(map_name, data, as_json)


if __name__ == "__main__":
    app()
