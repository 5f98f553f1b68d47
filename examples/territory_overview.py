#!/usr/bin/env python3
"""Example: Territory overview across all map hexes.

This example demonstrates:
1. Fetching the map list from a shard
2. Fetching public dynamic map data for every hex concurrently
3. Counting town halls and relic bases held by each team

Run with:
    python examples/territory_overview.py [live|live-2]
"""

import asyncio
import sys
from collections import Counter

from rich.console import Console
from rich.table import Table

from foxhole_war_api import AsyncWarApiClient, ClientConfig, IconType, Shard, TeamId, WarApiError

CONTROL_POINTS = {
    IconType.TOWN_BASE_1,
    IconType.TOWN_BASE_2,
    IconType.TOWN_BASE_3,
    IconType.RELIC_BASE_1,
    IconType.RELIC_BASE_2,
    IconType.RELIC_BASE_3,
}

console = Console()


async def territory_by_hex(shard: Shard) -> dict[str, Counter]:
    """Count control points per team for each hex on ``shard``."""
    async with AsyncWarApiClient(ClientConfig(shard=shard)) as client:
        names = await client.map_names()
        results = await asyncio.gather(
            *(client.map_data_dynamic(name) for name in names),
            return_exceptions=True,
        )

    territory = {}
    for name, result in zip(names, results):
        if isinstance(result, WarApiError):
            console.print(f"[yellow]⚠ {name}: {result}[/yellow]")
            continue
        if isinstance(result, BaseException):
            raise result

        territory[name] = Counter(
            item.team_id for item in result.map_items if item.icon_type in CONTROL_POINTS
        )

    return territory


def main():
    shard = Shard(sys.argv[1]) if len(sys.argv) > 1 else Shard.LIVE_1
    territory = asyncio.run(territory_by_hex(shard))

    table = Table(title=f"Control points on {shard.value}")
    table.add_column("Hex", style="cyan")
    table.add_column("Wardens", justify="right", style="blue")
    table.add_column("Colonials", justify="right", style="green")
    table.add_column("Neutral", justify="right")

    totals = Counter()
    for name in sorted(territory):
        counts = territory[name]
        totals.update(counts)
        table.add_row(
            name,
            str(counts[TeamId.WARDENS]),
            str(counts[TeamId.COLONIALS]),
            str(counts[TeamId.NONE]),
        )

    table.add_row(
        "[bold]Total[/bold]",
        str(totals[TeamId.WARDENS]),
        str(totals[TeamId.COLONIALS]),
        str(totals[TeamId.NONE]),
    )
    console.print(table)


if __name__ == "__main__":
    main()
