import click
from openpyxl import load_workbook
from rich.table import Table

from .aggregator import Aggregator
from .common import console, load_settings, resolve_campus_map_file
from .identity import CampusIdentityMap
from .levels import FULL_RANGE, ROW_RANGES, Level
from .notify import ConsoleNotifier
from .sources import WorkbookSourceReader
from .store import DestinationMissing, WorkbookDestinationStore


@click.group()
def counts():
    """Consolidate campus enrollment counts into the ALE Counts sheet"""
    pass


@counts.command("aggregate")
@click.option(
    "--level",
    type=click.Choice([level.value for level in Level], case_sensitive=False),
    default=None,
    help="Only aggregate one level; all levels when omitted.",
)
def aggregate(level: str | None):
    """Sum the ES/MS/HS sheet counts per campus and write them to the report."""
    settings = load_settings()
    identities = CampusIdentityMap.from_yaml(settings.campus_map_file)
    console.log(
        f"[blue]Aggregating[/blue]: {settings.workbook_file}; "
        f"[red]level[/red] {level or 'all'}"
    )

    with console.status(
        f"[bold magenta]Loading workbook[/bold magenta] {settings.workbook_file.name}",
        spinner="dots",
    ):
        workbook = load_workbook(settings.workbook_file)

    notifier = ConsoleNotifier(console)
    aggregator = Aggregator(
        store=WorkbookDestinationStore(workbook, sheet_name=settings.destination_sheet),
        reader=WorkbookSourceReader(workbook, notifier=notifier),
        identities=identities,
        notifier=notifier,
    )
    try:
        aggregator.aggregate(level)
    except DestinationMissing:
        raise SystemExit(1)

    workbook.save(settings.workbook_file)
    console.log(f"[green]✓ Saved[/green] {settings.workbook_file.name}")


@counts.command("validate")
def validate():
    """Check the campus map for ids shared by several campuses."""
    src = resolve_campus_map_file()
    identities = CampusIdentityMap.from_yaml(src)
    console.log(f"[bold]Using campus map:[/bold] {src}")

    table = Table(title="Campus map")
    table.add_column("Level")
    table.add_column("Campuses", justify="right")
    table.add_column("Without id", justify="right")
    table.add_column("Shared ids", justify="right")

    has_duplicates = False
    for level in Level:
        entries = identities.for_level(level)
        duplicates = entries.duplicate_identifiers()
        table.add_row(
            level.value,
            str(len(entries.names)),
            str(len(entries.unsourced_names())),
            str(len(duplicates)),
        )
        for identifier, names in duplicates.items():
            has_duplicates = True
            console.log(
                f"[red]{level.value}[/red] id {identifier} is listed for "
                f"{', '.join(names)}; {names[-1]} wins"
            )
    console.print(table)

    if has_duplicates:
        raise SystemExit(1)
    console.log("[green]✓ Campus map is consistent[/green]")


@counts.command("ranges")
def ranges():
    """Show the ALE Counts rows owned by each level."""
    table = Table(title="ALE Counts rows")
    table.add_column("Level")
    table.add_column("School")
    table.add_column("Rows")
    table.add_column("Total", justify="right")
    for level, blocks in ROW_RANGES.items():
        table.add_row(
            level.value,
            level.label,
            ", ".join(str(block) for block in blocks),
            str(sum(len(block) for block in blocks)),
        )
    table.add_row("all", "", str(FULL_RANGE), str(len(FULL_RANGE)))
    console.print(table)


if __name__ == "__main__":
    counts()
