# src/tabula/ui.py

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .core.models.tables import ColumnType, RelationKind, TableDescriptor

# --- Global Console ---
# All modules will import this single console instance.
console = Console()


def display_table_structure(table: TableDescriptor) -> None:
    """Prints detailed table structure using a rich Table."""

    structure_table = Table(
        box=None, padding=(0, 1), show_header=False, show_edge=False
    )
    structure_table.add_column("Name", style="cyan", no_wrap=True, width=24)
    structure_table.add_column("Type", style="green", width=32)
    structure_table.add_column("Details", style="white")

    for column in table.columns:
        col_name = f"{column.name}{'*' if not column.nullable else ''}"
        col_type = f"{column.sql_type} [dim]({column.type.value})[/dim]"

        details = []
        if column.is_primary_key:
            details.append("[yellow]PK[/yellow]")
        if column.references:
            details.append(
                f"[blue]FK -> {column.references.table}.{column.references.column}[/blue]"
            )
        if column.db_name != column.name:
            details.append(f"[dim]db: {column.db_name}[/dim]")
        if column.type is ColumnType.JSON:
            details.append("[bold magenta]JSON[/bold magenta]")

        structure_table.add_row(col_name, col_type, " ".join(details))

    console.print(structure_table)

    for relation in table.relations:
        arrow = "->" if relation.kind is RelationKind.BELONGS_TO else "<-"
        console.print(
            f"    [magenta]{relation.kind.value}[/magenta] {arrow} "
            f"[cyan]{relation.related_table}[/cyan] [dim]via {relation.foreign_key}[/dim]"
        )
    console.print()


def print_welcome(project_name: str, version: str, host: str, port: int) -> None:
    """Prints a welcome message using a rich Panel."""
    docs_url = f"http://{host}:{port}/docs"
    message = Text.from_markup(
        f"API Documentation available at [link={docs_url}]{docs_url}[/link]"
    )
    panel = Panel(
        Align.center(message, vertical="middle"),
        title=f"[bold green]{project_name} v{version}[/bold green]",
        border_style="blue",
        padding=(1, 2),
    )
    console.print(panel)
