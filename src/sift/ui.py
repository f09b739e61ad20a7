# src/sift/ui.py

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .core.query.fields import FilterShape
from .core.query.operators import OPERATOR_ALIASES, OPERATOR_MAP, type_name
from .core.query.sinks import SqlBuffer

# --- Global Console ---
console = Console()


def display_shape(shape: FilterShape, target: Optional[Console] = None) -> None:
    """Prints the field mapping of a shape using a rich Table."""
    out = target or console

    structure_table = Table(
        title=f"[bold]{shape.name}[/bold]", box=None, padding=(0, 1), show_edge=False
    )
    structure_table.add_column("Field", style="cyan", no_wrap=True)
    structure_table.add_column("Column", style="blue")
    structure_table.add_column("Kind", style="yellow")
    structure_table.add_column("Type", style="green")
    structure_table.add_column("Operators", style="white")

    for config in shape:
        if config.skipped:
            structure_table.add_row(config.source_name, "[dim]skipped[/dim]", "", "", "")
            continue

        operators = list(OPERATOR_MAP[config.kind])
        aliases = OPERATOR_ALIASES.get(config.kind, {})
        if aliases:
            operators.append(f"[dim]({', '.join(aliases)})[/dim]")

        structure_table.add_row(
            config.source_name,
            config.column_ref,
            config.kind.value,
            type_name(config.value_type),
            " ".join(operators),
        )

    out.print(structure_table)
    out.print()


def display_clause(buffer: SqlBuffer, target: Optional[Console] = None) -> None:
    """Prints an emitted clause and its bound parameters inside a Panel."""
    out = target or console

    body = Text(buffer.sql.strip() or "(no clauses)", style="bold")
    if buffer.params:
        body.append("\n")
        body.append(f"params: {buffer.params!r}", style="dim")

    out.print(Panel(body, title="[bold green]SQL[/bold green]", border_style="blue", padding=(0, 1)))
