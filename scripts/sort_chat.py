#!/usr/bin/env python3
"""
SortQL Interactive Sort Console

Type a sort parameter, see the SQL it produces and the sorted rows
from the demo database.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from packages.core.hooks import SortHookError, get_sort_hook
from packages.core.sort_ast import SortSpecError, SortTransformError
from packages.db.base import get_engine
from packages.db.models import Parent
from packages.db.seed import seed

console = Console()

_SORT_ERRORS = (SortSpecError, SortTransformError, AttributeError, SQLAlchemyError)


# -----------------------------
# Input Parsing
# -----------------------------


def parse_input(line: str):
    """
    Turn console input into a raw sort parameter.

        "field_1.asc"                 -> ([], "field_1.asc")
        "parent,parent field_1.desc"  -> (["parent", "parent"], "field_1.desc")
    """
    parts = line.split()
    if len(parts) == 1:
        return [], parts[0]
    associations = [name for name in parts[0].split(",") if name]
    return associations, " ".join(parts[1:])


# -----------------------------
# Display Functions
# -----------------------------


def show_header():
    """Display the application header."""
    header = Text()
    header.append("SortQL", style="bold bright_cyan")
    header.append(" - Sort parameters to SQL", style="dim")

    console.print()
    console.print(Panel(
        header,
        box=box.DOUBLE,
        border_style="bright_blue",
        padding=(0, 2),
    ))
    console.print()


def show_help():
    """Display help information."""
    help_text = Text()
    help_text.append("Input format:\n", style="bold cyan")
    help_text.append("  [assoc,assoc,...] field[.asc|.desc][.ci]\n\n", style="white")
    help_text.append("Examples:\n", style="bold cyan")
    help_text.append("  • field_1.asc\n", style="white")
    help_text.append("  • parent field_2.desc\n", style="white")
    help_text.append("  • parent,parent field_1.asc.ci\n\n", style="white")
    help_text.append("  help / exit / quit\n", style="green")

    console.print(Panel(
        help_text,
        title="[bold]Help[/bold]",
        border_style="dim",
    ))


def show_sql(sql_text: str):
    """Display the generated SQL."""
    formatted_sql = sql_text.replace(" FROM ", "\nFROM ")
    formatted_sql = formatted_sql.replace(" JOIN ", "\nJOIN ")
    formatted_sql = formatted_sql.replace(" ORDER BY ", "\nORDER BY ")

    syntax = Syntax(formatted_sql, "sql", theme="monokai", line_numbers=False)
    console.print(Panel(
        syntax,
        title="[bold yellow]Generated SQL[/bold yellow]",
        border_style="yellow",
    ))


def show_results(parents: list[Parent]):
    """Display sorted parents in a table."""
    if not parents:
        console.print("[dim]No results found.[/dim]")
        return

    table = Table(
        title=f"[bold cyan]Results ({len(parents)} rows)[/bold cyan]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta",
    )
    for column in ("id", "name", "field_1", "field_2", "parent_id"):
        table.add_column(column, style="cyan")

    for parent in parents[:20]:
        table.add_row(*[
            str(value) if value is not None else "NULL"
            for value in (parent.id, parent.name, parent.field_1, parent.field_2, parent.parent_id)
        ])

    console.print(table)


def show_error(title: str, message: str):
    """Display an error message."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


# -----------------------------
# Main Processing
# -----------------------------


def process_sort(line: str, hook, session: Session):
    """Sort the parents listing by one console line."""
    try:
        stmt = hook.run(select(Parent), {hook.param_key: parse_input(line)})
        sql_text = str(stmt.compile(compile_kwargs={"literal_binds": True}))
        show_sql(sql_text)
        console.print()
        show_results(list(session.scalars(stmt)))
    except _SORT_ERRORS as e:
        show_error("Sort Error", str(e))
    except Exception as e:
        show_error("Unexpected Error", str(e))
    console.print()


def main():
    """Main entry point."""
    show_header()

    try:
        hook = get_sort_hook()
        engine = get_engine()
        seed(engine)
        console.print("[green]✓[/green] Seeded demo database")
        console.print(f"[green]✓[/green] Using sort hook: [cyan]{hook.name}[/cyan]")
    except (SortHookError, SQLAlchemyError) as e:
        show_error("Initialization Error", str(e))
        sys.exit(1)

    console.print()
    console.print("[dim]Type 'help' for the input format.[/dim]")
    console.print()

    with Session(engine) as session:
        while True:
            try:
                line = Prompt.ask("[bold magenta]Sort[/bold magenta]").strip()

                if not line:
                    continue

                if line.lower() in ("exit", "quit", "q"):
                    console.print("\n[dim]Goodbye![/dim]\n")
                    break

                if line.lower() == "help":
                    show_help()
                    continue

                process_sort(line, hook, session)

            except KeyboardInterrupt:
                console.print("\n[dim]Goodbye![/dim]\n")
                break
            except Exception as e:
                show_error("Unexpected Error", str(e))


if __name__ == "__main__":
    main()
