"""sqlx-codegen - Main entry point."""

import logging

import typer
from rich.console import Console
from rich.table import Table

from .commands import generate
from .config import settings
from .database import Driver
from .database.type_mappers import DEFAULT_FIELD_TYPE, MYSQL_TYPES, POSTGRES_TYPES, SQLITE_TYPES

app = typer.Typer(
    name="sqlx-codegen",
    help="Generate Rust sqlx model structs from database schemas",
    add_completion=False,
)

app.add_typer(generate.app, name="generate")

console = Console()

TYPE_TABLES = {
    Driver.MYSQL: MYSQL_TYPES,
    Driver.POSTGRES: POSTGRES_TYPES,
    Driver.SQLITE: SQLITE_TYPES,
}


@app.command()
def config():
    """Show current configuration."""
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  Output path: {settings.output_path}")
    console.print(f"  Log level: {settings.log_level}")
    console.print(f"  Default host: {settings.default_host}")
    console.print(f"  MySQL port: {settings.mysql_port}")
    console.print(f"  PostgreSQL port: {settings.postgres_port}")
    console.print(f"  Connect timeout: {settings.connect_timeout}s")


@app.command()
def types(
    driver: Driver = typer.Argument(..., help="Database driver whose type table to show"),
):
    """Show how native column types map to Rust types."""
    table = Table(title=f"{driver.value} type mapping")
    table.add_column("Native type", style="cyan")
    table.add_column("Rust type", style="green")

    for native, rust in TYPE_TABLES[driver].items():
        table.add_row(native, rust)
    table.add_row("(anything else)", DEFAULT_FIELD_TYPE)
    console.print(table)


@app.callback()
def main():
    """
    sqlx-codegen - Generate Rust sqlx models from MySQL, PostgreSQL or SQLite.

    Examples:

        sqlx-codegen generate mysql -u root -p root -D test -t users,orders

        sqlx-codegen generate sqlite -D test.sqlite -o src/models

        sqlx-codegen types postgres
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    app()
