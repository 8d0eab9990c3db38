"""Generate commands - create Rust sqlx models from database schemas."""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..config import settings
from ..database import ConnectionSpec, Driver, open_connection, parse_table_names
from ..errors import ConnectionError, GenerationError, QueryError
from ..pipeline import CodeGenerator, GenerationResult

app = typer.Typer(help="Generate Rust sqlx models from a database schema")
console = Console()


def run_generation(spec: ConnectionSpec, path: str, table_names: str) -> GenerationResult:
    """Run one generation and report progress on the console.

    Fatal errors are printed with the stage that failed and turned into
    exit code 1. An empty catalog is not an error.
    """
    names = parse_table_names(table_names)
    console.print(Panel(
        f"driver_url: {spec.display_url()}\n"
        f"path: {path}\n"
        f"table_names: {table_names}",
        title="sqlx-codegen",
    ))
    console.print("====== start ======")

    try:
        generator = CodeGenerator(
            spec,
            path,
            table_names=names,
            connect=lambda s: open_connection(s, connect_timeout=settings.connect_timeout),
        )
        result = generator.run()
    except ConnectionError as e:
        console.print(f"[red]Connection failed: {escape(e.message)}[/red]")
        raise typer.Exit(1)
    except QueryError as e:
        console.print(f"[red]Introspection failed: {escape(e.get_user_friendly_message())}[/red]")
        raise typer.Exit(1)
    except GenerationError as e:
        console.print(f"[red]Generation failed: {escape(e.message)}[/red]")
        raise typer.Exit(1)

    if result.is_empty:
        console.print(f"[yellow]{result.describe()}[/yellow]")
        return result

    for file_path in result.files:
        console.print(f"the [cyan]{file_path}[/cyan] has been generated")
    console.print("====== over ======")
    return result


@app.command("mysql")
def generate_mysql(
    database: str = typer.Option(..., "--database", "-D", help="Database name"),
    username: str = typer.Option(..., "--username", "-u", help="Database user"),
    password: str = typer.Option("", "--password", "-p", help="Database password"),
    host: Optional[str] = typer.Option(None, "--host", "-H", help="Database host"),
    port: Optional[int] = typer.Option(None, "--port", "-P", help="Database port (default: 3306)"),
    table_names: str = typer.Option("", "--table-names", "-t", help="Comma-separated tables to generate (default: all)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Directory for generated files"),
):
    """
    Generate models from a MySQL database.

    Examples:
        sqlx-codegen generate mysql -u root -p root -D test
        sqlx-codegen generate mysql -u root -D test -t users,orders -o src/models
    """
    spec = ConnectionSpec(
        driver=Driver.MYSQL,
        database=database,
        username=username,
        password=password,
        host=host or settings.default_host,
        port=port or settings.mysql_port,
    )
    run_generation(spec, output or settings.output_path, table_names)


@app.command("postgres")
def generate_postgres(
    database: str = typer.Option(..., "--database", "-D", help="Database name"),
    username: str = typer.Option(..., "--username", "-u", help="Database user"),
    password: str = typer.Option("", "--password", "-p", help="Database password"),
    host: Optional[str] = typer.Option(None, "--host", "-H", help="Database host"),
    port: Optional[int] = typer.Option(None, "--port", "-P", help="Database port (default: 5432)"),
    table_names: str = typer.Option("", "--table-names", "-t", help="Comma-separated tables to generate (default: all)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Directory for generated files"),
):
    """
    Generate models from the public schema of a PostgreSQL database.

    Examples:
        sqlx-codegen generate postgres -u postgres -p secret -D shop
    """
    spec = ConnectionSpec(
        driver=Driver.POSTGRES,
        database=database,
        username=username,
        password=password,
        host=host or settings.default_host,
        port=port or settings.postgres_port,
    )
    run_generation(spec, output or settings.output_path, table_names)


@app.command("sqlite")
def generate_sqlite(
    database: str = typer.Option(..., "--database", "-D", help="Path to the SQLite database file"),
    table_names: str = typer.Option("", "--table-names", "-t", help="Comma-separated tables to generate (default: all)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Directory for generated files"),
):
    """
    Generate models from a SQLite database file.

    Examples:
        sqlx-codegen generate sqlite -D test.sqlite -o src/models
    """
    spec = ConnectionSpec(driver=Driver.SQLITE, database=database)
    run_generation(spec, output or settings.output_path, table_names)
