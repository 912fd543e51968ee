"""MySQL backup, restore and user commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from xtools.audit import audit
from xtools.config import get_config
from xtools.services import mysql

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.command(name="list")
def list_databases(
    system: bool = typer.Option(False, "--system", help="Include system databases"),
) -> None:
    """List databases on the local server."""
    cfg = get_config()
    table = Table(title=f"Databases ({cfg.mysql_host}:{cfg.mysql_port})")
    table.add_column("Name", style="cyan")
    for name in mysql.list_databases(cfg, include_system=system):
        table.add_row(name)
    console.print(table)


@app.command()
def backup(
    database: Optional[str] = typer.Argument(None, help="Database to dump"),
    all_dbs: bool = typer.Option(False, "--all", help="Back up every non-system database"),
    dest: Optional[Path] = typer.Option(None, help="Backup directory (default: BACKUP_DIR)"),
) -> None:
    """Dump databases to gzip-compressed SQL files."""
    cfg = get_config()
    if all_dbs:
        targets = mysql.list_databases(cfg)
    elif database:
        targets = [database]
    else:
        typer.echo("Error: DATABASE or --all required", err=True)
        raise typer.Exit(1)

    for name in targets:
        with audit("db.backup", target=name):
            path = mysql.backup_database(cfg, name, dest)
            console.print(f"[green]Backed up[/green] {name} -> {path}")


@app.command()
def restore(
    database: str = typer.Argument(help="Target database"),
    dump: Path = typer.Argument(help="Backup file (.sql or .sql.gz)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
) -> None:
    """Restore a database from a backup file."""
    cfg = get_config()
    if not yes and not typer.confirm(f"Restore {dump.name} into '{database}'? Existing tables will be replaced."):
        raise typer.Abort()

    with audit("db.restore", target=database, file=str(dump)):
        mysql.restore_database(cfg, database, dump)
        console.print(f"[green]Restored[/green] {dump.name} into {database}")


@app.command(name="create-user")
def create_user(
    user: str = typer.Option(..., help="Username"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Password"),
    database: Optional[str] = typer.Option(None, help="Database to create and grant (default: all)"),
    host: str = typer.Option("localhost", help="Host part of the account"),
) -> None:
    """Create a MySQL user with full privileges on a database."""
    cfg = get_config()
    with audit("db.create-user", target=user, database=database or "*", host=host):
        mysql.create_user(cfg, user, password, database, host)
        scope = database or "all databases"
        console.print(f"[green]User {user}@{host} created[/green] with access to {scope}")
