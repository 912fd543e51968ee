"""Windows Firewall rule commands."""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from xtools.audit import audit
from xtools.config import get_config
from xtools.services import firewall

app = typer.Typer(no_args_is_help=True)
console = Console()


def _ports(ports: Optional[List[int]]) -> list[int]:
    """Given ports, or the configured HTTP/HTTPS/MySQL ports."""
    if ports:
        return list(ports)
    cfg = get_config()
    return [cfg.http_port, cfg.ssl_port, cfg.mysql_port]


@app.command()
def allow(
    port: Optional[List[int]] = typer.Option(None, "--port", "-p", help="Port to open (repeatable)"),
) -> None:
    """Open inbound TCP ports (default: Apache HTTP/HTTPS and MySQL ports)."""
    targets = _ports(port)
    with audit("firewall.allow", target=",".join(map(str, targets))):
        for p in targets:
            if firewall.allow_port(p):
                console.print(f"[green]Allowed[/green] TCP {p}")
            else:
                console.print(f"[dim]Rule already present for TCP {p}[/dim]")


@app.command()
def remove(
    port: Optional[List[int]] = typer.Option(None, "--port", "-p", help="Port to close (repeatable)"),
) -> None:
    """Remove the inbound rules created by xtools."""
    targets = _ports(port)
    with audit("firewall.remove", target=",".join(map(str, targets))):
        for p in targets:
            if firewall.remove_rule(p):
                console.print(f"[yellow]Removed[/yellow] TCP {p}")
            else:
                console.print(f"[dim]No rule for TCP {p}[/dim]")


@app.command()
def status(
    port: Optional[List[int]] = typer.Option(None, "--port", "-p", help="Port to check (repeatable)"),
) -> None:
    """Show which xtools firewall rules exist."""
    table = Table(title="Firewall rules")
    table.add_column("Rule", style="cyan")
    table.add_column("Present")
    for p in _ports(port):
        name = firewall.rule_name(p)
        table.add_row(name, "[green]yes[/green]" if firewall.rule_exists(name) else "[red]no[/red]")
    console.print(table)
