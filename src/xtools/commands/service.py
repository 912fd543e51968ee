"""Apache / MySQL lifecycle commands."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from xtools.audit import audit
from xtools.config import get_config
from xtools.services import xampp_service
from xtools.services.xampp_service import Service

app = typer.Typer(no_args_is_help=True)
console = Console()


def _targets(name: str) -> list[Service]:
    if name == "all":
        return list(Service)
    try:
        return [Service(name)]
    except ValueError:
        console.print(f"[red]Unknown service: {name}[/red] (apache, mysql or all)")
        raise typer.Exit(1)


@app.command()
def start(
    name: str = typer.Argument("all", help="apache, mysql or all"),
) -> None:
    """Start Apache and/or MySQL."""
    cfg = get_config()
    for service in _targets(name):
        with audit("service.start", target=service.value):
            xampp_service.start(cfg, service)
            console.print(f"[green]Started {service.value}[/green]")


@app.command()
def stop(
    name: str = typer.Argument("all", help="apache, mysql or all"),
) -> None:
    """Stop Apache and/or MySQL."""
    cfg = get_config()
    for service in _targets(name):
        with audit("service.stop", target=service.value):
            xampp_service.stop(cfg, service)
            console.print(f"[yellow]Stopped {service.value}[/yellow]")


@app.command()
def restart(
    name: str = typer.Argument("all", help="apache, mysql or all"),
) -> None:
    """Restart Apache and/or MySQL (Apache config is tested first)."""
    cfg = get_config()
    for service in _targets(name):
        with audit("service.restart", target=service.value):
            if service is Service.APACHE:
                xampp_service.config_test(cfg)
            xampp_service.stop(cfg, service)
            xampp_service.start(cfg, service)
            console.print(f"[green]Restarted {service.value}[/green]")


@app.command()
def status() -> None:
    """Show whether Apache and MySQL are running."""
    table = Table(title="Services")
    table.add_column("Service", style="cyan")
    table.add_column("State")
    table.add_column("PIDs")

    for service in Service:
        pids = xampp_service.running_pids(xampp_service.image_name(service))
        state = "[green]running[/green]" if pids else "[red]stopped[/red]"
        table.add_row(service.value, state, ", ".join(str(p) for p in pids))

    console.print(table)


@app.command()
def configtest() -> None:
    """Validate the Apache configuration (httpd -t)."""
    cfg = get_config()
    output = xampp_service.config_test(cfg)
    console.print(f"[green]{output or 'Syntax OK'}[/green]")
