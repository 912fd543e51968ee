"""Root Typer application for the xtools CLI."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from xtools.commands import build, cert, db, firewall, hosts, service, site
from xtools.errors import XtoolsError

app = typer.Typer(
    name="xtools",
    help="Local XAMPP toolkit: config templates, vhosts, hosts file, certificates and MySQL.",
    no_args_is_help=True,
)

app.add_typer(site.app, name="site", help="Inspect and validate the site list.")
app.add_typer(hosts.app, name="hosts", help="Manage the system hosts file.")
app.add_typer(cert.app, name="cert", help="Self-signed TLS certificates.")
app.add_typer(service.app, name="service", help="Apache / MySQL start, stop and status.")
app.add_typer(firewall.app, name="firewall", help="Windows Firewall inbound rules.")
app.add_typer(db.app, name="db", help="MySQL backup, restore and users.")
app.command(name="build")(build.build)
app.command(name="init")(build.init)

console = Console(stderr=True)


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def main() -> None:
    try:
        app()
    except XtoolsError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(exc.exit_code)


if __name__ == "__main__":
    main()
