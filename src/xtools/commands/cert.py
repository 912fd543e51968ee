"""Self-signed TLS certificate commands."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from xtools_common.constants import DEFAULT_CERT_DAYS

from xtools.audit import audit
from xtools.config import get_config
from xtools.services import openssl
from xtools.services.site_registry import load_sites, resolve_site

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.command()
def issue(
    name: Optional[str] = typer.Option(None, help="Server name (e.g. blog.local)"),
    all_sites: bool = typer.Option(False, "--all", help="Issue for every SSL site in vhosts.json"),
    days: int = typer.Option(DEFAULT_CERT_DAYS, help="Validity in days"),
    trust: bool = typer.Option(False, "--trust", help="Import into the Windows trusted root store"),
) -> None:
    """Issue self-signed certificates for local HTTPS vhosts."""
    cfg = get_config()

    if all_sites:
        names = [
            resolve_site(site, cfg).server_name
            for site in load_sites(cfg.sites_file)
            if site.ssl
        ]
    elif name:
        names = [name]
    else:
        typer.echo("Error: --name or --all required", err=True)
        raise typer.Exit(1)

    if not names:
        console.print("No SSL sites found.")
        return

    binary = openssl.openssl_binary(cfg.xampp_root)
    with audit("cert.issue", target=",".join(names), days=days, trust=trust):
        for server_name in names:
            crt, key = openssl.issue_self_signed(binary, cfg.certs, server_name, days=days)
            console.print(f"[green]Issued[/green] {server_name}: {crt}")
            if trust:
                openssl.trust_certificate(crt)
                console.print("  Trusted in Windows Root store")


@app.command(name="list")
def list_certs() -> None:
    """Show certificates in the certs directory with their expiry."""
    cfg = get_config()
    binary = openssl.openssl_binary(cfg.xampp_root)

    table = Table(title=f"Certificates ({cfg.certs})")
    table.add_column("Name", style="cyan")
    table.add_column("Expires", style="yellow")

    for cert_name, expiry in openssl.list_certificates(binary, cfg.certs):
        table.add_row(cert_name, expiry)

    console.print(table)
