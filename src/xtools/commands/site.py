"""Site list inspection commands."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from xtools.config import get_config
from xtools.services.site_registry import load_sites, resolve_site, validate_site

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.command(name="list")
def list_sites() -> None:
    """List the sites in vhosts.json with their resolved names and ports."""
    cfg = get_config()
    sites = load_sites(cfg.sites_file)

    if not sites:
        console.print(f"No sites defined in {cfg.sites_file}")
        return

    table = Table(title="Sites")
    table.add_column("Name", style="cyan")
    table.add_column("Server name", style="green")
    table.add_column("Type")
    table.add_column("Ports")
    table.add_column("Folder")

    for site in sites:
        resolved = resolve_site(site, cfg)
        ports = f"{resolved.port} -> {resolved.ssl_port} (ssl)" if site.ssl else str(resolved.port)
        ok = validate_site(site, cfg.docroot).valid
        folder = site.folder if ok else f"[red]{site.folder} (missing)[/red]"
        table.add_row(
            site.display_name(cfg.vhosts_extension),
            resolved.server_name,
            site.type.value,
            ports,
            folder,
        )

    console.print(table)


@app.command()
def validate() -> None:
    """Check that every site folder exists under the document root."""
    cfg = get_config()
    sites = load_sites(cfg.sites_file)

    invalid = 0
    for site in sites:
        result = validate_site(site, cfg.docroot)
        if result.valid:
            console.print(f"  [green]ok[/green]      {site.folder} -> {result.resolved_path}")
        else:
            invalid += 1
            console.print(f"  [red]missing[/red] {site.folder}: {result.error}")

    console.print(f"\n{len(sites) - invalid} valid, {invalid} invalid")
    if invalid:
        raise typer.Exit(1)
