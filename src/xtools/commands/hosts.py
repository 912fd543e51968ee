"""System hosts file commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from xtools_common import TemplateKind

from xtools.audit import audit
from xtools.config import get_config
from xtools.services import build_pipeline, hosts_file

app = typer.Typer(no_args_is_help=True)
console = Console()


def _built_hosts_path() -> Path:
    """Output path of the hosts-kind template from the build manifest."""
    cfg = get_config()
    manifest = build_pipeline.load_manifest(cfg.manifest_file)
    for entry in manifest.templates:
        if entry.kind is TemplateKind.HOSTS:
            return build_pipeline.resolve_output(entry.output, cfg.output_root)
    console.print("[red]No hosts template declared in the build manifest.[/red]")
    raise typer.Exit(1)


@app.command()
def show() -> None:
    """Show the entries xtools manages in the system hosts file."""
    cfg = get_config()
    entries = hosts_file.read_managed_entries(cfg.hosts_file)
    if not entries:
        console.print(f"No xtools entries in {cfg.hosts_file}")
        return
    for line in entries:
        console.print(f"  {line}")


@app.command()
def apply() -> None:
    """Copy the built hosts entries into the system hosts file (Administrator)."""
    cfg = get_config()
    source = _built_hosts_path()

    if not source.exists():
        console.print(f"[red]{source} not found.[/red] Run 'xtools build' first.")
        raise typer.Exit(1)

    with audit("hosts.apply", target=str(cfg.hosts_file)):
        backup = hosts_file.apply_entries(
            cfg.hosts_file,
            source.read_text(encoding="utf-8"),
            cfg.backups,
        )
        if backup:
            console.print(f"  Backup: {backup}")
        console.print(f"[green]Hosts file updated:[/green] {cfg.hosts_file}")
