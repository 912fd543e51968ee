"""Config build and scaffold commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from xtools.audit import audit
from xtools.config import get_config, get_env
from xtools.services import build_pipeline, scaffold
from xtools.services.site_registry import load_sites

console = Console()


def build(
    dest: Optional[Path] = typer.Option(None, "--dest", help="Output root (default: BUILD_OUTPUT_DIR or XAMPP_ROOT_DIR)"),
) -> None:
    """Render all configured templates and the vhosts file."""
    cfg = get_config()
    env = get_env()

    with audit("build", target=str(dest or cfg.output_root)) as event:
        console.print("[bold][1/3][/bold] Loading manifest and site list")
        manifest = build_pipeline.load_manifest(cfg.manifest_file)
        sites = load_sites(cfg.sites_file)
        console.print(f"  {len(manifest.templates)} template(s), {len(sites)} site(s)")

        console.print("[bold][2/3][/bold] Rendering templates")
        results = build_pipeline.run_build(cfg, env, manifest, sites, dest_root=dest)

        console.print("[bold][3/3][/bold] Summary")
        table = Table(title="Build results")
        table.add_column("Output", style="cyan")
        table.add_column("Status")
        table.add_column("Notes", style="yellow")
        for result in results:
            notes = []
            if result.unresolved:
                notes.append("unresolved: " + ", ".join(result.unresolved))
            if result.skipped_sites:
                notes.append("skipped sites: " + ", ".join(result.skipped_sites))
            if result.error:
                notes.append(result.error)
            status = "[green]ok[/green]" if result.success else "[red]failed[/red]"
            table.add_row(str(result.path), status, "\n".join(notes))
        console.print(table)

        summary = build_pipeline.summarize(results)
        event.params.update(summary.model_dump())
        console.print(
            f"Built: [green]{summary.built}[/green]  "
            f"Failed: [red]{summary.failed}[/red]  "
            f"Skipped sites: [yellow]{summary.skipped_sites}[/yellow]"
        )

    if summary.failed:
        raise typer.Exit(1)


def init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing files"),
) -> None:
    """Create a starter .env, vhosts.json, build manifest and templates."""
    cfg = get_config()

    with audit("init", target=str(cfg.tools_root)):
        for path, written in scaffold.write_scaffold(cfg, force=force):
            if written:
                console.print(f"  [green]created[/green] {path}")
            else:
                console.print(f"  [dim]exists[/dim]  {path}")
        console.print("\nEdit config/vhosts.json, then run: xtools build")
