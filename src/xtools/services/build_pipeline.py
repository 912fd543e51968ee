"""Render every manifest template and the vhosts file into the output tree."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Mapping

from pydantic import ValidationError

from xtools_common import (
    BuildManifest,
    BuildResult,
    BuildSummary,
    ManifestEntry,
    SiteDefinition,
    TemplateKind,
    XamppConfig,
)

from xtools.errors import ManifestNotFoundError, XtoolsError
from xtools.services import template_engine, vhost_composer
from xtools.services.site_registry import resolve_site, validate_site

log = logging.getLogger(__name__)


def load_manifest(path: Path) -> BuildManifest:
    if not path.is_file():
        raise ManifestNotFoundError(
            f"Build manifest not found: {path} (run 'xtools init' to create one)"
        )
    try:
        return BuildManifest.model_validate(json.loads(path.read_text(encoding="utf-8-sig")))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ManifestNotFoundError(f"Invalid build manifest {path}: {exc}") from exc


def resolve_output(output: str, dest_root: Path) -> Path:
    path = Path(output)
    return path if path.is_absolute() else dest_root / path


def write_output(path: Path, content: str) -> None:
    """Write a rendered file to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def host_names(sites: list[SiteDefinition], cfg: XamppConfig) -> list[str]:
    """Server names of the sites whose folders exist, in site-list order."""
    return [
        resolve_site(site, cfg).server_name
        for site in sites
        if validate_site(site, cfg.docroot).valid
    ]


def build_template(
    entry: ManifestEntry,
    cfg: XamppConfig,
    env: Mapping[str, str],
    sites: list[SiteDefinition],
    dest_root: Path,
    *,
    now: datetime | None = None,
) -> BuildResult | None:
    """Render one manifest entry. Returns None when the source template is absent."""
    source = cfg.templates_dir / entry.source
    output = resolve_output(entry.output, dest_root)
    if not source.is_file():
        log.debug("Template not configured, skipping: %s", source)
        return None

    try:
        document = template_engine.load_document(source, output, entry.kind)
        names = host_names(sites, cfg) if entry.kind is TemplateKind.HOSTS else ()
        rendered = template_engine.render(
            document.text,
            template_engine.global_substitutions(cfg, env),
            document.kind,
            host_names=names,
            now=now,
        )
        write_output(output, rendered.text)
    except (OSError, UnicodeDecodeError, XtoolsError) as exc:
        log.error("Failed to build %s: %s", output, exc)
        return BuildResult(path=output, success=False, error=str(exc))

    log.info("Built %s", output)
    return BuildResult(path=output, unresolved=rendered.unresolved)


def build_vhosts(
    manifest: BuildManifest,
    cfg: XamppConfig,
    env: Mapping[str, str],
    sites: list[SiteDefinition],
    dest_root: Path,
    *,
    now: datetime | None = None,
) -> BuildResult | None:
    if manifest.vhosts is None:
        return None
    output = resolve_output(manifest.vhosts.output, dest_root)
    try:
        blocks = vhost_composer.load_blocks_template(cfg.templates_dir / manifest.vhosts.blocks)
        result = vhost_composer.compose(sites, cfg, env, blocks, now=now)
        write_output(output, result.text)
    except (OSError, UnicodeDecodeError, XtoolsError) as exc:
        log.error("Failed to build %s: %s", output, exc)
        return BuildResult(path=output, success=False, error=str(exc))

    log.info("Built %s (%d site(s))", output, result.generated)
    return BuildResult(
        path=output,
        unresolved=result.unresolved,
        skipped_sites=[s.site.folder for s in result.skipped],
    )


def run_build(
    cfg: XamppConfig,
    env: Mapping[str, str],
    manifest: BuildManifest,
    sites: list[SiteDefinition],
    *,
    dest_root: Path | None = None,
    now: datetime | None = None,
) -> list[BuildResult]:
    """Build every configured output; failures are recorded, never raised."""
    dest_root = dest_root or cfg.output_root
    now = now or datetime.now()
    results: list[BuildResult] = []

    for entry in manifest.templates:
        result = build_template(entry, cfg, env, sites, dest_root, now=now)
        if result is not None:
            results.append(result)

    vhosts = build_vhosts(manifest, cfg, env, sites, dest_root, now=now)
    if vhosts is not None:
        results.append(vhosts)
    return results


def summarize(results: list[BuildResult]) -> BuildSummary:
    return BuildSummary(
        built=sum(1 for r in results if r.success),
        failed=sum(1 for r in results if not r.success),
        skipped_sites=sum(len(r.skipped_sites) for r in results),
        warnings=sum(len(r.unresolved) for r in results),
    )
