"""Site list loading, resolution and folder validation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from xtools_common import AppType, ResolvedSite, SiteDefinition, SiteValidation, XamppConfig

from xtools.errors import XtoolsError

log = logging.getLogger(__name__)


def parse_sites(data: Any) -> list[SiteDefinition]:
    """Build site definitions from a decoded JSON document (``vhosts`` or ``sites`` array)."""
    if not isinstance(data, dict):
        return []
    raw = data.get("vhosts")
    if raw is None:
        raw = data.get("sites")
    if not isinstance(raw, list):
        return []

    sites: list[SiteDefinition] = []
    for index, entry in enumerate(raw):
        try:
            sites.append(SiteDefinition.model_validate(entry))
        except ValidationError as exc:
            log.warning("Ignoring site entry #%d: %s", index, exc.errors()[0]["msg"])
    return sites


def load_sites(path: Path) -> list[SiteDefinition]:
    """Load the site list. A missing file yields an empty list."""
    if not path.is_file():
        log.warning("Site list not found: %s", path)
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except json.JSONDecodeError as exc:
        raise XtoolsError(f"Invalid JSON in {path}: {exc}") from exc
    return parse_sites(data)


def resolve_site(site: SiteDefinition, cfg: XamppConfig) -> ResolvedSite:
    """Apply the site's overrides on top of the global ports and domain suffix."""
    return ResolvedSite(
        site=site,
        server_name=site.resolved_server_name(cfg.vhosts_extension),
        port=site.port or cfg.http_port,
        ssl_port=site.ssl_port or cfg.ssl_port,
        app_label=site.type.label,
    )


def site_root(site: SiteDefinition, document_root: Path) -> Path:
    """Directory the vhost's DocumentRoot points at."""
    base = document_root / site.folder
    if site.type is AppType.LARAVEL:
        return base / "public"
    return base


def validate_site(site: SiteDefinition, document_root: Path) -> SiteValidation:
    path = site_root(site, document_root)
    if path.is_dir():
        return SiteValidation(site=site, valid=True, resolved_path=path)
    return SiteValidation(
        site=site,
        valid=False,
        resolved_path=path,
        error=f"Folder not found: {path}",
    )


def partition_sites(
    sites: list[SiteDefinition], document_root: Path
) -> tuple[list[SiteDefinition], list[SiteValidation]]:
    """Split sites into (valid, rejected) preserving order."""
    valid: list[SiteDefinition] = []
    rejected: list[SiteValidation] = []
    for site in sites:
        result = validate_site(site, document_root)
        if result.valid:
            valid.append(site)
        else:
            log.warning("Skipping site %s: %s", site.folder, result.error)
            rejected.append(result)
    return valid, rejected
