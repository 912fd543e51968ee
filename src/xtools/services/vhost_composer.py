"""Compose httpd-vhosts.conf from the ``## App:`` blocks template and the site list."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Mapping

from jinja2 import Environment, FileSystemLoader, select_autoescape

from xtools_common import ComposeResult, ResolvedSite, SiteDefinition, XamppConfig

from xtools.errors import BlocksTemplateNotFoundError
from xtools.services.log_filter import apply_log_directive, log_dir_for, validate_markers
from xtools.services.site_registry import partition_sites, resolve_site, site_root
from xtools.services.template_engine import (
    DATE_FORMAT,
    apache_path,
    extract_block,
    find_unresolved,
    global_substitutions,
    substitute,
)

log = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

DEFAULT_LABEL = "Default"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        keep_trailing_newline=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_header(now: datetime, site_count: int) -> str:
    template = _get_env().get_template("vhosts_header.conf.j2")
    return template.render(generated=now.strftime(DATE_FORMAT), site_count=site_count)


def render_redirect(site: ResolvedSite) -> str:
    """Plain HTTP vhost that permanently redirects to the HTTPS port."""
    template = _get_env().get_template("vhost_redirect.conf.j2")
    return template.render(site=site)


def load_blocks_template(path: Path) -> str:
    if not path.is_file():
        raise BlocksTemplateNotFoundError(f"Vhosts blocks template not found: {path}")
    text = path.read_text(encoding="utf-8")
    validate_markers(text, source=str(path))
    return text


def default_values(cfg: XamppConfig) -> dict[str, str]:
    return {
        "SERVER_NAME": "localhost",
        "SITE_NAME": "Default (localhost)",
        "FOLDER": ".",
        "SITE_ROOT": apache_path(cfg.docroot),
        "APP_TYPE": "default",
    }


def site_values(site: ResolvedSite, cfg: XamppConfig) -> dict[str, str]:
    definition = site.site
    return {
        "SERVER_NAME": site.server_name,
        "SITE_NAME": definition.display_name(cfg.vhosts_extension),
        "FOLDER": definition.folder,
        "SITE_ROOT": apache_path(site_root(definition, cfg.docroot)),
        "APP_TYPE": definition.type.value,
        "PORT": str(site.port),
        "SSL_PORT": str(site.ssl_port),
        "SSL_CERT_FILE": apache_path(cfg.certs / f"{site.server_name}.crt"),
        "SSL_KEY_FILE": apache_path(cfg.certs / f"{site.server_name}.key"),
    }


def render_block(
    blocks_text: str,
    app_label: str,
    https: bool,
    values: Mapping[str, str],
    log_dir: Path,
) -> str:
    """Extract, substitute and log-filter one block. Empty when no marker matches."""
    block = extract_block(blocks_text, app_label, https)
    if not block:
        return ""
    return apply_log_directive(substitute(block, values), log_dir)


def compose(
    sites: list[SiteDefinition],
    cfg: XamppConfig,
    env: Mapping[str, str],
    blocks_text: str,
    *,
    now: datetime | None = None,
) -> ComposeResult:
    """Build the full vhosts file: banner, default host, then one entry per valid site."""
    validate_markers(blocks_text, source="vhosts blocks template")
    now = now or datetime.now()
    base = global_substitutions(cfg, env)
    valid, rejected = partition_sites(sites, cfg.docroot)

    parts: list[str] = []

    default_block = render_block(
        blocks_text,
        DEFAULT_LABEL,
        False,
        {**base, **default_values(cfg)},
        log_dir_for(None, cfg.docroot),
    )
    if default_block:
        parts.append(default_block)
    else:
        log.warning("No '## App:%s HTTPS:false' block in vhosts template", DEFAULT_LABEL)

    generated = 0
    for definition in valid:
        site = resolve_site(definition, cfg)
        values = {**base, **site_values(site, cfg)}
        log_dir = log_dir_for(definition, cfg.docroot)

        block = render_block(blocks_text, site.app_label, site.ssl, values, log_dir)
        if not block:
            log.info(
                "No '## App:%s HTTPS:%s' block for %s, skipping",
                site.app_label,
                "true" if site.ssl else "false",
                site.server_name,
            )
            continue

        if site.ssl:
            parts.append(render_redirect(site))
        parts.append(block)
        generated += 1

    parts.insert(0, render_header(now, generated))
    text = "\n\n".join(parts) + "\n"
    return ComposeResult(
        text=text,
        generated=generated,
        skipped=rejected,
        unresolved=find_unresolved(text),
    )
