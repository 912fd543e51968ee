"""``{{TOKEN}}`` placeholder rendering and ``## App:`` block extraction.

Tokens missing from the substitution map are left verbatim in the output and
reported as unresolved.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Mapping

from xtools_common import RenderResult, TemplateDocument, TemplateKind, XamppConfig
from xtools_common.constants import LOOPBACK_ADDRESS, NO_VHOSTS_COMMENT

log = logging.getLogger(__name__)

TOKEN_RE = re.compile(r"\{\{([A-Za-z_][A-Za-z0-9_]*)\}\}")
# Anything still brace-delimited after substitution, except conditional markers
_LEFTOVER_RE = re.compile(r"\{\{([^{}#/][^{}]*)\}\}")

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def find_unresolved(text: str) -> list[str]:
    """Return leftover token names, each once, in order of first appearance."""
    seen: dict[str, None] = {}
    for match in _LEFTOVER_RE.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)


def global_substitutions(cfg: XamppConfig, env: Mapping[str, str]) -> dict[str, str]:
    """Env file values plus the resolved roots and ports, paths with forward slashes."""
    values = dict(env)
    values.update(
        {
            "TOOLS_ROOT": apache_path(cfg.tools_root),
            "XAMPP_ROOT": apache_path(cfg.xampp_root),
            "DOCUMENT_ROOT": apache_path(cfg.docroot),
            "PORT": str(cfg.http_port),
            "SSL_PORT": str(cfg.ssl_port),
            "VHOSTS_EXTENSION": cfg.vhosts_extension,
            "MYSQL_PORT": str(cfg.mysql_port),
            "CERTS_DIR": apache_path(cfg.certs),
        }
    )
    return values


def apache_path(path: Path | str) -> str:
    return str(path).replace("\\", "/")


def hosts_entries(host_names: Iterable[str]) -> str:
    lines = [f"{LOOPBACK_ADDRESS}\t{name}" for name in host_names]
    return "\n".join(lines) if lines else NO_VHOSTS_COMMENT


def substitute(text: str, values: Mapping[str, str]) -> str:
    """Single-pass token replacement; unknown tokens are left untouched."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in values:
            return str(values[name])
        return match.group(0)

    return TOKEN_RE.sub(_replace, text)


def render(
    text: str,
    substitutions: Mapping[str, str],
    kind: TemplateKind = TemplateKind.STANDARD,
    *,
    host_names: Iterable[str] = (),
    now: datetime | None = None,
) -> RenderResult:
    """Render a template; caller-provided values win over synthesized ones."""
    values: dict[str, str] = {}
    if kind is TemplateKind.HOSTS:
        stamp = (now or datetime.now()).strftime(DATE_FORMAT)
        values["VHOSTS_ENTRIES"] = hosts_entries(host_names)
        values["GENERATED_DATE"] = stamp
        values["TIMESTAMP"] = stamp
    values.update(substitutions)

    rendered = substitute(text, values)
    unresolved = find_unresolved(rendered)
    if unresolved:
        log.warning("Unresolved placeholders: %s", ", ".join(unresolved))
    return RenderResult(text=rendered, unresolved=unresolved)


def block_marker(app_label: str, https: bool) -> str:
    return f"## App:{app_label} HTTPS:{'true' if https else 'false'}"


def extract_block(text: str, app_label: str, https: bool) -> str:
    """Return the lines after ``## App:<label> HTTPS:<bool>`` up to the next ``##`` line.

    Returns an empty string when the marker is absent.
    """
    marker = block_marker(app_label, https)
    lines = text.splitlines()
    start = next((i for i, line in enumerate(lines) if marker in line), None)
    if start is None:
        return ""

    body: list[str] = []
    for line in lines[start + 1:]:
        if line.lstrip().startswith("##"):
            break
        body.append(line)

    while body and not body[0].strip():
        body.pop(0)
    while body and not body[-1].strip():
        body.pop()
    return "\n".join(body)


def load_document(
    source: Path, output: Path, kind: TemplateKind = TemplateKind.STANDARD
) -> TemplateDocument:
    return TemplateDocument(
        source_path=source,
        output_path=output,
        text=source.read_text(encoding="utf-8"),
        kind=kind,
    )
