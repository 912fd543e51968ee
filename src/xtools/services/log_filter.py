"""``{{#IF_LOG_DIR}} ... {{/IF_LOG_DIR}}`` conditional sections."""

from __future__ import annotations

import re
from pathlib import Path

from xtools_common import AppType, SiteDefinition

from xtools.errors import TemplateValidationError
from xtools.services.template_engine import apache_path

OPEN_MARKER = "{{#IF_LOG_DIR}}"
CLOSE_MARKER = "{{/IF_LOG_DIR}}"
LOG_DIR_TOKEN = "{{LOG_DIR}}"

_OPEN = re.escape(OPEN_MARKER)
_CLOSE = re.escape(CLOSE_MARKER)
_MARKER_RE = re.compile(f"{_OPEN}|{_CLOSE}")
# A marker alone on its line takes the whole line (and its newline) with it.
_SECTION_RE = re.compile(
    rf"(?:^[ \t]*{_OPEN}[ \t]*(?:\r?\n|\Z)|{_OPEN})"
    rf"(?P<body>.*?)"
    rf"(?:^[ \t]*{_CLOSE}[ \t]*(?:\r?\n|\Z)|{_CLOSE})",
    re.MULTILINE | re.DOTALL,
)
# A line holding only indentation and one complete section.
_LINE_SECTION_RE = re.compile(
    rf"^[ \t]*{_OPEN}(?:(?!{_OPEN}|{_CLOSE})[^\n])*{_CLOSE}[ \t]*(?:\r?\n|\Z)",
    re.MULTILINE,
)

_STORAGE_LOG_TYPES = {AppType.LARAVEL, AppType.REACT}


def log_dir_for(site: SiteDefinition | None, document_root: Path) -> Path:
    """Expected log directory for a site (``None`` = the default catch-all host)."""
    if site is None:
        return document_root / "logs"
    base = document_root / site.folder
    if site.type in _STORAGE_LOG_TYPES:
        return base / "storage" / "logs"
    return base / "logs"


def validate_markers(text: str, source: str = "template") -> None:
    """Raise TemplateValidationError unless every open marker has a matching close."""
    depth = 0
    for match in _MARKER_RE.finditer(text):
        line_no = text.count("\n", 0, match.start()) + 1
        if match.group(0) == OPEN_MARKER:
            if depth:
                raise TemplateValidationError(
                    f"{source}:{line_no}: nested {OPEN_MARKER} is not supported"
                )
            depth = 1
        else:
            if not depth:
                raise TemplateValidationError(
                    f"{source}:{line_no}: {CLOSE_MARKER} without {OPEN_MARKER}"
                )
            depth = 0
    if depth:
        raise TemplateValidationError(f"{source}: {OPEN_MARKER} is never closed")


def apply_log_directive(block: str, log_dir: Path, exists: bool | None = None) -> str:
    """Keep or drop the log sections of a rendered block.

    When the directory exists the markers are stripped and ``{{LOG_DIR}}`` is
    replaced by its path; otherwise each marked section is removed entirely.
    """
    validate_markers(block)
    if exists is None:
        exists = log_dir.is_dir()

    if exists:
        result = _SECTION_RE.sub(lambda m: m.group("body"), block)
        return result.replace(LOG_DIR_TOKEN, apache_path(log_dir))
    return _SECTION_RE.sub("", _LINE_SECTION_RE.sub("", block))
