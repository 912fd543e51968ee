"""KEY=VALUE environment file loader."""

from __future__ import annotations

import logging
from pathlib import Path

log = logging.getLogger(__name__)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_env(text: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines. Comments and lines without ``=`` are ignored."""
    env: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        if not key:
            continue
        env[key] = _unquote(value.strip())
    return env


def load_env(path: Path) -> dict[str, str]:
    """Load an env file. A missing file yields an empty mapping."""
    if not path.is_file():
        log.debug("Env file not found: %s", path)
        return {}
    return parse_env(path.read_text(encoding="utf-8-sig"))
