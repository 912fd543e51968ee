"""CLI configuration: singleton XamppConfig resolved at startup."""

from __future__ import annotations

from functools import lru_cache

from xtools_common import XamppConfig
from xtools_common.config import default_tools_root

from xtools.services.env_store import load_env


@lru_cache(maxsize=1)
def get_env() -> dict[str, str]:
    """Return the env map loaded from ``<tools_root>/.env`` (resolved once, cached)."""
    return load_env(default_tools_root() / ".env")


@lru_cache(maxsize=1)
def get_config() -> XamppConfig:
    """Return the global XamppConfig (resolved once, cached)."""
    return XamppConfig.from_env(get_env(), default_tools_root())
