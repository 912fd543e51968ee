"""Site definition model."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_TRAILING_EXTENSION = re.compile(r"\.[A-Za-z0-9]+$")


class AppType(str, Enum):
    LARAVEL = "laravel"
    REACT = "react"
    WORDPRESS = "wordpress"
    STATIC = "static"

    @property
    def label(self) -> str:
        """Label used in ``## App:<Label>`` block markers."""
        return _APP_LABELS[self]


_APP_LABELS = {
    AppType.LARAVEL: "Laravel",
    AppType.REACT: "React",
    AppType.WORDPRESS: "WordPress",
    AppType.STATIC: "Static",
}


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _as_port(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def derive_server_name(folder: str, extension: str) -> str:
    """``my-app`` -> ``my-app.local``; ``site.old`` -> ``site.local``; ``.`` -> ``localhost``."""
    folder = folder.strip()
    if folder in ("", "."):
        return "localhost"
    return _TRAILING_EXTENSION.sub("", folder) + extension


class SiteDefinition(BaseModel):
    """One virtual host entry from the site list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    folder: str
    name: str | None = None
    type: AppType = AppType.STATIC
    server_name: str | None = Field(default=None, alias="serverName")
    ssl: bool = False
    port: int | None = None
    ssl_port: int | None = Field(default=None, alias="sslPort")

    @model_validator(mode="before")
    @classmethod
    def _merge_https(cls, data: Any) -> Any:
        if isinstance(data, dict) and "https" in data:
            data = dict(data)
            https = data.pop("https")
            data["ssl"] = _as_bool(data.get("ssl")) or _as_bool(https)
        return data

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> AppType:
        try:
            return AppType(str(value).strip().lower())
        except ValueError:
            return AppType.STATIC

    @field_validator("ssl", mode="before")
    @classmethod
    def _coerce_ssl(cls, value: Any) -> bool:
        return _as_bool(value)

    @field_validator("port", "ssl_port", mode="before")
    @classmethod
    def _coerce_port(cls, value: Any) -> int | None:
        return _as_port(value)

    @field_validator("server_name", "name", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def resolved_server_name(self, extension: str) -> str:
        return self.server_name or derive_server_name(self.folder, extension)

    def display_name(self, extension: str) -> str:
        return self.name or self.resolved_server_name(extension)


class ResolvedSite(BaseModel):
    """A site with its effective name, ports and app label."""

    model_config = ConfigDict(frozen=True)

    site: SiteDefinition
    server_name: str
    port: int
    ssl_port: int
    app_label: str

    @property
    def ssl(self) -> bool:
        return self.site.ssl

    @property
    def folder(self) -> str:
        return self.site.folder


class SiteValidation(BaseModel):
    """Outcome of checking a site's folder against the document root."""

    site: SiteDefinition
    valid: bool
    resolved_path: Path
    error: str | None = None
