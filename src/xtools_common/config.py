"""Central configuration for xtools."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, Field

from xtools_common import constants as c


def default_tools_root() -> Path:
    env = os.environ.get("XTOOLS_ROOT")
    if env:
        return Path(env)
    # Walk up from the cwd looking for a tools root (contains config/ and .env)
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        if (parent / c.CONFIG_DIR_NAME).is_dir() and (parent / c.ENV_FILE_NAME).is_file():
            return parent
    return cwd


def env_str(env: Mapping[str, str], key: str, default: str) -> str:
    """Return ``env[key]`` or *default* when the key is missing or blank."""
    value = env.get(key, "")
    return value if value.strip() else default


def env_int(env: Mapping[str, str], key: str, default: int) -> int:
    """Return ``env[key]`` as an int, falling back to *default* on any cast failure."""
    try:
        return int(env.get(key, "").strip())
    except (TypeError, ValueError):
        return default


def env_path(env: Mapping[str, str], key: str, default: Path) -> Path:
    value = env.get(key, "").strip()
    return Path(value) if value else default


class XamppConfig(BaseModel):
    """Runtime configuration resolved once per run from the env file."""

    tools_root: Path = Field(default_factory=default_tools_root)
    xampp_root: Path = Field(default=c.DEFAULT_XAMPP_ROOT)
    document_root: Path | None = None
    http_port: int = Field(default=c.DEFAULT_HTTP_PORT)
    ssl_port: int = Field(default=c.DEFAULT_SSL_PORT)
    vhosts_extension: str = Field(default=c.DEFAULT_VHOSTS_EXTENSION)
    mysql_host: str = Field(default=c.DEFAULT_MYSQL_HOST)
    mysql_port: int = Field(default=c.DEFAULT_MYSQL_PORT)
    mysql_user: str = Field(default=c.DEFAULT_MYSQL_USER)
    mysql_password: str = ""
    hosts_file: Path = Field(default=c.DEFAULT_HOSTS_FILE)
    backup_dir: Path | None = None
    certs_dir: Path | None = None
    build_output_dir: Path | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str], tools_root: Path | None = None) -> "XamppConfig":
        """Build a config from an env map; every key falls back to its default."""
        root = tools_root or default_tools_root()
        xampp_root = env_path(env, c.ENV_XAMPP_ROOT, c.DEFAULT_XAMPP_ROOT)
        return cls(
            tools_root=root,
            xampp_root=xampp_root,
            document_root=env_path(env, c.ENV_DOCUMENT_ROOT, xampp_root / "htdocs"),
            http_port=env_int(env, c.ENV_HTTP_PORT, c.DEFAULT_HTTP_PORT),
            ssl_port=env_int(env, c.ENV_SSL_PORT, c.DEFAULT_SSL_PORT),
            vhosts_extension=env_str(env, c.ENV_VHOSTS_EXTENSION, c.DEFAULT_VHOSTS_EXTENSION),
            mysql_host=env_str(env, c.ENV_MYSQL_HOST, c.DEFAULT_MYSQL_HOST),
            mysql_port=env_int(env, c.ENV_MYSQL_PORT, c.DEFAULT_MYSQL_PORT),
            mysql_user=env_str(env, c.ENV_MYSQL_USER, c.DEFAULT_MYSQL_USER),
            mysql_password=env.get(c.ENV_MYSQL_PASSWORD, ""),
            hosts_file=env_path(env, c.ENV_HOSTS_FILE, c.DEFAULT_HOSTS_FILE),
            backup_dir=env_path(env, c.ENV_BACKUP_DIR, root / "backups"),
            certs_dir=env_path(env, c.ENV_CERTS_DIR, xampp_root / "apache" / "crt"),
            build_output_dir=env_path(env, c.ENV_BUILD_OUTPUT_DIR, xampp_root),
        )

    @property
    def docroot(self) -> Path:
        return self.document_root or self.xampp_root / "htdocs"

    @property
    def backups(self) -> Path:
        return self.backup_dir or self.tools_root / "backups"

    @property
    def certs(self) -> Path:
        return self.certs_dir or self.xampp_root / "apache" / "crt"

    @property
    def output_root(self) -> Path:
        return self.build_output_dir or self.xampp_root

    @property
    def env_file(self) -> Path:
        return self.tools_root / c.ENV_FILE_NAME

    @property
    def config_dir(self) -> Path:
        return self.tools_root / c.CONFIG_DIR_NAME

    @property
    def templates_dir(self) -> Path:
        return self.config_dir / c.TEMPLATES_DIR_NAME

    @property
    def sites_file(self) -> Path:
        return self.config_dir / c.SITES_FILE_NAME

    @property
    def manifest_file(self) -> Path:
        return self.config_dir / c.MANIFEST_FILE_NAME

    @property
    def log_dir(self) -> Path:
        return self.tools_root / c.LOG_DIR_NAME

    @property
    def audit_jsonl_path(self) -> Path:
        return self.log_dir / c.AUDIT_JSONL_NAME

    @property
    def apache_bin(self) -> Path:
        return self.xampp_root / "apache" / "bin" / "httpd.exe"

    @property
    def mysql_bin_dir(self) -> Path:
        return self.xampp_root / "mysql" / "bin"
