"""MySQL/MariaDB backup, restore and user provisioning via the XAMPP client binaries."""

from __future__ import annotations

import gzip
import logging
import os
import re
from datetime import datetime
from pathlib import Path

from xtools_common import XamppConfig

from xtools.errors import CommandError, MysqlError
from xtools.services import process

log = logging.getLogger(__name__)

SYSTEM_DATABASES = {"information_schema", "mysql", "performance_schema", "phpmyadmin", "sys", "test"}

_DB_NAME_RE = re.compile(r"^[A-Za-z0-9_$-]+$")


def _binary(cfg: XamppConfig, name: str) -> str:
    exe = cfg.mysql_bin_dir / f"{name}.exe"
    return str(exe) if exe.exists() else name


def _connection_args(cfg: XamppConfig) -> list[str]:
    return ["-h", cfg.mysql_host, "-P", str(cfg.mysql_port), "-u", cfg.mysql_user]


def _client_env(cfg: XamppConfig) -> dict[str, str] | None:
    """Inherited environment plus ``MYSQL_PWD``; None when there is no password."""
    if not cfg.mysql_password:
        return None
    return {**os.environ, "MYSQL_PWD": cfg.mysql_password}


def check_database_name(name: str) -> str:
    if not _DB_NAME_RE.match(name):
        raise MysqlError(f"Invalid database name: {name!r}")
    return name


def quote_identifier(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"


def quote_literal(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def execute(cfg: XamppConfig, sql: str, database: str | None = None) -> str:
    """Run SQL through the mysql client in batch mode and return stdout."""
    cmd = [_binary(cfg, "mysql"), *_connection_args(cfg), "-N", "-B"]
    if database:
        cmd.append(database)
    cmd.extend(["-e", sql])
    try:
        return process.run(cmd, env=_client_env(cfg)).stdout
    except CommandError as exc:
        raise MysqlError(str(exc)) from exc


def list_databases(cfg: XamppConfig, *, include_system: bool = False) -> list[str]:
    names = [line.strip() for line in execute(cfg, "SHOW DATABASES").splitlines() if line.strip()]
    if include_system:
        return names
    return [n for n in names if n.lower() not in SYSTEM_DATABASES]


def backup_filename(database: str, now: datetime | None = None) -> str:
    return f"{database}_{(now or datetime.now()).strftime('%Y%m%d_%H%M%S')}.sql.gz"


def backup_database(cfg: XamppConfig, database: str, dest_dir: Path | None = None) -> Path:
    """Dump a database with mysqldump into a gzip file; returns the file path."""
    check_database_name(database)
    dest_dir = dest_dir or cfg.backups
    dest_dir.mkdir(parents=True, exist_ok=True)
    target = dest_dir / backup_filename(database)

    cmd = [
        _binary(cfg, "mysqldump"), *_connection_args(cfg),
        "--single-transaction", "--routines", "--triggers", "--events",
        database,
    ]
    result = process.run(cmd, check=False, text=False, env=_client_env(cfg))
    if result.returncode != 0:
        raise MysqlError(
            f"mysqldump failed for {database}:\n{result.stderr.decode(errors='replace')}"
        )
    with gzip.open(target, "wb") as f:
        f.write(result.stdout)
    log.info("Backed up %s to %s", database, target)
    return target


def read_dump(path: Path) -> bytes:
    if path.suffix == ".gz":
        with gzip.open(path, "rb") as f:
            return f.read()
    return path.read_bytes()


def restore_database(cfg: XamppConfig, database: str, dump: Path, *, create: bool = True) -> None:
    """Load a ``.sql`` or ``.sql.gz`` dump into *database*."""
    check_database_name(database)
    if not dump.is_file():
        raise MysqlError(f"Backup file not found: {dump}")
    if create:
        execute(cfg, f"CREATE DATABASE IF NOT EXISTS {quote_identifier(database)}")

    cmd = [_binary(cfg, "mysql"), *_connection_args(cfg), database]
    result = process.run(
        cmd, check=False, input=read_dump(dump), text=False, env=_client_env(cfg)
    )
    if result.returncode != 0:
        raise MysqlError(
            f"Restore of {dump.name} into {database} failed:\n"
            f"{result.stderr.decode(errors='replace')}"
        )
    log.info("Restored %s into %s", dump, database)


def create_user_sql(user: str, password: str, database: str | None, host: str = "localhost") -> str:
    account = f"{quote_literal(user)}@{quote_literal(host)}"
    scope = f"{quote_identifier(database)}.*" if database else "*.*"
    statements = [
        f"CREATE USER IF NOT EXISTS {account} IDENTIFIED BY {quote_literal(password)}",
        f"GRANT ALL PRIVILEGES ON {scope} TO {account}",
        "FLUSH PRIVILEGES",
    ]
    if database:
        statements.insert(0, f"CREATE DATABASE IF NOT EXISTS {quote_identifier(database)}")
    return ";\n".join(statements) + ";"


def create_user(
    cfg: XamppConfig,
    user: str,
    password: str,
    database: str | None = None,
    host: str = "localhost",
) -> None:
    """Create a user (and optionally its database) with full privileges on it."""
    if database:
        check_database_name(database)
    execute(cfg, create_user_sql(user, password, database, host))
