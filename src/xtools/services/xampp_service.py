"""Apache and MySQL start/stop/status using the XAMPP control scripts."""

from __future__ import annotations

import csv
import io
import subprocess
from enum import Enum
from pathlib import Path

from xtools_common import XamppConfig

from xtools.errors import CommandError, ServiceError
from xtools.services import process


class Service(str, Enum):
    APACHE = "apache"
    MYSQL = "mysql"


_IMAGES = {
    Service.APACHE: "httpd.exe",
    Service.MYSQL: "mysqld.exe",
}


def _script(cfg: XamppConfig, service: Service, action: str) -> Path:
    script = cfg.xampp_root / f"{service.value}_{action}.bat"
    if not script.exists():
        raise ServiceError(f"XAMPP script not found: {script}")
    return script


def image_name(service: Service) -> str:
    return _IMAGES[service]


def running_pids(image: str) -> list[int]:
    """PIDs of processes named *image*, from ``tasklist`` CSV output."""
    result = process.run(
        ["tasklist", "/FI", f"IMAGENAME eq {image}", "/FO", "CSV", "/NH"],
        check=False,
    )
    if result.returncode != 0:
        return []
    pids = []
    for row in csv.reader(io.StringIO(result.stdout)):
        if len(row) >= 2 and row[0].lower() == image.lower():
            try:
                pids.append(int(row[1]))
            except ValueError:
                continue
    return pids


def is_running(service: Service) -> bool:
    return bool(running_pids(image_name(service)))


def start(cfg: XamppConfig, service: Service) -> None:
    """Launch the service in the background; the XAMPP start scripts block."""
    if is_running(service):
        return
    script = _script(cfg, service, "start")
    try:
        subprocess.Popen(
            ["cmd", "/c", str(script)],
            cwd=str(cfg.xampp_root),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as exc:
        raise ServiceError(f"Could not start {service.value}: {exc}") from exc


def stop(cfg: XamppConfig, service: Service) -> None:
    if not is_running(service):
        return
    script = _script(cfg, service, "stop")
    try:
        process.run(["cmd", "/c", str(script)])
    except CommandError as exc:
        raise ServiceError(f"Could not stop {service.value}:\n{exc}") from exc


def config_test(cfg: XamppConfig) -> str:
    """Run ``httpd -t``. Raises ServiceError when the config is invalid."""
    result = process.run([str(cfg.apache_bin), "-t"], check=False)
    if result.returncode != 0:
        raise ServiceError(f"Apache config test failed:\n{result.stderr}")
    return (result.stderr or result.stdout).strip()
