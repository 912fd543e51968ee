"""Subprocess wrapper shared by the external-tool services."""

from __future__ import annotations

import logging
import subprocess
from typing import Mapping

from xtools.errors import CommandError

log = logging.getLogger(__name__)


def run(
    cmd: list[str],
    *,
    check: bool = True,
    capture: bool = True,
    input: str | bytes | None = None,
    text: bool = True,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess:
    log.debug("Running: %s", " ".join(cmd))
    try:
        return subprocess.run(
            cmd,
            check=check,
            capture_output=capture,
            input=input,
            text=text,
            env=env,
        )
    except subprocess.CalledProcessError as exc:
        raise CommandError(
            f"Command failed: {' '.join(cmd)}\nstderr: {exc.stderr}"
        ) from exc
    except FileNotFoundError as exc:
        raise CommandError(f"Executable not found: {cmd[0]}") from exc
