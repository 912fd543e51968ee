"""Audit logger: one JSON line per operation in ``logs/audit.jsonl``."""

from __future__ import annotations

import getpass
import os
import socket
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from xtools_common import AuditEvent

from xtools.config import get_config


def _get_actor() -> str:
    return os.environ.get("XTOOLS_ACTOR") or getpass.getuser()


def _write_jsonl(path: Path, event: AuditEvent) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(event.to_jsonl() + "\n")


def log_event(event: AuditEvent) -> None:
    """Append an audit event to the JSONL log."""
    cfg = get_config()
    _write_jsonl(cfg.audit_jsonl_path, event)


@contextmanager
def audit(action: str, target: str = "", **params: Any) -> Generator[AuditEvent, None, None]:
    """Context manager that records timing and success/failure."""
    event = AuditEvent(
        host=socket.gethostname(),
        actor=_get_actor(),
        action=action,
        target=target,
        params=params,
    )
    start = time.monotonic()
    try:
        yield event
        event.result = "success"
    except Exception as exc:
        event.result = "failure"
        event.error = str(exc)
        raise
    finally:
        event.duration_ms = int((time.monotonic() - start) * 1000)
        log_event(event)
