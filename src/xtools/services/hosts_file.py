"""Apply generated host entries to the system hosts file."""

from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path

from xtools_common.constants import HOSTS_BEGIN_MARKER, HOSTS_END_MARKER

from xtools.errors import HostsFileError

log = logging.getLogger(__name__)

_SYSTEM_HOSTNAMES = {"localhost"}


def entry_lines(text: str) -> list[str]:
    """Return the ``address host`` lines of a hosts-dialect text.

    Comments are dropped, as are ``localhost`` lines the system file already has.
    """
    lines = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        names = line.split()[1:]
        if names and all(name.lower() in _SYSTEM_HOSTNAMES for name in names):
            continue
        lines.append(line)
    return lines


def _split_managed(lines: list[str]) -> tuple[list[str], list[str], list[str]]:
    """Split hosts lines into (before, managed, after) around the xtools markers."""
    try:
        begin = lines.index(HOSTS_BEGIN_MARKER)
    except ValueError:
        return lines, [], []
    try:
        end = lines.index(HOSTS_END_MARKER, begin + 1)
    except ValueError:
        raise HostsFileError(
            f"'{HOSTS_BEGIN_MARKER}' without '{HOSTS_END_MARKER}' in hosts file"
        ) from None
    return lines[:begin], lines[begin + 1:end], lines[end + 1:]


def read_managed_entries(hosts_path: Path) -> list[str]:
    if not hosts_path.exists():
        return []
    _, managed, _ = _split_managed(hosts_path.read_text(encoding="utf-8").splitlines())
    return entry_lines("\n".join(managed))


def merge_entries(current: str, entries: list[str]) -> str:
    """Replace (or append) the managed section of a hosts file's text."""
    before, _, after = _split_managed(current.splitlines())
    section = [HOSTS_BEGIN_MARKER, *entries, HOSTS_END_MARKER]
    if not after:
        while before and not before[-1].strip():
            before.pop()
        if before:
            before.append("")
    return "\n".join(before + section + after) + "\n"


def backup_hosts(hosts_path: Path, backup_dir: Path) -> Path:
    backup_dir.mkdir(parents=True, exist_ok=True)
    target = backup_dir / f"hosts_{datetime.now().strftime('%Y%m%d_%H%M%S')}.bak"
    shutil.copy2(str(hosts_path), str(target))
    return target


def apply_entries(hosts_path: Path, entries_text: str, backup_dir: Path) -> Path | None:
    """Write *entries_text*'s host lines into the managed section; returns the backup path."""
    entries = entry_lines(entries_text)
    backup = None
    current = ""
    try:
        if hosts_path.exists():
            backup = backup_hosts(hosts_path, backup_dir)
            current = hosts_path.read_text(encoding="utf-8")
        hosts_path.write_text(merge_entries(current, entries), encoding="utf-8")
    except PermissionError as exc:
        raise HostsFileError(
            f"Permission denied writing {hosts_path} (run the terminal as Administrator)"
        ) from exc
    log.info("Applied %d host entries to %s", len(entries), hosts_path)
    return backup
