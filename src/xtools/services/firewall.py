"""Windows Firewall inbound rules via ``netsh advfirewall``."""

from __future__ import annotations

from xtools.errors import FirewallError
from xtools.services import process

RULE_PREFIX = "xtools"


def rule_name(port: int, protocol: str = "TCP") -> str:
    return f"{RULE_PREFIX} {protocol.upper()} {port}"


def _netsh(*args: str) -> str:
    result = process.run(["netsh", "advfirewall", "firewall", *args], check=False)
    if result.returncode != 0:
        raise FirewallError(
            f"netsh {' '.join(args)} failed (Administrator rights required?):\n"
            f"{result.stdout}{result.stderr}"
        )
    return result.stdout


def rule_exists(name: str) -> bool:
    result = process.run(
        ["netsh", "advfirewall", "firewall", "show", "rule", f"name={name}"],
        check=False,
    )
    return result.returncode == 0 and name in result.stdout


def allow_port(port: int, protocol: str = "TCP") -> bool:
    """Add an inbound allow rule. Returns False if it already existed."""
    name = rule_name(port, protocol)
    if rule_exists(name):
        return False
    _netsh(
        "add", "rule",
        f"name={name}",
        "dir=in",
        "action=allow",
        f"protocol={protocol.upper()}",
        f"localport={port}",
    )
    return True


def remove_rule(port: int, protocol: str = "TCP") -> bool:
    """Delete the xtools rule for *port*. Returns False if there was none."""
    name = rule_name(port, protocol)
    if not rule_exists(name):
        return False
    _netsh("delete", "rule", f"name={name}")
    return True
