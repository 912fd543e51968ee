"""Self-signed certificate issuance with the OpenSSL bundled in XAMPP."""

from __future__ import annotations

import shutil
from pathlib import Path

from xtools_common.constants import DEFAULT_CERT_DAYS, DEFAULT_CERT_KEY_BITS

from xtools.errors import CertificateError, CommandError
from xtools.services import process


def openssl_binary(xampp_root: Path) -> str:
    """Prefer XAMPP's openssl.exe, else whatever is on PATH."""
    bundled = xampp_root / "apache" / "bin" / "openssl.exe"
    if bundled.exists():
        return str(bundled)
    return shutil.which("openssl") or "openssl"


def cert_paths(certs_dir: Path, name: str) -> tuple[Path, Path]:
    return certs_dir / f"{name}.crt", certs_dir / f"{name}.key"


def issue_self_signed(
    openssl: str,
    certs_dir: Path,
    name: str,
    *,
    days: int = DEFAULT_CERT_DAYS,
    bits: int = DEFAULT_CERT_KEY_BITS,
) -> tuple[Path, Path]:
    """Create ``<name>.crt``/``<name>.key`` with a SAN for *name*."""
    certs_dir.mkdir(parents=True, exist_ok=True)
    crt, key = cert_paths(certs_dir, name)
    cmd = [
        openssl, "req", "-x509", "-nodes",
        "-newkey", f"rsa:{bits}",
        "-sha256", "-days", str(days),
        "-keyout", str(key),
        "-out", str(crt),
        "-subj", f"/CN={name}",
        "-addext", f"subjectAltName=DNS:{name}",
    ]
    try:
        process.run(cmd)
    except CommandError as exc:
        raise CertificateError(f"OpenSSL failed for {name}:\n{exc}") from exc
    return crt, key


def trust_certificate(crt: Path) -> None:
    """Import a certificate into the Windows trusted root store."""
    result = process.run(["certutil", "-addstore", "-f", "Root", str(crt)], check=False)
    if result.returncode != 0:
        raise CertificateError(f"certutil failed for {crt}:\n{result.stdout}{result.stderr}")


def certificate_expiry(openssl: str, crt: Path) -> str:
    result = process.run([openssl, "x509", "-noout", "-enddate", "-in", str(crt)], check=False)
    if result.returncode != 0:
        return "unreadable"
    # notAfter=Jan  1 00:00:00 2030 GMT
    return result.stdout.strip().partition("=")[2]


def list_certificates(openssl: str, certs_dir: Path) -> list[tuple[str, str]]:
    """Return (name, expiry) for every ``*.crt`` in the certs directory."""
    if not certs_dir.exists():
        return []
    return [
        (crt.stem, certificate_expiry(openssl, crt))
        for crt in sorted(certs_dir.glob("*.crt"))
    ]
