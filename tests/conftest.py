"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from xtools_common import XamppConfig

BLOCKS = """\
# Test blocks template
## App:Default HTTPS:false
<VirtualHost *:{{PORT}}>
    ServerName {{SERVER_NAME}}
    DocumentRoot "{{SITE_ROOT}}"
    {{#IF_LOG_DIR}}
    ErrorLog "{{LOG_DIR}}/error.log"
    {{/IF_LOG_DIR}}
</VirtualHost>

## App:WordPress HTTPS:false
<VirtualHost *:{{PORT}}>
    ServerName {{SERVER_NAME}}
    DocumentRoot "{{SITE_ROOT}}"
    {{#IF_LOG_DIR}}
    ErrorLog "{{LOG_DIR}}/error.log"
    {{/IF_LOG_DIR}}
</VirtualHost>

## App:Laravel HTTPS:true
<VirtualHost *:{{SSL_PORT}}>
    ServerName {{SERVER_NAME}}
    DocumentRoot "{{SITE_ROOT}}"
    SSLCertificateFile "{{SSL_CERT_FILE}}"
</VirtualHost>
"""

FROZEN_NOW = datetime(2026, 1, 2, 3, 4, 5)


@pytest.fixture
def blocks_text() -> str:
    return BLOCKS


@pytest.fixture
def frozen_now() -> datetime:
    return FROZEN_NOW


@pytest.fixture
def tmp_config(tmp_path: Path) -> XamppConfig:
    """Return an XamppConfig pointing at temp directories."""
    (tmp_path / "tools" / "config" / "templates").mkdir(parents=True)
    (tmp_path / "htdocs").mkdir()
    return XamppConfig(
        tools_root=tmp_path / "tools",
        xampp_root=tmp_path / "xampp",
        document_root=tmp_path / "htdocs",
        http_port=80,
        ssl_port=443,
        vhosts_extension=".local",
        hosts_file=tmp_path / "etc" / "hosts",
        backup_dir=tmp_path / "backups",
        certs_dir=tmp_path / "certs",
        build_output_dir=tmp_path / "out",
    )
