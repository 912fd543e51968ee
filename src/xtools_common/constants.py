"""Shared constants for the xtools ecosystem."""

from pathlib import Path

# Env file keys
ENV_XAMPP_ROOT = "XAMPP_ROOT_DIR"
ENV_DOCUMENT_ROOT = "XAMPP_DOCUMENT_ROOT"
ENV_HTTP_PORT = "XAMPP_SERVER_PORT"
ENV_SSL_PORT = "XAMPP_SSL_PORT"
ENV_VHOSTS_EXTENSION = "VHOSTS_EXTENSION"
ENV_MYSQL_HOST = "MYSQL_HOST"
ENV_MYSQL_PORT = "MYSQL_PORT"
ENV_MYSQL_USER = "MYSQL_ROOT_USER"
ENV_MYSQL_PASSWORD = "MYSQL_ROOT_PASSWORD"
ENV_HOSTS_FILE = "HOSTS_FILE"
ENV_BACKUP_DIR = "BACKUP_DIR"
ENV_CERTS_DIR = "CERTS_DIR"
ENV_BUILD_OUTPUT_DIR = "BUILD_OUTPUT_DIR"

# Defaults used when a key is absent or fails to cast
DEFAULT_XAMPP_ROOT = Path(r"C:\xampp")
DEFAULT_HTTP_PORT = 80
DEFAULT_SSL_PORT = 443
DEFAULT_VHOSTS_EXTENSION = ".local"
DEFAULT_MYSQL_HOST = "127.0.0.1"
DEFAULT_MYSQL_PORT = 3306
DEFAULT_MYSQL_USER = "root"
DEFAULT_HOSTS_FILE = Path(r"C:\Windows\System32\drivers\etc\hosts")

# Tools-root layout
ENV_FILE_NAME = ".env"
CONFIG_DIR_NAME = "config"
TEMPLATES_DIR_NAME = "templates"
SITES_FILE_NAME = "vhosts.json"
MANIFEST_FILE_NAME = "build-manifest.json"
LOG_DIR_NAME = "logs"
AUDIT_JSONL_NAME = "audit.jsonl"

# Hosts file
LOOPBACK_ADDRESS = "127.0.0.1"
HOSTS_BEGIN_MARKER = "# BEGIN xtools"
HOSTS_END_MARKER = "# END xtools"
NO_VHOSTS_COMMENT = "# No virtual hosts configured"

# Certificates
DEFAULT_CERT_DAYS = 825
DEFAULT_CERT_KEY_BITS = 2048
