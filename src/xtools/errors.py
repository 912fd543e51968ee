"""Custom exceptions for the xtools CLI."""

from __future__ import annotations


class XtoolsError(Exception):
    """Base exception for all xtools operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class ManifestNotFoundError(XtoolsError):
    """Build manifest file does not exist or cannot be parsed."""


class BlocksTemplateNotFoundError(XtoolsError):
    """The composite vhosts blocks template is missing."""


class TemplateValidationError(XtoolsError):
    """A template is structurally invalid (e.g. unbalanced conditional markers)."""


class CommandError(XtoolsError):
    """An external command failed or could not be started."""


class ServiceError(XtoolsError):
    """Apache/MySQL start, stop or config test failed."""


class MysqlError(XtoolsError):
    """mysql/mysqldump operation failed."""


class CertificateError(XtoolsError):
    """OpenSSL or certificate store operation failed."""


class FirewallError(XtoolsError):
    """netsh firewall operation failed."""


class HostsFileError(XtoolsError):
    """Reading or writing the system hosts file failed."""
