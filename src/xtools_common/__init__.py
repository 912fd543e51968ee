"""xtools common: shared models, constants and config for the xtools CLI."""

from xtools_common.config import XamppConfig, env_int, env_str
from xtools_common.models import (
    AppType,
    AuditEvent,
    BuildManifest,
    BuildResult,
    BuildSummary,
    ComposeResult,
    ManifestEntry,
    RenderResult,
    ResolvedSite,
    SiteDefinition,
    SiteValidation,
    TemplateDocument,
    TemplateKind,
    VhostsEntry,
    derive_server_name,
)

__all__ = [
    "AppType",
    "AuditEvent",
    "BuildManifest",
    "BuildResult",
    "BuildSummary",
    "ComposeResult",
    "ManifestEntry",
    "RenderResult",
    "ResolvedSite",
    "SiteDefinition",
    "SiteValidation",
    "TemplateDocument",
    "TemplateKind",
    "VhostsEntry",
    "XamppConfig",
    "derive_server_name",
    "env_int",
    "env_str",
]
