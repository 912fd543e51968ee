"""Shared Pydantic models."""

from xtools_common.models.audit_event import AuditEvent
from xtools_common.models.build import (
    BuildManifest,
    BuildResult,
    BuildSummary,
    ComposeResult,
    ManifestEntry,
    RenderResult,
    TemplateDocument,
    TemplateKind,
    VhostsEntry,
)
from xtools_common.models.site import (
    AppType,
    ResolvedSite,
    SiteDefinition,
    SiteValidation,
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
    "derive_server_name",
]
