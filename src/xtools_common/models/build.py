"""Build manifest and result models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from xtools_common.models.site import SiteValidation


class TemplateKind(str, Enum):
    STANDARD = "standard"
    HOSTS = "hosts"


class ManifestEntry(BaseModel):
    """Maps one template (relative to the templates dir) to its output path."""

    source: str
    output: str
    kind: TemplateKind = TemplateKind.STANDARD


class VhostsEntry(BaseModel):
    blocks: str
    output: str


class BuildManifest(BaseModel):
    templates: list[ManifestEntry] = Field(default_factory=list)
    vhosts: VhostsEntry | None = None


class TemplateDocument(BaseModel):
    source_path: Path
    output_path: Path
    text: str
    kind: TemplateKind = TemplateKind.STANDARD


class RenderResult(BaseModel):
    text: str
    unresolved: list[str] = Field(default_factory=list)


class ComposeResult(BaseModel):
    text: str
    generated: int = 0
    skipped: list[SiteValidation] = Field(default_factory=list)
    unresolved: list[str] = Field(default_factory=list)


class BuildResult(BaseModel):
    """Outcome for a single output file."""

    path: Path
    success: bool = True
    error: str | None = None
    unresolved: list[str] = Field(default_factory=list)
    skipped_sites: list[str] = Field(default_factory=list)


class BuildSummary(BaseModel):
    built: int = 0
    failed: int = 0
    skipped_sites: int = 0
    warnings: int = 0
