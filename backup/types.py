"""Common records shared across backup modules."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class BackupManifest(BaseModel):
    """Provenance record stored as ``manifest.json`` inside every backup."""

    timestamp: str = Field(..., description="Creation time in ISO8601 with second precision.")
    template_type: str = Field(..., description="Header template identifier selected for the run.")
    original_directory: str = Field(..., description="Absolute path of the IDE directory that was modified.")
    script_version: str = Field(..., description="Version of the tool that wrote the manifest.")
    modified_files: List[str] = Field(
        default_factory=list,
        description="Absolute paths of files backed up and processed, in processing order.",
    )


@dataclass(slots=True)
class BackupSet:
    """Handle to one timestamped backup directory."""

    backup_id: str
    directory: Path
    root_dir: Path
    created_at: str
    files: List[Path] = field(default_factory=list)

    @property
    def manifest_path(self) -> Path:
        return self.directory / "manifest.json"


@dataclass(slots=True)
class BackupSummary:
    id: str
    path: Path
    has_manifest: bool
    file_count: int
    timestamp: Optional[str] = None
    template_type: Optional[str] = None
    original_directory: Optional[str] = None


@dataclass(slots=True)
class FileFailure:
    path: str
    error: str


@dataclass(slots=True)
class RestoreResult:
    backup_id: str
    original_directory: Path
    restored: List[str] = field(default_factory=list)
    failed: List[FileFailure] = field(default_factory=list)
    planned: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass(slots=True)
class RetentionSummary:
    removed: List[str] = field(default_factory=list)
    kept: List[str] = field(default_factory=list)
    candidates: List[str] = field(default_factory=list)
    failed: List[FileFailure] = field(default_factory=list)


__all__ = [
    "BackupManifest",
    "BackupSet",
    "BackupSummary",
    "FileFailure",
    "RestoreResult",
    "RetentionSummary",
]
