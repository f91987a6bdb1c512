"""Backup, restore, and retention for template header edits."""
from __future__ import annotations

from .api import BackupService
from .errors import BackupError, ManifestMissing, ManifestUnreadable
from .retention import RetentionPolicy
from .types import BackupManifest, BackupSet, BackupSummary, RestoreResult, RetentionSummary

__all__ = [
    "BackupError",
    "BackupManifest",
    "BackupService",
    "BackupSet",
    "BackupSummary",
    "ManifestMissing",
    "ManifestUnreadable",
    "RestoreResult",
    "RetentionPolicy",
    "RetentionSummary",
]
