"""Error hierarchy for backup operations."""
from __future__ import annotations

from core.errors import CustomizerError


class BackupError(CustomizerError):
    """Base exception for backup related failures."""


class ManifestMissing(BackupError):
    """Raised when a backup directory has no manifest and cannot be trusted."""


class ManifestUnreadable(BackupError):
    """Raised when a manifest exists but cannot be parsed or validated."""


class BackupRestoreError(BackupError):
    """Raised when restoring a snapshot cannot start."""


__all__ = ["BackupError", "BackupRestoreError", "ManifestMissing", "ManifestUnreadable"]
