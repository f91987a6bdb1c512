"""Public API for backup operations."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from .create import copy_into_backup, create_backup, write_manifest
from .logs import BackupLogger
from .restore import load_manifest, restore_backup
from .retention import RetentionPolicy, sweep
from .store import list_backups, resolve_backup
from .types import BackupManifest, BackupSet, BackupSummary, RestoreResult, RetentionSummary


class BackupService:
    """Coordinate backup creation, restore, and retention under one backup root."""

    def __init__(self, backup_root: Path, *, logger: Optional[BackupLogger] = None) -> None:
        self._backup_root = Path(backup_root)
        self._logger = logger or BackupLogger(self._backup_root)

    # ------------------------------------------------------------------
    @property
    def backup_root(self) -> Path:
        return self._backup_root

    @property
    def logger(self) -> BackupLogger:
        return self._logger

    # ------------------------------------------------------------------
    def create(self, root_dir: Path, *, now: Optional[datetime] = None) -> BackupSet:
        return create_backup(root_dir, backup_root=self._backup_root, logger=self._logger, now=now)

    def copy(self, backup_set: BackupSet, file_path: Path, root_dir: Path) -> Path:
        return copy_into_backup(backup_set, file_path, root_dir, logger=self._logger)

    def write_manifest(
        self,
        backup_set: BackupSet,
        template_id: str,
        root_dir: Path,
        modified_files: Iterable[Path],
    ) -> BackupManifest:
        return write_manifest(backup_set, template_id, root_dir, modified_files, logger=self._logger)

    # ------------------------------------------------------------------
    def list_backups(self) -> List[BackupSummary]:
        return list_backups(self._backup_root)

    def manifest(self, backup_id: str) -> BackupManifest:
        return load_manifest(resolve_backup(self._backup_root, backup_id))

    # ------------------------------------------------------------------
    def restore(self, backup_id: str, *, extension: str = ".swift", dry_run: bool = False) -> RestoreResult:
        return restore_backup(
            self._backup_root,
            backup_id,
            logger=self._logger,
            extension=extension,
            dry_run=dry_run,
        )

    # ------------------------------------------------------------------
    def sweep(self, max_age_days: int, *, dry_run: bool = False, now: Optional[float] = None) -> RetentionSummary:
        policy = RetentionPolicy(max_age_days=max_age_days)
        return sweep(self._backup_root, policy, logger=self._logger, dry_run=dry_run, now=now)


__all__ = ["BackupService"]
