"""Enumerate the backup sets kept under the backup root."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, List, Optional

from pydantic import ValidationError

from core.errors import PathNotFound

from .create import MANIFEST_NAME
from .types import BackupManifest, BackupSummary

BACKUP_NAME_PATTERN = re.compile(r"^.+_\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}$")


def is_backup_name(name: str) -> bool:
    return bool(BACKUP_NAME_PATTERN.match(name))


def iter_backup_dirs(backup_root: Path) -> Iterator[Path]:
    """Yield top-level backup directories in ascending name order."""

    if not backup_root.is_dir():
        return
    for child in sorted(backup_root.iterdir(), key=lambda item: item.name):
        if child.is_dir() and is_backup_name(child.name):
            yield child


def _peek_manifest(path: Path) -> Optional[BackupManifest]:
    try:
        return BackupManifest.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, ValidationError):
        return None


def _summarize(directory: Path) -> BackupSummary:
    manifest_path = directory / MANIFEST_NAME
    manifest = _peek_manifest(manifest_path) if manifest_path.is_file() else None
    file_count = sum(1 for item in directory.rglob("*") if item.is_file() and item.name != MANIFEST_NAME)
    return BackupSummary(
        id=directory.name,
        path=directory,
        has_manifest=manifest_path.is_file(),
        file_count=file_count,
        timestamp=manifest.timestamp if manifest else None,
        template_type=manifest.template_type if manifest else None,
        original_directory=manifest.original_directory if manifest else None,
    )


def list_backups(backup_root: Path) -> List[BackupSummary]:
    return [_summarize(directory) for directory in iter_backup_dirs(backup_root)]


def resolve_backup(backup_root: Path, backup_id: str) -> Path:
    if not is_backup_name(backup_id) or Path(backup_id).name != backup_id:
        raise PathNotFound(f"Not a backup identifier: {backup_id}")
    directory = backup_root / backup_id
    if not directory.is_dir():
        raise PathNotFound(f"Backup {backup_id} not found at {directory}")
    return directory


__all__ = ["BACKUP_NAME_PATTERN", "is_backup_name", "iter_backup_dirs", "list_backups", "resolve_backup"]
