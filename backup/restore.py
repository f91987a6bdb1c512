"""Restore template files from a recorded backup set."""
from __future__ import annotations

import shutil
from pathlib import Path

from pydantic import ValidationError

from .create import MANIFEST_NAME
from .errors import ManifestMissing, ManifestUnreadable
from .logs import BackupLogger
from .store import resolve_backup
from .types import BackupManifest, FileFailure, RestoreResult


def load_manifest(backup_dir: Path) -> BackupManifest:
    path = backup_dir / MANIFEST_NAME
    if not path.is_file():
        raise ManifestMissing("Backup manifest not found. Cannot safely restore.")
    try:
        return BackupManifest.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, ValidationError) as exc:
        raise ManifestUnreadable(f"Backup manifest at {path} is unreadable: {exc}") from exc


def restore_backup(
    backup_root: Path,
    backup_id: str,
    *,
    logger: BackupLogger,
    extension: str = ".swift",
    dry_run: bool = False,
) -> RestoreResult:
    """Overwrite each backed-up file at its original location.

    The original tree must still exist: missing parent directories are
    reported as failures rather than created. One failed file never stops
    the remaining ones.
    """
    base = resolve_backup(backup_root, backup_id)
    manifest = load_manifest(base)
    original_dir = Path(manifest.original_directory)
    result = RestoreResult(backup_id=backup_id, original_directory=original_dir)

    logger.event(event="restore_start", phase="restore", ok=True, id=backup_id, target=str(original_dir))
    for source in sorted(base.rglob(f"*{extension}")):
        if not source.is_file():
            continue
        relative = source.relative_to(base)
        target = original_dir / relative
        if dry_run:
            result.planned.append(str(target))
            logger.info("restore_planned", path=str(target))
            continue
        if not target.parent.is_dir():
            failure = FileFailure(path=str(target), error="destination directory missing")
            result.failed.append(failure)
            logger.error("restore_failed", path=str(target), error=failure.error)
            continue
        try:
            shutil.copy2(source, target)
        except OSError as exc:
            result.failed.append(FileFailure(path=str(target), error=str(exc)))
            logger.error("restore_failed", path=str(target), error=str(exc))
            continue
        result.restored.append(str(target))
        logger.info("restore_copy", path=str(target))

    logger.event(
        event="backup_restored",
        phase="restore",
        ok=result.ok,
        id=backup_id,
        restored=len(result.restored),
        failed=len(result.failed),
    )
    return result


__all__ = ["load_manifest", "restore_backup"]
