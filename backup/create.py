"""Create backup sets before any template file is touched."""
from __future__ import annotations

import shutil
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from core import __version__ as APP_VERSION
from core.errors import PartialIOFailure, PermissionDenied

from .errors import BackupError
from .logs import BackupLogger
from .types import BackupManifest, BackupSet

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
MANIFEST_NAME = "manifest.json"


def _now() -> datetime:
    return datetime.now().astimezone()


def backup_dir_name(root_dir: Path, now: datetime) -> str:
    return f"{Path(root_dir).name}_{now.strftime(TIMESTAMP_FORMAT)}"


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def create_backup(
    root_dir: Path,
    *,
    backup_root: Path,
    logger: BackupLogger,
    now: Optional[datetime] = None,
) -> BackupSet:
    """Create an empty, uniquely named backup directory for *root_dir*.

    Two runs within the same second collide; the second one fails with
    ``BackupError`` instead of sharing a directory.
    """
    moment = now or _now()
    backup_id = backup_dir_name(root_dir, moment)
    directory = backup_root / backup_id
    try:
        backup_root.mkdir(parents=True, exist_ok=True)
        directory.mkdir(exist_ok=False)
    except FileExistsError as exc:
        logger.error("backup_collision", id=backup_id)
        raise BackupError(f"Backup directory already exists: {directory}") from exc
    except PermissionError as exc:
        raise PermissionDenied(f"Cannot create backup directory {directory}: {exc}") from exc
    except OSError as exc:
        raise BackupError(f"Cannot create backup directory {directory}: {exc}") from exc

    logger.event(event="backup_start", phase="create", ok=True, id=backup_id, root=str(root_dir))
    return BackupSet(
        backup_id=backup_id,
        directory=directory,
        root_dir=Path(root_dir),
        created_at=moment.isoformat(timespec="seconds"),
    )


def copy_into_backup(backup_set: BackupSet, file_path: Path, root_dir: Path, *, logger: BackupLogger) -> Path:
    """Copy *file_path* into the backup, mirroring its location under *root_dir*."""

    source = Path(file_path)
    try:
        relative = source.relative_to(root_dir)
    except ValueError as exc:
        raise BackupError(f"{source} is not inside {root_dir}") from exc
    dest = backup_set.directory / relative
    try:
        _ensure_parent(dest)
        shutil.copy2(source, dest)
        if dest.stat().st_size != source.stat().st_size:
            raise OSError(f"size mismatch after copy: {dest}")
    except OSError as exc:
        # a partial copy would later be restored over the untouched original
        try:
            dest.unlink(missing_ok=True)
        except OSError as cleanup_exc:
            logger.error("copy_cleanup_failed", dest=str(dest), error=str(cleanup_exc))
        logger.error("copy_failed", source=str(source), dest=str(dest), error=str(exc))
        raise PartialIOFailure(f"Could not back up {source}: {exc}", failures=[str(source)]) from exc
    backup_set.files.append(source)
    logger.info("copy_file", source=str(source), dest=str(dest), size=dest.stat().st_size)
    return dest


def write_manifest(
    backup_set: BackupSet,
    template_id: str,
    root_dir: Path,
    modified_files: Iterable[Path],
    *,
    logger: BackupLogger,
) -> BackupManifest:
    manifest = BackupManifest(
        timestamp=backup_set.created_at,
        template_type=template_id,
        original_directory=str(Path(root_dir).resolve()),
        script_version=APP_VERSION,
        modified_files=[str(path) for path in modified_files],
    )
    try:
        backup_set.manifest_path.write_text(manifest.model_dump_json(indent=4) + "\n", encoding="utf-8")
    except OSError as exc:
        raise BackupError(f"Cannot write manifest {backup_set.manifest_path}: {exc}") from exc
    logger.event(
        event="backup_complete",
        phase="create",
        ok=True,
        id=backup_set.backup_id,
        files=len(manifest.modified_files),
    )
    return manifest


__all__ = [
    "MANIFEST_NAME",
    "TIMESTAMP_FORMAT",
    "backup_dir_name",
    "copy_into_backup",
    "create_backup",
    "write_manifest",
]
