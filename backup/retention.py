"""Retention sweep for old backup sets."""
from __future__ import annotations

import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .logs import BackupLogger
from .store import iter_backup_dirs
from .types import FileFailure, RetentionSummary

_SECONDS_PER_DAY = 86400


@dataclass(slots=True)
class RetentionPolicy:
    max_age_days: int = 30


def _age_days(path: Path, now: float) -> float:
    return (now - path.stat().st_mtime) / _SECONDS_PER_DAY


def sweep(
    backup_root: Path,
    policy: RetentionPolicy,
    *,
    logger: BackupLogger,
    dry_run: bool = False,
    now: Optional[float] = None,
) -> RetentionSummary:
    """Delete backup directories whose modification time is older than the policy allows."""

    current = time.time() if now is None else now
    summary = RetentionSummary()
    for directory in iter_backup_dirs(backup_root):
        try:
            age = _age_days(directory, current)
        except OSError as exc:
            summary.failed.append(FileFailure(path=str(directory), error=str(exc)))
            continue
        if age <= policy.max_age_days:
            summary.kept.append(directory.name)
            continue
        summary.candidates.append(directory.name)
        if dry_run:
            logger.info("backup_expired", id=directory.name, age_days=round(age, 1), dry_run=True)
            continue
        try:
            shutil.rmtree(directory)
        except OSError as exc:
            summary.failed.append(FileFailure(path=str(directory), error=str(exc)))
            logger.error("backup_remove_failed", id=directory.name, error=str(exc))
            continue
        summary.removed.append(directory.name)
        logger.warning("backup_removed", id=directory.name, reason="retention")

    logger.event(
        event="retention_applied",
        phase="retention",
        ok=not summary.failed,
        removed=len(summary.removed),
        kept=len(summary.kept),
        dry_run=dry_run,
    )
    return summary


__all__ = ["RetentionPolicy", "sweep"]
