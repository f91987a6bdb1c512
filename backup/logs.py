"""JSONL journal of backup, restore and retention activity.

Every entry is one JSON object per line in ``<backup_root>/backup.jsonl``
and is mirrored to the ``xcheader.backup`` logger. Dry runs build a
journal with ``persist=False`` so nothing is written under the store.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from core.paths import get_backup_log_path

LOGGER = logging.getLogger("xcheader.backup")

# severity -> (logging level, value of the "ok" field)
_SEVERITY = {
    "info": (logging.INFO, True),
    "warning": (logging.WARNING, False),
    "error": (logging.ERROR, False),
}


class BackupLogger:
    """Append-only journal for one backup store."""

    def __init__(self, backup_root: Path, *, persist: bool = True) -> None:
        self.path = get_backup_log_path(Path(backup_root))
        self.persist = persist

    def _append(self, line: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except OSError as exc:
            # the journal is advisory; the operation itself carries on
            LOGGER.debug("cannot append to %s: %s", self.path, exc)

    def _record(self, entry: Dict[str, Any], level: int) -> None:
        entry = {"ts": datetime.now(timezone.utc).isoformat(), **entry}
        line = json.dumps(entry, sort_keys=True, default=str)
        if self.persist:
            self._append(line)
        LOGGER.log(level, "%s", line)

    def _at(self, severity: str, event: str, extra: Dict[str, Any]) -> None:
        level, ok = _SEVERITY[severity]
        self._record({**extra, "event": event, "ok": ok}, level)

    def event(self, *, event: str, phase: str, ok: bool, **extra: Any) -> None:
        """Milestone of an operation, e.g. ``backup_start`` in phase ``create``."""

        self._record({**extra, "event": event, "phase": phase, "ok": bool(ok)}, logging.INFO if ok else logging.ERROR)

    def info(self, event: str, **extra: Any) -> None:
        self._at("info", event, extra)

    def warning(self, event: str, **extra: Any) -> None:
        self._at("warning", event, extra)

    def error(self, event: str, **extra: Any) -> None:
        self._at("error", event, extra)


__all__ = ["BackupLogger"]
