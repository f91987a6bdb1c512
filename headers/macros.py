"""Regenerate IDETemplateMacros.plist, keeping a copy of the previous one."""
from __future__ import annotations

import logging
import plistlib
import shutil
import subprocess
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from backup.create import TIMESTAMP_FORMAT
from core.errors import CustomizerError, PermissionDenied

LOGGER = logging.getLogger("xcheader.macros")

MACRO_KEY = "FILEHEADER"


@dataclass(slots=True)
class MacrosResult:
    path: Path
    previous_copy: Optional[Path] = None
    written: bool = False


def render_macros(header_text: str) -> bytes:
    return plistlib.dumps({MACRO_KEY: header_text}, fmt=plistlib.FMT_XML)


def read_macros(path: Path) -> Optional[str]:
    """Return the FILEHEADER entry of an existing macros file, if any."""

    try:
        with path.open("rb") as handle:
            data = plistlib.load(handle)
    except (OSError, plistlib.InvalidFileException, ValueError):
        return None
    value = data.get(MACRO_KEY) if isinstance(data, dict) else None
    return value if isinstance(value, str) else None


def _copy_previous(path: Path, backup_root: Path, now: datetime) -> Path:
    backup_root.mkdir(parents=True, exist_ok=True)
    dest = backup_root / f"{path.stem}_{now.strftime(TIMESTAMP_FORMAT)}{path.suffix}"
    shutil.copy2(path, dest)
    return dest


def write_macros_file(
    path: Path,
    header_text: str,
    *,
    backup_root: Path,
    dry_run: bool = False,
    now: Optional[datetime] = None,
) -> MacrosResult:
    result = MacrosResult(path=path)
    if dry_run:
        LOGGER.info("DRY RUN: Would create/update %s", path.name)
        return result

    moment = now or datetime.now()
    try:
        if path.is_file():
            result.previous_copy = _copy_previous(path, backup_root, moment)
            LOGGER.info("Backed up existing %s to %s", path.name, result.previous_copy)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(render_macros(header_text))
    except PermissionError as exc:
        raise PermissionDenied(f"Cannot update {path}: {exc}") from exc
    except OSError as exc:
        raise CustomizerError(f"Cannot update {path}: {exc}") from exc
    result.written = True
    LOGGER.info("Wrote %s", path)
    return result


def reveal(path: Path) -> None:
    """Open the macros file for review when running on macOS."""

    if sys.platform != "darwin" or not shutil.which("open"):
        return
    try:
        subprocess.run(["open", str(path)], check=False)
    except OSError as exc:
        LOGGER.debug("Could not open %s: %s", path, exc)


__all__ = ["MACRO_KEY", "MacrosResult", "read_macros", "render_macros", "reveal", "write_macros_file"]
