from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .errors import PermissionDenied

__all__ = [
    "DEFAULT_IDE_DIR",
    "ensure_backup_root",
    "get_backup_log_path",
    "get_default_settings_paths",
    "get_install_log_path",
    "get_macros_path",
    "is_writable_dir",
    "resolve_backup_root",
]

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_HOME_ENV = "XCHEADER_HOME"
_BACKUP_DIR_NAME = "xctemplates_backup"
_SETTINGS_FILENAME = "header_config.json"
_MACROS_RELATIVE = Path("Library") / "Developer" / "Xcode" / "UserData" / "IDETemplateMacros.plist"

DEFAULT_IDE_DIR = Path("/Applications/Xcode.app/Contents/Developer")


def _expand_path(value: str) -> Path:
    expanded = os.path.expandvars(os.path.expanduser(value))
    return Path(expanded).resolve()


def is_writable_dir(path: Path) -> bool:
    """Return True if a scratch file can be created and removed inside *path*."""

    test_file = path / f".permission_test_{os.getpid()}"
    try:
        with open(test_file, "w", encoding="utf-8") as handle:
            handle.write("ok")
        test_file.unlink(missing_ok=True)
        return True
    except OSError:
        try:
            if test_file.exists():
                test_file.unlink()
        except OSError:  # pragma: no cover - cleanup only
            pass
        return False


def resolve_backup_root(override: Optional[str | os.PathLike[str]] = None) -> Path:
    """Return the backup store root without creating it."""

    if override:
        return _expand_path(str(override))
    env_home = os.environ.get(_HOME_ENV)
    if env_home:
        return _expand_path(env_home)
    return Path.home() / _BACKUP_DIR_NAME


def ensure_backup_root(backup_root: Path) -> Path:
    try:
        backup_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PermissionDenied(f"Cannot create backup location {backup_root}: {exc}") from exc
    if not os.access(backup_root, os.W_OK):
        raise PermissionDenied(f"Backup location is not writable: {backup_root}")
    return backup_root


def get_macros_path(home: Optional[Path] = None) -> Path:
    return (home or Path.home()) / _MACROS_RELATIVE


def get_install_log_path(backup_root: Path) -> Path:
    return backup_root / "install.log.jsonl"


def get_backup_log_path(backup_root: Path) -> Path:
    return backup_root / "backup.jsonl"


def get_default_settings_paths(backup_root: Path) -> list[Path]:
    """Return the search order for header_config.json files."""

    return [backup_root / _SETTINGS_FILENAME, _PROJECT_ROOT / _SETTINGS_FILENAME]
