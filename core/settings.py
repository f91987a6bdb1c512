from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from .paths import DEFAULT_IDE_DIR, get_default_settings_paths, get_macros_path

__all__ = [
    "DEFAULT_SETTINGS",
    "RunConfig",
    "SETTINGS_VERSION",
    "build_run_config",
    "load_settings",
    "merge_defaults",
    "save_settings",
]

LOGGER = logging.getLogger("xcheader.settings")

SETTINGS_VERSION = 1


DEFAULT_SETTINGS: Dict[str, Any] = {
    "version": SETTINGS_VERSION,
    "template": "corporate",
    "directory": str(DEFAULT_IDE_DIR),
    "extension": ".swift",
    "header": None,
    "open_macros_after_install": True,
    "retention": {
        "max_age_days": 30,
    },
}


def merge_defaults(data: Dict[str, Any]) -> Dict[str, Any]:
    def _merge(default: Dict[str, Any], payload: Dict[str, Any]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in default.items():
            if isinstance(value, dict):
                current = payload.get(key)
                if isinstance(current, dict):
                    result[key] = _merge(value, current)
                else:
                    result[key] = _merge(value, {})
            elif isinstance(value, list):
                current = payload.get(key)
                result[key] = list(current) if isinstance(current, list) else list(value)
            else:
                result[key] = payload.get(key, value)
        for key, value in payload.items():
            if key not in result:
                result[key] = value
        return result

    return _merge(DEFAULT_SETTINGS, data or {})


def _apply_migrations(settings: Dict[str, Any]) -> Dict[str, Any]:
    version = settings.get("version")
    try:
        version_int = int(version)
    except (TypeError, ValueError):
        version_int = 0
    if version_int < SETTINGS_VERSION:
        settings["version"] = SETTINGS_VERSION
    return settings


def _candidate_paths(backup_root: Path, explicit: Optional[Path]) -> Iterable[Path]:
    if explicit is not None:
        yield explicit
    yield from get_default_settings_paths(backup_root)


def load_settings(backup_root: Path, config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the first readable settings file and merge it over the defaults."""

    data: Dict[str, Any] = {}
    for candidate in _candidate_paths(backup_root, config_path):
        try:
            with open(candidate, "r", encoding="utf-8") as handle:
                loaded = json.load(handle)
        except FileNotFoundError:
            continue
        except json.JSONDecodeError as exc:
            LOGGER.warning("Ignoring invalid settings file %s: %s", candidate, exc)
            continue
        except OSError:
            continue
        if isinstance(loaded, dict):
            data = loaded
            LOGGER.debug("Loaded settings from %s", candidate)
            break
    return _apply_migrations(merge_defaults(data))


def save_settings(settings: Dict[str, Any], path: Path) -> None:
    merged = _apply_migrations(merge_defaults(dict(settings)))
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(merged, handle, ensure_ascii=False, indent=2)


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Immutable per-invocation configuration handed to every component."""

    directory: Path
    backup_root: Path
    macros_path: Path
    template_id: str = "corporate"
    custom_header: Optional[str] = None
    extension: str = ".swift"
    dry_run: bool = False
    max_age_days: int = 30
    open_macros: bool = False


def _retention_days(value: Any) -> int:
    default = DEFAULT_SETTINGS["retention"]["max_age_days"]
    try:
        days = int(value)
    except (TypeError, ValueError):
        LOGGER.warning("Ignoring invalid retention age %r; using %d days", value, default)
        return default
    if days < 0:
        LOGGER.warning("Ignoring negative retention age %d; using %d days", days, default)
        return default
    return days


def build_run_config(
    settings: Dict[str, Any],
    *,
    backup_root: Path,
    directory: Optional[Path] = None,
    template_id: Optional[str] = None,
    dry_run: bool = False,
    max_age_days: Optional[int] = None,
    macros_path: Optional[Path] = None,
) -> RunConfig:
    """Combine parsed arguments with loaded settings; arguments win."""

    retention = settings.get("retention") if isinstance(settings.get("retention"), dict) else {}
    age = max_age_days if max_age_days is not None else retention.get("max_age_days", 30)
    header = settings.get("header")
    return RunConfig(
        directory=Path(directory or settings.get("directory") or DEFAULT_IDE_DIR),
        backup_root=backup_root,
        macros_path=macros_path or get_macros_path(),
        template_id=str(template_id or settings.get("template") or "corporate"),
        custom_header=header if isinstance(header, str) and header.strip() else None,
        extension=str(settings.get("extension") or ".swift"),
        dry_run=bool(dry_run),
        max_age_days=_retention_days(age),
        open_macros=bool(settings.get("open_macros_after_install")) and not dry_run,
    )
