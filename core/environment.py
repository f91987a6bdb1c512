"""Precondition checks run before anything on disk is touched."""
from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Callable, Optional

from .errors import EnvironmentUnsupported, PathNotFound, PermissionDenied
from .paths import is_writable_dir

LOGGER = logging.getLogger("xcheader.environment")

_EXPECTED_SUBFOLDERS = ("Platforms", "Templates")
_SYSTEM_PREFIX = "/Applications"


def validate_environment(
    *,
    platform: Optional[str] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> None:
    LOGGER.info("Validating environment...")
    current = platform or sys.platform
    if current != "darwin":
        raise EnvironmentUnsupported("This tool is designed for macOS only")
    if not which("xcodebuild"):
        raise EnvironmentUnsupported("Xcode is not installed or not in PATH")


def validate_ide_directory(directory: Path) -> None:
    if not directory.is_dir():
        raise PathNotFound(f"Directory does not exist: {directory}")
    if not any((directory / name).is_dir() for name in _EXPECTED_SUBFOLDERS):
        LOGGER.warning("Directory doesn't appear to contain Xcode templates, continuing anyway...")


def check_permissions(directory: Path, *, dry_run: bool = False) -> None:
    if dry_run:
        LOGGER.info("DRY RUN: Skipping permission check")
        return
    if not is_writable_dir(directory):
        raise PermissionDenied(f"Insufficient permissions to modify {directory}. Please run with sudo.")
    LOGGER.info("Permission check passed")


def check_privileges(directory: Path, *, euid: Optional[int] = None) -> None:
    """Installing into the system Xcode bundle requires root."""

    if not str(directory).startswith(_SYSTEM_PREFIX):
        return
    if euid is None:
        geteuid = getattr(os, "geteuid", None)
        if geteuid is None:
            return
        euid = geteuid()
    if euid != 0:
        raise PermissionDenied("Installation to system Xcode directory requires sudo privileges")


__all__ = [
    "check_permissions",
    "check_privileges",
    "validate_environment",
    "validate_ide_directory",
]
