from pathlib import Path

import pytest

from core.environment import (
    check_permissions,
    check_privileges,
    validate_environment,
    validate_ide_directory,
)
from core.errors import EnvironmentUnsupported, PathNotFound, PermissionDenied
from core.paths import ensure_backup_root


def test_validate_environment_requires_macos():
    with pytest.raises(EnvironmentUnsupported):
        validate_environment(platform="linux", which=lambda name: "/usr/bin/" + name)


def test_validate_environment_requires_xcodebuild():
    with pytest.raises(EnvironmentUnsupported):
        validate_environment(platform="darwin", which=lambda name: None)
    validate_environment(platform="darwin", which=lambda name: "/usr/bin/xcodebuild")


def test_validate_ide_directory(tmp_path):
    with pytest.raises(PathNotFound):
        validate_ide_directory(tmp_path / "missing")
    (tmp_path / "Templates").mkdir()
    validate_ide_directory(tmp_path)


def test_check_permissions(tmp_path, monkeypatch):
    check_permissions(tmp_path)
    assert list(tmp_path.iterdir()) == []

    monkeypatch.setattr("core.environment.is_writable_dir", lambda path: False)
    with pytest.raises(PermissionDenied):
        check_permissions(tmp_path)
    check_permissions(tmp_path, dry_run=True)


def test_check_privileges(tmp_path):
    with pytest.raises(PermissionDenied):
        check_privileges(Path("/Applications/Xcode.app/Contents/Developer"), euid=501)
    check_privileges(Path("/Applications/Xcode.app/Contents/Developer"), euid=0)
    check_privileges(tmp_path, euid=501)


def test_ensure_backup_root_creates_missing_store(tmp_path):
    target = tmp_path / "nested" / "backups"

    assert ensure_backup_root(target) == target
    assert target.is_dir()


def test_ensure_backup_root_under_a_file_is_permission_denied(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(PermissionDenied):
        ensure_backup_root(blocker / "backups")
