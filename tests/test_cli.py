import json
import os
from pathlib import Path

import pytest

import header_customizer
from core.errors import EnvironmentUnsupported


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.setattr(header_customizer, "validate_environment", lambda: None)
    monkeypatch.setattr(header_customizer, "reveal", lambda path: None)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    root = tmp_path / "Developer"
    (root / "Templates" / "File.xctemplate").mkdir(parents=True)
    (root / "Templates" / "File.xctemplate" / "Main.swift").write_bytes(b"//___FILEHEADER___\n\nimport Foundation\n")
    return root, tmp_path / "backups"


def _args(root: Path, backup_root: Path, *extra: str) -> list:
    return [*extra, "--directory", str(root), "--backup-root", str(backup_root), "--template", "minimal"]


def _no_input(prompt: str) -> str:  # pragma: no cover - should not be reached
    raise AssertionError(f"unexpected prompt: {prompt}")


def test_install_list_and_rollback(workspace, capsys):
    root, backup_root = workspace
    target = root / "Templates" / "File.xctemplate" / "Main.swift"

    assert header_customizer.cli(_args(root, backup_root, "install", "--yes"), input_fn=_no_input) == 0
    assert target.read_bytes() == b"___FILEHEADER___\n\nimport Foundation\n"

    backups = [p for p in backup_root.iterdir() if p.is_dir()]
    assert len(backups) == 1
    manifest = json.loads((backups[0] / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["modified_files"] == [str(target.resolve())]

    capsys.readouterr()
    assert header_customizer.cli(["list", "--backup-root", str(backup_root)], input_fn=_no_input) == 0
    assert backups[0].name in capsys.readouterr().out

    answers = iter(["1"])
    code = header_customizer.cli(["rollback", "--backup-root", str(backup_root)], input_fn=lambda prompt: next(answers))
    assert code == 0
    assert target.read_bytes() == b"//___FILEHEADER___\n\nimport Foundation\n"


def test_rollback_refuses_backup_without_manifest(workspace):
    root, backup_root = workspace
    target = root / "Templates" / "File.xctemplate" / "Main.swift"
    unsafe = backup_root / "Developer_2024-01-01_10-00-00" / "Templates" / "File.xctemplate"
    unsafe.mkdir(parents=True)
    (unsafe / "Main.swift").write_bytes(b"stale\n")

    code = header_customizer.cli(
        ["rollback", "--backup", "Developer_2024-01-01_10-00-00", "--backup-root", str(backup_root)],
        input_fn=_no_input,
    )

    assert code == 1
    assert target.read_bytes() == b"//___FILEHEADER___\n\nimport Foundation\n"


def test_list_without_backups_fails(workspace):
    _, backup_root = workspace
    assert header_customizer.cli(["list", "--backup-root", str(backup_root)], input_fn=_no_input) == 1


def test_preview_changes_nothing(workspace):
    root, backup_root = workspace
    target = root / "Templates" / "File.xctemplate" / "Main.swift"

    assert header_customizer.cli(_args(root, backup_root, "preview"), input_fn=_no_input) == 0

    assert target.read_bytes() == b"//___FILEHEADER___\n\nimport Foundation\n"
    assert not backup_root.exists()


def test_mixed_state_cancel(workspace):
    root, backup_root = workspace
    done = root / "Templates" / "Done.swift"
    done.write_bytes(b"___FILEHEADER___\n")

    code = header_customizer.cli(_args(root, backup_root, "install", "--yes"), input_fn=lambda prompt: "3")

    assert code == 1
    assert (root / "Templates" / "File.xctemplate" / "Main.swift").read_bytes().startswith(b"//")
    assert [p for p in backup_root.iterdir() if p.is_dir()] == []


def test_declined_confirmation(workspace):
    root, backup_root = workspace

    code = header_customizer.cli(_args(root, backup_root, "install"), input_fn=lambda prompt: "n")

    assert code == 1
    assert [p for p in backup_root.iterdir() if p.is_dir()] == []


def test_no_candidates_is_an_error(workspace):
    root, backup_root = workspace
    (root / "Templates" / "File.xctemplate" / "Main.swift").write_bytes(b"import UIKit\n")

    assert header_customizer.cli(_args(root, backup_root, "install", "--yes"), input_fn=_no_input) == 1


def test_clean_dry_run(workspace):
    _, backup_root = workspace
    old = backup_root / "Developer_2020-01-01_10-00-00"
    old.mkdir(parents=True)
    os.utime(old, (0, 0))

    assert header_customizer.cli(["clean", "--dry-run", "--backup-root", str(backup_root)], input_fn=_no_input) == 0
    assert old.exists()
    assert header_customizer.cli(
        ["clean", "--older-than", "30", "--backup-root", str(backup_root)], input_fn=_no_input
    ) == 0
    assert not old.exists()


def test_unsupported_environment_exits_one(tmp_path, monkeypatch):
    def refuse():
        raise EnvironmentUnsupported("This tool is designed for macOS only")

    monkeypatch.setattr(header_customizer, "validate_environment", refuse)

    assert header_customizer.cli(["list", "--backup-root", str(tmp_path / "b")], input_fn=_no_input) == 1


def test_uncreatable_backup_root_exits_one(workspace):
    root, _ = workspace
    blocker = root.parent / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    code = header_customizer.cli(_args(root, blocker / "backups", "install", "--yes"), input_fn=_no_input)

    assert code == 1
    assert (root / "Templates" / "File.xctemplate" / "Main.swift").read_bytes().startswith(b"//")


def test_clean_with_unreadable_retention_setting(workspace, tmp_path):
    _, backup_root = workspace
    config = tmp_path / "header_config.json"
    config.write_text(json.dumps({"retention": {"max_age_days": "thirty"}}), encoding="utf-8")
    recent = backup_root / "Developer_2020-01-01_10-00-00"
    recent.mkdir(parents=True)

    code = header_customizer.cli(
        ["clean", "--config", str(config), "--backup-root", str(backup_root)], input_fn=_no_input
    )

    assert code == 0
    assert recent.exists()
