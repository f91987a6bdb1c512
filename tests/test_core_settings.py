"""Tests for core.settings helpers."""

from __future__ import annotations

import json
from pathlib import Path

from core.settings import build_run_config, load_settings, merge_defaults, save_settings


def test_merge_defaults_fills_retention_block() -> None:
    merged = merge_defaults({"retention": {}, "extra": 1})

    assert merged["template"] == "corporate"
    assert merged["extension"] == ".swift"
    assert merged["retention"]["max_age_days"] == 30
    assert merged["extra"] == 1


def test_load_settings_prefers_explicit_config(tmp_path: Path) -> None:
    backup_root = tmp_path / "backups"
    backup_root.mkdir()
    (backup_root / "header_config.json").write_text(json.dumps({"template": "minimal"}), encoding="utf-8")
    explicit = tmp_path / "custom.json"
    explicit.write_text(json.dumps({"template": "custom", "header": "// hi"}), encoding="utf-8")

    assert load_settings(backup_root)["template"] == "minimal"
    loaded = load_settings(backup_root, explicit)
    assert loaded["template"] == "custom"
    assert loaded["header"] == "// hi"


def test_invalid_settings_file_is_skipped(tmp_path: Path) -> None:
    backup_root = tmp_path / "backups"
    backup_root.mkdir()
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    loaded = load_settings(backup_root, broken)

    assert loaded["template"] == "corporate"
    assert loaded["version"] == 1


def test_save_settings_round_trip(tmp_path: Path) -> None:
    target = tmp_path / "backups" / "header_config.json"
    save_settings({"retention": {"max_age_days": 7}}, target)

    saved = json.loads(target.read_text(encoding="utf-8"))
    assert saved["retention"]["max_age_days"] == 7
    assert saved["template"] == "corporate"


def test_build_run_config_arguments_win(tmp_path: Path) -> None:
    settings = merge_defaults({"template": "minimal", "header": "  ", "retention": {"max_age_days": 10}})

    config = build_run_config(
        settings,
        backup_root=tmp_path,
        directory=tmp_path / "Developer",
        template_id="opensource",
        dry_run=True,
        macros_path=tmp_path / "macros.plist",
    )

    assert config.template_id == "opensource"
    assert config.directory == tmp_path / "Developer"
    assert config.max_age_days == 10
    assert config.custom_header is None
    assert config.dry_run is True
    assert config.open_macros is False

    older = build_run_config(settings, backup_root=tmp_path, max_age_days=3, macros_path=tmp_path / "m.plist")
    assert older.template_id == "minimal"
    assert older.max_age_days == 3


def test_build_run_config_falls_back_on_bad_retention_age(tmp_path: Path) -> None:
    for bad in ("thirty", None, [7], -5):
        settings = merge_defaults({"retention": {"max_age_days": bad}})

        config = build_run_config(settings, backup_root=tmp_path, macros_path=tmp_path / "m.plist")

        assert config.max_age_days == 30


def test_build_run_config_accepts_numeric_string_age(tmp_path: Path) -> None:
    settings = merge_defaults({"retention": {"max_age_days": "12"}})

    config = build_run_config(settings, backup_root=tmp_path, macros_path=tmp_path / "m.plist")

    assert config.max_age_days == 12
