#!/usr/bin/env python3
"""Xcode template header customizer.

Strips the ``//`` prefix from ``//___FILEHEADER___`` in Xcode's Swift file
templates, installs a FILEHEADER macro, and keeps restorable backups of
everything it touches.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from backup.api import BackupService
from backup.logs import BackupLogger
from backup.types import BackupSummary
from core import __version__
from core.environment import (
    check_permissions,
    check_privileges,
    validate_environment,
    validate_ide_directory,
)
from core.errors import CustomizerError, PartialIOFailure
from core.logging_utils import configure_logging
from core.paths import DEFAULT_IDE_DIR, ensure_backup_root, get_install_log_path, resolve_backup_root
from core.settings import RunConfig, build_run_config, load_settings
from headers.install import InstallResult, files_for_mode, plan_install, run_install
from headers.macros import reveal
from headers.plan import MODE_LABELS, ModeDecision, ProcessMode
from headers.templates import DEFAULT_TEMPLATE, TEMPLATE_DESCRIPTIONS, TEMPLATE_IDS, get_header_template

LOGGER = logging.getLogger("xcheader.cli")

COMMANDS = ("install", "rollback", "preview", "list", "clean")

InputFn = Callable[[str], str]


class CancelledByUser(CustomizerError):
    """Raised when the user declines a prompt."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xcheader",
        description="Enhanced Xcode Template Header Customizer",
    )
    parser.add_argument("command", nargs="?", choices=COMMANDS, default="install", help="Action to run")
    parser.add_argument("--dry-run", action="store_true", help="Show what would be done without making changes")
    parser.add_argument("--template", choices=TEMPLATE_IDS, default=None, help="Header template to install")
    parser.add_argument("--config", type=Path, default=None, help="Use a custom configuration file")
    parser.add_argument("--directory", type=Path, default=None, help="Xcode developer directory path")
    parser.add_argument("--older-than", type=int, default=None, metavar="DAYS", help="Age threshold for clean")
    parser.add_argument("--backup", default=None, metavar="ID", help="Backup to restore without prompting")
    parser.add_argument("--backup-root", type=Path, default=None, help="Override the backup store location")
    parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation before installing")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


# ----------------------------------------------------------------------
# prompts


def _ask_index(prompt: str, count: int, input_fn: InputFn) -> Optional[int]:
    raw = input_fn(prompt).strip()
    try:
        choice = int(raw)
    except ValueError:
        return None
    if 1 <= choice <= count:
        return choice - 1
    return None


def ask_template(input_fn: InputFn) -> str:
    print("Available header templates:")
    for index, template_id in enumerate(TEMPLATE_IDS, start=1):
        print(f"{index}. {TEMPLATE_DESCRIPTIONS[template_id]}")
    print()
    index = _ask_index(f"Select template [1-{len(TEMPLATE_IDS)}]: ", len(TEMPLATE_IDS), input_fn)
    selected = TEMPLATE_IDS[index] if index is not None else DEFAULT_TEMPLATE
    LOGGER.info("Selected template: %s", selected)
    return selected


def ask_mode(decision: ModeDecision, input_fn: InputFn) -> ProcessMode:
    print("What would you like to do?")
    for index, mode in enumerate(decision.choices, start=1):
        print(f"{index}. {MODE_LABELS[mode]}")
    print()
    index = _ask_index(f"Select option [1-{len(decision.choices)}]: ", len(decision.choices), input_fn)
    if index is None:
        raise CancelledByUser("Invalid choice. Operation cancelled.")
    return decision.choices[index]


def confirm(prompt: str, input_fn: InputFn) -> bool:
    return input_fn(prompt).strip().lower() in {"y", "yes"}


def ask_directory(default: Path, input_fn: InputFn) -> Path:
    raw = input_fn(f"Enter Xcode directory path [{default}]: ").strip()
    return Path(raw).expanduser() if raw else default


# ----------------------------------------------------------------------
# commands


def _print_backups(summaries: Sequence[BackupSummary]) -> None:
    for index, summary in enumerate(summaries, start=1):
        flag = "" if summary.has_manifest else "  (no manifest)"
        print(f"{index:2d}. {summary.id}{flag}")


def cmd_list(service: BackupService) -> int:
    LOGGER.info("Available backups:")
    summaries = service.list_backups()
    if not summaries:
        LOGGER.warning("No backups found")
        return 1
    _print_backups(summaries)
    return 0


def cmd_clean(service: BackupService, config: RunConfig) -> int:
    LOGGER.info("Cleaning backups older than %d days...", config.max_age_days)
    summary = service.sweep(config.max_age_days, dry_run=config.dry_run)
    if config.dry_run:
        for backup_id in summary.candidates:
            LOGGER.info("DRY RUN: Would remove %s", backup_id)
    else:
        for backup_id in summary.removed:
            LOGGER.info("Removed old backup: %s", backup_id)
        LOGGER.info("Cleaned %d old backups", len(summary.removed))
    if summary.failed:
        raise PartialIOFailure(
            f"{len(summary.failed)} backups could not be removed",
            failures=[failure.path for failure in summary.failed],
        )
    return 0


def cmd_rollback(service: BackupService, config: RunConfig, backup_id: Optional[str], input_fn: InputFn) -> int:
    if backup_id is None:
        if cmd_list(service) != 0:
            return 1
        summaries = service.list_backups()
        print()
        index = _ask_index("Enter backup number to restore: ", len(summaries), input_fn)
        if index is None:
            raise CustomizerError("Invalid backup number")
        backup_id = summaries[index].id

    LOGGER.info("Restoring from backup: %s", backup_id)
    result = service.restore(backup_id, extension=config.extension, dry_run=config.dry_run)
    if config.dry_run:
        LOGGER.info("DRY RUN: Would restore %d files to %s", len(result.planned), result.original_directory)
        return 0
    for path in result.restored:
        LOGGER.info("Restored: %s", path)
    if result.failed:
        for failure in result.failed:
            LOGGER.error("RESTORE FAILED: %s (%s)", failure.path, failure.error)
        raise PartialIOFailure(
            f"Restored {len(result.restored)} files, {len(result.failed)} failed",
            failures=[failure.path for failure in result.failed],
        )
    LOGGER.info("Rollback completed successfully (%d files restored)", len(result.restored))
    return 0


def _report_install(result: InstallResult) -> None:
    if result.dry_run:
        LOGGER.info("DRY RUN completed - no changes made (%d files would be processed)", len(result.planned))
        return
    LOGGER.info(
        "Installation completed: %d backed up, %d modified, %d failed",
        len(result.processed),
        len(result.mutated),
        len(result.failed),
    )
    if result.backup is not None:
        LOGGER.info("Backup stored at: %s", result.backup.directory)


def cmd_install(
    service: BackupService,
    config: RunConfig,
    *,
    assume_yes: bool,
    input_fn: InputFn,
) -> int:
    validate_ide_directory(config.directory)
    check_permissions(config.directory, dry_run=config.dry_run)

    plan = plan_install(config)
    mode = plan.decision.mode
    if mode is None:
        mode = ask_mode(plan.decision, input_fn)
    if mode is ProcessMode.CANCEL:
        LOGGER.info("Operation cancelled. Use 'rollback' to restore a previous state.")
        return 1

    selected = files_for_mode(plan, mode)
    print(f"Files that will be processed ({len(selected)} total):")
    for candidate in selected:
        print(f"  {candidate.path}")
    print()
    print("Header template preview:")
    for line in get_header_template(config.template_id, custom_header=config.custom_header).splitlines():
        print(f"  {line}")
    print()

    if not config.dry_run and not assume_yes:
        if not confirm("Proceed with installation? [y/N]: ", input_fn):
            LOGGER.info("Installation cancelled by user")
            return 1

    result = run_install(config, plan, mode, service=service)
    _report_install(result)
    if result.failed:
        raise PartialIOFailure(
            f"{len(result.failed)} files could not be processed",
            failures=[failure.path for failure in result.failed],
        )
    if config.open_macros and result.macros is not None and result.macros.written:
        reveal(result.macros.path)
    return 0


# ----------------------------------------------------------------------


def cli(argv: Optional[List[str]] = None, *, input_fn: InputFn = input) -> int:
    args = build_parser().parse_args(argv)
    backup_root = resolve_backup_root(args.backup_root)
    dry_run = args.dry_run or args.command == "preview"
    configure_logging(None if dry_run else get_install_log_path(backup_root), verbose=args.verbose)
    if dry_run:
        LOGGER.info("DRY RUN mode enabled")

    try:
        validate_environment()
        if not dry_run:
            ensure_backup_root(backup_root)
        settings = load_settings(backup_root, args.config)

        directory = args.directory
        template_id = args.template
        if args.command == "install":
            if directory is None:
                directory = ask_directory(Path(settings.get("directory") or DEFAULT_IDE_DIR), input_fn)
            if template_id is None:
                template_id = ask_template(input_fn)
            check_privileges(directory)

        config = build_run_config(
            settings,
            backup_root=backup_root,
            directory=directory,
            template_id=template_id,
            dry_run=dry_run,
            max_age_days=args.older_than,
        )
        service = BackupService(backup_root, logger=BackupLogger(backup_root, persist=not dry_run))

        if args.command == "list":
            return cmd_list(service)
        if args.command == "clean":
            return cmd_clean(service, config)
        if args.command == "rollback":
            return cmd_rollback(service, config, args.backup, input_fn)
        return cmd_install(service, config, assume_yes=args.yes, input_fn=input_fn)
    except CustomizerError as exc:
        LOGGER.error("%s", exc)
        return 1
    except EOFError:
        LOGGER.error("No input available; operation cancelled.")
        return 1


def main() -> None:  # pragma: no cover
    raise SystemExit(cli())


if __name__ == "__main__":  # pragma: no cover
    main()
