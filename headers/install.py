"""Forward path: classify, back up, strip markers, regenerate the macros file."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from backup.api import BackupService
from backup.types import BackupManifest, BackupSet, FileFailure
from core.errors import NoCandidateFiles, PartialIOFailure
from core.settings import RunConfig

from .classify import CandidateFile, StateCounts, classify, count_states
from .macros import MacrosResult, write_macros_file
from .mutate import apply_mutation
from .plan import ModeDecision, ProcessMode, decide_mode, select_files
from .templates import get_header_template

LOGGER = logging.getLogger("xcheader.install")


@dataclass(slots=True)
class InstallPlan:
    root: Path
    candidates: List[CandidateFile]
    counts: StateCounts
    decision: ModeDecision


@dataclass(slots=True)
class InstallResult:
    mode: ProcessMode
    dry_run: bool
    backup: Optional[BackupSet] = None
    manifest: Optional[BackupManifest] = None
    processed: List[Path] = field(default_factory=list)
    mutated: List[Path] = field(default_factory=list)
    planned: List[Path] = field(default_factory=list)
    failed: List[FileFailure] = field(default_factory=list)
    macros: Optional[MacrosResult] = None


def plan_install(config: RunConfig) -> InstallPlan:
    """Scan the IDE directory and decide which processing mode applies."""

    root = config.directory.resolve()
    LOGGER.info("Scanning for template files...")
    candidates = classify(root, extension=config.extension)
    counts = count_states(candidates)
    decision = decide_mode(counts)
    LOGGER.info(decision.reason)
    return InstallPlan(root=root, candidates=candidates, counts=counts, decision=decision)


def files_for_mode(plan: InstallPlan, mode: ProcessMode) -> List[CandidateFile]:
    if mode is ProcessMode.CANCEL:
        raise ValueError("cancelled runs have no files")
    selected = select_files(plan.candidates, mode)
    if not selected:
        raise NoCandidateFiles("No template files found for selected mode")
    return selected


def run_install(
    config: RunConfig,
    plan: InstallPlan,
    mode: ProcessMode,
    *,
    service: BackupService,
) -> InstallResult:
    """Back up every selected file before touching it, then write the manifest and macros.

    A file whose backup copy fails is left untouched and reported; the
    manifest lists only files that were backed up and processed.
    """
    selected = files_for_mode(plan, mode)
    header = get_header_template(config.template_id, custom_header=config.custom_header)
    result = InstallResult(mode=mode, dry_run=config.dry_run)

    if config.dry_run:
        LOGGER.info("DRY RUN: Would create backup for %s under %s", plan.root, config.backup_root)
        for candidate in selected:
            LOGGER.info("DRY RUN: Would modify %s", candidate.path)
            result.planned.append(candidate.path)
        result.macros = write_macros_file(config.macros_path, header, backup_root=config.backup_root, dry_run=True)
        return result

    backup_set = service.create(plan.root)
    result.backup = backup_set
    LOGGER.info("Processing Swift template files...")
    for candidate in selected:
        try:
            service.copy(backup_set, candidate.path, plan.root)
        except PartialIOFailure as exc:
            LOGGER.error("Not modifying %s: %s", candidate.path, exc)
            result.failed.append(FileFailure(path=str(candidate.path), error=str(exc)))
            continue
        try:
            changed = apply_mutation(candidate)
        except OSError as exc:
            LOGGER.error("Failed to modify %s: %s", candidate.path, exc)
            result.failed.append(FileFailure(path=str(candidate.path), error=str(exc)))
            continue
        result.processed.append(candidate.path)
        if changed:
            result.mutated.append(candidate.path)

    result.manifest = service.write_manifest(backup_set, config.template_id, plan.root, result.processed)
    LOGGER.info("Processed %d Swift template files", len(result.processed))

    result.macros = write_macros_file(config.macros_path, header, backup_root=config.backup_root)
    return result


__all__ = ["InstallPlan", "InstallResult", "files_for_mode", "plan_install", "run_install"]
