"""Pure mode selection from classification counts.

The terminal shell asks the user only when ``ModeDecision.needs_input`` is
set, choosing among ``ModeDecision.choices``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from core.errors import NoCandidateFiles

from .classify import CandidateFile, MarkerState, StateCounts


class ProcessMode(str, Enum):
    UNMODIFIED_ONLY = "unmodified"
    REPROCESS = "reprocess"
    BOTH = "both"
    CANCEL = "cancel"


MODE_LABELS = {
    ProcessMode.UNMODIFIED_ONLY: "Process only original files (//___FILEHEADER___)",
    ProcessMode.REPROCESS: "Re-process (update headers only, no file modification needed)",
    ProcessMode.BOTH: "Process all files (both formats)",
    ProcessMode.CANCEL: "Cancel operation",
}


@dataclass(slots=True)
class ModeDecision:
    mode: Optional[ProcessMode] = None
    choices: List[ProcessMode] = field(default_factory=list)
    reason: str = ""

    @property
    def needs_input(self) -> bool:
        return self.mode is None


def decide_mode(counts: StateCounts) -> ModeDecision:
    if counts.unmodified == 0 and counts.modified == 0:
        raise NoCandidateFiles("No template files found to modify")
    if counts.modified == 0:
        return ModeDecision(
            mode=ProcessMode.UNMODIFIED_ONLY,
            reason=f"Found {counts.unmodified} template files with original format; fresh installation",
        )
    if counts.unmodified == 0:
        return ModeDecision(
            choices=[ProcessMode.REPROCESS, ProcessMode.CANCEL],
            reason=f"Found {counts.modified} template files that were processed before",
        )
    return ModeDecision(
        choices=[ProcessMode.UNMODIFIED_ONLY, ProcessMode.BOTH, ProcessMode.CANCEL],
        reason=f"Found mixed file states: {counts.unmodified} original, {counts.modified} processed",
    )


def resolve_choice(decision: ModeDecision, choice: ProcessMode) -> ProcessMode:
    if decision.mode is not None:
        return decision.mode
    if choice not in decision.choices:
        raise ValueError(f"{choice.value!r} is not offered here")
    return choice


def select_files(candidates: Sequence[CandidateFile], mode: ProcessMode) -> List[CandidateFile]:
    if mode is ProcessMode.UNMODIFIED_ONLY:
        wanted = {MarkerState.UNMODIFIED}
    elif mode is ProcessMode.REPROCESS:
        wanted = {MarkerState.MODIFIED}
    elif mode is ProcessMode.BOTH:
        wanted = {MarkerState.UNMODIFIED, MarkerState.MODIFIED}
    else:
        return []
    return [candidate for candidate in candidates if candidate.state in wanted]


__all__ = ["MODE_LABELS", "ModeDecision", "ProcessMode", "decide_mode", "resolve_choice", "select_files"]
