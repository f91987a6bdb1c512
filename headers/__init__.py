"""Template classification, marker rewriting, and macros generation."""
from __future__ import annotations

from .classify import CandidateFile, MarkerState, StateCounts, detect_state
from .install import InstallPlan, InstallResult, plan_install, run_install
from .mutate import apply_mutation
from .plan import ModeDecision, ProcessMode, decide_mode, select_files

__all__ = [
    "CandidateFile",
    "InstallPlan",
    "InstallResult",
    "MarkerState",
    "ModeDecision",
    "ProcessMode",
    "StateCounts",
    "apply_mutation",
    "decide_mode",
    "detect_state",
    "plan_install",
    "run_install",
    "select_files",
]
